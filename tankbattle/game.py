"""Game state, rules and the main loop."""

from __future__ import annotations

import argparse
import math
import random
from enum import Enum

import pygame

from tankbattle.bullet import Bullet
from tankbattle.pause import PauseSystem
from tankbattle.screen import BACKGROUND, TITLE, create_start_screen
from tankbattle.tank import (
    BLACK,
    BLUE,
    EXPLOSION_DURATION,
    GREEN,
    MAP_HEIGHT,
    MAP_WIDTH,
    PLAYER_SPEED,
    RED,
    TILE_SIZE,
    WHITE,
    YELLOW,
    Direction,
    Explosion,
    Tank,
)

FRAME_RATE = 60
ENEMY_FIRE_INTERVAL = 1.5
ENEMY_SPEED_FACTOR = 0.6
WALL_PUSHBACK = PLAYER_SPEED * 0.02
KILL_SCORE = 100
MENU_OPTIONS = ("Start Game", "Exit")
PAUSE_MENU_OPTIONS = ("Resume", "Main Menu", "Exit")
GAME_OVER_LINES = ("Game Over!", "Press R to Restart")
OBSTACLES = ((5, 5), (12, 8), (18, 10))

_ARROWS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}

_PUSHBACK = {
    Direction.UP: (0.0, WALL_PUSHBACK),
    Direction.DOWN: (0.0, -WALL_PUSHBACK),
    Direction.LEFT: (WALL_PUSHBACK, 0.0),
    Direction.RIGHT: (-WALL_PUSHBACK, 0.0),
}

_fonts = {}


def _font(size, bold=True):
    if not pygame.font.get_init():
        pygame.font.init()
    key = (size, bold)
    if key not in _fonts:
        _fonts[key] = pygame.font.SysFont("arial", size, bold=bold)
    return _fonts[key]


class GameState(Enum):
    MAIN_MENU = "main_menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def build_walls():
    """Border tiles followed by the fixed obstacles, as (column, row) pairs."""
    walls = []
    for i in range(MAP_WIDTH):
        walls.append((i, 0))
        walls.append((i, MAP_HEIGHT - 1))
    for j in range(1, MAP_HEIGHT - 1):
        walls.append((0, j))
        walls.append((MAP_WIDTH - 1, j))
    walls.extend(OBSTACLES)
    return walls


def _new_player():
    return Tank(
        (MAP_WIDTH * TILE_SIZE / 2, MAP_HEIGHT * TILE_SIZE / 2), GREEN, Direction.UP
    )


def _tile_of(position):
    x, y = position
    return int(x / TILE_SIZE), int(y / TILE_SIZE)


class Game:
    """The whole game: menus, player, enemies, bullets and explosions."""

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()
        self.state = GameState.MAIN_MENU
        self.menu_options = list(MENU_OPTIONS)
        self.selected_menu_option = 0
        self.pause_menu_options = list(PAUSE_MENU_OPTIONS)
        self.selected_pause_option = 0
        self.pause_system = PauseSystem()
        self.player = _new_player()
        self.enemies = []
        self.bullets = []
        self.explosions = []
        self.walls = build_walls()
        self._wall_set = frozenset(self.walls)
        self.enemy_timer = 0.0
        self.score = 0
        self.is_game_over = False
        self.running = True

    def start_game(self):
        self.player = _new_player()
        self.enemies.clear()
        self.bullets.clear()
        self.explosions.clear()
        self.score = 0
        self.spawn_enemy()
        self.is_game_over = False
        self.state = GameState.PLAYING

    def reset_game(self):
        self.player = _new_player()
        self.enemies.clear()
        self.bullets.clear()
        self.explosions.clear()
        self.is_game_over = False
        self.state = GameState.MAIN_MENU
        self.score = 0
        self.spawn_enemy()

    def process_event(self, event):
        """Apply one input event according to the current state."""
        if event.type == pygame.QUIT:
            self.running = False

        if self.state is GameState.MAIN_MENU:
            self._menu_event(event)
        elif self.state is GameState.PLAYING:
            self._playing_event(event)
        elif self.state is GameState.PAUSED:
            self._paused_event(event)

    def _menu_event(self, event):
        if event.type != pygame.KEYDOWN:
            return
        count = len(self.menu_options)
        if event.key == pygame.K_UP:
            self.selected_menu_option = (self.selected_menu_option - 1) % count
        elif event.key == pygame.K_DOWN:
            self.selected_menu_option = (self.selected_menu_option + 1) % count
        elif event.key == pygame.K_RETURN:
            if self.selected_menu_option == 0:
                self.start_game()
            else:
                self.running = False

    def _playing_event(self, event):
        if event.type == pygame.KEYDOWN:
            if event.key in _ARROWS:
                if not self.is_game_over:
                    self.player.direction = _ARROWS[event.key]
                    self.player.speed = PLAYER_SPEED
            elif event.key == pygame.K_SPACE:
                if not self.is_game_over:
                    tip = self.player.try_fire()
                    if tip is not None:
                        self.bullets.append(Bullet(tip, self.player.direction, True))
            elif event.key == pygame.K_r:
                if self.is_game_over:
                    self.reset_game()
                    self.is_game_over = False
        if event.type == pygame.KEYUP and event.key in _ARROWS:
            self.player.speed = 0.0
        self.pause_system.handle_input(event)
        self.state = GameState.PAUSED if self.pause_system.paused else GameState.PLAYING

    def _paused_event(self, event):
        if event.type != pygame.KEYDOWN:
            return
        count = len(self.pause_menu_options)
        if event.key == pygame.K_UP:
            self.selected_pause_option = (self.selected_pause_option - 1) % count
        elif event.key == pygame.K_DOWN:
            self.selected_pause_option = (self.selected_pause_option + 1) % count
        elif event.key == pygame.K_RETURN:
            self.handle_pause_menu_selection()
        elif event.key == pygame.K_p:
            self.pause_system.toggle()
            self.state = GameState.PLAYING

    def handle_pause_menu_selection(self):
        if self.selected_pause_option == 0:
            self.pause_system.toggle()
            self.state = GameState.PLAYING
        elif self.selected_pause_option == 1:
            self.state = GameState.MAIN_MENU
            self.reset_game()
        elif self.selected_pause_option == 2:
            self.running = False

    def update(self, dt):
        """Advance the simulation by dt seconds."""
        if self.is_game_over:
            return

        self.player.update(dt)
        self.collide_walls(self.player)

        self.enemy_timer += dt
        for enemy in self.enemies:
            self.update_enemy_ai(enemy, dt)
            self.collide_walls(enemy)

        if self.enemy_timer >= ENEMY_FIRE_INTERVAL:
            self.enemy_timer = 0.0
            for enemy in self.enemies:
                if self.can_enemy_fire(enemy):
                    self.bullets.append(
                        Bullet(enemy.barrel_tip(), enemy.direction, False)
                    )

        remaining = []
        for bullet in self.bullets:
            bullet.update(dt)
            if not (bullet.is_out() or self.handle_collision(bullet)):
                remaining.append(bullet)
        self.bullets = remaining

        for explosion in self.explosions:
            explosion.update(dt)
        self.explosions = [e for e in self.explosions if not e.finished()]

    def collide_walls(self, tank):
        """Push a tank that entered a wall tile back and rebuild it stopped and green."""
        if _tile_of(tank.position) not in self._wall_set:
            return
        bx, by = _PUSHBACK[tank.direction]
        x, y = tank.position
        tank.position = (x + bx, y + by)
        tank.color = GREEN
        tank.speed = 0.0
        tank.fire_timer = 0.0

    def handle_collision(self, bullet):
        """Resolve what a bullet hits; True if it should disappear."""
        if _tile_of(bullet.position) in self._wall_set:
            self.spawn_explosion(bullet.position)
            return True

        bx, by = bullet.position
        if bullet.from_player:
            for index, enemy in enumerate(self.enemies):
                ex, ey = enemy.position
                if math.hypot(bx - ex, by - ey) < TILE_SIZE / 2:
                    self.spawn_explosion(enemy.position)
                    del self.enemies[index]
                    self.score += KILL_SCORE
                    self.spawn_enemy()
                    return True
        else:
            px, py = self.player.position
            if math.hypot(bx - px, by - py) < TILE_SIZE / 2:
                self.spawn_explosion(self.player.position)
                self.is_game_over = True
                return True
        return False

    def spawn_explosion(self, position):
        self.explosions.append(Explosion(tuple(position)))

    def spawn_enemy(self):
        """Place a red enemy on a random free tile with a random heading."""
        while True:
            x = self.rng.randint(1, MAP_WIDTH - 2)
            y = self.rng.randint(1, MAP_HEIGHT - 2)
            if (x, y) not in self._wall_set:
                break
        direction = Direction(self.rng.randrange(4))
        position = (x * TILE_SIZE + TILE_SIZE / 2, y * TILE_SIZE + TILE_SIZE / 2)
        self.enemies.append(Tank(position, RED, direction))

    def update_enemy_ai(self, enemy, dt):
        """Turn toward the player first; move only once already facing that way."""
        px, py = self.player.position
        ex, ey = enemy.position
        dx, dy = px - ex, py - ey

        if abs(dx) > abs(dy):
            desired = Direction.RIGHT if dx > 0 else Direction.LEFT
        else:
            desired = Direction.DOWN if dy > 0 else Direction.UP

        if enemy.direction is not desired:
            enemy.direction = desired
            enemy.speed = 0.0
        else:
            enemy.speed = PLAYER_SPEED * ENEMY_SPEED_FACTOR
        enemy.update(dt)

    def can_enemy_fire(self, enemy):
        """True if the player lies ahead of the enemy within half a tile of its line."""
        px, py = self.player.position
        ex, ey = enemy.position
        half = TILE_SIZE // 2
        if enemy.direction is Direction.UP:
            return abs(ex - px) < half and py < ey
        if enemy.direction is Direction.DOWN:
            return abs(ex - px) < half and py > ey
        if enemy.direction is Direction.LEFT:
            return abs(ey - py) < half and px < ex
        return abs(ey - py) < half and px > ex

    def render(self, surface):
        surface.fill(BACKGROUND)
        if self.state is GameState.MAIN_MENU:
            self._draw_main_menu(surface)
        elif self.state is GameState.PLAYING and not self.is_game_over:
            self._draw_game_elements(surface)
        elif self.state is GameState.PAUSED:
            self._draw_game_elements(surface)
            self._draw_pause_menu(surface)
        elif self.is_game_over:
            self._draw_game_elements(surface)
            self._draw_game_over(surface)

    def _draw_game_elements(self, surface):
        for x, y in self.walls:
            pygame.draw.rect(
                surface, BLUE, (x * TILE_SIZE, y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
            )
        self.player.draw(surface)
        for enemy in self.enemies:
            enemy.draw(surface)
        for bullet in self.bullets:
            bullet.draw(surface)
        for explosion in self.explosions:
            explosion.draw(surface)
        text = _font(24, bold=False).render(f"Score: {self.score}", True, WHITE)
        surface.blit(text, (10, 10))

    def _draw_game_over(self, surface):
        font = _font(40, bold=False)
        left = MAP_WIDTH * TILE_SIZE / 2 - 150
        top = MAP_HEIGHT * TILE_SIZE / 2 - 50
        for line in GAME_OVER_LINES:
            surface.blit(font.render(line, True, RED), (left, top))
            top += font.get_linesize()

    @staticmethod
    def _blit_centered(surface, text, y):
        width = surface.get_width()
        surface.blit(text, text.get_rect(center=(width / 2, y)))

    def _draw_main_menu(self, surface):
        _, height = surface.get_size()
        title = _font(60).render(TITLE, True, YELLOW)
        self._blit_centered(surface, title, height / 3)
        font = _font(40)
        for i, option in enumerate(self.menu_options):
            color = YELLOW if i == self.selected_menu_option else WHITE
            self._blit_centered(surface, font.render(option, True, color), height / 2 + i * 60)

    def _draw_pause_menu(self, surface):
        overlay = pygame.Surface(surface.get_size())
        overlay.fill(BLACK)
        overlay.set_alpha(150)
        surface.blit(overlay, (0, 0))
        _, height = surface.get_size()
        font = _font(30)
        for i, option in enumerate(self.pause_menu_options):
            color = YELLOW if i == self.selected_pause_option else WHITE
            self._blit_centered(surface, font.render(option, True, color), height / 2 + i * 40)

    def run(self):
        """Open the window, show the title screen, then play until closed."""
        pygame.init()
        try:
            window = pygame.display.set_mode((MAP_WIDTH * TILE_SIZE, MAP_HEIGHT * TILE_SIZE))
            pygame.display.set_caption(TITLE)
            if not create_start_screen(window):
                return
            clock = pygame.time.Clock()
            while self.running:
                dt = clock.tick(FRAME_RATE) / 1000.0
                event = pygame.event.poll()
                if event.type != pygame.NOEVENT:
                    self.process_event(event)
                if not self.running:
                    break
                if self.state is GameState.PLAYING and not self.pause_system.paused:
                    self.update(dt)
                self.render(window)
                pygame.display.flip()
        finally:
            pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(prog="tankbattle", description="Top-down tank battle.")
    parser.parse_args(argv)
    Game(random.Random()).run()
    return 0