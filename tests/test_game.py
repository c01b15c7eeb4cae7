import random

import pygame
import pytest

from tankbattle.bullet import Bullet
from tankbattle.game import Game, GameState, build_walls
from tankbattle.tank import (
    EXPLOSION_DURATION,
    FIRE_COOLDOWN,
    GREEN,
    MAP_HEIGHT,
    MAP_WIDTH,
    PLAYER_SPEED,
    RED,
    TILE_SIZE,
    Direction,
    Tank,
)


def key_down(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def key_up(key):
    return pygame.event.Event(pygame.KEYUP, key=key)


@pytest.fixture
def game():
    return Game(random.Random(1))


@pytest.fixture
def playing(game):
    game.start_game()
    return game


def test_build_walls_border_and_obstacles():
    walls = build_walls()
    assert len(set(walls)) == len(walls)
    for i in range(MAP_WIDTH):
        assert (i, 0) in walls and (i, MAP_HEIGHT - 1) in walls
    for j in range(MAP_HEIGHT):
        assert (0, j) in walls and (MAP_WIDTH - 1, j) in walls
    assert walls[-3:] == [(5, 5), (12, 8), (18, 10)]


def test_initial_state(game):
    assert game.state is GameState.MAIN_MENU
    assert game.enemies == []
    assert game.player.position == (MAP_WIDTH * TILE_SIZE / 2, MAP_HEIGHT * TILE_SIZE / 2)
    assert game.player.direction is Direction.UP


def test_start_game_spawns_one_enemy_on_free_tile(playing):
    assert playing.state is GameState.PLAYING
    assert len(playing.enemies) == 1
    enemy = playing.enemies[0]
    x, y = enemy.position
    tile = (int(x // TILE_SIZE), int(y // TILE_SIZE))
    assert tile not in build_walls()
    assert x % TILE_SIZE == TILE_SIZE / 2
    assert enemy.color == RED


def test_spawn_enemy_never_on_wall(game):
    for _ in range(50):
        game.spawn_enemy()
    walls = set(build_walls())
    for enemy in game.enemies:
        x, y = enemy.position
        assert (int(x / TILE_SIZE), int(y / TILE_SIZE)) not in walls


def test_main_menu_navigation_wraps(game):
    game.process_event(key_down(pygame.K_UP))
    assert game.selected_menu_option == 1
    game.process_event(key_down(pygame.K_DOWN))
    assert game.selected_menu_option == 0


def test_main_menu_enter_starts_or_exits(game):
    game.process_event(key_down(pygame.K_RETURN))
    assert game.state is GameState.PLAYING
    other = Game(random.Random(2))
    other.process_event(key_down(pygame.K_DOWN))
    other.process_event(key_down(pygame.K_RETURN))
    assert other.running is False


def test_arrow_keys_steer_player(playing):
    playing.process_event(key_down(pygame.K_LEFT))
    assert playing.player.direction is Direction.LEFT
    assert playing.player.speed == PLAYER_SPEED
    playing.process_event(key_up(pygame.K_LEFT))
    assert playing.player.speed == 0


def test_space_fires_only_after_cooldown(playing):
    playing.process_event(key_down(pygame.K_SPACE))
    assert playing.bullets == []
    playing.player.fire_timer = FIRE_COOLDOWN
    playing.process_event(key_down(pygame.K_SPACE))
    assert len(playing.bullets) == 1
    assert playing.bullets[0].from_player is True


def test_p_toggles_pause(playing):
    playing.process_event(key_down(pygame.K_p))
    assert playing.state is GameState.PAUSED
    assert playing.pause_system.paused
    playing.process_event(key_down(pygame.K_p))
    assert playing.state is GameState.PLAYING
    assert not playing.pause_system.paused


def test_pause_menu_resume(playing):
    playing.process_event(key_down(pygame.K_p))
    playing.process_event(key_down(pygame.K_RETURN))
    assert playing.state is GameState.PLAYING
    assert not playing.pause_system.paused


def test_pause_menu_main_menu_resets(playing):
    playing.score = 500
    playing.process_event(key_down(pygame.K_p))
    playing.process_event(key_down(pygame.K_DOWN))
    assert playing.selected_pause_option == 1
    playing.process_event(key_down(pygame.K_RETURN))
    assert playing.state is GameState.MAIN_MENU
    assert playing.score == 0


def test_pause_menu_exit(playing):
    playing.process_event(key_down(pygame.K_p))
    playing.process_event(key_down(pygame.K_UP))
    assert playing.selected_pause_option == 2
    playing.process_event(key_down(pygame.K_RETURN))
    assert playing.running is False


def test_r_restarts_after_game_over(playing):
    playing.is_game_over = True
    playing.score = 300
    playing.process_event(key_down(pygame.K_r))
    assert playing.is_game_over is False
    assert playing.score == 0
    assert playing.state is GameState.PLAYING
    assert len(playing.enemies) == 1


def test_arrows_ignored_when_game_over(playing):
    playing.is_game_over = True
    playing.process_event(key_down(pygame.K_RIGHT))
    assert playing.player.direction is Direction.UP
    assert playing.player.speed == 0


def test_update_moves_player(game):
    start_x, start_y = game.player.position
    game.player.direction = Direction.LEFT
    game.player.speed = PLAYER_SPEED
    game.update(0.1)
    x, y = game.player.position
    assert x == pytest.approx(start_x - PLAYER_SPEED * 0.1)
    assert y == start_y


def test_update_frozen_when_game_over(game):
    game.is_game_over = True
    game.player.speed = PLAYER_SPEED
    before = game.player.position
    game.update(0.5)
    assert game.player.position == before


def test_collide_walls_pushes_back(game):
    tank = Tank((5 * TILE_SIZE + 10, 5 * TILE_SIZE + 10), RED, Direction.UP)
    tank.speed = PLAYER_SPEED
    game.collide_walls(tank)
    assert tank.position == pytest.approx((5 * TILE_SIZE + 10, 5 * TILE_SIZE + 10 + PLAYER_SPEED * 0.02))
    assert tank.color == GREEN
    assert tank.speed == 0


def test_collide_walls_leaves_free_tank(game):
    tank = Tank((200.0, 200.0), RED, Direction.UP)
    game.collide_walls(tank)
    assert tank.position == (200.0, 200.0)
    assert tank.color == RED


def test_bullet_hits_wall(game):
    bullet = Bullet((5 * TILE_SIZE + 10, 5 * TILE_SIZE + 10), Direction.UP, True)
    assert game.handle_collision(bullet) is True
    assert len(game.explosions) == 1


def test_player_bullet_kills_enemy(game):
    game.enemies = [Tank((200.0, 200.0), RED, Direction.UP)]
    bullet = Bullet((205.0, 200.0), Direction.RIGHT, True)
    assert game.handle_collision(bullet) is True
    assert game.score == 100
    assert len(game.enemies) == 1
    assert game.explosions[0].position == (200.0, 200.0)


def test_enemy_bullet_kills_player(game):
    px, py = game.player.position
    bullet = Bullet((px + 3, py), Direction.LEFT, False)
    assert game.handle_collision(bullet) is True
    assert game.is_game_over is True


def test_enemy_bullet_misses_far_player(game):
    bullet = Bullet((200.0, 200.0), Direction.LEFT, False)
    assert game.handle_collision(bullet) is False
    assert game.is_game_over is False


def test_enemy_ai_turns_before_moving(game):
    px, py = game.player.position
    enemy = Tank((px, py - 100), RED, Direction.UP)
    game.update_enemy_ai(enemy, 0.1)
    assert enemy.direction is Direction.DOWN
    assert enemy.position == (px, py - 100)
    game.update_enemy_ai(enemy, 0.1)
    assert enemy.position[1] == pytest.approx(py - 100 + PLAYER_SPEED * 0.6 * 0.1)


def test_can_enemy_fire(game):
    px, py = game.player.position
    assert game.can_enemy_fire(Tank((px, py - 100), RED, Direction.DOWN)) is True
    assert game.can_enemy_fire(Tank((px, py - 100), RED, Direction.UP)) is False
    assert game.can_enemy_fire(Tank((px + 100, py), RED, Direction.LEFT)) is True
    assert game.can_enemy_fire(Tank((px + 100, py + 40), RED, Direction.LEFT)) is False


def test_enemy_fires_when_timer_elapses(game):
    px, py = game.player.position
    game.enemies = [Tank((px, py - 100), RED, Direction.DOWN)]
    game.enemy_timer = 1.49
    game.update(0.02)
    assert len(game.bullets) == 1
    assert game.bullets[0].from_player is False
    assert game.enemy_timer == 0


def test_explosion_expires(game):
    game.spawn_explosion((100.0, 100.0))
    game.update(EXPLOSION_DURATION / 2)
    assert len(game.explosions) == 1
    game.update(EXPLOSION_DURATION)
    assert game.explosions == []


def test_render_main_menu_background(game):
    surface = pygame.Surface((MAP_WIDTH * TILE_SIZE, MAP_HEIGHT * TILE_SIZE))
    game.render(surface)
    assert tuple(surface.get_at((0, 0)))[:3] == (30, 30, 30)