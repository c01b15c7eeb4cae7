"""Bullets fired by the player and by enemies."""

from __future__ import annotations

import pygame

from tankbattle.tank import (
    BULLET_SPEED,
    MAP_HEIGHT,
    MAP_WIDTH,
    RED,
    TILE_SIZE,
    YELLOW,
    Direction,
)

BULLET_RADIUS = 4

_STEP = {
    Direction.UP: (0.0, -1.0),
    Direction.DOWN: (0.0, 1.0),
    Direction.LEFT: (-1.0, 0.0),
    Direction.RIGHT: (1.0, 0.0),
}


class Bullet:
    """A bullet travelling in a straight line at BULLET_SPEED."""

    def __init__(self, position, direction, from_player):
        self.position = (float(position[0]), float(position[1]))
        self.direction = Direction(direction)
        self.from_player = bool(from_player)

    def update(self, dt):
        sx, sy = _STEP[self.direction]
        x, y = self.position
        self.position = (x + sx * BULLET_SPEED * dt, y + sy * BULLET_SPEED * dt)

    def is_out(self):
        """True once the bullet has left the playfield."""
        x, y = self.position
        return (
            x < 0
            or x > MAP_WIDTH * TILE_SIZE
            or y < 0
            or y > MAP_HEIGHT * TILE_SIZE
        )

    def color(self):
        return YELLOW if self.from_player else RED

    def draw(self, surface):
        pygame.draw.circle(surface, self.color(), self.position, BULLET_RADIUS)