"""Tanks, explosions, directions and the shared playfield constants."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from enum import Enum

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

TILE_SIZE = 32
MAP_WIDTH = 25
MAP_HEIGHT = 18
PLAYER_SPEED = 120.0  # pixels per second
BULLET_SPEED = 300.0  # pixels per second
FIRE_COOLDOWN = 0.5  # seconds
EXPLOSION_DURATION = 0.5  # seconds

BODY_LENGTH = float(TILE_SIZE)
BODY_WIDTH = TILE_SIZE * 0.6
BARREL_LENGTH = TILE_SIZE * 0.6
BARREL_THICKNESS = TILE_SIZE * 0.15

GREEN = (0, 255, 0)
RED = (255, 0, 0)
YELLOW = (255, 255, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
BLUE = (0, 0, 255)
BARREL_GREY = (80, 80, 80)


class Direction(Enum):
    """Four headings, in clockwise order starting from up."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


_ROTATION = {
    Direction.UP: 0.0,
    Direction.RIGHT: 90.0,
    Direction.DOWN: 180.0,
    Direction.LEFT: 270.0,
}

_STEP = {
    Direction.UP: (0.0, -1.0),
    Direction.DOWN: (0.0, 1.0),
    Direction.LEFT: (-1.0, 0.0),
    Direction.RIGHT: (1.0, 0.0),
}


def _rotated_rect(origin, left, top, right, bottom, degrees):
    """Corners of a local rectangle rotated clockwise (screen space) about origin."""
    theta = math.radians(degrees)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    ox, oy = origin
    corners = ((left, top), (right, top), (right, bottom), (left, bottom))
    return [
        (ox + x * cos_t - y * sin_t, oy + x * sin_t + y * cos_t) for x, y in corners
    ]


@dataclass
class Explosion:
    """A growing red circle that disappears after EXPLOSION_DURATION."""

    position: tuple[float, float]
    timer: float = 0.0

    def update(self, dt):
        self.timer += dt

    def radius(self):
        return (self.timer / EXPLOSION_DURATION) * TILE_SIZE

    def finished(self):
        return self.timer >= EXPLOSION_DURATION

    def draw(self, surface):
        radius = self.radius()
        if radius >= 1:
            pygame.draw.circle(surface, RED, self.position, radius)


class Tank:
    """A tank with a heading, a speed and a firing cooldown."""

    def __init__(self, position, color, direction):
        self.position = (float(position[0]), float(position[1]))
        self.color = color
        self.direction = Direction(direction)
        self.speed = 0.0
        self.fire_timer = 0.0

    def rotation(self):
        """Rotation of body and barrel in degrees."""
        return _ROTATION[self.direction]

    def barrel_tip(self):
        """Point where bullets leave the barrel."""
        # The rotation value in degrees is fed to cos/sin unchanged, as the
        # game has always done; bullets appear at this offset.
        angle = self.rotation()
        x, y = self.position
        return (
            x + math.cos(angle) * BARREL_LENGTH,
            y + math.sin(angle) * BARREL_LENGTH,
        )

    def try_fire(self):
        """Return the muzzle position and restart the cooldown, or None if not ready."""
        if self.fire_timer >= FIRE_COOLDOWN:
            self.fire_timer = 0.0
            return self.barrel_tip()
        return None

    def update(self, dt):
        sx, sy = _STEP[self.direction]
        x, y = self.position
        self.position = (x + sx * self.speed * dt, y + sy * self.speed * dt)
        self.fire_timer += dt

    def draw(self, surface):
        angle = self.rotation()
        body = _rotated_rect(
            self.position,
            -BODY_LENGTH / 2,
            -BODY_WIDTH / 2,
            BODY_LENGTH / 2,
            BODY_WIDTH / 2,
            angle,
        )
        barrel = _rotated_rect(
            self.position,
            0.0,
            -BARREL_THICKNESS / 2,
            BARREL_LENGTH,
            BARREL_THICKNESS / 2,
            angle,
        )
        pygame.draw.polygon(surface, self.color, body)
        pygame.draw.polygon(surface, BARREL_GREY, barrel)