"""Pause toggling and the paused overlay."""

from __future__ import annotations

import pygame

from tankbattle.tank import BLACK

OVERLAY_ALPHA = 150
PAUSE_TEXT = "PAUSED"
PAUSE_FONT_SIZE = 40


def _font(size, bold):
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.SysFont("arial", size, bold=bold)


class PauseSystem:
    """Tracks whether the game is paused; P toggles it."""

    def __init__(self):
        self.paused = False
        self._font = None

    def toggle(self):
        self.paused = not self.paused

    def handle_input(self, event):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_p:
            self.toggle()

    def render(self, surface):
        """Dim the surface and show the pause caption when paused."""
        if not self.paused:
            return
        overlay = pygame.Surface(surface.get_size())
        overlay.fill(BLACK)
        overlay.set_alpha(OVERLAY_ALPHA)
        surface.blit(overlay, (0, 0))

        if self._font is None:
            self._font = _font(PAUSE_FONT_SIZE, True)
        text = self._font.render(PAUSE_TEXT, True, BLACK)
        width, height = surface.get_size()
        surface.blit(text, text.get_rect(center=(width / 2, height / 2)))