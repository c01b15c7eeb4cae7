"""The title screen shown before the main menu."""

from __future__ import annotations

import pygame

from tankbattle.tank import WHITE, YELLOW

TITLE = "Tank Battle 3.0"
PROMPT = "Press any key to start"
INSTRUCTIONS = ("Arrow keys: Move", "Space: Fire", "R: Restart after Game Over")
BACKGROUND = (30, 30, 30)
INSTRUCTION_COLOR = (200, 200, 200)
BLINK_INTERVAL = 0.6
FRAME_RATE = 60


def _font(size, bold=False):
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.SysFont("arial", size, bold=bold)


class StartScreen:
    """Title, blinking prompt and control help, waiting for a key."""

    def __init__(self, surface):
        self.surface = surface
        self.show_prompt = True
        self._blink_elapsed = 0.0
        width, height = surface.get_size()

        self._title = _font(60, bold=True).render(TITLE, True, YELLOW)
        self.title_rect = self._title.get_rect(center=(width / 2, height / 3))

        self._prompt = _font(30).render(PROMPT, True, WHITE)
        self.prompt_rect = self._prompt.get_rect(center=(width / 2, height * 2 / 3))

        font = _font(20)
        lines = [font.render(line, True, INSTRUCTION_COLOR) for line in INSTRUCTIONS]
        block_width = max(line.get_width() for line in lines)
        left = width / 2 - block_width / 2
        top = height * 0.75
        self._instructions = []
        for line in lines:
            self._instructions.append((line, line.get_rect(topleft=(left, top))))
            top += font.get_linesize()

    def handle_event(self, event):
        """True to start on a key press, False on quit, None otherwise."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            return True
        return None

    def tick(self, elapsed):
        """Advance the blink timer by elapsed seconds."""
        self._blink_elapsed += elapsed
        if self._blink_elapsed >= BLINK_INTERVAL:
            self.show_prompt = not self.show_prompt
            self._blink_elapsed = 0.0

    def draw(self):
        self.surface.fill(BACKGROUND)
        self.surface.blit(self._title, self.title_rect)
        if self.show_prompt:
            self.surface.blit(self._prompt, self.prompt_rect)
        for line, rect in self._instructions:
            self.surface.blit(line, rect)


def create_start_screen(surface):
    """Show the title screen until a key is pressed (True) or the window closes (False)."""
    screen = StartScreen(surface)
    clock = pygame.time.Clock()
    while True:
        for event in pygame.event.get():
            started = screen.handle_event(event)
            if started is not None:
                return started
        screen.tick(clock.tick(FRAME_RATE) / 1000.0)
        screen.draw()
        pygame.display.flip()