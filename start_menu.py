import math
import pygame

from config import WINDOW_WIDTH, WINDOW_HEIGHT, BG, WHITE, get_control_key, get_key_name
from levels import get_palette
from pause_menu import ButtonMenu
from utils import pixel_font, render_outline


class StartMenu(ButtonMenu):
    """Title screen with a slowly drifting wall of bricks behind the buttons."""

    title = "Brick Wall"
    labels = ("Play", "High Scores", "Settings", "Quit")
    title_size = 56
    overlay_alpha = 120

    def __init__(self):
        super().__init__()
        self.active = True
        self._phase = 0.0
        self._last_update = pygame.time.get_ticks()
        self._palette = get_palette(0)

    def update(self, events):
        now = pygame.time.get_ticks()
        self._phase = (self._phase + (now - self._last_update) / 1000.0) % (2 * math.pi)
        self._last_update = now
        return super().update(events)

    def draw(self, surface: pygame.Surface):
        if not self.active:
            return
        surface.fill(BG)
        self._draw_background(surface)
        super().draw(surface)

    def _draw_background(self, surface):
        brick_w, brick_h, gap = 70, 24, 4
        offset = int(math.sin(self._phase) * 20)
        for row in range(WINDOW_HEIGHT // (brick_h + gap) + 1):
            shift = (brick_w // 2 if row % 2 else 0) + offset
            color = self._palette[row % len(self._palette)]
            for col in range(-1, WINDOW_WIDTH // (brick_w + gap) + 2):
                rect = pygame.Rect(col * (brick_w + gap) + shift, row * (brick_h + gap), brick_w, brick_h)
                pygame.draw.rect(surface, color, rect)

    def draw_extra(self, surface):
        keys = "  ".join(get_key_name(get_control_key(a)) for a in ("left", "right"))
        hint = render_outline(f"{keys} move   {get_key_name(get_control_key('launch'))} launch/fire   P pause",
                              pixel_font(10), WHITE)
        surface.blit(hint, hint.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT - 40)))
