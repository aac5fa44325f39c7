import time
import pygame

import leaderboard
from config import WINDOW_WIDTH, WINDOW_HEIGHT, WHITE, YELLOW, BLACK, GREY
from utils import pixel_font, render_outline

COLUMNS = (('RANK', 70), ('NAME', 300), ('SCORE', 500), ('DATE', 620))


def format_date(ms) -> str:
    if not ms:
        return "-"
    return time.strftime("%Y-%m-%d", time.localtime(ms / 1000))


class HighScoresScreen:
    """Top-ten table. Rows are (re)loaded every time the screen opens."""

    def __init__(self):
        self.active = False
        self.rows = []

    def open(self):
        self.active = True
        self.rows = leaderboard.list_scores()
        print(f"[DEBUG] high scores loaded: {len(self.rows)} rows")

    def close(self):
        self.active = False

    def update(self, events) -> bool:
        """Returns True once the player asks to go back."""
        if not self.active:
            return False
        for e in events:
            if e.type == pygame.KEYDOWN and e.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE,
                                                      pygame.K_RETURN, pygame.K_SPACE):
                self.close()
                return True
            if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                self.close()
                return True
        return False

    def draw(self, surface: pygame.Surface):
        if not self.active:
            return
        surface.fill((10, 10, 20))
        title = render_outline("High Scores", pixel_font(36), YELLOW, BLACK, 2)
        rect = title.get_rect(center=(WINDOW_WIDTH // 2, 80))
        surface.blit(title, rect)

        header_font = pixel_font(12)
        row_font = pixel_font(14)
        y = rect.bottom + 40
        for label, x in COLUMNS:
            surface.blit(header_font.render(label, True, GREY), (x, y))
        y += 30

        if not self.rows:
            empty = render_outline("No scores yet", row_font, WHITE)
            surface.blit(empty, empty.get_rect(center=(WINDOW_WIDTH // 2, y + 40)))
        for idx, row in enumerate(self.rows, 1):
            color = YELLOW if idx == 1 else WHITE
            cells = (str(idx), row['name'][:12], str(row['score']), format_date(row['date']))
            for (label, x), text in zip(COLUMNS, cells):
                surface.blit(row_font.render(text, True, color), (x, y))
            y += 34

        hint = pixel_font(12).render("ESC to go back", True, WHITE)
        surface.blit(hint, hint.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT - 50)))
