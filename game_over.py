import random
import pygame

from config import WINDOW_WIDTH, WINDOW_HEIGHT, WHITE, YELLOW
from pause_menu import ButtonMenu
from utils import pixel_font, render_outline


class GameOverScreen(ButtonMenu):
    """End-of-game screen; confetti bursts when the player cleared every level."""

    labels = ("Play Again", "Main Menu")

    def __init__(self, outcome, rng=None):
        self.outcome = outcome
        self.title = "You Win!" if outcome.won else "Game Over"
        super().__init__()
        self.active = True
        self.rng = rng or random.Random()
        self.burst = []
        self.score_surf = render_outline(f"Final Score: {outcome.score}", pixel_font(20), WHITE)

    def update(self, events):
        for e in events:
            if e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
                return "Main Menu"
        self._update_confetti()
        return super().update(events)

    def _update_confetti(self):
        if self.outcome.won:
            for _ in range(6):
                vel = pygame.Vector2(self.rng.uniform(-2, 2), self.rng.uniform(-3, -1))
                clr = self.rng.choice([(255, 0, 0), (255, 200, 0), (34, 211, 238), (192, 132, 252)])
                self.burst.append({'pos': pygame.Vector2(WINDOW_WIDTH // 2, WINDOW_HEIGHT // 3),
                                   'vel': vel, 'color': clr, 'life': 60})
        for p in self.burst[:]:
            p['pos'] += p['vel']
            p['vel'].y += 0.05
            p['life'] -= 1
            if p['life'] <= 0:
                self.burst.remove(p)

    def draw_extra(self, surface):
        for p in self.burst:
            pygame.draw.circle(surface, p['color'], (int(p['pos'].x), int(p['pos'].y)), 3)
        surface.blit(self.score_surf, self.score_surf.get_rect(center=(WINDOW_WIDTH // 2,
                                                                        self.title_rect.bottom + 25)))
        hint = render_outline("ESC for main menu", pixel_font(12), YELLOW)
        surface.blit(hint, hint.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT - 60)))
