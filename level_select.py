import pygame

import levels
from config import WINDOW_WIDTH, WHITE, YELLOW, BLACK, LEVEL_SELECT_KEY
from rounds import LevelJumpError
from utils import pixel_font, render_outline, dim

MAX_DIGITS = 3


class LevelSelectPrompt:
    """F5 overlay to jump straight to a level by number.

    While it is open the simulation is frozen.  A bad number leaves the prompt
    open with the typed text intact and the error shown underneath.
    """

    def __init__(self, simulation):
        self.simulation = simulation
        self.text = ""
        self.error = None

    @property
    def active(self) -> bool:
        return self.simulation.selecting_level

    def open(self):
        self.text = ""
        self.error = None
        self.simulation.open_level_selector()

    def close(self):
        self.simulation.close_level_selector()

    def submit(self) -> bool:
        try:
            target = self.simulation.jump_to_level(self.text)
        except LevelJumpError as e:
            self.error = str(e)
            print(f"[Levels] Jump rejected: {self.error}")
            return False
        print(f"[Levels] Jumped to level {target}")
        self.error = None
        return True

    def handle_event(self, event) -> bool:
        if event.type != pygame.KEYDOWN:
            return False
        if not self.active:
            if event.key == LEVEL_SELECT_KEY:
                self.open()
                return True
            return False

        if event.key in (pygame.K_ESCAPE, LEVEL_SELECT_KEY):
            self.close()
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.submit()
        elif event.key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        elif event.unicode and event.unicode.isdigit() and len(self.text) < MAX_DIGITS:
            self.text += event.unicode
        return True

    def draw(self, surface):
        if not self.active:
            return
        dim(surface, 200)
        cx = WINDOW_WIDTH // 2
        title = render_outline(f"Jump to level (1-{levels.level_count()})", pixel_font(20), YELLOW, BLACK, 2)
        surface.blit(title, title.get_rect(center=(cx, 220)))

        text = pixel_font(28).render(self.text or "_", True, WHITE)
        box = text.get_rect(center=(cx, 290))
        pygame.draw.rect(surface, (80, 80, 80), box.inflate(40, 26))
        pygame.draw.rect(surface, WHITE, box.inflate(40, 26), 3)
        surface.blit(text, box)

        if self.error:
            err = render_outline(self.error, pixel_font(10), (255, 90, 90))
            surface.blit(err, err.get_rect(center=(cx, 350)))
        hint = pixel_font(12).render("ENTER = go  -  ESC = cancel", True, WHITE)
        surface.blit(hint, hint.get_rect(center=(cx, 390)))
