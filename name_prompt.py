import pygame
from config import WINDOW_WIDTH, WINDOW_HEIGHT, WHITE, YELLOW
from utils import pixel_font, dim

MIN_LEN = 2
MAX_LEN = 12


def validate_name(name: str):
    """Return an error message for *name*, or None when it can be saved."""
    name = name.strip()
    if len(name) < MIN_LEN:
        return f"Name must be at least {MIN_LEN} characters"
    if len(name) > MAX_LEN:
        return f"Name must be at most {MAX_LEN} characters"
    return None


class NamePrompt:
    """Overlay to enter (and confirm) the player's leaderboard name."""

    def __init__(self, score: int, initial_name: str = ""):
        self.score = score
        self.active = True      # Input allowed
        self.done = False       # Finished & confirmed
        self.canceled = False   # User skipped saving

        self.name = initial_name[:MAX_LEN]
        self.error = None

        # Two-stage workflow: 'edit' -> 'confirm'
        self.stage = "edit"

    @property
    def result(self) -> str:
        return self.name.strip()

    # -------------------------------------------------------------
    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.active or event.type != pygame.KEYDOWN:
            return False

        if self.stage == "edit":
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.error = validate_name(self.name)
                if self.error is None:
                    self.stage = "confirm"
                return True
            if event.key == pygame.K_ESCAPE:
                self.canceled = True
                self.active = False
                return True
            if event.key == pygame.K_BACKSPACE:
                self.name = self.name[:-1]
                self.error = None
                return True
            ch = event.unicode
            if ch and ch.isprintable() and len(self.name) < MAX_LEN:
                self.name += ch
                self.error = None
                return True

        elif self.stage == "confirm":
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.done = True
                self.active = False
                return True
            if event.key == pygame.K_ESCAPE:
                self.stage = "edit"
                return True
        return False

    # -------------------------------------------------------------
    def draw(self, surface: pygame.Surface):
        dim(surface, 220)
        big = pixel_font(28)
        small = pixel_font(12)
        cx, cy = WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2

        if self.stage == "edit":
            title = big.render("NEW HIGH SCORE!", True, YELLOW)
            surface.blit(title, title.get_rect(center=(cx, cy - 120)))
            score = small.render(f"SCORE {self.score}", True, WHITE)
            surface.blit(score, score.get_rect(center=(cx, cy - 80)))

            text = big.render(self.name or "_", True, WHITE)
            box = text.get_rect(center=(cx, cy))
            pygame.draw.rect(surface, (80, 80, 80), box.inflate(30, 26))
            pygame.draw.rect(surface, WHITE, box.inflate(30, 26), 3)
            surface.blit(text, box)

            if self.error:
                err = small.render(self.error, True, (255, 90, 90))
                surface.blit(err, err.get_rect(center=(cx, cy + 50)))
            hint = small.render("ENTER = next  -  ESC = skip", True, WHITE)
            surface.blit(hint, hint.get_rect(center=(cx, cy + 80)))
        else:
            msg = big.render(f"SAVE AS '{self.result.upper()}'?", True, YELLOW)
            surface.blit(msg, msg.get_rect(center=(cx, cy - 20)))
            hint = small.render("ENTER = confirm  -  ESC = edit", True, WHITE)
            surface.blit(hint, hint.get_rect(center=(cx, cy + 40)))
