import pygame

from config import BOARD_HEIGHT, WINDOW_WIDTH, WINDOW_HEIGHT, WHITE, YELLOW, PANEL, GREY
from utils import pixel_font, render_outline

STRIP_TOP = BOARD_HEIGHT + 40   # below the HUD
BUTTON_GAP = 12


class OnscreenControls:
    """Mouse/touch buttons under the board: hold left/right, tap to launch or fire."""

    def __init__(self, simulation):
        self.simulation = simulation
        self.enabled = False
        self.held = None   # action currently held down
        height = WINDOW_HEIGHT - STRIP_TOP - BUTTON_GAP
        width = (WINDOW_WIDTH - BUTTON_GAP * 4) // 3
        self.buttons = {}
        for i, action in enumerate(('left', 'launch', 'right')):
            self.buttons[action] = pygame.Rect(BUTTON_GAP + i * (width + BUTTON_GAP),
                                               STRIP_TOP + BUTTON_GAP // 2, width, height)
        self.labels = {'left': '<', 'launch': 'FIRE', 'right': '>'}

    def _button_at(self, pos):
        for action, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return action
        return None

    def handle_event(self, event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            action = self._button_at(event.pos)
            if action is None:
                return False
            if action == 'launch':
                self.simulation.launch()
            else:
                self.held = action
                self.simulation.set_direction(action)
            return True
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self.held:
            self.simulation.release_direction(self.held)
            self.held = None
            return True
        return False

    def draw(self, surface):
        if not self.enabled:
            return
        font = pixel_font(16)
        for action, rect in self.buttons.items():
            pressed = action == self.held
            pygame.draw.rect(surface, GREY if pressed else PANEL, rect, border_radius=8)
            pygame.draw.rect(surface, YELLOW if pressed else WHITE, rect, 2, border_radius=8)
            label = render_outline(self.labels[action], font, WHITE)
            surface.blit(label, label.get_rect(center=rect.center))
