import pygame
from config import WINDOW_WIDTH, WINDOW_HEIGHT, WHITE, YELLOW, BLACK, PAUSE_KEYS
from utils import pixel_font, render_outline, draw_bevel_button, dim


class ButtonMenu:
    """Title plus a vertical column of pixel-art buttons.

    ``update(events)`` returns the label of the button chosen this frame (by
    mouse click or ENTER/SPACE), or None.  Up/Down and W/S move the keyboard
    selection.
    """

    title = ""
    labels = ()
    title_size = 48
    btn_size = 24
    overlay_alpha = 180

    def __init__(self):
        self.active = False
        self.selected_index = 0
        self.title_font = pixel_font(self.title_size)
        self.btn_font = pixel_font(self.btn_size)
        self.title_surf = render_outline(self.title, self.title_font, YELLOW, BLACK, 2)
        self.title_rect = self.title_surf.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT // 4))
        self._layout_buttons()

    def _layout_buttons(self):
        gap = 24
        start_y = self.title_rect.bottom + 60
        width = max(self.btn_font.size(label)[0] for label in self.labels) + 60
        height = self.btn_font.get_height() + 24
        self.btn_rects = []
        for i, _ in enumerate(self.labels):
            box_rect = pygame.Rect(0, 0, width, height)
            box_rect.center = (WINDOW_WIDTH // 2, start_y + i * (height + gap))
            self.btn_rects.append(box_rect)

    def open(self):
        self.active = True
        self.selected_index = 0

    def close(self):
        self.active = False

    def update(self, events):
        if not self.active:
            return None
        for e in events:
            if e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_UP, pygame.K_w):
                    self.selected_index = (self.selected_index - 1) % len(self.labels)
                elif e.key in (pygame.K_DOWN, pygame.K_s):
                    self.selected_index = (self.selected_index + 1) % len(self.labels)
                elif e.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
                    return self.labels[self.selected_index]
            elif e.type == pygame.MOUSEMOTION:
                for i, rect in enumerate(self.btn_rects):
                    if rect.collidepoint(e.pos):
                        self.selected_index = i
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                for i, rect in enumerate(self.btn_rects):
                    if rect.collidepoint(e.pos):
                        self.selected_index = i
                        return self.labels[i]
        return None

    def draw_extra(self, surface):
        pass

    def draw(self, surface: pygame.Surface):
        if not self.active:
            return
        dim(surface, self.overlay_alpha)
        surface.blit(self.title_surf, self.title_rect)
        self.draw_extra(surface)
        for i, (label, rect) in enumerate(zip(self.labels, self.btn_rects)):
            draw_bevel_button(surface, rect, label, self.btn_font, i == self.selected_index)


class PauseMenu(ButtonMenu):
    """In-game pause interface opened with P or ESC."""

    title = "Paused"
    labels = ("Resume", "Exit to Menu")

    def update(self, events):
        if not self.active:
            return None
        # P / ESC close the menu again
        for e in events:
            if e.type == pygame.KEYDOWN and e.key in PAUSE_KEYS:
                return "Resume"
        return super().update(events)

    def draw_extra(self, surface):
        hint = render_outline("P / ESC to resume", pixel_font(12), WHITE)
        surface.blit(hint, hint.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT - 60)))
