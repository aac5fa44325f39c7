# Utility helpers shared by the screens and the renderer

import os, sys
from pathlib import Path

import pygame

from config import WHITE, YELLOW, BLACK

PIXEL_FONT = "PressStart2P-Regular.ttf"

_FONT_CACHE = {}

# -----------------------------------------------------------------------------
#  Asset helpers
# -----------------------------------------------------------------------------

def resource_path(relative: str) -> str:
    """Return an absolute path to *relative* that works both from source and
    when the program is bundled (PyInstaller/py2app).
    """
    base_path = getattr(sys, "_MEIPASS", Path(__file__).resolve().parent)
    return str(Path(base_path) / relative)


def load_font(font_name: str, size: int) -> pygame.font.Font:
    """Load a bundled font, falling back to pygame's default font.

    Fonts are cached per (name, size) since every screen asks for the same few.
    """
    key = (font_name, size)
    if key in _FONT_CACHE:
        return _FONT_CACHE[key]
    font = None
    try:
        font_path = resource_path(font_name)
        if os.path.isfile(font_path):
            font = pygame.font.Font(font_path, size)
    except (OSError, pygame.error) as e:
        print(f"[Font] Failed to load {font_name}: {e}")
    if font is None:
        print(f"[DEBUG] Using fallback font for {font_name}")
        # The default font renders smaller than the pixel font at the same size
        font = pygame.font.Font(None, int(size * 1.6))
    _FONT_CACHE[key] = font
    return font


def pixel_font(size: int) -> pygame.font.Font:
    return load_font(PIXEL_FONT, size)

# -----------------------------------------------------------------------------
#  Drawing helpers
# -----------------------------------------------------------------------------

def lighter(col, amt=40):
    return tuple(min(255, c + amt) for c in col[:3])


def darker(col, amt=40):
    return tuple(max(0, c - amt) for c in col[:3])


def render_outline(text: str, font: pygame.font.Font, fg, outline=BLACK, px: int = 1):
    """Render *text* with a pixel outline of *px* thickness."""
    base = font.render(text, True, fg)
    w, h = base.get_size()
    surf = pygame.Surface((w + px * 2, h + px * 2), pygame.SRCALPHA)
    shadow = font.render(text, True, outline)
    for dx in range(-px, px + 1):
        for dy in range(-px, px + 1):
            if dx == 0 and dy == 0:
                continue
            surf.blit(shadow, (dx + px, dy + px))
    surf.blit(base, (px, px))
    return surf


def draw_bevel_button(surface, box_rect: pygame.Rect, label: str, font, selected: bool):
    """Pixel-art button with a bevel; yellow text and border when selected."""
    base_col = (60, 60, 60)
    hover_col = (110, 110, 110)
    pygame.draw.rect(surface, hover_col if selected else base_col, box_rect)
    pygame.draw.rect(surface, BLACK, box_rect, 2)
    pygame.draw.line(surface, (200, 200, 200), box_rect.topleft, (box_rect.right - 1, box_rect.top))
    pygame.draw.line(surface, (200, 200, 200), box_rect.topleft, (box_rect.left, box_rect.bottom - 1))
    pygame.draw.line(surface, (30, 30, 30), (box_rect.left, box_rect.bottom - 1), (box_rect.right - 1, box_rect.bottom - 1))
    pygame.draw.line(surface, (30, 30, 30), (box_rect.right - 1, box_rect.top), (box_rect.right - 1, box_rect.bottom))

    txt_surf = render_outline(label, font, YELLOW if selected else WHITE)
    surface.blit(txt_surf, txt_surf.get_rect(center=box_rect.center))
    if selected:
        pygame.draw.rect(surface, YELLOW, box_rect, 4)


def dim(surface, alpha=180):
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    surface.blit(overlay, (0, 0))
