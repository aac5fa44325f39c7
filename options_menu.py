import os
import json
import pygame
from config import (WINDOW_WIDTH, WINDOW_HEIGHT, WHITE, YELLOW, BLACK, DATA_DIR,
                    DEFAULT_CONTROLS, CURRENT_CONTROLS, CONTROL_DESCRIPTIONS, PAUSE_KEYS,
                    LEVEL_SELECT_KEY, get_key_name, get_control_key, update_control_mapping,
                    has_control_conflicts)
from utils import pixel_font, render_outline, draw_bevel_button

SETTINGS_FILE = os.path.join(DATA_DIR, "game_settings.json")

RESERVED_KEYS = set(PAUSE_KEYS) | {LEVEL_SELECT_KEY}

DEFAULT_SETTINGS = {
    'show_onscreen_controls': False,
}

# ---------------------------------------------------------------------------
#  Settings persistence
# ---------------------------------------------------------------------------

def validate_controls(controls):
    """Return a list of problems with *controls*; empty when it is usable."""
    if not isinstance(controls, dict):
        return ["controls must be a mapping"]
    problems = []
    for action in DEFAULT_CONTROLS:
        key = controls.get(action)
        if key is None:
            problems.append(f"missing key for {action}")
        elif isinstance(key, bool) or not isinstance(key, int) or key <= 0:
            problems.append(f"invalid key for {action}: {key!r}")
        elif key in RESERVED_KEYS:
            problems.append(f"{get_key_name(key)} is reserved")
    bound = {a: k for a, k in controls.items() if a in DEFAULT_CONTROLS}
    for action, other in has_control_conflicts(bound):
        problems.append(f"{action} and {other} share the same key")
    return problems


def load_settings(path=None):
    """Load settings and apply the saved controls.

    Missing or broken files, and control sets that fail validation, fall back
    to the defaults so the game always starts with usable bindings.
    """
    path = path or SETTINGS_FILE
    settings = dict(DEFAULT_SETTINGS, controls=DEFAULT_CONTROLS.copy())
    loaded = {}
    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            print(f"[Options] Failed to load settings: {e}")
    if not isinstance(loaded, dict):
        print("[Options] Settings file is not an object, using defaults")
        loaded = {}

    for key, default in DEFAULT_SETTINGS.items():
        if isinstance(loaded.get(key), type(default)):
            settings[key] = loaded[key]

    if 'controls' in loaded:
        problems = validate_controls(loaded['controls'])
        if problems:
            print(f"[Options] Ignoring saved controls: {'; '.join(problems)}")
        else:
            settings['controls'] = {a: loaded['controls'][a] for a in DEFAULT_CONTROLS}

    for action, key in settings['controls'].items():
        update_control_mapping(action, key)
    return settings


def save_settings(settings, path=None):
    """Write *settings* (with the live control bindings) to disk."""
    path = path or SETTINGS_FILE
    data = dict(settings)
    data['controls'] = {a: get_control_key(a) for a in DEFAULT_CONTROLS}
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        print(f"[Options] Failed to save settings: {e}")
        return False
    return True


def try_rebind(action, key):
    """Bind *key* to *action* if the result is still a valid control set.

    Returns an error string, or None when the binding was applied.
    """
    candidate = {a: get_control_key(a) for a in DEFAULT_CONTROLS}
    candidate[action] = key
    problems = validate_controls(candidate)
    if problems:
        return problems[0]
    update_control_mapping(action, key)
    return None

# ---------------------------------------------------------------------------
#  Settings screen
# ---------------------------------------------------------------------------

class OptionsMenu:
    """Settings screen: key rebinding plus the on-screen controls toggle."""

    ACTIONS = list(DEFAULT_CONTROLS)

    def __init__(self, settings=None, path=None):
        self.active = False
        self.path = path
        self.settings = settings if settings is not None else load_settings(path)

        self.title_font = pixel_font(40)
        self.label_font = pixel_font(18)
        self.key_font = pixel_font(16)
        self.btn_font = pixel_font(20)

        # Rows: one per action, then the toggle, then Reset and Back
        self.rows = self.ACTIONS + ['show_onscreen_controls', 'reset', 'back']
        self.nav_index = 0
        self.remapping_control = None
        self.error = None

        top = 170
        self.row_rects = [pygame.Rect(WINDOW_WIDTH // 2 - 260, top + i * 60, 520, 44)
                          for i in range(len(self.rows))]

    def open(self):
        self.active = True
        self.nav_index = 0
        self.remapping_control = None
        self.error = None

    def close(self):
        self.active = False
        self.remapping_control = None
        save_settings(self.settings, self.path)

    def reset_to_defaults(self):
        for action, key in DEFAULT_CONTROLS.items():
            update_control_mapping(action, key)
        self.settings['controls'] = DEFAULT_CONTROLS.copy()
        self.error = None

    def _activate(self, row):
        if row in self.ACTIONS:
            self.remapping_control = row
            self.error = None
        elif row == 'show_onscreen_controls':
            self.settings[row] = not self.settings.get(row, False)
        elif row == 'reset':
            self.reset_to_defaults()
        elif row == 'back':
            self.close()

    def _finish_remap(self, key):
        action = self.remapping_control
        self.remapping_control = None
        if key == pygame.K_ESCAPE:
            return
        self.error = try_rebind(action, key)
        if self.error:
            print(f"[Options] Rejected binding for {action}: {self.error}")
        else:
            self.settings['controls'] = dict(CURRENT_CONTROLS)
            save_settings(self.settings, self.path)

    def update(self, events):
        """Handle input. Returns True when events were consumed."""
        if not self.active:
            return False

        consumed = False
        for event in events:
            if event.type == pygame.KEYDOWN:
                consumed = True
                if self.remapping_control:
                    self._finish_remap(event.key)
                elif event.key == pygame.K_ESCAPE:
                    self.close()
                elif event.key == pygame.K_UP:
                    self.nav_index = (self.nav_index - 1) % len(self.rows)
                elif event.key == pygame.K_DOWN:
                    self.nav_index = (self.nav_index + 1) % len(self.rows)
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    self._activate(self.rows[self.nav_index])
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                consumed = True
                if self.remapping_control:
                    continue
                for i, rect in enumerate(self.row_rects):
                    if rect.collidepoint(event.pos):
                        self.nav_index = i
                        self._activate(self.rows[i])
                        break
            elif event.type == pygame.MOUSEMOTION and not self.remapping_control:
                for i, rect in enumerate(self.row_rects):
                    if rect.collidepoint(event.pos):
                        self.nav_index = i
        return consumed

    def draw(self, surface):
        if not self.active:
            return

        surface.fill((10, 10, 20))
        title = render_outline("Settings", self.title_font, YELLOW, BLACK, 2)
        surface.blit(title, title.get_rect(center=(WINDOW_WIDTH // 2, 90)))

        for i, (row, rect) in enumerate(zip(self.rows, self.row_rects)):
            selected = i == self.nav_index
            if row in ('reset', 'back'):
                draw_bevel_button(surface, rect, row.title(), self.btn_font, selected)
                continue

            color = YELLOW if selected else WHITE
            if row in self.ACTIONS:
                label = CONTROL_DESCRIPTIONS[row]
                value = "Press key..." if self.remapping_control == row else get_key_name(get_control_key(row))
            else:
                label = "On-screen Controls"
                value = "ON" if self.settings.get(row) else "OFF"

            label_surf = render_outline(label, self.label_font, color)
            surface.blit(label_surf, label_surf.get_rect(midleft=(rect.left, rect.centery)))

            key_surf = render_outline(value, self.key_font, color)
            box = pygame.Rect(0, 0, key_surf.get_width() + 30, key_surf.get_height() + 14)
            box.midright = rect.midright
            pygame.draw.rect(surface, (40, 40, 40), box)
            pygame.draw.rect(surface, color, box, 2)
            surface.blit(key_surf, key_surf.get_rect(center=box.center))

        if self.error:
            err = render_outline(self.error, self.key_font, (255, 90, 90))
            surface.blit(err, err.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT - 60)))
        elif self.remapping_control:
            hint = render_outline("ESC cancels", self.key_font, WHITE)
            surface.blit(hint, hint.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT - 60)))
