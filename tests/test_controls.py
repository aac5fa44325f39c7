import json

import pygame
import pytest

import config
import options_menu
from options_menu import load_settings, save_settings, try_rebind, validate_controls


@pytest.fixture
def settings_path(tmp_path):
    return str(tmp_path / "game_settings.json")


def test_defaults_are_valid():
    assert validate_controls(config.DEFAULT_CONTROLS) == []
    assert config.has_control_conflicts(config.DEFAULT_CONTROLS) == []


def test_conflicts_reported_as_pairs():
    assert config.has_control_conflicts({'left': 97, 'right': 97, 'launch': 32}) == [('right', 'left')]


@pytest.mark.parametrize("controls", [
    {'left': pygame.K_a, 'right': pygame.K_d},                        # missing launch
    {'left': 0, 'right': pygame.K_d, 'launch': pygame.K_SPACE},       # non-positive
    {'left': "a", 'right': pygame.K_d, 'launch': pygame.K_SPACE},     # not a key code
    {'left': pygame.K_a, 'right': pygame.K_a, 'launch': pygame.K_SPACE},
    {'left': pygame.K_ESCAPE, 'right': pygame.K_d, 'launch': pygame.K_SPACE},
    {'left': pygame.K_a, 'right': pygame.K_d, 'launch': pygame.K_F5},
])
def test_invalid_controls_rejected(controls):
    assert validate_controls(controls)


def test_get_control_key_falls_back_to_default():
    config.CURRENT_CONTROLS.pop('launch')
    assert config.get_control_key('launch') == pygame.K_SPACE


def test_missing_file_gives_defaults(settings_path):
    settings = load_settings(settings_path)
    assert settings['controls'] == config.DEFAULT_CONTROLS
    assert settings['show_onscreen_controls'] is False


def test_save_and_load_custom_bindings(settings_path):
    config.update_control_mapping('left', pygame.K_a)
    save_settings({'show_onscreen_controls': True}, settings_path)
    config.update_control_mapping('left', pygame.K_LEFT)

    settings = load_settings(settings_path)
    assert settings['controls']['left'] == pygame.K_a
    assert settings['show_onscreen_controls'] is True
    assert config.get_control_key('left') == pygame.K_a


def test_invalid_saved_controls_fall_back(settings_path):
    with open(settings_path, 'w') as f:
        json.dump({'controls': {'left': 97, 'right': 97, 'launch': 32}}, f)
    config.update_control_mapping('left', pygame.K_q)
    settings = load_settings(settings_path)
    assert settings['controls'] == config.DEFAULT_CONTROLS
    assert config.get_control_key('left') == pygame.K_LEFT


def test_corrupt_settings_file_falls_back(settings_path):
    with open(settings_path, 'w') as f:
        f.write("{oops")
    assert load_settings(settings_path)['controls'] == config.DEFAULT_CONTROLS


def test_wrong_typed_setting_ignored(settings_path):
    with open(settings_path, 'w') as f:
        json.dump({'show_onscreen_controls': "yes"}, f)
    assert load_settings(settings_path)['show_onscreen_controls'] is False


def test_rebind_rejects_duplicate():
    error = try_rebind('left', config.get_control_key('right'))
    assert error
    assert config.get_control_key('left') == pygame.K_LEFT
    assert try_rebind('left', pygame.K_a) is None
    assert config.get_control_key('left') == pygame.K_a


def test_settings_file_lives_in_data_dir():
    assert options_menu.SETTINGS_FILE.endswith("game_settings.json")
