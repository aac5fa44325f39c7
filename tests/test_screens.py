import pygame
import pytest

from config import LEVEL_SELECT_KEY
from level_select import LevelSelectPrompt
from name_prompt import NamePrompt, validate_name
from onscreen_controls import OnscreenControls
from simulation import Simulation
from conftest import ScriptedRandom


def key(k, ch=""):
    return pygame.event.Event(pygame.KEYDOWN, key=k, unicode=ch, mod=0)


def typed(text):
    return [key(0, ch) for ch in text]


@pytest.fixture
def sim():
    return Simulation(rng=ScriptedRandom())


@pytest.mark.parametrize("name, ok", [("ab", True), ("  ab  ", True), ("a", False),
                                      ("   ", False), ("x" * 12, True), ("x" * 13, False)])
def test_validate_name(name, ok):
    assert (validate_name(name) is None) == ok


def test_name_prompt_requires_two_characters():
    prompt = NamePrompt(score=120)
    for e in typed("A"):
        prompt.handle_event(e)
    prompt.handle_event(key(pygame.K_RETURN))
    assert prompt.stage == "edit" and prompt.error

    for e in typed("b "):
        prompt.handle_event(e)
    prompt.handle_event(key(pygame.K_RETURN))
    assert prompt.stage == "confirm"
    prompt.handle_event(key(pygame.K_RETURN))
    assert prompt.done
    assert prompt.result == "Ab"


def test_name_prompt_caps_length():
    prompt = NamePrompt(score=1)
    for e in typed("x" * 20):
        prompt.handle_event(e)
    assert len(prompt.name) == 12


def test_name_prompt_escape_skips():
    prompt = NamePrompt(score=1)
    prompt.handle_event(key(pygame.K_ESCAPE))
    assert prompt.canceled and not prompt.done


def test_level_prompt_keeps_input_on_error(sim):
    prompt = LevelSelectPrompt(sim)
    prompt.handle_event(key(LEVEL_SELECT_KEY))
    assert prompt.active and sim.selecting_level

    for ch in "99":
        prompt.handle_event(key(pygame.K_9, ch))
    prompt.handle_event(key(pygame.K_RETURN))
    assert prompt.active
    assert prompt.text == "99"
    assert "between 1 and 25" in prompt.error

    prompt.handle_event(key(pygame.K_BACKSPACE))
    prompt.handle_event(key(pygame.K_BACKSPACE))
    prompt.handle_event(key(pygame.K_4, "4"))
    prompt.handle_event(key(pygame.K_RETURN))
    assert not prompt.active
    assert sim.snapshot().level == 4


def test_level_prompt_ignores_letters_and_closes(sim):
    prompt = LevelSelectPrompt(sim)
    prompt.open()
    prompt.handle_event(key(pygame.K_a, "a"))
    assert prompt.text == ""
    prompt.handle_event(key(pygame.K_ESCAPE))
    assert not sim.selecting_level


def test_onscreen_buttons_drive_intents(sim):
    controls = OnscreenControls(sim)
    down = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=controls.buttons['left'].center)
    up = pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(0, 0))

    assert not controls.handle_event(down)     # disabled by default
    controls.enabled = True
    assert controls.handle_event(down)
    assert sim.intents.direction == 'left'
    assert controls.handle_event(up)
    assert sim.intents.direction is None

    fire = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=controls.buttons['launch'].center)
    controls.handle_event(fire)
    assert sim.intents.launch_requested
