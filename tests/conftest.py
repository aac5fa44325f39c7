import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

import config
from board import GameBoard


class ScriptedRandom:
    """Stand-in for ``random.Random`` that replays queued values.

    ``random()`` falls back to 0.99 (no power-up drop, positive sign) and
    ``choice``/``randint`` fall back to their first option once the queues
    run dry.
    """

    def __init__(self, randoms=(), choices=(), randints=()):
        self.randoms = list(randoms)
        self.choices = list(choices)
        self.randints = list(randints)
        self.randint_calls = []

    def random(self):
        return self.randoms.pop(0) if self.randoms else 0.99

    def choice(self, seq):
        return seq[self.choices.pop(0)] if self.choices else seq[0]

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        return self.randints.pop(0) if self.randints else a

    def uniform(self, a, b):
        return a


@pytest.fixture(scope="session", autouse=True)
def _pygame():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def board():
    """A board with the brick field cleared so tests place their own bricks."""
    b = GameBoard()
    b.bricks = []
    return b


@pytest.fixture(autouse=True)
def _restore_controls():
    saved = dict(config.CURRENT_CONTROLS)
    yield
    config.CURRENT_CONTROLS.clear()
    config.CURRENT_CONTROLS.update(saved)
