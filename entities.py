"""Plain data records for everything that lives on the board."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

import pygame

from config import (BOARD_WIDTH, PADDLE_WIDTH, PADDLE_HEIGHT, PADDLE_Y, PADDLE_SPEED,
                    POWERUP_SIZE)


class PowerUpType(Enum):
    DOUBLE = 'D'
    SLOW = 'S'
    BIG = 'B'
    TINY = 'T'
    NEUTRAL = 'N'
    FIRE = 'F'

    @property
    def category(self) -> "PowerUpCategory":
        return POWERUP_CATEGORIES[self]

    @property
    def description(self) -> str:
        return POWERUP_DESCRIPTIONS[self]

    @property
    def color(self) -> Tuple[int, int, int]:
        return POWERUP_COLORS[self]


class PowerUpCategory(Enum):
    """Effects in the same category replace each other."""
    SPEED = 'speed'
    PADDLE_SIZE = 'paddle_size'
    GUN = 'gun'
    NONE = 'none'


POWERUP_CATEGORIES: Dict[PowerUpType, PowerUpCategory] = {
    PowerUpType.DOUBLE: PowerUpCategory.SPEED,
    PowerUpType.SLOW: PowerUpCategory.SPEED,
    PowerUpType.BIG: PowerUpCategory.PADDLE_SIZE,
    PowerUpType.TINY: PowerUpCategory.PADDLE_SIZE,
    PowerUpType.FIRE: PowerUpCategory.GUN,
    PowerUpType.NEUTRAL: PowerUpCategory.NONE,
}

POWERUP_DESCRIPTIONS: Dict[PowerUpType, str] = {
    PowerUpType.DOUBLE: 'Double Speed',
    PowerUpType.SLOW: 'Slow Speed',
    PowerUpType.BIG: 'Big Paddle',
    PowerUpType.TINY: 'Tiny Paddle',
    PowerUpType.NEUTRAL: 'Normal',
    PowerUpType.FIRE: 'Fire Power',
}

POWERUP_COLORS: Dict[PowerUpType, Tuple[int, int, int]] = {
    PowerUpType.DOUBLE: (239, 68, 68),    # red
    PowerUpType.SLOW: (14, 165, 233),     # sky
    PowerUpType.BIG: (34, 197, 94),       # green
    PowerUpType.TINY: (249, 115, 22),     # orange
    PowerUpType.NEUTRAL: (100, 116, 139), # slate
    PowerUpType.FIRE: (168, 85, 247),     # purple
}


@dataclass
class Ball:
    id: int
    pos: pygame.Vector2
    vel: pygame.Vector2 = field(default_factory=lambda: pygame.Vector2(0, 0))
    vertical_hit_streak: int = 0
    wall_hit_count: int = 0


@dataclass
class Brick:
    x: float
    y: float
    width: float
    height: float
    color: Tuple[int, int, int]
    health: int
    active: bool = True
    cracked: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class PowerUp:
    """A falling power-up item. ``x`` is the horizontal centre, ``y`` the top."""
    x: float
    y: float
    type: PowerUpType
    width: int = POWERUP_SIZE
    height: int = POWERUP_SIZE
    active: bool = True

    @property
    def left(self) -> float:
        return self.x - self.width / 2


@dataclass
class ActivePowerUp:
    type: PowerUpType
    expires_at: float
    shots_remaining: Optional[int] = None

    @property
    def category(self) -> PowerUpCategory:
        return self.type.category


class Paddle:
    def __init__(self):
        self.width = PADDLE_WIDTH
        self.height = PADDLE_HEIGHT
        self.y = PADDLE_Y
        self.reset()

    def reset(self):
        """Recenter at the default width."""
        self.x = (BOARD_WIDTH - PADDLE_WIDTH) / 2

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def move(self, direction: int):
        """Move one frame in *direction* (-1, 0, +1) and clamp to the board."""
        self.x += direction * PADDLE_SPEED
        self.clamp()

    def clamp(self):
        self.x = max(0, min(self.x, BOARD_WIDTH - self.width))
