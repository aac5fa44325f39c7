"""GameBoard: the single mutable simulation context.

Everything the per-frame step reads or writes lives on one ``GameBoard``
instance which is handed explicitly to the physics, power-up and round
helpers.  Nothing in the simulation keeps module-level state.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import pygame

import levels
from config import (BALL_RADIUS, BRICK_GAP, BRICK_HEIGHT, BRICK_OFFSET_LEFT, BRICK_OFFSET_TOP,
                    BRICK_WIDTH, INITIAL_LIVES)
from entities import ActivePowerUp, Ball, Brick, Paddle, PowerUp


class RoundStatus(Enum):
    PRE_LAUNCH = 'pre_launch'   # ball resting on the paddle
    ACTIVE = 'active'           # ball(s) in free motion
    BALL_LOST = 'ball_lost'     # transient
    LEVEL_CLEAR = 'level_clear' # transient
    ROUND_OVER = 'round_over'   # terminal


@dataclass(frozen=True)
class RoundOutcome:
    score: int
    won: bool


def create_bricks(layout_index: int) -> List[Brick]:
    """Build the brick field for catalog entry *layout_index*."""
    layout = levels.get_layout(layout_index)
    colors = levels.get_palette(layout_index)
    bricks = []
    for r, row in enumerate(layout):
        for c, health in enumerate(row):
            if health <= 0:
                continue
            bricks.append(Brick(
                x=BRICK_OFFSET_LEFT + c * (BRICK_WIDTH + BRICK_GAP),
                y=BRICK_OFFSET_TOP + r * (BRICK_HEIGHT + BRICK_GAP),
                width=BRICK_WIDTH,
                height=BRICK_HEIGHT,
                color=colors[r % len(colors)],
                health=int(health),
            ))
    if not bricks:
        print(f"[Levels] Layout {layout_index} has no bricks")
    return bricks


class GameBoard:
    def __init__(self, level: int = 0, lives: int = INITIAL_LIVES):
        self.level = level          # 0-based level number shown as level + 1
        self.layout_index = level   # catalog entry the bricks were built from
        self.lives = lives
        self.score = 0
        self.combo = 0
        self.status = RoundStatus.PRE_LAUNCH
        self.outcome: Optional[RoundOutcome] = None
        self.now = 0.0              # game clock (ms), frozen while paused

        self.paddle = Paddle()
        self.balls: List[Ball] = []
        self.bricks: List[Brick] = create_bricks(self.layout_index)
        self.powerups: List[PowerUp] = []
        self.active_powerups: List[ActivePowerUp] = []

        self.message: Optional[str] = None
        self.message_until = 0.0

        self._ball_ids = itertools.count()

    # ------------------------------------------------------------------
    @property
    def round_started(self) -> bool:
        return self.status == RoundStatus.ACTIVE

    @property
    def is_over(self) -> bool:
        return self.status == RoundStatus.ROUND_OVER

    def new_ball(self, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Ball:
        """Create a ball with a fresh id and add it to the board."""
        ball = Ball(next(self._ball_ids), pygame.Vector2(x, y), pygame.Vector2(vx, vy))
        self.balls.append(ball)
        return ball

    def resting_ball_position(self):
        return self.paddle.center_x, self.paddle.y - BALL_RADIUS

    def load_layout(self, layout_index: int):
        self.layout_index = layout_index
        self.bricks = create_bricks(layout_index)

    def remaining_bricks(self) -> int:
        return sum(1 for b in self.bricks if b.active)

    def show_message(self, text: str, duration_ms: float):
        self.message = text
        self.message_until = self.now + duration_ms

    def expire_message(self):
        if self.message is not None and self.now >= self.message_until:
            self.message = None
