"""simulation.py

The per-frame driver that ties paddle input, physics, power-ups and the round
controller together.

Input handlers only flip flags on ``Intents`` (held direction, pending launch)
which the next ``tick`` consumes; repeated key events collapse into the latest
value.  ``tick`` runs synchronously and never blocks, and it is a no-op while
the game is paused or the level-jump prompt is open so the whole board (game
clock included) is frozen.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

import physics
import powerups
import rounds
from board import GameBoard, RoundOutcome, RoundStatus
from config import FRAME_MS, INITIAL_LIVES
from entities import Brick, PowerUp, PowerUpType

DIRECTIONS = {'left': -1, 'right': 1, None: 0}


@dataclass
class Intents:
    direction: Optional[str] = None   # 'left', 'right' or None
    launch_requested: bool = False


@dataclass(frozen=True)
class BallView:
    id: int
    x: float
    y: float


@dataclass(frozen=True)
class EffectView:
    type: PowerUpType
    remaining_ms: float
    shots_remaining: Optional[int]


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of everything the renderer needs for one frame."""
    paddle: Tuple[float, float, float, float]
    balls: Tuple[BallView, ...]
    bricks: Tuple[Brick, ...]
    powerups: Tuple[PowerUp, ...]
    effects: Tuple[EffectView, ...]
    score: int
    lives: int
    level: int          # 1-based
    status: RoundStatus
    message: Optional[str]
    paused: bool
    selecting_level: bool

    @property
    def fire_effect(self) -> Optional[EffectView]:
        for effect in self.effects:
            if effect.type == PowerUpType.FIRE:
                return effect
        return None


class Simulation:
    def __init__(self, rng: random.Random = None, level: int = 0, lives: int = INITIAL_LIVES,
                 on_round_over: Callable[[RoundOutcome], None] = None):
        self.rng = rng if rng is not None else random.Random()
        self.board = GameBoard(level=level, lives=lives)
        self.intents = Intents()
        self.paused = False
        self.selecting_level = False
        self.on_round_over = on_round_over
        self._reported = False
        rounds.reset_ball_and_paddle(self.board)

    # ------------------------------------------------------------------
    # Input side channel
    # ------------------------------------------------------------------
    def set_direction(self, direction: Optional[str]):
        if direction not in DIRECTIONS:
            raise ValueError(f"unknown direction {direction!r}")
        self.intents.direction = direction

    def release_direction(self, direction: str):
        """Stop moving, but only if *direction* is the one currently held."""
        if self.intents.direction == direction:
            self.intents.direction = None

    def launch(self):
        if self.paused or self.selecting_level:
            return
        self.intents.launch_requested = True

    def pause(self):
        if not self.board.is_over:
            self.paused = True

    def resume(self):
        self.paused = False

    def toggle_pause(self):
        if self.paused:
            self.resume()
        else:
            self.pause()

    def open_level_selector(self):
        self.selecting_level = True
        self.intents.direction = None

    def close_level_selector(self):
        self.selecting_level = False

    def jump_to_level(self, value) -> int:
        """Jump to a 1-based level; raises ``rounds.LevelJumpError`` on bad input."""
        target = rounds.jump_to_level(self.board, value)
        self.intents = Intents()
        self.selecting_level = False
        return target

    # ------------------------------------------------------------------
    # Frame step
    # ------------------------------------------------------------------
    def _consume_launch(self):
        if not self.intents.launch_requested:
            return
        self.intents.launch_requested = False
        if self.board.status == RoundStatus.PRE_LAUNCH:
            rounds.launch(self.board, self.rng)
        else:
            rounds.fire(self.board)

    def tick(self, dt_ms: float = FRAME_MS) -> Snapshot:
        board = self.board
        if self.paused or self.selecting_level or board.is_over:
            return self.snapshot()

        board.now += dt_ms
        self._consume_launch()

        powerups.purge_expired(board)
        board.paddle.width = powerups.paddle_width(board)
        board.paddle.move(DIRECTIONS[self.intents.direction])

        if board.status == RoundStatus.ACTIVE:
            physics.step_balls(board, self.rng)
        else:
            rounds.rest_ball_on_paddle(board)

        powerups.update_items(board)

        rounds.handle_ball_loss(board)
        rounds.handle_level_clear(board, self.rng)
        board.expire_message()

        if board.is_over and not self._reported:
            self._reported = True
            if self.on_round_over is not None:
                self.on_round_over(board.outcome)
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        board = self.board
        return Snapshot(
            paddle=board.paddle.rect,
            balls=tuple(BallView(b.id, b.pos.x, b.pos.y) for b in board.balls),
            bricks=tuple(replace(b) for b in board.bricks),
            powerups=tuple(replace(p) for p in board.powerups),
            effects=tuple(EffectView(p.type, max(0.0, p.expires_at - board.now), p.shots_remaining)
                          for p in board.active_powerups),
            score=board.score,
            lives=board.lives,
            level=board.level + 1,
            status=board.status,
            message=board.message,
            paused=self.paused,
            selecting_level=self.selecting_level,
        )
