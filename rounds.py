"""rounds.py

Round / level controller.

State machine driven by the simulation step::

    PRE_LAUNCH --launch--> ACTIVE --all balls gone--> BALL_LOST --lives left--> PRE_LAUNCH
                                                          \\--no lives--> ROUND_OVER (lost)
    any --all bricks gone--> LEVEL_CLEAR --next layout--> PRE_LAUNCH
                                 \\--catalog exhausted--> ROUND_OVER (won)

``BALL_LOST`` and ``LEVEL_CLEAR`` are transient: they are entered and left
within the same frame and only show up in debug logs.
"""

from __future__ import annotations

import random

import levels
import physics
import powerups
from board import GameBoard, RoundOutcome, RoundStatus
from config import (BALL_SPEED, LEVEL_MESSAGE_MS, SEQUENTIAL_LEVELS, RANDOM_POOL_MIN,
                    RANDOM_POOL_MAX)
from entities import PowerUpCategory


class LevelJumpError(ValueError):
    """Raised when a level-jump target is not a valid level number."""


def _transition(board: GameBoard, status: RoundStatus):
    print(f"[DEBUG] round: {board.status.name} -> {status.name}")
    board.status = status


def _finish(board: GameBoard, won: bool):
    board.outcome = RoundOutcome(board.score, won)
    _transition(board, RoundStatus.ROUND_OVER)
    print(f"[Round] Game over: score={board.score} won={won}")


def reset_ball_and_paddle(board: GameBoard):
    """Put a fresh ball on a recentred paddle and wait for launch."""
    _transition(board, RoundStatus.PRE_LAUNCH)
    powerups.clear_powerups(board)
    board.combo = 0
    board.paddle.width = powerups.paddle_width(board)
    board.paddle.reset()
    board.balls = []
    board.new_ball(*board.resting_ball_position())


def rest_ball_on_paddle(board: GameBoard):
    if board.balls:
        board.balls[0].pos.x = board.paddle.center_x


def launch(board: GameBoard, rng=None) -> bool:
    """Send the resting ball off. Returns False if the round was not waiting."""
    if board.status != RoundStatus.PRE_LAUNCH or not board.balls:
        return False
    if rng is None:
        rng = random
    _transition(board, RoundStatus.ACTIVE)
    board.balls[0].vel = physics.random_launch_velocity(rng)
    return True


def fire(board: GameBoard) -> bool:
    """Shoot an extra ball straight up while a fire effect has shots left."""
    if board.status != RoundStatus.ACTIVE:
        return False
    gun = powerups.active_effect(board, PowerUpCategory.GUN)
    if gun is None or not gun.shots_remaining:
        return False
    board.new_ball(*board.resting_ball_position(), vx=0, vy=-BALL_SPEED)
    gun.shots_remaining -= 1
    return True


def handle_ball_loss(board: GameBoard) -> bool:
    """Take a life once every ball is gone. Returns True if a ball was lost."""
    if board.status != RoundStatus.ACTIVE or board.balls:
        return False
    _transition(board, RoundStatus.BALL_LOST)
    board.lives -= 1
    if board.lives > 0:
        reset_ball_and_paddle(board)
    else:
        _finish(board, won=False)
    return True


def next_layout_index(next_level: int, rng=None, count: int = None):
    """Pick the catalog entry for *next_level*, or None when content ran out."""
    if count is None:
        count = levels.level_count()
    if next_level < SEQUENTIAL_LEVELS:
        if next_level >= count:
            print("[Levels] Not enough levels defined for sequential play. Ending game.")
            return None
        return next_level

    max_index = min(RANDOM_POOL_MAX, count - 1)
    if RANDOM_POOL_MIN > max_index:
        print("[Levels] Random level pool is empty. Ending game.")
        return None
    if rng is None:
        rng = random
    return rng.randint(RANDOM_POOL_MIN, max_index)


def handle_level_clear(board: GameBoard, rng=None) -> bool:
    """Advance once the brick field is empty. Returns True on level clear."""
    if board.is_over or board.remaining_bricks() > 0:
        return False
    _transition(board, RoundStatus.LEVEL_CLEAR)
    next_level = board.level + 1
    layout_index = next_layout_index(next_level, rng)
    if layout_index is None:
        _finish(board, won=True)
        return True

    board.level = next_level
    board.load_layout(layout_index)
    reset_ball_and_paddle(board)
    board.show_message(f"Level {next_level + 1}", LEVEL_MESSAGE_MS)
    return True


def parse_level_number(value) -> int:
    """Validate a 1-based level number typed by the player."""
    count = levels.level_count()
    try:
        target = int(str(value).strip())
    except ValueError:
        raise LevelJumpError(f"Invalid level. Please enter a number between 1 and {count}.")
    if not 1 <= target <= count:
        raise LevelJumpError(f"Invalid level. Please enter a number between 1 and {count}.")
    return target


def jump_to_level(board: GameBoard, value) -> int:
    """Jump straight to a 1-based level. Leaves the board untouched on bad input."""
    target = parse_level_number(value)
    if board.is_over:
        raise LevelJumpError("The game is already over.")
    board.level = target - 1
    board.load_layout(target - 1)
    reset_ball_and_paddle(board)
    board.show_message(f"Jump to Level {target}", LEVEL_MESSAGE_MS)
    return target
