import random
from typing import TYPE_CHECKING, Optional

from config import (PADDLE_WIDTH, BIG_PADDLE_FACTOR, TINY_PADDLE_FACTOR, DOUBLE_SPEED_FACTOR,
                    SLOW_SPEED_FACTOR, POWERUP_CHANCE, POWERUP_SPEED, POWERUP_DURATION,
                    FIRE_SHOTS, BOARD_HEIGHT)
from entities import ActivePowerUp, PowerUp, PowerUpCategory, PowerUpType
if TYPE_CHECKING:
    from board import GameBoard
    from entities import Brick

# -----------------------------------------------------------------------------
# Power-ups: falling items dropped by bricks and the timed effects they grant.
# -----------------------------------------------------------------------------

__all__ = ["maybe_spawn", "update_items", "collect", "purge_expired", "active_effect",
           "paddle_width", "speed_multiplier", "force_slow", "clear_powerups"]

# Spawnable types, in a fixed order so seeded rolls are reproducible
SPAWN_TYPES = list(PowerUpType)


# -----------------------------------------------------------------------------
# Active effects
# -----------------------------------------------------------------------------

def active_effect(board: "GameBoard", category: PowerUpCategory) -> Optional[ActivePowerUp]:
    """Return the active effect in *category*, if any."""
    for effect in board.active_powerups:
        if effect.category == category:
            return effect
    return None


def purge_expired(board: "GameBoard"):
    board.active_powerups = [p for p in board.active_powerups if p.expires_at > board.now]


def paddle_width(board: "GameBoard") -> float:
    effect = active_effect(board, PowerUpCategory.PADDLE_SIZE)
    if effect is None:
        return PADDLE_WIDTH
    if effect.type == PowerUpType.BIG:
        return PADDLE_WIDTH * BIG_PADDLE_FACTOR
    return PADDLE_WIDTH * TINY_PADDLE_FACTOR


def speed_multiplier(board: "GameBoard") -> float:
    effect = active_effect(board, PowerUpCategory.SPEED)
    if effect is None:
        return 1.0
    return DOUBLE_SPEED_FACTOR if effect.type == PowerUpType.DOUBLE else SLOW_SPEED_FACTOR


def _replace_in_category(board: "GameBoard", effect: ActivePowerUp):
    board.active_powerups = [p for p in board.active_powerups if p.category != effect.category]
    board.active_powerups.append(effect)


def collect(board: "GameBoard", ptype: PowerUpType):
    """Turn a collected item into an active effect.

    Neutral wipes every active effect and is not stored itself.  Any other
    type replaces whatever effect is active in its category.
    """
    if ptype == PowerUpType.NEUTRAL:
        board.active_powerups = []
        return
    effect = ActivePowerUp(ptype, board.now + POWERUP_DURATION)
    if ptype == PowerUpType.FIRE:
        effect.shots_remaining = FIRE_SHOTS
    _replace_in_category(board, effect)
    print(f"[DEBUG] power-up collected: {ptype.description}")


def force_slow(board: "GameBoard", duration_ms: float):
    """Install a short slow effect in place of any speed effect."""
    _replace_in_category(board, ActivePowerUp(PowerUpType.SLOW, board.now + duration_ms))


# -----------------------------------------------------------------------------
# Falling items
# -----------------------------------------------------------------------------

def maybe_spawn(board: "GameBoard", brick: "Brick", rng: random.Random = None) -> Optional[PowerUp]:
    """Roll for a power-up drop at the top-centre of a destroyed *brick*."""
    if rng is None:
        rng = random
    if rng.random() >= POWERUP_CHANCE:
        return None
    item = PowerUp(brick.x + brick.width / 2, brick.y, rng.choice(SPAWN_TYPES))
    board.powerups.append(item)
    return item


def _touches_paddle(item: PowerUp, board: "GameBoard") -> bool:
    paddle = board.paddle
    return (item.active
            and item.y + item.height > paddle.y
            and item.y < paddle.y + paddle.height
            and item.left + item.width > paddle.x
            and item.left < paddle.x + paddle.width)


def update_items(board: "GameBoard"):
    """Move every falling item, resolve collection and drop the ones that left the board."""
    remaining = []
    for item in board.powerups:
        item.y += POWERUP_SPEED
        if _touches_paddle(item, board):
            item.active = False
            collect(board, item.type)
            continue
        if item.active and item.y < BOARD_HEIGHT:
            remaining.append(item)
    board.powerups = remaining


def clear_powerups(board: "GameBoard"):
    """Remove falling items and active effects (used on round reset)."""
    board.powerups = []
    board.active_powerups = []
