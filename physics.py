"""physics.py

Per-frame ball physics and collision response.

All helpers take the ``GameBoard`` they operate on plus an injectable
``random.Random`` so the randomised anti-stuck heuristics can be reproduced
exactly in tests.  Motion is one fixed step per frame; nothing here scales by
elapsed time.

Order of operations for a single ball (see ``step_ball``):

1. renormalise speed toward the target set by speed power-ups
2. integrate position
3. side / top walls (with stuck-streak and wall-hit-count recovery)
4. paddle
5. first overlapping brick
6. bottom exit
"""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING, Optional

import pygame

import powerups
from config import (BOARD_WIDTH, BOARD_HEIGHT, BALL_RADIUS, BALL_SPEED, SPEED_EPSILON,
                    STUCK_THRESHOLD, STUCK_NUDGE, WALL_HIT_RESET_THRESHOLD, RECOVERY_SLOW_MS,
                    BRICK_POINTS, COMBO_POINTS)
from entities import Ball, Brick

if TYPE_CHECKING:
    from board import GameBoard


def _random_sign(rng) -> int:
    return 1 if rng.random() > 0.5 else -1


def random_launch_velocity(rng=None, speed: float = BALL_SPEED) -> pygame.Vector2:
    """Upward velocity at a random angle in the 45°–135° sector."""
    if rng is None:
        rng = random
    angle = rng.random() * (math.pi / 2) + math.pi / 4
    return pygame.Vector2(speed * math.cos(angle) * _random_sign(rng),
                          -speed * math.sin(angle))


def normalize_speed(ball: Ball, target_speed: float):
    """Rescale a moving ball's velocity toward *target_speed*."""
    current = ball.vel.length()
    if current > 0 and abs(current - target_speed) > SPEED_EPSILON:
        ball.vel *= target_speed / current


def integrate(ball: Ball):
    ball.pos += ball.vel


def _register_side_bounce(ball: Ball, rng):
    """Count a bounce off a vertical surface and nudge the ball if it keeps repeating."""
    ball.vertical_hit_streak += 1
    if ball.vertical_hit_streak >= STUCK_THRESHOLD:
        ball.vel.y += _random_sign(rng) * STUCK_NUDGE
        ball.vertical_hit_streak = 0


def _recover_from_bounce_loop(board: "GameBoard", ball: Ball, rng):
    print(f"[DEBUG] ball {ball.id} stuck in a wall loop, recentering")
    ball.pos.update(BOARD_WIDTH / 2, BOARD_HEIGHT / 2)
    ball.vel = random_launch_velocity(rng)
    ball.wall_hit_count = 0
    powerups.force_slow(board, RECOVERY_SLOW_MS)


def collide_walls(board: "GameBoard", ball: Ball, rng=None) -> bool:
    """Bounce off the side and top walls. Returns True on any wall hit."""
    if rng is None:
        rng = random
    hit_wall = False

    if ball.pos.x - BALL_RADIUS < 0 or ball.pos.x + BALL_RADIUS > BOARD_WIDTH:
        ball.vel.x *= -1
        _register_side_bounce(ball, rng)
        hit_wall = True
    if ball.pos.y - BALL_RADIUS < 0:
        ball.vel.y *= -1
        ball.vertical_hit_streak = 0
        hit_wall = True

    if hit_wall:
        ball.wall_hit_count += 1
        if ball.wall_hit_count > WALL_HIT_RESET_THRESHOLD:
            _recover_from_bounce_loop(board, ball, rng)
    return hit_wall


def collide_paddle(board: "GameBoard", ball: Ball) -> bool:
    """Bounce a descending ball off the paddle, steering by hit position."""
    paddle = board.paddle
    if not (ball.vel.y > 0
            and ball.pos.y + BALL_RADIUS >= paddle.y
            and ball.pos.y - BALL_RADIUS < paddle.y + paddle.height
            and ball.pos.x + BALL_RADIUS > paddle.x
            and ball.pos.x - BALL_RADIUS < paddle.x + paddle.width):
        return False

    ball.vel.y *= -1
    # -1 at the left edge, 0 at the centre, +1 at the right edge
    hit_pos = (ball.pos.x - paddle.center_x) / (paddle.width / 2)
    hit_pos = max(-1.0, min(1.0, hit_pos))
    ball.vel.x = hit_pos * (ball.vel.length() or BALL_SPEED)
    ball.pos.y = paddle.y - BALL_RADIUS
    board.combo = 0
    ball.vertical_hit_streak = 0
    return True


def _overlaps(ball: Ball, brick: Brick) -> bool:
    closest_x = max(brick.x, min(ball.pos.x, brick.right))
    closest_y = max(brick.y, min(ball.pos.y, brick.bottom))
    dx = ball.pos.x - closest_x
    dy = ball.pos.y - closest_y
    return dx * dx + dy * dy < BALL_RADIUS * BALL_RADIUS


def damage_brick(board: "GameBoard", brick: Brick, rng=None):
    """Take one hit off *brick*; destroy, score and roll a drop when it breaks."""
    brick.health -= 1
    if brick.health == 1:
        brick.cracked = True
    if brick.health <= 0:
        brick.health = 0
        brick.active = False
        board.combo += 1
        board.score += COMBO_POINTS if board.combo > 1 else BRICK_POINTS
        powerups.maybe_spawn(board, brick, rng)


def _bounce_off_brick(ball: Ball, brick: Brick, rng):
    """Pick the bounce axis from where the ball was one frame earlier."""
    prev_x = ball.pos.x - ball.vel.x
    prev_y = ball.pos.y - ball.vel.y

    was_clear_x = prev_x + BALL_RADIUS <= brick.x or prev_x - BALL_RADIUS >= brick.right
    was_clear_y = prev_y + BALL_RADIUS <= brick.y or prev_y - BALL_RADIUS >= brick.bottom

    if was_clear_x and not was_clear_y:
        # came in through a side face
        ball.vel.x *= -1
        _register_side_bounce(ball, rng)
    elif was_clear_y and not was_clear_x:
        # top or bottom face
        ball.vel.y *= -1
        ball.vertical_hit_streak = 0
    else:
        # corner
        ball.vel.x *= -1
        ball.vel.y *= -1
        ball.vertical_hit_streak = 0


def collide_bricks(board: "GameBoard", ball: Ball, rng=None) -> Optional[Brick]:
    """Resolve the first active brick the ball overlaps, if any."""
    if rng is None:
        rng = random
    for brick in board.bricks:
        if not brick.active:
            continue
        if _overlaps(ball, brick):
            damage_brick(board, brick, rng)
            _bounce_off_brick(ball, brick, rng)
            return brick
    return None


def has_exited(ball: Ball) -> bool:
    return ball.pos.y > BOARD_HEIGHT


def step_ball(board: "GameBoard", ball: Ball, target_speed: float, rng=None) -> bool:
    """Advance one ball by one frame. Returns False once it fell off the board."""
    if rng is None:
        rng = random
    normalize_speed(ball, target_speed)
    integrate(ball)
    collide_walls(board, ball, rng)
    collide_paddle(board, ball)
    collide_bricks(board, ball, rng)
    return not has_exited(ball)


def step_balls(board: "GameBoard", rng=None):
    """Advance every ball and drop the ones that left through the bottom."""
    target_speed = BALL_SPEED * powerups.speed_multiplier(board)
    for ball in board.balls[:]:
        if not step_ball(board, ball, target_speed, rng):
            board.balls.remove(ball)
