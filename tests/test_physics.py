import math

import numpy as np
import pytest
from pygame import Vector2

import levels
import physics
import powerups
from config import BALL_SPEED, BOARD_WIDTH, BOARD_HEIGHT, BRICK_POINTS, COMBO_POINTS
from board import create_bricks
from entities import Brick, PowerUpCategory, PowerUpType
from conftest import ScriptedRandom


def make_brick(x=100, y=100, w=50, h=20, health=1):
    return Brick(x, y, w, h, (255, 0, 0), health)


def test_ball_moves_one_step_per_frame(board, rng):
    ball = board.new_ball(400, 300, 0, -6)
    assert physics.step_ball(board, ball, BALL_SPEED, rng)
    assert ball.pos == Vector2(400, 294)


def test_speed_renormalised_toward_target(board):
    ball = board.new_ball(400, 300, 0, -6)
    physics.normalize_speed(ball, BALL_SPEED * 2)
    assert ball.vel.length() == pytest.approx(12)


def test_small_speed_drift_is_left_alone(board):
    ball = board.new_ball(400, 300, 0, -6.05)
    physics.normalize_speed(ball, BALL_SPEED)
    assert ball.vel.y == pytest.approx(-6.05)


def test_launch_velocity_points_upward():
    for first in (0.0, 0.25, 0.5, 0.99):
        vel = physics.random_launch_velocity(ScriptedRandom([first, 0.2]))
        assert vel.y < 0
        assert vel.length() == pytest.approx(BALL_SPEED)


def test_paddle_centre_bounces_straight_up(board):
    ball = board.new_ball(board.paddle.center_x, 545, 0, 6)
    board.combo = 3
    assert physics.collide_paddle(board, ball)
    assert ball.vel.x == pytest.approx(0)
    assert ball.vel.y == pytest.approx(-6)
    assert ball.pos.y == board.paddle.y - 10
    assert board.combo == 0


def test_paddle_left_edge_sends_ball_left(board):
    ball = board.new_ball(board.paddle.x, 545, 0, 6)
    physics.collide_paddle(board, ball)
    assert ball.vel.x == pytest.approx(-BALL_SPEED)
    assert ball.vel.y < 0


def test_paddle_ignores_rising_ball(board):
    ball = board.new_ball(board.paddle.center_x, 545, 0, -6)
    assert not physics.collide_paddle(board, ball)
    assert ball.vel.y == -6


def test_side_wall_flips_horizontal(board, rng):
    ball = board.new_ball(5, 300, -3, -4)
    assert physics.collide_walls(board, ball, rng)
    assert ball.vel == Vector2(3, -4)
    assert ball.vertical_hit_streak == 1
    assert ball.wall_hit_count == 1


def test_top_wall_flips_vertical_and_resets_streak(board, rng):
    ball = board.new_ball(400, 5, 3, -4)
    ball.vertical_hit_streak = 3
    physics.collide_walls(board, ball, rng)
    assert ball.vel == Vector2(3, 4)
    assert ball.vertical_hit_streak == 0


def test_repeated_side_bounces_get_nudged(board):
    ball = board.new_ball(BOARD_WIDTH - 5, 300, 4, 0)
    ball.vertical_hit_streak = 4
    physics.collide_walls(board, ball, ScriptedRandom([0.9]))
    assert ball.vel.y == pytest.approx(0.5)
    assert ball.vertical_hit_streak == 0

    ball.pos.x = 5
    ball.vertical_hit_streak = 4
    physics.collide_walls(board, ball, ScriptedRandom([0.1]))
    assert ball.vel.y == pytest.approx(0.0)


def test_wall_loop_recovers_after_threshold(board):
    ball = board.new_ball(5, 300, -3, -4)
    ball.wall_hit_count = 250
    physics.collide_walls(board, ball, ScriptedRandom([0.5, 0.9]))
    assert ball.pos == Vector2(BOARD_WIDTH / 2, BOARD_HEIGHT / 2)
    assert ball.wall_hit_count == 0
    assert ball.vel.y == pytest.approx(-BALL_SPEED)
    slow = powerups.active_effect(board, PowerUpCategory.SPEED)
    assert slow.type == PowerUpType.SLOW
    assert slow.expires_at == board.now + 2000


def test_wall_hit_at_threshold_does_not_recover(board, rng):
    ball = board.new_ball(5, 300, -3, -4)
    ball.wall_hit_count = 249
    physics.collide_walls(board, ball, rng)
    assert ball.wall_hit_count == 250
    assert ball.pos.x == 5


def test_two_hit_brick_cracks_then_breaks(board, rng):
    brick = make_brick(health=2)
    physics.damage_brick(board, brick, rng)
    assert brick.active and brick.cracked and brick.health == 1
    assert board.score == 0

    physics.damage_brick(board, brick, rng)
    assert not brick.active
    assert board.score == BRICK_POINTS
    assert board.combo == 1


def test_combo_scores_more_after_first_brick(board, rng):
    for _ in range(3):
        physics.damage_brick(board, make_brick(), rng)
    assert board.score == BRICK_POINTS + 2 * COMBO_POINTS
    assert board.combo == 3


def test_broken_brick_can_drop_power_up(board):
    brick = make_brick()
    physics.damage_brick(board, brick, ScriptedRandom([0.1], choices=[5]))
    assert len(board.powerups) == 1
    item = board.powerups[0]
    assert item.type == PowerUpType.FIRE
    assert (item.x, item.y) == (brick.x + brick.width / 2, brick.y)


def test_no_drop_when_roll_misses(board):
    physics.damage_brick(board, make_brick(), ScriptedRandom([0.25]))
    assert board.powerups == []


def test_side_face_hit_reverses_horizontal(board, rng):
    brick = make_brick()
    board.bricks = [brick]
    ball = board.new_ball(95, 110, 6, 0)
    assert physics.collide_bricks(board, ball, rng) is brick
    assert ball.vel == Vector2(-6, 0)
    assert ball.vertical_hit_streak == 1


def test_top_face_hit_reverses_vertical(board, rng):
    brick = make_brick()
    board.bricks = [brick]
    ball = board.new_ball(125, 92, 0, 6)
    physics.collide_bricks(board, ball, rng)
    assert ball.vel == Vector2(0, -6)


def test_only_first_overlapping_brick_is_hit(board, rng):
    first, second = make_brick(x=100), make_brick(x=100, y=115)
    board.bricks = [first, second]
    ball = board.new_ball(125, 112, 0, 1)
    physics.collide_bricks(board, ball, rng)
    assert not first.active
    assert second.active


def test_ball_falling_out_is_removed(board, rng):
    board.new_ball(400, 596, 0, 6)
    keeper = board.new_ball(400, 300, 0, -6)
    physics.step_balls(board, rng)
    assert board.balls == [keeper]


def test_speed_effect_sets_target(board, rng):
    powerups.collect(board, PowerUpType.DOUBLE)
    ball = board.new_ball(400, 300, 0, -6)
    physics.step_balls(board, rng)
    assert ball.vel.length() == pytest.approx(12)
    assert math.isclose(ball.pos.y, 288)


def test_corner_hit_reverses_both_axes(board, rng):
    brick = make_brick(health=2)
    board.bricks = [brick]
    ball = board.new_ball(93, 93, 5, 5)
    ball.vertical_hit_streak = 3
    assert physics.collide_bricks(board, ball, rng) is brick
    assert ball.vel == Vector2(-5, -5)
    assert ball.vertical_hit_streak == 0


def test_bottom_face_hit_sends_ball_back_down(board, rng):
    brick = make_brick(health=2)
    board.bricks = [brick]
    ball = board.new_ball(125, 128, 0, -6)
    physics.collide_bricks(board, ball, rng)
    assert ball.vel == Vector2(0, 6)
    assert brick.health == 1


def test_repeated_brick_side_hits_get_nudged(board):
    brick = make_brick(health=2)
    board.bricks = [brick]
    ball = board.new_ball(95, 110, 6, 0)
    ball.vertical_hit_streak = 4
    physics.collide_bricks(board, ball, ScriptedRandom([0.9]))
    assert ball.vel.x == -6
    assert ball.vel.y == pytest.approx(0.5)
    assert ball.vertical_hit_streak == 0


def test_two_hit_brick_from_catalog(board, rng, monkeypatch):
    monkeypatch.setattr(levels, "get_layout", lambda index: np.array([[1, 1], [0, 2]]))
    board.bricks = create_bricks(0)
    assert [b.health for b in board.bricks] == [1, 1, 2]
    target = board.bricks[2]
    below = (target.x + target.width / 2, target.bottom + 14)

    ball = board.new_ball(*below, 0, -6)
    assert physics.step_ball(board, ball, BALL_SPEED, rng)
    assert target.active and target.cracked and target.health == 1
    assert ball.vel.y > 0
    assert board.score == 0

    ball.pos.update(below)
    ball.vel.update(0, -6)
    physics.step_ball(board, ball, BALL_SPEED, rng)
    assert not target.active
    assert board.score == BRICK_POINTS
    assert board.remaining_bricks() == 2
