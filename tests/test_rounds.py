import pytest

import levels
import powerups
import rounds
from board import GameBoard, RoundStatus
from config import BALL_SPEED, FIRE_SHOTS
from entities import PowerUpCategory, PowerUpType
from conftest import ScriptedRandom


@pytest.fixture
def waiting(board):
    rounds.reset_ball_and_paddle(board)
    return board


def test_reset_puts_ball_on_centred_paddle(waiting):
    assert waiting.status == RoundStatus.PRE_LAUNCH
    assert len(waiting.balls) == 1
    ball = waiting.balls[0]
    assert (ball.pos.x, ball.pos.y) == waiting.resting_ball_position()
    assert ball.vel.length() == 0


def test_launch_starts_round_once(waiting, rng):
    assert rounds.launch(waiting, rng)
    assert waiting.status == RoundStatus.ACTIVE
    assert waiting.balls[0].vel.y < 0
    assert not rounds.launch(waiting, rng)


def test_fire_adds_ball_and_spends_shot(waiting, rng):
    rounds.launch(waiting, rng)
    powerups.collect(waiting, PowerUpType.FIRE)
    assert rounds.fire(waiting)
    assert len(waiting.balls) == 2
    shot = waiting.balls[-1]
    assert (shot.vel.x, shot.vel.y) == (0, -BALL_SPEED)
    assert powerups.active_effect(waiting, PowerUpCategory.GUN).shots_remaining == FIRE_SHOTS - 1


def test_fire_needs_gun_and_shots(waiting, rng):
    assert not rounds.fire(waiting)          # not launched yet
    rounds.launch(waiting, rng)
    assert not rounds.fire(waiting)          # no gun
    powerups.collect(waiting, PowerUpType.FIRE)
    powerups.active_effect(waiting, PowerUpCategory.GUN).shots_remaining = 0
    assert not rounds.fire(waiting)


def test_losing_last_ball_costs_a_life(waiting, rng):
    rounds.launch(waiting, rng)
    powerups.collect(waiting, PowerUpType.BIG)
    waiting.combo = 4
    waiting.balls = []
    assert rounds.handle_ball_loss(waiting)
    assert waiting.lives == 2
    assert waiting.status == RoundStatus.PRE_LAUNCH
    assert len(waiting.balls) == 1
    assert waiting.active_powerups == []
    assert waiting.combo == 0


def test_losing_final_life_ends_game(waiting, rng):
    waiting.lives = 1
    waiting.score = 120
    rounds.launch(waiting, rng)
    waiting.balls = []
    rounds.handle_ball_loss(waiting)
    assert waiting.status == RoundStatus.ROUND_OVER
    assert waiting.outcome.score == 120
    assert not waiting.outcome.won


def test_ball_loss_ignored_while_balls_remain(waiting, rng):
    rounds.launch(waiting, rng)
    assert not rounds.handle_ball_loss(waiting)
    assert waiting.lives == 3


def test_sequential_levels_use_their_own_layout():
    assert rounds.next_layout_index(1) == 1
    assert rounds.next_layout_index(5) == 5


def test_later_levels_draw_from_random_pool():
    rng = ScriptedRandom(randints=[17])
    assert rounds.next_layout_index(6, rng) == 17
    assert rng.randint_calls == [(5, 24)]


def test_random_pool_clamped_to_catalog():
    rng = ScriptedRandom()
    rounds.next_layout_index(9, rng, count=8)
    assert rng.randint_calls == [(5, 7)]


def test_catalog_exhaustion_returns_none():
    assert rounds.next_layout_index(5, count=5) is None
    assert rounds.next_layout_index(6, ScriptedRandom(), count=5) is None


def test_level_clear_loads_next_layout(waiting, rng):
    waiting.score = 50
    assert rounds.handle_level_clear(waiting, rng)
    assert waiting.level == 1
    assert waiting.layout_index == 1
    assert waiting.remaining_bricks() == levels.brick_count(levels.get_layout(1))
    assert waiting.status == RoundStatus.PRE_LAUNCH
    assert waiting.message == "Level 2"
    assert waiting.score == 50


def test_level_clear_waits_for_last_brick(rng):
    board = GameBoard()
    rounds.reset_ball_and_paddle(board)
    assert not rounds.handle_level_clear(board, rng)
    assert board.level == 0


def test_running_out_of_levels_is_a_win(waiting, rng, monkeypatch):
    monkeypatch.setattr(levels, "level_count", lambda: 1)
    waiting.score = 300
    rounds.handle_level_clear(waiting, rng)
    assert waiting.status == RoundStatus.ROUND_OVER
    assert waiting.outcome.won
    assert waiting.outcome.score == 300


@pytest.mark.parametrize("value, expected", [("1", 1), (" 7 ", 7), (25, 25)])
def test_parse_level_number(value, expected):
    assert rounds.parse_level_number(value) == expected


@pytest.mark.parametrize("value", ["0", "26", "abc", "", "-3", "2.5"])
def test_parse_level_number_rejects(value):
    with pytest.raises(rounds.LevelJumpError, match="between 1 and 25"):
        rounds.parse_level_number(value)


def test_jump_to_level(waiting):
    waiting.score = 80
    assert rounds.jump_to_level(waiting, "5") == 5
    assert waiting.level == 4
    assert waiting.layout_index == 4
    assert waiting.status == RoundStatus.PRE_LAUNCH
    assert waiting.message == "Jump to Level 5"
    assert waiting.score == 80


def test_bad_jump_leaves_board_alone(waiting):
    before = [b.x for b in waiting.bricks]
    with pytest.raises(rounds.LevelJumpError):
        rounds.jump_to_level(waiting, "99")
    assert waiting.level == 0
    assert [b.x for b in waiting.bricks] == before


def test_jump_after_game_over_rejected(waiting, rng):
    waiting.lives = 1
    rounds.launch(waiting, rng)
    waiting.balls = []
    rounds.handle_ball_loss(waiting)
    with pytest.raises(rounds.LevelJumpError):
        rounds.jump_to_level(waiting, "2")
