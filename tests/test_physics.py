import pytest

from blockheat.model import GameMode, GameState
from blockheat.physics import (
    apply_gravity,
    block_hit,
    collide_balls,
    leave_speed,
    move_balls,
    pass_speed,
    start_explosion,
)


def _activate(state, index, position, speed):
    ball = state.balls[index]
    ball.flag = 1
    ball.position = [float(position[0]), float(position[1]), 0.0]
    ball.speed = [float(speed[0]), float(speed[1]), 0.0]
    ball.contact = [False] * 10
    return ball


def _empty_state(mode=GameMode.NORMAL):
    state = GameState(mode)
    state.grid = [[0] * 10 for _ in range(10)]
    state.blocks = 0
    return state


@pytest.mark.parametrize(
    "vx, vy, dx, dy",
    [(0.3, 0.4, 1.0, 0.0), (-0.2, 0.7, 0.6, 0.8), (0.5, -0.5, -0.3, 0.4)],
)
def test_pass_and_leave_speed_sum_to_velocity(vx, vy, dx, dy):
    r = (dx * dx + dy * dy) ** 0.5
    px, py = pass_speed(vx, vy, dx, dy, r)
    lx, ly = leave_speed(vx, vy, dx, dy, r)
    assert px + lx == pytest.approx(vx)
    assert py + ly == pytest.approx(vy)
    assert px * lx + py * ly == pytest.approx(0.0, abs=1e-12)


def test_pass_speed_along_axis():
    assert pass_speed(0.3, 0.4, 1.0, 0.0, 1.0) == pytest.approx((0.3, 0.0))
    assert leave_speed(0.3, 0.4, 1.0, 0.0, 1.0) == pytest.approx((0.0, 0.4))


def test_gravity_is_equal_and_opposite():
    state = _empty_state()
    _activate(state, 0, (0.0, 0.0), (0, 0))
    _activate(state, 1, (2.0, 0.0), (0, 0))
    apply_gravity(state)
    a0, a1 = state.balls[0].accel, state.balls[1].accel
    assert a0[0] > 0
    assert a0[0] == pytest.approx(-a1[0])
    assert a0[1] == 0.0 and a1[1] == 0.0
    assert state.balls[2].accel[:2] == [0.0, 0.0]


def test_gravity_ignores_close_balls():
    state = _empty_state()
    _activate(state, 0, (0.0, 0.0), (0, 0))
    _activate(state, 1, (0.5, 0.0), (0, 0))
    apply_gravity(state)
    assert state.balls[0].accel[:2] == [0.0, 0.0]
    assert state.balls[1].accel[:2] == [0.0, 0.0]


def test_head_on_collision_swaps_speeds_and_scores():
    state = _empty_state()
    first = _activate(state, 0, (5.0, 5.0), (0.3, 0.0))
    second = _activate(state, 1, (5.8, 5.0), (-0.3, 0.0))
    collide_balls(state)
    assert first.speed[0] == pytest.approx(-0.3)
    assert second.speed[0] == pytest.approx(0.3)
    assert first.contact[1] is True
    assert state.collision_texts[0].flag == 1
    assert state.collision_texts[1].flag == 1
    assert state.ship.score == first.point
    assert first.point > 0


def test_collision_not_repeated_while_touching():
    state = _empty_state()
    first = _activate(state, 0, (5.0, 5.0), (0.3, 0.0))
    _activate(state, 1, (5.8, 5.0), (-0.3, 0.0))
    collide_balls(state)
    score = state.ship.score
    speed = list(first.speed)
    collide_balls(state)
    assert state.ship.score == score
    assert first.speed == speed


def test_contact_cleared_when_apart():
    state = _empty_state()
    first = _activate(state, 0, (1.0, 1.0), (0, 0))
    _activate(state, 1, (5.0, 1.0), (0, 0))
    first.contact[1] = True
    collide_balls(state)
    assert first.contact[1] is False


def test_block_hit_from_below_destroys_block():
    state = _empty_state()
    state.grid[5][3] = 1
    state.blocks = 1
    ball = _activate(state, 0, (7.0, 5.2), (0.0, 0.5))
    block_hit(state, 7.0, 5.2, 7.0, 4.5, 0)
    assert state.grid[5][3] == 0
    assert state.blocks == 0
    assert ball.speed[1] == pytest.approx(-0.5)
    assert ball.position[1] == pytest.approx(4.5)
    assert ball.point == 10
    assert state.ship.score == 10
    assert state.hit_texts[0].flag == 1


def test_block_hit_multi_strength_block_loses_one():
    state = _empty_state()
    state.grid[5][3] = 3
    state.blocks = 1
    _activate(state, 0, (7.0, 5.2), (0.0, 0.5))
    block_hit(state, 7.0, 5.2, 7.0, 4.5, 0)
    assert state.grid[5][3] == 2
    assert state.blocks == 1


@pytest.mark.parametrize("block, after", [(14, 15), (20, 17)])
def test_bonus_block_cycles(block, after):
    state = _empty_state()
    state.grid[5][3] = block
    _activate(state, 0, (7.0, 5.2), (0.0, 0.5))
    block_hit(state, 7.0, 5.2, 7.0, 4.5, 0)
    assert state.grid[5][3] == after
    assert state.ship.score == (block - 13) * 10


def test_wall_block_reflects_and_stays():
    state = _empty_state()
    state.grid[5][3] = 11
    ball = _activate(state, 0, (7.0, 5.2), (0.0, 0.5))
    block_hit(state, 7.0, 5.2, 7.0, 4.5, 0)
    assert state.grid[5][3] == 11
    assert ball.speed[1] == pytest.approx(-0.5)
    assert state.ship.score == 0


def test_block_12_launches_extra_ball():
    state = _empty_state()
    state.grid[5][3] = 12
    state.blocks = 1
    _activate(state, 0, (7.0, 5.2), (0.0, 0.5))
    life = state.ship.life
    block_hit(state, 7.0, 5.2, 7.0, 4.5, 0)
    assert state.grid[5][3] == 0
    assert state.blocks == 0
    assert state.ship.life == life + 1
    assert sum(b.active for b in state.balls) == 2


def test_block_13_fills_free_balls():
    state = _empty_state()
    state.grid[5][3] = 13
    state.blocks = 1
    _activate(state, 0, (7.0, 5.2), (0.0, 0.5))
    life = state.ship.life
    block_hit(state, 7.0, 5.2, 7.0, 4.5, 0)
    assert all(b.active for b in state.balls)
    assert state.ship.life == min(life + 9, 10 + state.ship.balls)
    assert state.grid[5][3] == 0


def test_corner_hit_on_isolated_block_swaps_axes():
    state = _empty_state()
    state.grid[5][3] = 1
    state.blocks = 1
    ball = _activate(state, 0, (7.5, 5.2), (-0.5, 0.5))
    block_hit(state, 7.5, 5.2, 8.5, 4.5, 0)
    assert ball.speed[:2] == pytest.approx([0.5, -0.5])
    assert ball.position[:2] == pytest.approx([8.5, 4.5])
    assert state.grid[5][3] == 0


def test_block_hit_clamps_speed():
    state = _empty_state()
    ball = _activate(state, 0, (7.0, 5.2), (2.0, -2.0))
    block_hit(state, 7.0, 5.2, 7.0, 5.1, 0)
    assert ball.speed[0] == pytest.approx(state.vmax())
    assert ball.speed[1] == pytest.approx(-state.vmax())


def test_block_hit_outside_grid_changes_nothing():
    state = _empty_state()
    ball = _activate(state, 0, (7.0, -3.0), (2.0, -2.0))
    block_hit(state, 7.0, -3.0, 7.0, -2.5, 0)
    assert ball.speed[:2] == [2.0, -2.0]


def test_ball_falls_off_bottom():
    state = _empty_state()
    ball = _activate(state, 0, (10.0, -16.9), (0.0, -0.5))
    life = state.ship.life
    move_balls(state)
    assert ball.flag == 0
    assert state.ship.life == life - 1


def test_paddle_returns_ball():
    state = _empty_state()
    ship_y = state.ship.position[1]
    ball = _activate(state, 0, (state.ship.position[0], ship_y + 0.5), (0.0, -0.3))
    move_balls(state)
    assert ball.speed[1] == 1.0
    assert ball.speed[0] == pytest.approx(0.0)
    assert ball.position[1] == pytest.approx(ship_y + 1.0)
    assert state.hit_texts[0].flag == 2


def test_side_wall_bounce():
    state = _empty_state()
    ball = _activate(state, 0, (19.4, 5.0), (0.3, 0.0))
    move_balls(state)
    assert ball.speed[0] == pytest.approx(-0.3)
    assert ball.position[0] == pytest.approx(19.4)


def test_ceiling_bounce():
    state = _empty_state()
    ball = _activate(state, 0, (5.0, 13.9), (0.0, 0.5))
    move_balls(state)
    assert ball.speed[1] < 0
    assert ball.position[1] == pytest.approx(13.9)


def test_speed_changes_at_time_500():
    state = _empty_state()
    ball = _activate(state, 0, (5.0, 12.0), (0.4, 0.2))
    ball.time = 499
    move_balls(state)
    assert ball.speed[0] == pytest.approx(0.2)
    assert ball.time == 500


def test_dodge_mode_direct_hit_kills():
    state = _empty_state(GameMode.DODGE)
    sx, sy = state.ship.position[0], state.ship.position[1]
    _activate(state, 0, (sx, sy - 0.1), (0.0, 0.0))
    move_balls(state)
    assert state.ship.life == 0


def test_dodge_mode_floor_bounce():
    state = _empty_state(GameMode.DODGE)
    ball = _activate(state, 0, (5.0, state.bottom - 0.8), (0.0, -0.5))
    move_balls(state)
    assert ball.speed[1] == 0.5
    assert ball.position[1] == pytest.approx(state.bottom - 1.0)
    assert state.hit_texts[0].flag == 2


def test_explosion_starts_all_balls_at_ship():
    state = _empty_state()
    state.ship.position = [4.0, -3.0, 0.0]
    start_explosion(state)
    assert all(b.active for b in state.balls)
    assert all(b.position[:2] == [4.0, -3.0] for b in state.balls)
    assert state.balls[0].speed[:2] == pytest.approx([0.5, 0.4])
    assert state.balls[3].diffuse == [1.0, 0.3, 0.0, 1.0]