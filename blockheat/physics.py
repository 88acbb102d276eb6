"""Ball movement, ball-to-ball collisions, gravity and block hits."""

from __future__ import annotations

import math

from .model import GameMode, GameState
from .stage import GRID_SIZE

GRAVITY_CONSTANT = 0.1
FALL_ACCEL = 0.02
LEFT_WALL = 0.5
RIGHT_WALL = 19.5
CEILING = 14.0
DROP_LINE = -17.0
SPLIT_SHOTS = 9
EXPLOSION_COLOR = [1.0, 0.3, 0.0, 1.0]


def pass_speed(vx: float, vy: float, dx: float, dy: float, r: float) -> tuple[float, float]:
    """Return the part of velocity (vx, vy) along the direction (dx, dy) of length r."""
    si = dy / r
    co = dx / r
    base = vx * co + vy * si
    return co * base, si * base


def leave_speed(vx: float, vy: float, dx: float, dy: float, r: float) -> tuple[float, float]:
    """Return the part of velocity (vx, vy) at right angles to (dx, dy) of length r."""
    si = dy / r
    co = dx / r
    base = vx * si - vy * co
    return si * base, -co * base


def _sign_toward(d: float) -> int:
    return (d < 0) - (d > 0)


def apply_gravity(state: GameState) -> None:
    """Set each ball's acceleration from the pull of every other active ball."""
    balls = state.balls
    for ball in balls:
        ball.accel[0] = 0.0
        ball.accel[1] = 0.0
    for i, first in enumerate(balls):
        for second in balls[i + 1:]:
            if not (first.active and second.active):
                continue
            dx = first.position[0] - second.position[0]
            dy = first.position[1] - second.position[1]
            rr = dx * dx + dy * dy
            if rr > 0.5:
                g = GRAVITY_CONSTANT / (rr + 1.0)
                gx = g * _sign_toward(dx)
                gy = g * _sign_toward(dy)
                first.accel[0] += gx
                first.accel[1] += gy
                second.accel[0] -= gx
                second.accel[1] -= gy


def collide_balls(state: GameState) -> None:
    """Bounce touching balls off each other and score the collisions."""
    balls = state.balls
    texts = state.collision_texts
    for i, first in enumerate(balls):
        for j in range(i + 1, len(balls)):
            second = balls[j]
            dx = first.position[0] - second.position[0]
            dy = first.position[1] - second.position[1]
            rr = dx * dx + dy * dy
            if (
                rr <= 1.0
                and rr != 0
                and not first.contact[j]
                and first.active
                and second.active
            ):
                state.start_text(texts, i)
                state.start_text(texts, j)
                texts[i].hitcount += 5
                texts[j].hitcount += 5
                first.point = (texts[i].hitcount + texts[j].hitcount) * (i + 1)
                state.ship.score += first.point
                first.contact[j] = True

                r = math.sqrt(rr)
                vp1 = pass_speed(first.speed[0], first.speed[1], dx, dy, r)
                vp2 = pass_speed(second.speed[0], second.speed[1], dx, dy, r)
                vl1 = leave_speed(first.speed[0], first.speed[1], dx, dy, r)
                vl2 = leave_speed(second.speed[0], second.speed[1], dx, dy, r)

                first.speed[0] = vl1[0] + vp2[0]
                first.speed[1] = vl1[1] + vp2[1]
                second.speed[0] = vl2[0] + vp1[0]
                second.speed[1] = vl2[1] + vp1[1]
                state.clamp_speed(first)
            elif rr > 1.0:
                first.contact[j] = False


def _reflects(block: int) -> bool:
    return block <= 11 or 14 <= block <= 20


def _cap_life(state: GameState) -> None:
    ship = state.ship
    ship.life = min(ship.life, 10 + ship.balls)


def _strike(state: GameState, index: int, x: int, y: int, block: int) -> None:
    """Apply the effect of ball ``index`` hitting ``block`` at cell (x, y)."""
    ship = state.ship
    ball = state.balls[index]
    if block <= 10:
        state.grid[y][x] -= index // 2 + 1
        if state.grid[y][x] <= 0:
            state.delete_block(x, y)
        state.score_hit(index, 10)
    elif 14 <= block <= 20:
        state.score_hit(index, (block - 13) * 10)
        state.grid[y][x] += 1
        if state.grid[y][x] == 21:
            state.grid[y][x] = 17
    elif block == 12:
        if ship.life > 0:
            ship.life += state.shoot(ball.position, ball.speed)
            _cap_life(state)
        state.delete_block(x, y)
        state.score_hit(index, 10)
    elif block == 13:
        if ship.life > 0:
            for k in range(SPLIT_SHOTS):
                angle = k * 6.28 / SPLIT_SHOTS
                ship.life += state.shoot(ball.position, (math.cos(angle), math.sin(angle)))
                _cap_life(state)
        state.delete_block(x, y)
        state.score_hit(index, 10)


def _neighbourhood(state: GameState, nx: int, ny: int) -> list[list[int]]:
    def cell(x: int, y: int) -> int:
        if 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE:
            return state.grid[y][x]
        if not 0 <= x < GRID_SIZE:
            return 11
        return 0

    return [[cell(nx + c - 1, ny + r - 1) for c in range(3)] for r in range(3)]


def _corner_hit(state: GameState, index: int, nx: int, ny: int, bx: int, by: int,
                fbx: float, fby: float, v: list[float]) -> None:
    ball = state.balls[index]
    m = _neighbourhood(state, nx, ny)
    right, left = bx > nx, bx < nx
    up, down = by > ny, by < ny

    flag1 = (
        (m[0][1] > 0 and m[1][2] > 0 and right and down)
        or (m[2][1] > 0 and m[1][0] > 0 and left and up)
        or (m[2][1] > 0 and m[1][2] > 0 and right and up)
        or (m[0][1] > 0 and m[1][0] > 0 and left and down)
    )
    flag2 = (
        (m[0][1] == 0 and m[1][2] == 0 and right and down)
        or (m[2][1] == 0 and m[1][0] == 0 and left and up)
    )
    flag3 = (
        (m[2][1] == 0 and m[1][2] == 0 and right and up)
        or (m[0][1] == 0 and m[1][0] == 0 and left and down)
    )
    flag4 = ((m[1][0] > 0 and left) or (m[1][2] > 0 and right)) and (
        m[0][1] == 0 or m[2][1] == 0
    )
    flag5 = ((m[0][1] > 0 and down) or (m[2][1] > 0 and up)) and (
        m[1][0] == 0 or m[1][2] == 0
    )

    if flag1:
        ball.speed[0] = -v[0]
        ball.speed[1] = -v[1]
        ball.position[0] = fbx
        ball.position[1] = fby
        state.debug = True
    elif flag2:
        ball.speed[1] = v[0]
        ball.speed[0] = v[1]
        ball.position[0] = fbx
        ball.position[1] = fby
    elif flag3:
        ball.speed[1] = -v[0]
        ball.speed[0] = -v[1]
        ball.position[0] = fbx
        ball.position[1] = fby
    elif flag4:
        ball.speed[1] = -v[1]
        ball.position[1] = fby
    elif flag5:
        ball.speed[0] = -v[0]
        ball.position[0] = fbx


def block_hit(state: GameState, x: float, y: float, bx: float, by: float, index: int) -> None:
    """Handle ball ``index`` moving from (bx, by) to (x, y) into the block grid."""
    nx, ny = int(x / 2.0), int(y)
    cbx, cby = int(bx / 2.0), int(by)
    state.debug = False
    if not (0 <= nx < GRID_SIZE and 0 <= ny < GRID_SIZE):
        return

    ball = state.balls[index]
    v = list(ball.speed)
    if state.hit_texts[index].flag == 2:
        ball.hitcount = 0

    block = state.grid[ny][nx]
    if cby != ny and cbx != nx and block > 0:
        if _reflects(block):
            _corner_hit(state, index, nx, ny, cbx, cby, bx, by, v)
        _strike(state, index, nx, ny, block)
    else:
        if cby != ny and 0 <= cbx < GRID_SIZE and state.grid[ny][cbx] > 0:
            side = state.grid[ny][cbx]
            if _reflects(side):
                ball.speed[1] = -v[1]
            _strike(state, index, cbx, ny, side)
            ball.position[1] = by

        if cbx != nx and 0 <= cby < GRID_SIZE and state.grid[cby][nx] > 0:
            side = state.grid[cby][nx]
            if _reflects(side):
                ball.speed[0] = -v[0]
                ball.hitcount += 1
            _strike(state, index, nx, cby, side)
            ball.position[0] = bx

    state.clamp_speed(ball)


def _reset_texts(state: GameState, index: int) -> None:
    state.collision_texts[index].flag = 0
    state.collision_texts[index].hitcount = 0


def move_balls(state: GameState) -> None:
    """Advance every active ball by one frame."""
    ship = state.ship
    if ship.life > 0:
        collide_balls(state)
        apply_gravity(state)

    for index, ball in enumerate(state.balls):
        if not ball.active:
            continue
        ball.time += 1
        if ball.time == 500:
            ball.speed[0] /= 2.0
            ball.speed[1] *= 2.0
        elif ball.time == 1000:
            ball.speed[0] *= 2.0
            ball.speed[1] /= 2.0
            ball.time = 0

        x, y = ball.position[0], ball.position[1]
        bx, by = x, y
        if state.gravity != 0:
            ball.speed[0] += ball.accel[0] * state.gravity
            ball.speed[1] += ball.accel[1] * state.gravity
        if ship.mode == GameMode.NORMAL and (ship.life <= -10 or ship.life > 0):
            ball.speed[1] -= FALL_ACCEL

        x += ball.speed[0]
        if x < LEFT_WALL or x > RIGHT_WALL:
            ball.speed[0] *= -1
            x = ball.position[0]
        else:
            ball.position[0] = x

        y += ball.speed[1]
        dx = x - ship.position[0]
        ship_y = ship.position[1]
        if y > CEILING:
            ball.speed[1] *= -1
            y = ball.position[1]
        elif (
            ship.mode == GameMode.NORMAL
            and ship.life > 0
            and abs(dx) < ship.hit_width / 1.7
            and ship_y - 2.0 < y < ship_y + 1.0
        ):
            ball.speed[1] = 1.0
            ball.speed[0] = 2.0 * dx / ship.hit_width
            ball.position[1] = ship_y + 1.0
            ball.point = ball.hitcount * ball.hitcount * (10 + index)
            ship.score += ball.point
            state.hit_texts[index].flag = 2
            _reset_texts(state, index)
        elif ship.mode == GameMode.DODGE and ship.life > 0 and y < state.bottom - 1.0:
            ball.speed[1] = 0.5
            ball.position[1] = state.bottom - 1.0
            ball.point = ball.hitcount * (ball.hitcount + 10) * (index + 1)
            ship.score += ball.point
            state.hit_texts[index].flag = 2
            _reset_texts(state, index)
        elif (
            ship.mode == GameMode.DODGE
            and ship.life > 0
            and abs(dx) < 0.5
            and ship_y - 0.25 < y < ship_y + 0.25
        ):
            ship.life = 0
        elif y < DROP_LINE:
            ball.flag = 0
            ship.life -= 1
            ball.hitcount = 0
            state.hit_texts[index].flag = 0
            _reset_texts(state, index)
        else:
            ball.position[1] = y

        block_hit(state, x, y, bx, by, index)


def start_explosion(state: GameState) -> None:
    """Burst every ball out of the paddle's position."""
    ship = state.ship
    for index, ball in enumerate(state.balls):
        ball.speed[0] = math.cos(index * 0.62) * (math.sin(index * 1.5) + 0.5)
        ball.speed[1] = math.sin(index * 0.62) * (math.cos(index * 1.5) + 0.5) + 0.4
        ball.position[0] = ship.position[0]
        ball.position[1] = ship.position[1]
        ball.diffuse = list(EXPLOSION_COLOR)
        ball.flag = 1