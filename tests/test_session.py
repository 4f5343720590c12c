import math

import pytest

from game.galaga.entities import Bullet, Enemy, EnemyBullet, Explosion
from game.galaga.session import GameSession, SessionPhase, raise_baseline, spawn_interval

FRAME = 1000 / 60


def make_session(**kwargs):
    """Running session with timed spawns and enemy fire switched off"""
    kwargs.setdefault("seed", 0)
    kwargs.setdefault("enemy_fire_rate", 0.0)
    s = GameSession(**kwargs)
    s.start()
    s.spawn_timer = 1e9
    return s


def parked_enemy(x, y):
    return Enemy(x=x, y=y, base_x=x, speed=0.0, amplitude=0.0, frequency=0.0)


def bullet_on_player(s):
    p = s.player
    return EnemyBullet(x=p.x + 10, y=p.y - 5, speed=0.0)


# ----------------------------
# Lifecycle
# ----------------------------

def test_new_session_layout():
    s = GameSession()
    assert s.phase is SessionPhase.IDLE
    assert not s.running
    assert s.player.x == 420 / 2 - 18
    assert s.player.y == 560 - 60
    assert (s.lives, s.score, s.difficulty) == (3, 0, 1.0)
    assert s.bullets == [] and s.enemies == [] and s.enemy_bullets == [] and s.explosions == []


def test_start_only_once():
    s = GameSession()
    assert s.start() is True
    assert s.start() is False
    assert s.phase is SessionPhase.RUNNING


def test_update_is_noop_before_start():
    s = GameSession(seed=1)
    s.update(FRAME)
    assert s.frames == 0
    assert s.enemies == []


def test_close_stops_updates():
    s = make_session()
    s.close()
    assert s.phase is SessionPhase.CLOSED
    s.update(FRAME)
    assert s.frames == 0


def test_close_on_idle_session_is_ignored():
    s = GameSession()
    s.close()
    assert s.phase is SessionPhase.IDLE


def test_bad_field_size_rejected():
    with pytest.raises(ValueError):
        GameSession(width=0)


# ----------------------------
# Player
# ----------------------------

@pytest.mark.parametrize("direction, expected", [("left", 10), ("right", 420 - 36 - 10)])
def test_player_clamped_under_held_input(direction, expected):
    s = make_session()
    setattr(s.input, direction, True)
    for _ in range(200):
        s.update(FRAME)
        assert 10 <= s.player.x <= 420 - 36 - 10
    assert s.player.x == expected


def test_move_to_clamps_extreme_pointer():
    s = make_session()
    s.move_to(-5000)
    assert s.player.x == 10
    s.move_to(5000)
    assert s.player.x == 374


def test_shoot_respects_cooldown():
    s = make_session()
    assert s.shoot() is True
    assert s.player.cooldown == 10
    assert s.shoot() is False
    assert len(s.bullets) == 1
    b = s.bullets[0]
    assert b.x == s.player.x + 36 / 2 - 2
    assert b.y == s.player.y - 10
    assert s.drain_sound_cues() == ["shoot"]
    assert s.sound_cues == []


def test_cooldown_decrements_once_per_frame_and_floors_at_zero():
    s = make_session()
    s.shoot()
    s.update(FRAME)
    assert s.player.cooldown == 9
    for _ in range(20):
        s.update(FRAME)
    assert s.player.cooldown == 0


# ----------------------------
# Spawning / difficulty
# ----------------------------

def test_spawn_interval_floor():
    assert spawn_interval(1) == 520
    assert spawn_interval(3) == 360
    assert spawn_interval(5) == 220
    assert spawn_interval(50) == 220


def test_baseline_is_monotonic_in_score():
    base = 1.0
    previous = base
    for score in range(0, 5000, 10):
        base = raise_baseline(base, score)
        assert base >= previous
        assert base >= 1 + score / 200
        previous = base
    # A lower score never pulls it back down
    assert raise_baseline(base, 0) == base


def test_first_frame_spawns_one_enemy_and_resets_timer():
    s = GameSession(seed=3, enemy_fire_rate=0.0)
    s.start()
    s.update(FRAME)
    assert len(s.enemies) == 1
    assert s.spawn_timer == spawn_interval(1.0)


def test_empty_field_gets_a_wave():
    s = make_session()
    s.update(FRAME)
    assert len(s.enemies) == 4
    for e in s.enemies:
        assert 20 <= e.base_x <= 420 - 20
        assert e.speed == pytest.approx(1.45)
        assert 30 <= e.amplitude <= 70


def test_enemy_weaves_around_anchor():
    s = make_session()
    e = Enemy(x=100, y=50, base_x=100, speed=2.0, amplitude=20.0, frequency=0.001, time=0.0)
    s.enemies = [e]
    s.update(500)
    assert e.time == 500
    assert e.y == 52
    assert e.x == pytest.approx(100 + math.sin(0.5) * 20)


def test_enemies_fire_when_rate_allows():
    s = make_session(enemy_fire_rate=1.0)
    s.enemies = [parked_enemy(100, 50)]
    s.update(FRAME)
    assert len(s.enemy_bullets) == 1
    b = s.enemy_bullets[0]
    assert b.x == 100 + 32 / 2 - 2
    assert b.speed == pytest.approx(5.3)


# ----------------------------
# Collisions
# ----------------------------

def test_bullet_kills_enemy_in_same_update():
    s = make_session()
    enemy = parked_enemy(100, 100)
    s.enemies = [enemy]
    s.bullets = [Bullet(x=110, y=115)]

    s.update(FRAME)

    assert s.enemies == []
    assert s.bullets == []
    assert s.score == 10
    assert s.kills == 1
    assert len(s.explosions) == 1
    assert (s.explosions[0].x, s.explosions[0].y) == (116, 111)
    assert s.base_difficulty == pytest.approx(1.05)
    assert s.difficulty == pytest.approx(1.05)


def test_one_bullet_kills_only_one_enemy():
    s = make_session()
    s.enemies = [parked_enemy(100, 100), parked_enemy(100, 100)]
    s.bullets = [Bullet(x=110, y=115)]
    s.update(FRAME)
    assert len(s.enemies) == 1
    assert s.score == 10


def test_enemy_leaving_bottom_is_free():
    s = make_session()
    s.enemies = [parked_enemy(100, 560 + 41), parked_enemy(200, 100)]
    s.update(FRAME)
    assert len(s.enemies) == 1
    assert s.lives == 3
    assert s.score == 0


def test_bullets_leave_the_field():
    s = make_session()
    s.enemies = [parked_enemy(300, 100)]
    s.bullets = [Bullet(x=50, y=-5)]
    s.enemy_bullets = [EnemyBullet(x=50, y=570, speed=5)]
    s.update(FRAME)
    assert s.bullets == []
    assert s.enemy_bullets == []


def test_enemy_bullet_hit_costs_exactly_one_life():
    s = make_session()
    s.enemies = [parked_enemy(300, 100)]
    s.enemy_bullets = [bullet_on_player(s)]

    s.update(FRAME)
    assert s.lives == 2
    assert s.hits == 1
    assert s.enemy_bullets == []
    assert len(s.explosions) == 1

    s.update(FRAME)
    assert s.lives == 2


def test_enemy_contact_is_a_hit_and_removes_enemy():
    s = make_session()
    p = s.player
    s.enemies = [parked_enemy(p.x, p.y), parked_enemy(300, 100)]
    s.update(FRAME)
    assert s.lives == 2
    assert len(s.enemies) == 1
    assert "boom" in s.drain_sound_cues()


def test_hit_eases_difficulty_without_lowering_baseline():
    s = make_session()
    s.score = 400
    s._raise_difficulty()
    assert s.base_difficulty == pytest.approx(3.0)

    s.enemies = [parked_enemy(300, 100)]
    s.enemy_bullets = [bullet_on_player(s)]
    s.update(FRAME)
    assert s.difficulty == pytest.approx(2.4)
    assert s.base_difficulty == pytest.approx(3.0)

    # The next kill climbs back to the baseline
    s.enemies = [parked_enemy(100, 100)]
    s.bullets = [Bullet(x=110, y=115)]
    s.update(FRAME)
    assert s.score == 410
    assert s.base_difficulty == pytest.approx(3.05)
    assert s.difficulty == pytest.approx(3.05)


def test_forgiveness_never_drops_below_one():
    s = make_session()
    s.enemies = [parked_enemy(300, 100)]
    s.enemy_bullets = [bullet_on_player(s)]
    s.update(FRAME)
    assert s.difficulty == 1.0


def test_last_life_ends_session_and_freezes_state():
    s = make_session(lives=1)
    s.enemies = [parked_enemy(300, 100)]
    s.enemy_bullets = [bullet_on_player(s), bullet_on_player(s)]

    s.update(FRAME)
    assert s.phase is SessionPhase.GAME_OVER
    assert not s.running
    assert s.lives == 0
    assert s.hits == 1

    before = s.info()
    clock = s.clock_ms
    enemies = [(e.x, e.y) for e in s.enemies]
    for _ in range(10):
        s.update(FRAME)
    assert s.info() == before
    assert s.clock_ms == clock
    assert [(e.x, e.y) for e in s.enemies] == enemies


def test_lives_never_negative_over_long_random_play():
    s = GameSession(seed=11, enemy_fire_rate=0.05)
    s.start()
    for i in range(5000):
        s.input.left = (i // 40) % 2 == 0
        s.input.right = not s.input.left
        if i % 7 == 0:
            s.shoot()
        s.update(FRAME)
        assert s.lives >= 0
        assert s.hits == 3 - s.lives
        assert 10 <= s.player.x <= 374
        if not s.running:
            break
    assert s.score % 10 == 0


def test_explosions_grow_then_vanish():
    s = make_session()
    s.enemies = [parked_enemy(300, 100)]
    s.explosions = [Explosion(x=10, y=10), Explosion(x=20, y=20, radius=17.5)]
    s.update(FRAME)
    assert len(s.explosions) == 1
    assert s.explosions[0].radius == pytest.approx(4.8)


def test_seeded_sessions_are_reproducible():
    a, b = GameSession(seed=5), GameSession(seed=5)
    a.start()
    b.start()
    for _ in range(300):
        a.update(FRAME)
        b.update(FRAME)
    assert a.info() == b.info()
    assert [(e.x, e.y) for e in a.enemies] == [(e.x, e.y) for e in b.enemies]
