"""
GameSession - one run of the mini arcade shooter
-------------------------------------------------
- Fixed 420x560 play field, y grows downward
- Player moves horizontally and fires upward (with cooldown)
- Enemies descend in a sinusoidal weave and fire back at random
- Spawn pacing and enemy stats scale with a score-driven difficulty
- Three lives; a hit eases difficulty off, the last hit ends the session

The session is a plain object stepped by whoever owns the frame loop
(the arcade window, the gymnasium env or a test). Nothing here touches a
display or an audio device: sound effects are queued as cues and the
renderer reads state through ``game.galaga.render``.
"""

from __future__ import annotations

import math
import random
from enum import Enum
from typing import List, Optional, Dict, Any

from .utils import clamp, rects_intersect
from .entities import Player, Bullet, Enemy, EnemyBullet, Explosion, InputIntent


class SessionPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"
    CLOSED = "closed"


def raise_baseline(prior: float, score: int) -> float:
    """Score-derived difficulty baseline; never moves down"""
    return max(prior, 1 + score / 200)


def spawn_interval(difficulty: float) -> float:
    """Milliseconds between timed enemy spawns"""
    return max(600 - difficulty * 80, 220)


class GameSession:
    """Simulation state and per-frame stepping for a single session"""

    def __init__(
        self,
        width: int = 420,
        height: int = 560,
        seed: Optional[int] = None,
        lives: int = 3,
        margin: float = 10.0,
        wave_size: int = 4,
        kill_score: int = 10,
        shoot_cooldown_frames: int = 10,
        enemy_fire_rate: float = 0.002,  # per enemy per frame, scaled by difficulty
        hit_forgiveness: float = 0.6,
        explosion_growth: float = 0.8,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Play field must have a positive size, got {width}x{height}")
        assert lives > 0, "A session needs at least one life."

        # Arena
        self.width = width
        self.height = height
        self.margin = margin

        # Gameplay config
        self.wave_size = wave_size
        self.kill_score = kill_score
        self.shoot_cooldown_frames = shoot_cooldown_frames
        self.enemy_fire_rate = enemy_fire_rate
        self.hit_forgiveness = hit_forgiveness
        self.explosion_growth = explosion_growth

        self.rng = random.Random(seed)
        self.phase = SessionPhase.IDLE

        # World state
        self.player = Player(x=0.0, y=height - 60.0)
        self.player.x = width / 2 - self.player.width / 2
        self.input = InputIntent()
        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.enemy_bullets: List[EnemyBullet] = []
        self.explosions: List[Explosion] = []

        # Scoring / pacing
        self.score = 0
        self.lives = lives
        self.max_lives = lives
        self.base_difficulty = 1.0
        self.difficulty = 1.0
        self.spawn_timer = 0.0
        self.clock_ms = 0.0

        # Counters for harnesses
        self.kills = 0
        self.hits = 0
        self.frames = 0

        self.sound_cues: List[str] = []

    # ----------------------------
    # Lifecycle
    # ----------------------------

    @property
    def running(self) -> bool:
        return self.phase is SessionPhase.RUNNING

    def start(self) -> bool:
        """Enter the running phase. Only an idle session can start."""
        if self.phase is not SessionPhase.IDLE:
            return False
        self.phase = SessionPhase.RUNNING
        return True

    def close(self):
        if self.phase is SessionPhase.IDLE:
            return
        self.phase = SessionPhase.CLOSED
        self.input = InputIntent()

    # ----------------------------
    # Player actions
    # ----------------------------

    def shoot(self) -> bool:
        if not self.running or self.player.cooldown > 0:
            return False

        p = self.player
        self.bullets.append(Bullet(x=p.x + p.width / 2 - 2, y=p.y - 10))
        p.cooldown = self.shoot_cooldown_frames
        self.sound_cues.append("shoot")
        return True

    def move_to(self, center_x: float):
        """Put the player's centre at ``center_x`` (pointer steering)"""
        if not self.running:
            return
        self.player.x = self._clamp_player_x(center_x - self.player.width / 2)

    def drain_sound_cues(self) -> List[str]:
        cues, self.sound_cues = self.sound_cues, []
        return cues

    # ----------------------------
    # Frame step
    # ----------------------------

    def update(self, dt: float):
        """Advance the simulation by ``dt`` milliseconds"""
        if not self.running:
            return

        self.frames += 1
        self.clock_ms += dt

        self._update_player()
        self._spawn_logic(dt)
        self._update_enemies(dt)
        self._update_bullets()

        self._handle_collisions()
        if not self.running:
            return

        self._update_explosions()

    def _clamp_player_x(self, x: float) -> float:
        return clamp(x, self.margin, self.width - self.player.width - self.margin)

    def _update_player(self):
        p = self.player
        p.cooldown = max(0, p.cooldown - 1)

        if self.input.left:
            p.x -= p.speed
        if self.input.right:
            p.x += p.speed
        p.x = self._clamp_player_x(p.x)

    def _spawn_logic(self, dt: float):
        self.spawn_timer -= dt
        if self.spawn_timer <= 0:
            self._spawn_enemy()
            self.spawn_timer = spawn_interval(self.difficulty)

        # Never leave the field empty
        if not self.enemies:
            for _ in range(self.wave_size):
                self._spawn_enemy()

    def _spawn_enemy(self):
        rng = self.rng
        x = rng.random() * (self.width - 40) + 20
        self.enemies.append(Enemy(
            x=x,
            y=-40.0,
            base_x=x,
            speed=1 + self.difficulty * 0.45,
            amplitude=30 + rng.random() * 40,
            frequency=0.002 + rng.random() * 0.002 * self.difficulty,
            time=rng.random() * 1000,
        ))

    def _update_enemies(self, dt: float):
        for e in self.enemies:
            e.time += dt
            e.y += e.speed
            e.x = e.base_x + math.sin(e.time * e.frequency) * e.amplitude

            if self.rng.random() < self.enemy_fire_rate * self.difficulty:
                self.enemy_bullets.append(EnemyBullet(
                    x=e.x + e.width / 2 - 2,
                    y=e.y + e.height,
                    speed=5 + self.difficulty * 0.3,
                ))

    def _update_bullets(self):
        for b in self.bullets:
            b.y -= b.speed
        for b in self.enemy_bullets:
            b.y += b.speed

    def _update_explosions(self):
        for ex in self.explosions:
            ex.radius += self.explosion_growth
        self.explosions = [ex for ex in self.explosions if ex.radius < ex.max_radius]

    # ----------------------------
    # Collisions
    # ----------------------------

    def _handle_collisions(self):
        # Mark pass: flag everything that leaves this frame
        player_rect = self.player.rect()

        for e in self.enemies:
            if not self.running:
                break

            if e.y > self.height + 40:
                e.alive = False
                continue

            enemy_rect = e.rect()
            for b in self.bullets:
                if b.alive and rects_intersect(b.rect(), enemy_rect):
                    b.alive = False
                    e.alive = False
                    self._add_explosion(*e.center())
                    self.score += self.kill_score
                    self.kills += 1
                    self._raise_difficulty()
                    break

            if not e.alive:
                continue

            if rects_intersect(enemy_rect, player_rect):
                e.alive = False
                self._add_explosion(*e.center())
                self._handle_player_hit()

        for b in self.enemy_bullets:
            if not self.running:
                break
            if rects_intersect(b.rect(), player_rect):
                b.alive = False
                self._add_explosion(self.player.x + self.player.width / 2, self.player.y)
                self._handle_player_hit()
            elif b.y >= self.height + 10:
                b.alive = False

        for b in self.bullets:
            if b.alive and b.y + b.height <= 0:
                b.alive = False

        # Compact pass
        self.enemies = [e for e in self.enemies if e.alive]
        self.bullets = [b for b in self.bullets if b.alive]
        self.enemy_bullets = [b for b in self.enemy_bullets if b.alive]

    def _add_explosion(self, x: float, y: float):
        self.explosions.append(Explosion(x=x, y=y))
        self.sound_cues.append("boom")

    def _raise_difficulty(self):
        self.base_difficulty = raise_baseline(self.base_difficulty, self.score)
        self.difficulty = max(self.difficulty, self.base_difficulty)

    def _handle_player_hit(self):
        if not self.running:
            return

        self.lives -= 1
        self.hits += 1
        if self.lives <= 0:
            self.lives = 0
            self.phase = SessionPhase.GAME_OVER
        else:
            # Ease off right after damage; kills climb back toward baseline
            self.difficulty = max(1.0, self.base_difficulty - self.hit_forgiveness)

    # ----------------------------
    # Info
    # ----------------------------

    def info(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "score": self.score,
            "lives": self.lives,
            "difficulty": self.difficulty,
            "base_difficulty": self.base_difficulty,
            "kills": self.kills,
            "hits": self.hits,
            "num_enemies": len(self.enemies),
            "num_bullets": len(self.bullets),
            "num_enemy_bullets": len(self.enemy_bullets),
            "frame": self.frames,
        }
