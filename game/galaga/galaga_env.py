"""
GalagaEnv - the mini galaga session behind a Gymnasium API
----------------------------------------------------------
- Steps a GameSession at a fixed 60 FPS frame time
- MultiDiscrete action space: [move(3), shoot(2)]
- Vector observation: player state + K nearest enemies + M nearest enemy bullets
- Reward: +1 per kill, -1 per hit taken
- Terminates on game over, truncates after max_steps

Used for headless play-testing and for training scripted agents in rl/.

Quick test:
    python -m game.galaga.galaga_env
"""

from __future__ import annotations

from typing import Optional, Dict, Any, List

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .utils import clamp, seed_everything
from .session import GameSession, SessionPhase


class GalagaEnv(gym.Env):
    """Gymnasium wrapper around a single GameSession"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 420,
        height: int = 560,
        dt: float = 1000 / 60,  # ms per frame
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 4,
        m_bullets: int = 3,
        r_kill: float = 1.0,
        r_hit: float = 1.0,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets
        self.r_kill = r_kill
        self.r_hit = r_hit

        # move: 0 stay, 1 left, 2 right
        # shoot: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player: x(1) cooldown(1) lives(1) difficulty(1)
        # Each enemy: rel pos(2)
        # Each enemy bullet: rel pos(2)
        obs_dim = 4 + self.k_enemies * 2 + self.m_bullets * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.session: GameSession = None  # type: ignore
        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        # Derive the session seed from the env RNG so reset(seed=...) is reproducible
        session_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = GameSession(width=self.width, height=self.height, seed=session_seed)
        self.session.start()
        self._step_count = 0

        if self._window is not None:
            self._window.controller.session = self.session

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, shoot = int(action[0]), int(action[1])
        s = self.session

        kills_before, hits_before = s.kills, s.hits

        s.input.left = move == 1
        s.input.right = move == 2
        if shoot:
            s.shoot()

        s.update(self.dt)
        s.drain_sound_cues()

        reward = self.r_kill * (s.kills - kills_before) - self.r_hit * (s.hits - hits_before)

        terminated = s.phase is SessionPhase.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        p = s.player
        pcx = p.x + p.width / 2
        pcy = p.y + p.height / 2

        obs_parts: List[float] = [
            (pcx / self.width) * 2 - 1,
            clamp(p.cooldown / max(1, s.shoot_cooldown_frames), 0, 1) * 2 - 1,
            (s.lives / s.max_lives) * 2 - 1,
            clamp((s.difficulty - 1) / 4, 0, 1) * 2 - 1,
        ]

        def nearest(items, count):
            centers = [(it.x + it.width / 2, it.y + it.height / 2) for it in items]
            centers.sort(key=lambda c: (c[0] - pcx) ** 2 + (c[1] - pcy) ** 2)
            parts = []
            for i in range(count):
                if i < len(centers):
                    cx, cy = centers[i]
                    parts += [clamp((cx - pcx) / self.width, -1, 1),
                              clamp((cy - pcy) / self.height, -1, 1)]
                else:
                    parts += [0.0, 0.0]
            return parts

        obs_parts += nearest(s.enemies, self.k_enemies)
        obs_parts += nearest(s.enemy_bullets, self.m_bullets)

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        info = self.session.info()
        info["step"] = self._step_count
        return info

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        # Imported here so headless use never needs a display
        from .controller import GameController
        from .window import GalagaWindow

        if self._window is None:
            controller = GameController()
            controller.session = self.session
            self._window = GalagaWindow(controller, self.width, self.height)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = False, seed: Optional[int] = 42) -> Dict[str, Any]:
    """Play one episode with random actions and return the final info"""
    env = GalagaEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"[galaga] Random episode return: {total:.1f}  score: {info['score']}  steps: {info['step']}")
    env.close()
    return info


if __name__ == "__main__":
    run_random_episode(render=True)
