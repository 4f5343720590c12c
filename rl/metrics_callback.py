"""
Custom callback for tracking galaga metrics during training.
Records: episode reward and length, final score, kills and hits taken.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

CSV_HEADER = ["timestep", "episode", "reward", "length", "score", "kills", "hits"]


class MetricsCallback(BaseCallback):
    """
    Callback to track and log per-episode game metrics.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str = "ppo",
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_kills: List[int] = []
        self.episode_hits: List[int] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow(CSV_HEADER)
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds "episode" on the final step
            if done and "episode" in info:
                self.record_episode(info)

        return True

    def record_episode(self, info: Dict[str, Any]):
        ep = info["episode"]
        self.episode_rewards.append(float(ep["r"]))
        self.episode_lengths.append(int(ep["l"]))
        self.episode_scores.append(int(info.get("score", 0)))
        self.episode_kills.append(int(info.get("kills", 0)))
        self.episode_hits.append(int(info.get("hits", 0)))

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps,
                len(self.episode_rewards),
                self.episode_rewards[-1],
                self.episode_lengths[-1],
                self.episode_scores[-1],
                self.episode_kills[-1],
                self.episode_hits[-1],
            ])
            self.csv_file.flush()

        if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
            avg_score = sum(self.episode_scores[-10:]) / 10
            print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                  f"Timestep {self.num_timesteps}, "
                  f"Avg Score (10 ep): {avg_score:.1f}")

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            self.csv_file = None
            self.csv_writer = None
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": float(np.mean(self.episode_rewards)),
            "std_reward": float(np.std(self.episode_rewards)),
            "mean_length": float(np.mean(self.episode_lengths)),
            "mean_score": float(np.mean(self.episode_scores)),
            "total_episodes": len(self.episode_rewards),
        }
