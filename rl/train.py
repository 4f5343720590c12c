"""
Train a PPO agent to play mini galaga with Stable-Baselines3.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO
from stable_baselines3.common.vec_env import DummyVecEnv
from stable_baselines3.common.callbacks import CheckpointCallback
from stable_baselines3.common.monitor import Monitor

from game.galaga import GalagaEnv
from rl.configs.galaga_config import ENV_CONFIG, PPO_CONFIG, TRAINING_CONFIG, run_dirs
from rl.metrics_callback import MetricsCallback


def make_env(seed: Optional[int] = None):
    """Factory function to create the environment"""
    def _init():
        env = Monitor(GalagaEnv(**ENV_CONFIG))
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train_ppo(
    total_timesteps: Optional[int] = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    n_envs: int = 4,
):
    """Train PPO on the galaga environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    default_save, default_log = run_dirs("ppo")
    save_dir = save_dir or default_save
    log_dir = log_dir or default_log

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i) for i in range(n_envs)])

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix="ppo_galaga",
    )
    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="ppo", verbose=1)

    model = PPO(env=env, **PPO_CONFIG)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, metrics_callback],
    )

    final_path = os.path.join(save_dir, "ppo_galaga_final")
    model.save(final_path)

    print(f"\n{'='*60}")
    print(f"PPO Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.1f}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    env.close()
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train a PPO agent on mini galaga")
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments (default: 4)",
    )
    parser.add_argument(
        "--save-dir",
        type=str,
        default=None,
        help=f"Where checkpoints and the final model go (default: {run_dirs('ppo')[0]})",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help=f"Where the metrics CSV goes (default: {run_dirs('ppo')[1]})",
    )

    args = parser.parse_args()
    train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs,
              save_dir=args.save_dir, log_dir=args.log_dir)


if __name__ == "__main__":
    main()
