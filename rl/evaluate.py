"""
Evaluation script for mini galaga policies (trained PPO model or random play)
"""

import argparse
from typing import Optional, Callable, Dict, Any

import numpy as np

from game.galaga import GalagaEnv
from rl.configs.galaga_config import ENV_CONFIG


def evaluate_policy(
    policy: Optional[Callable[[np.ndarray], Any]] = None,
    n_episodes: int = 10,
    seed: Optional[int] = None,
    render: bool = False,
    env_config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Play ``n_episodes`` and collect reward / score statistics.

    Args:
        policy: Maps an observation to an action; ``None`` samples random actions
        n_episodes: Number of episodes to play
        seed: Base seed, episode ``i`` is reset with ``seed + i``
        render: Open the arcade window while playing
        env_config: Overrides for ENV_CONFIG
    """
    config = dict(ENV_CONFIG)
    config.update(env_config or {})
    env = GalagaEnv(render_mode="human" if render else None, **config)

    episode_rewards = []
    episode_lengths = []
    episode_scores = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        env.action_space.seed(seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample() if policy is None else policy(obs)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {info['score']}, Length = {steps}")

    env.close()

    results = {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
        "episode_rewards": episode_rewards,
        "episode_scores": episode_scores,
    }

    print("\n" + "="*50)
    print(f"Evaluation Results ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print("="*50)

    return results


def load_ppo_policy(model_path: str) -> Callable[[np.ndarray], Any]:
    from stable_baselines3 import PPO

    model = PPO.load(model_path)

    def _policy(obs):
        action, _ = model.predict(obs, deterministic=True)
        return action

    return _policy


def main():
    parser = argparse.ArgumentParser(description="Evaluate a mini galaga policy")
    parser.add_argument(
        "model_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to a trained PPO model (omit for a random policy)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Watch the episodes in the arcade window",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )

    args = parser.parse_args()

    policy = load_ppo_policy(args.model_path) if args.model_path else None
    if policy is None:
        print("Evaluating random policy baseline...")

    evaluate_policy(
        policy=policy,
        n_episodes=args.n_episodes,
        seed=args.seed,
        render=args.render,
    )


if __name__ == "__main__":
    main()
