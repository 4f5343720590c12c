"""
Configuration for automated play of the mini galaga environment
"""

import os

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "width": 420,
    "height": 560,
    "dt": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 4,
    "m_bullets": 3,
    "r_kill": 1.0,
    "r_hit": 1.0,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 300_000,
    "save_freq": 10_000,
    "log_dir": "./logs",
    "model_dir": "./models",
}


def run_dirs(algo_name: str = "ppo"):
    """Checkpoint and metrics directories for one algorithm's run"""
    return (
        os.path.join(TRAINING_CONFIG["model_dir"], algo_name),
        os.path.join(TRAINING_CONFIG["log_dir"], algo_name),
    )
