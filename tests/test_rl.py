import csv
import os

import numpy as np
import pytest

from rl.configs.galaga_config import TRAINING_CONFIG, run_dirs
from rl.evaluate import evaluate_policy


def metrics():
    pytest.importorskip("stable_baselines3")
    from rl import metrics_callback
    return metrics_callback


def test_evaluate_random_policy():
    results = evaluate_policy(n_episodes=2, seed=0, env_config={"max_steps": 30})
    assert len(results["episode_rewards"]) == 2
    assert results["mean_length"] <= 30
    assert all(score % 10 == 0 for score in results["episode_scores"])


def test_evaluate_scripted_policy():
    always_left = lambda obs: np.array([1, 1])  # noqa: E731
    results = evaluate_policy(policy=always_left, n_episodes=1, seed=4, env_config={"max_steps": 10})
    assert results["mean_length"] == 10


def test_metrics_callback_writes_csv(tmp_path):
    m = metrics()
    cb = m.MetricsCallback(log_dir=str(tmp_path), algo_name="ppo", verbose=0)
    cb._on_training_start()
    cb.record_episode({"episode": {"r": 2.0, "l": 300}, "score": 40, "kills": 4, "hits": 3})
    cb.record_episode({"episode": {"r": -1.0, "l": 120}, "score": 20, "kills": 2, "hits": 3})
    cb._on_training_end()

    with open(tmp_path / "ppo_metrics.csv", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == m.CSV_HEADER
    assert len(rows) == 3
    assert rows[1][4:] == ["40", "4", "3"]

    summary = cb.get_summary()
    assert summary["total_episodes"] == 2
    assert summary["mean_score"] == 30.0
    assert summary["mean_reward"] == 0.5


def test_metrics_callback_picks_up_finished_episodes(tmp_path):
    cb = metrics().MetricsCallback(log_dir=str(tmp_path), verbose=0)
    cb.locals = {
        "infos": [{"score": 10, "kills": 1, "hits": 0}, {"episode": {"r": 1.0, "l": 50}, "score": 30}],
        "dones": [False, True],
    }
    assert cb._on_step() is True
    assert cb.episode_scores == [30]
    assert cb.get_summary()["total_episodes"] == 1


def test_empty_summary():
    assert metrics().MetricsCallback(log_dir="unused", verbose=0).get_summary() == {}


def test_run_dirs_follow_training_config(monkeypatch):
    assert run_dirs("ppo") == (
        os.path.join(TRAINING_CONFIG["model_dir"], "ppo"),
        os.path.join(TRAINING_CONFIG["log_dir"], "ppo"),
    )
    monkeypatch.setitem(TRAINING_CONFIG, "log_dir", "/tmp/galaga-logs")
    assert run_dirs("ppo")[1] == os.path.join("/tmp/galaga-logs", "ppo")
