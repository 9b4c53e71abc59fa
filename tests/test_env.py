import gymnasium as gym
import numpy as np
import pytest

from slide2048.envs.game2048 import Game2048Env


def test_env_basic_step():
    env = Game2048Env()
    obs, info = env.reset(seed=123)
    assert obs.shape == (4, 4)
    assert (obs == 0).sum() == 14  # two tiles spawned
    assert info["score"] == 0
    assert len(info["tiles"]) == 2
    obs2, reward, terminated, truncated, info2 = env.step(2)  # left
    assert obs2.shape == (4, 4)
    assert isinstance(reward, float)
    assert isinstance(terminated, bool)
    assert truncated is False
    assert "valid_actions" in info2
    assert info2["valid_actions"].dtype == bool
    assert reward == info2["score"]


def test_env_seed_is_reproducible():
    a = Game2048Env()
    b = Game2048Env()
    obs_a, _ = a.reset(seed=7)
    obs_b, _ = b.reset(seed=7)
    assert np.array_equal(obs_a, obs_b)
    for action in [0, 2, 1, 3, 2, 0]:
        obs_a, *_ = a.step(action)
        obs_b, *_ = b.step(action)
        assert np.array_equal(obs_a, obs_b)


def test_env_rejects_invalid_action():
    env = Game2048Env()
    env.reset(seed=0)
    with pytest.raises(gym.error.InvalidAction):
        env.step(4)


def test_env_invalid_moves_do_not_spawn():
    env = Game2048Env()
    obs, _ = env.reset(seed=1)
    for action in range(4):
        before = obs.copy()
        obs, reward, _, _, info = env.step(action)
        if not info["moved"]:
            assert np.array_equal(before, obs)
            assert reward == 0.0
            assert not info["valid_actions"][action]


def test_env_keeps_best_score_across_resets():
    env = Game2048Env(best_score=64)
    env.reset(seed=0)
    assert env.best_score == 64
    rng = np.random.default_rng(0)
    for _ in range(50):
        _, _, terminated, _, info = env.step(int(rng.integers(0, 4)))
        if terminated:
            break
    best = max(64, info["score"])
    assert env.best_score == best
    _, info = env.reset(seed=1)
    assert info["best_score"] == best
    assert info["score"] == 0


def test_env_render_before_reset_fails_fast():
    env = Game2048Env()
    with pytest.raises(AssertionError):
        env.render()
