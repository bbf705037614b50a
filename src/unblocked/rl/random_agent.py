from __future__ import annotations

import argparse
import random

import gymnasium as gym

import unblocked.env  # noqa: F401  (registers Unblocked-v0)
from unblocked.env.wrappers import ResampleInvalidActionWrapper
from unblocked.game import GameState, load_levels


def run_random(level_no: int = 1, episodes: int = 20, seed: int | None = None) -> dict:
    level = load_levels()[level_no - 1]
    env = ResampleInvalidActionWrapper(gym.make("Unblocked-v0", level=level))
    rng = random.Random(seed)
    wins = 0
    total_reward = 0.0
    obs, info = env.reset(seed=seed)
    for _ in range(episodes):
        done = False
        while not done:
            valid = [i for i, ok in enumerate(info["action_mask"]) if ok]
            action = rng.choice(valid) if valid else env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            done = terminated or truncated
        if info["state"] == GameState.WON.value:
            wins += 1
        obs, info = env.reset()
    env.close()
    return {"episodes": episodes, "wins": wins, "total_reward": total_reward}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--level", type=int, default=1)
    p.add_argument("--episodes", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    stats = run_random(args.level, args.episodes, args.seed)
    print(f"Random agent solved {stats['wins']}/{stats['episodes']} episodes, total reward {stats['total_reward']:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
