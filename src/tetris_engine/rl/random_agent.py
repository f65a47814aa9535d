from __future__ import annotations

import argparse
from typing import Optional, Sequence

import gymnasium as gym

import tetris_engine.env  # noqa: F401
from tetris_engine.env.wrappers import ResampleRejectedActionWrapper


def run_random(episodes: int = 1, max_steps: int = 2000, seed: Optional[int] = None) -> list[dict]:
    env = ResampleRejectedActionWrapper(gym.make("Tetris-10x20-v0", max_episode_steps=max_steps))
    results = []
    try:
        for episode in range(episodes):
            episode_seed = None if seed is None else seed + episode
            obs, info = env.reset(seed=episode_seed)
            total_reward = 0.0
            steps = 0
            while True:
                action = env.action_space.sample()
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                steps += 1
                if terminated or truncated:
                    break
            results.append(
                {
                    "episode": episode,
                    "steps": steps,
                    "reward": total_reward,
                    "score": info["score"],
                    "rows": info["rows"],
                    "level": info["level"],
                }
            )
    finally:
        env.close()
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play random Tetris episodes and report scores.")
    p.add_argument("--episodes", type=int, default=1)
    p.add_argument("--steps", type=int, default=2000, help="step cap per episode")
    p.add_argument("--seed", type=int, default=None)
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    for result in run_random(args.episodes, args.steps, args.seed):
        print(
            f"episode {result['episode']}: steps {result['steps']}  score {result['score']}  "
            f"rows {result['rows']}  level {result['level']}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
