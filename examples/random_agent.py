"""Play episodes with a random policy through :mod:`blockfall.gym_env`.

Run with::

    PYTHONPATH=src python examples/random_agent.py --episodes 5

Useful as a headless soak test of the engine: every episode runs until the
stack tops out (or ``--max-steps``) and a summary line is logged per episode.
"""

from __future__ import annotations

import argparse
import logging

from blockfall.config import GameConfig
from blockfall.gym_env import BlockfallEnv


LOGGER = logging.getLogger(__name__)


def run_episode(env: BlockfallEnv, seed: int) -> dict[str, int]:
    env.reset(seed=seed)
    steps = 0
    total = 0.0
    while True:
        _, reward, terminated, truncated, info = env.step(env.action_space.sample())
        total += reward
        steps += 1
        if terminated or truncated:
            break
    return {"steps": steps, "lines": int(total), "pieces": info["pieces"]}


def log_episode(result: dict[str, int], *, index: int) -> str:
    message = (
        f"Episode {index}: steps={result['steps']}, lines={result['lines']}, "
        f"pieces={result['pieces']}"
    )
    LOGGER.info(message)
    return message


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--episodes", type=int, default=1, help="Number of episodes to play.")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first episode.")
    parser.add_argument("--max-steps", type=int, default=5000, help="Truncate episodes after N steps.")
    parser.add_argument("--preset", default="standard", help="Board preset (standard or big).")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    env = BlockfallEnv(config=GameConfig.preset(args.preset), max_steps=args.max_steps)
    env.action_space.seed(args.seed)
    for episode in range(args.episodes):
        log_episode(run_episode(env, seed=args.seed + episode), index=episode + 1)


if __name__ == "__main__":
    main()
