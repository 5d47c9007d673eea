"""
Evaluation Harness
==================

Runs an agent against the fixed seed bank and summarizes its scores.

Usage:
    python -m truckajumpa.evaluation.run_eval --agent contestants/baseline_jumper
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import logging
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np

from truckajumpa.truck_core.config_loader import GameConfig, load_config, load_preset
from truckajumpa.truck_core.env_gym import ACTION_JUMP, TruckJumpEnv


@dataclass
class EvalResult:
    """Result for a single seed."""
    seed: int
    final_score: int
    level: int
    ticks: int
    game_over: bool
    jumps: int
    elapsed_time: float


@dataclass
class EvalSummary:
    """Summary of evaluation across all seeds."""
    mean_score: float
    std_score: float
    min_score: int
    max_score: int
    median_score: float
    mean_ticks: float
    total_time: float
    results: List[EvalResult]


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """
    Load the evaluation seed bank.

    Args:
        path: Path to seed_bank.json. Uses default if None.
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "seed_bank.json")

    with open(path, "r") as f:
        data = json.load(f)

    return data["seeds"]


def load_agent(agent_path: str) -> Callable:
    """
    Load an agent from a directory containing agent.py, or from a file.

    The module must define a `TruckAgent` class with an `act(obs)` method or a
    standalone `act(obs)` function.
    """
    agent_path = Path(agent_path)
    agent_file = agent_path / "agent.py" if agent_path.is_dir() else agent_path

    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    spec = importlib.util.spec_from_file_location("agent_module", agent_file)
    if spec is None or spec.loader is None:
        raise ImportError(f"Failed to load agent module from {agent_file}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["agent_module"] = module
    spec.loader.exec_module(module)

    if hasattr(module, "TruckAgent"):
        agent_instance = module.TruckAgent()
        if hasattr(agent_instance, "act"):
            return agent_instance.act
        raise AttributeError("TruckAgent class must have an 'act' method")

    if hasattr(module, "act"):
        return module.act

    raise AttributeError(
        "Agent module must have either 'TruckAgent' class with 'act' method "
        "or standalone 'act' function"
    )


def evaluate_single_seed(
    agent_fn: Callable,
    seed: int,
    config: Optional[GameConfig] = None,
    max_ticks: int = 5000,
    verbose: bool = False
) -> EvalResult:
    """
    Evaluate agent on a single seed.

    Args:
        agent_fn: Agent's act function (obs) -> 0 or 1.
        seed: Random seed.
        config: Game configuration. Loads default if None.
        max_ticks: Episode length cap.
        verbose: If True, print the result.
    """
    env = TruckJumpEnv(config=config, max_episode_ticks=max_ticks)
    obs, info = env.reset(seed=seed)

    jumps = 0
    start_time = time.time()

    done = False
    while not done:
        action = int(agent_fn(obs))
        obs, _, terminated, truncated, info = env.step(action)
        if action == ACTION_JUMP and info["jumped"]:
            jumps += 1
        done = terminated or truncated

    elapsed = time.time() - start_time
    env.close()

    result = EvalResult(
        seed=seed,
        final_score=info["score"],
        level=info["level"],
        ticks=info["tick"],
        game_over=info["game_over"],
        jumps=jumps,
        elapsed_time=elapsed
    )

    if verbose:
        print(f"  Seed {seed}: score={result.final_score}, ticks={result.ticks}, "
              f"jumps={result.jumps}, time={elapsed:.2f}s")

    return result


def evaluate_agent(
    agent_fn: Callable,
    seeds: Optional[List[int]] = None,
    config: Optional[GameConfig] = None,
    max_ticks: int = 5000,
    verbose: bool = True
) -> EvalSummary:
    """
    Evaluate agent on all seeds in the seed bank.

    Returns:
        EvalSummary with aggregate statistics.
    """
    if seeds is None:
        seeds = load_seed_bank()
    if config is None:
        config = load_config()

    if verbose:
        print(f"Evaluating on {len(seeds)} seeds...")

    results: List[EvalResult] = []
    total_start = time.time()

    for i, seed in enumerate(seeds):
        if verbose:
            print(f"[{i+1}/{len(seeds)}] Running seed {seed}...")
        results.append(
            evaluate_single_seed(agent_fn, seed, config=config, max_ticks=max_ticks, verbose=verbose)
        )

    total_time = time.time() - total_start
    scores = [r.final_score for r in results]

    summary = EvalSummary(
        mean_score=float(np.mean(scores)),
        std_score=float(np.std(scores)),
        min_score=int(min(scores)),
        max_score=int(max(scores)),
        median_score=float(np.median(scores)),
        mean_ticks=float(np.mean([r.ticks for r in results])),
        total_time=total_time,
        results=results
    )

    if verbose:
        print()
        print("=" * 50)
        print("EVALUATION SUMMARY")
        print("=" * 50)
        print(f"Seeds evaluated: {len(seeds)}")
        print(f"Mean score:      {summary.mean_score:.2f}")
        print(f"Std deviation:   {summary.std_score:.2f}")
        print(f"Min score:       {summary.min_score}")
        print(f"Max score:       {summary.max_score}")
        print(f"Median score:    {summary.median_score:.2f}")
        print(f"Mean ticks:      {summary.mean_ticks:.1f}")
        print(f"Total time:      {total_time:.2f}s")
        print("=" * 50)

    return summary


def save_results(summary: EvalSummary, agent_name: str, output_path: str) -> None:
    """Save evaluation results to JSON."""
    data = {
        "agent": agent_name,
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        "mean_score": summary.mean_score,
        "std_score": summary.std_score,
        "min_score": summary.min_score,
        "max_score": summary.max_score,
        "median_score": summary.median_score,
        "mean_ticks": summary.mean_ticks,
        "total_time": summary.total_time,
        "results": [
            {
                "seed": r.seed,
                "final_score": r.final_score,
                "level": r.level,
                "ticks": r.ticks,
                "game_over": r.game_over,
                "jumps": r.jumps,
                "elapsed_time": r.elapsed_time
            }
            for r in summary.results
        ]
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Results saved to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a TruckaJumpa agent")
    parser.add_argument("--agent", type=str, required=True,
                        help="Path to agent directory or agent.py file")
    parser.add_argument("--seeds", type=str, default=None,
                        help="Path to seed bank JSON (uses default if not specified)")
    parser.add_argument("--preset", type=str, default=None,
                        help="Named preset from game_config.yaml")
    parser.add_argument("--max-ticks", type=int, default=5000,
                        help="Episode length cap")
    parser.add_argument("--output", type=str, default=None,
                        help="Path to save results JSON")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument("--verbose", action="store_true", help="Enable engine debug logging")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    print(f"Loading agent from {args.agent}...")
    try:
        agent_fn = load_agent(args.agent)
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Error loading agent: {e}")
        return 1

    try:
        config = load_preset(args.preset) if args.preset else load_config()
    except (KeyError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    seeds = load_seed_bank(args.seeds) if args.seeds else None

    summary = evaluate_agent(
        agent_fn,
        seeds=seeds,
        config=config,
        max_ticks=args.max_ticks,
        verbose=not args.quiet
    )

    if args.output:
        save_results(summary, Path(args.agent).name, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
