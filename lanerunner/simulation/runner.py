from __future__ import annotations

"""Parallel headless simulation runner."""

import multiprocessing
import random
from itertools import islice
from typing import Any

import numpy as np

from game_engine import Rules
from lanerunner.config.schema import Settings
from simulator import SEED_SPACE, simulate_batch


def _run_seed_batch(args):
    """Worker function: build the policy once, run one chunk of seeds."""
    policy_name, seeds, max_frames, rules = args
    return simulate_batch(policy_name, seeds, max_frames=max_frames, rules=rules)


def _chunked(items, chunk_size):
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    it = iter(items)
    while True:
        chunk = list(islice(it, chunk_size))
        if not chunk:
            return
        yield chunk


def summarize(runs: list[dict[str, Any]], fps: int) -> dict[str, Any]:
    """Aggregate survival statistics over finished runs."""
    if not runs:
        raise ValueError("cannot summarize zero runs")
    alive_times = np.array([r["alive_time"] for r in runs], dtype=float)
    return {
        "avg_alive": float(np.mean(alive_times)),
        "std_alive": float(np.std(alive_times)),
        "min_alive": int(np.min(alive_times)),
        "max_alive": int(np.max(alive_times)),
        "median_alive": float(np.median(alive_times)),
        "avg_seconds": float(np.mean(alive_times) / fps),
        "n_runs": len(runs),
    }


def pick_seeds(settings: Settings) -> list[int]:
    rng = random.Random(settings.seed)
    return rng.sample(range(SEED_SPACE), settings.sims)


def run_simulations(settings: Settings, *, seeds: list[int] | None = None, verbose: bool = True) -> dict[str, Any]:
    """Run repeated headless games for one policy and aggregate metrics."""
    seeds = list(seeds) if seeds is not None else pick_seeds(settings)
    rules: Rules = settings.rules
    batch_size = settings.batch_size
    n_sims = len(seeds)
    n_batches = (n_sims + batch_size - 1) // batch_size

    all_runs: list[dict[str, Any]] = []
    for batch_idx in range(n_batches):
        batch_seeds = seeds[batch_idx * batch_size:(batch_idx + 1) * batch_size]

        worker_count = min(len(batch_seeds), settings.sim_workers)
        seeds_per_worker = max(1, (len(batch_seeds) + worker_count - 1) // worker_count)
        args_list = [
            (settings.policy, seed_chunk, settings.max_frames, rules)
            for seed_chunk in _chunked(batch_seeds, seeds_per_worker)
        ]

        if worker_count > 1:
            with multiprocessing.Pool(processes=worker_count) as pool:
                batch_results = pool.map(_run_seed_batch, args_list)
        else:
            batch_results = [_run_seed_batch(args) for args in args_list]

        for worker_runs in batch_results:
            all_runs.extend(worker_runs)

        if verbose:
            avg_so_far = sum(r["alive_time"] for r in all_runs) / len(all_runs)
            print(
                f"  Batch {batch_idx + 1}/{n_batches} complete "
                f"({len(all_runs)}/{n_sims} sims, running avg: {avg_so_far:.0f} frames)"
            )

    return {**summarize(all_runs, settings.fps), "runs": all_runs}
