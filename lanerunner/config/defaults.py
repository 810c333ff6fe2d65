from __future__ import annotations

import multiprocessing as _mp

import game_engine
import simulator

from .schema import Settings


def from_engine_constants() -> Settings:
    """Build settings from the headless engine constants so nothing drifts."""
    return Settings(
        rules=game_engine.DEFAULT_RULES,
        fps=int(game_engine.FPS),
        seed=None,
        policy="dodge",
        max_frames=int(simulator.MAX_FRAMES),
        sims=20,
        sim_workers=max(1, _mp.cpu_count() - 2),
        batch_size=10,
    )
