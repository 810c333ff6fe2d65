from __future__ import annotations

from simulator import POLICIES, SEED_SPACE

from .defaults import from_engine_constants
from .schema import Settings


def load_settings(
    *,
    lanes: int | None = None,
    fps: int | None = None,
    seed: int | None = None,
    policy: str | None = None,
    sims: int | None = None,
    workers: int | None = None,
    max_frames: int | None = None,
) -> Settings:
    """Load runtime settings, defaulting to the engine constants.

    ``None`` keeps the default. Invalid values surface as ``ValueError``.
    """
    settings = from_engine_constants()
    if lanes is not None:
        settings = settings.with_rules(lane_count=lanes)
    if fps is not None:
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        settings = settings.with_overrides(fps=fps)
    if seed is not None:
        settings = settings.with_overrides(seed=seed)
    if policy is not None:
        if policy not in POLICIES:
            raise ValueError(f"Unknown policy: {policy!r}. Expected one of {sorted(POLICIES)}")
        settings = settings.with_overrides(policy=policy)
    if sims is not None:
        if not 0 < sims <= SEED_SPACE:
            raise ValueError(f"sims must be in 1..{SEED_SPACE}, got {sims}")
        settings = settings.with_overrides(sims=sims)
    if workers is not None:
        settings = settings.with_overrides(sim_workers=max(1, workers))
    if max_frames is not None:
        if max_frames <= 0:
            raise ValueError(f"max_frames must be > 0, got {max_frames}")
        settings = settings.with_overrides(max_frames=max_frames)
    return settings
