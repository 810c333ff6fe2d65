from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Literal

from game_engine import Rules

PolicyName = Literal["stay", "dodge"]


@dataclass(frozen=True)
class Settings:
    rules: Rules

    fps: int
    seed: int | None
    policy: PolicyName
    max_frames: int

    sims: int
    sim_workers: int
    batch_size: int

    def with_overrides(self, **kwargs) -> "Settings":
        return replace(self, **kwargs)

    def with_rules(self, **kwargs) -> "Settings":
        known = {f.name for f in fields(Rules)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")
        return replace(self, rules=replace(self.rules, **kwargs))

    @property
    def frame_seconds(self) -> float:
        return 1.0 / self.fps
