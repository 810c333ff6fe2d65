from __future__ import annotations

import importlib.util
from dataclasses import dataclass

from lanerunner.config.schema import Settings
from simulator import POLICIES


@dataclass(frozen=True)
class Check:
    name: str
    ok: bool
    detail: str


def _has_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def run_doctor(settings: Settings) -> list[Check]:
    rules = settings.rules
    checks: list[Check] = []
    checks.append(Check("pygame", _has_module("pygame"), "required for the game window"))
    checks.append(Check("numpy", _has_module("numpy"), "required for bench statistics"))
    checks.append(Check("lanes", rules.lane_count >= 1, f"lane_count={rules.lane_count}"))
    checks.append(Check("fps", settings.fps > 0, f"fps={settings.fps}"))
    checks.append(Check("policy", settings.policy in POLICIES, f"policy={settings.policy}"))
    checks.append(Check(
        "track",
        rules.player_y > 0 and rules.spawn_y < rules.player_y < rules.despawn_y,
        f"spawn_y={rules.spawn_y} player_y={rules.player_y} despawn_y={rules.despawn_y}",
    ))
    return checks
