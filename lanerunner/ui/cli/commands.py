from __future__ import annotations

import time

from lanerunner.config.loader import load_settings
from lanerunner.core.doctor import run_doctor
from lanerunner.simulation.runner import run_simulations
from simulator import make_policy, simulate


def _settings(args):
    try:
        return load_settings(
            lanes=args.lanes,
            fps=args.fps,
            seed=args.seed,
            policy=getattr(args, "policy", None),
            sims=getattr(args, "sims", None),
            workers=getattr(args, "workers", None),
            max_frames=getattr(args, "max_frames", None),
        )
    except ValueError as exc:
        raise SystemExit(f"[config] {exc}")


def cmd_play(args):
    settings = _settings(args)
    from lanerunner.ui.game.app_game import main as play_main

    try:
        frames = play_main(settings)
    except RuntimeError as exc:
        print(f"[play] {exc}")
        return 1
    print(f"[play] closed after {frames} frames")
    return 0


def cmd_simulate(args):
    settings = _settings(args)
    seed = settings.seed if settings.seed is not None else 0
    result = simulate(make_policy(settings.policy), seed=seed,
                      max_frames=settings.max_frames, rules=settings.rules)
    alive = result["alive_time"]
    print(f"[simulate] policy={settings.policy} seed={seed}")
    print(f"[simulate] alive: {alive} frames ({alive / settings.fps:.1f}s), "
          f"frames recorded: {len(result['frames'])}")
    return 0


def cmd_bench(args):
    settings = _settings(args)
    start = time.time()
    results = run_simulations(settings)
    print("\n" + "=" * 50)
    print(f"  LANE RUNNER BENCH — policy={settings.policy}")
    print("=" * 50)
    print(f"  runs:   {results['n_runs']}")
    print(f"  avg = {results['avg_alive']:.0f} frames ({results['avg_seconds']:.1f}s) "
          f"(+/- {results['std_alive']:.0f})")
    print(f"  min = {results['min_alive']}  max = {results['max_alive']}  "
          f"median = {results['median_alive']:.0f}")
    print(f"  Elapsed: {time.time() - start:.1f}s")
    return 0


def cmd_doctor(args):
    settings = _settings(args)
    checks = run_doctor(settings)
    ok_count = 0
    for chk in checks:
        mark = "OK" if chk.ok else "FAIL"
        print(f"[{mark}] {chk.name}: {chk.detail}")
        ok_count += int(chk.ok)
    print(f"\n{ok_count}/{len(checks)} checks passing")
    return 0 if ok_count == len(checks) else 1
