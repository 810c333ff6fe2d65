from __future__ import annotations

import argparse

from lanerunner.ui.cli import commands
from simulator import POLICIES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lane Runner")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common_parent = argparse.ArgumentParser(add_help=False)
    common_parent.add_argument("--lanes", type=int, default=None)
    common_parent.add_argument("--fps", type=int, default=None)
    common_parent.add_argument("--seed", type=int, default=None)

    sim_parent = argparse.ArgumentParser(add_help=False)
    sim_parent.add_argument("--policy", choices=sorted(POLICIES), default=None)
    sim_parent.add_argument("--max-frames", type=int, default=None)

    sub = subparsers.add_parser("play", parents=[common_parent], help="Open the game window")
    sub.set_defaults(func=commands.cmd_play)

    sub = subparsers.add_parser("simulate", parents=[common_parent, sim_parent], help="Run one headless game")
    sub.set_defaults(func=commands.cmd_simulate)

    sub = subparsers.add_parser("bench", parents=[common_parent, sim_parent], help="Run many headless games")
    sub.add_argument("--sims", type=int, default=None)
    sub.add_argument("--workers", type=int, default=None)
    sub.set_defaults(func=commands.cmd_bench)

    sub = subparsers.add_parser("doctor", parents=[common_parent], help="Check environment/dependencies")
    sub.set_defaults(func=commands.cmd_doctor)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
