#!/usr/bin/env python3
"""Headless game simulator — runs the game with an autopilot policy, records replay data."""

from game_engine import GameState, FPS

# Safety limit: stop if game exceeds this many frames (~3 minutes at 60fps)
MAX_FRAMES = 12_000

# Seeds for batch runs are drawn without replacement from range(SEED_SPACE)
SEED_SPACE = 100_000


class StayPolicy:
    """Never changes lane."""

    name = "stay"

    def decide(self, game):
        return 0


class DodgePolicy:
    """Leaves a threatened lane for the adjacent lane with the most room ahead."""

    name = "dodge"

    def __init__(self, danger=0.3):
        self.danger = danger

    def decide(self, game):
        nearest = game.nearest_obstacles()
        lane = game.lane
        if nearest[lane] >= self.danger:
            return 0

        best, best_dist = 0, nearest[lane]
        for d in (-1, 1):
            nl = lane + d
            if 0 <= nl < len(nearest) and nearest[nl] > best_dist:
                best, best_dist = d, nearest[nl]
        return best


POLICIES = {
    StayPolicy.name: StayPolicy,
    DodgePolicy.name: DodgePolicy,
}


def make_policy(name):
    try:
        return POLICIES[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown policy: {name!r}. Expected one of {sorted(POLICIES)}") from exc


def apply_decision(game, decision):
    if decision == -1:
        game.move_left()
    elif decision == 1:
        game.move_right()


def simulate(policy, seed=0, max_frames=MAX_FRAMES, rules=None):
    """
    Run one headless game simulation.

    Args:
        policy: object with decide(game) -> -1, 0 or 1
        seed: random seed for deterministic replay
        max_frames: hard stop for runs the policy never loses
        rules: optional game_engine.Rules override

    Returns:
        dict: {
            'alive_time': int (frames survived),
            'seed': int,
            'score': int,
            'frames': list of frame dicts for replay
        }

    Each frame dict contains the output of GameState.encode() plus a
    'decision' key with the policy's decision for that frame.
    """
    game = GameState(seed=seed, rules=rules)
    game.request_start()
    frames = []
    decision = 0

    while game.running and game.score < max_frames:
        decision = policy.decide(game)
        apply_decision(game, decision)

        # Record every other frame for replay (keeps data manageable)
        if game.score % 2 == 0:
            state = game.encode()
            state["decision"] = decision
            frames.append(state)

        game.step()

    # Record final frame on death
    final = game.encode()
    final["decision"] = decision
    frames.append(final)

    return {
        "alive_time": game.score,
        "seed": seed,
        "score": game.score,
        "frames": frames,
    }


def simulate_batch(policy_name, seeds, max_frames=MAX_FRAMES, rules=None):
    """Run multiple simulations sequentially.

    Used by the batch runner in worker processes to avoid per-seed overhead.
    """
    policy = make_policy(policy_name)
    return [simulate(policy, seed, max_frames=max_frames, rules=rules) for seed in seeds]


if __name__ == "__main__":
    result = simulate(DodgePolicy(), seed=42)
    print(f"Alive time: {result['alive_time']} frames ({result['alive_time'] / FPS:.1f} sec)")
    print(f"Frames recorded: {len(result['frames'])}")
