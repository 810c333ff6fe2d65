"""
Pure game logic for LANE RUNNER — no pygame dependency.
Used by the pygame frontend, the headless simulator and the batch runner.

Difficulty progresses per tick, not per second: the driver must call
step() once per fixed frame so a run plays the same at any machine speed
only when the frame rate is held constant.
"""

import math
import random
from dataclasses import dataclass, field, replace

# ─────────────────────────────────────────
# Constants
# ─────────────────────────────────────────
WIDTH, HEIGHT = 360, 640
FPS = 60

LANE_COUNT = 3
PLAYER_SIZE = 34
OBSTACLE_SIZE = 36
PLAYER_OFFSET = 95          # player row sits this far above the bottom edge

SPAWN_Y = -60               # just above the visible track
DESPAWN_MARGIN = 80

BASE_SPEED = 3.0
MAX_SPEED_BONUS = 6.0
SPEED_SCORE_DIVISOR = 350

BASE_SPAWN_INTERVAL = 70
MIN_SPAWN_INTERVAL = 28
SPAWN_SCORE_DIVISOR = 80

COLLIDE_X_FACTOR = 0.42
COLLIDE_Y_FACTOR = 0.5

STATUS_IDLE = "not started"
STATUS_RUNNING = "running"
STATUS_FAILED = "failed — press start to retry"


# ─────────────────────────────────────────
# Rules
# ─────────────────────────────────────────

@dataclass(frozen=True)
class Rules:
    """Every tunable of a run. Defaults reproduce the arcade feel."""

    width: float = WIDTH
    height: float = HEIGHT
    lane_count: int = LANE_COUNT
    player_size: float = PLAYER_SIZE
    obstacle_size: float = OBSTACLE_SIZE
    player_offset: float = PLAYER_OFFSET
    spawn_y: float = SPAWN_Y
    despawn_margin: float = DESPAWN_MARGIN
    base_speed: float = BASE_SPEED
    max_speed_bonus: float = MAX_SPEED_BONUS
    speed_score_divisor: float = SPEED_SCORE_DIVISOR
    base_spawn_interval: int = BASE_SPAWN_INTERVAL
    min_spawn_interval: int = MIN_SPAWN_INTERVAL
    spawn_score_divisor: int = SPAWN_SCORE_DIVISOR
    collide_x_factor: float = COLLIDE_X_FACTOR
    collide_y_factor: float = COLLIDE_Y_FACTOR

    def __post_init__(self):
        if self.lane_count < 1:
            raise ValueError(f"lane_count must be >= 1, got {self.lane_count}")
        for name in ("width", "height", "player_size", "obstacle_size", "base_speed",
                     "speed_score_divisor", "spawn_score_divisor"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        if self.max_speed_bonus < 0:
            raise ValueError(f"max_speed_bonus must be >= 0, got {self.max_speed_bonus}")
        if not 1 <= self.min_spawn_interval <= self.base_spawn_interval:
            raise ValueError(
                "spawn intervals must satisfy 1 <= min_spawn_interval <= base_spawn_interval, "
                f"got {self.min_spawn_interval} / {self.base_spawn_interval}"
            )

    @property
    def lane_width(self):
        return self.width / self.lane_count

    @property
    def center_lane(self):
        return self.lane_count // 2

    @property
    def player_y(self):
        return self.height - self.player_offset

    @property
    def despawn_y(self):
        return self.height + self.despawn_margin

    def lane_center(self, lane):
        """Horizontal anchor of a lane."""
        return lane * self.lane_width + self.lane_width / 2

    def clamp_lane(self, lane):
        return max(0, min(self.lane_count - 1, lane))

    def speed_for_score(self, score):
        return self.base_speed + min(self.max_speed_bonus, score / self.speed_score_divisor)

    def spawn_interval_for_score(self, score):
        return max(self.min_spawn_interval,
                   self.base_spawn_interval - math.floor(score / self.spawn_score_divisor))

    def collides(self, player_lane, obstacle):
        """Axis-aligned proximity test between the player and one obstacle."""
        reach = self.player_size + obstacle.size
        dx = abs(self.lane_center(player_lane) - self.lane_center(obstacle.lane))
        dy = abs(self.player_y - obstacle.y)
        return dx < reach * self.collide_x_factor and dy < reach * self.collide_y_factor


DEFAULT_RULES = Rules()


# ─────────────────────────────────────────
# Game objects
# ─────────────────────────────────────────

@dataclass
class Obstacle:
    lane: int
    y: float = float(SPAWN_Y)
    size: float = float(OBSTACLE_SIZE)

    def update(self, speed):
        self.y += speed

    def gone(self, rules):
        return self.y > rules.despawn_y


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a GameState handed to renderers once per frame."""

    lane: int
    score: int
    speed: float
    running: bool
    over: bool
    obstacles: tuple = field(default_factory=tuple)


class Scoreboard:
    """Observer that keeps the latest display values for a HUD."""

    def __init__(self):
        self.status = STATUS_IDLE
        self.score_text = "0"
        self.speed_text = "1.0x"

    def on_status(self, label):
        self.status = label

    def on_stats(self, score, speed_label):
        self.score_text = str(score)
        self.speed_text = speed_label


class GameState:
    def __init__(self, seed=None, rng=None, rules=None, observers=()):
        self.rules = rules if rules is not None else DEFAULT_RULES
        self.rng = rng if rng is not None else random.Random(seed)
        self.observers = []

        self.running = False
        self.over = False
        self.score = 0
        self.lane = self.rules.center_lane
        self.speed = float(self.rules.base_speed)
        self.spawn_timer = 0
        self.obstacles = []
        self.status = STATUS_IDLE

        for observer in observers:
            self.add_observer(observer)

    # ── Observers ───────────────────────

    def add_observer(self, observer):
        """Attach an observer and bring it up to date immediately."""
        self.observers.append(observer)
        observer.on_status(self.status)
        observer.on_stats(self.score, self.speed_label())

    def _set_status(self, label):
        self.status = label
        for observer in self.observers:
            observer.on_status(label)

    def _publish_stats(self):
        label = self.speed_label()
        for observer in self.observers:
            observer.on_stats(self.score, label)

    # ── Lifecycle ───────────────────────

    @property
    def idle(self):
        return not self.running and not self.over

    def reset(self):
        """Start a fresh run."""
        self.running = True
        self.over = False
        self.score = 0
        self.lane = self.rules.center_lane
        self.speed = float(self.rules.base_speed)
        self.spawn_timer = 0
        self.obstacles.clear()
        self._set_status(STATUS_RUNNING)
        return self

    def step(self):
        """Advance game by one frame."""
        if not self.running:
            return

        rules = self.rules
        self.score += 1
        self.speed = rules.speed_for_score(self.score)

        self.spawn_timer += 1
        if self.spawn_timer >= rules.spawn_interval_for_score(self.score):
            self.spawn_timer = 0
            self.spawn_obstacle()

        for o in self.obstacles:
            o.update(self.speed)
        self.obstacles = [o for o in self.obstacles if not o.gone(rules)]

        if self._check_collision():
            self.running = False
            self.over = True
            self._set_status(STATUS_FAILED)

        self._publish_stats()

    def spawn_obstacle(self):
        rules = self.rules
        lane = self.rng.randint(0, rules.lane_count - 1)
        obstacle = Obstacle(lane, float(rules.spawn_y), float(rules.obstacle_size))
        self.obstacles.append(obstacle)
        return obstacle

    def _check_collision(self):
        return any(self.rules.collides(self.lane, o) for o in self.obstacles)

    # ── Input ───────────────────────────

    def move_left(self):
        if self.running:
            self.lane = self.rules.clamp_lane(self.lane - 1)

    def move_right(self):
        if self.running:
            self.lane = self.rules.clamp_lane(self.lane + 1)

    def request_start(self):
        """Start input: begins a run unless one is already in progress."""
        if not self.running:
            self.reset()

    # ── Views ───────────────────────────

    def speed_label(self):
        return f"{self.speed / self.rules.base_speed:.1f}x"

    def snapshot(self):
        return Snapshot(
            lane=self.lane,
            score=self.score,
            speed=self.speed,
            running=self.running,
            over=self.over,
            obstacles=tuple(replace(o) for o in self.obstacles),
        )

    def encode(self):
        """Encode current state as dict for replay frames."""
        obs_list = [[o.lane, o.y / self.rules.height] for o in self.obstacles]
        return {
            "lane": self.lane,
            "obs": obs_list,
            "running": self.running,
            "over": self.over,
            "score": self.score,
            "speed": self.speed,
        }

    def nearest_obstacles(self):
        """Return normalized distance to nearest obstacle in each lane. 1.0 = no obstacle."""
        rules = self.rules
        distances = [1.0] * rules.lane_count
        player_y = rules.player_y
        for o in self.obstacles:
            if o.y < player_y:  # only obstacles still ahead of the player
                norm_dist = (player_y - o.y) / rules.height
                if norm_dist < distances[o.lane]:
                    distances[o.lane] = norm_dist
        return distances
