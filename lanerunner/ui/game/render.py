from __future__ import annotations

"""Pygame rendering primitives for the Lane Runner window."""

import pygame

from game_engine import Rules, Snapshot

C_BG = (16, 24, 32)
C_TRACK = (63, 79, 90)
C_DIVIDER = (255, 255, 255, 90)
C_PLAYER = (59, 255, 203)
C_EYES = (11, 31, 43)
C_OBS = (255, 87, 87)
C_WHITE = (255, 255, 255)
C_DIM = (160, 170, 180)
C_SHADE = (0, 0, 0, 122)

TRACK_TOP_RATIO = 0.28
TRACK_BOTTOM_RATIO = 0.95

HUD_HEIGHT = 40


def track_corners(rules: Rules) -> tuple[tuple[float, float], ...]:
    """Trapezoid corners (top-left, top-right, bottom-right, bottom-left)."""
    top_w = rules.width * TRACK_TOP_RATIO
    bottom_w = rules.width * TRACK_BOTTOM_RATIO
    cx = rules.width / 2
    return (
        (cx - top_w / 2, 0),
        (cx + top_w / 2, 0),
        (cx + bottom_w / 2, rules.height),
        (cx - bottom_w / 2, rules.height),
    )


def draw_track(surf, rules: Rules) -> None:
    surf.fill(C_BG)
    corners = track_corners(rules)
    pygame.draw.polygon(surf, C_TRACK, corners)

    (lt, _), (rt, _), (rb, _), (lb, _) = corners
    overlay = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    for i in range(1, rules.lane_count):
        t = i / rules.lane_count
        x_top = lt + (rt - lt) * t
        x_bottom = lb + (rb - lb) * t
        pygame.draw.line(overlay, C_DIVIDER, (x_top, 0), (x_bottom, rules.height), 2)
    surf.blit(overlay, (0, 0))


def square_rect(cx: float, cy: float, size: float) -> pygame.Rect:
    return pygame.Rect(int(cx - size / 2), int(cy - size / 2), int(size), int(size))


def draw_player(surf, rules: Rules, lane: int) -> None:
    x = rules.lane_center(lane)
    y = rules.player_y
    pygame.draw.rect(surf, C_PLAYER, square_rect(x, y, rules.player_size), border_radius=8)
    pygame.draw.rect(surf, C_EYES, (int(x - 8), int(y - 8), 5, 5))
    pygame.draw.rect(surf, C_EYES, (int(x + 3), int(y - 8), 5, 5))


def draw_obstacles(surf, rules: Rules, obstacles) -> None:
    for o in obstacles:
        rect = square_rect(rules.lane_center(o.lane), o.y, o.size)
        pygame.draw.rect(surf, C_OBS, rect, border_radius=6)


def draw_hud(surf, font, score_text: str, speed_text: str, status: str) -> None:
    """Score, speed and status strip along the top edge."""
    width = surf.get_width()
    strip = pygame.Surface((width, HUD_HEIGHT), pygame.SRCALPHA)
    strip.fill((0, 0, 0, 110))
    surf.blit(strip, (0, 0))

    left = font.render(f"score {score_text}", True, C_WHITE)
    right = font.render(speed_text, True, C_WHITE)
    middle = font.render(status, True, C_DIM)
    y = HUD_HEIGHT // 2
    surf.blit(left, (10, y - left.get_height() // 2))
    surf.blit(middle, (width // 2 - middle.get_width() // 2, y - middle.get_height() // 2))
    surf.blit(right, (width - right.get_width() - 10, y - right.get_height() // 2))


def overlay_lines(snapshot: Snapshot, best: int = 0) -> list[str]:
    """Overlay text shown while not running; empty while running."""
    if snapshot.running:
        return []
    lines = ["GAME OVER" if snapshot.over else "READY"]
    if snapshot.over and best > 0:
        lines.append(f"best {best}")
    lines.append("press SPACE to start")
    return lines


def draw_overlay(surf, font_title, font_sub, lines: list[str]) -> None:
    if not lines:
        return
    width, height = surf.get_size()
    dim = pygame.Surface((width, height), pygame.SRCALPHA)
    dim.fill(C_SHADE)
    surf.blit(dim, (0, 0))

    title, *rest = lines
    t = font_title.render(title, True, C_WHITE)
    surf.blit(t, (width // 2 - t.get_width() // 2, height // 2 - 20 - t.get_height()))
    y = height // 2 + 10
    for line in rest:
        s = font_sub.render(line, True, C_DIM)
        surf.blit(s, (width // 2 - s.get_width() // 2, y))
        y += s.get_height() + 8


def draw_scene(surf, rules: Rules, snapshot: Snapshot) -> None:
    """Track, obstacles and player; text layers are drawn by the caller."""
    draw_track(surf, rules)
    draw_obstacles(surf, rules, snapshot.obstacles)
    draw_player(surf, rules, snapshot.lane)
