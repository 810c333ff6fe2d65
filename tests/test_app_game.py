"""Tests for the pygame presentation layer — rendering and input forwarding."""

import os
import sys
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from game_engine import DEFAULT_RULES, GameState, Obstacle, Rules, STATUS_RUNNING
from lanerunner.config.loader import load_settings
from lanerunner.ui.game.app_game import LaneRunnerApp, dispatch_intent
from lanerunner.ui.game.render import (
    C_BG,
    C_OBS,
    C_PLAYER,
    C_TRACK,
    draw_scene,
    overlay_lines,
    track_corners,
)


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


class TestRender:
    def test_track_corners(self):
        (lt, top), (rt, _), (rb, bottom), (lb, _) = track_corners(DEFAULT_RULES)
        assert top == 0 and bottom == DEFAULT_RULES.height
        assert rt - lt == pytest.approx(DEFAULT_RULES.width * 0.28)
        assert rb - lb == pytest.approx(DEFAULT_RULES.width * 0.95)

    def test_draw_scene_pixels(self):
        """Player, obstacle and track land where the rules place them."""
        gs = GameState(seed=1)
        gs.reset()
        gs.obstacles.append(Obstacle(0, 300.0))
        surf = pygame.Surface((int(DEFAULT_RULES.width), int(DEFAULT_RULES.height)))
        draw_scene(surf, DEFAULT_RULES, gs.snapshot())

        assert tuple(surf.get_at((180, int(DEFAULT_RULES.player_y))))[:3] == C_PLAYER
        assert tuple(surf.get_at((60, 300)))[:3] == C_OBS
        assert tuple(surf.get_at((180, 200)))[:3] == C_TRACK
        assert tuple(surf.get_at((2, 320)))[:3] == C_BG

    def test_overlay_lines(self):
        gs = GameState(seed=1)
        assert overlay_lines(gs.snapshot()) == ["READY", "press SPACE to start"]
        gs.reset()
        assert overlay_lines(gs.snapshot()) == []
        gs.obstacles.append(Obstacle(1, DEFAULT_RULES.player_y))
        gs.step()
        assert overlay_lines(gs.snapshot(), best=12) == ["GAME OVER", "best 12", "press SPACE to start"]


class TestInputForwarding:
    def test_dispatch_intent(self):
        gs = GameState(seed=1)
        dispatch_intent(gs, "left")
        assert gs.lane == 1  # idle: ignored
        dispatch_intent(gs, "start")
        assert gs.running
        dispatch_intent(gs, "left")
        assert gs.lane == 0
        dispatch_intent(gs, "right")
        dispatch_intent(gs, "right")
        assert gs.lane == 2


class TestApp:
    def test_keys_drive_game(self):
        app = LaneRunnerApp(load_settings(seed=2))
        try:
            app.handle_event(key(pygame.K_SPACE))
            assert app.game.running
            assert app.scoreboard.status == STATUS_RUNNING
            app.handle_event(key(pygame.K_a))
            assert app.game.lane == 0
            app.handle_event(key(pygame.K_RIGHT))
            assert app.game.lane == 1
            app.handle_event(key(pygame.K_SPACE))
            assert app.game.running  # no mid-run restart
        finally:
            pygame.quit()

    def test_quit_and_escape_stop(self):
        app = LaneRunnerApp(load_settings())
        try:
            app._running = True
            app.handle_event(pygame.event.Event(pygame.QUIT))
            assert app._running is False
            app._running = True
            app.handle_event(key(pygame.K_ESCAPE))
            assert app._running is False
        finally:
            pygame.quit()

    def test_best_tracked_on_game_over(self):
        app = LaneRunnerApp(load_settings(seed=2))
        try:
            app.game.request_start()
            for _ in range(5):
                app.update()
            app.game.obstacles.append(Obstacle(1, DEFAULT_RULES.player_y))
            app.update()
            assert app.game.over
            assert app.best == 6
        finally:
            pygame.quit()

    def test_run_stops_after_max_frames(self):
        app = LaneRunnerApp(load_settings(fps=1000))
        app.game.request_start()
        drawn = app.run(max_frames=5)
        assert drawn == 5
        assert app.game.score == 5

    def test_injected_game_sets_geometry(self):
        """A 5-lane game gets a 5-lane track, and every lane fits in the window."""
        rules = Rules(width=600, lane_count=5)
        app = LaneRunnerApp(load_settings(), game=GameState(seed=1, rules=rules))
        try:
            assert app.rules is app.game.rules
            assert app.rules.lane_count == 5
            assert app.screen.get_width() == 600
            assert app.rules.lane_center(4) < app.screen.get_width()
        finally:
            pygame.quit()

    def test_display_failure_releases_pygame(self, monkeypatch):
        """If the window cannot open, pygame is shut down before the error propagates."""
        calls = []
        real_quit = pygame.quit

        def failing_set_mode(*args, **kwargs):
            raise pygame.error("no display available")

        def recording_quit():
            calls.append("quit")
            real_quit()

        monkeypatch.setattr(pygame.display, "set_mode", failing_set_mode)
        monkeypatch.setattr(pygame, "quit", recording_quit)
        with pytest.raises(RuntimeError, match="no display"):
            LaneRunnerApp(load_settings())
        assert calls == ["quit"]
