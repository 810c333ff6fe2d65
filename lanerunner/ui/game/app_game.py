#!/usr/bin/env python3
from __future__ import annotations
"""
LANE RUNNER — dodge the blocks, one lane at a time.
Left/Right (or A/D) to switch lanes, Space to start, Esc to quit.

Requirements:
    pip install pygame
"""

import pygame

from game_engine import GameState, Scoreboard
from lanerunner.config.schema import Settings
from lanerunner.ui.game.render import draw_hud, draw_overlay, draw_scene, overlay_lines

INTENT_LEFT = "left"
INTENT_RIGHT = "right"
INTENT_START = "start"

KEY_INTENTS = {
    pygame.K_LEFT: INTENT_LEFT,
    pygame.K_a: INTENT_LEFT,
    pygame.K_RIGHT: INTENT_RIGHT,
    pygame.K_d: INTENT_RIGHT,
    pygame.K_SPACE: INTENT_START,
}


def dispatch_intent(game: GameState, intent: str) -> None:
    """Forward one logical intent to the matching core mutator."""
    if intent == INTENT_LEFT:
        game.move_left()
    elif intent == INTENT_RIGHT:
        game.move_right()
    elif intent == INTENT_START:
        game.request_start()


class LaneRunnerApp:
    """Window, input and the fixed-cadence frame driver around one GameState."""

    def __init__(self, settings: Settings, game: GameState | None = None):
        self.settings = settings
        self.scoreboard = Scoreboard()
        self.game = game if game is not None else GameState(seed=settings.seed, rules=settings.rules)
        # an injected game brings its own track geometry
        self.rules = self.game.rules
        self.game.add_observer(self.scoreboard)
        self.best = 0
        self.frames = 0
        self._running = False

        pygame.init()
        try:
            self.screen = pygame.display.set_mode((int(self.rules.width), int(self.rules.height)))
        except pygame.error:
            pygame.quit()
            raise
        pygame.display.set_caption("LANE RUNNER")
        self.clock = pygame.time.Clock()

        try:
            self.font_hud = pygame.font.SysFont("Courier New", 16, bold=True)
            self.font_title = pygame.font.SysFont("Courier New", 34, bold=True)
            self.font_sub = pygame.font.SysFont("Courier New", 20)
        except Exception:
            self.font_hud = pygame.font.SysFont(None, 16)
            self.font_title = pygame.font.SysFont(None, 34)
            self.font_sub = pygame.font.SysFont(None, 20)

    # ── Events ──────────────────────

    def handle_event(self, event) -> None:
        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.stop()
                return
            intent = KEY_INTENTS.get(event.key)
            if intent is not None:
                dispatch_intent(self.game, intent)

    # ── Frame ───────────────────────

    def update(self) -> None:
        was_running = self.game.running
        self.game.step()
        if was_running and self.game.over:
            self.best = max(self.best, self.game.score)
            print(f"[play] run over: score={self.game.score} best={self.best}", flush=True)

    def render(self) -> None:
        snap = self.game.snapshot()
        draw_scene(self.screen, self.rules, snap)
        board = self.scoreboard
        draw_hud(self.screen, self.font_hud, board.score_text, board.speed_text, board.status)
        draw_overlay(self.screen, self.font_title, self.font_sub, overlay_lines(snap, self.best))
        pygame.display.flip()

    def frame(self) -> None:
        """One tick: drain input, advance the simulation, draw."""
        for event in pygame.event.get():
            self.handle_event(event)
        if not self._running:
            return
        self.update()
        self.render()
        self.frames += 1

    # ── Driver ──────────────────────

    def stop(self) -> None:
        self._running = False

    def run(self, max_frames: int | None = None) -> int:
        """Drive frames at the configured fps until stopped. Returns frames drawn."""
        self._running = True
        try:
            self.render()
            while self._running:
                self.clock.tick(self.settings.fps)
                self.frame()
                if max_frames is not None and self.frames >= max_frames:
                    self.stop()
        finally:
            pygame.quit()
        return self.frames


def main(settings: Settings | None = None) -> int:
    if settings is None:
        from lanerunner.config.loader import load_settings

        settings = load_settings()
    return LaneRunnerApp(settings).run()


if __name__ == "__main__":
    main()
