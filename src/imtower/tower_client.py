#!/usr/bin/env python3
"""
tower_client.py

pygame front end: input wiring, fixed-timestep driving and rendering.
The simulation itself lives in physics_session.GameSession.
"""

import logging
from typing import Dict, Optional, Tuple

import pygame

from .collaborators import ScoreStore, SessionListener
from .data_models import TowerConfig, RunPhase
from .physics_session import GameSession, FixedStepDriver

logger = logging.getLogger(__name__)

# RENDER_FPS can be faster than TICK_RATE for smooth rendering
RENDER_FPS = 60

GAME_TITLE = "임타워 - 임지훈을 쌓아라"

Color = Tuple[int, int, int]

BACKGROUND: Color = (24, 28, 52)
BASE_FILL: Color = (255, 255, 255)
BASE_OUTLINE: Color = (153, 153, 153)
ACTIVE_FALLBACK: Color = (255, 136, 136)
PLACED_FALLBACK: Color = (255, 204, 0)
BLOCK_COLORS: Dict[str, Color] = {
    "jihun1": (255, 204, 0),
    "jihun2": (102, 204, 255),
    "jihun3": (153, 230, 140),
}


def block_color(tag: Optional[str], fallback: Color) -> Color:
    """Colour standing in for the block's image."""
    if tag is None:
        return fallback
    return BLOCK_COLORS.get(tag, fallback)


def share_message(score: int) -> str:
    return f"내 임타워 기록은 {score}층! 당신도 도전해 보세요."


class TowerClient(SessionListener):
    def __init__(self, store: ScoreStore, config: Optional[TowerConfig] = None,
                 rng=None, share_url: str = ""):
        pygame.init()
        self.share_url = share_url
        self.config = config or TowerConfig()
        self.screen = pygame.display.set_mode(
            (int(self.config.field_width), int(self.config.field_height)))
        pygame.display.set_caption(GAME_TITLE)

        # --- Game Logic ---
        self.session = GameSession(self.config, store=store, listener=self, rng=rng)
        self.driver = FixedStepDriver(self.session)

        # HUD state, updated by the session notifications
        self.displayed_score = 0
        self.overlay_visible = False

        self.clock = pygame.time.Clock()
        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)

    # ----------------- Lifecycle notifications -----------------

    def on_score_changed(self, score: int):
        self.displayed_score = score
        self.overlay_visible = False

    def on_game_over(self):
        self.overlay_visible = True

    # ----------------- Main loop -----------------

    def run(self):
        """The main client execution loop."""
        self._restart()

        running = True
        while running:
            frame_delta = self.clock.tick(RENDER_FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    self.driver.request_drop()

            self.driver.advance(frame_delta)
            self._draw_game()

        pygame.quit()

    def _handle_key(self, key) -> bool:
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_SPACE:
            self.driver.request_drop()
        elif key == pygame.K_r:
            self._restart()
        elif key == pygame.K_h:
            self._return_to_start()
        elif key == pygame.K_s:
            self._share()
        return True

    def _restart(self):
        self.driver.reset()
        self.session.restart()

    def _return_to_start(self):
        self.driver.reset()
        self.session.return_to_start()

    def _share(self):
        text = share_message(self.session.score)
        if self.share_url:
            text = f"{text} {self.share_url}"
        logger.info(f"Share: {text}")
        try:
            if not pygame.scrap.get_init():
                pygame.scrap.init()
            pygame.scrap.put(pygame.SCRAP_TEXT, text.encode("utf-8"))
        except (pygame.error, NotImplementedError) as e:
            logger.warning(f"Clipboard unavailable, copy the link manually: {e}")

    # ----------------- Rendering -----------------

    def _draw_game(self):
        """Renders the stack, the active block and the HUD."""
        screen = self.screen
        screen.fill(BACKGROUND)
        white = (255, 255, 255)

        for index, block in enumerate(self.session.stack_snapshot()):
            rect = pygame.Rect(round(block.x), round(block.y), round(block.width), round(block.height))
            if index == 0:
                pygame.draw.rect(screen, BASE_FILL, rect)
                pygame.draw.rect(screen, BASE_OUTLINE, rect, 2)
            else:
                pygame.draw.rect(screen, block_color(block.tag, PLACED_FALLBACK), rect)

        active = self.session.active_snapshot()
        if active and self.session.phase is not RunPhase.IDLE:
            rect = pygame.Rect(round(active.x), round(active.y), round(active.width), round(active.height))
            pygame.draw.rect(screen, block_color(active.tag, ACTIVE_FALLBACK), rect)

        # HUD
        score_text = self.large_font.render(f"{self.displayed_score}", True, white)
        screen.blit(score_text, (screen.get_width() // 2 - score_text.get_width() // 2, 20))
        best_text = self.font.render(f"Best: {self.session.best_score}", True, (200, 200, 200))
        screen.blit(best_text, (10, 10))

        if self.overlay_visible:
            self._draw_overlay()

        pygame.display.flip()

    def _draw_overlay(self):
        screen = self.screen
        width, height = screen.get_size()
        shade = pygame.Surface((width, height), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 160))
        screen.blit(shade, (0, 0))

        lines = [
            (self.large_font, f"Game Over - {self.session.score}", (255, 90, 90)),
            (self.font, "R = Restart | H = Home | S = Share", (220, 220, 220)),
            (self.font, "Esc = Quit", (220, 220, 220)),
        ]
        y = height // 2 - 40
        for font, text, color in lines:
            surf = font.render(text, True, color)
            screen.blit(surf, (width // 2 - surf.get_width() // 2, y))
            y += surf.get_height() + 12
