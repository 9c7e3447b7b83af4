from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import pygame

from bricks.game import GameConfig, GameSession, SessionState
from bricks.game.events import GameEvent
from .renderer import Renderer


logger = logging.getLogger(__name__)

PAUSE_KEYS = (pygame.K_p, pygame.K_ESCAPE)
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


def handle_key(session: GameSession, key: int, pressed: bool) -> List[GameEvent]:
    """Translate one key transition into session intents."""
    if session.state == SessionState.HOME:
        if not pressed:
            return []
        if key == pygame.K_LEFT:
            return session.change_start_level(-1)
        if key == pygame.K_RIGHT:
            return session.change_start_level(1)
        if key in CONFIRM_KEYS:
            return session.confirm()
        return []

    if key == pygame.K_LEFT:
        return session.move(-1 if pressed else 0)
    if key == pygame.K_RIGHT:
        return session.move(1 if pressed else 0)
    if key == pygame.K_DOWN:
        return session.soft_drop(pressed)
    if not pressed:
        return []
    if key == pygame.K_UP:
        return session.rotate()
    if key == pygame.K_SPACE:
        return session.hard_drop()
    if key in PAUSE_KEYS:
        return session.pause()
    if key in CONFIRM_KEYS:
        return session.confirm()
    return []


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Bricks with the keyboard")
    p.add_argument("--level", type=int, default=1, help="starting level (>= 1)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    session = GameSession(GameConfig(start_level=args.level, random_seed=args.seed))
    renderer = Renderer(cell_size=args.cell_size)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(session))
        pygame.display.set_caption("Bricks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                    if event.key == pygame.K_q:
                        running = False
                    else:
                        handle_key(session, event.key, event.type == pygame.KEYDOWN)

            elapsed = clock.tick(args.fps) / 1000.0
            session.tick(elapsed)
            renderer.draw(screen, session)
    finally:
        logger.info("exiting with score %d", session.score)
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
