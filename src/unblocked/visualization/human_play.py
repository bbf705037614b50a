from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pygame

from unblocked.game import GameState, Level, ScoreBook, load_levels
from unblocked.replay import PlaybackStatus, PlayerState, RealClock, ReplayStore
from unblocked.session import SessionController
from .renderer import Renderer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Unblocked")
    p.add_argument("--level", type=int, default=None, help="level number (default: highest unlocked)")
    p.add_argument("--levels", type=Path, default=None, help="level pack file (default: bundled pack)")
    p.add_argument("--data-dir", type=Path, default=Path.home() / ".unblocked",
                   help="where hiscores and replays are kept")
    p.add_argument("--verbose", action="store_true")
    return p


def _sync_progress(session: SessionController, scores: ScoreBook) -> None:
    if session.progress != scores.get(session.level.level_id):
        scores.update(session.level.level_id, session.progress)


def _new_session(level: Level, scores: ScoreBook, store: ReplayStore, clock: RealClock) -> SessionController:
    logger.info("Starting level %d (%s)", level.level_id, level.name)
    return SessionController(level, scores.get(level.level_id), clock=clock, store=store)


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    levels = load_levels(args.levels)
    scores = ScoreBook(args.data_dir / "hiscores.json")
    store = ReplayStore(args.data_dir / "replays")
    clock = RealClock()
    index = (args.level or min(scores.max_level, len(levels))) - 1
    index = max(0, min(index, len(levels) - 1))

    session: Optional[SessionController] = None
    pygame.init()
    try:
        renderer = Renderer()
        session = _new_session(levels[index], scores, store, clock)
        screen = pygame.display.set_mode(renderer.window_size(session.board))
        pygame.display.set_caption("Unblocked")
        frame_clock = pygame.time.Clock()
        message = ""

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    session.abort()
                    running = False
                elif event.type != pygame.KEYDOWN:
                    continue
                elif session.is_watching:
                    if event.key in (pygame.K_ESCAPE, pygame.K_SPACE, pygame.K_RETURN):
                        session.close_playback()
                        message = ""
                    elif event.key == pygame.K_TAB:
                        session.fast_forward_playback()
                elif event.key == pygame.K_ESCAPE:
                    session.abort()
                    running = False
                elif event.key == pygame.K_UP:
                    session.move_up()
                elif event.key == pygame.K_DOWN:
                    session.move_down()
                elif event.key == pygame.K_SPACE:
                    session.throw()
                elif event.key == pygame.K_F5:
                    message = "Replay saved" if session.save_replay() else "Nothing to save"
                elif event.key == pygame.K_F1:
                    status = session.start_playback()
                    message = "" if status == PlaybackStatus.STARTED else status.value
                elif event.key == pygame.K_r:
                    session.restart()
                    message = ""
                elif event.key == pygame.K_RETURN and session.state != GameState.PLAYING:
                    _sync_progress(session, scores)
                    if session.state == GameState.WON and index + 1 < len(levels):
                        index += 1
                    session = _new_session(levels[index], scores, store, clock)
                    screen = pygame.display.set_mode(renderer.window_size(session.board))
                    message = ""

            session.update()
            _sync_progress(session, scores)

            replay_percent = None
            if session.playback is not None:
                replay_percent = session.playback.progress
                if session.replay_state == PlayerState.FINISHED:
                    replay_percent = 100
                    message = "Replay completed"
            level = session.level
            renderer.draw(
                screen,
                session.board,
                session.state,
                session.throws,
                session.progress,
                title=f"Level {level.level_id}: {level.name}",
                replay_percent=replay_percent,
                message=message,
            )
            frame_clock.tick(60)
    finally:
        if session is not None:
            _sync_progress(session, scores)
        scores.save()
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
