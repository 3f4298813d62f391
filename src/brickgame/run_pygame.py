"""Simple pygame front-end for the brick game engines.

This module drives either engine from a pygame window.  Key presses are
mapped onto the raw key codes understood by :func:`brickgame.controls.translate`
and every frame runs exactly one engine tick; all drawing works from the
returned :class:`~brickgame.snapshot.Snapshot`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Optional

import pygame

from . import ENGINES
from .controls import ENTER_KEY, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP, NO_INPUT, translate
from .engine import Engine
from .grid import EMPTY, HEIGHT, MARKER, WIDTH
from .highscore import FileHighScoreStore, default_path
from .session import NO_INTENT, GameStatus, Session
from .snapshot import Snapshot

LOGGER = logging.getLogger(__name__)

# Size of a single grid cell in pixels
CELL_SIZE = 30
# Width of the side panel holding score, level and preview
HUD_WIDTH = 180
# Engine ticks per second
TICK_RATE = 1000

CELL_COLORS = {
    EMPTY: (0, 0, 0),
    MARKER: (220, 40, 40),
}
BLOCK_COLOR = (0, 200, 200)
GRID_LINE_COLOR = (50, 50, 50)
TEXT_COLOR = (230, 230, 230)

KEY_CODES = {
    pygame.K_SPACE: ord(" "),
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_UP: KEY_UP,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_p: ord("p"),
    pygame.K_q: ord("q"),
    pygame.K_RETURN: ENTER_KEY,
    pygame.K_KP_ENTER: ENTER_KEY,
}

STATUS_TEXT = {
    GameStatus.STARTING: "Press Enter to start",
    GameStatus.PLAYING: "",
    GameStatus.PAUSED: "Paused",
    GameStatus.LOST: "Game over - Enter to retry",
    GameStatus.WON: "You won - Enter to retry",
    GameStatus.EXITED: "",
}


def raw_key(key: int) -> int:
    """Return the raw key code for a pygame key constant."""

    return KEY_CODES.get(key, NO_INPUT)


def draw_grid(screen: pygame.Surface, snapshot: Snapshot) -> None:
    """Render the playing field."""

    if snapshot.grid is None:
        return
    for r, row in enumerate(snapshot.grid):
        for c, value in enumerate(row):
            color = CELL_COLORS.get(value, BLOCK_COLOR)
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE_COLOR, rect, 1)


def draw_hud(screen: pygame.Surface, font: pygame.font.Font, snapshot: Snapshot) -> None:
    """Render score, level, status and the preview piece in the side panel."""

    left = WIDTH * CELL_SIZE + 10
    lines = [
        f"Score: {snapshot.score}",
        f"High: {snapshot.high_score}",
        f"Level: {snapshot.level}",
        f"Speed: {snapshot.speed}",
        STATUS_TEXT[snapshot.status],
    ]
    y = 10
    for line in lines:
        if line:
            screen.blit(font.render(line, True, TEXT_COLOR), (left, y))
        y += 24

    if snapshot.preview is not None:
        size = CELL_SIZE // 2
        for r, row in enumerate(snapshot.preview):
            for c, value in enumerate(row):
                if value:
                    rect = pygame.Rect(left + c * size, y + r * size, size, size)
                    pygame.draw.rect(screen, BLOCK_COLOR, rect)


class GameRunner:
    """Own a session and pump it through the engine once per frame."""

    def __init__(self, engine: Engine, session: Session, tick_rate: int = TICK_RATE) -> None:
        self.engine = engine
        self.session = session
        self.tick_rate = tick_rate
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None
        self._clock: Optional[pygame.time.Clock] = None

    @property
    def running(self) -> bool:
        return self._running

    def handle_event(self, event: pygame.event.Event) -> None:
        """Turn a pygame event into the session's pending intent."""

        if event.type == pygame.QUIT:
            self.session.submit_intent(translate(ord("q"), self.session.status))
        elif event.type == pygame.KEYDOWN:
            intent = translate(raw_key(event.key), self.session.status)
            if intent is not NO_INTENT:
                self.session.submit_intent(intent)

    async def _run_loop(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas in the page when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        self._screen = pygame.display.set_mode((WIDTH * CELL_SIZE + HUD_WIDTH, HEIGHT * CELL_SIZE))
        pygame.display.set_caption(self.engine.name.capitalize())
        self._font = pygame.font.Font(None, 24)
        self._clock = pygame.time.Clock()
        LOGGER.info("%s window opened", self.engine.name)

        self._running = True
        while self._running:
            self._clock.tick(self.tick_rate)
            for event in pygame.event.get():
                self.handle_event(event)

            snapshot = self.engine.tick(self.session)
            if snapshot.status is GameStatus.EXITED:
                self._running = False
                break

            self._screen.fill((0, 0, 0))
            draw_grid(self._screen, snapshot)
            draw_hud(self._screen, self._font, snapshot)
            pygame.display.flip()

            # Yield to the browser/host event loop to keep UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("%s window closed", self.engine.name)

    def run(self) -> None:
        asyncio.run(self._run_loop())


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--game", choices=sorted(ENGINES), default="tetris")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source.")
    parser.add_argument("--tick-rate", type=int, default=TICK_RATE, help="Engine ticks per second.")
    parser.add_argument(
        "--high-score-file",
        default=None,
        help="Where to keep the high score (defaults to ~/.brickgame/<game>_high_score.txt).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    store = FileHighScoreStore(args.high_score_file or default_path(args.game))
    engine = ENGINES[args.game](high_scores=store)
    session = engine.new_session(seed=args.seed)
    GameRunner(engine, session, tick_rate=args.tick_rate).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
