"""Best-effort persistence of a single high score."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Union

LOGGER = logging.getLogger(__name__)

DEFAULT_DIRECTORY = Path.home() / ".brickgame"


def default_path(game: str) -> Path:
    """Return the default high score file for ``game``."""

    return DEFAULT_DIRECTORY / f"{game}_high_score.txt"


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class FileHighScoreStore:
    """Store the high score as a decimal integer in a text file.

    Reading a missing or unreadable file yields ``0``; write failures are
    logged and otherwise ignored.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> int:
        try:
            score = int(self.path.read_text(encoding="utf-8").strip())
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as exc:
            LOGGER.warning("Could not read high score from %s: %s", self.path, exc)
            return 0
        return max(score, 0)

    def save(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(f"{int(score)}", encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Could not write high score to %s: %s", self.path, exc)


class MemoryHighScoreStore:
    """Keep the high score in memory; used by tests and throwaway sessions."""

    def __init__(self, score: int = 0) -> None:
        self.score = score
        self.saves = 0

    def load(self) -> int:
        return self.score

    def save(self, score: int) -> None:
        self.score = score
        self.saves += 1
