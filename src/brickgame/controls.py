"""Translate raw key codes into engine intents."""

from __future__ import annotations

from typing import Dict, Union

from .session import NO_INTENT, GameStatus, Intent

# Key codes as reported by curses.  Front-ends using other toolkits map their
# own key events onto these values first.
KEY_DOWN = 0o402
KEY_UP = 0o403
KEY_LEFT = 0o404
KEY_RIGHT = 0o405
ENTER_KEY = 10
NO_INPUT = -1

RawInput = Union[int, str, None]

KEY_INTENTS: Dict[int, Intent] = {
    ord(" "): Intent.ACTION,
    KEY_DOWN: Intent.DOWN,
    KEY_UP: Intent.UP,
    KEY_LEFT: Intent.LEFT,
    KEY_RIGHT: Intent.RIGHT,
    ord("p"): Intent.PAUSE,
    ord("P"): Intent.PAUSE,
    ord("q"): Intent.TERMINATE,
    ord("Q"): Intent.TERMINATE,
    ENTER_KEY: Intent.START,
}

# While no game is running only starting a new one or quitting makes sense.
_IDLE_STATUSES = (GameStatus.LOST, GameStatus.STARTING)
_IDLE_INTENTS = (Intent.START, Intent.TERMINATE)


def _key_code(raw_input: RawInput) -> int:
    if isinstance(raw_input, str):
        return ord(raw_input) if len(raw_input) == 1 else NO_INPUT
    if isinstance(raw_input, int) and not isinstance(raw_input, bool):
        return raw_input
    return NO_INPUT


def translate(raw_input: RawInput, status: GameStatus) -> Intent:
    """Return the intent for ``raw_input`` given the current ``status``.

    Unknown, malformed or out-of-range input maps to the neutral intent.
    """

    intent = KEY_INTENTS.get(_key_code(raw_input), NO_INTENT)
    if status in _IDLE_STATUSES and intent not in _IDLE_INTENTS:
        return NO_INTENT
    return intent
