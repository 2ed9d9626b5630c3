"""Quick save / quick load of a game against a file path."""

from __future__ import annotations

import logging
from pathlib import Path

from chesscore.core.notation import decode, encode
from chesscore.game.controller import TurnController

_LOGGER = logging.getLogger(__name__)


def save_game(controller: TurnController, file_path: Path) -> Path:
    """Write the current pieces and side to move to *file_path*."""
    state = controller.state
    file_path.write_text(encode(state.pieces, state.turn), encoding="utf-8")
    _LOGGER.info("Game saved to %s", file_path)
    return file_path


def load_game(controller: TurnController, file_path: Path) -> bool:
    """Replace the controller's game with the one saved at *file_path*.

    Returns False when the file is missing or unreadable; the controller
    keeps its current game in that case.  A malformed file raises
    :class:`~chesscore.core.notation.SaveFormatError` before anything is
    replaced.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _LOGGER.warning("No save file found: %s", file_path)
        return False
    except OSError as exc:
        _LOGGER.warning("Could not read save file %s: %s", file_path, exc)
        return False

    controller.load(decode(text))
    _LOGGER.info("Game loaded from %s", file_path)
    return True
