"""User-configurable game settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from chesscore.core.enums import PieceType

DEFAULT_SAVE_PATH = Path("save.txt")


def _default_promotion_keys() -> dict[str, PieceType]:
    return {
        "q": PieceType.QUEEN,
        "b": PieceType.BISHOP,
        "k": PieceType.KNIGHT,
        "r": PieceType.ROOK,
    }


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # Persistence
    save_path: Path = DEFAULT_SAVE_PATH

    # Board
    show_legal_moves: bool = False

    # Input: key → promotion choice
    promotion_keys: dict[str, PieceType] = field(default_factory=_default_promotion_keys)

    def promotion_for_key(self, key: str) -> PieceType | None:
        return self.promotion_keys.get(key.lower())
