"""MoveEffect value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import MoveKind
from chesscore.core.types import SquareId, square_name


@dataclass(frozen=True, slots=True)
class MoveEffect:
    """Everything a committed move changes, expressed as plain data.

    ``secondary_mover_id``/``secondary_to`` describe the rook of a castling
    move.  ``promotes`` marks a pawn landing on its last rank: the turn does
    not pass until a promotion type is chosen.
    """

    kind: MoveKind
    mover_id: int
    to: SquareId
    captured_id: int | None = None
    secondary_mover_id: int | None = None
    secondary_to: SquareId | None = None
    promotes: bool = False

    @property
    def is_capture(self) -> bool:
        return self.captured_id is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        sep = "x" if self.is_capture else "-"
        text = f"#{self.mover_id}{sep}{square_name(self.to)}"
        if self.kind == MoveKind.CASTLE:
            text += " (castle)"
        elif self.kind == MoveKind.EN_PASSANT:
            text += " e.p."
        if self.promotes:
            text += "="
        return text
