"""Abstract interfaces for the game layer.

The rendering and input collaborators depend on these types only, not on
the concrete :class:`~chesscore.game.controller.TurnController`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chesscore.core.enums import Color, PieceType

if TYPE_CHECKING:
    from chesscore.core.move import MoveEffect
    from chesscore.core.types import SquareId


# ── Turn FSM states ──────────────────────────────────────────────────────────


class TurnPhase(IntEnum):
    """Finite-state-machine states of the selection/turn cycle."""

    IDLE = auto()
    SELECTED = auto()
    PROMOTION_PENDING = auto()


# ── Input events ─────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PickEvent:
    """A click already resolved to the piece and/or square under the cursor.

    Either id may be missing, e.g. when the click lands on an empty square
    or outside the board.
    """

    piece_id: int | None = None
    square_id: int | None = None

    @classmethod
    def from_raw(cls, piece_id: int, square_id: int) -> PickEvent:
        """Build from id-buffer reads, where a negative value means "nothing"."""
        return cls(
            piece_id if piece_id >= 0 else None,
            square_id if square_id >= 0 else None,
        )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class ITurnController(ABC):
    """Interface of the selection/turn state machine."""

    @property
    @abstractmethod
    def turn(self) -> Color: ...

    @property
    @abstractmethod
    def legal_moves(self) -> dict[SquareId, MoveEffect]: ...

    @abstractmethod
    def pick(self, event: PickEvent) -> None:
        """Resolve a click: commit a move, change selection, or deselect."""

    @abstractmethod
    def promote(self, piece_type: PieceType) -> None:
        """Complete a pending pawn promotion. No-op if none is pending."""

    @abstractmethod
    def is_checked(self) -> bool:
        """Is the side to move in check (per the last mover)?"""

    @abstractmethod
    def is_piece_promotable(self) -> bool:
        """Is a pawn waiting for its promotion type?"""

    @abstractmethod
    def is_switching_sides(self) -> bool:
        """Has the turn passed without the renderer acknowledging it yet?"""
