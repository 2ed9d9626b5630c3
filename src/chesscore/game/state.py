"""Game state: the pieces plus the transient selection/turn bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesscore.core.board import BoardIndex
from chesscore.core.capture_yard import CaptureYard
from chesscore.core.enums import Color
from chesscore.core.move import MoveEffect
from chesscore.core.piece import Piece
from chesscore.core.registry import PieceRegistry
from chesscore.core.types import SquareId
from chesscore.game.interfaces import TurnPhase


@dataclass
class GameState:
    """Everything the turn controller reads and writes.

    This is a pure data class without callbacks or I/O.  ``legal_moves`` is
    rebuilt on every selection and never outlives it.
    """

    pieces: PieceRegistry = field(default_factory=PieceRegistry.initial)
    turn: Color = Color.WHITE
    yard: CaptureYard = field(default_factory=CaptureYard)
    selected: int | None = None
    legal_moves: dict[SquareId, MoveEffect] = field(default_factory=dict)
    checking_piece: int | None = None
    pending_promotion: int | None = None
    switching_sides: bool = False
    board: BoardIndex = field(init=False)

    def __post_init__(self) -> None:
        self.board = BoardIndex(self.pieces)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        pieces: PieceRegistry | None = None,
        turn: Color = Color.WHITE,
        yard: CaptureYard | None = None,
    ) -> None:
        """Initialise (or reset) the game, by default to the standard setup."""
        self.pieces = pieces if pieces is not None else PieceRegistry.initial()
        self.board = BoardIndex(self.pieces)
        self.turn = turn
        self.yard = yard if yard is not None else CaptureYard()
        self.checking_piece = None
        self.pending_promotion = None
        self.switching_sides = False
        self.clear_selection()

    def clear_selection(self) -> None:
        self.selected = None
        self.legal_moves = {}

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def phase(self) -> TurnPhase:
        if self.pending_promotion is not None:
            return TurnPhase.PROMOTION_PENDING
        if self.selected is not None:
            return TurnPhase.SELECTED
        return TurnPhase.IDLE

    @property
    def selected_piece(self) -> Piece | None:
        return self.pieces.get(self.selected)

    @property
    def is_check(self) -> bool:
        return self.checking_piece is not None

    def captured(self, color: Color) -> list[Piece]:
        """Pieces of *color* that have been taken."""
        return self.pieces.pieces(color, in_play=False)
