"""Piece entity with stable identity across captures and promotion."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import Color, PieceType
from chesscore.core.types import SquareId, on_board, pid

_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(slots=True)
class Piece:
    """A single chess piece.

    Pieces are never destroyed: a captured piece keeps its ``id`` and is
    parked off the board with ``in_play`` cleared.  Only ``piece_type``
    (promotion), the coordinates, ``has_moved`` and ``in_play`` change over
    a game.
    """

    id: int
    piece_type: PieceType
    color: Color
    file: int
    rank: int
    has_moved: bool = False
    in_play: bool = True

    @property
    def square(self) -> SquareId:
        """Packed id of the square the piece stands on."""
        return pid(self.file, self.rank)

    @property
    def on_board(self) -> bool:
        return on_board(self.file, self.rank)

    def move_to(self, file: int, rank: int) -> None:
        """Relocate the piece as the result of its own move."""
        self.file = file
        self.rank = rank
        self.has_moved = True

    def park(self, file: int, rank: int) -> None:
        """Take the piece out of play at an off-board yard slot."""
        self.file = file
        self.rank = rank
        self.in_play = False

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter in FEN case convention (uppercase = white)."""
        char = _CHARS[self.piece_type]
        return char if self.color == Color.WHITE else char.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
