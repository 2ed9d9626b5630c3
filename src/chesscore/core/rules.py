"""Check detection and the king-safety filter."""

from __future__ import annotations

from chesscore.core.board import BoardIndex
from chesscore.core.enums import PieceType
from chesscore.core.move import MoveEffect
from chesscore.core.move_generator import AttackGenerator
from chesscore.core.piece import Piece
from chesscore.core.types import SquareId


class CheckDetector:
    """Rule checks layered on :class:`AttackGenerator`.

    Both checks are partial:

    * ``checking_piece`` only looks at the piece that just moved, so a check
      discovered by moving a different piece out of the way goes unnoticed.
    * ``filter_king_moves`` only restricts the king.  Other pieces are not
      forced to block or capture the checking piece.
    """

    __slots__ = ("_board", "_attacks")

    def __init__(self, board: BoardIndex) -> None:
        self._board = board
        self._attacks = AttackGenerator(board)

    def checking_piece(self, mover: Piece) -> int | None:
        """Id of *mover* if it now attacks the opposing king, else ``None``."""
        king = self._board.registry.king(mover.color.opposite)
        if king is None:
            return None
        if king.square in self._attacks.threatened_squares(mover):
            return mover.id
        return None

    def unsafe_squares(self, king: Piece) -> set[SquareId]:
        """Every square an in-play enemy of *king* threatens."""
        enemies = self._board.registry.pieces(king.color.opposite, in_play=True)
        return self._attacks.threatened_by(enemies)

    def filter_king_moves(
        self, piece: Piece, moves: dict[SquareId, MoveEffect]
    ) -> dict[SquareId, MoveEffect]:
        """Drop king destinations that an enemy piece threatens.

        Moves of any other piece type are returned unchanged.
        """
        if piece.piece_type != PieceType.KING:
            return moves
        unsafe = self.unsafe_squares(piece)
        return {sq: effect for sq, effect in moves.items() if sq not in unsafe}
