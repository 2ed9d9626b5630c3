"""BoardIndex - square occupancy view over a piece registry."""

from __future__ import annotations

from chesscore.core.enums import Color
from chesscore.core.piece import Piece
from chesscore.core.registry import PieceRegistry
from chesscore.core.types import SquareId, file_of, on_board, pid, rank_of


class BoardIndex:
    """Answers "what occupies (file, rank)" for the pieces still in play.

    The index reads the registry on every query, so it always reflects the
    pieces as they are mutated in place by committed moves.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: PieceRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> PieceRegistry:
        return self._registry

    # -- Element access -----------------------------------------------------

    def piece_at(self, file: int, rank: int) -> Piece | None:
        if not on_board(file, rank):
            return None
        for piece in self._registry:
            if piece.in_play and piece.file == file and piece.rank == rank:
                return piece
        return None

    def __getitem__(self, square_id: SquareId) -> Piece | None:
        return self.piece_at(file_of(square_id), rank_of(square_id))

    def is_empty(self, file: int, rank: int) -> bool:
        return self.piece_at(file, rank) is None

    # -- Query helpers ------------------------------------------------------

    def occupancy(self) -> dict[SquareId, Piece]:
        """Snapshot of every occupied square."""
        return {p.square: p for p in self._registry if p.in_play and p.on_board}

    def render(self, perspective: Color = Color.WHITE) -> str:
        """Text diagram of the board, seen from *perspective*'s side."""
        occupied = self.occupancy()
        ranks = range(8, 0, -1) if perspective == Color.WHITE else range(1, 9)
        files = list(range(1, 9)) if perspective == Color.WHITE else list(range(8, 0, -1))
        rows: list[str] = []
        for rank in ranks:
            row = []
            for file in files:
                p = occupied.get(pid(file, rank))
                row.append(str(p) if p else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  " + " ".join(chr(ord("a") + f - 1) for f in files))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return self.render()
