"""PieceRegistry - the fixed set of pieces taking part in a game."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from chesscore.core.enums import Color, PieceType
from chesscore.core.piece import Piece

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)
# Black piece ids are the White ids shifted by this amount.
_BLACK_ID_OFFSET = 16


class PieceRegistry:
    """Owns every piece instance, keyed by its stable id.

    Iteration order is insertion order, which is also the order pieces are
    written to a save file.
    """

    __slots__ = ("_pieces",)

    def __init__(self, pieces: Iterable[Piece] = ()) -> None:
        self._pieces: dict[int, Piece] = {}
        for piece in pieces:
            self.add(piece)

    # -- Element access -----------------------------------------------------

    def add(self, piece: Piece) -> None:
        if piece.id in self._pieces:
            raise ValueError(f"Duplicate piece id: {piece.id}")
        self._pieces[piece.id] = piece

    def get(self, piece_id: int | None) -> Piece | None:
        if piece_id is None:
            return None
        return self._pieces.get(piece_id)

    def __getitem__(self, piece_id: int) -> Piece:
        try:
            return self._pieces[piece_id]
        except KeyError:
            raise ValueError(f"No piece with id {piece_id}") from None

    def __contains__(self, piece_id: object) -> bool:
        return piece_id in self._pieces

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces.values())

    def __len__(self) -> int:
        return len(self._pieces)

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, *, in_play: bool | None = None) -> list[Piece]:
        """Pieces of *color*, optionally filtered on their ``in_play`` flag."""
        return [
            p
            for p in self._pieces.values()
            if p.color == color and (in_play is None or p.in_play == in_play)
        ]

    def king(self, color: Color) -> Piece | None:
        """The in-play king of *color*, if there is one."""
        for piece in self._pieces.values():
            if (
                piece.color == color
                and piece.piece_type == PieceType.KING
                and piece.in_play
            ):
                return piece
        return None

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> PieceRegistry:
        """Standard starting set.

        White pawns take ids 1–8 (files a–h), the White back rank ids 9–16
        in file order R N B Q K B N R, so the queen is 12 on d1 and the king
        13 on e1; Black mirrors this with ids 17–32.  Saves that number the
        back rank differently (for example king 12 and queen 13 with the king
        on the d-file) still load, but their ids do not line up with this set.
        """
        registry = cls()
        for file in range(1, 9):
            registry.add(Piece(file, PieceType.PAWN, Color.WHITE, file, 2))
        for file, piece_type in enumerate(_BACK_RANK, start=1):
            registry.add(Piece(file + 8, piece_type, Color.WHITE, file, 1))
        for file in range(1, 9):
            registry.add(
                Piece(file + _BLACK_ID_OFFSET, PieceType.PAWN, Color.BLACK, file, 7)
            )
        for file, piece_type in enumerate(_BACK_RANK, start=1):
            registry.add(
                Piece(file + 8 + _BLACK_ID_OFFSET, piece_type, Color.BLACK, file, 8)
            )
        return registry

    def __repr__(self) -> str:
        return f"PieceRegistry({len(self._pieces)} pieces)"
