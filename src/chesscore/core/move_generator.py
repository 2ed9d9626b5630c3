"""Pseudo-legal move generation and attack (capture-reach) generation."""

from __future__ import annotations

from typing import assert_never

from chesscore.core.board import BoardIndex
from chesscore.core.enums import Color, MoveKind, PieceType
from chesscore.core.move import MoveEffect
from chesscore.core.piece import Piece
from chesscore.core.types import SquareId, on_board, pid

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Castling needs the king to travel two files without landing on the rook.
_MIN_CASTLE_DISTANCE = 3


def last_rank(color: Color) -> int:
    return 8 if color == Color.WHITE else 1


def en_passant_rank(color: Color) -> int:
    """The fifth rank from *color*'s side, where en passant is offered."""
    return 5 if color == Color.WHITE else 4


def _sliding_dirs(piece_type: PieceType) -> tuple[tuple[int, int], ...]:
    if piece_type == PieceType.ROOK:
        return ROOK_DIRS
    if piece_type == PieceType.BISHOP:
        return BISHOP_DIRS
    return QUEEN_DIRS


def _is_capturable(target: Piece, mover: Piece) -> bool:
    """Enemy pieces can be taken, except the king."""
    return target.color != mover.color and target.piece_type != PieceType.KING


class MoveGenerator:
    """Builds the move table for a selected piece of the side to move.

    The table maps each reachable destination square id to the
    :class:`MoveEffect` that committing the move applies.  Moves are
    pseudo-legal: nothing here checks whether the mover's own king is left
    attacked.
    """

    __slots__ = ("_board", "_turn")

    def __init__(self, board: BoardIndex, turn: Color) -> None:
        self._board = board
        self._turn = turn

    # -- Public API ---------------------------------------------------------

    def generate(self, piece: Piece) -> dict[SquareId, MoveEffect]:
        if not piece.in_play:
            raise ValueError(f"Piece {piece.id} is not in play")
        if piece.color != self._turn:
            raise ValueError(f"Piece {piece.id} does not belong to {self._turn}")

        moves: dict[SquareId, MoveEffect] = {}
        piece_type = piece.piece_type
        match piece_type:
            case PieceType.PAWN:
                self._gen_pawn(piece, moves)
            case PieceType.KNIGHT:
                self._gen_steps(piece, KNIGHT_OFFSETS, moves)
            case PieceType.BISHOP | PieceType.ROOK | PieceType.QUEEN:
                self._gen_sliding(piece, _sliding_dirs(piece_type), moves)
            case PieceType.KING:
                self._gen_steps(piece, KING_OFFSETS, moves)
                self._gen_castling(piece, moves)
            case _:
                assert_never(piece_type)
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, piece: Piece, moves: dict[SquareId, MoveEffect]) -> None:
        board = self._board
        file, rank = piece.file, piece.rank
        step = piece.color.forward
        promo_rank = last_rank(piece.color)
        ahead = rank + step

        if on_board(file, ahead) and board.is_empty(file, ahead):
            to_sq = pid(file, ahead)
            moves[to_sq] = MoveEffect(
                MoveKind.QUIET, piece.id, to_sq, promotes=ahead == promo_rank
            )
            two_ahead = rank + 2 * step
            if (
                not piece.has_moved
                and on_board(file, two_ahead)
                and board.is_empty(file, two_ahead)
            ):
                to_sq = pid(file, two_ahead)
                moves[to_sq] = MoveEffect(
                    MoveKind.DOUBLE_PUSH,
                    piece.id,
                    to_sq,
                    promotes=two_ahead == promo_rank,
                )

        for df in (-1, 1):
            cap_file = file + df
            if not on_board(cap_file, ahead):
                continue
            target = board.piece_at(cap_file, ahead)
            if target is not None and _is_capturable(target, piece):
                to_sq = pid(cap_file, ahead)
                moves[to_sq] = MoveEffect(
                    MoveKind.CAPTURE,
                    piece.id,
                    to_sq,
                    captured_id=target.id,
                    promotes=ahead == promo_rank,
                )

        if rank != en_passant_rank(piece.color):
            return
        # The adjacent pawn is not required to have just made a double push:
        # any enemy pawn beside ours on this rank can be taken en passant.
        for df in (-1, 1):
            cap_file = file + df
            if not on_board(cap_file, ahead) or not board.is_empty(cap_file, ahead):
                continue
            beside = board.piece_at(cap_file, rank)
            if (
                beside is not None
                and beside.color != piece.color
                and beside.piece_type == PieceType.PAWN
            ):
                to_sq = pid(cap_file, ahead)
                moves[to_sq] = MoveEffect(
                    MoveKind.EN_PASSANT, piece.id, to_sq, captured_id=beside.id
                )

    def _gen_steps(
        self,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: dict[SquareId, MoveEffect],
    ) -> None:
        board = self._board
        for df, dr in offsets:
            file, rank = piece.file + df, piece.rank + dr
            if not on_board(file, rank):
                continue
            target = board.piece_at(file, rank)
            to_sq = pid(file, rank)
            if target is None:
                moves[to_sq] = MoveEffect(MoveKind.QUIET, piece.id, to_sq)
            elif _is_capturable(target, piece):
                moves[to_sq] = MoveEffect(
                    MoveKind.CAPTURE, piece.id, to_sq, captured_id=target.id
                )

    def _gen_sliding(
        self,
        piece: Piece,
        dirs: tuple[tuple[int, int], ...],
        moves: dict[SquareId, MoveEffect],
    ) -> None:
        board = self._board
        for df, dr in dirs:
            file, rank = piece.file + df, piece.rank + dr
            while on_board(file, rank):
                target = board.piece_at(file, rank)
                to_sq = pid(file, rank)
                if target is None:
                    moves[to_sq] = MoveEffect(MoveKind.QUIET, piece.id, to_sq)
                    file += df
                    rank += dr
                    continue
                if _is_capturable(target, piece):
                    moves[to_sq] = MoveEffect(
                        MoveKind.CAPTURE, piece.id, to_sq, captured_id=target.id
                    )
                break

    def _gen_castling(self, king: Piece, moves: dict[SquareId, MoveEffect]) -> None:
        # Squares the king passes over are not tested for attack, and castling
        # out of check is allowed.
        if king.has_moved:
            return

        board = self._board
        rank = king.rank
        for direction in (1, -1):
            file = king.file + direction
            while on_board(file, rank) and board.is_empty(file, rank):
                file += direction
            rook = board.piece_at(file, rank)
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != king.color
                or rook.has_moved
                or abs(rook.file - king.file) < _MIN_CASTLE_DISTANCE
            ):
                continue
            to_sq = pid(king.file + 2 * direction, rank)
            moves[to_sq] = MoveEffect(
                MoveKind.CASTLE,
                king.id,
                to_sq,
                secondary_mover_id=rook.id,
                secondary_to=pid(king.file + direction, rank),
            )


class AttackGenerator:
    """Squares a piece could capture on, used for check and king safety.

    Unlike :class:`MoveGenerator` this covers capture geometry only (no
    pushes, no castling, no en passant) and counts squares held by friendly
    pieces too.  Slider rays run through the
    enemy king so that it cannot step back along the line it is attacked on.
    """

    __slots__ = ("_board",)

    def __init__(self, board: BoardIndex) -> None:
        self._board = board

    def threatened_squares(self, piece: Piece) -> set[SquareId]:
        if not piece.in_play:
            return set()

        squares: set[SquareId] = set()
        piece_type = piece.piece_type
        match piece_type:
            case PieceType.PAWN:
                ahead = piece.rank + piece.color.forward
                for df in (-1, 1):
                    if on_board(piece.file + df, ahead):
                        squares.add(pid(piece.file + df, ahead))
            case PieceType.KNIGHT:
                self._steps(piece, KNIGHT_OFFSETS, squares)
            case PieceType.BISHOP | PieceType.ROOK | PieceType.QUEEN:
                self._rays(piece, _sliding_dirs(piece_type), squares)
            case PieceType.KING:
                self._steps(piece, KING_OFFSETS, squares)
            case _:
                assert_never(piece_type)
        return squares

    def threatened_by(self, pieces: list[Piece]) -> set[SquareId]:
        """Union of the threatened squares of *pieces*."""
        squares: set[SquareId] = set()
        for piece in pieces:
            squares |= self.threatened_squares(piece)
        return squares

    @staticmethod
    def _steps(
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        squares: set[SquareId],
    ) -> None:
        for df, dr in offsets:
            file, rank = piece.file + df, piece.rank + dr
            if on_board(file, rank):
                squares.add(pid(file, rank))

    def _rays(
        self,
        piece: Piece,
        dirs: tuple[tuple[int, int], ...],
        squares: set[SquareId],
    ) -> None:
        board = self._board
        for df, dr in dirs:
            file, rank = piece.file + df, piece.rank + dr
            while on_board(file, rank):
                squares.add(pid(file, rank))
                target = board.piece_at(file, rank)
                if target is not None and not (
                    target.piece_type == PieceType.KING and target.color != piece.color
                ):
                    break
                file += df
                rank += dr
