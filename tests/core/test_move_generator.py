"""Tests for MoveGenerator and AttackGenerator."""

import pytest

from chesscore.core.board import BoardIndex
from chesscore.core.enums import Color, MoveKind, PieceType
from chesscore.core.move_generator import (
    QUEEN_DIRS,
    AttackGenerator,
    MoveGenerator,
)
from chesscore.core.piece import Piece
from chesscore.core.registry import PieceRegistry
from chesscore.core.types import on_board, parse_square, pid, square_name

W, B = Color.WHITE, Color.BLACK
P, N, BI, R, Q, K = (
    PieceType.PAWN,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
    PieceType.KING,
)


def _board(*entries: tuple) -> BoardIndex:
    """Helper: build a board from ``(id, type, color, "e4"[, has_moved])``."""
    pieces = []
    for entry in entries:
        piece_id, piece_type, color, name = entry[:4]
        has_moved = entry[4] if len(entry) > 4 else False
        sq = parse_square(name)
        pieces.append(
            Piece(piece_id, piece_type, color, sq >> 4, sq & 0xF, has_moved=has_moved)
        )
    return BoardIndex(PieceRegistry(pieces))


def _names(moves: dict) -> set[str]:
    return {square_name(sq) for sq in moves}


def _gen(board: BoardIndex, piece_id: int) -> dict:
    piece = board.registry[piece_id]
    return MoveGenerator(board, piece.color).generate(piece)


# ── Preconditions ────────────────────────────────────────────────────────────


class TestPreconditions:
    def test_wrong_color_raises(self) -> None:
        board = BoardIndex(PieceRegistry.initial())
        with pytest.raises(ValueError, match="does not belong"):
            MoveGenerator(board, Color.WHITE).generate(board.registry[20])

    def test_captured_piece_raises(self) -> None:
        board = BoardIndex(PieceRegistry.initial())
        board.registry[5].park(0, 1)
        with pytest.raises(ValueError, match="not in play"):
            MoveGenerator(board, Color.WHITE).generate(board.registry[5])


# ── Starting position ────────────────────────────────────────────────────────


class TestStartingPosition:
    def test_pawn_single_and_double(self) -> None:
        board = BoardIndex(PieceRegistry.initial())
        moves = _gen(board, 5)
        assert _names(moves) == {"e3", "e4"}
        assert moves[pid(5, 3)].kind == MoveKind.QUIET
        assert moves[pid(5, 4)].kind == MoveKind.DOUBLE_PUSH

    def test_knight(self) -> None:
        board = BoardIndex(PieceRegistry.initial())
        assert _names(_gen(board, 10)) == {"a3", "c3"}

    def test_blocked_pieces(self) -> None:
        board = BoardIndex(PieceRegistry.initial())
        for piece_id in (9, 11, 12, 13, 14, 16):
            assert _gen(board, piece_id) == {}

    def test_black_pawn_moves_down(self) -> None:
        board = BoardIndex(PieceRegistry.initial())
        piece = board.registry[21]
        moves = MoveGenerator(board, Color.BLACK).generate(piece)
        assert _names(moves) == {"e6", "e5"}


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawn:
    def test_double_push_blocked_on_landing(self) -> None:
        board = _board((1, P, W, "e2"), (2, N, B, "e4"))
        assert _names(_gen(board, 1)) == {"e3"}

    def test_double_push_blocked_on_crossed_square(self) -> None:
        board = _board((1, P, W, "e2"), (2, N, B, "e3"))
        assert _gen(board, 1) == {}

    def test_no_double_push_after_moving(self) -> None:
        board = _board((1, P, W, "e3", True))
        assert _names(_gen(board, 1)) == {"e4"}

    def test_double_push_from_any_rank_if_unmoved(self) -> None:
        board = _board((1, P, W, "e4"))
        assert _names(_gen(board, 1)) == {"e5", "e6"}

    def test_diagonal_capture(self) -> None:
        board = _board((1, P, W, "e4", True), (2, N, B, "d5"), (3, N, W, "f5"))
        moves = _gen(board, 1)
        assert _names(moves) == {"e5", "d5"}
        assert moves[pid(4, 5)].kind == MoveKind.CAPTURE
        assert moves[pid(4, 5)].captured_id == 2

    def test_cannot_capture_king(self) -> None:
        board = _board((1, P, W, "e4", True), (2, K, B, "d5"))
        assert _names(_gen(board, 1)) == {"e5"}

    def test_edge_pawn(self) -> None:
        board = _board((1, P, W, "a4", True), (2, N, B, "b5"))
        assert _names(_gen(board, 1)) == {"a5", "b5"}

    def test_promotion_flag_on_push(self) -> None:
        board = _board((1, P, W, "b7", True))
        moves = _gen(board, 1)
        assert moves[pid(2, 8)].promotes

    def test_promotion_flag_on_capture(self) -> None:
        board = _board((1, P, W, "b7", True), (2, R, B, "a8"))
        moves = _gen(board, 1)
        assert moves[pid(1, 8)].promotes
        assert moves[pid(1, 8)].captured_id == 2

    def test_black_promotion(self) -> None:
        board = _board((1, P, B, "h2", True))
        moves = _gen(board, 1)
        assert moves[pid(8, 1)].promotes

    def test_ordinary_push_does_not_promote(self) -> None:
        board = _board((1, P, W, "b6", True))
        assert not _gen(board, 1)[pid(2, 7)].promotes

    def test_double_push_onto_last_rank_promotes(self) -> None:
        board = _board((1, P, W, "c6"))
        moves = _gen(board, 1)
        assert moves[pid(3, 8)].kind == MoveKind.DOUBLE_PUSH
        assert moves[pid(3, 8)].promotes
        assert not moves[pid(3, 7)].promotes

    def test_black_double_push_onto_last_rank_promotes(self) -> None:
        board = _board((1, P, B, "f3"))
        assert _gen(board, 1)[pid(6, 1)].promotes


class TestEnPassant:
    def test_white_en_passant(self) -> None:
        board = _board((1, P, W, "e5", True), (2, P, B, "d5", True))
        moves = _gen(board, 1)
        effect = moves[pid(4, 6)]
        assert effect.kind == MoveKind.EN_PASSANT
        assert effect.captured_id == 2

    def test_black_en_passant(self) -> None:
        board = _board((1, P, B, "d4", True), (2, P, W, "e4", True))
        moves = _gen(board, 1)
        assert moves[pid(5, 3)].kind == MoveKind.EN_PASSANT

    def test_offered_without_preceding_double_push(self) -> None:
        # The adjacent pawn walked to d5 one square at a time, yet en
        # passant is still offered.
        board = _board((1, P, W, "e5", True), (2, P, B, "d5", True), (3, P, B, "f5", True))
        moves = _gen(board, 1)
        assert moves[pid(4, 6)].kind == MoveKind.EN_PASSANT
        assert moves[pid(6, 6)].kind == MoveKind.EN_PASSANT

    def test_only_on_fifth_rank(self) -> None:
        board = _board((1, P, W, "e4", True), (2, P, B, "d4", True))
        assert _names(_gen(board, 1)) == {"e5"}

    def test_only_against_pawns(self) -> None:
        board = _board((1, P, W, "e5", True), (2, N, B, "d5", True))
        assert _names(_gen(board, 1)) == {"e6"}

    def test_not_against_own_pawn(self) -> None:
        board = _board((1, P, W, "e5", True), (2, P, W, "d5", True))
        assert _names(_gen(board, 1)) == {"e6"}

    def test_landing_square_must_be_empty(self) -> None:
        board = _board((1, P, W, "e5", True), (2, P, B, "d5", True), (3, N, W, "d6"))
        assert _names(_gen(board, 1)) == {"e6"}


# ── Sliding pieces ───────────────────────────────────────────────────────────


class TestSliding:
    def test_rook_stops_at_blockers(self) -> None:
        board = _board((1, R, W, "a1"), (2, P, W, "a4"), (3, N, B, "d1"))
        moves = _gen(board, 1)
        assert _names(moves) == {"a2", "a3", "b1", "c1", "d1"}
        assert moves[pid(4, 1)].captured_id == 3

    def test_bishop_diagonals(self) -> None:
        board = _board((1, BI, W, "c1"))
        assert _names(_gen(board, 1)) == {
            "b2", "a3", "d2", "e3", "f4", "g5", "h6",
        }

    def test_queen_on_empty_board(self) -> None:
        board = _board((1, Q, W, "d4"))
        assert len(_gen(board, 1)) == 27

    def test_enemy_king_blocks_without_capture(self) -> None:
        board = _board((1, R, W, "a1"), (2, K, B, "a5"))
        assert _names(_gen(board, 1)) >= {"a2", "a3", "a4"}
        assert "a5" not in _names(_gen(board, 1))
        assert "a6" not in _names(_gen(board, 1))

    def test_each_ray_has_at_most_one_capture(self) -> None:
        board = _board(
            (1, Q, W, "d4"),
            (2, P, B, "d6"),
            (3, P, B, "d7"),
            (4, N, B, "f6"),
            (5, P, W, "b4"),
            (6, R, B, "g1"),
            (7, BI, B, "a1"),
        )
        queen = board.registry[1]
        moves = _gen(board, 1)
        for df, dr in QUEEN_DIRS:
            file, rank = queen.file + df, queen.rank + dr
            captures = 0
            blocked = False
            while on_board(file, rank):
                sq = pid(file, rank)
                if blocked:
                    assert sq not in moves, f"move past blocker to {square_name(sq)}"
                elif board.piece_at(file, rank) is not None:
                    blocked = True
                    if sq in moves:
                        captures += 1
                file += df
                rank += dr
            assert captures <= 1
        assert moves[pid(4, 6)].captured_id == 2
        assert pid(4, 7) not in moves
        assert pid(2, 4) not in moves


# ── Knights and kings ────────────────────────────────────────────────────────


class TestSteppers:
    def test_knight_in_corner(self) -> None:
        board = _board((1, N, W, "a1"))
        assert _names(_gen(board, 1)) == {"b3", "c2"}

    def test_knight_skips_own_and_enemy_king(self) -> None:
        board = _board((1, N, W, "a1"), (2, P, W, "b3"), (3, K, B, "c2"))
        assert _gen(board, 1) == {}

    def test_knight_captures(self) -> None:
        board = _board((1, N, W, "a1"), (2, P, B, "b3"))
        assert _gen(board, 1)[pid(2, 3)].kind == MoveKind.CAPTURE

    def test_king_neighbours(self) -> None:
        board = _board((1, K, W, "e4", True))
        assert len(_gen(board, 1)) == 8

    def test_king_cannot_take_king(self) -> None:
        board = _board((1, K, W, "e4", True), (2, K, B, "e5", True))
        assert "e5" not in _names(_gen(board, 1))


class TestCastling:
    def test_kingside(self) -> None:
        board = _board((1, K, W, "e1"), (2, R, W, "h1"))
        effect = _gen(board, 1)[pid(7, 1)]
        assert effect.kind == MoveKind.CASTLE
        assert effect.secondary_mover_id == 2
        assert effect.secondary_to == pid(6, 1)

    def test_queenside(self) -> None:
        board = _board((1, K, W, "e1"), (2, R, W, "a1"))
        effect = _gen(board, 1)[pid(3, 1)]
        assert effect.kind == MoveKind.CASTLE
        assert effect.secondary_to == pid(4, 1)

    def test_black_both_sides(self) -> None:
        board = _board((1, K, B, "e8"), (2, R, B, "a8"), (3, R, B, "h8"))
        names = _names(_gen(board, 1))
        assert {"c8", "g8"} <= names

    def test_blocked_by_piece_between(self) -> None:
        board = _board((1, K, W, "e1"), (2, R, W, "a1"), (3, N, W, "b1"))
        assert "c1" not in _names(_gen(board, 1))

    def test_blocked_by_enemy_between(self) -> None:
        board = _board((1, K, W, "e1"), (2, R, W, "h1"), (3, N, B, "g1"))
        assert "g1" not in _names(_gen(board, 1))

    def test_king_moved(self) -> None:
        board = _board((1, K, W, "e1", True), (2, R, W, "h1"))
        assert "g1" not in _names(_gen(board, 1))

    def test_rook_moved(self) -> None:
        board = _board((1, K, W, "e1"), (2, R, W, "h1", True))
        assert "g1" not in _names(_gen(board, 1))

    def test_enemy_rook_ignored(self) -> None:
        board = _board((1, K, W, "e1"), (2, R, B, "h1"))
        moves = _gen(board, 1)
        assert "g1" not in _names(moves)

    def test_path_under_attack_still_allowed(self) -> None:
        # Attacked transit squares do not prevent castling.
        board = _board((1, K, W, "e1"), (2, R, W, "h1"), (3, R, B, "f8"))
        assert _gen(board, 1)[pid(7, 1)].kind == MoveKind.CASTLE


# ── AttackGenerator ──────────────────────────────────────────────────────────


class TestAttackGenerator:
    def test_pawn_diagonals_regardless_of_occupancy(self) -> None:
        board = _board((1, P, W, "e4", True))
        squares = AttackGenerator(board).threatened_squares(board.registry[1])
        assert {square_name(sq) for sq in squares} == {"d5", "f5"}

    def test_black_pawn_attacks_down(self) -> None:
        board = _board((1, P, B, "a5", True))
        squares = AttackGenerator(board).threatened_squares(board.registry[1])
        assert {square_name(sq) for sq in squares} == {"b4"}

    def test_pawn_double_push_is_not_a_threat(self) -> None:
        board = _board((1, P, W, "e2"))
        squares = AttackGenerator(board).threatened_squares(board.registry[1])
        assert pid(5, 3) not in squares and pid(5, 4) not in squares

    def test_ray_includes_defended_piece(self) -> None:
        board = _board((1, R, W, "a1"), (2, P, W, "a3"))
        squares = AttackGenerator(board).threatened_squares(board.registry[1])
        names = {square_name(sq) for sq in squares}
        assert {"a2", "a3"} <= names
        assert "a4" not in names

    def test_ray_passes_through_enemy_king(self) -> None:
        board = _board((1, R, W, "a1"), (2, K, B, "d1"))
        squares = AttackGenerator(board).threatened_squares(board.registry[1])
        assert {pid(f, 1) for f in range(2, 9)} <= squares

    def test_ray_stops_at_own_king(self) -> None:
        board = _board((1, R, W, "a1"), (2, K, W, "d1"))
        squares = AttackGenerator(board).threatened_squares(board.registry[1])
        assert pid(4, 1) in squares
        assert pid(5, 1) not in squares

    def test_king_and_knight(self) -> None:
        board = _board((1, K, W, "a1"), (2, N, W, "h8"))
        attacks = AttackGenerator(board)
        assert len(attacks.threatened_squares(board.registry[1])) == 3
        assert len(attacks.threatened_squares(board.registry[2])) == 2

    def test_no_castling_threats(self) -> None:
        board = _board((1, K, W, "e1"), (2, R, W, "h1"))
        squares = AttackGenerator(board).threatened_squares(board.registry[1])
        assert pid(7, 1) not in squares

    def test_captured_piece_threatens_nothing(self) -> None:
        board = _board((1, Q, W, "d4"))
        board.registry[1].park(0, 1)
        assert AttackGenerator(board).threatened_squares(board.registry[1]) == set()

    def test_threatened_by_union(self) -> None:
        board = _board((1, P, W, "a2"), (2, P, W, "h2"))
        attacks = AttackGenerator(board)
        union = attacks.threatened_by(list(board.registry))
        assert union == {pid(2, 3), pid(7, 3)}
