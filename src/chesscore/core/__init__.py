"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chesscore.core import BoardIndex, Color, MoveGenerator, PieceRegistry, square_name

    registry = PieceRegistry.initial()
    gen = MoveGenerator(BoardIndex(registry), Color.WHITE)
    for square_id, effect in gen.generate(registry[5]).items():
        print(square_name(square_id), effect)
"""

from chesscore.core.board import BoardIndex
from chesscore.core.capture_yard import CaptureYard
from chesscore.core.enums import PROMOTION_TYPES, Color, MoveKind, PieceType
from chesscore.core.move import MoveEffect
from chesscore.core.move_generator import AttackGenerator, MoveGenerator
from chesscore.core.notation import SavedGame, SaveFormatError, decode, encode
from chesscore.core.piece import Piece
from chesscore.core.registry import PieceRegistry
from chesscore.core.rules import CheckDetector
from chesscore.core.types import (
    SquareId,
    file_of,
    is_valid_square,
    parse_square,
    pid,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "MoveKind",
    "PieceType",
    "PROMOTION_TYPES",
    # Types / helpers
    "SquareId",
    "file_of",
    "is_valid_square",
    "parse_square",
    "pid",
    "rank_of",
    "square_name",
    # Domain objects
    "AttackGenerator",
    "BoardIndex",
    "CaptureYard",
    "CheckDetector",
    "MoveEffect",
    "MoveGenerator",
    "Piece",
    "PieceRegistry",
    # Save format
    "SavedGame",
    "SaveFormatError",
    "decode",
    "encode",
]
