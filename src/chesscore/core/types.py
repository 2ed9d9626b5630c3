"""SquareId type alias and coordinate helpers.

Squares are addressed by 1-based ``(file, rank)`` pairs and packed into a
single integer key::

    pid(file, rank) = (file << 4) | rank

so a1 = 0x11, h1 = 0x81, a8 = 0x18, h8 = 0x88.  The packed value is what the
picking collaborator reports for a clicked square.
"""

from __future__ import annotations

from typing import TypeAlias

SquareId: TypeAlias = int

BOARD_SIZE = 8


def pid(file: int, rank: int) -> SquareId:
    """Pack a 1-based ``(file, rank)`` pair into a square id."""
    return (file << 4) | rank


def file_of(square_id: SquareId) -> int:
    """File 1–8 (a–h)."""
    return square_id >> 4


def rank_of(square_id: SquareId) -> int:
    """Rank 1–8."""
    return square_id & 0xF


def on_board(file: int, rank: int) -> bool:
    return 1 <= file <= BOARD_SIZE and 1 <= rank <= BOARD_SIZE


def is_valid_square(square_id: int) -> bool:
    """Check whether an integer is the id of a playable square."""
    return square_id >= 0 and on_board(file_of(square_id), rank_of(square_id))


def square_name(square_id: SquareId) -> str:
    """Human-readable name, e.g. ``pid(5, 4)`` → ``'e4'``."""
    return chr(ord("a") + file_of(square_id) - 1) + str(rank_of(square_id))


def parse_square(name: str) -> SquareId:
    """Parse a square name, e.g. ``'e4'`` → ``pid(5, 4)``."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return pid(ord(name[0]) - ord("a") + 1, int(name[1]))
