"""CaptureYard - off-board parking coordinates for captured pieces."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesscore.core.enums import Color

# Capturer color -> (file, rank) of the first slot.
_START: dict[Color, tuple[int, int]] = {
    Color.WHITE: (0, 1),
    Color.BLACK: (9, 8),
}


@dataclass
class _Cursor:
    file: int
    rank: int


@dataclass
class CaptureYard:
    """Hands out deterministic off-board slots, one column per eight captures.

    Pieces taken by White are lined up left of the board (file 0, then -1,
    ...) filling ranks upward; pieces taken by Black are lined up right of
    the board (file 9, then 10, ...) filling ranks downward.  The sequence
    depends only on the order of ``next_slot`` calls.
    """

    _cursors: dict[Color, _Cursor] = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._cursors = {color: _Cursor(*start) for color, start in _START.items()}

    def peek(self, capturer: Color) -> tuple[int, int]:
        cursor = self._cursors[capturer]
        return (cursor.file, cursor.rank)

    def next_slot(self, capturer: Color) -> tuple[int, int]:
        """Return the current slot for *capturer* and advance past it."""
        cursor = self._cursors[capturer]
        slot = (cursor.file, cursor.rank)
        if capturer == Color.WHITE:
            cursor.rank += 1
            if cursor.rank > 8:
                cursor.rank = 1
                cursor.file -= 1
        else:
            cursor.rank -= 1
            if cursor.rank <= 0:
                cursor.rank = 8
                cursor.file += 1
        return slot
