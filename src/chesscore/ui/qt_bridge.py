"""Qt bridge that exposes turn-controller events as Qt signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesscore.core.enums import PROMOTION_TYPES, Color, PieceType
from chesscore.core.move import MoveEffect
from chesscore.core.types import SquareId
from chesscore.game.controller import TurnController
from chesscore.game.interfaces import PickEvent
from chesscore.game.state import GameState


class BoardBridge(QObject):
    """Main-thread adapter between a Qt renderer and a :class:`TurnController`.

    The renderer resolves clicks to ids and calls :meth:`pick`; it listens
    to ``side_switched`` to start turning the board and calls
    :meth:`finish_side_switch` when the animation is done.
    """

    side_switched = pyqtSignal(int)  # Color of the side now to move
    check_changed = pyqtSignal(bool)
    promotion_pending = pyqtSignal(int)  # pawn id
    promotion_error = pyqtSignal(int, str)  # rejected piece type value, reason
    moves_changed = pyqtSignal(object)  # dict[SquareId, MoveEffect]
    move_committed = pyqtSignal(object)  # MoveEffect

    def __init__(self, controller: TurnController | None = None) -> None:
        super().__init__()
        self._controller = controller if controller is not None else TurnController()
        events = self._controller.events
        events.on_side_switched.append(self._on_side_switched)
        events.on_check_changed.append(self.check_changed.emit)
        events.on_promotion_pending.append(self.promotion_pending.emit)
        events.on_selection_changed.append(self._on_selection_changed)
        events.on_move.append(self._on_move)

    @property
    def controller(self) -> TurnController:
        return self._controller

    @pyqtSlot(object, object)
    def pick(self, piece_id: int | None, square_id: int | None) -> None:
        """Forward a resolved click; ``None`` or a negative id means no hit."""
        self._controller.pick(
            PickEvent.from_raw(
                -1 if piece_id is None else piece_id,
                -1 if square_id is None else square_id,
            )
        )

    @pyqtSlot(int)
    def promote(self, piece_type: int) -> None:
        """Complete a pending promotion; bad choices go to ``promotion_error``."""
        try:
            choice = PieceType(piece_type)
        except ValueError:
            self.promotion_error.emit(piece_type, f"Unknown piece type {piece_type}")
            return
        if choice not in PROMOTION_TYPES:
            self.promotion_error.emit(piece_type, f"Cannot promote to {choice.name}")
            return
        self._controller.promote(choice)

    @pyqtSlot()
    def finish_side_switch(self) -> None:
        self._controller.finish_side_switch()

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_side_switched(self, color: Color) -> None:
        self.side_switched.emit(int(color))

    def _on_selection_changed(
        self, _selected: int | None, moves: dict[SquareId, MoveEffect]
    ) -> None:
        self.moves_changed.emit(dict(moves))

    def _on_move(self, effect: MoveEffect, _state: GameState) -> None:
        self.move_committed.emit(effect)
