"""TurnController: the selection/turn state machine.

Coordinates: GameState, MoveGenerator, CheckDetector, CaptureYard.
Emits events via simple callbacks so a renderer / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesscore.core.enums import PROMOTION_TYPES, Color, PieceType
from chesscore.core.move import MoveEffect
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import SavedGame
from chesscore.core.piece import Piece
from chesscore.core.rules import CheckDetector
from chesscore.core.types import SquareId, file_of, rank_of, square_name
from chesscore.game.interfaces import ITurnController, PickEvent, TurnPhase
from chesscore.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveEffect, GameState], None]
SelectionCallback = Callable[[int | None, dict[SquareId, MoveEffect]], None]
SideSwitchCallback = Callable[[Color], None]  # new side to move
CheckCallback = Callable[[bool], None]
PromotionCallback = Callable[[int], None]  # pawn id


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
    on_side_switched: list[SideSwitchCallback] = field(default_factory=list)
    on_check_changed: list[CheckCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class TurnController(ITurnController):
    """Turns resolved clicks into selections and committed moves.

    States: IDLE → SELECTED → IDLE (deselect or normal move) or
    PROMOTION_PENDING (pawn reached its last rank) → IDLE once
    :meth:`promote` is called.

    Thread-safety: every method is meant to be called from a single thread,
    one input event at a time.
    """

    __slots__ = ("_state", "events")

    def __init__(self, state: GameState | None = None) -> None:
        self._state = state if state is not None else GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def turn(self) -> Color:
        return self._state.turn

    @property
    def phase(self) -> TurnPhase:
        return self._state.phase

    @property
    def legal_moves(self) -> dict[SquareId, MoveEffect]:
        return self._state.legal_moves

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self) -> None:
        self._state.setup()
        self._emit_selection()

    def load(self, saved: SavedGame) -> None:
        """Replace the current game with a decoded save.

        Check state is not part of the save format and starts cleared.
        """
        self._state.setup(saved.pieces, saved.turn, saved.yard)
        self._emit_selection()

    # ── ITurnController impl ─────────────────────────────────────────────

    def pick(self, event: PickEvent) -> None:
        # Order: take > move > selection.
        state = self._state
        if state.phase == TurnPhase.PROMOTION_PENDING:
            return

        if state.selected is not None:
            target = state.pieces.get(event.piece_id)
            if target is not None and target.in_play and target.on_board:
                effect = state.legal_moves.get(target.square)
                if effect is not None:
                    self.commit(effect)
                    return
            if event.square_id is not None:
                effect = state.legal_moves.get(event.square_id)
                if effect is not None:
                    self.commit(effect)
                    return

        self._select(event)

    def select(self, piece: Piece) -> bool:
        """Select *piece* directly. Returns False if it cannot move now."""
        state = self._state
        if state.phase == TurnPhase.PROMOTION_PENDING:
            return False
        if not piece.in_play or piece.color != state.turn:
            return False

        moves = MoveGenerator(state.board, state.turn).generate(piece)
        if state.checking_piece is not None:
            moves = CheckDetector(state.board).filter_king_moves(piece, moves)
        state.selected = piece.id
        state.legal_moves = moves
        self._emit_selection()
        return True

    def deselect(self) -> None:
        state = self._state
        if state.phase == TurnPhase.PROMOTION_PENDING:
            return
        if state.selected is None and not state.legal_moves:
            return
        state.clear_selection()
        self._emit_selection()

    def commit(self, effect: MoveEffect) -> None:
        """Apply a generated move effect to the pieces.

        The turn passes immediately unless the effect promotes a pawn, in
        which case it waits for :meth:`promote`.
        """
        state = self._state
        pieces = state.pieces
        mover = pieces[effect.mover_id]

        if effect.captured_id is not None:
            victim = pieces[effect.captured_id]
            victim.park(*state.yard.next_slot(mover.color))
            _LOGGER.debug("Piece %d captured by %d", victim.id, mover.id)

        mover.move_to(file_of(effect.to), rank_of(effect.to))
        if effect.secondary_mover_id is not None and effect.secondary_to is not None:
            rook = pieces[effect.secondary_mover_id]
            rook.move_to(file_of(effect.secondary_to), rank_of(effect.secondary_to))

        _LOGGER.debug("Committed %s to %s", effect, square_name(effect.to))
        self._emit_move(effect)

        if effect.promotes:
            state.pending_promotion = mover.id
            state.legal_moves = {}
            _LOGGER.debug("Piece %d awaiting promotion", mover.id)
            for cb in self.events.on_promotion_pending:
                cb(mover.id)
            return

        self._end_turn(mover)

    def promote(self, piece_type: PieceType) -> None:
        state = self._state
        if state.pending_promotion is None:
            return
        if piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {piece_type.name}")

        pawn = state.pieces[state.pending_promotion]
        state.pending_promotion = None
        pawn.piece_type = piece_type
        _LOGGER.debug("Piece %d promoted to %s", pawn.id, piece_type.name)
        self._end_turn(pawn)

    def finish_side_switch(self) -> None:
        """Acknowledge that the renderer has finished turning the board."""
        self._state.switching_sides = False

    # ── Queries ──────────────────────────────────────────────────────────

    def is_checked(self) -> bool:
        return self._state.checking_piece is not None

    def is_piece_promotable(self) -> bool:
        return self._state.pending_promotion is not None

    def is_switching_sides(self) -> bool:
        return self._state.switching_sides

    # ── Internal helpers ─────────────────────────────────────────────────

    def _select(self, event: PickEvent) -> None:
        state = self._state
        candidate = state.pieces.get(event.piece_id)
        if candidate is None or not candidate.in_play or candidate.color != state.turn:
            candidate = None
            if event.square_id is not None and event.square_id >= 0:
                on_square = state.board[event.square_id]
                if on_square is not None and on_square.color == state.turn:
                    candidate = on_square

        if candidate is None or not self.select(candidate):
            self.deselect()

    def _end_turn(self, mover: Piece) -> None:
        """Pass the turn and record whether *mover* now gives check."""
        state = self._state
        was_check = state.checking_piece is not None
        # Only the last mover is inspected; discovered checks are missed.
        state.checking_piece = CheckDetector(state.board).checking_piece(mover)
        state.turn = mover.color.opposite
        state.clear_selection()
        state.switching_sides = True

        if state.checking_piece is not None:
            _LOGGER.debug("%s is in check from %d", state.turn, state.checking_piece)

        self._emit_selection()
        for cb in self.events.on_side_switched:
            cb(state.turn)
        if was_check != (state.checking_piece is not None):
            for cb in self.events.on_check_changed:
                cb(state.checking_piece is not None)

    def _emit_move(self, effect: MoveEffect) -> None:
        for cb in self.events.on_move:
            cb(effect, self._state)

    def _emit_selection(self) -> None:
        for cb in self.events.on_selection_changed:
            cb(self._state.selected, self._state.legal_moves)
