"""Console entry point: play through the turn controller without a renderer."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from chesscore.core.notation import SaveFormatError
from chesscore.core.types import parse_square, square_name
from chesscore.game.controller import TurnController
from chesscore.game.interfaces import PickEvent
from chesscore.game.persistence import load_game, save_game
from chesscore.game.settings import GameSettings

_HELP = """\
Commands:
  e2        click a square (select, move or capture)
  #5        click the piece with id 5
  q/b/k/r   choose a promotion piece when a pawn can be promoted
  moves     toggle showing the selected piece's moves
  save      quick save      load      quick load
  quit      leave
"""


def _status(ctrl: TurnController, settings: GameSettings) -> str:
    state = ctrl.state
    lines = [state.board.render(state.turn), f"{state.turn.name} to move"]
    if ctrl.is_checked():
        lines.append("Check...")
    if ctrl.is_piece_promotable():
        keys = ", ".join(
            f"[{k.upper()}] {t.name.title()}" for k, t in settings.promotion_keys.items()
        )
        lines.append(f"A pawn can be promoted: {keys}")
    if settings.show_legal_moves and state.legal_moves:
        lines.append("Moves: " + " ".join(sorted(square_name(sq) for sq in state.legal_moves)))
    return "\n".join(lines)


def _parse_pick(token: str) -> PickEvent | None:
    if token.startswith("#"):
        try:
            return PickEvent(piece_id=int(token[1:]))
        except ValueError:
            return None
    try:
        return PickEvent(square_id=parse_square(token))
    except ValueError:
        return None


def run(
    commands: Iterable[str],
    out: TextIO,
    settings: GameSettings | None = None,
    controller: TurnController | None = None,
) -> TurnController:
    """Feed text *commands* to a controller, writing the board to *out*."""
    settings = settings or GameSettings()
    ctrl = controller if controller is not None else TurnController()

    print(_status(ctrl, settings), file=out)
    for raw in commands:
        token = raw.strip().lower()
        if not token:
            continue
        if token in ("quit", "exit"):
            break
        if token in ("help", "?"):
            print(_HELP, file=out)
            continue

        if token == "save":
            path = save_game(ctrl, settings.save_path)
            print(f"Saved to {path}", file=out)
        elif token == "load":
            try:
                if not load_game(ctrl, settings.save_path):
                    print("No save file found!", file=out)
            except SaveFormatError as exc:
                print(f"Save file is corrupt: {exc}", file=out)
        elif token == "moves":
            settings.show_legal_moves = not settings.show_legal_moves
        elif ctrl.is_piece_promotable():
            piece_type = settings.promotion_for_key(token)
            if piece_type is None:
                print("Choose a promotion piece first.", file=out)
                continue
            ctrl.promote(piece_type)
        else:
            event = _parse_pick(token)
            if event is None:
                print(f"Unknown command: {token!r} (try 'help')", file=out)
                continue
            ctrl.pick(event)
            ctrl.finish_side_switch()

        print(_status(ctrl, settings), file=out)
    return ctrl


def main(argv: list[str] | None = None) -> int:
    """Launch the console game."""
    parser = argparse.ArgumentParser(prog="chesscore", description=__doc__)
    parser.add_argument("--save-path", type=Path, default=GameSettings.save_path)
    parser.add_argument("--load", action="store_true", help="start from the save file")
    parser.add_argument("--show-moves", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = GameSettings(save_path=args.save_path, show_legal_moves=args.show_moves)
    ctrl = TurnController()
    if args.load:
        try:
            load_game(ctrl, settings.save_path)
        except SaveFormatError as exc:
            print(f"Save file is corrupt: {exc}", file=sys.stderr)
            return 1

    run(sys.stdin, sys.stdout, settings, ctrl)
    return 0


if __name__ == "__main__":
    sys.exit(main())
