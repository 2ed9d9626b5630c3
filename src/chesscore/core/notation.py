"""Save-file text format.

A save is three sections::

    #WHITE
    PAWN 1 1,2 false
    ...
    #BLACK
    KING 29 5,8 true
    ...
    #EXTRA
    WHITE

Each piece line is ``TYPE id file,rank hasMoved``.  Pieces whose file lies
off the board are captured pieces parked in the capture yard.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chesscore.core.capture_yard import CaptureYard
from chesscore.core.enums import Color, PieceType
from chesscore.core.piece import Piece
from chesscore.core.registry import PieceRegistry

WHITE_HEADER = "#WHITE"
BLACK_HEADER = "#BLACK"
EXTRA_HEADER = "#EXTRA"

_SECTION_COLORS: dict[str, Color] = {
    WHITE_HEADER: Color.WHITE,
    BLACK_HEADER: Color.BLACK,
}
_SECTION_ORDER: tuple[str, ...] = (WHITE_HEADER, BLACK_HEADER, EXTRA_HEADER)
_PIECE_FIELDS: tuple[str, ...] = ("type", "id", "square", "moved")
_MOVED_TOKENS: dict[str, bool] = {"true": True, "false": False}


class SaveFormatError(ValueError):
    """A save file line could not be parsed.

    ``field`` names the part of the line that was rejected: ``type``,
    ``id``, ``square``, ``moved``, ``turn``, ``section`` or ``line``.
    """

    def __init__(self, field: str, line_no: int, token: str, reason: str = "") -> None:
        self.field = field
        self.line_no = line_no
        self.token = token
        detail = reason or f"invalid {field}"
        super().__init__(f"line {line_no}: {detail}: {token!r}")


@dataclass
class SavedGame:
    """Result of :func:`decode`."""

    pieces: PieceRegistry
    turn: Color = Color.WHITE
    yard: CaptureYard = field(default_factory=CaptureYard)


# ── Encoding ─────────────────────────────────────────────────────────────────


def piece_to_line(piece: Piece) -> str:
    moved = "true" if piece.has_moved else "false"
    return f"{piece.piece_type.name} {piece.id} {piece.file},{piece.rank} {moved}"


def encode(pieces: PieceRegistry, turn: Color) -> str:
    """Serialise every piece (captured ones included) and the side to move."""
    lines: list[str] = [WHITE_HEADER]
    lines.extend(piece_to_line(p) for p in pieces if p.color == Color.WHITE)
    lines.append(BLACK_HEADER)
    lines.extend(piece_to_line(p) for p in pieces if p.color == Color.BLACK)
    lines.append(EXTRA_HEADER)
    lines.append(turn.name)
    return "\n".join(lines) + "\n"


# ── Decoding ─────────────────────────────────────────────────────────────────


def _parse_coordinate(token: str, line_no: int) -> tuple[int, int]:
    parts = token.split(",")
    if len(parts) != 2:
        raise SaveFormatError("square", line_no, token, "expected file,rank")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise SaveFormatError("square", line_no, token, "non-integer coordinate") from None


def piece_from_line(line: str, color: Color, line_no: int = 0) -> Piece:
    """Parse one ``TYPE id file,rank hasMoved`` line."""
    tokens = line.split()
    if len(tokens) < len(_PIECE_FIELDS):
        missing = _PIECE_FIELDS[len(tokens)]
        raise SaveFormatError(missing, line_no, line.strip(), f"missing {missing}")
    if len(tokens) > len(_PIECE_FIELDS):
        raise SaveFormatError("line", line_no, line.strip(), "too many fields")

    type_token, id_token, square_token, moved_token = tokens

    try:
        piece_type = PieceType[type_token]
    except KeyError:
        raise SaveFormatError("type", line_no, type_token, "unknown piece type") from None

    try:
        piece_id = int(id_token)
    except ValueError:
        raise SaveFormatError("id", line_no, id_token, "non-integer id") from None

    file, rank = _parse_coordinate(square_token, line_no)

    has_moved = _MOVED_TOKENS.get(moved_token.lower())
    if has_moved is None:
        raise SaveFormatError("moved", line_no, moved_token, "expected true or false")

    return Piece(piece_id, piece_type, color, file, rank, has_moved=has_moved)


def decode(text: str, yard: CaptureYard | None = None) -> SavedGame:
    """Rebuild a piece set and side to move from :func:`encode` output.

    The three section headers must appear once each, in order, and
    ``#EXTRA`` must be followed by exactly one turn line.  Any other shape
    raises :class:`SaveFormatError`.

    A piece stored with a file outside 1–8 is marked out of play, and the
    yard slot of the side that captured it is advanced so that later
    captures continue the same parking sequence.
    """
    if yard is None:
        yard = CaptureYard()
    registry = PieceRegistry()
    turn: Color | None = None
    headers_seen = 0
    last_line_no = 0

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        last_line_no = line_no

        if line in _SECTION_ORDER:
            if headers_seen == len(_SECTION_ORDER):
                raise SaveFormatError("section", line_no, line, "repeated section header")
            expected = _SECTION_ORDER[headers_seen]
            if line != expected:
                raise SaveFormatError("section", line_no, line, f"expected {expected}")
            headers_seen += 1
            continue

        if headers_seen == 0:
            raise SaveFormatError("section", line_no, line, "data before a section header")

        section = _SECTION_ORDER[headers_seen - 1]
        if section == EXTRA_HEADER:
            if turn is not None:
                raise SaveFormatError("line", line_no, line, "data after the turn")
            try:
                turn = Color[line]
            except KeyError:
                raise SaveFormatError("turn", line_no, line, "unknown color") from None
            continue

        color = _SECTION_COLORS[section]
        piece = piece_from_line(line, color, line_no)
        if not 1 <= piece.file <= 8:
            piece.in_play = False
            yard.next_slot(color.opposite)
        try:
            registry.add(piece)
        except ValueError:
            raise SaveFormatError("id", line_no, str(piece.id), "duplicate id") from None

    if headers_seen < len(_SECTION_ORDER):
        missing = _SECTION_ORDER[headers_seen]
        raise SaveFormatError("section", last_line_no, missing, "missing section header")
    if turn is None:
        raise SaveFormatError("turn", last_line_no, "", "missing turn")

    return SavedGame(registry, turn, yard)
