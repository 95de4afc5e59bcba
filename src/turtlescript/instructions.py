"""Instruction set and line parser for turtle programs."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Union

from .errors import (
    InvalidCoordinate,
    InvalidDirection,
    InvalidNumber,
    InvalidPenState,
    MissingOperation,
    MissingParameter,
    ParseError,
    TooManyParameters,
    UnknownOperation,
)

if TYPE_CHECKING:
    from .config import LanguageConfig

COMMENT_PREFIX = "//"


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTHEAST = "northeast"
    NORTHWEST = "northwest"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"

    @property
    def vector(self) -> tuple[float, float]:
        """Unit displacement in screen space (y grows downward)."""
        return VECTORS[self]


# Diagonals are not normalized: `move 10` facing northeast
# lands at (+10, -10).
VECTORS = {
    Direction.NORTH: (0.0, -1.0),
    Direction.SOUTH: (0.0, 1.0),
    Direction.EAST: (1.0, 0.0),
    Direction.WEST: (-1.0, 0.0),
    Direction.NORTHEAST: (1.0, -1.0),
    Direction.NORTHWEST: (-1.0, -1.0),
    Direction.SOUTHEAST: (1.0, 1.0),
    Direction.SOUTHWEST: (-1.0, 1.0),
}


class DirectionScheme(str, Enum):
    COMPASS = "compass"  # eight compass points
    ARROWS = "arrows"  # up/down/left/right


# Tokens accepted by `face` under each scheme
SCHEMES = {
    DirectionScheme.COMPASS: {d.value: d for d in Direction},
    DirectionScheme.ARROWS: {
        "up": Direction.NORTH,
        "down": Direction.SOUTH,
        "left": Direction.WEST,
        "right": Direction.EAST,
    },
}


@dataclass(frozen=True)
class Center:
    """Viewport centre, resolved when the instruction runs."""

    def __str__(self):
        return "center"


@dataclass(frozen=True)
class Absolute:
    value: float

    def __str__(self):
        return _format_number(self.value)


Coord = Union[Center, Absolute]


@dataclass(frozen=True)
class Goto:
    x: Coord
    y: Coord

    def __str__(self):
        return f"goto {self.x} {self.y}"


@dataclass(frozen=True)
class Face:
    direction: Direction

    def __str__(self):
        return f"face {self.direction.value}"


@dataclass(frozen=True)
class Move:
    amount: float

    def __str__(self):
        return f"move {_format_number(self.amount)}"


@dataclass(frozen=True)
class Pen:
    down: bool

    def __str__(self):
        return "pen down" if self.down else "pen up"


@dataclass(frozen=True)
class Clear:
    def __str__(self):
        return "clear"


Instruction = Union[Goto, Face, Move, Pen, Clear]
Program = tuple[Instruction, ...]


def _format_number(value: float) -> str:
    return repr(float(value))


def _parse_float(token: str) -> float | None:
    # float() also takes "nan", "inf" and "1_000"; none of those are coordinates
    if "_" in token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_coord(token: str) -> Coord:
    """Parse `center` or a number into a coordinate."""
    if token.lower() == "center":
        return Center()
    value = _parse_float(token)
    if value is None:
        raise InvalidCoordinate(token)
    return Absolute(value)


def parse_direction(token: str, scheme: DirectionScheme = DirectionScheme.COMPASS) -> Direction:
    direction = SCHEMES[scheme].get(token.lower())
    if direction is None:
        raise InvalidDirection(token)
    return direction


class Parser:
    """Parses turtle program text into a validated instruction tuple."""

    def __init__(self, scheme: DirectionScheme = DirectionScheme.COMPASS, strict: bool = True):
        self.scheme = DirectionScheme(scheme)
        self.strict = strict

    @classmethod
    def from_config(cls, language: "LanguageConfig") -> "Parser":
        """Build a parser from a `LanguageConfig`."""
        return cls(scheme=language.directions, strict=language.strict)

    def parse(self, source: str | Iterable[str]) -> Program:
        """Parse a whole program, failing on the first bad line."""
        lines = source.splitlines() if isinstance(source, str) else source
        instructions = []

        for i, raw in enumerate(lines, 1):
            line = raw.strip()

            # Skip empty lines and comments
            if not line or line.startswith(COMMENT_PREFIX):
                continue

            try:
                instructions.append(self.parse_line(line))
            except ParseError as e:
                e.locate(i, line)
                raise

        return tuple(instructions)

    def parse_line(self, line: str) -> Instruction:
        """Parse a single trimmed, non-comment line."""
        args = line.split()
        if not args:
            raise MissingOperation()

        operation, args = args[0], args[1:]
        op = operation.lower()

        if op == "goto":
            if not args:
                raise MissingParameter("x")
            x = parse_coord(args[0])
            if len(args) > 1:
                y = parse_coord(args[1])
            elif x == Center():
                y = x
            else:
                raise MissingParameter("y")
            self._check_end(args, 2)
            return Goto(x, y)

        if op == "face":
            if not args:
                raise MissingParameter("direction")
            direction = parse_direction(args[0], self.scheme)
            self._check_end(args, 1)
            return Face(direction)

        if op == "move":
            if not args:
                raise MissingParameter("amount")
            amount = _parse_float(args[0])
            if amount is None:
                raise InvalidNumber(args[0])
            self._check_end(args, 1)
            return Move(amount)

        if op == "pen":
            if not args:
                raise MissingParameter("state")
            state = args[0].lower()
            if state not in ("down", "up"):
                raise InvalidPenState(args[0])
            self._check_end(args, 1)
            return Pen(state == "down")

        if op == "clear":
            self._check_end(args, 0)
            return Clear()

        raise UnknownOperation(operation)

    def _check_end(self, args: list[str], expected: int):
        if self.strict and len(args) > expected:
            raise TooManyParameters()


def parse(
    source: str | Iterable[str],
    scheme: DirectionScheme = DirectionScheme.COMPASS,
    strict: bool = True,
) -> Program:
    """Parse program text (or an iterable of lines) into instructions."""
    return Parser(scheme, strict).parse(source)


def parse_line(
    line: str,
    scheme: DirectionScheme = DirectionScheme.COMPASS,
    strict: bool = True,
) -> Instruction:
    return Parser(scheme, strict).parse_line(line)
