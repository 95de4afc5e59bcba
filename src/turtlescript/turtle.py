"""Turtle state machine that replays a parsed program one step at a time."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .instructions import (
    Absolute,
    Center,
    Clear,
    Coord,
    Direction,
    Face,
    Goto,
    Instruction,
    Move,
    Pen,
    Program,
)
from .viewport import FixedViewport, Viewport

if TYPE_CHECKING:
    from .config import Config

Segment = tuple[tuple[float, float], tuple[float, float]]


@dataclass
class Point:
    x: float = 0.0
    y: float = 0.0

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass
class TurtleState:
    """Everything a step can change."""

    position: Point = field(default_factory=Point)
    heading: Direction = Direction.NORTH
    pen_down: bool = False
    segments: list[Segment] = field(default_factory=list)
    program_counter: int = 0

    def move_to(self, x: float, y: float):
        start = self.position.as_tuple()
        self.position.x = x
        self.position.y = y
        if self.pen_down:
            self.segments.append((start, (x, y)))


class StepOutcome(str, Enum):
    ADVANCED = "advanced"
    HALTED = "halted"


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of the turtle state for renderers."""

    position: tuple[float, float]
    heading: Direction
    pen_down: bool
    segments: tuple[Segment, ...]
    program_counter: int
    next_instruction: Instruction | None
    halted: bool

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "heading": self.heading.value,
            "pen_down": self.pen_down,
            "segments": [[list(a), list(b)] for a, b in self.segments],
            "program_counter": self.program_counter,
            "next_instruction": str(self.next_instruction) if self.next_instruction is not None else None,
            "halted": self.halted,
        }


def resolve(coord: Coord, extent: float) -> float:
    """Resolve a coordinate against one viewport dimension."""
    match coord:
        case Center():
            return extent / 2
        case Absolute(value):
            return value
    raise TypeError(f"Not a coordinate: {coord!r}")


def execute(instruction: Instruction, state: TurtleState, viewport: Viewport):
    """Apply one instruction to the state. The program counter is left alone."""
    match instruction:
        case Goto(x, y):
            width, height = viewport.size()
            state.move_to(resolve(x, width), resolve(y, height))
        case Face(direction):
            state.heading = direction
        case Move(amount):
            dx, dy = state.heading.vector
            state.move_to(state.position.x + dx * amount, state.position.y + dy * amount)
        case Pen(down):
            state.pen_down = down
        case Clear():
            state.segments.clear()
        case _:
            raise TypeError(f"Not an instruction: {instruction!r}")


class Interpreter:
    """Steps a turtle through a program on external triggers."""

    def __init__(
        self,
        program: Program,
        viewport: Viewport | None = None,
        looping: bool = True,
        state: TurtleState | None = None,
    ):
        self.program = tuple(program)
        self.viewport = viewport or FixedViewport()
        self.looping = looping
        self.state = state or TurtleState()

    @classmethod
    def from_config(cls, program: Program, config: "Config") -> "Interpreter":
        """Build an interpreter from a `Config`."""
        viewport = FixedViewport(config.viewport.width, config.viewport.height)
        return cls(program, viewport=viewport, looping=config.run.looping)

    @property
    def halted(self) -> bool:
        if not self.program:
            return True
        return self.state.program_counter >= len(self.program) and not self.looping

    @property
    def current_instruction(self) -> Instruction | None:
        """Instruction the next step will run, or None when halted."""
        if self.halted:
            return None
        pc = self.state.program_counter
        if pc >= len(self.program):
            pc = 0
        return self.program[pc]

    def step(self) -> StepOutcome:
        """Run the instruction at the program counter and advance."""
        if self.halted:
            return StepOutcome.HALTED

        # Looping may have been switched on after a single pass finished
        if self.state.program_counter >= len(self.program):
            self.state.program_counter = 0

        execute(self.program[self.state.program_counter], self.state, self.viewport)

        self.state.program_counter += 1
        if self.looping and self.state.program_counter >= len(self.program):
            self.state.program_counter = 0
        return StepOutcome.ADVANCED

    def run(self, max_steps: int) -> int:
        """Step until halted or `max_steps` instructions ran."""
        steps = 0
        while steps < max_steps and self.step() is StepOutcome.ADVANCED:
            steps += 1
        return steps

    def reset(self):
        """Rewind to the first instruction, keeping pose and drawing."""
        self.state.program_counter = 0

    @property
    def position(self) -> tuple[float, float]:
        return self.state.position.as_tuple()

    @property
    def heading(self) -> Direction:
        return self.state.heading

    @property
    def pen_down(self) -> bool:
        return self.state.pen_down

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self.state.segments)

    @property
    def program_counter(self) -> int:
        return self.state.program_counter

    def snapshot(self) -> Snapshot:
        return Snapshot(
            position=self.position,
            heading=self.heading,
            pen_down=self.pen_down,
            segments=self.segments,
            program_counter=self.program_counter,
            next_instruction=self.current_instruction,
            halted=self.halted,
        )
