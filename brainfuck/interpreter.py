import logging
import typing as t

from . import errors, streams
from .tape import DEFAULT_CELL_BITS, DEFAULT_CELLS, Tape

__all__ = (
    "COMMANDS",
    "InterpreterContext",
    "Interpreter",
    "InterpreterError",
    "CursorOutOfBoundsError",
    "InputExhaustedError",
    "OutputError",
    "InstructionLimitError",
    "find_match",
    "evaluate"
)

logger = logging.getLogger(__name__)

MOVE_RIGHT = ">"
MOVE_LEFT = "<"
INCREMENT = "+"
DECREMENT = "-"
OUTPUT = "."
INPUT = ","
LOOP_OPEN = "["
LOOP_CLOSE = "]"

COMMANDS = frozenset(
    (MOVE_RIGHT, MOVE_LEFT, INCREMENT, DECREMENT, OUTPUT, INPUT, LOOP_OPEN, LOOP_CLOSE)
)


class InterpreterContext:
    """
    Per-run interpreter state. Holds the program text, the tape and the
    I/O handler for exactly one run.
    """
    def __init__(
        self,
        source: str,
        tape: Tape,
        io: streams.IoHandler
    ):
        self._source = source
        self.tape = tape
        self.io = io
        self.instruction_count = 0
        self.loop_depth = 0

    @property
    def source(self) -> str:
        return self._source


class InterpreterError(errors.PositionalError):
    """An error raised while executing the character at `offset`."""
    def __init__(self, ctx: InterpreterContext, offset: int, message: str):
        self.ctx = ctx
        self.offset = offset

        line, pos = errors.offset_to_line_pos(ctx.source, offset)
        super().__init__(
            line,
            pos,
            ctx.source,
            message
        )


class CursorOutOfBoundsError(InterpreterError, errors.OutOfBoundsError):
    def __init__(self, ctx: InterpreterContext, offset: int, cause: errors.OutOfBoundsError):
        InterpreterError.__init__(self, ctx, offset, str(cause))

        self.cursor = cause.cursor
        self.length = cause.length
        self.direction = cause.direction


class InputExhaustedError(InterpreterError):
    def __init__(self, ctx: InterpreterContext, offset: int):
        super().__init__(ctx, offset, "input: no more input available")


class OutputError(InterpreterError):
    pass


class InstructionLimitError(InterpreterError):
    pass


def find_match(source: str, start: int, end: t.Optional[int] = None) -> int:
    """
    Find the ']' balancing the '[' at `start`, scanning no further than `end`.

    Raises `brainfuck.errors.UnmatchedBracketError` if the scan runs out
    before the depth returns to zero.
    """
    if end is None:
        end = len(source)

    if source[start] != LOOP_OPEN:
        raise ValueError(f"find_match: expected '{LOOP_OPEN}' at {start}, got {source[start]!r}")

    depth = 1
    for pos in range(start + 1, end):
        char = source[pos]
        if char == LOOP_OPEN:
            depth += 1
        elif char == LOOP_CLOSE:
            depth -= 1
            if depth == 0:
                return pos

    raise errors.UnmatchedBracketError.at_offset(
        source, start,
        f"no matching '{LOOP_CLOSE}' for '{LOOP_OPEN}'"
    )


class Interpreter:
    """
    The interpreter implementation.

    Loops are not precompiled. Each time a '[' is reached its match is
    found by a fresh scan, and the body is re-evaluated from its start once
    per non-zero condition check.
    """
    def __init__(
        self,
        cells: int = DEFAULT_CELLS,
        cell_bits: int = DEFAULT_CELL_BITS,
        instruction_limit: int = 0
    ):
        self.cells = cells
        self.cell_bits = cell_bits
        self.instruction_limit = instruction_limit

    def over_instruction_limit(self, context: InterpreterContext) -> bool:
        if self.instruction_limit == 0:
            return False
        else:
            return context.instruction_count > self.instruction_limit

    def count_instruction(self, context: InterpreterContext, pos: int) -> None:
        context.instruction_count += 1
        if self.over_instruction_limit(context):
            raise InstructionLimitError(
                context, pos,
                f"Exceeded maximum instruction limit of {self.instruction_limit}."
            )

    def new_tape(self) -> Tape:
        return Tape(self.cells, self.cell_bits)

    def run(
        self,
        source: str,
        io: t.Optional[streams.IoHandler] = None,
        tape: t.Optional[Tape] = None
    ) -> InterpreterContext:
        """
        Run a whole program. A fresh tape is created unless one is given.
        Returns the finished context so the final tape can be inspected.
        """
        if io is None:
            io = streams.StdIoHandler()

        if tape is None:
            tape = self.new_tape()

        context = InterpreterContext(source, tape, io)

        logger.debug(f"run: {len(source)} characters")
        self.evaluate(context, 0, len(source))
        self._flush(context)

        logger.debug(f"run: finished after {context.instruction_count} instructions")
        return context

    def _flush(self, context: InterpreterContext) -> None:
        try:
            context.io.flush()
        except OSError as e:
            raise OutputError(context, max(0, len(context.source) - 1), f"output: {e}") from e

    def evaluate(self, context: InterpreterContext, start: int, end: int) -> None:
        """
        Evaluate the half-open range [start, end) of the program.

        Active loops are kept on an explicit stack of (loop start, loop end)
        frames, so nesting depth is not bound by the Python call stack.
        """
        source = context.source
        tape = context.tape
        loops: list[tuple[int, int]] = []
        pos = start
        stop = end

        while True:
            if pos >= stop:
                if not loops:
                    break

                # End of a loop body: check the condition again.
                loop_start, loop_end = loops[-1]
                self.count_instruction(context, loop_start)

                if tape.read() != 0:
                    pos = loop_start + 1
                    continue

                loops.pop()
                context.loop_depth -= 1
                logger.debug(f"loop: exit {loop_start}..{loop_end}")

                pos = loop_end + 1
                stop = loops[-1][1] if loops else end
                continue

            char = source[pos]

            if char not in COMMANDS:
                pos += 1
                continue

            if char == LOOP_CLOSE:
                # Unbalanced ']' with no '[' before it. Inert.
                logger.debug(f"evaluate: stray '{LOOP_CLOSE}' at {pos}")
                pos += 1
                continue

            if char == LOOP_OPEN:
                match = find_match(source, pos, stop)
                self.count_instruction(context, pos)

                if tape.read() == 0:
                    pos = match + 1
                    continue

                loops.append((pos, match))
                context.loop_depth += 1
                logger.debug(f"loop: enter {pos}..{match}, depth {context.loop_depth}")

                pos += 1
                stop = match
                continue

            self.count_instruction(context, pos)

            if char == MOVE_RIGHT:
                self.move(context, pos, tape.move_right)
            elif char == MOVE_LEFT:
                self.move(context, pos, tape.move_left)
            elif char == INCREMENT:
                tape.increment()
            elif char == DECREMENT:
                tape.decrement()
            elif char == OUTPUT:
                self.output(context, pos)
            elif char == INPUT:
                self.input(context, pos)

            pos += 1

    @staticmethod
    def move(context: InterpreterContext, pos: int, step: t.Callable[[], None]) -> None:
        try:
            step()
        except errors.OutOfBoundsError as e:
            raise CursorOutOfBoundsError(context, pos, e) from e

    @staticmethod
    def output(context: InterpreterContext, pos: int) -> None:
        try:
            context.io.write_byte(context.tape.read())
        except OSError as e:
            raise OutputError(context, pos, f"output: {e}") from e

    @staticmethod
    def input(context: InterpreterContext, pos: int) -> None:
        try:
            value = context.io.read_byte()
        except OSError as e:
            raise InputExhaustedError(context, pos) from e

        if value is None:
            raise InputExhaustedError(context, pos)

        context.tape.write(value)


def evaluate(
    source: str,
    tape: Tape,
    io: t.Optional[streams.IoHandler] = None
) -> InterpreterContext:
    """Run `source` against a caller-owned tape with a default interpreter."""
    return Interpreter(len(tape), tape.cell_bits).run(source, io=io, tape=tape)
