import functools
import typing as t

__all__ = (
    "format_positional_error",
    "offset_to_line_pos",
    "BrainfuckError",
    "PositionalError",
    "UnmatchedBracketError",
    "TapeError",
    "OutOfBoundsError",
    "SourceReadError"
)


def offset_to_line_pos(string: str, offset: int) -> tuple[int, int]:
    """Convert a flat offset into `string` to a zero-based (line, column) pair."""
    line = string.count("\n", 0, offset)
    line_start = string.rfind("\n", 0, offset) + 1
    return line, offset - line_start


@functools.lru_cache(128)
def format_positional_error(
    line: int,
    pos: int,
    string: str,
    message: str,
    prior_lines: int = 3
) -> str:
    lines = string.split("\n")
    zfill = len(str(len(lines) - 1))
    numbered = [f"{n:0{zfill}} {l}" for n, l in enumerate(lines)]

    printed_lines = numbered[max(0, line - prior_lines): line + 1]

    output_lines = [
        *(["..."] if line - prior_lines >= 1 else []),
        *printed_lines,
        " "*(pos + 1 + zfill) + "^",
        f"line {line}: {message}"
    ]

    return "\n".join(output_lines)


class BrainfuckError(Exception):
    """Base class for all errors raised by this package."""
    pass


class PositionalError(BrainfuckError):
    """Generic error that happened at some offset in a program.

    Parse and runtime errors tied to a source character inherit from this.
    """
    def __init__(
        self,
        line: int,
        pos: int,
        string: str,
        message: str
    ):
        self.line = line
        self.pos = pos
        self.string = string
        self.message = message

    @classmethod
    def at_offset(cls, string: str, offset: int, message: str) -> 'PositionalError':
        line, pos = offset_to_line_pos(string, offset)
        return cls(line, pos, string, message)

    def __str__(self) -> str:
        return format_positional_error(
            self.line,
            self.pos,
            self.string,
            self.message
        )


class UnmatchedBracketError(PositionalError):
    """A '[' has no balancing ']' in the rest of the program."""
    pass


class TapeError(BrainfuckError):
    pass


class OutOfBoundsError(TapeError):
    def __init__(self, cursor: int, length: int, direction: str):
        self.cursor = cursor
        self.length = length
        self.direction = direction

        super().__init__(
            f"cannot move {direction} from cell {cursor} (tape has {length} cells)"
        )


class SourceReadError(BrainfuckError):
    def __init__(self, path: t.Any, reason: str):
        self.path = path
        self.reason = reason

        super().__init__(f"cannot read {path}: {reason}")
