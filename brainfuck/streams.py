import io
import sys
import typing as t

__all__ = (
    "IoHandler",
    "StdIoHandler",
    "BufferIoHandler",
    "first_byte"
)


def first_byte(line: str) -> t.Optional[int]:
    """
    Get the first byte of a line's UTF-8 encoding. An empty string means
    the input is exhausted, so None is returned.
    """
    encoded = line.encode("utf-8", "surrogateescape")
    if not encoded:
        return None

    return encoded[0]


class IoHandler(t.Protocol):
    """
    The minimum interface the interpreter needs for ',' and '.'.
    """
    def read_byte(self) -> t.Optional[int]: ...
    def write_byte(self, value: int) -> None: ...
    def flush(self) -> None: ...


class StdIoHandler:
    """
    Implements input and output using text streams, stdin/stdout by default.

    Each read consumes a whole line and keeps only its first byte, taken
    from the binary buffer under the stream when there is one. Each
    write emits the low 8 bits of the value as a single character.
    """
    def __init__(
        self,
        stdin: t.Optional[t.TextIO] = None,
        stdout: t.Optional[t.TextIO] = None
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def read_byte(self) -> t.Optional[int]:
        buffer = getattr(self.stdin, "buffer", None)
        if buffer is None:
            return first_byte(self.stdin.readline())

        line: bytes = buffer.readline()
        if not line:
            return None

        return line[0]

    def write_byte(self, value: int) -> None:
        self.stdout.write(chr(value & 0xFF))

    def flush(self) -> None:
        self.stdout.flush()


class BufferIoHandler:
    """
    In-memory handler. Input follows the same one-line-per-read rule
    as `StdIoHandler`; output bytes are collected in `output`.
    """
    def __init__(self, input: t.Union[str, bytes] = b""):
        if isinstance(input, str):
            input = input.encode("utf-8")

        self._input = io.BytesIO(input)
        self._output = bytearray()

    def read_byte(self) -> t.Optional[int]:
        line = self._input.readline()
        if not line:
            return None

        return line[0]

    def write_byte(self, value: int) -> None:
        self._output.append(value & 0xFF)

    def flush(self) -> None:
        pass

    @property
    def output(self) -> bytes:
        return bytes(self._output)

    @property
    def text(self) -> str:
        return self._output.decode("latin-1")
