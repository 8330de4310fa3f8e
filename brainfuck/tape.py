#
# Memory tape for the interpreter.
#

import logging
import typing as t

from . import errors

__all__ = (
    "DEFAULT_CELLS",
    "DEFAULT_CELL_BITS",
    "Tape"
)

logger = logging.getLogger(__name__)

DEFAULT_CELLS = 30000
DEFAULT_CELL_BITS = 16


class Tape:
    """
    A bounded row of fixed-width unsigned cells and a cursor.

    Cell arithmetic wraps at the cell width. Moving the cursor off either
    end raises `brainfuck.errors.OutOfBoundsError` and leaves the tape
    unchanged.
    """
    def __init__(
        self,
        length: int = DEFAULT_CELLS,
        cell_bits: int = DEFAULT_CELL_BITS
    ):
        if length < 1:
            raise ValueError(f"tape length must be at least 1, got {length}")

        if cell_bits < 8:
            raise ValueError(f"cell width must be at least 8 bits, got {cell_bits}")

        self.cell_bits = cell_bits
        self._modulus = 1 << cell_bits
        self._cells: list[int] = [0] * length
        self.cursor = 0

        logger.debug(f"New tape: {length} cells of {cell_bits} bits")

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def max_value(self) -> int:
        return self._modulus - 1

    @property
    def cells(self) -> t.Sequence[int]:
        return tuple(self._cells)

    def move_right(self) -> None:
        if self.cursor + 1 >= len(self._cells):
            raise errors.OutOfBoundsError(self.cursor, len(self._cells), "right")

        self.cursor += 1

    def move_left(self) -> None:
        if self.cursor == 0:
            raise errors.OutOfBoundsError(self.cursor, len(self._cells), "left")

        self.cursor -= 1

    def increment(self) -> None:
        self._cells[self.cursor] = (self._cells[self.cursor] + 1) % self._modulus

    def decrement(self) -> None:
        self._cells[self.cursor] = (self._cells[self.cursor] - 1) % self._modulus

    def read(self) -> int:
        return self._cells[self.cursor]

    def write(self, value: int) -> None:
        self._cells[self.cursor] = value % self._modulus

    def __repr__(self) -> str:
        return f"Tape(length={len(self)}, cell_bits={self.cell_bits}, cursor={self.cursor})"
