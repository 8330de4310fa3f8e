import argparse
import logging
import pathlib
import sys
import typing as t

import brainfuck


def set_up_argparse() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brainfuck",
        description=(
            "A basic interpreter for brainfuck."
        )
    )

    parser.add_argument(
        "file", type=str, help=(
            "The file to interpret."
        )
    )

    parser.add_argument(
        "--cells", type=int, default=brainfuck.DEFAULT_CELLS, help=(
            "Number of cells on the tape (default: %(default)s)."
        )
    )

    parser.add_argument(
        "--cell-bits", type=int, default=brainfuck.DEFAULT_CELL_BITS, help=(
            "Width of each cell in bits (default: %(default)s)."
        )
    )

    parser.add_argument(
        "--limit", type=int, default=0, help=(
            "Stop with an error after this many instructions. 0 disables the limit."
        )
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help=(
            "Log interpreter activity to stderr."
        )
    )

    return parser


def read_source(file: pathlib.Path) -> str:
    try:
        return file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise brainfuck.SourceReadError(file, str(e)) from e


def main(argv: t.Optional[t.Sequence[str]] = None) -> None:
    parser = set_up_argparse()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.cells < 1:
        parser.error(f"--cells: must be at least 1, got {args.cells}")

    if args.cell_bits < 8:
        parser.error(f"--cell-bits: must be at least 8, got {args.cell_bits}")

    if args.limit < 0:
        parser.error(f"--limit: must not be negative, got {args.limit}")

    file = pathlib.Path(args.file)

    if not file.exists():
        parser.error(f"file: cannot find {file}")

    if not file.is_file():
        parser.error(f"file: {file} is not a file")

    try:
        source = read_source(file)
    except brainfuck.SourceReadError as e:
        parser.error(f"file: {e}")

    interpreter = brainfuck.Interpreter(
        cells=args.cells,
        cell_bits=args.cell_bits,
        instruction_limit=args.limit
    )

    try:
        interpreter.run(source)
    except brainfuck.BrainfuckError as e:
        sys.stdout.flush()
        print(f"error:\n{e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
