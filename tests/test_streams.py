import io

from brainfuck import BufferIoHandler, StdIoHandler, first_byte


def test_first_byte():
    assert first_byte("abc\n") == ord("a")
    assert first_byte("\n") == 10
    assert first_byte("é\n") == 0xC3
    assert first_byte("") is None


def test_std_io_reads_one_line_per_byte():
    handler = StdIoHandler(stdin=io.StringIO("hello\nworld\n"), stdout=io.StringIO())

    assert handler.read_byte() == ord("h")
    assert handler.read_byte() == ord("w")
    assert handler.read_byte() is None


def test_std_io_writes_low_byte():
    out = io.StringIO()
    handler = StdIoHandler(stdin=io.StringIO(), stdout=out)

    handler.write_byte(65)
    handler.write_byte(256 + 66)
    handler.flush()

    assert out.getvalue() == "AB"


def test_buffer_io():
    handler = BufferIoHandler("x\n\nyz")

    assert handler.read_byte() == ord("x")
    assert handler.read_byte() == 10
    assert handler.read_byte() == ord("y")
    assert handler.read_byte() is None

    handler.write_byte(0x1FF)
    assert handler.output == b"\xff"
    assert handler.text == "\xff"


def test_first_byte_of_undecodable_input():
    assert first_byte("\udcff\n") == 0xFF


def test_std_io_reads_raw_bytes_from_buffer():
    stdin = io.TextIOWrapper(io.BytesIO(b"\xff\n\xc3\xa9x\nab\n"), encoding="utf-8")
    handler = StdIoHandler(stdin=stdin, stdout=io.StringIO())

    assert handler.read_byte() == 0xFF
    assert handler.read_byte() == 0xC3
    assert handler.read_byte() == ord("a")
    assert handler.read_byte() is None
