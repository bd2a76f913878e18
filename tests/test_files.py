import datetime
import os
from fractions import Fraction

import pytest

from argonrt.buffers import ArgonBuffer
from argonrt.errors import ArgonError
from argonrt.files import FileReader, FileWriter, read_file, write_file
from argonrt.maps import ArgonMap
from argonrt.values import call_value


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_bytes(b"hello world")
    return path


def test_text_round_trip(tmp_path):
    path = str(tmp_path / "out.txt")
    with write_file(path) as writer:
        writer.text("some text here")
    with read_file(path) as reader:
        assert reader.text() == "some text here"


def test_buffer_round_trip(tmp_path):
    path = str(tmp_path / "out.bin")
    data = bytes([0, 1, 2, 254, 255])
    with FileWriter(path) as writer:
        writer.buffer(ArgonBuffer(data))
    with FileReader(path) as reader:
        result = reader.buffer()
    assert result.value == data


def test_json_round_trip(tmp_path):
    path = str(tmp_path / "out.json")
    with write_file(path) as writer:
        writer.json(ArgonMap({"a": Fraction(1), "b": "x"}))
    with read_file(path) as reader:
        result = reader.json()
    assert result.get_index("a") == Fraction(1)
    assert result.get_index("b") == "x"


def test_size_matches_content(sample):
    with read_file(str(sample)) as reader:
        assert reader.size() == Fraction(len(sample.read_bytes()))


def test_partial_buffer_then_rest(sample):
    with read_file(str(sample)) as reader:
        first = reader.buffer(Fraction(5))
        rest = reader.text()
    assert first.value + rest.encode() == sample.read_bytes()
    assert len(first) == 5


def test_seek_rewinds(sample):
    with read_file(str(sample)) as reader:
        whole = reader.text()
        reader.seek(Fraction(0))
        assert reader.text() == whole


def test_buffer_at_end_raises(sample):
    with read_file(str(sample)) as reader:
        reader.text()
        with pytest.raises(ArgonError) as info:
            reader.buffer(Fraction(3))
    assert info.value.message == "EOF"


def test_seek_requires_integer(sample):
    with read_file(str(sample)) as reader:
        with pytest.raises(ArgonError) as info:
            reader.seek(Fraction(1, 2))
    assert info.value.message == "seek takes an integer not type 'number'"


def test_buffer_too_many_arguments(sample):
    with read_file(str(sample)) as reader:
        with pytest.raises(ArgonError) as info:
            reader.buffer(Fraction(1), Fraction(2))
    assert info.value.message == "buffer takes 0 or 1 argument, got 2"


def test_missing_file_raises(tmp_path):
    with pytest.raises(ArgonError) as info:
        read_file(str(tmp_path / "missing.txt"))
    assert info.value.kind == "Runtime Error"


def test_read_argument_checks():
    with pytest.raises(ArgonError) as info:
        read_file()
    assert info.value.message == "read takes 1 argument, got 0"
    with pytest.raises(ArgonError) as info:
        read_file(Fraction(5))
    assert info.value.message == "read takes a string not type 'number'"


def test_write_argument_checks():
    with pytest.raises(ArgonError) as info:
        write_file("a", "b")
    assert info.value.message == "write takes 1 argument, got 2"
    with pytest.raises(ArgonError) as info:
        write_file(None)
    assert info.value.message == "write takes a string not type 'null'"


def test_writer_buffer_rejects_strings(tmp_path):
    with write_file(str(tmp_path / "x")) as writer:
        with pytest.raises(ArgonError) as info:
            writer.buffer("text")
    assert info.value.message == "buffer takes a buffer not type 'string'"


def test_writer_truncates(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("old contents that are long")
    with write_file(str(path)) as writer:
        writer.text("new")
    assert path.read_text() == "new"


def test_content_type_png(tmp_path):
    path = tmp_path / "img"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)
    with read_file(str(path)) as reader:
        assert reader.content_type() == "image/png"


def test_content_type_text(sample):
    with read_file(str(sample)) as reader:
        assert reader.content_type().startswith("text/plain")


def test_mod_time_matches_stat(sample):
    with read_file(str(sample)) as reader:
        stamp = reader.mod_time()
    assert isinstance(stamp, datetime.datetime)
    assert stamp.timestamp() == pytest.approx(os.path.getmtime(sample))


def test_attributes_are_callable(sample):
    with read_file(str(sample)) as reader:
        text_method = reader.get_attribute("text")
        assert call_value(text_method, []) == sample.read_text()