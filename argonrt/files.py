"""Reading and writing files from programs."""

from __future__ import annotations

import codecs
import datetime
import json
import os
from fractions import Fraction

from argonrt.buffers import ArgonBuffer
from argonrt.errors import ArgonError
from argonrt.jsonio import parse, stringify
from argonrt.values import ArObject, BuiltinFunction, type_of, unwrap

_SNIFF_LIMIT = 3072
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
)


def _os_message(action, path, error) -> str:
    reason = error.strerror or str(error)
    return f"{action} {path}: {reason.lower()}"


def _runtime(message) -> ArgonError:
    return ArgonError("Runtime Error", message)


def _integer_argument(value, name) -> int:
    if type_of(value) != "number":
        raise _runtime(f"{name} takes a number not type '{type_of(value)}'")
    number = Fraction(value)
    if number.denominator != 1:
        raise _runtime(f"{name} takes an integer not type '{type_of(value)}'")
    return int(number)


def _sniff(header: bytes, whole: bytes) -> str:
    for signature, kind in _SIGNATURES:
        if header.startswith(signature):
            return kind
    if not header:
        return "text/plain"
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        text = decoder.decode(header, final=len(whole) <= len(header))
    except UnicodeDecodeError:
        return "application/octet-stream"
    if "\x00" in text:
        return "application/octet-stream"
    stripped = text.lstrip()
    if stripped[:1] in ("{", "["):
        try:
            json.loads(whole.decode("utf-8"))
        except ValueError:
            pass
        else:
            return "application/json"
    return "text/plain; charset=utf-8"


class FileReader(ArObject):
    """An open file whose contents can be read as text, JSON or bytes."""

    def __init__(self, path):
        self.path = path
        try:
            self._file = open(path, "rb")
        except OSError as error:
            raise _runtime(_os_message("open", path, error)) from None
        super().__init__("file")
        for key, method in (
            ("text", self.text),
            ("json", self.json),
            ("contentType", self.content_type),
            ("buffer", self.buffer),
            ("seek", self.seek),
            ("size", self.size),
            ("ModTime", self.mod_time),
        ):
            self.attributes[key] = BuiltinFunction(key, method)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _read_rest(self) -> bytes:
        try:
            return self._file.read()
        except OSError as error:
            raise _runtime(_os_message("read", self.path, error)) from None

    def text(self, *args):
        """The rest of the file as text."""
        return self._read_rest().decode("utf-8", errors="replace")

    def json(self, *args):
        """The rest of the file parsed as JSON."""
        return parse(self.text())

    def content_type(self, *args):
        """The media type detected from the file's contents."""
        try:
            with open(self.path, "rb") as handle:
                whole = handle.read()
        except OSError as error:
            raise _runtime(_os_message("open", self.path, error)) from None
        return _sniff(whole[:_SNIFF_LIMIT], whole)

    def buffer(self, *args):
        """Read the rest of the file, or at most a given number of bytes, as a buffer."""
        if len(args) > 1:
            raise _runtime(f"buffer takes 0 or 1 argument, got {len(args)}")
        if not args:
            return ArgonBuffer(self._read_rest())
        size = _integer_argument(args[0], "buffer")
        if size < 0:
            raise _runtime("buffer size must not be negative")
        try:
            data = self._file.read(size)
        except OSError as error:
            raise _runtime(_os_message("read", self.path, error)) from None
        if size > 0 and not data:
            raise _runtime("EOF")
        return ArgonBuffer(data)

    def seek(self, *args):
        """Move to an absolute byte offset."""
        if len(args) != 1:
            raise _runtime(f"seek takes 1 argument, got {len(args)}")
        offset = _integer_argument(args[0], "seek")
        try:
            self._file.seek(offset, os.SEEK_SET)
        except (OSError, ValueError):
            raise _runtime(f"seek {self.path}: invalid argument") from None
        return None

    def size(self, *args):
        """The size of the file in bytes."""
        try:
            return Fraction(os.fstat(self._file.fileno()).st_size)
        except OSError as error:
            raise _runtime(_os_message("stat", self.path, error)) from None

    def mod_time(self, *args):
        """The time the file was last modified."""
        try:
            stamp = os.fstat(self._file.fileno()).st_mtime
        except OSError as error:
            raise _runtime(_os_message("stat", self.path, error)) from None
        return datetime.datetime.fromtimestamp(stamp, tz=datetime.timezone.utc)

    def close(self):
        """Release the underlying file."""
        self._file.close()


class FileWriter(ArObject):
    """A newly created (or truncated) file that text, bytes or JSON can be written to."""

    def __init__(self, path):
        self.path = path
        try:
            self._file = open(path, "wb", buffering=0)
        except OSError as error:
            raise _runtime(_os_message("open", path, error)) from None
        super().__init__("file")
        for key, method in (("text", self.text), ("buffer", self.buffer), ("json", self.json)):
            self.attributes[key] = BuiltinFunction(key, method)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def text(self, *args):
        """Write a string."""
        if len(args) != 1:
            raise _runtime(f"text takes 1 argument, got {len(args)}")
        if type_of(args[0]) != "string":
            raise _runtime(f"text takes a string not type '{type_of(args[0])}'")
        self._file.write(unwrap(args[0]).encode("utf-8"))
        return None

    def buffer(self, *args):
        """Write the bytes of a buffer."""
        if len(args) != 1:
            raise _runtime(f"buffer takes 1 argument, got {len(args)}")
        if type_of(args[0]) != "buffer":
            raise _runtime(f"buffer takes a buffer not type '{type_of(args[0])}'")
        self._file.write(bytes(unwrap(args[0])))
        return None

    def json(self, *args):
        """Write a value as JSON text."""
        if len(args) != 1:
            raise _runtime(f"json takes 1 argument, got {len(args)}")
        self._file.write(stringify(args[0]).encode("utf-8"))
        return None

    def close(self):
        """Release the underlying file."""
        self._file.close()


def read_file(*args):
    """The file.read built-in: open a file for reading."""
    if len(args) != 1:
        raise _runtime(f"read takes 1 argument, got {len(args)}")
    if type_of(args[0]) != "string":
        raise _runtime(f"read takes a string not type '{type_of(args[0])}'")
    return FileReader(unwrap(args[0]))


def write_file(*args):
    """The file.write built-in: create a file for writing."""
    if len(args) != 1:
        raise _runtime(f"write takes 1 argument, got {len(args)}")
    if type_of(args[0]) != "string":
        raise _runtime(f"write takes a string not type '{type_of(args[0])}'")
    return FileWriter(unwrap(args[0]))