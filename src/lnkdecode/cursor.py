"""Bounds-checked little-endian reader over an immutable byte buffer."""

import struct

from ._constants import ANSI_CODEPAGE
from ._util import decode_ansi, decode_utf16le, format_guid
from .errors import OutOfBoundsError

_I16 = struct.Struct("<h")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_I64 = struct.Struct("<q")
_U64 = struct.Struct("<Q")


class ByteCursor:
    """Sequential / random-access reader confined to a window of *data*.

    All offsets taken and returned by a cursor are relative to the start of
    its window.  :meth:`slice` creates a nested cursor whose window is a
    sub-range of this one, so a decoder handed a slice cannot reach bytes
    outside it no matter what offsets it computes.  Every read that would
    cross the window end raises :class:`OutOfBoundsError`.
    """

    __slots__ = ("_data", "_start", "_end", "_pos")

    def __init__(self, data: bytes, start: int = 0, length: int | None = None):
        if not isinstance(data, bytes):
            data = bytes(data)
        if start < 0 or start > len(data):
            raise ValueError(f"start {start} outside buffer of {len(data)} bytes")
        if length is None:
            length = len(data) - start
        if length < 0 or start + length > len(data):
            raise ValueError(
                f"window {start}+{length} outside buffer of {len(data)} bytes"
            )
        self._data = data
        self._start = start
        self._end = start + length
        self._pos = start

    def __len__(self) -> int:
        return self._end - self._start

    def __repr__(self) -> str:
        return (
            f"ByteCursor(window=0x{self._start:X}..0x{self._end:X}, "
            f"pos=0x{self._pos:X})"
        )

    # -- positioning -------------------------------------------------------

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    def tell(self) -> int:
        return self._pos - self._start

    def absolute(self, offset: int | None = None) -> int:
        """Map a window offset (default: current position) to a buffer offset."""
        if offset is None:
            return self._pos
        return self._start + offset

    def seek_absolute(self, offset: int) -> None:
        """Move to *offset* within the window.  Seeking to the end is allowed."""
        if offset < 0 or offset > len(self):
            raise OutOfBoundsError(
                f"Seek to 0x{offset:X} outside {len(self)}-byte window "
                f"at 0x{self._start:X}"
            )
        self._pos = self._start + offset

    def seek_end(self) -> None:
        self._pos = self._end

    def skip(self, n: int) -> None:
        self._check(n)
        self._pos += n

    def _check(self, n: int, pos: int | None = None) -> int:
        if pos is None:
            pos = self._pos
        if n < 0 or pos < self._start or pos + n > self._end:
            raise OutOfBoundsError(
                f"Read of {n} bytes at 0x{pos:X} exceeds window "
                f"0x{self._start:X}..0x{self._end:X}"
            )
        return pos

    # -- sequential reads --------------------------------------------------

    def _unpack(self, fmt: struct.Struct) -> int:
        pos = self._check(fmt.size)
        self._pos += fmt.size
        return fmt.unpack_from(self._data, pos)[0]

    def read_u8(self) -> int:
        pos = self._check(1)
        self._pos += 1
        return self._data[pos]

    def read_i16(self) -> int:
        return self._unpack(_I16)

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_i64(self) -> int:
        return self._unpack(_I64)

    def read_u64(self) -> int:
        return self._unpack(_U64)

    def read_bytes(self, n: int) -> bytes:
        pos = self._check(n)
        self._pos += n
        return self._data[pos : pos + n]

    def read_guid(self) -> str:
        """Read a 16-byte GUID and return it as ``{XXXXXXXX-...}``."""
        return "{" + format_guid(self.read_bytes(16)) + "}"

    def read_fixed_string(self, n: int, width: int) -> str:
        """Read exactly *n* characters of *width* bytes each (1 = ANSI, 2 = UTF-16LE)."""
        if width not in (1, 2):
            raise ValueError(f"character width must be 1 or 2, got {width}")
        raw = self.read_bytes(n * width)
        if width == 2:
            return raw.decode("utf-16-le", errors="replace")
        return raw.decode(ANSI_CODEPAGE, errors="replace")

    # -- random access -----------------------------------------------------

    def u16_at(self, offset: int) -> int:
        pos = self._check(2, self._start + offset)
        return _U16.unpack_from(self._data, pos)[0]

    def u32_at(self, offset: int) -> int:
        pos = self._check(4, self._start + offset)
        return _U32.unpack_from(self._data, pos)[0]

    def bytes_at(self, offset: int, n: int) -> bytes:
        pos = self._check(n, self._start + offset)
        return self._data[pos : pos + n]

    def cstring_at(self, offset: int, width: int = 1) -> str:
        """Decode a NUL-terminated string starting at window *offset*.

        A string with no terminator runs to the end of the window.  The
        offset itself must lie inside the window.
        """
        pos = self._check(1, self._start + offset)
        raw = self._data[pos : self._end]
        if width == 2:
            return decode_utf16le(raw)
        return decode_ansi(raw)

    # -- windows -----------------------------------------------------------

    def slice(self, start: int, length: int) -> "ByteCursor":
        """Return a new cursor confined to ``[start, start + length)`` of this window."""
        pos = self._check(length, self._start + start)
        return ByteCursor(self._data, pos, length)
