"""Tests for lnkdecode.cursor."""

import struct

import pytest

from lnkdecode import ByteCursor, OutOfBoundsError


class TestSequentialReads:
    """Little-endian integer reads advance the position."""

    def test_integers(self):
        data = struct.pack("<BHIiQhq", 0xAB, 0x1234, 0xDEADBEEF, -2, 1 << 40, -3, -4)
        cur = ByteCursor(data)
        assert cur.read_u8() == 0xAB
        assert cur.read_u16() == 0x1234
        assert cur.read_u32() == 0xDEADBEEF
        assert cur.read_i32() == -2
        assert cur.read_u64() == 1 << 40
        assert cur.read_i16() == -3
        assert cur.read_i64() == -4
        assert cur.remaining == 0

    def test_read_past_end_raises(self):
        cur = ByteCursor(b"\x01\x02\x03")
        with pytest.raises(OutOfBoundsError):
            cur.read_u32()

    def test_failed_read_does_not_move(self):
        cur = ByteCursor(b"\x01\x02\x03")
        with pytest.raises(OutOfBoundsError):
            cur.read_u32()
        assert cur.tell() == 0
        assert cur.read_u16() == 0x0201

    def test_read_guid(self):
        raw = bytes.fromhex("0114020000000000c000000000000046")
        assert ByteCursor(raw).read_guid() == "{00021401-0000-0000-C000-000000000046}"

    def test_accepts_bytearray_and_memoryview(self):
        assert ByteCursor(bytearray(b"\x05\x00")).read_u16() == 5
        assert ByteCursor(memoryview(b"\x06\x00")).read_u16() == 6


class TestFixedStrings:
    """read_fixed_string consumes count * width bytes."""

    def test_unicode_width(self):
        cur = ByteCursor("hello!".encode("utf-16-le"))
        assert cur.read_fixed_string(5, 2) == "hello"
        assert cur.tell() == 10

    def test_ansi_width(self):
        cur = ByteCursor(b"hello!")
        assert cur.read_fixed_string(5, 1) == "hello"
        assert cur.tell() == 5

    def test_cp1252(self):
        assert ByteCursor(b"caf\xe9").read_fixed_string(4, 1) == "café"

    def test_bad_width(self):
        with pytest.raises(ValueError):
            ByteCursor(b"abcd").read_fixed_string(2, 4)


class TestRandomAccess:
    """Offset-based reads do not move the cursor."""

    def test_u32_at(self):
        cur = ByteCursor(struct.pack("<II", 1, 2))
        assert cur.u32_at(4) == 2
        assert cur.tell() == 0

    def test_cstring_at_terminated(self):
        cur = ByteCursor(b"xxABC\x00DEF")
        assert cur.cstring_at(2) == "ABC"

    def test_cstring_at_unterminated_runs_to_window_end(self):
        data = b"\x00ABCDEF"
        cur = ByteCursor(data).slice(1, 3)
        assert cur.cstring_at(0) == "ABC"

    def test_cstring_at_wide(self):
        raw = b"\xff" + "Hi".encode("utf-16-le") + b"\x00\x00rest"
        cur = ByteCursor(raw)
        assert cur.cstring_at(1, 2) == "Hi"

    def test_offset_outside_window(self):
        cur = ByteCursor(b"abcd")
        with pytest.raises(OutOfBoundsError):
            cur.cstring_at(4)
        with pytest.raises(OutOfBoundsError):
            cur.u16_at(3)


class TestSlices:
    """Nested cursors are confined to their window."""

    def test_slice_offsets_are_window_relative(self):
        cur = ByteCursor(b"\x00\x00\x00\x00\x07\x00\x00\x00")
        sub = cur.slice(4, 4)
        assert len(sub) == 4
        assert sub.u32_at(0) == 7
        assert sub.absolute(0) == 4

    def test_slice_cannot_read_past_its_end(self):
        cur = ByteCursor(b"\x01\x00\x02\x00")
        sub = cur.slice(0, 2)
        assert sub.read_u16() == 1
        with pytest.raises(OutOfBoundsError):
            sub.read_u16()

    def test_slice_larger_than_parent(self):
        with pytest.raises(OutOfBoundsError):
            ByteCursor(b"abcd").slice(2, 3)

    def test_nested_slice_absolute(self):
        sub = ByteCursor(bytes(32)).slice(8, 16).slice(4, 4)
        assert sub.absolute(0) == 12


class TestPositioning:
    def test_seek_absolute_and_end(self):
        cur = ByteCursor(b"abcdef")
        cur.seek_absolute(6)
        assert cur.remaining == 0
        cur.seek_absolute(1)
        assert cur.read_bytes(1) == b"b"
        cur.seek_end()
        assert cur.remaining == 0

    def test_seek_outside_window(self):
        with pytest.raises(OutOfBoundsError):
            ByteCursor(b"abc").seek_absolute(4)

    def test_skip_past_end(self):
        with pytest.raises(OutOfBoundsError):
            ByteCursor(b"abc").skip(4)

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            ByteCursor(b"abc", start=1, length=5)
        with pytest.raises(ValueError):
            ByteCursor(b"abc", start=4)
