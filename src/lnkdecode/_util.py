"""Small decoding helpers shared by lnkdecode modules."""

import uuid

from ._constants import ANSI_CODEPAGE


def format_guid(data: bytes, off: int = 0) -> str:
    """Format the 16-byte on-disk GUID at *off* as ``XXXXXXXX-XXXX-...``.

    Windows stores the first three GUID fields little-endian, which is the
    layout :class:`uuid.UUID` calls ``bytes_le``.
    """
    return str(uuid.UUID(bytes_le=bytes(data[off : off + 16]))).upper()


def decode_ansi(raw: bytes) -> str:
    """Decode a narrow string, stopping at the first NUL."""
    return raw.split(b"\x00", 1)[0].decode(ANSI_CODEPAGE, errors="replace")


def utf16_nul_index(raw: bytes) -> int:
    """Return the index of the first aligned UTF-16 NUL in *raw*.

    Returns ``-1`` when no terminator is present.
    """
    for i in range(0, len(raw) - 1, 2):
        if raw[i] == 0 and raw[i + 1] == 0:
            return i
    return -1


def decode_utf16le(raw: bytes) -> str:
    """Decode a UTF-16LE string, stopping at the first aligned NUL."""
    end = utf16_nul_index(raw)
    if end < 0:
        end = len(raw) - (len(raw) % 2)
    return raw[:end].decode("utf-16-le", errors="replace")
