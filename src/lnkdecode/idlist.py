"""LinkTargetIDList decoding (MS-SHLLINK 2.2)."""

import logging
import struct
from dataclasses import dataclass

from ._constants import (
    ANSI_CODEPAGE,
    ITEM_EXT_SIG,
    ITEM_TYPE_DRIVE,
    ITEM_TYPE_ROOT,
    ITEM_TYPES_DIRECTORY,
    ITEM_TYPES_FILE,
)
from ._util import decode_ansi, decode_utf16le, format_guid
from .cursor import ByteCursor
from .errors import OutOfBoundsError, TruncatedIdListError

log = logging.getLogger(__name__)


def _dos_date_str(val: int) -> str:
    day = val & 0x1F
    month = (val >> 5) & 0x0F
    year = ((val >> 9) & 0x7F) + 1980
    return f"{year}-{month:02d}-{day:02d}"


def _dos_time_str(val: int) -> str:
    sec = (val & 0x1F) * 2
    minute = (val >> 5) & 0x3F
    hour = (val >> 11) & 0x1F
    return f"{hour:02d}:{minute:02d}:{sec:02d}"


@dataclass(frozen=True, slots=True)
class ItemId:
    """One SHITEMID.  *size* includes the 2-byte size prefix, *data* does not."""

    offset: int
    size: int
    data: bytes

    @property
    def type_byte(self) -> int:
        return self.data[0] if self.data else 0

    def describe(self) -> str:
        """Best-effort, human-readable summary of the shell item.

        The payload format belongs to the shell folder that created it, so
        only the common root / drive / file-system / network layouts are
        recognised.  Never raises on malformed payloads.
        """
        body = self.data
        type_byte = self.type_byte

        if type_byte == ITEM_TYPE_ROOT and len(body) >= 18:
            return f"[Root] sort=0x{body[1]:02X} CLSID={{{format_guid(body, 2)}}}"

        if type_byte == ITEM_TYPE_DRIVE:
            return f"[Drive] {decode_ansi(body[1:])}"

        if type_byte in ITEM_TYPES_DIRECTORY + ITEM_TYPES_FILE and len(body) >= 12:
            return _describe_fs_item(body)

        if type_byte & 0x70 == 0x40 and len(body) > 2:
            return f"[Network] {decode_ansi(body[2:])}"

        return f"type=0x{type_byte:02X}"


def _describe_fs_item(body: bytes) -> str:
    kind = "Dir" if body[0] in ITEM_TYPES_DIRECTORY else "File"
    fsize, date_w, time_w, attrs = struct.unpack_from("<IHHH", body, 2)

    name_end = body.find(b"\x00", 12)
    if name_end < 0:
        name_end = len(body)
    short_name = body[12:name_end].decode(ANSI_CODEPAGE, errors="replace")

    # BEEF0004 extension block follows the short name on a 2-byte boundary
    long_name = ""
    ext_off = name_end + 1
    if ext_off % 2:
        ext_off += 1
    ext = body[ext_off:]
    if len(ext) >= 8:
        ext_size, ext_ver, ext_sig = struct.unpack_from("<HHI", ext, 0)
        if ext_sig == ITEM_EXT_SIG and ext_size <= len(ext):
            if ext_ver >= 9 and ext_size >= 46:
                uname_off = struct.unpack_from("<H", ext, 16)[0]
                if uname_off < ext_size:
                    long_name = decode_utf16le(ext[uname_off:ext_size])
            elif 3 <= ext_ver < 7 and ext_size > 18:
                long_name = decode_utf16le(ext[18:ext_size])

    return (
        f'[{kind}] short="{short_name}" long="{long_name}" '
        f"fsize={fsize} date={_dos_date_str(date_w)} time={_dos_time_str(time_w)} "
        f"attrs=0x{attrs:04X}"
    )


@dataclass(frozen=True, slots=True)
class LinkTargetIdList:
    """Shell namespace items identifying the link target, in order."""

    items: tuple[ItemId, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def decode_id_list_items(cursor: ByteCursor) -> tuple[ItemId, ...]:
    """Read ``ITEMID* TERMINALID`` from *cursor* up to and including the terminator.

    Raises:
        TruncatedIdListError: an item size is invalid, an item overruns the
            cursor's window, or no terminator is found.
    """
    items = []
    while True:
        offset = cursor.absolute()
        try:
            size = cursor.read_u16()
        except OutOfBoundsError:
            raise TruncatedIdListError(
                f"ID list at 0x{offset:X} has no terminal item"
            ) from None
        if size == 0:
            return tuple(items)
        if size < 2:
            raise TruncatedIdListError(f"Invalid item size {size} at 0x{offset:X}")
        try:
            data = cursor.read_bytes(size - 2)
        except OutOfBoundsError:
            raise TruncatedIdListError(
                f"Item at 0x{offset:X} declares {size} bytes, "
                f"only {cursor.remaining + 2} remain"
            ) from None
        items.append(ItemId(offset=offset, size=size, data=data))


def decode_id_list(cursor: ByteCursor) -> LinkTargetIdList:
    """Decode a size-prefixed LinkTargetIDList at the cursor.

    On success the cursor is left just past the list.  If the IDListSize
    prefix itself cannot be read, :class:`OutOfBoundsError` propagates.

    Raises:
        TruncatedIdListError: the declared size overruns the buffer or does
            not match the bytes consumed by the items and terminator.  The
            cursor is then left past the declared region when it fits, or
            at the end of the data when it does not.
    """
    start = cursor.absolute()
    list_size = cursor.read_u16()

    available = cursor.remaining
    if list_size > available:
        cursor.seek_end()
        raise TruncatedIdListError(
            f"ID list at 0x{start:X} declares {list_size} bytes, "
            f"only {available} remain"
        )

    region = cursor.slice(cursor.tell(), list_size)
    cursor.skip(list_size)

    items = decode_id_list_items(region)
    if region.remaining:
        raise TruncatedIdListError(
            f"ID list at 0x{start:X} declares {list_size} bytes but items "
            f"and terminator account for {region.tell()}"
        )

    log.debug("Decoded %d ID list items at 0x%X", len(items), start)
    return LinkTargetIdList(items)
