"""ShellLinkHeader decoding (MS-SHLLINK 2.1)."""

from dataclasses import dataclass

from ._constants import (
    HEADER_SIZE,
    HOTKEY_MOD,
    LINK_CLSID,
    VK_KEYS,
    FileAttributes,
    LinkFlags,
    ShowCommand,
)
from ._util import format_guid
from .cursor import ByteCursor
from .errors import InvalidHeaderError, OutOfBoundsError


@dataclass(frozen=True, slots=True)
class HotKey:
    """HotKeyFlags: virtual key code (low byte) and modifier mask (high byte)."""

    vk: int = 0
    modifiers: int = 0

    def __bool__(self) -> bool:
        return bool(self.vk or self.modifiers)

    def __str__(self) -> str:
        parts = [name for bit, name in HOTKEY_MOD.items() if self.modifiers & bit]
        if self.vk:
            parts.append(VK_KEYS.get(self.vk, f"0x{self.vk:02X}"))
        return "+".join(parts)


@dataclass(frozen=True, slots=True)
class ShellLinkHeader:
    """The fixed 76-byte header.  Timestamps are raw FILETIME values."""

    link_flags: LinkFlags
    file_attributes: FileAttributes
    creation_time: int
    access_time: int
    write_time: int
    file_size: int
    icon_index: int
    show_command: ShowCommand
    hot_key: HotKey

    @property
    def is_unicode(self) -> bool:
        return bool(self.link_flags & LinkFlags.IS_UNICODE)

    @property
    def flag_names(self) -> list[str]:
        return [flag.name for flag in LinkFlags if self.link_flags & flag]


def decode_header(cursor: ByteCursor) -> ShellLinkHeader:
    """Decode the header at the cursor and leave it positioned at byte 76.

    Raises:
        OutOfBoundsError: fewer than 76 bytes are available.
        InvalidHeaderError: the header size or CLSID does not match.
    """
    if cursor.remaining < HEADER_SIZE:
        raise OutOfBoundsError(
            f"Data too short for an MS-SHLLINK header "
            f"(need {HEADER_SIZE} bytes, have {cursor.remaining})"
        )

    hdr_size = cursor.read_u32()
    if hdr_size != HEADER_SIZE:
        raise InvalidHeaderError(
            f"Invalid header size 0x{hdr_size:08X} (expected 0x{HEADER_SIZE:X})"
        )
    clsid = cursor.read_bytes(16)
    if clsid != LINK_CLSID:
        raise InvalidHeaderError(f"Invalid link CLSID {{{format_guid(clsid)}}}")

    link_flags = LinkFlags(cursor.read_u32())
    file_attributes = FileAttributes(cursor.read_u32())
    creation_time = cursor.read_u64()
    access_time = cursor.read_u64()
    write_time = cursor.read_u64()
    file_size = cursor.read_u32()
    icon_index = cursor.read_i32()

    # Any value other than 3 or 7 MUST be treated as SW_SHOWNORMAL
    raw_show = cursor.read_u32()
    try:
        show_command = ShowCommand(raw_show)
    except ValueError:
        show_command = ShowCommand.NORMAL

    hot_key = HotKey(vk=cursor.read_u8(), modifiers=cursor.read_u8())
    cursor.skip(10)  # Reserved1, Reserved2, Reserved3

    return ShellLinkHeader(
        link_flags=link_flags,
        file_attributes=file_attributes,
        creation_time=creation_time,
        access_time=access_time,
        write_time=write_time,
        file_size=file_size,
        icon_index=icon_index,
        show_command=show_command,
        hot_key=hot_key,
    )
