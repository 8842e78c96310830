"""Top-level Shell Link parsing.

:func:`parse_lnk` (or :meth:`Lnk.parse`) decodes the header, then each
optional section the header's LinkFlags enable, in file order::

    lnk = parse_lnk("shortcut.lnk")
    print(lnk.local_base_path(), lnk.arguments())

Errors in the header or in a structural length prefix are fatal.  A
malformed ID list or LinkInfo block is dropped and the parse carries on
after it; a truncated string drops that string and everything after it.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from ._constants import (
    DriveType,
    FileAttributes,
    LinkFlags,
    ShowCommand,
)
from ._types import BytesLike, LnkSource
from .cursor import ByteCursor
from .errors import InvalidLinkInfoError, TruncatedIdListError, TruncatedStringError
from .extradata import ExtraDataBlock, decode_extra_data
from .header import HotKey, ShellLinkHeader, decode_header
from .idlist import ItemId, LinkTargetIdList, decode_id_list
from .linkinfo import LinkInfo, decode_link_info, skip_link_info
from .stringdata import StringData, decode_string_data

log = logging.getLogger(__name__)

_Block = TypeVar("_Block")


@dataclass(frozen=True, slots=True)
class Lnk:
    """A decoded Shell Link.  Absent sections are ``None``."""

    header: ShellLinkHeader
    id_list: LinkTargetIdList | None = None
    link_info: LinkInfo | None = None
    string_data: StringData = field(default_factory=StringData)
    extra_data: tuple[ExtraDataBlock, ...] = ()
    path: Path | None = None

    # -- construction ------------------------------------------------------

    @classmethod
    def parse(cls, data: BytesLike, path: Path | None = None) -> "Lnk":
        """Decode a complete ``.lnk`` image.

        Raises:
            InvalidHeaderError: wrong header size or CLSID.
            OutOfBoundsError: the data ends inside the header or a section's
                length prefix.
        """
        cursor = ByteCursor(bytes(data))
        header = decode_header(cursor)
        flags = header.link_flags

        id_list = None
        if flags & LinkFlags.HAS_LINK_TARGET_ID_LIST:
            try:
                id_list = decode_id_list(cursor)
            except TruncatedIdListError as exc:
                log.debug("Dropping LinkTargetIDList: %s", exc)

        link_info = None
        if flags & LinkFlags.HAS_LINK_INFO:
            try:
                if flags & LinkFlags.FORCE_NO_LINK_INFO:
                    skip_link_info(cursor)
                else:
                    link_info = decode_link_info(cursor)
            except InvalidLinkInfoError as exc:
                log.debug("Dropping LinkInfo: %s", exc)

        fields: dict = {}
        try:
            string_data = decode_string_data(cursor, flags, fields)
        except TruncatedStringError as exc:
            log.debug("Dropping remaining StringData fields: %s", exc)
            string_data = StringData(**fields)
            cursor.seek_end()

        extra_data = decode_extra_data(cursor)

        return cls(
            header=header,
            id_list=id_list,
            link_info=link_info,
            string_data=string_data,
            extra_data=extra_data,
            path=path,
        )

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> "Lnk":
        """Read *path* fully and decode it."""
        path = Path(path)
        return cls.parse(path.read_bytes(), path=path)

    # -- StringData ----------------------------------------------------------

    def name(self) -> str | None:
        return self.string_data.name

    def relative_path(self) -> str | None:
        return self.string_data.relative_path

    def working_dir(self) -> str | None:
        return self.string_data.working_dir

    def arguments(self) -> str | None:
        return self.string_data.arguments

    def icon_location(self) -> str | None:
        return self.string_data.icon_location

    # -- LinkInfo ------------------------------------------------------------

    def local_base_path(self) -> str | None:
        return self.link_info.local_base_path if self.link_info else None

    def common_path_suffix(self) -> str | None:
        return self.link_info.common_path_suffix if self.link_info else None

    def network_share(self) -> str | None:
        cnrl = self.link_info and self.link_info.common_network_relative_link
        return cnrl.net_name if cnrl else None

    def device_name(self) -> str | None:
        cnrl = self.link_info and self.link_info.common_network_relative_link
        return cnrl.device_name if cnrl else None

    def volume_label(self) -> str | None:
        volume = self.link_info and self.link_info.volume_id
        return volume.volume_label if volume else None

    def drive_type(self) -> DriveType | int | None:
        volume = self.link_info and self.link_info.volume_id
        return volume.drive_type if volume else None

    def drive_serial_number(self) -> int | None:
        volume = self.link_info and self.link_info.volume_id
        return volume.drive_serial_number if volume else None

    # -- header --------------------------------------------------------------

    def creation_time(self) -> int:
        return self.header.creation_time

    def access_time(self) -> int:
        return self.header.access_time

    def write_time(self) -> int:
        return self.header.write_time

    def file_attributes(self) -> FileAttributes:
        return self.header.file_attributes

    def file_size(self) -> int:
        return self.header.file_size

    def icon_index(self) -> int:
        return self.header.icon_index

    def show_command(self) -> ShowCommand:
        return self.header.show_command

    def hot_key(self) -> HotKey:
        return self.header.hot_key

    def link_flags(self) -> LinkFlags:
        return self.header.link_flags

    # -- ID list and extra data ----------------------------------------------

    def id_list_items(self) -> tuple[ItemId, ...] | None:
        return self.id_list.items if self.id_list is not None else None

    def extra_data_blocks(self) -> tuple[ExtraDataBlock, ...]:
        return self.extra_data

    def find_block(self, block_type: type[_Block]) -> _Block | None:
        """Return the first extra-data block of *block_type*, if any."""
        for block in self.extra_data:
            if isinstance(block, block_type):
                return block
        return None


def parse_lnk(source: LnkSource) -> Lnk:
    """Decode a Shell Link from raw bytes or from a file path."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return Lnk.parse(source)
    return Lnk.from_path(source)
