"""ExtraData decoding (MS-SHLLINK 2.5).

The extra-data section is a chain of ``BlockSize, BlockSignature, payload``
records that ends at a block whose size is below 8.  Decoding is best
effort: a malformed chain ends early and keeps the blocks read so far, and a
block whose payload does not match its signature's layout is kept as an
:class:`UnknownDataBlock`.
"""

import logging
from dataclasses import dataclass
from typing import ClassVar, Union

from ._constants import (
    ANSI_FIELD_SIZE,
    EXTRA_BLOCK_MIN_SIZE,
    EXTRA_SIGS,
    KNOWN_FOLDER_NAMES,
    SIG_CONSOLE,
    SIG_CONSOLE_FE,
    SIG_DARWIN,
    SIG_ENVIRONMENT_VARIABLE,
    SIG_ICON_ENVIRONMENT,
    SIG_KNOWN_FOLDER,
    SIG_PROPERTY_STORE,
    SIG_SHIM,
    SIG_SPECIAL_FOLDER,
    SIG_TRACKER,
    SIG_VISTA_AND_ABOVE_ID_LIST,
    UNICODE_FIELD_SIZE,
)
from ._util import decode_ansi, decode_utf16le
from .cursor import ByteCursor
from .errors import OutOfBoundsError, TruncatedIdListError
from .idlist import LinkTargetIdList, decode_id_list_items
from .propstore import PropertyStore, decode_property_stores

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EnvironmentVariableDataBlock:
    """Target path with environment variables, e.g. ``%windir%\\notepad.exe``."""

    signature: ClassVar[int] = SIG_ENVIRONMENT_VARIABLE

    size: int
    target_ansi: str
    target_unicode: str

    @property
    def target(self) -> str:
        return self.target_unicode or self.target_ansi


@dataclass(frozen=True, slots=True)
class ConsoleDataBlock:
    """Console window settings for a link to a console application."""

    signature: ClassVar[int] = SIG_CONSOLE

    size: int
    fill_attributes: int
    popup_fill_attributes: int
    screen_buffer_size_x: int
    screen_buffer_size_y: int
    window_size_x: int
    window_size_y: int
    window_origin_x: int
    window_origin_y: int
    font_size: int
    font_family: int
    font_weight: int
    face_name: str
    cursor_size: int
    full_screen: int
    quick_edit: int
    insert_mode: int
    auto_position: int
    history_buffer_size: int
    number_of_history_buffers: int
    history_no_dup: int
    color_table: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class TrackerDataBlock:
    """Distributed Link Tracking data: NetBIOS machine name and object IDs."""

    signature: ClassVar[int] = SIG_TRACKER

    size: int
    length: int
    version: int
    machine_id: str
    droid_volume_id: str
    droid_file_id: str
    birth_droid_volume_id: str
    birth_droid_file_id: str


@dataclass(frozen=True, slots=True)
class ConsoleFEDataBlock:
    signature: ClassVar[int] = SIG_CONSOLE_FE

    size: int
    code_page: int


@dataclass(frozen=True, slots=True)
class SpecialFolderDataBlock:
    signature: ClassVar[int] = SIG_SPECIAL_FOLDER

    size: int
    special_folder_id: int
    offset: int


@dataclass(frozen=True, slots=True)
class DarwinDataBlock:
    """Windows Installer application descriptor."""

    signature: ClassVar[int] = SIG_DARWIN

    size: int
    darwin_data_ansi: str
    darwin_data_unicode: str

    @property
    def darwin_data(self) -> str:
        return self.darwin_data_unicode or self.darwin_data_ansi


@dataclass(frozen=True, slots=True)
class IconEnvironmentDataBlock:
    signature: ClassVar[int] = SIG_ICON_ENVIRONMENT

    size: int
    target_ansi: str
    target_unicode: str

    @property
    def target(self) -> str:
        return self.target_unicode or self.target_ansi


@dataclass(frozen=True, slots=True)
class ShimDataBlock:
    signature: ClassVar[int] = SIG_SHIM

    size: int
    layer_name: str


@dataclass(frozen=True, slots=True)
class PropertyStoreDataBlock:
    signature: ClassVar[int] = SIG_PROPERTY_STORE

    size: int
    stores: tuple[PropertyStore, ...]


@dataclass(frozen=True, slots=True)
class KnownFolderDataBlock:
    signature: ClassVar[int] = SIG_KNOWN_FOLDER

    size: int
    known_folder_id: str
    offset: int

    @property
    def known_folder_name(self) -> str | None:
        return KNOWN_FOLDER_NAMES.get(self.known_folder_id)


@dataclass(frozen=True, slots=True)
class VistaAndAboveIDListDataBlock:
    """Alternate ID list written by Windows Vista and later."""

    signature: ClassVar[int] = SIG_VISTA_AND_ABOVE_ID_LIST

    size: int
    id_list: LinkTargetIdList


@dataclass(frozen=True, slots=True)
class UnknownDataBlock:
    """A block kept verbatim: unknown signature, or a payload that did not decode."""

    signature: int
    size: int
    payload: bytes


ExtraDataBlock = Union[
    EnvironmentVariableDataBlock,
    ConsoleDataBlock,
    TrackerDataBlock,
    ConsoleFEDataBlock,
    SpecialFolderDataBlock,
    DarwinDataBlock,
    IconEnvironmentDataBlock,
    ShimDataBlock,
    PropertyStoreDataBlock,
    KnownFolderDataBlock,
    VistaAndAboveIDListDataBlock,
    UnknownDataBlock,
]


def block_name(block: ExtraDataBlock) -> str:
    """Return the MS-SHLLINK structure name for *block*'s signature."""
    return EXTRA_SIGS.get(block.signature, f"0x{block.signature:08X}")


def _read_ansi_unicode_pair(payload: ByteCursor) -> tuple[str, str]:
    ansi = decode_ansi(payload.read_bytes(ANSI_FIELD_SIZE))
    unicode = decode_utf16le(payload.read_bytes(UNICODE_FIELD_SIZE))
    return ansi, unicode


def _decode_console(size: int, p: ByteCursor) -> ConsoleDataBlock:
    fill_attributes = p.read_u16()
    popup_fill_attributes = p.read_u16()
    screen_buffer_size_x = p.read_i16()
    screen_buffer_size_y = p.read_i16()
    window_size_x = p.read_i16()
    window_size_y = p.read_i16()
    window_origin_x = p.read_i16()
    window_origin_y = p.read_i16()
    p.skip(8)  # Unused1, Unused2
    font_size = p.read_u32()
    font_family = p.read_u32()
    font_weight = p.read_u32()
    face_name = decode_utf16le(p.read_bytes(64))
    return ConsoleDataBlock(
        size=size,
        fill_attributes=fill_attributes,
        popup_fill_attributes=popup_fill_attributes,
        screen_buffer_size_x=screen_buffer_size_x,
        screen_buffer_size_y=screen_buffer_size_y,
        window_size_x=window_size_x,
        window_size_y=window_size_y,
        window_origin_x=window_origin_x,
        window_origin_y=window_origin_y,
        font_size=font_size,
        font_family=font_family,
        font_weight=font_weight,
        face_name=face_name,
        cursor_size=p.read_u32(),
        full_screen=p.read_u32(),
        quick_edit=p.read_u32(),
        insert_mode=p.read_u32(),
        auto_position=p.read_u32(),
        history_buffer_size=p.read_u32(),
        number_of_history_buffers=p.read_u32(),
        history_no_dup=p.read_u32(),
        color_table=tuple(p.read_u32() for _ in range(16)),
    )


def _decode_tracker(size: int, p: ByteCursor) -> TrackerDataBlock:
    return TrackerDataBlock(
        size=size,
        length=p.read_u32(),
        version=p.read_u32(),
        machine_id=decode_ansi(p.read_bytes(16)),
        droid_volume_id=p.read_guid(),
        droid_file_id=p.read_guid(),
        birth_droid_volume_id=p.read_guid(),
        birth_droid_file_id=p.read_guid(),
    )


def _decode_block(signature: int, size: int, p: ByteCursor) -> ExtraDataBlock:
    """Decode one payload by signature.

    Raises:
        OutOfBoundsError: the payload is too short for the signature's layout.
        TruncatedIdListError: a VistaAndAboveIDList payload is malformed.
    """
    if signature == SIG_ENVIRONMENT_VARIABLE:
        ansi, unicode = _read_ansi_unicode_pair(p)
        return EnvironmentVariableDataBlock(size, ansi, unicode)
    elif signature == SIG_CONSOLE:
        return _decode_console(size, p)
    elif signature == SIG_TRACKER:
        return _decode_tracker(size, p)
    elif signature == SIG_CONSOLE_FE:
        return ConsoleFEDataBlock(size, code_page=p.read_u32())
    elif signature == SIG_SPECIAL_FOLDER:
        folder_id = p.read_u32()
        return SpecialFolderDataBlock(size, folder_id, offset=p.read_u32())
    elif signature == SIG_DARWIN:
        ansi, unicode = _read_ansi_unicode_pair(p)
        return DarwinDataBlock(size, ansi, unicode)
    elif signature == SIG_ICON_ENVIRONMENT:
        ansi, unicode = _read_ansi_unicode_pair(p)
        return IconEnvironmentDataBlock(size, ansi, unicode)
    elif signature == SIG_SHIM:
        return ShimDataBlock(size, layer_name=decode_utf16le(p.read_bytes(p.remaining)))
    elif signature == SIG_PROPERTY_STORE:
        return PropertyStoreDataBlock(size, stores=decode_property_stores(p))
    elif signature == SIG_KNOWN_FOLDER:
        folder_id = p.read_guid()
        return KnownFolderDataBlock(size, folder_id, offset=p.read_u32())
    elif signature == SIG_VISTA_AND_ABOVE_ID_LIST:
        return VistaAndAboveIDListDataBlock(
            size, id_list=LinkTargetIdList(decode_id_list_items(p))
        )
    return UnknownDataBlock(signature, size, p.bytes_at(0, len(p)))


def decode_extra_data(cursor: ByteCursor) -> tuple[ExtraDataBlock, ...]:
    """Decode the extra-data chain from the cursor to the terminal block.

    Never raises :class:`~lnkdecode.errors.FormatError`.  The cursor is left
    after the last block read (or the terminal block's size field).
    """
    blocks = []
    while cursor.remaining >= 4:
        offset = cursor.absolute()
        size = cursor.read_u32()
        if size < EXTRA_BLOCK_MIN_SIZE:
            break
        if size - 4 > cursor.remaining:
            log.warning(
                "Extra data block at 0x%X declares %d bytes, only %d remain; "
                "ending chain after %d blocks",
                offset,
                size,
                cursor.remaining + 4,
                len(blocks),
            )
            break

        signature = cursor.read_u32()
        payload = cursor.slice(cursor.tell(), size - 8)
        cursor.skip(size - 8)

        try:
            block = _decode_block(signature, size, payload)
        except (OutOfBoundsError, TruncatedIdListError) as exc:
            log.debug(
                "Keeping %s at 0x%X as opaque: %s",
                EXTRA_SIGS.get(signature, f"0x{signature:08X}"),
                offset,
                exc,
            )
            block = UnknownDataBlock(signature, size, payload.bytes_at(0, len(payload)))
        blocks.append(block)

    log.debug("Decoded %d extra data blocks", len(blocks))
    return tuple(blocks)
