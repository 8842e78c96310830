"""Serialized Property Store decoding (MS-PROPSTORE), as found in a
PropertyStoreDataBlock.

A property store is a sequence of storages, each a sequence of property
records.  Both levels are self-sized and end at a zero size.  Sizes are
only trusted as far as the enclosing window allows: a record that claims
more bytes than remain ends its level and the records read so far are kept.
"""

import logging
from dataclasses import dataclass

from ._constants import (
    PROPERTY_SET_GUIDS,
    PROPSTORE_STRING_NAMED_FMTID,
    PROPSTORE_VERSION,
    VT_BOOL,
    VT_CLSID,
    VT_EMPTY,
    VT_FILETIME,
    VT_I2,
    VT_I4,
    VT_I8,
    VT_LPSTR,
    VT_LPWSTR,
    VT_TYPES,
    VT_UI4,
    VT_UI8,
)
from ._util import decode_ansi, decode_utf16le
from .cursor import ByteCursor
from .errors import OutOfBoundsError

log = logging.getLogger(__name__)

# StorageSize + Version + FormatID
_STORAGE_HEADER_SIZE = 24
# ValueSize + Id/NameSize + Reserved
_RECORD_HEADER_SIZE = 9


@dataclass(frozen=True, slots=True)
class PropertyValue:
    """One property.  *id* is a string for the string-named property set."""

    id: int | str
    type: int
    type_name: str
    value: object


@dataclass(frozen=True, slots=True)
class PropertyStore:
    format_id: str
    format_name: str | None
    properties: tuple[PropertyValue, ...] = ()

    def get(self, prop_id: int | str, default=None):
        """Return the value of the first property with *prop_id*."""
        for prop in self.properties:
            if prop.id == prop_id:
                return prop.value
        return default


def _decode_typed_value(rec: ByteCursor) -> tuple[int, object]:
    vtype = rec.read_u16()
    rec.skip(2)  # Padding

    if vtype == VT_EMPTY:
        value = None
    elif vtype == VT_I2:
        value = rec.read_i16()
    elif vtype == VT_I4:
        value = rec.read_i32()
    elif vtype == VT_UI4:
        value = rec.read_u32()
    elif vtype == VT_I8:
        value = rec.read_i64()
    elif vtype in (VT_UI8, VT_FILETIME):
        value = rec.read_u64()
    elif vtype == VT_BOOL:
        value = rec.read_u16() != 0
    elif vtype == VT_LPWSTR:
        count = rec.read_u32()
        value = decode_utf16le(rec.read_bytes(count * 2))
    elif vtype == VT_LPSTR:
        count = rec.read_u32()
        value = decode_ansi(rec.read_bytes(count))
    elif vtype == VT_CLSID:
        value = rec.read_guid()
    else:
        value = rec.read_bytes(rec.remaining)
    return vtype, value


def _next_sized(cursor: ByteCursor, min_size: int, what: str) -> ByteCursor | None:
    """Claim the next self-sized structure, or return ``None`` at the end of a level."""
    if cursor.remaining < 4:
        return None
    offset = cursor.absolute()
    size = cursor.u32_at(cursor.tell())
    if size == 0:
        return None
    if size < min_size or size > cursor.remaining:
        log.debug(
            "Ending %s list at 0x%X: size %d with %d bytes remaining",
            what,
            offset,
            size,
            cursor.remaining,
        )
        return None
    region = cursor.slice(cursor.tell(), size)
    cursor.skip(size)
    return region


def _decode_properties(storage: ByteCursor, string_named: bool) -> tuple[PropertyValue, ...]:
    properties = []
    while (rec := _next_sized(storage, _RECORD_HEADER_SIZE, "property")) is not None:
        offset = rec.absolute()
        try:
            rec.skip(4)  # ValueSize
            if string_named:
                name_size = rec.read_u32()
                rec.skip(1)  # Reserved
                prop_id = decode_utf16le(rec.read_bytes(name_size))
            else:
                prop_id = rec.read_u32()
                rec.skip(1)  # Reserved
            vtype, value = _decode_typed_value(rec)
        except OutOfBoundsError as exc:
            log.debug("Skipping truncated property at 0x%X: %s", offset, exc)
            continue
        properties.append(
            PropertyValue(
                id=prop_id,
                type=vtype,
                type_name=VT_TYPES.get(vtype, f"0x{vtype:04X}"),
                value=value,
            )
        )
    return tuple(properties)


def decode_property_stores(cursor: ByteCursor) -> tuple[PropertyStore, ...]:
    """Decode the storages in *cursor*'s window.  Never raises on bad data."""
    stores = []
    while (storage := _next_sized(cursor, _STORAGE_HEADER_SIZE, "storage")) is not None:
        version = storage.u32_at(4)
        if version != PROPSTORE_VERSION:
            log.debug(
                "Skipping storage at 0x%X with version 0x%08X",
                storage.absolute(0),
                version,
            )
            continue
        storage.skip(8)
        format_id = storage.read_guid()
        stores.append(
            PropertyStore(
                format_id=format_id,
                format_name=PROPERTY_SET_GUIDS.get(format_id),
                properties=_decode_properties(
                    storage, format_id == PROPSTORE_STRING_NAMED_FMTID
                ),
            )
        )
    return tuple(stores)
