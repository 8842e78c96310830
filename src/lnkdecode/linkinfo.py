"""LinkInfo decoding (MS-SHLLINK 2.3).

Every offset inside a LinkInfo structure is relative to the start of the
structure (or, for VolumeID and CommonNetworkRelativeLink, to the start of
that sub-structure).  The decoder therefore works exclusively on cursors
sliced to the declared LinkInfoSize, VolumeIDSize and
CommonNetworkRelativeLinkSize; a bogus offset can only ever raise, never
read a neighbouring section.

Bad offsets are local failures: the affected field is dropped and its
siblings are still decoded.
"""

import logging
from dataclasses import dataclass

from ._constants import (
    CNRL_HEADER_SIZE,
    LINKINFO_HEADER_SIZE,
    LINKINFO_HEADER_SIZE_UNICODE,
    VOLUME_LABEL_UNICODE_MARKER,
    WNNC_NET_TYPES,
    DriveType,
    LinkInfoFlags,
    NetworkLinkFlags,
)
from .cursor import ByteCursor
from .errors import InvalidLinkInfoError, OutOfBoundsError

log = logging.getLogger(__name__)

_VOLUME_ID_MIN_SIZE = 0x10


@dataclass(frozen=True, slots=True)
class VolumeId:
    """Volume the link target was stored on."""

    drive_type: DriveType | int
    drive_serial_number: int
    volume_label: str | None


@dataclass(frozen=True, slots=True)
class CommonNetworkRelativeLink:
    """Network share the link target was stored on."""

    flags: NetworkLinkFlags
    net_name: str | None
    device_name: str | None
    network_provider_type: int | None

    @property
    def network_provider_name(self) -> str | None:
        if self.network_provider_type is None:
            return None
        return WNNC_NET_TYPES.get(
            self.network_provider_type, f"0x{self.network_provider_type:08X}"
        )


@dataclass(frozen=True, slots=True)
class LinkInfo:
    size: int
    header_size: int
    flags: LinkInfoFlags
    volume_id: VolumeId | None = None
    local_base_path: str | None = None
    common_network_relative_link: CommonNetworkRelativeLink | None = None
    common_path_suffix: str | None = None


def _drive_type(value: int) -> DriveType | int:
    try:
        return DriveType(value)
    except ValueError:
        return value


def _string_at(scope: ByteCursor, offset: int, width: int, what: str) -> str:
    if offset >= len(scope):
        raise InvalidLinkInfoError(
            f"{what} offset 0x{offset:X} outside {len(scope)}-byte structure "
            f"at 0x{scope.absolute(0):X}"
        )
    return scope.cstring_at(offset, width)


def _resolve_string(
    scope: ByteCursor, narrow_offset: int, wide_offset: int, what: str
) -> str | None:
    """Return the string addressed by a narrow/wide offset pair.

    A zero offset means that variant is not present.  When both variants
    decode, the wide one is authoritative; a disagreement is logged.

    Raises:
        InvalidLinkInfoError: no variant could be read because the given
            offsets lie outside *scope*.
    """
    narrow = wide = None
    errors = []
    if narrow_offset:
        try:
            narrow = _string_at(scope, narrow_offset, 1, what)
        except InvalidLinkInfoError as exc:
            errors.append(exc)
    if wide_offset:
        try:
            wide = _string_at(scope, wide_offset, 2, what + "Unicode")
        except InvalidLinkInfoError as exc:
            errors.append(exc)

    if wide is not None:
        if narrow is not None and narrow != wide:
            log.warning(
                "Conflicting %s at 0x%X: ANSI %r, Unicode %r; using Unicode",
                what,
                scope.absolute(0),
                narrow,
                wide,
            )
        return wide
    if narrow is not None:
        return narrow
    if errors:
        raise errors[0]
    return None


def _optional(what: str, func, *args):
    """Run a field decoder, turning InvalidLinkInfoError into an absent field."""
    try:
        return func(*args)
    except InvalidLinkInfoError as exc:
        log.debug("Dropping LinkInfo field %s: %s", what, exc)
        return None


def _sub_scope(scope: ByteCursor, offset: int, min_size: int, what: str) -> ByteCursor:
    """Slice a self-sized sub-structure (leading u32 size) out of *scope*."""
    try:
        size = scope.u32_at(offset)
        if size < min_size:
            raise InvalidLinkInfoError(
                f"{what} at 0x{scope.absolute(offset):X} declares size "
                f"0x{size:X} (minimum 0x{min_size:X})"
            )
        return scope.slice(offset, size)
    except OutOfBoundsError as exc:
        raise InvalidLinkInfoError(f"{what}: {exc}") from exc


def _decode_volume_id(scope: ByteCursor, offset: int) -> VolumeId:
    vol = _sub_scope(scope, offset, _VOLUME_ID_MIN_SIZE, "VolumeID")
    drive_type = _drive_type(vol.u32_at(4))
    serial = vol.u32_at(8)
    label_offset = vol.u32_at(12)

    if label_offset == VOLUME_LABEL_UNICODE_MARKER:
        try:
            label_offset_unicode = vol.u32_at(16)
        except OutOfBoundsError:
            label = None
        else:
            label = _optional(
                "VolumeLabel", _string_at, vol, label_offset_unicode, 2, "VolumeLabel"
            )
    else:
        label = _optional("VolumeLabel", _string_at, vol, label_offset, 1, "VolumeLabel")

    return VolumeId(drive_type=drive_type, drive_serial_number=serial, volume_label=label)


def _decode_network_link(scope: ByteCursor, offset: int) -> CommonNetworkRelativeLink:
    cnrl = _sub_scope(scope, offset, CNRL_HEADER_SIZE, "CommonNetworkRelativeLink")
    flags = NetworkLinkFlags(cnrl.u32_at(4))
    net_name_offset = cnrl.u32_at(8)
    device_name_offset = cnrl.u32_at(12)
    provider_type = cnrl.u32_at(16)

    net_name_offset_unicode = device_name_offset_unicode = 0
    if net_name_offset > CNRL_HEADER_SIZE:
        try:
            net_name_offset_unicode = cnrl.u32_at(20)
            device_name_offset_unicode = cnrl.u32_at(24)
        except OutOfBoundsError as exc:
            log.debug("Ignoring CommonNetworkRelativeLink unicode offsets: %s", exc)

    net_name = _optional(
        "NetName",
        _resolve_string,
        cnrl,
        net_name_offset,
        net_name_offset_unicode,
        "NetName",
    )

    device_name = None
    if flags & NetworkLinkFlags.VALID_DEVICE:
        device_name = _optional(
            "DeviceName",
            _resolve_string,
            cnrl,
            device_name_offset,
            device_name_offset_unicode,
            "DeviceName",
        )

    return CommonNetworkRelativeLink(
        flags=flags,
        net_name=net_name,
        device_name=device_name,
        network_provider_type=(
            provider_type if flags & NetworkLinkFlags.VALID_NET_TYPE else None
        ),
    )


def _claim_region(cursor: ByteCursor) -> tuple[ByteCursor, int]:
    """Read LinkInfoSize, slice the block and move the cursor past it.

    Raises:
        OutOfBoundsError: the size prefix itself cannot be read.
        InvalidLinkInfoError: the declared block overruns the data; the
            cursor is moved to the end of the data.
    """
    start = cursor.tell()
    size = cursor.read_u32()
    if size > cursor.remaining + 4:
        available = cursor.remaining + 4
        cursor.seek_end()
        raise InvalidLinkInfoError(
            f"LinkInfo at 0x{cursor.absolute(start):X} declares {size} bytes, "
            f"only {available} remain"
        )
    if size < 4:
        raise InvalidLinkInfoError(
            f"LinkInfo at 0x{cursor.absolute(start):X} declares size {size}"
        )
    scope = cursor.slice(start, size)
    cursor.seek_absolute(start + size)
    return scope, size


def skip_link_info(cursor: ByteCursor) -> None:
    """Move past a LinkInfo block without decoding it (ForceNoLinkInfo)."""
    _claim_region(cursor)


def decode_link_info(cursor: ByteCursor) -> LinkInfo:
    """Decode the LinkInfo block at the cursor and leave it past the block.

    Raises:
        OutOfBoundsError: the LinkInfoSize prefix cannot be read.
        InvalidLinkInfoError: the block overruns the data or its fixed
            header does not fit inside it.  Problems inside the block only
            drop the affected field.
    """
    scope, size = _claim_region(cursor)

    try:
        header_size = scope.u32_at(4)
        if header_size < LINKINFO_HEADER_SIZE:
            raise InvalidLinkInfoError(
                f"LinkInfoHeaderSize 0x{header_size:X} at 0x{scope.absolute(0):X} "
                f"is below 0x{LINKINFO_HEADER_SIZE:X}"
            )
        flags = LinkInfoFlags(scope.u32_at(8))
        volume_id_offset = scope.u32_at(12)
        local_base_path_offset = scope.u32_at(16)
        network_link_offset = scope.u32_at(20)
        common_path_suffix_offset = scope.u32_at(24)
        local_base_path_offset_unicode = common_path_suffix_offset_unicode = 0
        if header_size >= LINKINFO_HEADER_SIZE_UNICODE:
            local_base_path_offset_unicode = scope.u32_at(28)
            common_path_suffix_offset_unicode = scope.u32_at(32)
    except OutOfBoundsError as exc:
        raise InvalidLinkInfoError(f"LinkInfo header truncated: {exc}") from exc

    volume_id = local_base_path = network_link = None

    if flags & LinkInfoFlags.VOLUME_ID_AND_LOCAL_BASE_PATH:
        volume_id = _optional("VolumeID", _decode_volume_id, scope, volume_id_offset)
        local_base_path = _optional(
            "LocalBasePath",
            _resolve_string,
            scope,
            local_base_path_offset,
            local_base_path_offset_unicode,
            "LocalBasePath",
        )

    if flags & LinkInfoFlags.COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX:
        network_link = _optional(
            "CommonNetworkRelativeLink",
            _decode_network_link,
            scope,
            network_link_offset,
        )

    common_path_suffix = _optional(
        "CommonPathSuffix",
        _resolve_string,
        scope,
        common_path_suffix_offset,
        common_path_suffix_offset_unicode,
        "CommonPathSuffix",
    )

    return LinkInfo(
        size=size,
        header_size=header_size,
        flags=flags,
        volume_id=volume_id,
        local_base_path=local_base_path,
        common_network_relative_link=network_link,
        common_path_suffix=common_path_suffix,
    )
