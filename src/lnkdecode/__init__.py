"""lnkdecode -- read-only decoder for Windows Shell Link (.lnk) files."""

from ._constants import (
    DriveType,
    FileAttributes,
    LinkFlags,
    LinkInfoFlags,
    NetworkLinkFlags,
    ShowCommand,
)
from .cursor import ByteCursor
from .errors import (
    FormatError,
    InvalidHeaderError,
    InvalidLinkInfoError,
    OutOfBoundsError,
    TruncatedIdListError,
    TruncatedStringError,
)
from .extradata import (
    ConsoleDataBlock,
    ConsoleFEDataBlock,
    DarwinDataBlock,
    EnvironmentVariableDataBlock,
    ExtraDataBlock,
    IconEnvironmentDataBlock,
    KnownFolderDataBlock,
    PropertyStoreDataBlock,
    ShimDataBlock,
    SpecialFolderDataBlock,
    TrackerDataBlock,
    UnknownDataBlock,
    VistaAndAboveIDListDataBlock,
    block_name,
    decode_extra_data,
)
from .header import HotKey, ShellLinkHeader, decode_header
from .idlist import ItemId, LinkTargetIdList, decode_id_list, decode_id_list_items
from .linkinfo import CommonNetworkRelativeLink, LinkInfo, VolumeId, decode_link_info
from .lnk import Lnk, parse_lnk
from .propstore import PropertyStore, PropertyValue, decode_property_stores
from .stringdata import StringData, decode_counted_string, decode_string_data

__version__ = "0.1.0"

__all__ = [
    "ByteCursor",
    "CommonNetworkRelativeLink",
    "ConsoleDataBlock",
    "ConsoleFEDataBlock",
    "DarwinDataBlock",
    "DriveType",
    "EnvironmentVariableDataBlock",
    "ExtraDataBlock",
    "FileAttributes",
    "FormatError",
    "HotKey",
    "IconEnvironmentDataBlock",
    "InvalidHeaderError",
    "InvalidLinkInfoError",
    "ItemId",
    "KnownFolderDataBlock",
    "LinkFlags",
    "LinkInfo",
    "LinkInfoFlags",
    "LinkTargetIdList",
    "Lnk",
    "NetworkLinkFlags",
    "OutOfBoundsError",
    "PropertyStore",
    "PropertyStoreDataBlock",
    "PropertyValue",
    "ShellLinkHeader",
    "ShimDataBlock",
    "ShowCommand",
    "SpecialFolderDataBlock",
    "StringData",
    "TrackerDataBlock",
    "TruncatedIdListError",
    "TruncatedStringError",
    "UnknownDataBlock",
    "VistaAndAboveIDListDataBlock",
    "VolumeId",
    "__version__",
    "block_name",
    "decode_counted_string",
    "decode_extra_data",
    "decode_header",
    "decode_id_list",
    "decode_id_list_items",
    "decode_link_info",
    "decode_property_stores",
    "decode_string_data",
    "parse_lnk",
]
