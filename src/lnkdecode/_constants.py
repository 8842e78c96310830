"""MS-SHLLINK constants, enums and lookup tables shared by the decoders."""

import enum

# ---------------------------------------------------------------------------
# ANSI code page
# ---------------------------------------------------------------------------
# Narrow strings are stored in the creating system's default code page.  We
# cannot know it from the file, so CP-1252 (Western Windows, a superset of
# ASCII) is assumed for every narrow field.
ANSI_CODEPAGE = "cp1252"

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
HEADER_SIZE = 0x4C

# {00021401-0000-0000-C000-000000000046} in on-disk (mixed-endian) order
LINK_CLSID = b"\x01\x14\x02\x00\x00\x00\x00\x00\xc0\x00\x00\x00\x00\x00\x00\x46"


class LinkFlags(enum.IntFlag):
    """ShellLinkHeader.LinkFlags (MS-SHLLINK 2.1.1)."""

    HAS_LINK_TARGET_ID_LIST = 1 << 0
    HAS_LINK_INFO = 1 << 1
    HAS_NAME = 1 << 2
    HAS_RELATIVE_PATH = 1 << 3
    HAS_WORKING_DIR = 1 << 4
    HAS_ARGUMENTS = 1 << 5
    HAS_ICON_LOCATION = 1 << 6
    IS_UNICODE = 1 << 7
    FORCE_NO_LINK_INFO = 1 << 8
    HAS_EXP_STRING = 1 << 9
    RUN_IN_SEPARATE_PROCESS = 1 << 10
    UNUSED1 = 1 << 11
    HAS_DARWIN_ID = 1 << 12
    RUN_AS_USER = 1 << 13
    HAS_EXP_ICON = 1 << 14
    NO_PIDL_ALIAS = 1 << 15
    UNUSED2 = 1 << 16
    RUN_WITH_SHIM_LAYER = 1 << 17
    FORCE_NO_LINK_TRACK = 1 << 18
    ENABLE_TARGET_METADATA = 1 << 19
    DISABLE_LINK_PATH_TRACKING = 1 << 20
    DISABLE_KNOWN_FOLDER_TRACKING = 1 << 21
    DISABLE_KNOWN_FOLDER_ALIAS = 1 << 22
    ALLOW_LINK_TO_LINK = 1 << 23
    UNALIAS_ON_SAVE = 1 << 24
    PREFER_ENVIRONMENT_PATH = 1 << 25
    KEEP_LOCAL_ID_LIST_FOR_UNC_TARGET = 1 << 26


# StringData fields in on-disk order, keyed by the flag that enables them
STRING_FIELDS = (
    (LinkFlags.HAS_NAME, "name"),
    (LinkFlags.HAS_RELATIVE_PATH, "relative_path"),
    (LinkFlags.HAS_WORKING_DIR, "working_dir"),
    (LinkFlags.HAS_ARGUMENTS, "arguments"),
    (LinkFlags.HAS_ICON_LOCATION, "icon_location"),
)


class FileAttributes(enum.IntFlag):
    """ShellLinkHeader.FileAttributes (MS-SHLLINK 2.1.2)."""

    READONLY = 0x0001
    HIDDEN = 0x0002
    SYSTEM = 0x0004
    RESERVED1 = 0x0008
    DIRECTORY = 0x0010
    ARCHIVE = 0x0020
    RESERVED2 = 0x0040
    NORMAL = 0x0080
    TEMPORARY = 0x0100
    SPARSE_FILE = 0x0200
    REPARSE_POINT = 0x0400
    COMPRESSED = 0x0800
    OFFLINE = 0x1000
    NOT_CONTENT_INDEXED = 0x2000
    ENCRYPTED = 0x4000


class ShowCommand(enum.IntEnum):
    """ShowWindow state stored in the header (MS-SHLLINK 2.1)."""

    NORMAL = 1
    MAXIMIZED = 3
    MINIMIZED = 7


# ---------------------------------------------------------------------------
# Hotkey modifier masks and virtual key names
# ---------------------------------------------------------------------------
HOTKEY_MOD = {0x01: "SHIFT", 0x02: "CTRL", 0x04: "ALT"}

VK_KEYS = {
    **{k: chr(k) for k in range(0x30, 0x3A)},  # 0-9
    **{k: chr(k) for k in range(0x41, 0x5B)},  # A-Z
    **{k: f"F{k - 0x6F}" for k in range(0x70, 0x88)},  # F1-F24
    0x90: "NUMLOCK",
    0x91: "SCROLL",
}

# ---------------------------------------------------------------------------
# LinkInfo
# ---------------------------------------------------------------------------
LINKINFO_HEADER_SIZE = 0x1C
LINKINFO_HEADER_SIZE_UNICODE = 0x24  # carries the two *OffsetUnicode fields
VOLUME_LABEL_UNICODE_MARKER = 0x14
CNRL_HEADER_SIZE = 0x14  # NetNameOffset above this means unicode offsets follow


class LinkInfoFlags(enum.IntFlag):
    VOLUME_ID_AND_LOCAL_BASE_PATH = 0x1
    COMMON_NETWORK_RELATIVE_LINK_AND_PATH_SUFFIX = 0x2


class NetworkLinkFlags(enum.IntFlag):
    VALID_DEVICE = 0x1
    VALID_NET_TYPE = 0x2


class DriveType(enum.IntEnum):
    """VolumeID.DriveType (MS-SHLLINK 2.3.1)."""

    UNKNOWN = 0
    NO_ROOT_DIR = 1
    REMOVABLE = 2
    FIXED = 3
    REMOTE = 4
    CDROM = 5
    RAMDISK = 6


# WNNC_NET_* network provider types (CommonNetworkRelativeLink)
WNNC_NET_TYPES = {
    0x00020000: "WNNC_NET_LANMAN",
    0x00030000: "WNNC_NET_NETWARE",
    0x001A0000: "WNNC_NET_AVID",
    0x001B0000: "WNNC_NET_DOCUSPACE",
    0x001C0000: "WNNC_NET_MANGOSOFT",
    0x001D0000: "WNNC_NET_SERNET",
    0x001E0000: "WNNC_NET_RIVERFRONT1",
    0x001F0000: "WNNC_NET_RIVERFRONT2",
    0x00200000: "WNNC_NET_DECORB",
    0x00210000: "WNNC_NET_PROTSTOR",
    0x00220000: "WNNC_NET_FJ_REDIR",
    0x00230000: "WNNC_NET_DISTINCT",
    0x00240000: "WNNC_NET_TWINS",
    0x00250000: "WNNC_NET_RDR2SAMPLE",
    0x00260000: "WNNC_NET_CSC",
    0x00270000: "WNNC_NET_3IN1",
    0x00290000: "WNNC_NET_EXTENDNET",
    0x002A0000: "WNNC_NET_STAC",
    0x002B0000: "WNNC_NET_FOXBAT",
    0x002C0000: "WNNC_NET_YAHOO",
    0x002D0000: "WNNC_NET_EXIFS",
    0x002E0000: "WNNC_NET_DAV",
    0x002F0000: "WNNC_NET_KNOWARE",
    0x00300000: "WNNC_NET_OBJECT_DIRE",
    0x00310000: "WNNC_NET_MASFAX",
    0x00320000: "WNNC_NET_HOB_NFS",
    0x00330000: "WNNC_NET_SHIVA",
    0x00340000: "WNNC_NET_IBMAL",
    0x00350000: "WNNC_NET_LOCK",
    0x00360000: "WNNC_NET_TERMSRV",
    0x00370000: "WNNC_NET_SRT",
    0x00380000: "WNNC_NET_QUINCY",
    0x00390000: "WNNC_NET_OPENAFS",
    0x003A0000: "WNNC_NET_AVID1",
    0x003B0000: "WNNC_NET_DFS",
    0x003C0000: "WNNC_NET_KWNP",
    0x003D0000: "WNNC_NET_ZENWORKS",
    0x003E0000: "WNNC_NET_DRIVEONWEB",
    0x003F0000: "WNNC_NET_VMWARE",
    0x00400000: "WNNC_NET_RSFX",
    0x00410000: "WNNC_NET_MFILES",
    0x00420000: "WNNC_NET_MS_NFS",
    0x00430000: "WNNC_NET_GOOGLE",
}

# ---------------------------------------------------------------------------
# ExtraData block signatures (MS-SHLLINK 2.5)
# ---------------------------------------------------------------------------
EXTRA_BLOCK_MIN_SIZE = 8

SIG_ENVIRONMENT_VARIABLE = 0xA0000001
SIG_CONSOLE = 0xA0000002
SIG_TRACKER = 0xA0000003
SIG_CONSOLE_FE = 0xA0000004
SIG_SPECIAL_FOLDER = 0xA0000005
SIG_DARWIN = 0xA0000006
SIG_ICON_ENVIRONMENT = 0xA0000007
SIG_SHIM = 0xA0000008
SIG_PROPERTY_STORE = 0xA0000009
SIG_KNOWN_FOLDER = 0xA000000B
SIG_VISTA_AND_ABOVE_ID_LIST = 0xA000000C

EXTRA_SIGS = {
    SIG_ENVIRONMENT_VARIABLE: "EnvironmentVariableDataBlock",
    SIG_CONSOLE: "ConsoleDataBlock",
    SIG_TRACKER: "TrackerDataBlock",
    SIG_CONSOLE_FE: "ConsoleFEDataBlock",
    SIG_SPECIAL_FOLDER: "SpecialFolderDataBlock",
    SIG_DARWIN: "DarwinDataBlock",
    SIG_ICON_ENVIRONMENT: "IconEnvironmentDataBlock",
    SIG_SHIM: "ShimDataBlock",
    SIG_PROPERTY_STORE: "PropertyStoreDataBlock",
    SIG_KNOWN_FOLDER: "KnownFolderDataBlock",
    SIG_VISTA_AND_ABOVE_ID_LIST: "VistaAndAboveIDListDataBlock",
}

# Fixed ANSI / unicode field widths shared by the 0x314-byte blocks
ANSI_FIELD_SIZE = 260
UNICODE_FIELD_SIZE = 520

# ---------------------------------------------------------------------------
# Known Folder GUIDs -> friendly name
# ---------------------------------------------------------------------------
KNOWN_FOLDER_NAMES = {
    "{B4BFCC3A-DB2C-424C-B029-7FE99A87C641}": "Desktop",
    "{FDD39AD0-238F-46AF-ADB4-6C85480369C7}": "Documents",
    "{374DE290-123F-4565-9164-39C4925E467B}": "Downloads",
    "{4BD8D571-6D19-48D3-BE97-422220080E43}": "Music",
    "{33E28130-4E1E-4676-835A-98395C3BC3BB}": "Pictures",
    "{18989B1D-99B5-455B-841C-AB7C74E4DDFC}": "Videos",
    "{3EB685DB-65F9-4CF6-A03A-E3EF65729F3D}": "AppData",
    "{F1B32785-6FBA-4FCF-9D55-7B8E7F157091}": "LocalAppData",
    "{905E63B6-C1BF-494E-B29C-65B732D3D21A}": "ProgramFiles",
    "{7C5A40EF-A0FB-4BFC-874A-C0F2E0B9FA8E}": "ProgramFilesX86",
    "{1AC14E77-02E7-4E5D-B744-2EB1AE5198B7}": "System",
    "{D65231B0-B2F1-4857-A4CE-A8E7C6EA7D27}": "SystemX86",
    "{F38BF404-1D43-42F2-9305-67DE0B28FC23}": "Windows",
    "{B97D20BB-F46A-4C97-BA10-5E3608430854}": "Startup",
    "{A77F5D77-2E2B-44C3-A6A2-ABA601054A51}": "Programs",
    "{625B53C3-AB48-4EC1-BA1F-A1EF4146FC19}": "StartMenu",
    "{8983036C-27C0-404B-8F08-102D10DCFD74}": "SendTo",
    "{A63293E8-664E-48DB-A079-DF759E0509F7}": "Templates",
    "{FD228CB7-AE11-4AE3-864C-16F3910AB8FE}": "Fonts",
    "{A52BBA46-E9E1-435F-B3D9-28DAA648C0F6}": "OneDrive",
    "{5E6C858F-0E22-4760-9AFE-EA3317B67173}": "Profile",
    "{DFDF76A2-C82A-4D63-906A-5644AC457385}": "Public",
    "{C4AA340D-F20F-4863-AFEF-F87EF2E6BA25}": "PublicDesktop",
    "{ED4824AF-DCE4-45A8-81E2-FC7965083634}": "PublicDocuments",
    "{AE50C081-EBD2-438A-8655-8A092E34987A}": "Recent",
    "{A4115719-D62E-491D-AA7C-E74B8BE3B067}": "CommonStartMenu",
    "{0139D44E-6AFE-49F2-8690-3DAFCAE6FFB8}": "CommonPrograms",
    "{82A5EA35-D9CD-47C5-9629-E15D2F714E6E}": "CommonStartup",
    "{724EF170-A42D-4FEF-9F26-B60E846FBA4F}": "AdminTools",
    "{62AB5D82-FDC1-4DC3-A9DD-070D1D495D97}": "ProgramData",
    "{0762D272-C50A-4BB0-A382-697DCD729B80}": "UserProfiles",
    "{1777F761-68AD-4D8A-87BD-30B759FA33DD}": "Favorites",
    "{C5ABBF53-E17F-4121-8900-86626FC2C973}": "NetHood",
    "{9274BD8D-CFD1-41C3-B35E-B13F55A758F4}": "PrintHood",
    "{0AC0837C-BBF8-452A-850D-79D08E667CA7}": "ComputerFolder",
    "{D20BEEC4-5CA8-4905-AE3B-BF251EA09B53}": "NetworkFolder",
    "{B7534046-3ECB-4C18-BE4E-64CD4CB7D6AC}": "RecycleBinFolder",
    "{82A74AEB-AEB4-465C-A014-D097EE346D63}": "ControlPanelFolder",
}

# ---------------------------------------------------------------------------
# Shell item type bytes (LinkTargetIDList payloads)
# ---------------------------------------------------------------------------
ITEM_TYPE_ROOT = 0x1F
ITEM_TYPE_DRIVE = 0x2F
ITEM_TYPES_DIRECTORY = (0x31, 0x35)
ITEM_TYPES_FILE = (0x32, 0x36)
ITEM_EXT_SIG = 0xBEEF0004

# ---------------------------------------------------------------------------
# Serialized property store (MS-PROPSTORE)
# ---------------------------------------------------------------------------
PROPSTORE_VERSION = 0x53505331  # "1SPS"
PROPSTORE_STRING_NAMED_FMTID = "{D5CDD505-2E9C-101B-9397-08002B2CF9AE}"

VT_EMPTY = 0x0000
VT_I2 = 0x0002
VT_I4 = 0x0003
VT_BOOL = 0x000B
VT_UI4 = 0x0013
VT_I8 = 0x0014
VT_UI8 = 0x0015
VT_LPSTR = 0x001E
VT_LPWSTR = 0x001F
VT_FILETIME = 0x0040
VT_BLOB = 0x0041
VT_CLSID = 0x0048

VT_TYPES = {
    VT_EMPTY: "VT_EMPTY",
    VT_I2: "VT_I2",
    VT_I4: "VT_I4",
    VT_BOOL: "VT_BOOL",
    VT_UI4: "VT_UI4",
    VT_I8: "VT_I8",
    VT_UI8: "VT_UI8",
    VT_LPSTR: "VT_LPSTR",
    VT_LPWSTR: "VT_LPWSTR",
    VT_FILETIME: "VT_FILETIME",
    VT_BLOB: "VT_BLOB",
    0x0042: "VT_STREAM",
    VT_CLSID: "VT_CLSID",
    0x1002: "VT_VECTOR|VT_I2",
    0x1003: "VT_VECTOR|VT_I4",
    0x101F: "VT_VECTOR|VT_LPWSTR",
}

PROPERTY_SET_GUIDS = {
    "{B9B4B3FC-2B51-4A42-B5D8-324146AFCF25}": "SID_SPS_METADATA",
    "{46588AE2-4CBC-4338-BBFC-139326986DCE}": "SID_SPS_METADATA2",
    "{28636AA6-953D-11D2-B5D6-00C04FD918D0}": "System.Properties",
    "{D5CDD505-2E9C-101B-9397-08002B2CF9AE}": "DocumentSummaryInformation",
    "{F29F85E0-4FF9-1068-AB91-08002B27B3D9}": "SummaryInformation",
    "{DABD30ED-0043-4B2E-87B4-6C698306D0D6}": "System.Volume",
    "{86D40B4D-9069-443C-8192-C1B02B9FF69C}": "System.Link",
    "{56A3372E-CE9C-11D2-9F0E-006097C686F6}": "System.Document",
}
