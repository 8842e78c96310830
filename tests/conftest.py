import pytest

from lnkbytes import (
    DESKTOP_FOLDER,
    DROID_FILE,
    DROID_VOLUME,
    SYSTEM_LINK_FMTID,
    TERMINAL_BLOCK,
    ansi_unicode_block,
    counted,
    drive_item,
    fs_item,
    header,
    id_list,
    known_folder_block,
    link_info_local,
    link_info_unc,
    lpwstr,
    network_link,
    property_record,
    property_storage,
    property_store_block,
    root_item,
    tracker_block,
    volume_id,
)

from lnkdecode import LinkFlags

NOTEPAD_FLAGS = (
    LinkFlags.HAS_LINK_TARGET_ID_LIST
    | LinkFlags.HAS_LINK_INFO
    | LinkFlags.HAS_NAME
    | LinkFlags.HAS_RELATIVE_PATH
    | LinkFlags.HAS_WORKING_DIR
    | LinkFlags.HAS_ARGUMENTS
    | LinkFlags.HAS_ICON_LOCATION
    | LinkFlags.IS_UNICODE
    | LinkFlags.HAS_EXP_STRING
)


@pytest.fixture
def notepad_lnk_bytes():
    """A complete local shortcut to C:\\Windows\\notepad.exe."""
    return (
        header(
            NOTEPAD_FLAGS,
            creation_time=0x01D9A3C4E5F60718,
            access_time=0x01D9A3C4E5F60719,
            write_time=0x01D9A3C4E5F6071A,
            file_size=201216,
            icon_index=2,
            show_command=3,
            vk=0x43,
            modifiers=0x06,
        )
        + id_list(
            root_item(),
            drive_item("C"),
            fs_item("Windows", "Windows", is_dir=True),
            fs_item("notepad.exe", "notepad.exe", file_size=201216),
        )
        + link_info_local(r"C:\Windows\notepad.exe", volume=volume_id("SYSTEM"))
        + counted("Text editor")
        + counted(r"..\..\Windows\notepad.exe")
        + counted(r"C:\Windows")
        + counted(r"C:\notes.txt")
        + counted(r"%SystemRoot%\system32\shell32.dll")
        + ansi_unicode_block(0xA0000001, r"%windir%\notepad.exe")
        + tracker_block("workstation-7", DROID_VOLUME, DROID_FILE, DROID_VOLUME, DROID_FILE)
        + property_store_block(
            property_storage(
                SYSTEM_LINK_FMTID,
                property_record(2, 0x001F, lpwstr(r"C:\Windows\notepad.exe")),
            )
        )
        + known_folder_block(DESKTOP_FOLDER)
        + TERMINAL_BLOCK
    )


@pytest.fixture
def unc_lnk_bytes():
    """A shortcut to \\\\fileserver\\share\\reports\\q3.xlsx mapped on Z:."""
    return (
        header(LinkFlags.HAS_LINK_INFO | LinkFlags.IS_UNICODE)
        + link_info_unc(
            network_link(r"\\fileserver\share", "Z:", wide=True), suffix=r"reports\q3.xlsx"
        )
        + TERMINAL_BLOCK
    )


@pytest.fixture
def notepad_lnk_path(tmp_path, notepad_lnk_bytes):
    path = tmp_path / "Notepad.lnk"
    path.write_bytes(notepad_lnk_bytes)
    return path
