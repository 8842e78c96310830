"""Tests for lnkdecode.extradata."""

import logging
import struct

from lnkbytes import (
    TERMINAL_BLOCK,
    ansi_unicode_block,
    block,
    console_block,
    id_items,
    known_folder_block,
    lpwstr,
    property_record,
    property_storage,
    property_store_block,
    tracker_block,
)

from lnkdecode import (
    ByteCursor,
    ConsoleDataBlock,
    ConsoleFEDataBlock,
    DarwinDataBlock,
    EnvironmentVariableDataBlock,
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

VOLUME = "{94C3B3A2-4A0B-4E2F-9C67-3C9A5B3E2F10}"
FILE = "{B1E6C6E0-1F3C-11EF-A1B2-000C29ABCDEF}"


def _decode(*blocks):
    return decode_extra_data(ByteCursor(b"".join(blocks)))


def _single(data):
    (result,) = _decode(data, TERMINAL_BLOCK)
    return result


class TestChain:
    """Block chain framing."""

    def test_terminal_only(self):
        assert _decode(TERMINAL_BLOCK) == ()

    def test_empty_input(self):
        assert _decode() == ()

    def test_single_zero_block(self):
        assert _decode(b"\x00" * 8) == ()

    def test_size_below_eight_terminates(self):
        data = struct.pack("<I", 7) + block(0xA0000004, struct.pack("<I", 437))
        assert _decode(data) == ()

    def test_multiple_blocks_in_order(self):
        result = _decode(
            block(0xA0000004, struct.pack("<I", 437)),
            block(0xA0000005, struct.pack("<II", 0x24, 0x56)),
            TERMINAL_BLOCK,
        )
        assert [type(b) for b in result] == [ConsoleFEDataBlock, SpecialFolderDataBlock]

    def test_missing_terminal_block(self):
        result = _decode(block(0xA0000004, struct.pack("<I", 65001)))
        assert result == (ConsoleFEDataBlock(size=12, code_page=65001),)

    def test_overrunning_block_keeps_earlier_blocks(self, caplog):
        good = block(0xA0000004, struct.pack("<I", 437))
        bad = struct.pack("<II", 0x400, 0xA0000003) + b"\x00" * 16
        with caplog.at_level(logging.WARNING, logger="lnkdecode"):
            result = _decode(good, bad)
        assert result == (ConsoleFEDataBlock(size=12, code_page=437),)
        assert "ending chain after 1 blocks" in caplog.text

    def test_cursor_advances_past_blocks(self):
        data = block(0xA0000004, struct.pack("<I", 1)) + TERMINAL_BLOCK
        cur = ByteCursor(data)
        decode_extra_data(cur)
        assert cur.remaining == 0


class TestUnknownBlocks:
    def test_unknown_signature_retained(self):
        result = _single(block(0xAAAAAAAA, b"opaque!!"))
        assert result == UnknownDataBlock(signature=0xAAAAAAAA, size=16, payload=b"opaque!!")
        assert block_name(result) == "0xAAAAAAAA"

    def test_short_payload_kept_opaque(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lnkdecode"):
            result = _single(block(0xA0000003, b"\x58\x00\x00\x00"))
        assert result == UnknownDataBlock(0xA0000003, 12, b"\x58\x00\x00\x00")
        assert "TrackerDataBlock" in caplog.text

    def test_malformed_vista_id_list_kept_opaque(self):
        result = _single(block(0xA000000C, struct.pack("<H", 30) + b"ab"))
        assert isinstance(result, UnknownDataBlock)
        assert result.signature == 0xA000000C


class TestKnownBlocks:
    """Each signature decodes into its own block type."""

    def test_environment_variable(self):
        result = _single(ansi_unicode_block(0xA0000001, r"%windir%\notepad.exe"))
        assert isinstance(result, EnvironmentVariableDataBlock)
        assert result.size == 0x314
        assert result.target_ansi == r"%windir%\notepad.exe"
        assert result.target_unicode == r"%windir%\notepad.exe"
        assert result.target == r"%windir%\notepad.exe"
        assert block_name(result) == "EnvironmentVariableDataBlock"

    def test_environment_variable_prefers_unicode(self):
        result = _single(ansi_unicode_block(0xA0000001, r"%USERPROFILE%\?", r"%USERPROFILE%\ü"))
        assert result.target == r"%USERPROFILE%\ü"

    def test_environment_variable_falls_back_to_ansi(self):
        result = _single(ansi_unicode_block(0xA0000001, r"%TEMP%\x", ""))
        assert result.target == r"%TEMP%\x"

    def test_icon_environment(self):
        result = _single(ansi_unicode_block(0xA0000007, r"%SystemRoot%\icon.ico"))
        assert isinstance(result, IconEnvironmentDataBlock)
        assert result.target == r"%SystemRoot%\icon.ico"

    def test_darwin(self):
        result = _single(ansi_unicode_block(0xA0000006, "w_(5bN=Vw!?ypI"))
        assert isinstance(result, DarwinDataBlock)
        assert result.darwin_data == "w_(5bN=Vw!?ypI"

    def test_console(self):
        result = _single(console_block(face_name="Lucida Console"))
        assert isinstance(result, ConsoleDataBlock)
        assert result.size == 0xCC
        assert result.fill_attributes == 0x07
        assert result.popup_fill_attributes == 0xF5
        assert result.screen_buffer_size_x == 120
        assert result.screen_buffer_size_y == 9001
        assert result.window_origin_x == -1
        assert result.font_size == 0x100000
        assert result.font_family == 0x36
        assert result.font_weight == 400
        assert result.face_name == "Lucida Console"
        assert result.cursor_size == 25
        assert result.quick_edit == 1
        assert result.history_buffer_size == 50
        assert result.number_of_history_buffers == 4
        assert result.color_table == tuple(range(16))

    def test_tracker(self):
        result = _single(tracker_block("desktop-42", VOLUME, FILE, FILE, VOLUME))
        assert isinstance(result, TrackerDataBlock)
        assert result.size == 0x60
        assert result.length == 0x58
        assert result.version == 0
        assert result.machine_id == "desktop-42"
        assert result.droid_volume_id == VOLUME
        assert result.droid_file_id == FILE
        assert result.birth_droid_volume_id == FILE
        assert result.birth_droid_file_id == VOLUME

    def test_console_fe(self):
        assert _single(block(0xA0000004, struct.pack("<I", 932))) == ConsoleFEDataBlock(
            size=12, code_page=932
        )

    def test_special_folder(self):
        result = _single(block(0xA0000005, struct.pack("<II", 0x25, 0x14)))
        assert result == SpecialFolderDataBlock(size=16, special_folder_id=0x25, offset=0x14)

    def test_shim(self):
        payload = "WIN7RTM".encode("utf-16-le").ljust(0x80, b"\x00")
        result = _single(block(0xA0000008, payload))
        assert result == ShimDataBlock(size=0x88, layer_name="WIN7RTM")

    def test_known_folder(self):
        result = _single(known_folder_block("{B4BFCC3A-DB2C-424C-B029-7FE99A87C641}", 0x1E))
        assert isinstance(result, KnownFolderDataBlock)
        assert result.known_folder_id == "{B4BFCC3A-DB2C-424C-B029-7FE99A87C641}"
        assert result.known_folder_name == "Desktop"
        assert result.offset == 0x1E

    def test_known_folder_unlisted(self):
        result = _single(known_folder_block(VOLUME))
        assert result.known_folder_name is None

    def test_vista_id_list(self):
        result = _single(block(0xA000000C, id_items(b"\x1f\x50abc", b"\x2fC:\\")))
        assert isinstance(result, VistaAndAboveIDListDataBlock)
        assert [i.data for i in result.id_list] == [b"\x1f\x50abc", b"\x2fC:\\"]

    def test_property_store(self):
        result = _single(
            property_store_block(
                property_storage(
                    "{86D40B4D-9069-443C-8192-C1B02B9FF69C}",
                    property_record(2, 0x001F, lpwstr("target")),
                )
            )
        )
        assert isinstance(result, PropertyStoreDataBlock)
        (store,) = result.stores
        assert store.format_name == "System.Link"
        assert store.get(2) == "target"
