"""Tests for ocsmenu.idl (SHITEMID record decoding)."""

import logging
import struct

import pytest
from conftest import (
    TERMINATOR,
    drive_record,
    ext_guid_record,
    file_record,
    guid_record,
    idlist,
    network_record,
)

from ocsmenu._errors import ChainError
from ocsmenu.clsid import CLSID, CLSID_MY_COMPUTER, CLSID_RECYCLE_BIN
from ocsmenu.idl import ItemIDList, get_class_name, iter_records

UNREGISTERED = CLSID.parse("{12345678-1234-1234-1234-123456789ABC}")


def _with_trailing_offset(record: bytes, off: int) -> bytes:
    return record[:-2] + struct.pack("<H", off)


class TestWalk:
    """Chain traversal and termination."""

    def test_empty_chain_is_desktop(self):
        idl = ItemIDList(TERMINATOR)
        assert idl.is_desktop()
        assert idl.type == 0
        assert idl.next_item() is None

    def test_next_item(self):
        data = idlist(guid_record(CLSID_MY_COMPUTER), drive_record())
        idl = ItemIDList(data)
        assert idl.cb == 20
        assert idl.type == 0x1F
        drive = idl.next_item()
        assert drive.cb == 23
        assert drive.type == 0x2F
        assert drive.next_item().is_desktop()

    def test_next_item_shares_buffer(self):
        data = idlist(guid_record(CLSID_MY_COMPUTER), drive_record())
        nxt = ItemIDList(data).next_item()
        assert nxt.data.obj is data

    @pytest.mark.parametrize("data", [b"", b"\x00"])
    def test_too_short(self, data):
        with pytest.raises(ChainError, match="too short"):
            ItemIDList(data)

    def test_record_overruns_buffer(self):
        idl = ItemIDList(b"\x30\x00\x1f\x50\x00\x00")
        with pytest.raises(ChainError, match="overruns"):
            idl.next_item()

    def test_unterminated(self):
        idl = ItemIDList(guid_record(CLSID_MY_COMPUTER))
        with pytest.raises(ChainError, match="not terminated"):
            idl.next_item()

    def test_half_terminator(self):
        idl = ItemIDList(guid_record(CLSID_MY_COMPUTER) + b"\x00")
        with pytest.raises(ChainError, match="not terminated"):
            idl.next_item()


class TestGuidRecords:
    """Tags 0x1F / 0x2E (CLSID at 4) and 0x71 (CLSID at 14)."""

    def test_root_guid(self):
        idl = ItemIDList(idlist(guid_record(CLSID_MY_COMPUTER)))
        assert idl.get_clsid() == CLSID_MY_COMPUTER

    def test_extension_guid(self):
        idl = ItemIDList(idlist(guid_record(CLSID_RECYCLE_BIN, tag=0x2E)))
        assert idl.get_clsid() == CLSID_RECYCLE_BIN

    def test_extended_guid(self):
        idl = ItemIDList(idlist(ext_guid_record(CLSID_RECYCLE_BIN)))
        assert idl.get_clsid() == CLSID_RECYCLE_BIN

    def test_text_is_display_name(self):
        idl = ItemIDList(idlist(guid_record(CLSID_RECYCLE_BIN)))
        assert idl.get_text() == "Recycle Bin"

    def test_text_unregistered(self):
        idl = ItemIDList(idlist(guid_record(UNREGISTERED)))
        assert idl.get_text() == "::{12345678-1234-1234-1234-123456789ABC}"

    def test_no_clsid_for_other_tags(self):
        assert ItemIDList(idlist(drive_record())).get_clsid() is None
        assert ItemIDList(idlist(file_record("a.txt"))).get_clsid() is None

    def test_truncated_guid(self):
        idl = ItemIDList(b"\x06\x00\x1f\x50\xaa\xbb\x00\x00")
        with pytest.raises(ChainError, match="truncated"):
            idl.get_clsid()


class TestDriveRecords:
    @pytest.mark.parametrize("tag", [0x23, 0x25, 0x29, 0x2F])
    def test_drive_tags(self, tag):
        idl = ItemIDList(idlist(drive_record("D:\\", tag=tag)))
        assert idl.get_text() == "D:\\"

    def test_stops_at_nul(self):
        assert ItemIDList(idlist(drive_record("E:"))).drive_name() == "E:"


class TestNetworkRecords:
    def test_network_name(self):
        idl = ItemIDList(idlist(network_record("\\\\server\\share")))
        assert idl.type == 0xC3
        assert idl.network_name() == "\\\\server\\share"


class TestFileNames:
    """Trailing name block decoding and its rejection rules."""

    def test_name(self):
        idl = ItemIDList(idlist(file_record("Program Files")))
        assert idl.file_name() == "Program Files"
        assert idl.get_text() == "Program Files"

    def test_unicode_name(self):
        idl = ItemIDList(idlist(file_record("ドキュメント")))
        assert idl.get_text() == "ドキュメント"

    def test_extra_trailing_block(self):
        idl = ItemIDList(idlist(file_record("notes.txt", extra=8)))
        assert idl.file_name() == "notes.txt"

    def test_extra_block_mismatch(self):
        record = bytearray(file_record("notes.txt", extra=8))
        record[-8] = 12  # extra length no longer fills the record
        idl = ItemIDList(idlist(bytes(record)))
        assert idl.file_name() is None

    @pytest.mark.parametrize("off", [17, 14, 0, 2])
    def test_bad_trailing_offset(self, off):
        record = _with_trailing_offset(file_record("name.txt"), off)
        idl = ItemIDList(idlist(record))
        assert idl.file_name() is None

    def test_offset_past_tail_room(self):
        record = file_record("name.txt")
        off = len(record) - 22
        idl = ItemIDList(idlist(_with_trailing_offset(record, off)))
        assert idl.file_name() is None

    def test_block_length_overruns_record(self):
        record = bytearray(file_record("name.txt"))
        record[16] = 0xFF
        idl = ItemIDList(idlist(bytes(record)))
        assert idl.file_name() is None

    def test_name_offset_without_room(self):
        record = bytearray(file_record("name.txt"))
        block_len = record[16]
        record[16 + 16] = block_len - 2
        idl = ItemIDList(idlist(bytes(record)))
        assert idl.file_name() is None

    def test_rejected_name_falls_back_to_empty(self, caplog):
        record = _with_trailing_offset(file_record("name.txt"), 17)
        idl = ItemIDList(idlist(record))
        with caplog.at_level(logging.WARNING, logger="ocsmenu.idl"):
            assert idl.get_text() == ""
        assert "0x31" in caplog.text

    def test_rejected_name_falls_back_to_drive(self):
        idl = ItemIDList(idlist(drive_record("C:\\")))
        assert idl.file_name() is None
        assert idl.get_text() == "C:\\"

    def test_tiny_record(self):
        idl = ItemIDList(b"\x03\x00\x31\x00\x00")
        assert idl.file_name() is None


class TestClassNames:
    def test_registered(self):
        assert get_class_name(CLSID_MY_COMPUTER) == "This PC"

    def test_unregistered(self):
        assert get_class_name(UNREGISTERED) == "::{12345678-1234-1234-1234-123456789ABC}"


class TestIterRecords:
    """The per-record listing used for debug output."""

    def test_listing(self):
        data = idlist(
            guid_record(CLSID_MY_COMPUTER), drive_record(), file_record("Windows")
        )
        items = list(iter_records(data))
        assert [i.offset for i in items] == [0, 20, 43]
        assert [i.type_byte for i in items] == [0x1F, 0x2F, 0x31]
        assert "This PC" in items[0].description
        assert items[1].description == "[Drive] C:\\"
        assert items[2].description == '[File] "Windows"'

    def test_empty(self):
        assert list(iter_records(TERMINATOR)) == []

    def test_malformed(self):
        with pytest.raises(ChainError):
            list(iter_records(guid_record(CLSID_MY_COMPUTER)))
