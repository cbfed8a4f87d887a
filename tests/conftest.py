"""Shared builders and fixtures for ocsmenu tests."""

import struct

import pytest

from ocsmenu.clsid import (
    CLSID,
    CLSID_CONTROL_PANEL,
    CLSID_MY_COMPUTER,
    CLSID_PRINTERS,
)

TERMINATOR = b"\x00\x00"


# ---------------------------------------------------------------------------
# SHITEMID builders
# ---------------------------------------------------------------------------
def guid_record(clsid: CLSID, tag: int = 0x1F, sort: int = 0x50) -> bytes:
    """A 20-byte root/extension GUID record (CLSID at offset 4)."""
    return struct.pack("<HBB", 20, tag, sort) + clsid.to_bytes()


def ext_guid_record(clsid: CLSID, tag: int = 0x71) -> bytes:
    """A 32-byte record with its CLSID at offset 14."""
    return struct.pack("<HB", 32, tag) + b"\x00" * 11 + clsid.to_bytes() + b"\x00\x00"


def drive_record(name: str = "C:\\", tag: int = 0x2F) -> bytes:
    """A 23-byte drive record: 20 NUL-padded ASCII bytes at offset 3."""
    return struct.pack("<HB", 23, tag) + name.encode("ascii").ljust(20, b"\x00")


def network_record(name: str, tag: int = 0xC3) -> bytes:
    """A network share record with its ASCII name at offset 5."""
    body = b"\x01\x00" + name.encode("ascii") + b"\x00\x00\x00"
    return struct.pack("<HB", 3 + len(body), tag) + body


def file_record(name: str, tag: int = 0x31, extra: int = 0) -> bytes:
    """A file/folder record whose trailing name block holds *name*.

    The name block starts at offset 16 and ends with the u16 offset of the
    block.  With *extra*, an additional block of that many bytes follows
    and carries the trailing offset instead.
    """
    head = struct.pack("<HB", 0, tag) + b"\x00" + struct.pack("<IHHH", 0, 0, 0, 0)
    head += b"X\x00"
    off = len(head)

    name_raw = name.encode("utf-16-le") + b"\x00\x00"
    block_len = 20 + len(name_raw) + 2
    block = struct.pack("<HHI", block_len, 9, 0xBEEF0004) + b"\x00" * 8
    block += struct.pack("<H", 20) + b"\x00\x00" + name_raw + struct.pack("<H", off)

    tail = b""
    if extra:
        tail = struct.pack("<H", extra) + b"\x00" * (extra - 4) + struct.pack("<H", off)

    body = head[2:] + block + tail
    return struct.pack("<H", 2 + len(body)) + body


def idlist(*records: bytes) -> bytes:
    return b"".join(records) + TERMINATOR


# ---------------------------------------------------------------------------
# OCS builders
# ---------------------------------------------------------------------------
def ws(text: str) -> str:
    raw = text.encode("utf-16-le")
    units = struct.unpack(f"<{len(raw) // 2}H", raw)
    return "ws:" + ",".join(str(u) for u in units)


def bn(data: bytes) -> str:
    return "bn:" + ",".join(str(b) for b in data)


NOTEPAD_ID = idlist(
    guid_record(CLSID_MY_COMPUTER),
    drive_record("C:\\"),
    file_record("Windows"),
    file_record("notepad.exe", tag=0x32),
)

PRINTERS_ID = idlist(guid_record(CLSID_CONTROL_PANEL), guid_record(CLSID_PRINTERS, 0x2E))

BROKEN_ID = b"\x40\x00\x1f\x50"


@pytest.fixture
def sample_ocs_text():
    """A launcher exercising every menu item type."""
    return "\r\n".join(
        [
            "# saved launcher",
            "",
            "[Launchers]",
            "LauncherCount=dw:1",
            "[Launchers\\1]",
            f"Title={ws('Main')}",
            "[Launchers\\1\\Menu]",
            "Items=dw:5",
            "[Launchers\\1\\Menu\\0]",
            "Type=dw:0",
            f"Caption={ws('Notepad')}",
            f"ItemID={bn(NOTEPAD_ID)}",
            "ShowCmd=dw:1",
            "[Launchers\\1\\Menu\\1]",
            "Type=dw:1",
            f"Caption={ws('Printers')}",
            f"ItemID={bn(PRINTERS_ID)}",
            "[Launchers\\1\\Menu\\2]",
            "Type=dw:2",
            "[Launchers\\1\\Menu\\3]",
            "Type=dw:3",
            f"Caption={ws('Tools')}",
            "Items=dw:3",
            "[Launchers\\1\\Menu\\3\\0]",
            "Type=dw:4",
            "ID=dw:144",
            f"Caption={ws('Run...')}",
            "[Launchers\\1\\Menu\\3\\1]",
            "Type=dw:9",
            "[Launchers\\1\\Menu\\3\\2]",
            "Type=dw:0",
            f"Caption={ws('Broken')}",
            f"ItemID={bn(BROKEN_ID)}",
            "ShowCmd=dw:3",
            "[Launchers\\1\\Menu\\4]",
            "Type=dw:0",
            f"Caption={ws('Admin shell')}",
            f"ItemID={bn(NOTEPAD_ID)}",
            "ShowCmd=dw:7",
            f"Parameter={ws('/k echo hi')}",
            f"Verb={ws('runas')}",
            "",
        ]
    )


@pytest.fixture
def sample_ocs_file(tmp_path, sample_ocs_text):
    p = tmp_path / "sample.ocs"
    p.write_text(sample_ocs_text, encoding="utf-8", newline="")
    return p
