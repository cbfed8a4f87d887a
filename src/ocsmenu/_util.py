"""Internal helpers for little-endian reads and NUL-terminated strings."""

from __future__ import annotations

import struct


def read_u16(data: bytes | memoryview, off: int = 0) -> int:
    return struct.unpack_from("<H", data, off)[0]


def decode_ascii_z(data: bytes | memoryview) -> str:
    """Decode single-byte characters up to the first NUL (or the end)."""
    raw = bytes(data)
    nul = raw.find(b"\x00")
    if nul >= 0:
        raw = raw[:nul]
    return raw.decode("latin-1")


def find_utf16le_null(data: bytes | memoryview, start: int = 0) -> int:
    """Find the first UTF-16LE null terminator (two zero bytes at even offset).

    Returns the byte offset of the null terminator relative to *start*,
    or the length of the last whole code unit if not found.  The result is
    always even.
    """
    pos = start
    end = len(data) - 1
    while pos < end:
        if data[pos] == 0 and data[pos + 1] == 0:
            return pos - start
        pos += 2
    return pos - start


def decode_utf16le_z(data: bytes | memoryview, off: int = 0) -> str:
    """Decode a null-terminated UTF-16LE string starting at *off*.

    A trailing odd byte is ignored.
    """
    null_pos = find_utf16le_null(data, off)
    return bytes(data[off : off + null_pos]).decode("utf-16-le", errors="replace")
