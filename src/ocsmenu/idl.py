"""Decode Shell Item Identifier Lists (chains of SHITEMID records).

Each record is ``[u16 length][u8 type tag][payload...]``; a zero length
terminates the chain.  Records are views into the caller's buffer and are
never copied while walking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ._constants import (
    CLASS_NAMES,
    DRIVE_NAME_OFFSET,
    DRIVE_NAME_SIZE,
    DRIVE_TAGS,
    EXTENDED_GUID_OFFSET,
    GUID_OFFSET,
    GUID_TAGS,
    NAME_BLOCK_MIN_OFFSET,
    NAME_BLOCK_NAME_OFFSET_FIELD,
    NAME_BLOCK_TAIL,
    NETWORK_NAME_OFFSET,
    TAG_EXTENDED_GUID,
    TAG_NETWORK_SHARE,
)
from ._errors import ChainError
from ._util import decode_ascii_z, decode_utf16le_z, read_u16
from .clsid import CLSID

log = logging.getLogger(__name__)


def get_class_name(clsid: CLSID) -> str:
    """Return the display name of *clsid*, or ``::{CLSID}`` if unregistered."""
    return CLASS_NAMES.get(clsid, f"::{clsid}")


class ItemIDList:
    """A position in an identifier list: the current record plus the rest.

    ``data`` spans from the current record to the end of the buffer, so
    ``next_item()`` is a slice of the same storage.
    """

    __slots__ = ("data", "cb", "type")

    def __init__(self, data: bytes | memoryview):
        view = memoryview(data)
        if len(view) < 2:
            raise ChainError("Identifier list too short (need 2 bytes for a record length)")
        self.data = view
        self.cb = read_u16(view, 0)
        self.type = view[2] if self.cb != 0 and len(view) > 2 else 0

    def __repr__(self) -> str:
        return f"ItemIDList(cb={self.cb}, type=0x{self.type:02X})"

    def is_desktop(self) -> bool:
        """True for the terminator, i.e. an empty chain naming the Desktop."""
        return self.cb == 0

    def next_item(self) -> ItemIDList | None:
        """Return the following record, or ``None`` at the terminator."""
        if self.cb == 0:
            return None
        if self.cb > len(self.data):
            raise ChainError(
                f"Record of {self.cb} bytes overruns the {len(self.data)} bytes left"
            )
        if len(self.data) - self.cb < 2:
            raise ChainError("Identifier list is not terminated")
        return ItemIDList(self.data[self.cb :])

    # -- field decoders -----------------------------------------------------

    def _clsid_at(self, off: int) -> CLSID:
        raw = self.data[off : off + 16]
        if len(raw) < 16:
            raise ChainError(f"GUID at record offset {off} is truncated")
        return CLSID.from_bytes(raw)

    def guid(self) -> CLSID:
        """GUID of a root or extension record (tags 0x1F, 0x2E)."""
        return self._clsid_at(GUID_OFFSET)

    def ext_guid(self) -> CLSID:
        """GUID of an extended record (tag 0x71, and the Users sub-items)."""
        return self._clsid_at(EXTENDED_GUID_OFFSET)

    def drive_name(self) -> str:
        return decode_ascii_z(
            self.data[DRIVE_NAME_OFFSET : DRIVE_NAME_OFFSET + DRIVE_NAME_SIZE]
        )

    def network_name(self) -> str:
        return decode_ascii_z(self.data[NETWORK_NAME_OFFSET : self.cb])

    def file_name(self) -> str | None:
        """Decode the UTF-16 long name from the trailing name block.

        The last two bytes of the record hold the offset of the block.  Any
        check that fails means there is no name here.
        """
        cb = self.cb
        if cb < 2 or cb > len(self.data):
            return None
        record = self.data[:cb]

        off = read_u16(record, cb - 2)
        if off & 1 or off < NAME_BLOCK_MIN_OFFSET or off > cb - NAME_BLOCK_TAIL:
            log.debug("Name block offset %d rejected for %d-byte record", off, cb)
            return None

        block = record[off:]
        block_len = read_u16(block, 0)
        if cb < off + block_len:
            log.debug("Name block of %d bytes overruns record", block_len)
            return None
        if cb > off + block_len:
            # Some records carry an extra trailing block after the name block
            lo = block[block_len]
            hi = block[block_len + 1] if block_len + 1 < len(block) else 0
            extra_len = lo | (hi << 8)
            if cb != off + block_len + extra_len:
                log.debug("Trailing block of %d bytes does not fill record", extra_len)
                return None

        name_off = read_u16(block, NAME_BLOCK_NAME_OFFSET_FIELD)
        if name_off + 2 >= len(block):
            log.debug("Name offset %d leaves no room in name block", name_off)
            return None
        return decode_utf16le_z(block, name_off)

    # -- accessors ------------------------------------------------------------

    def get_clsid(self) -> CLSID | None:
        if self.type == TAG_EXTENDED_GUID:
            return self.ext_guid()
        if self.type in GUID_TAGS:
            return self.guid()
        return None

    def get_text(self) -> str:
        """Best-effort label: file name, drive, or CLSID display name."""
        name = self.file_name()
        if name is not None:
            return name

        if self.type in DRIVE_TAGS:
            return self.drive_name()
        if self.type in GUID_TAGS:
            return get_class_name(self.get_clsid())

        log.warning("Unknown identifier list record type 0x%02X", self.type)
        return ""


# ---------------------------------------------------------------------------
# Record listing
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class IdItem:
    """One SHITEMID entry of an identifier list."""

    offset: int
    size: int
    type_byte: int
    description: str


def _describe(idl: ItemIDList) -> str:
    if idl.type in GUID_TAGS:
        clsid = idl.get_clsid()
        return f"[GUID] CLSID={clsid} ({get_class_name(clsid)})"
    if idl.type in DRIVE_TAGS:
        return f"[Drive] {idl.drive_name()}"
    if idl.type == TAG_NETWORK_SHARE:
        return f"[Network] {idl.network_name()}"
    name = idl.file_name()
    if name is not None:
        return f'[File] "{name}"'
    return f"type=0x{idl.type:02X}"


def iter_records(data: bytes | memoryview):
    """Yield an :class:`IdItem` for each record up to the terminator."""
    idl = ItemIDList(data)
    offset = 0
    while not idl.is_desktop():
        yield IdItem(
            offset=offset, size=idl.cb, type_byte=idl.type, description=_describe(idl)
        )
        offset += idl.cb
        idl = idl.next_item()
