"""CLSID value type: a 128-bit class identifier in Windows GUID layout."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass

from ._errors import FormatError

_CLSID_RE = re.compile(
    r"\{([0-9a-f]{8})-([0-9a-f]{4})-([0-9a-f]{4})-([0-9a-f]{4})-([0-9a-f]{12})\}",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class CLSID:
    """Immutable CLSID compared field by field.

    Windows GUIDs are stored in mixed-endian layout:
    uint32-LE, uint16-LE, uint16-LE, 8 raw bytes.
    """

    data1: int
    data2: int
    data3: int
    data4: bytes

    @classmethod
    def parse(cls, text: str) -> CLSID:
        """Parse ``{XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX}`` (any case)."""
        m = _CLSID_RE.fullmatch(text)
        if m is None:
            raise FormatError(f"Invalid CLSID format: {text!r}")
        d1, d2, d3, d4, d5 = m.groups()
        return cls(int(d1, 16), int(d2, 16), int(d3, 16), bytes.fromhex(d4 + d5))

    @classmethod
    def from_bytes(cls, data: bytes | memoryview) -> CLSID:
        """Decode exactly 16 bytes in GUID layout."""
        if len(data) != 16:
            raise FormatError(f"CLSID needs 16 bytes, got {len(data)}")
        d1, d2, d3 = struct.unpack_from("<IHH", data, 0)
        return cls(d1, d2, d3, bytes(data[8:16]))

    def to_bytes(self) -> bytes:
        return struct.pack("<IHH", self.data1, self.data2, self.data3) + self.data4

    def __str__(self) -> str:
        d4 = self.data4[0:2].hex().upper()
        d5 = self.data4[2:8].hex().upper()
        return f"{{{self.data1:08X}-{self.data2:04X}-{self.data3:04X}-{d4}-{d5}}}"


# ---------------------------------------------------------------------------
# Well-known CLSIDs
# ---------------------------------------------------------------------------
# ShlGuid.h
CLSID_MY_COMPUTER = CLSID.parse("{20D04FE0-3AEA-1069-A2D8-08002B30309D}")
CLSID_RECYCLE_BIN = CLSID.parse("{645FF040-5081-101B-9F08-00AA002F954E}")
CLSID_CONTROL_PANEL = CLSID.parse("{21EC2020-3AEA-1069-A2DD-08002B30309D}")
CLSID_PRINTERS = CLSID.parse("{2227A280-3AEA-1069-A2DE-08002B30309D}")

# ShObjIdl_core.h
CLSID_SHELL_DESKTOP = CLSID.parse("{00021400-0000-0000-C000-000000000046}")
CLSID_NETWORK_EXPLORER_FOLDER = CLSID.parse("{F02C1A0D-BE21-4350-88B0-7367FC96EF3C}")

# Not in the Windows SDK; observed in saved launcher files.
CLSID_USERS_LIBRARIES = CLSID.parse("{031E4825-7B94-4DC3-B131-E946B44C8DD5}")
CLSID_USERS_FILES = CLSID.parse("{59031A47-3F72-44A7-89C5-5595FE6B30EE}")
CLSID_CONTROL_PANEL2 = CLSID.parse("{26EE0668-A00A-44D7-9371-BEB064C98683}")
CLSID_HOME_GROUP = CLSID.parse("{B4FB3F98-C1EA-428D-A78A-D1F5659CBA93}")
