"""Lookup tables shared by the decoder, the resolver and the OCS model."""

from __future__ import annotations

from .clsid import (
    CLSID,
    CLSID_CONTROL_PANEL,
    CLSID_CONTROL_PANEL2,
    CLSID_HOME_GROUP,
    CLSID_MY_COMPUTER,
    CLSID_NETWORK_EXPLORER_FOLDER,
    CLSID_PRINTERS,
    CLSID_RECYCLE_BIN,
    CLSID_SHELL_DESKTOP,
    CLSID_USERS_FILES,
    CLSID_USERS_LIBRARIES,
)

# ---------------------------------------------------------------------------
# SHITEMID type tags (byte 2 of a record)
# ---------------------------------------------------------------------------
TAG_ROOT_GUID = 0x1F
TAG_EXT_GUID = 0x2E
TAG_EXTENDED_GUID = 0x71
TAG_NETWORK_SHARE = 0xC3
TAG_USERS_SUBFOLDER = 0x00

GUID_TAGS = frozenset({TAG_ROOT_GUID, TAG_EXT_GUID, TAG_EXTENDED_GUID})
DRIVE_TAGS = frozenset({0x23, 0x25, 0x29, 0x2F})

GUID_OFFSET = 4
EXTENDED_GUID_OFFSET = 14
DRIVE_NAME_OFFSET = 3
DRIVE_NAME_SIZE = 20
NETWORK_NAME_OFFSET = 5

# File name block: the trailing offset must leave room for the record
# header (2 + 1 + 12) in front and the name block header (2 + 22) behind.
NAME_BLOCK_MIN_OFFSET = 2 + 1 + 12
NAME_BLOCK_TAIL = 2 + 22
NAME_BLOCK_NAME_OFFSET_FIELD = 16

PATH_SEPARATOR = "\\"

# ---------------------------------------------------------------------------
# CLSID display names
# ---------------------------------------------------------------------------
CLASS_NAMES: dict[CLSID, str] = {
    CLSID_MY_COMPUTER: "This PC",
    CLSID_SHELL_DESKTOP: "Desktop",
    CLSID_RECYCLE_BIN: "Recycle Bin",
    CLSID_CONTROL_PANEL: "All Control Panel Items",
    CLSID_NETWORK_EXPLORER_FOLDER: "Network",
    CLSID_HOME_GROUP: "Homegroup",
    CLSID.parse("{A8CDFF1C-4878-43BE-B5FD-F8091C1C60D0}"): "Documents",
    CLSID.parse("{3ADD1653-EB32-4CB0-BBD7-DFA0ABB5ACCA}"): "Pictures",
    CLSID.parse("{1CF1260C-4DD0-4EBB-811F-33C572699FDE}"): "Music",
    CLSID.parse("{A0953C92-50DC-43BF-BE83-3742FED03C9C}"): "Videos",
    CLSID.parse("{D20EA4E1-3957-11D2-A40B-0C5020524153}"): "Administrative Tools",
    CLSID_PRINTERS: "Printers",
    # Names below are inferred from captured files
    CLSID_USERS_LIBRARIES: "Libraries",
    CLSID_USERS_FILES: "User Profile",
    CLSID_CONTROL_PANEL2: "Control Panel",
    CLSID.parse("{088E3905-0323-4B02-9826-5D99428E115F}"): "Downloads",
}

# Sub-identifiers found in the record following a Libraries root
LIBRARY_NAMES: dict[CLSID, str] = {
    CLSID.parse("{7B0DB17D-9CD2-4A93-9733-46CC89022E7C}"): "Documents",
    CLSID.parse("{2112AB0A-C86A-4FFE-A368-0DE96E47012E}"): "Music",
    CLSID.parse("{A990AE9F-A03B-4E80-94BC-9912D7504104}"): "Pictures",
    CLSID.parse("{491E922F-5643-4AF4-A7EB-4E7A138D8174}"): "Videos",
}

# Known folders found in the record following a User Profile root
USER_FOLDER_NAMES: dict[CLSID, str] = {
    CLSID.parse("{1777F761-68AD-4D8A-87BD-30B759FA33DD}"): "Favorites",
    CLSID.parse("{B4BFCC3A-DB2C-424C-B029-7FE99A87C641}"): "Desktop",
    CLSID.parse("{FDD39AD0-238F-46AF-ADB4-6C85480369C7}"): "Documents",
    CLSID.parse("{374DE290-123F-4565-9164-39C4925E467B}"): "Downloads",
    CLSID.parse("{4BD8D571-6D19-48D3-BE97-422220080E43}"): "Music",
    CLSID.parse("{33E28130-4E1E-4676-835A-98395C3BC3BB}"): "Pictures",
    CLSID.parse("{18989B1D-99B5-455B-841C-AB7C74E4DDFC}"): "Videos",
}

# ---------------------------------------------------------------------------
# Menu item type codes (OCS ``Type=dw:N``)
# ---------------------------------------------------------------------------
ITEM_LAUNCH = 0
ITEM_FOLDER = 1
ITEM_SEPARATOR = 2
ITEM_SUBMENU = 3
ITEM_SPECIAL = 4

# ---------------------------------------------------------------------------
# ShowWindow commands
# ---------------------------------------------------------------------------
SHOW_CMD = {
    0: "SW_HIDE",
    1: "SW_SHOWNORMAL",
    2: "SW_SHOWMINIMIZED",
    3: "SW_SHOWMAXIMIZED",
    4: "SW_SHOWNOACTIVATE",
    5: "SW_SHOW",
    6: "SW_MINIMIZE",
    7: "SW_SHOWMINNOACTIVE",
    8: "SW_SHOWNA",
    9: "SW_RESTORE",
    10: "SW_SHOWDEFAULT",
    11: "SW_FORCEMINIMIZE",
}

SHOW_CMD_LABELS = {
    0: "Hidden",
    1: "Normal window",
    2: "Minimized",
    3: "Maximized",
    4: "Normal window (inactive)",
    5: "Current size",
    6: "Minimized",
    7: "Minimized (inactive)",
    8: "Current size (inactive)",
    9: "Restored",
    10: "Default",
    11: "Minimized (forced)",
}

VERB_LABELS = {
    "open": "Open",
    "runas": "Run as administrator",
    "edit": "Edit",
    "explore": "Explore",
    "find": "Search",
    "print": "Print",
    "properties": "Properties",
}
DEFAULT_VERB_LABEL = "Open (default)"

# ---------------------------------------------------------------------------
# Special menu actions (OCS ``ID=dw:N``)
# ---------------------------------------------------------------------------
SPECIAL_ACTIONS = {
    133: "Shut down dialog",
    138: "Search",
    142: "Disconnect network drive",
    143: "Map network drive",
    144: "Run",
    146: "Safely remove hardware",
    161: "New mail",
    168: "Run several items at once",
    173: "Open website",
    175: "Send hotkey",
    176: "Folder options",
    181: "Shut down",
    182: "Sign out",
    183: "Restart",
    185: "Sleep",
    186: "Hibernate",
    270: "Lock computer",
}
UNKNOWN_SPECIAL_ACTION = "Unknown special item"
