"""ocsmenu -- read OCS launcher menus and decode their shell item ID lists."""

from __future__ import annotations

__version__ = "0.1.0"

from ._errors import ChainError, FormatError, OcsMenuError, StructureError
from .clsid import CLSID
from .idl import IdItem, ItemIDList, get_class_name, iter_records
from .namespace import (
    NAMESPACES,
    Namespace,
    ResolvedPath,
    get_path_from_item_id,
    resolve_item_id,
)
from .ocs import (
    FolderItem,
    LaunchItem,
    Launcher,
    MenuItem,
    OcsDocument,
    Resolution,
    ResolveState,
    SeparatorItem,
    SpecialItem,
    SubmenuItem,
    UnknownItem,
    parse_ocs,
    parse_ocs_text,
)

__all__ = [
    "parse_ocs",
    "parse_ocs_text",
    "get_path_from_item_id",
    "resolve_item_id",
    "get_class_name",
    "iter_records",
    "CLSID",
    "ItemIDList",
    "IdItem",
    "Namespace",
    "NAMESPACES",
    "ResolvedPath",
    "OcsDocument",
    "Launcher",
    "MenuItem",
    "LaunchItem",
    "FolderItem",
    "SeparatorItem",
    "SubmenuItem",
    "SpecialItem",
    "UnknownItem",
    "Resolution",
    "ResolveState",
    "OcsMenuError",
    "FormatError",
    "StructureError",
    "ChainError",
    "__version__",
]
