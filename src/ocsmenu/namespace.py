"""Resolve identifier lists into display paths through per-namespace rules.

Resolution starts with the Desktop strategy on the whole chain.  A root
GUID record with a registered :class:`Namespace` hands the rest of the
chain to that namespace, which appends segments and either stops or
delegates to the generic filesystem walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ._constants import (
    LIBRARY_NAMES,
    PATH_SEPARATOR,
    TAG_NETWORK_SHARE,
    TAG_USERS_SUBFOLDER,
    USER_FOLDER_NAMES,
)
from ._types import Extend
from .clsid import (
    CLSID,
    CLSID_CONTROL_PANEL,
    CLSID_CONTROL_PANEL2,
    CLSID_MY_COMPUTER,
    CLSID_NETWORK_EXPLORER_FOLDER,
    CLSID_SHELL_DESKTOP,
    CLSID_USERS_FILES,
    CLSID_USERS_LIBRARIES,
)
from .idl import ItemIDList, get_class_name

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolvedPath:
    """Path accumulator.

    ``str()`` joins the appended texts with a backslash unless the text so
    far already ends with one, so ``C:\\`` followed by ``Windows`` renders
    as ``C:\\Windows``.
    """

    parts: list[str] = field(default_factory=list)

    def append(self, text: str) -> None:
        self.parts.append(text)

    @property
    def segments(self) -> list[str]:
        """Non-empty segments with trailing separators trimmed."""
        return [s for p in self.parts if (s := p.rstrip(PATH_SEPARATOR))]

    def __str__(self) -> str:
        path = ""
        for part in self.parts:
            if path and not path.endswith(PATH_SEPARATOR):
                path += PATH_SEPARATOR
            path += part
        return path


@dataclass(frozen=True, slots=True)
class Namespace:
    """A path-building strategy bound to a namespace root CLSID."""

    name: str
    root: CLSID
    extend: Extend


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------
def _generic_filesystem(path: ResolvedPath, idl: ItemIDList | None) -> None:
    while idl is not None and not idl.is_desktop():
        path.append(idl.get_text())
        idl = idl.next_item()


def _desktop(path: ResolvedPath, idl: ItemIDList) -> None:
    if idl.is_desktop():
        path.append(get_class_name(CLSID_SHELL_DESKTOP))
        return

    nxt = idl.next_item()
    clsid = idl.get_clsid()

    if nxt is None or nxt.is_desktop():
        if clsid is not None:
            path.append(get_class_name(clsid))
        else:
            path.append(idl.get_text())
        return

    if clsid is not None:
        namespace = NAMESPACES.get(clsid)
        if namespace is not None:
            log.debug("Resolving under %s namespace", namespace.name)
            namespace.extend(path, nxt)
            return
        path.append(get_class_name(clsid))

    _generic_filesystem(path, nxt)


def _my_computer(path: ResolvedPath, idl: ItemIDList) -> None:
    if idl.is_desktop():
        path.append(get_class_name(CLSID_MY_COMPUTER))
        return

    path.append(idl.get_text())
    _generic_filesystem(path, idl.next_item())


def _control_panel(path: ResolvedPath, idl: ItemIDList) -> None:
    path.append(get_class_name(CLSID_CONTROL_PANEL))
    if idl.is_desktop():
        return

    clsid = idl.get_clsid()
    path.append(get_class_name(clsid) if clsid is not None else idl.get_text())
    _generic_filesystem(path, idl.next_item())


def _control_panel2(path: ResolvedPath, idl: ItemIDList) -> None:
    # The first record names the applet and is not rendered
    path.append(get_class_name(CLSID_CONTROL_PANEL2))
    if idl.is_desktop():
        return

    nxt = idl.next_item()
    if nxt is not None:
        _generic_filesystem(path, nxt.next_item())


def _users_folder(root: CLSID, names: dict[CLSID, str]) -> Extend:
    def extend(path: ResolvedPath, idl: ItemIDList) -> None:
        path.append(get_class_name(root))
        if idl.is_desktop():
            return

        if idl.type == TAG_USERS_SUBFOLDER:
            clsid = idl.ext_guid()
            path.append(names.get(clsid, f"::{clsid}"))
        else:
            path.append(idl.get_text())
        _generic_filesystem(path, idl.next_item())

    return extend


def _network_explorer_folder(path: ResolvedPath, idl: ItemIDList) -> None:
    nxt = idl.next_item()
    if idl.is_desktop() or nxt is None or nxt.is_desktop():
        path.append(get_class_name(CLSID_NETWORK_EXPLORER_FOLDER))
        return

    if nxt.type == TAG_NETWORK_SHARE:
        path.append(nxt.network_name())
    else:
        path.append(nxt.get_text())
    _generic_filesystem(path, nxt.next_item())


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
DESKTOP = Namespace("Desktop", CLSID_SHELL_DESKTOP, _desktop)

NAMESPACES: dict[CLSID, Namespace] = {
    ns.root: ns
    for ns in (
        Namespace("ControlPanel", CLSID_CONTROL_PANEL, _control_panel),
        Namespace("MyComputer", CLSID_MY_COMPUTER, _my_computer),
        DESKTOP,
        Namespace(
            "NetworkExplorerFolder",
            CLSID_NETWORK_EXPLORER_FOLDER,
            _network_explorer_folder,
        ),
        Namespace(
            "UsersLibraries",
            CLSID_USERS_LIBRARIES,
            _users_folder(CLSID_USERS_LIBRARIES, LIBRARY_NAMES),
        ),
        Namespace(
            "UsersFiles",
            CLSID_USERS_FILES,
            _users_folder(CLSID_USERS_FILES, USER_FOLDER_NAMES),
        ),
        Namespace("ControlPanel2", CLSID_CONTROL_PANEL2, _control_panel2),
    )
}


def resolve_idlist(idl: ItemIDList) -> ResolvedPath:
    path = ResolvedPath()
    DESKTOP.extend(path, idl)
    return path


def resolve_item_id(item_id: bytes | memoryview) -> ResolvedPath:
    """Decode *item_id* and resolve it, raising ChainError if malformed."""
    return resolve_idlist(ItemIDList(item_id))


def get_path_from_item_id(item_id: bytes | memoryview) -> str:
    return str(resolve_item_id(item_id))
