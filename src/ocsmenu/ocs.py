"""Parse OCS launcher configuration text into a menu tree.

The text is line oriented::

    [Launchers]
    LauncherCount=dw:1
    [Launchers\\1]
    Title=ws:77,101,110,117
    [Launchers\\1\\Menu]
    Items=dw:1
    [Launchers\\1\\Menu\\0]
    Type=dw:0
    ItemID=bn:20,0,31,80,...

``parse_ocs_text`` builds the nested section tree; ``parse_ocs`` interprets
it into :class:`OcsDocument`.
"""

from __future__ import annotations

import logging
import re
import struct
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ._constants import (
    DEFAULT_VERB_LABEL,
    ITEM_FOLDER,
    ITEM_LAUNCH,
    ITEM_SEPARATOR,
    ITEM_SPECIAL,
    ITEM_SUBMENU,
    SHOW_CMD_LABELS,
    SPECIAL_ACTIONS,
    UNKNOWN_SPECIAL_ACTION,
    VERB_LABELS,
)
from ._errors import ChainError, StructureError
from ._types import OcsSection, OcsValue
from .namespace import ResolvedPath, resolve_item_id

log = logging.getLogger(__name__)

_SECTION_RE = re.compile(r"\[([^\]]+)\]")
_VALUE_RE = re.compile(r"([^=]+)=([a-z]{2}):(.*)")
_INT_RE = re.compile(r"\s*([+-]?\d+)")


# ---------------------------------------------------------------------------
# Section tree
# ---------------------------------------------------------------------------
def _parse_int10(text: str) -> int | None:
    """Parse a leading base-10 integer, ignoring trailing garbage."""
    m = _INT_RE.match(text)
    return int(m.group(1)) if m else None


def _parse_int_list(text: str) -> list[int] | None:
    if text == "":
        return []
    values = [_parse_int10(v) for v in text.split(",")]
    if None in values:
        return None
    return values


def _decode_value(tag: str, text: str) -> OcsValue | None:
    match tag:
        case "dw":
            return _parse_int10(text)
        case "ws":
            units = _parse_int_list(text)
            if units is None:
                return None
            raw = struct.pack(f"<{len(units)}H", *(u & 0xFFFF for u in units))
            return raw.decode("utf-16-le", errors="surrogatepass")
        case "bn":
            values = _parse_int_list(text)
            if values is None:
                return None
            return bytes(v & 0xFF for v in values)
        case _:
            raise ValueError(f"Unknown OCS type tag {tag!r}")


def _open_section(root: OcsSection, path: str) -> OcsSection:
    *parents, last = path.split("\\")
    parent = root
    for key in parents:
        child = parent.get(key)
        if not isinstance(child, dict):
            child = parent[key] = {}
        parent = child
    section: OcsSection = {}
    parent[last] = section
    return section


def parse_ocs_text(text: str) -> OcsSection:
    """Build the section tree.  Malformed lines are logged and skipped."""
    root: OcsSection = {}
    section: OcsSection | None = None

    for lineno, line in enumerate(re.split(r"\r?\n", text), 1):
        if line == "" or line.startswith("#"):
            continue

        if m := _SECTION_RE.fullmatch(line):
            section = _open_section(root, m.group(1))
        elif m := _VALUE_RE.fullmatch(line):
            key, tag, raw = m.groups()
            if section is None:
                log.warning("Line %d: value %r before any section", lineno, key)
                continue
            if tag not in ("dw", "ws", "bn"):
                log.warning("Line %d: unknown type %r for %r", lineno, tag, key)
                continue
            value = _decode_value(tag, raw)
            if value is None:
                log.warning("Line %d: malformed %s value for %r", lineno, tag, key)
                continue
            section[key] = value
        else:
            log.warning("Line %d: unrecognized line %r", lineno, line)

    return root


def _get_int(section: OcsSection, key: str) -> int | None:
    match section.get(key):
        case int() as value:
            return value
    return None


def _get_str(section: OcsSection, key: str) -> str | None:
    match section.get(key):
        case str() as value:
            return value
    return None


def _get_bytes(section: OcsSection, key: str) -> bytes | None:
    match section.get(key):
        case bytes() as value:
            return value
    return None


def _get_section(section: OcsSection, key: str) -> OcsSection | None:
    match section.get(key):
        case dict() as value:
            return value
    return None


# ---------------------------------------------------------------------------
# Menu items
# ---------------------------------------------------------------------------
class ResolveState(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of decoding an item's identifier list."""

    state: ResolveState = ResolveState.PENDING
    path: ResolvedPath | None = None
    error: ChainError | None = None


_PENDING = Resolution()


class _Resolvable:
    """Lazy, memoized ItemID resolution for Launch and Folder items."""

    __slots__ = ()

    def resolve(self) -> Resolution:
        if self._resolution.state is ResolveState.PENDING:
            try:
                path = resolve_item_id(self.item_id)
            except ChainError as e:
                log.debug("Cannot resolve ItemID of %r: %s", self.caption, e)
                self._resolution = Resolution(ResolveState.FAILED, error=e)
            else:
                self._resolution = Resolution(ResolveState.RESOLVED, path=path)
        return self._resolution

    def display_name(self) -> str:
        """Resolved path, or ``Error: ...`` if the ItemID is malformed."""
        res = self.resolve()
        if res.state is ResolveState.FAILED:
            return f"Error: {res.error}"
        return str(res.path)


@dataclass(slots=True)
class LaunchItem(_Resolvable):
    item_id: bytes
    caption: str
    show_cmd: int
    parameter: str | None = None
    verb: str | None = None
    _resolution: Resolution = field(default=_PENDING, init=False, repr=False, compare=False)

    def show_cmd_string(self) -> str | None:
        return SHOW_CMD_LABELS.get(self.show_cmd)

    def verb_string(self) -> str:
        if not self.verb:
            return DEFAULT_VERB_LABEL
        return VERB_LABELS.get(self.verb.lower(), self.verb)


@dataclass(slots=True)
class FolderItem(_Resolvable):
    item_id: bytes
    caption: str
    _resolution: Resolution = field(default=_PENDING, init=False, repr=False, compare=False)


@dataclass(slots=True)
class SeparatorItem:
    pass


@dataclass(slots=True)
class SubmenuItem:
    caption: str
    items: list[MenuItem] = field(default_factory=list)


@dataclass(slots=True)
class SpecialItem:
    id: int
    caption: str

    def description(self) -> str:
        return SPECIAL_ACTIONS.get(self.id, UNKNOWN_SPECIAL_ACTION)


@dataclass(slots=True)
class UnknownItem:
    """Placeholder for an unrecognized ``Type`` code."""

    type_code: int | None = None


MenuItem = LaunchItem | FolderItem | SeparatorItem | SubmenuItem | SpecialItem | UnknownItem


def _walk_items(items: list[MenuItem], depth: int) -> Iterator[tuple[int, MenuItem]]:
    for item in items:
        yield depth, item
        if isinstance(item, SubmenuItem):
            yield from _walk_items(item.items, depth + 1)


@dataclass(slots=True)
class Launcher:
    title: str
    items: list[MenuItem] = field(default_factory=list)

    def walk(self) -> Iterator[tuple[int, MenuItem]]:
        """Yield ``(depth, item)`` depth-first, submenu children included."""
        return _walk_items(self.items, 0)


@dataclass(slots=True)
class OcsDocument:
    launchers: list[Launcher] = field(default_factory=list)

    def walk(self) -> Iterator[tuple[Launcher, int, MenuItem]]:
        for launcher in self.launchers:
            for depth, item in launcher.walk():
                yield launcher, depth, item


# ---------------------------------------------------------------------------
# Interpretation
# ---------------------------------------------------------------------------
def _numbered_children(
    section: OcsSection, count: int, start: int, what: str
) -> list[OcsSection]:
    if count < 0:
        raise StructureError(f"{what} count {count} is negative")
    children = []
    for i in range(start, start + count):
        child = _get_section(section, str(i))
        if child is None:
            raise StructureError(f"{what} {i} is missing (declared {count})")
        children.append(child)
    if _get_section(section, str(start + count)) is not None:
        raise StructureError(f"{what} {start + count} exceeds declared count {count}")
    return children


def _parse_item(section: OcsSection) -> MenuItem:
    type_code = _get_int(section, "Type")

    if type_code == ITEM_LAUNCH:
        item_id = _get_bytes(section, "ItemID")
        caption = _get_str(section, "Caption")
        show_cmd = _get_int(section, "ShowCmd")
        if item_id is None or caption is None or show_cmd is None:
            raise StructureError("Launch item needs ItemID, Caption and ShowCmd")
        optional = {}
        for key in ("Parameter", "Verb"):
            if key in section:
                value = _get_str(section, key)
                if value is None:
                    raise StructureError(f"Launch item {key} must be a string")
                optional[key.lower()] = value
        return LaunchItem(item_id, caption, show_cmd, **optional)

    if type_code == ITEM_FOLDER:
        item_id = _get_bytes(section, "ItemID")
        caption = _get_str(section, "Caption")
        if item_id is None or caption is None:
            raise StructureError("Folder item needs ItemID and Caption")
        return FolderItem(item_id, caption)

    if type_code == ITEM_SEPARATOR:
        return SeparatorItem()

    if type_code == ITEM_SUBMENU:
        caption = _get_str(section, "Caption")
        count = _get_int(section, "Items")
        if caption is None or count is None:
            raise StructureError("Submenu item needs Caption and Items")
        children = _numbered_children(section, count, 0, "Submenu item")
        return SubmenuItem(caption, [_parse_item(c) for c in children])

    if type_code == ITEM_SPECIAL:
        action_id = _get_int(section, "ID")
        caption = _get_str(section, "Caption")
        if action_id is None or caption is None:
            raise StructureError("Special item needs ID and Caption")
        return SpecialItem(action_id, caption)

    return UnknownItem(type_code)


def _parse_launcher(section: OcsSection) -> Launcher:
    title = _get_str(section, "Title")
    menu = _get_section(section, "Menu")
    if title is None or menu is None:
        raise StructureError("Launcher needs Title and Menu")

    count = _get_int(menu, "Items")
    if count is None:
        raise StructureError("Menu needs Items")
    children = _numbered_children(menu, count, 0, "Menu item")
    return Launcher(title, [_parse_item(c) for c in children])


def interpret_ocs(root: OcsSection) -> OcsDocument:
    """Turn a section tree into launchers.  Any missing field is fatal."""
    launchers = _get_section(root, "Launchers")
    if launchers is None:
        raise StructureError("Launchers section is missing")

    count = _get_int(launchers, "LauncherCount")
    if count is None:
        raise StructureError("LauncherCount is missing")

    children = _numbered_children(launchers, count, 1, "Launcher")
    return OcsDocument([_parse_launcher(c) for c in children])


def parse_ocs(source: str | bytes | Path) -> OcsDocument:
    """Parse OCS text into an :class:`OcsDocument`.

    Args:
        source: The document text, its UTF-8 bytes, or a file Path.
    """
    if isinstance(source, Path):
        source = source.read_bytes()
    if isinstance(source, bytes):
        source = source.decode("utf-8-sig")
    return interpret_ocs(parse_ocs_text(source))
