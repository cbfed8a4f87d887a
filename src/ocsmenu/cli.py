"""CLI entry point: ``ocsmenu show`` / ``ocsmenu path``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ._constants import SHOW_CMD
from ._errors import ChainError, OcsMenuError
from .idl import iter_records
from .namespace import get_path_from_item_id
from .ocs import (
    FolderItem,
    LaunchItem,
    MenuItem,
    OcsDocument,
    SeparatorItem,
    SpecialItem,
    SubmenuItem,
    UnknownItem,
    parse_ocs,
)

_LABELS = {
    "target": "Target",
    "parameter": "Parameter",
    "window": "Window",
    "verb": "Verb",
    "show_cmd": "ShowCmd",
    "item_id": "ItemID",
    "action": "Action",
    "type_code": "Type",
}

_KINDS = {
    LaunchItem: "Launch",
    FolderItem: "Folder",
    SeparatorItem: "Separator",
    SubmenuItem: "Submenu",
    SpecialItem: "Special",
    UnknownItem: "Unknown",
}


def _to_hex(data: bytes) -> str:
    return " ".join(f"{b:02x}" for b in data)


def _record_lines(item_id: bytes) -> list[str]:
    try:
        return [
            f"@0x{r.offset:04X} size={r.size} tag=0x{r.type_byte:02X}  {r.description}"
            for r in iter_records(item_id)
        ]
    except ChainError as e:
        return [f"Error: {e}"]


def _item_info(item: MenuItem, debug: bool) -> dict[str, object]:
    """Caption and details for one item, in display order."""
    info: dict[str, object] = {"kind": _KINDS[type(item)]}

    if isinstance(item, SubmenuItem):
        info["caption"] = item.caption
        info["count"] = len(item.items)
    elif isinstance(item, (LaunchItem, FolderItem)):
        info["caption"] = item.caption
        info["target"] = item.display_name()
        if isinstance(item, LaunchItem):
            info["parameter"] = item.parameter if item.parameter is not None else "(none)"
            info["window"] = item.show_cmd_string() or "Unknown"
            info["verb"] = item.verb_string()
            if debug:
                name = SHOW_CMD.get(item.show_cmd, "?")
                info["show_cmd"] = f"{item.show_cmd} ({name})"
        if debug:
            info["item_id"] = _to_hex(item.item_id)
            info["records"] = _record_lines(item.item_id)
    elif isinstance(item, SpecialItem):
        info["caption"] = item.caption
        info["action"] = item.description()
    elif isinstance(item, UnknownItem):
        info["caption"] = "Unsupported item"
        info["type_code"] = item.type_code

    return info


def _serialize_items(items: list[MenuItem], debug: bool) -> list[dict]:
    out = []
    for item in items:
        info = _item_info(item, debug)
        if isinstance(item, SubmenuItem):
            info["items"] = _serialize_items(item.items, debug)
        out.append(info)
    return out


def _serialize_document(doc: OcsDocument, debug: bool) -> dict:
    return {
        "launchers": [
            {"title": launcher.title, "items": _serialize_items(launcher.items, debug)}
            for launcher in doc.launchers
        ]
    }


def format_document(doc: OcsDocument, debug: bool = False) -> str:
    """Return a human-readable tree of every launcher in *doc*."""
    lines: list[str] = []

    for n, launcher in enumerate(doc.launchers, 1):
        lines.append("=" * 70)
        lines.append(f"LAUNCHER {n}: {launcher.title}")
        lines.append("=" * 70)
        for depth, item in launcher.walk():
            pad = "  " * (depth + 1)
            info = _item_info(item, debug)
            kind = info.pop("kind")
            if isinstance(item, SeparatorItem):
                lines.append(f"{pad}----")
                continue
            caption = info.pop("caption")
            if isinstance(item, SubmenuItem):
                lines.append(f"{pad}[{kind}] {caption} ({info['count']} items)")
                continue
            lines.append(f"{pad}[{kind}] {caption}")
            for key, value in info.items():
                if key == "records":
                    for record in value:
                        lines.append(f"{pad}      {record}")
                elif value is not None:
                    lines.append(f"{pad}    {_LABELS[key] + ':':<11}{value}")
        lines.append("")

    return "\n".join(lines)


def _cmd_show(args: argparse.Namespace) -> int:
    try:
        doc = parse_ocs(Path(args.file))
    except OcsMenuError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.launcher is not None:
        if not 1 <= args.launcher <= len(doc.launchers):
            print(
                f"error: launcher {args.launcher} out of range "
                f"(document has {len(doc.launchers)})",
                file=sys.stderr,
            )
            return 1
        doc = OcsDocument([doc.launchers[args.launcher - 1]])

    if args.json:
        print(json.dumps(_serialize_document(doc, args.debug), indent=2, ensure_ascii=False))
    else:
        print(format_document(doc, args.debug))
    return 0


def _cmd_path(args: argparse.Namespace) -> int:
    status = 0
    for text in args.item_ids:
        try:
            item_id = bytes.fromhex(text)
        except ValueError:
            print(f"error: not a hex string: {text!r}", file=sys.stderr)
            status = 1
            continue
        try:
            print(get_path_from_item_id(item_id))
        except ChainError as e:
            print(f"Error: {e}")
        if args.debug:
            for record in _record_lines(item_id):
                print(f"  {record}")
    return status


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="ocsmenu",
        description="Show OCS launcher menus and decode their shell item ID lists",
        suggest_on_error=True,
        color=True,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log decoder diagnostics"
    )
    sub = parser.add_subparsers(dest="command")

    # -- show --
    sp = sub.add_parser("show", help="Display the menu tree of an .ocs file")
    sp.add_argument("file", help="OCS file to read")
    sp.add_argument(
        "-l", "--launcher", type=int, default=None, help="Only show launcher N (1-based)"
    )
    sp.add_argument("--json", action="store_true", help="Output as JSON")
    sp.add_argument(
        "--debug", action="store_true", help="Include raw ItemID bytes and records"
    )

    # -- path --
    pp = sub.add_parser("path", help="Resolve hex-encoded ItemID lists")
    pp.add_argument("item_ids", nargs="+", metavar="HEX", help="ItemID bytes as hex")
    pp.add_argument("--debug", action="store_true", help="List decoded records")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "show":
        sys.exit(_cmd_show(args))
    elif args.command == "path":
        sys.exit(_cmd_path(args))


if __name__ == "__main__":
    main()
