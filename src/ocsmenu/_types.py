"""Shared type aliases for ocsmenu modules."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from .idl import ItemIDList
    from .namespace import ResolvedPath

OcsValue: TypeAlias = "int | str | bytes | OcsSection"
OcsSection: TypeAlias = "dict[str, OcsValue]"
Extend: TypeAlias = "Callable[[ResolvedPath, ItemIDList], None]"
