"""Exception hierarchy shared by the ocsmenu modules."""

from __future__ import annotations


class OcsMenuError(Exception):
    """Base class for every error raised by ocsmenu."""


class FormatError(OcsMenuError):
    """Raised when CLSID text or bytes are malformed."""


class StructureError(OcsMenuError):
    """Raised when an OCS document lacks a required section or field.

    The whole document is rejected; there is no partial tree.
    """


class ChainError(OcsMenuError):
    """Raised when an identifier list is truncated or unterminated.

    Scoped to a single menu item: callers record it as that item's
    resolution failure.
    """
