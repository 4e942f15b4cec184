"""Specifier classification and colon translation.

Import specifiers come in three syntactic kinds:
- BARE: library-style names ("lodash", "@scope/pkg", "node/fs")
- RELATIVE: "./util", "../lib/util"
- ABSOLUTE: "/opt/lib/util"
"""

from __future__ import annotations

from enum import Enum


class SpecifierKind(str, Enum):
    """Syntactic kind of an import specifier."""

    BARE = "bare"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


def classify_specifier(specifier: str) -> SpecifierKind:
    """Classify a specifier by its first character.

    Anything not starting with "." or "/" is bare, including the empty string.
    """
    if specifier.startswith("/"):
        return SpecifierKind.ABSOLUTE
    if specifier.startswith("."):
        return SpecifierKind.RELATIVE
    return SpecifierKind.BARE


def is_bare(specifier: str) -> bool:
    return classify_specifier(specifier) is SpecifierKind.BARE


def translate_colons(specifier: str) -> str | None:
    """Replace every ':' with '/' so "node:fs" resolves as "node/fs".

    Args:
        specifier: Raw import specifier

    Returns:
        The rewritten specifier, or None when it contains no ':'
    """
    if ":" not in specifier:
        return None
    return specifier.replace(":", "/")
