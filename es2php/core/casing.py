"""Casing heuristic for es2php

JavaScript carries no static type information, so member access is
classified from identifier casing alone: a name starting with an uppercase
letter is taken to be a class or namespace ("static-style").
"""

import re
from typing import Any, Optional

_STATIC_NAME = re.compile(r"^[A-Z]")


def is_static_name(text: Optional[str]) -> bool:
    """Check whether a name is static-style

    Args:
        text: Identifier text (None is treated as empty)

    Returns:
        True if the text starts with an uppercase ASCII letter
    """
    return bool(text) and _STATIC_NAME.match(text) is not None


def node_name(node: Any) -> str:
    """Rendered name of an identifier-like node, or "" if it has none"""
    if node is None:
        return ""
    name = getattr(node, "name", None)
    if name is None:
        name = getattr(node, "value", None)
    return name if isinstance(name, str) else ""


def is_static_node(node: Any) -> bool:
    """Apply the casing heuristic to an identifier-like node"""
    return is_static_name(node_name(node))


def capitalise_first_letter(text: str) -> str:
    """Uppercase the first character of a string

    Args:
        text: Input string

    Returns:
        String with its first character uppercased ("" stays "")
    """
    if not text:
        return text
    return text[0].upper() + text[1:]
