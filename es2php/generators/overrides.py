"""Method-call and property overrides for es2php

Some JavaScript built-ins have no PHP method or property counterpart and are
rewritten into PHP function calls instead, e.g. `name.toLowerCase()` into
`strtolower($name)` or `items.length` into `count($items)`.

A method override receives the whole CallExpression and returns the complete
replacement text; default call emission is skipped. A property override
receives the MemberExpression of a plain property read.

The receiver and arguments are emitted through the normal path, so a call
on the result of another overridden call is rewritten at both levels.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, TYPE_CHECKING

from es2php.core.nodes import Node

if TYPE_CHECKING:
    from es2php.generators.emitter import Emitter

OverrideFn = Callable[[Node, "Emitter"], str]


@dataclass
class Override:
    """A rewrite registered for one property name

    Attributes:
        name: Accessed property name (e.g. "toLowerCase")
        rewrite: Function producing the replacement text
    """
    name: str
    rewrite: OverrideFn


def _args(call: Node, emitter: "Emitter") -> List[str]:
    return emitter.emit_arguments(call)


def _receiver(call: Node, emitter: "Emitter") -> str:
    return emitter.emit_object(call.require("callee"))


def receiver_first(php_name: str) -> OverrideFn:
    """Rewrite `r.m(a, b)` into `php_name(r, a, b)`"""
    def rewrite(call: Node, emitter: "Emitter") -> str:
        parts = [_receiver(call, emitter)] + _args(call, emitter)
        return f"{php_name}({', '.join(parts)})"
    return rewrite


def receiver_last(php_name: str) -> OverrideFn:
    """Rewrite `r.m(a, b)` into `php_name(a, b, r)`"""
    def rewrite(call: Node, emitter: "Emitter") -> str:
        parts = _args(call, emitter) + [_receiver(call, emitter)]
        return f"{php_name}({', '.join(parts)})"
    return rewrite


def property_function(php_name: str) -> OverrideFn:
    """Rewrite the property read `r.p` into `php_name(r)`"""
    def rewrite(member: Node, emitter: "Emitter") -> str:
        return f"{php_name}({emitter.emit_object(member)})"
    return rewrite


def _char_at(call: Node, emitter: "Emitter") -> str:
    args = _args(call, emitter)
    index = args[0] if args else "0"
    return f"substr({_receiver(call, emitter)}, {index}, 1)"


class OverrideTable:
    """Mapping from property name to override

    Method overrides apply to calls `r.name(...)`; property overrides apply
    to plain reads `r.name`. The two namespaces are independent.
    """

    def __init__(self, overrides: Optional[List[Override]] = None,
                 properties: Optional[List[Override]] = None) -> None:
        self._overrides: Dict[str, Override] = {}
        self._properties: Dict[str, Override] = {}
        for override in overrides or []:
            self.add(override)
        for override in properties or []:
            self.add_property(override)

    def add(self, override: Override) -> None:
        self._overrides[override.name] = override

    def add_property(self, override: Override) -> None:
        self._properties[override.name] = override

    def register(self, name: str, rewrite: OverrideFn) -> None:
        """Register a rewrite for a method name

        Args:
            name: Accessed property name
            rewrite: Function (call node, emitter) -> replacement text
        """
        self.add(Override(name, rewrite))

    def register_property(self, name: str, rewrite: OverrideFn) -> None:
        """Register a rewrite for a property read

        Args:
            name: Accessed property name
            rewrite: Function (member node, emitter) -> replacement text
        """
        self.add_property(Override(name, rewrite))

    def get(self, name: Optional[str]) -> Optional[Override]:
        if not name:
            return None
        return self._overrides.get(name)

    def get_property(self, name: Optional[str]) -> Optional[Override]:
        if not name:
            return None
        return self._properties.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._overrides

    def __iter__(self) -> Iterator[str]:
        return iter(self._overrides)

    def __len__(self) -> int:
        return len(self._overrides)

    def copy(self) -> "OverrideTable":
        return OverrideTable(list(self._overrides.values()), list(self._properties.values()))


def default_overrides() -> OverrideTable:
    """Build the table of built-in JavaScript rewrites"""
    return OverrideTable(
        [
            Override("toLowerCase", receiver_first("strtolower")),
            Override("toUpperCase", receiver_first("strtoupper")),
            Override("trim", receiver_first("trim")),
            Override("push", receiver_first("array_push")),
            Override("pop", receiver_first("array_pop")),
            Override("shift", receiver_first("array_shift")),
            Override("join", receiver_last("implode")),
            Override("split", receiver_last("explode")),
            Override("indexOf", receiver_first("strpos")),
            Override("replace", receiver_last("str_replace")),
            Override("substr", receiver_first("substr")),
            Override("charAt", _char_at),
        ],
        properties=[
            Override("length", property_function("count")),
        ],
    )
