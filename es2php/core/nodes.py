"""ESTree node model for es2php

Wraps parsed JavaScript trees (ESTree dicts or Esprima node objects) in a
single immutable Node type. Optional children read as None, required
children are read through require() so a missing one is reported instead
of crashing deep inside the emitter.
"""

from typing import Any, Dict, Iterator, Optional, Tuple


# Fields carrying parser metadata that emission never looks at
METADATA_FIELDS = {"type", "loc", "range", "tokens", "comments", "errors"}


class TranslationError(Exception):
    """Base class for errors raised while translating a tree"""


class MalformedNodeError(TranslationError):
    """A node is missing a child its kind requires"""

    def __init__(self, node: "Node", field: str) -> None:
        """Initialize error

        Args:
            node: Node with the missing child
            field: Name of the missing field
        """
        super().__init__(f"{node.kind} node is missing required field '{field}'")
        self.node = node
        self.field = field


class Node:
    """Immutable ESTree node

    Child fields are exposed as attributes. Reading a field the node does
    not have returns None, matching the optional fields of ESTree.
    """

    __slots__ = ("kind", "_fields", "loc")

    def __init__(self, kind: str, fields: Optional[Dict[str, Any]] = None,
                 loc: Optional[Dict[str, Any]] = None) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "_fields", dict(fields or {}))
        object.__setattr__(self, "loc", loc)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._fields.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.kind} nodes are immutable; use replace()")

    def __repr__(self) -> str:
        return f"Node({self.kind!r})"

    def get(self, name: str, default: Any = None) -> Any:
        """Read a field by name

        Needed for ESTree fields shadowed by Node attributes, such as the
        'kind' of a VariableDeclaration or MethodDefinition.
        """
        value = self._fields.get(name)
        return default if value is None else value

    @property
    def fields(self) -> Dict[str, Any]:
        """Copy of the child fields"""
        return dict(self._fields)

    @property
    def line(self) -> Optional[int]:
        """Source line of the node, when location data was kept"""
        if self.loc and isinstance(self.loc.get("start"), dict):
            return self.loc["start"].get("line")
        return None

    def has(self, name: str) -> bool:
        return self._fields.get(name) is not None

    def require(self, name: str) -> Any:
        """Read a field that must be present

        Raises:
            MalformedNodeError: If the field is absent or None
        """
        value = self._fields.get(name)
        if value is None:
            raise MalformedNodeError(self, name)
        return value

    def replace(self, kind: Optional[str] = None, **fields: Any) -> "Node":
        """Return a copy with a new kind and/or some fields overridden"""
        merged = dict(self._fields)
        merged.update(fields)
        return Node(kind or self.kind, merged, self.loc)

    def children(self) -> Iterator[Tuple[str, "Node"]]:
        """Yield (field, child) pairs for every child node, in field order"""
        for name, value in self._fields.items():
            if isinstance(value, Node):
                yield name, value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Node):
                        yield name, item


def _as_mapping(value: Any) -> Optional[Dict[str, Any]]:
    if isinstance(value, dict):
        return value
    # Esprima node objects keep their fields in __dict__
    if hasattr(value, "__dict__") and getattr(value, "type", None) is not None:
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    return None


def from_estree(value: Any) -> Any:
    """Convert an ESTree tree into Node values

    Accepts plain dicts (ESTree JSON), Esprima node objects and values that
    are already Nodes. Lists are converted element-wise and scalars are
    returned unchanged.

    Args:
        value: Tree, subtree or scalar

    Returns:
        Converted value
    """
    if isinstance(value, Node):
        return value
    if isinstance(value, (list, tuple)):
        return [from_estree(item) for item in value]

    mapping = _as_mapping(value)
    if mapping is None:
        return value
    if "type" not in mapping:
        # Plain data such as a regex descriptor {pattern, flags}
        return {key: from_estree(item) for key, item in mapping.items()}

    fields = {
        key: from_estree(item)
        for key, item in mapping.items()
        if key not in METADATA_FIELDS
    }
    loc = mapping.get("loc")
    if loc is not None and not isinstance(loc, dict):
        loc = _loc_to_dict(loc)
    return Node(str(mapping["type"]), fields, loc)


def _loc_to_dict(loc: Any) -> Optional[Dict[str, Any]]:
    start = getattr(loc, "start", None)
    if start is None:
        return None
    return {"start": {"line": getattr(start, "line", None),
                      "column": getattr(start, "column", None)}}
