"""Member-access classification for es2php

Chooses the PHP connective for `object.property`:

- both sides static-style      -> namespace separator  `\\`
- exactly one side static-style -> static access        `::`
- neither side static-style    -> instance access      `->`

Static-style is the casing heuristic from es2php.core.casing. Nodes without
a name of their own (calls, `this`, nested member accesses) are never
static-style.
"""

from enum import Enum
from typing import Tuple

from es2php.core.casing import is_static_node
from es2php.core.nodes import Node


class Connective(Enum):
    """PHP member-access separators"""
    NAMESPACE = "\\"
    STATIC = "::"
    INSTANCE = "->"


def classify(object_static: bool, property_static: bool) -> Connective:
    """Pick the connective for a pair of static flags"""
    if object_static and property_static:
        return Connective.NAMESPACE
    # An uppercase property on a lowercase object is static access too, so
    # `obj.Method()` renders `$obj::Method()`
    if object_static or property_static:
        return Connective.STATIC
    return Connective.INSTANCE


def classify_nodes(obj: Node, prop: Node) -> Connective:
    return classify(is_static_node(obj), is_static_node(prop))


def collapsed_pair(member: Node) -> Tuple[Node, Node]:
    """Pair of nodes to classify for a member access

    When the object is itself a non-computed member access, one level is
    collapsed so `A.B.c` is classified from `A` and `B`.

    Args:
        member: MemberExpression node

    Returns:
        (object, property) pair
    """
    obj = member.require("object")
    if (isinstance(obj, Node) and obj.kind == "MemberExpression" and not obj.computed
            and obj.has("object") and obj.has("property")):
        return obj.object, obj.property
    return obj, member.require("property")


def chain_connective(member: Node) -> Connective:
    """Connective used inside the object chain of a member access

    For `A.B.c` this is the separator between `A` and `B`; when the object
    is not a member access it is the node's own connective.
    """
    obj, prop = collapsed_pair(member)
    return classify_nodes(obj, prop)
