"""PHP emitter for es2php

Translates ESTree nodes to PHP source fragments. One visit_<Kind> method per
supported node kind; each returns a Fragment carrying the text and whether
the text is a complete statement owing a terminator. emit() appends the
terminator once, at the boundary of the node that owes it.

Emission context (parent node, callee and member-property markers, casing
classification) is threaded through as an immutable EmitContext; nodes are
never modified. Constructs that reuse another kind's rule (new-expressions,
function expressions, method bodies) are normalized into fresh nodes.
"""

import re
from dataclasses import dataclass, replace
from typing import List, Optional

from es2php.core.casing import is_static_node, node_name
from es2php.core.context import TranslationContext
from es2php.core.nodes import MalformedNodeError, Node
from es2php.generators.member_access import (
    Connective, chain_connective, classify_nodes, collapsed_pair
)
from es2php.generators.naming import NamingScheme
from es2php.generators.overrides import Override, default_overrides

TERMINATOR = ";\n"
_TERMINATED = re.compile(r";\n?\Z")

# Property and method kinds with no PHP rendering
_ACCESSOR_KINDS = ("get", "set")


@dataclass(frozen=True)
class EmitContext:
    """Where a node sits in its parent's shape

    Attributes:
        parent: Node containing the node being emitted
        is_callee: Node is the callee of a call
        is_member_property: Node is the non-computed property of a member access
        is_static: Node was classified static-style by its member access
        is_last: Node is the last element of a statement sequence
        connective: Separator chosen for this member access by its parent chain
    """
    parent: Optional[Node] = None
    is_callee: bool = False
    is_member_property: bool = False
    is_static: bool = False
    is_last: bool = False
    connective: Optional[Connective] = None


@dataclass(frozen=True)
class Fragment:
    """Emitted text and whether it owes a statement terminator"""
    text: str
    terminate: bool = False


def as_call(node: Node) -> Node:
    """Call-shaped copy of a NewExpression"""
    return node.replace(kind="CallExpression")


def as_function_declaration(node: Node, name: str) -> Node:
    """FunctionDeclaration-shaped copy of a function expression"""
    return node.replace(kind="FunctionDeclaration", id=Node("Identifier", {"name": name}))


class Emitter:
    """Generates PHP code for ESTree nodes"""

    def __init__(self, context: TranslationContext) -> None:
        """Initialize emitter

        Args:
            context: Translation context
        """
        self.context = context
        self.overrides = context.overrides if context.overrides is not None else default_overrides()
        self.naming = NamingScheme()

    @classmethod
    def supported_kinds(cls) -> List[str]:
        """Node kinds with an emission rule"""
        return sorted(name[len("visit_"):] for name in dir(cls) if name.startswith("visit_"))

    def emit(self, node: Node, ctx: Optional[EmitContext] = None) -> str:
        """Generate PHP code for a node

        Unsupported kinds and malformed nodes are reported to the
        diagnostic logger and produce an empty string.

        Args:
            node: AST node
            ctx: Position of the node in its parent

        Returns:
            PHP code string
        """
        ctx = ctx or EmitContext()
        method = getattr(self, f"visit_{node.kind}", None)
        if method is None:
            self.context.diagnostics.log_unsupported(node.kind, node)
            return ""

        try:
            fragment = method(node, ctx)
        except MalformedNodeError as e:
            self.context.diagnostics.log_malformed(e.node.kind, e.field, e.node)
            return ""

        text = fragment.text
        if fragment.terminate and not _TERMINATED.search(text):
            text += TERMINATOR
        return text

    def _child(self, node: Node, parent: Node, **flags) -> str:
        return self.emit(node, EmitContext(parent=parent, **flags))

    def _inline(self, node: Node, parent: Node) -> str:
        """Emit a node for use inside a larger statement, without terminator"""
        return _TERMINATED.sub("", self._child(node, parent))

    def _sequence(self, nodes: List[Node], parent: Node) -> str:
        parts = []
        last = len(nodes) - 1
        for index, child in enumerate(nodes):
            if child is None:
                continue
            parts.append(self._child(child, parent, is_last=index == last))
        return "".join(parts)

    def _unsupported(self, node: Node, feature: str) -> Fragment:
        """Report a form of a supported kind that has no PHP rendering"""
        self.context.diagnostics.log_unsupported(node.kind, node, feature)
        return Fragment("")

    # Statement sequences

    def visit_Program(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a statement list (program, block or class body)"""
        return Fragment(self._sequence(node.require("body"), node))

    visit_BlockStatement = visit_Program
    visit_ClassBody = visit_Program

    # Bindings and leaves

    def visit_VariableDeclaration(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a declaration, one statement per declarator"""
        declarations = node.require("declarations")
        return Fragment("".join(self._child(d, node) for d in declarations))

    def visit_VariableDeclarator(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a declarator

        Args:
            node: VariableDeclarator node
            ctx: Emission context

        Returns:
            `$name`, or a terminated `$name = init` when initialized
        """
        text = self._child(node.require("id"), node)
        if node.init is None:
            return Fragment(text)
        return Fragment(f"{text} = {self._child(node.init, node)}", terminate=True)

    def visit_Identifier(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an identifier

        Args:
            node: Identifier node
            ctx: Emission context

        Returns:
            Bare name for callees, member properties and static-style names,
            a `$` variable otherwise
        """
        name = node_name(node)
        if not name:
            raise MalformedNodeError(node, "name")
        if ctx.is_static or ctx.is_callee or ctx.is_member_property:
            return Fragment(name)
        return Fragment(self.naming.variable_name(name))

    def visit_Punctuator(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a punctuator token"""
        return Fragment(str(node.require("value")))

    def visit_Literal(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a literal, keeping its source text"""
        if node.raw is not None:
            return Fragment(node.raw)
        return Fragment(_literal_text(node.value))

    def visit_ThisExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for this"""
        return Fragment(self.naming.SELF_REFERENCE)

    # Operators

    def visit_BinaryExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a binary, logical or assignment operation"""
        left = self._child(node.require("left"), node)
        right = self._child(node.require("right"), node)
        return Fragment(f"{left} {node.require('operator')} {right}")

    visit_LogicalExpression = visit_BinaryExpression
    visit_AssignmentExpression = visit_BinaryExpression

    def visit_UpdateExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for ++ and --"""
        return Fragment(self._child(node.require("argument"), node) + node.require("operator"))

    def visit_ExpressionStatement(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an expression statement"""
        return Fragment(self._child(node.require("expression"), node), terminate=True)

    # Calls and member access

    def _override_for(self, callee: Node) -> Optional[Override]:
        if callee.kind != "MemberExpression" or callee.computed:
            return None
        prop = callee.property
        if not isinstance(prop, Node) or prop.kind != "Identifier":
            return None
        return self.overrides.get(prop.name)

    def _property_override_for(self, node: Node, ctx: EmitContext) -> Optional[Override]:
        if node.computed or ctx.is_callee:
            return None
        parent = ctx.parent
        if parent is not None and (
                (parent.kind == "AssignmentExpression" and parent.left is node)
                or parent.kind == "UpdateExpression"):
            return None
        prop = node.property
        if not isinstance(prop, Node) or prop.kind != "Identifier":
            return None
        return self.overrides.get_property(prop.name)

    def emit_object(self, member: Node) -> str:
        """Emit the object of a member access as a plain value"""
        return self._child(member.require("object"), member)

    def emit_arguments(self, call: Node) -> List[str]:
        return [self._child(arg, call) for arg in call.arguments or []]

    def visit_CallExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a call

        Method names in the override table are replaced by their rewrite.

        Args:
            node: CallExpression node
            ctx: Emission context

        Returns:
            Call fragment, owing a terminator only as a statement of its own
        """
        callee = node.require("callee")
        override = self._override_for(callee)
        if override is not None:
            return Fragment(override.rewrite(node, self))

        text = self._child(callee, node, is_callee=True)
        text += f"({', '.join(self.emit_arguments(node))})"
        # Only a call standing alone as a statement owes a terminator
        terminate = ctx.parent is not None and ctx.parent.kind == "ExpressionStatement"
        return Fragment(text, terminate=terminate)

    def visit_NewExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for new, through the call rule"""
        return Fragment("new " + self._child(as_call(node), node))

    def visit_MemberExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for member access

        Args:
            node: MemberExpression node
            ctx: Emission context, whose connective comes from an
                enclosing access of the same chain

        Returns:
            Index access, property rewrite, or `object<connective>property`
        """
        obj = node.require("object")
        prop = node.require("property")

        override = self._property_override_for(node, ctx)
        if override is not None:
            return Fragment(override.rewrite(node, self))

        object_ctx = EmitContext(parent=node, is_static=is_static_node(obj))
        if collapsed_pair(node)[0] is not obj:
            # `A.B.c`: the separator between A and B comes from this access
            object_ctx = replace(object_ctx, connective=chain_connective(node))
        object_text = self.emit(obj, object_ctx)

        if node.computed:
            return Fragment(f"{object_text}[{self._child(prop, node)}]")

        connective = ctx.connective or classify_nodes(obj, prop)
        prop_text = self._child(prop, node, is_member_property=True,
                                is_static=is_static_node(prop))
        return Fragment(f"{object_text}{connective.value}{prop_text}")

    # Functions and classes

    def _params(self, node: Node) -> List[str]:
        defaults = node.defaults or []
        params = []
        for index, param in enumerate(node.params or []):
            default = defaults[index] if index < len(defaults) else None
            if param.kind == "AssignmentPattern":
                param, default = param.require("left"), param.require("right")
            if default is not None:
                param = Node("AssignmentExpression",
                             {"operator": "=", "left": param, "right": default})
            params.append(self._child(param, node))
        return params

    def visit_FunctionDeclaration(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a function

        The scope recorder is told about the function after its parameters
        are rendered and before its body is.

        Args:
            node: FunctionDeclaration node
            ctx: Emission context

        Returns:
            `function name(params) {...}` fragment
        """
        name = node_name(node.id)
        params = self._params(node)
        body = node.require("body")

        self.context.scope_recorder.on_function_entered(node)

        text = f"function {name}({', '.join(params)}) {{\n"
        text += self._child(body, node)
        text += "}\n"
        return Fragment(text)

    def visit_FunctionExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a function expression, as a declaration"""
        function = as_function_declaration(node, node_name(node.id))
        return Fragment(self.emit(function, ctx))

    def visit_ClassDeclaration(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a class and its optional superclass"""
        text = f"class {node_name(node.require('id'))}"
        if node.superClass is not None:
            superclass = node.superClass
            if superclass.kind == "Identifier":
                text += f" extends {node_name(superclass)}"
            else:
                text += f" extends {self._child(superclass, node)}"
        text += "\n{\n" + self._child(node.require("body"), node) + "\n}\n"
        return Fragment(text)

    def visit_MethodDefinition(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a class method

        Args:
            node: MethodDefinition node
            ctx: Emission context

        Returns:
            Public (and possibly static) function; computed names and
            accessors are reported and left out
        """
        key = node.require("key")
        value = node.require("value")
        if node.computed:
            return self._unsupported(node, "computed key")
        if node.get("kind") in _ACCESSOR_KINDS:
            return self._unsupported(node, f"{node.get('kind')} accessor")
        name = self.naming.method_name(node_name(key), self.context.constructor_name)

        text = "public "
        if node.static:
            text += "static "
        text += self._child(as_function_declaration(value, name), node)
        if not ctx.is_last:
            text += "\n"
        return Fragment(text)

    # Literals

    def visit_ObjectExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an object literal, as an associative array"""
        properties = [self._child(p, node) for p in node.properties or []]
        return Fragment(f"array({', '.join(properties)})")

    def visit_ArrayExpression(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an array literal; holes become null"""
        elements = [
            "null" if element is None else self._child(element, node)
            for element in node.elements or []
        ]
        return Fragment(f"array({', '.join(elements)})")

    def visit_Property(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an object literal entry"""
        key = node.require("key")
        value = node.require("value")
        if node.computed:
            return self._unsupported(node, "computed key")
        if node.get("kind") in _ACCESSOR_KINDS:
            return self._unsupported(node, f"{node.get('kind')} accessor")

        if key.kind == "Literal":
            key_text = key.value if isinstance(key.value, str) else (key.raw or _literal_text(key.value))
        else:
            key_text = node_name(key)
        return Fragment(f"{_double_quoted(key_text)} => {self._child(value, node)}")

    # Control flow

    def visit_ReturnStatement(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for return"""
        text = "return"
        if node.argument is not None:
            text += " " + self._child(node.argument, node)
        return Fragment(text, terminate=True)

    def visit_IfStatement(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for if / else if / else"""
        text = f"if ({self._child(node.require('test'), node)}) {{\n"
        text += self._child(node.require("consequent"), node) + "}"

        alternate = node.alternate
        if alternate is not None:
            text += " else "
            if alternate.kind == "BlockStatement":
                text += "{" + self._child(alternate, node) + "}"
            else:
                text += self._child(alternate, node)
        return Fragment(_end_line(text))

    def _for_init(self, init: Node, parent: Node) -> str:
        if init.kind == "VariableDeclaration":
            return ", ".join(self._inline(d, init) for d in init.require("declarations"))
        return self._inline(init, parent)

    def visit_ForStatement(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a counting loop

        Args:
            node: ForStatement node
            ctx: Emission context

        Returns:
            `for (init; test; update) {...}` with empty clauses kept
        """
        init = self._for_init(node.init, node) if node.init is not None else ""
        test = self._child(node.test, node) if node.test is not None else ""
        update = self._child(node.update, node) if node.update is not None else ""
        body = self._child(node.require("body"), node)
        return Fragment(f"for ({init}; {test}; {update}) {{\n{body}}}\n")

    def visit_ForInStatement(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for for-in, as foreach over keys"""
        right = self._child(node.require("right"), node)
        left = self._inline(node.require("left"), node)
        body = self._child(node.require("body"), node)
        value = self.naming.DISCARDED_VALUE
        return Fragment(f"foreach ({right} as {left} => {value}) {{\n{body}}}\n")

    def visit_SwitchStatement(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for switch"""
        text = f"switch ({self._child(node.require('discriminant'), node)}) {{\n"
        for case in node.cases or []:
            text += self._child(case, node) + "\n"
        return Fragment(text + "}\n")

    def visit_SwitchCase(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a case or default clause"""
        if node.test is not None:
            text = f"case {self._child(node.test, node)}:\n"
        else:
            text = "default:\n"
        return Fragment(text + self._sequence(node.consequent or [], node))

    def visit_BreakStatement(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for break"""
        return Fragment("break", terminate=True)

    # Modules

    def visit_ModuleDeclaration(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for a module, as a namespace"""
        namespace = self.naming.namespace_name(node_name(node.require("id")))
        body = node.require("body")
        if isinstance(body, list):
            body_text = self._sequence(body, node)
        else:
            body_text = self._child(body, node)
        return Fragment(f"namespace {namespace};\n{body_text}")

    def visit_ExportDeclaration(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an export

        Args:
            node: Export node (any of the export kinds)
            ctx: Emission context

        Returns:
            The exported declaration; an exported expression is a statement
            of its own and owes a terminator
        """
        declaration = node.declaration
        if declaration is None:
            return Fragment(self._sequence(node.require("specifiers"), node))
        text = self._child(declaration, node)
        return Fragment(text, terminate=not declaration.kind.endswith("Declaration"))

    visit_ExportNamedDeclaration = visit_ExportDeclaration
    visit_ExportDefaultDeclaration = visit_ExportDeclaration

    def visit_ImportDeclaration(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an import, one use statement per specifier"""
        return Fragment("".join(self._child(s, node) for s in node.specifiers or []))

    def visit_ImportSpecifier(self, node: Node, ctx: EmitContext) -> Fragment:
        """Generate code for an imported binding

        Args:
            node: ImportSpecifier node
            ctx: Emission context; the parent is the import declaration

        Returns:
            `use \\Module\\Name[ as Alias];`
        """
        if ctx.parent is None:
            raise MalformedNodeError(node, "source")
        source = node_name(ctx.parent.require("source"))

        imported = node.id if node.id is not None else node.require("imported")
        name = node_name(imported)
        text = f"use {self.naming.qualified_import(source, name)}"

        # esprima-fb names the alias `name`, ESTree names the local binding `local`
        alias = node.get("name") if isinstance(node.get("name"), Node) else node.local
        if alias is not None and node_name(alias) != name:
            text += f" as {node_name(alias)}"
        return Fragment(text + TERMINATOR)


def _literal_text(value) -> str:
    """PHP text for a literal value given without its raw source"""
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _double_quoted(text: str) -> str:
    """PHP double-quoted string with no interpolation"""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def _end_line(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"
