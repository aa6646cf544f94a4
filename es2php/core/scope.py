"""Scope tracking for es2php

The emitter reports every function-like node it enters to a ScopeRecorder
before emitting the function body. ScopeManager is the recorder used by the
translator: it builds one lexical scope per function, nested by source
containment, with the function's parameters defined as symbols.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from es2php.core.nodes import Node


class ScopeRecorder(ABC):
    """Receives function-entry notifications from the emitter"""

    @abstractmethod
    def on_function_entered(self, node: Node) -> None:
        """Record that a function-like node is about to be emitted

        Args:
            node: Function node (FunctionDeclaration shape)
        """


class NullScopeRecorder(ScopeRecorder):
    """Recorder that ignores every notification"""

    def on_function_entered(self, node: Node) -> None:
        pass


class Symbol:
    """Represents a parameter or function name"""

    def __init__(
        self,
        name: str,
        scope_id: int,
        is_global: bool = False,
        is_function: bool = False,
        param_index: int = -1,
    ) -> None:
        """Initialize symbol

        Args:
            name: Symbol name
            scope_id: Scope where symbol is defined
            is_global: True if defined in the program scope
            is_function: True if this names a function
            param_index: Parameter index (if function parameter)
        """
        self.name = name
        self.scope_id = scope_id
        self.is_global = is_global
        self.is_function = is_function
        self.param_index = param_index

    def __repr__(self) -> str:
        return (
            f"Symbol(name={self.name!r}, scope_id={self.scope_id}, "
            f"is_global={self.is_global}, is_function={self.is_function})"
        )


class Scope:
    """Represents a lexical scope"""

    def __init__(self, parent: Optional["Scope"] = None, name: str = "",
                 node: Optional[Node] = None) -> None:
        """Initialize scope

        Args:
            parent: Parent scope (None for the program scope)
            name: Name of the function owning the scope
            node: Function node owning the scope
        """
        self.parent = parent
        self.name = name
        self.node = node
        self.symbols: Dict[str, Symbol] = {}

    def define(self, name: str, **kwargs) -> Symbol:
        """Define a symbol in this scope

        Args:
            name: Symbol name
            **kwargs: Additional symbol properties (is_global, is_function, param_index)

        Returns:
            Created symbol
        """
        if name in self.symbols:
            raise NameError(f"Symbol '{name}' already defined in scope")
        symbol = Symbol(name, id(self), **kwargs)
        self.symbols[name] = symbol
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Look up a symbol, checking parent scopes

        Args:
            name: Symbol name

        Returns:
            Symbol if found, None otherwise
        """
        if name in self.symbols:
            return self.symbols[name]
        if self.parent:
            return self.parent.lookup(name)
        return None

    def has(self, name: str) -> bool:
        return name in self.symbols

    def get_depth(self) -> int:
        """Get nesting depth of this scope

        Returns:
            Depth (0 for the program scope)
        """
        depth = 0
        current = self
        while current.parent:
            depth += 1
            current = current.parent
        return depth

    def is_global(self) -> bool:
        return self.parent is None

    def contains(self, node: Node) -> bool:
        """Check whether a node lies inside this scope's function body"""
        if self.node is None:
            return True
        return _contains(self.node.body, node)


def _contains(root: Optional[Node], target: Node) -> bool:
    if root is None:
        return False
    if root is target:
        return True
    return any(_contains(child, target) for _, child in root.children())


def _param_name(param: Node) -> Optional[str]:
    if param.kind == "Identifier":
        return param.name
    if param.kind == "AssignmentPattern" and isinstance(param.left, Node):
        return _param_name(param.left)
    return None


class ScopeManager(ScopeRecorder):
    """Builds the function scopes of one translation run"""

    def __init__(self) -> None:
        """Initialize scope manager with the program scope"""
        self._global_scope = Scope(name="<program>")
        self._scope_stack: List[Scope] = [self._global_scope]
        self._function_scopes: List[Scope] = []

    @property
    def current_scope(self) -> Scope:
        return self._scope_stack[-1]

    @property
    def global_scope(self) -> Scope:
        return self._global_scope

    @property
    def function_scopes(self) -> List[Scope]:
        """Scopes created so far, in the order functions were entered"""
        return list(self._function_scopes)

    def push_scope(self, name: str = "", node: Optional[Node] = None) -> Scope:
        """Push a new scope

        Returns:
            New scope
        """
        new_scope = Scope(self.current_scope, name, node)
        self._scope_stack.append(new_scope)
        return new_scope

    def pop_scope(self) -> Scope:
        """Pop current scope

        Raises:
            RuntimeError: If trying to pop the program scope
        """
        if len(self._scope_stack) == 1:
            raise RuntimeError("Cannot pop global scope")
        return self._scope_stack.pop()

    def on_function_entered(self, node: Node) -> None:
        """Create the scope of a function

        Functions are entered depth-first, so every scope on the stack that
        does not contain the new function has already been left.
        """
        while len(self._scope_stack) > 1 and not self.current_scope.contains(node.body):
            self.pop_scope()

        name = node.id.name if isinstance(node.id, Node) and node.id.name else ""
        if name and not self.current_scope.has(name):
            self.current_scope.define(
                name, is_global=self.current_scope.is_global(), is_function=True
            )

        scope = self.push_scope(name, node)
        for index, param in enumerate(node.params or []):
            param_name = _param_name(param)
            if param_name and not scope.has(param_name):
                scope.define(param_name, param_index=index)
        self._function_scopes.append(scope)

    def find_function(self, name: str) -> Optional[Scope]:
        """Return the first recorded scope of a function with this name"""
        for scope in self._function_scopes:
            if scope.name == name:
                return scope
        return None
