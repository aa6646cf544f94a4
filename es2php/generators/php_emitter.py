"""PHP file emitter for es2php

Turns a whole JavaScript program into a PHP file: parses source text with
Esprima when needed, converts the tree into es2php nodes, runs the emitter
on the Program root and prepends the PHP open tag.
"""

from typing import Any, Optional

from es2php.core.context import TranslationContext
from es2php.core.nodes import Node, TranslationError, from_estree
from es2php.generators.emitter import Emitter

try:
    import esprima
    from esprima.error_handler import Error as ParseError
except ImportError:
    raise ImportError("esprima is required. Install with: pip install esprima")


def parse_source(code: str, module: bool = False) -> Any:
    """Parse JavaScript source with Esprima

    Locations, ranges, tokens and comments are requested like any full
    parse; the emitter ignores all of them except the line numbers used in
    diagnostics.

    Args:
        code: JavaScript source text
        module: Parse as an ES module (needed for import/export)

    Returns:
        Esprima Program node
    """
    parse = esprima.parseModule if module else esprima.parseScript
    return parse(code, loc=True, range=True, tokens=True, comment=True)


class PhpEmitter:
    """Emits complete PHP files from ESTree programs"""

    def __init__(self, context: Optional[TranslationContext] = None) -> None:
        """Initialize PHP emitter

        Args:
            context: Translation context (a fresh one by default)
        """
        self.context = context if context is not None else TranslationContext()
        self.emitter = Emitter(self.context)

    def generate_file(self, tree: Any) -> str:
        """Generate a PHP file from a parsed program

        Args:
            tree: Program node as an ESTree dict, Esprima node or es2php Node

        Returns:
            PHP code, starting with the open tag

        Raises:
            TranslationError: If the tree is not a Program node
        """
        root = from_estree(tree)
        if not isinstance(root, Node):
            raise TranslationError(f"Expected an ESTree node, got {type(tree).__name__}")
        if root.kind != "Program":
            raise TranslationError(f"Expected a Program node, got {root.kind}")

        return self.context.open_tag + self.emitter.emit(root)


def transpile_ast(tree: Any, context: Optional[TranslationContext] = None) -> str:
    """Translate an already parsed program to PHP

    Args:
        tree: Program node
        context: Translation context

    Returns:
        PHP code
    """
    return PhpEmitter(context).generate_file(tree)


def transpile(code: str, module: bool = False,
              context: Optional[TranslationContext] = None) -> str:
    """Translate JavaScript source to PHP

    Args:
        code: JavaScript source text
        module: Parse as an ES module
        context: Translation context

    Returns:
        PHP code
    """
    return transpile_ast(parse_source(code, module), context)
