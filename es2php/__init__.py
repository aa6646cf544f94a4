"""es2php - JavaScript to PHP translator

Translates ECMAScript syntax trees (as produced by Esprima) into PHP source.
"""

from es2php.core.context import TranslationContext
from es2php.generators.php_emitter import PhpEmitter, parse_source, transpile, transpile_ast

__version__ = "0.1.0"

__all__ = [
    "TranslationContext",
    "PhpEmitter",
    "parse_source",
    "transpile",
    "transpile_ast",
]
