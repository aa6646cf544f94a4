"""es2php.generators package

Code generators for translating JavaScript syntax trees to PHP output.
"""

from .emitter import Emitter, EmitContext, Fragment
from .member_access import Connective
from .overrides import Override, OverrideTable, default_overrides
from .php_emitter import PhpEmitter

__all__ = [
    "Emitter",
    "EmitContext",
    "Fragment",
    "Connective",
    "Override",
    "OverrideTable",
    "default_overrides",
    "PhpEmitter",
]
