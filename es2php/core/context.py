"""Translation context for es2php

Holds the options and collaborators of one translation run:
- Output preamble and target naming options
- Scope recorder notified on every function entry
- Diagnostic logger for untranslated nodes
- Optional override table replacing the default one
"""

from typing import Optional, TYPE_CHECKING

from es2php.core.diagnostics import DiagnosticLogger
from es2php.core.scope import ScopeManager, ScopeRecorder

if TYPE_CHECKING:
    from es2php.generators.overrides import OverrideTable


class TranslationContext:
    """Context for a translation session"""

    DEFAULT_OPEN_TAG = "<?php\n"
    DEFAULT_CONSTRUCTOR_NAME = "__construct"

    def __init__(
        self,
        scope_recorder: Optional[ScopeRecorder] = None,
        diagnostics: Optional[DiagnosticLogger] = None,
        overrides: Optional["OverrideTable"] = None,
        open_tag: str = DEFAULT_OPEN_TAG,
        constructor_name: str = DEFAULT_CONSTRUCTOR_NAME,
    ) -> None:
        """Initialize translation context

        Args:
            scope_recorder: Recorder for function scopes (ScopeManager by default)
            diagnostics: Logger for untranslated nodes
            overrides: Method-call override table (built-in table by default)
            open_tag: Text prepended to every generated file
            constructor_name: Name given to methods called 'constructor'
        """
        self.scope_recorder = scope_recorder if scope_recorder is not None else ScopeManager()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLogger()
        self.overrides = overrides
        self.open_tag = open_tag
        self.constructor_name = constructor_name

    def get_scope_recorder(self) -> ScopeRecorder:
        return self.scope_recorder

    def get_diagnostics(self) -> DiagnosticLogger:
        return self.diagnostics

    def has_diagnostics(self) -> bool:
        """Check if any node was left untranslated

        Returns:
            True if at least one diagnostic was recorded
        """
        return self.diagnostics.has_diagnostics()
