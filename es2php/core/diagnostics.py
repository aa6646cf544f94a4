"""Diagnostic logger for es2php

Records nodes the emitter could not translate. Translation never stops on a
diagnostic: the offending node produces an empty fragment and the record is
kept here so the caller can report it.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass
from enum import Enum


class DiagnosticCategory(Enum):
    """Why a node was left out of the output"""
    UNSUPPORTED = "unsupported"
    MALFORMED = "malformed"


@dataclass
class Diagnostic:
    """Record of a single node left untranslated"""
    category: DiagnosticCategory
    kind: str
    detail: str
    line: Optional[int] = None
    node: Any = None

    def format(self) -> str:
        """Format the record for display

        Returns:
            One-line description, prefixed with the source line if known
        """
        where = f"line {self.line}: " if self.line is not None else ""
        return f"  {where}{self.detail}"


class DiagnosticLogger:
    """Collects diagnostics for one translation run"""

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def log_unsupported(self, kind: str, node: Any = None,
                        feature: Optional[str] = None) -> None:
        """Log a node the emitter does not handle

        Args:
            kind: Node kind
            node: The node itself
            feature: Form of an otherwise supported kind that is not handled
                (e.g. "computed key")
        """
        detail = f"'{kind}' not implemented."
        if feature:
            detail = f"'{kind}' with {feature} not implemented."
        self.diagnostics.append(Diagnostic(
            category=DiagnosticCategory.UNSUPPORTED,
            kind=kind,
            detail=detail,
            line=getattr(node, "line", None),
            node=node,
        ))

    def log_malformed(self, kind: str, field: str, node: Any = None) -> None:
        """Log a node missing a required child

        Args:
            kind: Node kind
            field: Missing field name
            node: The node itself
        """
        self.diagnostics.append(Diagnostic(
            category=DiagnosticCategory.MALFORMED,
            kind=kind,
            detail=f"'{kind}' is missing required field '{field}'.",
            line=getattr(node, "line", None),
            node=node,
        ))

    def has_diagnostics(self) -> bool:
        return bool(self.diagnostics)

    def kinds(self, category: Optional[DiagnosticCategory] = None) -> List[str]:
        """Node kinds reported so far, in report order"""
        return [d.kind for d in self.diagnostics
                if category is None or d.category == category]

    def get_summary(self) -> Dict:
        """Get summary statistics

        Returns:
            Dictionary with diagnostic counts
        """
        by_category: Dict[DiagnosticCategory, int] = {}
        by_kind: Dict[str, int] = {}
        for diagnostic in self.diagnostics:
            by_category[diagnostic.category] = by_category.get(diagnostic.category, 0) + 1
            by_kind[diagnostic.kind] = by_kind.get(diagnostic.kind, 0) + 1

        return {
            "total_diagnostics": len(self.diagnostics),
            "diagnostics_by_category": by_category,
            "diagnostics_by_kind": by_kind,
        }

    def print_summary(self) -> str:
        """Generate formatted summary string

        Returns:
            Formatted summary as string
        """
        summary = self.get_summary()
        lines = []

        lines.append("=== Translation Diagnostics ===")
        lines.append(f"Total diagnostics: {summary['total_diagnostics']}")

        if summary['diagnostics_by_category']:
            lines.append("")
            lines.append("By category:")
            for category, count in summary['diagnostics_by_category'].items():
                lines.append(f"  {category.value}: {count}")

        if self.diagnostics:
            lines.append("")
            lines.append("Details:")
            for diagnostic in self.diagnostics:
                lines.append(diagnostic.format())

        return "\n".join(lines)

    def clear(self) -> None:
        self.diagnostics.clear()
