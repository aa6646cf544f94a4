"""Tests for the diagnostic logger"""

from es2php.core.diagnostics import DiagnosticCategory, DiagnosticLogger
from es2php.core.nodes import Node


class TestDiagnosticLogger:
    """Test suite for DiagnosticLogger"""

    def test_starts_empty(self):
        """Test a new logger has no diagnostics"""
        logger = DiagnosticLogger()
        assert logger.has_diagnostics() is False
        assert logger.get_summary()["total_diagnostics"] == 0

    def test_log_unsupported(self):
        """Test recording an unsupported node kind"""
        logger = DiagnosticLogger()
        node = Node("WithStatement", loc={"start": {"line": 7, "column": 0}})
        logger.log_unsupported("WithStatement", node)

        assert logger.has_diagnostics() is True
        diagnostic = logger.diagnostics[0]
        assert diagnostic.category == DiagnosticCategory.UNSUPPORTED
        assert diagnostic.kind == "WithStatement"
        assert diagnostic.node is node
        assert diagnostic.line == 7
        assert diagnostic.format() == "  line 7: 'WithStatement' not implemented."

    def test_log_malformed(self):
        """Test recording a node missing a child"""
        logger = DiagnosticLogger()
        logger.log_malformed("CallExpression", "callee")

        diagnostic = logger.diagnostics[0]
        assert diagnostic.category == DiagnosticCategory.MALFORMED
        assert "callee" in diagnostic.detail
        assert diagnostic.line is None

    def test_kinds_filtered_by_category(self):
        """Test listing reported kinds"""
        logger = DiagnosticLogger()
        logger.log_unsupported("WithStatement")
        logger.log_malformed("CallExpression", "callee")
        logger.log_unsupported("ConditionalExpression")

        assert logger.kinds() == ["WithStatement", "CallExpression", "ConditionalExpression"]
        assert logger.kinds(DiagnosticCategory.UNSUPPORTED) == ["WithStatement", "ConditionalExpression"]

    def test_summary(self):
        """Test summary counts and formatting"""
        logger = DiagnosticLogger()
        logger.log_unsupported("WithStatement")
        logger.log_unsupported("WithStatement")

        summary = logger.get_summary()
        assert summary["total_diagnostics"] == 2
        assert summary["diagnostics_by_category"][DiagnosticCategory.UNSUPPORTED] == 2
        assert summary["diagnostics_by_kind"]["WithStatement"] == 2

        text = logger.print_summary()
        assert "Total diagnostics: 2" in text
        assert "unsupported: 2" in text
        assert "'WithStatement' not implemented." in text

    def test_clear(self):
        """Test clearing the log"""
        logger = DiagnosticLogger()
        logger.log_unsupported("WithStatement")
        logger.clear()
        assert logger.has_diagnostics() is False
