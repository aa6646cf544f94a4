"""Core data model and collaborators for es2php

Modules:
- nodes: Immutable ESTree node model and conversion
- casing: Static-style casing heuristic
- scope: Scope recorder interface and ScopeManager
- diagnostics: Recording logger for untranslated nodes
- context: Options of one translation run
"""
