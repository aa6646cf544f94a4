"""Naming scheme for es2php

Implements the PHP naming conventions used by the emitter:
- Variables: `$name`
- Instance self reference: `$this`
- Constructors: methods named `constructor` become `__construct`
- Namespaces: module names with their first letter capitalised
"""

from es2php.core.casing import capitalise_first_letter


class NamingScheme:
    """Handles PHP identifier generation for JavaScript constructs"""

    VARIABLE_PREFIX = "$"
    SELF_REFERENCE = "$this"
    JS_CONSTRUCTOR = "constructor"
    NAMESPACE_SEPARATOR = "\\"
    # Value binding of a for-in loop; the loop only exposes keys
    DISCARDED_VALUE = "$___"

    @staticmethod
    def variable_name(name: str) -> str:
        """Generate a PHP variable reference

        Args:
            name: JavaScript identifier

        Returns:
            PHP variable (e.g. "$total")
        """
        return f"{NamingScheme.VARIABLE_PREFIX}{name}"

    @staticmethod
    def method_name(name: str, constructor_name: str) -> str:
        """Map a JavaScript method name to its PHP name

        Args:
            name: Method name in the class body
            constructor_name: PHP constructor name

        Returns:
            constructor_name for `constructor`, the name unchanged otherwise
        """
        if name == NamingScheme.JS_CONSTRUCTOR:
            return constructor_name
        return name

    @staticmethod
    def namespace_name(module_name: str) -> str:
        """Generate the PHP namespace for a module name

        Args:
            module_name: Module name (e.g. "geometry")

        Returns:
            Namespace (e.g. "Geometry")
        """
        return capitalise_first_letter(module_name)

    @staticmethod
    def qualified_import(module_name: str, name: str) -> str:
        """Fully qualified name of an imported binding

        Args:
            module_name: Module the binding is imported from
            name: Imported binding name

        Returns:
            Qualified name (e.g. "\\Geometry\\Point")
        """
        sep = NamingScheme.NAMESPACE_SEPARATOR
        return f"{sep}{NamingScheme.namespace_name(module_name)}{sep}{name}"
