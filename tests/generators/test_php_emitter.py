"""Tests for whole-file PHP emission from JavaScript source"""

import pytest
from es2php.core.context import TranslationContext
from es2php.core.diagnostics import DiagnosticCategory
from es2php.core.nodes import Node, TranslationError
from es2php.core.scope import ScopeManager

try:
    from es2php.generators.php_emitter import PhpEmitter, parse_source, transpile, transpile_ast
except ImportError:
    pytest.skip("esprima not installed", allow_module_level=True)


class TestTranspile:
    """Test suite for source-to-source translation"""

    def test_declaration(self):
        """Test the open tag is followed by the program"""
        assert transpile("let x = 1 + 2;") == "<?php\n$x = 1 + 2;\n"

    def test_empty_program(self):
        """Test an empty program still gets the open tag"""
        assert transpile("") == "<?php\n"

    def test_custom_open_tag(self):
        """Test the preamble comes from the context"""
        context = TranslationContext(open_tag="<?php\n// generated\n")
        assert transpile("x = 1;", context=context) == "<?php\n// generated\n$x = 1;\n"

    def test_function(self):
        """Test a function declaration with a default parameter"""
        php = transpile("function greet(name, greeting = 'Hello') { return greeting; }")
        assert php == "<?php\nfunction greet($name, $greeting = 'Hello') {\nreturn $greeting;\n}\n"

    def test_static_call_on_instance(self):
        """Test an uppercase method name on a lowercase object"""
        assert transpile("obj.Method();") == "<?php\n$obj::Method();\n"

    def test_namespace_chain(self):
        """Test `A.B.c`"""
        assert transpile("A.B.c;") == "<?php\nA\\B->c;\n"

    def test_class_with_constructor(self):
        """Test constructor renaming and instance property access"""
        php = transpile("class Point { constructor(x) { this.x = x; } }")
        assert php == (
            "<?php\n"
            "class Point\n"
            "{\n"
            "public function __construct($x) {\n"
            "$this->x = $x;\n"
            "}\n"
            "\n"
            "}\n"
        )

    def test_class_with_superclass_and_static_method(self):
        """Test extends and static methods"""
        php = transpile("class Square extends Shape { static unit() { return new Square(1); } }")
        assert "class Square extends Shape\n" in php
        assert "public static function unit() {\nreturn new Square(1);\n}\n" in php

    def test_for_in(self):
        """Test for-in becomes foreach over keys"""
        php = transpile("for (var k in obj) { log(k); }")
        assert php == "<?php\nforeach ($obj as $k => $___) {\nlog($k);\n}\n"

    def test_for_loop(self):
        """Test a counting loop"""
        php = transpile("for (var i = 0; i < n; i++) { sum += i; }")
        assert php == "<?php\nfor ($i = 0; $i < $n; $i++) {\n$sum += $i;\n}\n"

    def test_overrides(self):
        """Test built-in method rewrites on parsed input"""
        php = transpile("var parts = line.trim().split(',');")
        assert php == "<?php\n$parts = explode(',', trim($line));\n"

    def test_literals(self):
        """Test object and array literals"""
        php = transpile("var o = {a: 1, 'b': [1, 2]};")
        assert php == '<?php\n$o = array("a" => 1, "b" => array(1, 2));\n'

    def test_switch(self):
        """Test a switch with break"""
        php = transpile("switch (x) { case 1: y = 2; break; default: y = 3; }")
        assert php.startswith("<?php\nswitch ($x) {\ncase 1:\n$y = 2;\nbreak;\n")
        assert php.endswith("default:\n$y = 3;\n\n}\n")

    def test_imports(self):
        """Test module imports become use statements"""
        php = transpile("import { Point, Line as L } from 'geometry';", module=True)
        assert php == "<?php\nuse \\Geometry\\Point;\nuse \\Geometry\\Line as L;\n"

    def test_export(self):
        """Test exported declarations are emitted unwrapped"""
        php = transpile("export function area(r) { return r * r; }", module=True)
        assert php == "<?php\nfunction area($r) {\nreturn $r * $r;\n}\n"

    def test_export_default_expression(self):
        """Test an exported expression does not run into the next statement"""
        php = transpile("export default foo(); var a = 1;", module=True)
        assert php == "<?php\nfoo();\n$a = 1;\n"

    def test_object_keys_escaped(self):
        """Test keys cannot interpolate or break out of their string"""
        php = transpile("var o = {'$x': 1, 'a\"b': 2};")
        assert php == '<?php\n$o = array("\\$x" => 1, "a\\"b" => 2);\n'

    def test_length(self):
        """Test `.length` reads become count()"""
        assert transpile("var n = s.length;") == "<?php\n$n = count($s);\n"

    def test_class_accessors_reported(self):
        """Test getters and computed methods are reported, not renamed"""
        context = TranslationContext()
        php = transpile("class K { get v() { return 1; } [k]() {} run() {} }", context=context)

        assert "function v(" not in php
        assert "function k(" not in php
        assert "public function run() {\n}\n" in php
        assert context.diagnostics.kinds() == ["MethodDefinition", "MethodDefinition"]

    def test_unsupported_node_is_reported(self):
        """Test translation continues past an unsupported statement"""
        context = TranslationContext()
        php = transpile("var a = 1;\nwhile (a) { a--; }\nvar b = 2;", context=context)

        assert php == "<?php\n$a = 1;\n$b = 2;\n"
        diagnostic = context.diagnostics.diagnostics[0]
        assert diagnostic.category == DiagnosticCategory.UNSUPPORTED
        assert diagnostic.kind == "WhileStatement"
        assert diagnostic.line == 2

    def test_scopes_are_recorded(self):
        """Test functions are reported to the scope manager"""
        manager = ScopeManager()
        context = TranslationContext(scope_recorder=manager)
        transpile("function outer(a) { var f = function (b) { return b; }; }", context=context)

        outer, inner = manager.function_scopes
        assert outer.name == "outer"
        assert outer.has("a")
        assert inner.has("b")
        assert inner.parent is outer
        assert manager.global_scope.has("outer")

    def test_deterministic(self):
        """Test identical input gives identical output"""
        source = "class A { run() { return A.B.c; } }\nvar x = obj.Go();"
        assert transpile(source) == transpile(source)

    def test_parse_source_module_flag(self):
        """Test module parsing accepts import statements"""
        tree = parse_source("import { a } from 'm';", module=True)
        assert tree.type == "Program"


class TestPhpEmitter:
    """Test suite for PhpEmitter"""

    def test_generate_from_estree_dict(self):
        """Test plain ESTree JSON input"""
        tree = {
            "type": "Program",
            "body": [{
                "type": "ExpressionStatement",
                "expression": {
                    "type": "CallExpression",
                    "callee": {"type": "Identifier", "name": "run"},
                    "arguments": [],
                },
            }],
        }
        assert transpile_ast(tree) == "<?php\nrun();\n"

    def test_generate_from_nodes(self):
        """Test es2php node input"""
        tree = Node("Program", {"body": []})
        assert PhpEmitter().generate_file(tree) == "<?php\n"

    def test_non_program_root_raises(self):
        """Test a root other than Program is rejected"""
        with pytest.raises(TranslationError):
            PhpEmitter().generate_file({"type": "Identifier", "name": "x"})

    def test_non_node_root_raises(self):
        """Test a value that is not a tree is rejected"""
        with pytest.raises(TranslationError):
            PhpEmitter().generate_file(42)
