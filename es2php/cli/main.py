"""Main CLI entry point for es2php"""

import sys
import argparse
import traceback
from pathlib import Path
from typing import Optional

from es2php.core.context import TranslationContext
from es2php.core.scope import ScopeManager
from es2php.generators.php_emitter import ParseError, transpile

# Exit status when --strict is given and some nodes were left out
EXIT_DIAGNOSTICS = 2


def transpile_file(input_file: Path, module: bool = False,
                   context: Optional[TranslationContext] = None) -> str:
    """Translate a single JavaScript file to PHP

    Args:
        input_file: Path to JavaScript source file
        module: Parse as an ES module
        context: Translation context

    Returns:
        Generated PHP code

    Raises:
        FileNotFoundError: If the input file does not exist
    """
    with open(input_file, 'r', encoding='utf-8') as f:
        source = f.read()

    return transpile(source, module=module, context=context)


def _print_scopes(scope_manager: ScopeManager) -> None:
    print("=== Function Scopes ===", file=sys.stderr)
    for scope in scope_manager.function_scopes:
        indent = "  " * scope.get_depth()
        params = ", ".join(s.name for s in scope.symbols.values() if s.param_index >= 0)
        print(f"{indent}{scope.name or '<anonymous>'}({params})", file=sys.stderr)


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog='es2php',
        description='es2php - Convert JavaScript to PHP',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  es2php input.js
  es2php input.js -o output.php
  es2php lib.js --module --verbose
        """
    )

    parser.add_argument('input', type=Path, help='Input JavaScript file')
    parser.add_argument(
        '-o', '--output', type=Path,
        help='Output PHP file (default: print to stdout)'
    )
    parser.add_argument(
        '--module', action='store_true',
        help='Parse input as an ES module (import/export)'
    )
    parser.add_argument(
        '--strict', action='store_true',
        help=f'Exit with status {EXIT_DIAGNOSTICS} if any node could not be translated'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Print diagnostics summary and function scopes'
    )

    args = parser.parse_args(argv)

    input_file = Path(args.input)
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        return 1

    scope_manager = ScopeManager()
    context = TranslationContext(scope_recorder=scope_manager)

    try:
        php_code = transpile_file(input_file, module=args.module, context=context)
    except ParseError as e:
        print(f"Error: Cannot parse {input_file}: {e}", file=sys.stderr)
        return 1
    except Exception:
        print(f"Error transpiling {input_file}:", file=sys.stderr)
        traceback.print_exc()
        return 1

    if args.output:
        args.output.write_text(php_code, encoding='utf-8')
        print(f"Generated: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(php_code)

    diagnostics = context.get_diagnostics()
    if diagnostics.has_diagnostics() or args.verbose:
        print(diagnostics.print_summary(), file=sys.stderr)
    if args.verbose:
        _print_scopes(scope_manager)

    if args.strict and diagnostics.has_diagnostics():
        return EXIT_DIAGNOSTICS
    return 0


if __name__ == "__main__":
    sys.exit(main())
