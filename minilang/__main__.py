"""CLI entry point for the minilang interpreter.

Usage:
    python -m minilang [-v|-vv|-vvv] [--parser recursive|lark] [program_file]
    python -m minilang [-v...] --emit-ast <program_file>
    python -m minilang [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --parser      Parser used for source text (default: recursive)
  --emit-ast    Parse the given program file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive session is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .errors import MiniError
from .grammar import parse_with_lark
from .interpreter import Interpreter
from .parser import parse_program
from .repl import Session

PARSERS = {
    'recursive': parse_program,
    'lark': parse_with_lark,
}


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="minilang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--parser', choices=sorted(PARSERS), default='recursive',
                        help='parser used for source text')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute; omit for an interactive session')
    args = parser.parse_args(argv)
    parse = PARSERS[args.parser]

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            statements = parse(source)
        except MiniError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            try:
                with open(ast_path, 'r', encoding='utf-8') as f:
                    statements = program_from_obj(json.load(f))
            except (ValueError, KeyError, TypeError) as e:
                print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
                sys.exit(1)
            run_or_exit(interpreter, statements)
            return

        # Interactive session
        if not args.program:
            Session(interpreter, parse=parse).loop()
            return

        # Default: execute source file
        source = read_source(Path(args.program))
        try:
            statements = parse(source)
        except MiniError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        run_or_exit(interpreter, statements)
    finally:
        interpreter.close()


def run_or_exit(interpreter: Interpreter, statements) -> None:
    try:
        interpreter.run(statements)
    except MiniError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
