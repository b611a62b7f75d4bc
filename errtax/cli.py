"""CLI for errtax: compile, check and inspect error taxonomy files."""

from __future__ import annotations

import argparse
import logging
import sys

from .ast_nodes import Taxonomy
from .compiler import DEFAULT_RUNTIME_MODULE, Compiler
from .errors import ErrtaxError
from .formatter import format_taxonomy
from .graph import generate_mermaid
from .parser import parse
from .validator import Validator
from .watcher import watch_and_compile
from .yaml_mode import parse_yaml

_YAML_SUFFIXES = (".yaml", ".yml")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="errtax",
        description="Compile declarative error taxonomies into Python error types",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # compile
    compile_p = sub.add_parser("compile", help="Compile a taxonomy to a Python module")
    compile_p.add_argument("file", help="Input .errtax or .yaml file")
    compile_p.add_argument("-o", "--output", help="Write the module here instead of stdout")
    compile_p.add_argument(
        "--runtime",
        default=DEFAULT_RUNTIME_MODULE,
        help=f"Module generated code imports its runtime from (default: {DEFAULT_RUNTIME_MODULE})",
    )
    compile_p.add_argument("--no-header", action="store_true", help="Omit the header and imports")
    compile_p.add_argument("--watch", action="store_true", help="Watch file and recompile on changes")

    # check
    check_p = sub.add_parser("check", help="Parse and lint a taxonomy without compiling")
    check_p.add_argument("file", help="Input .errtax or .yaml file")

    # ast
    ast_p = sub.add_parser("ast", help="Show parsed definitions (debug)")
    ast_p.add_argument("file", help="Input .errtax or .yaml file")

    # fmt
    fmt_p = sub.add_parser("fmt", help="Print the taxonomy in canonical DSL form")
    fmt_p.add_argument("file", help="Input .errtax or .yaml file")

    # graph
    graph_p = sub.add_parser("graph", help="Generate Mermaid flowchart")
    graph_p.add_argument("file", help="Input .errtax or .yaml file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "compile":
            compiler = Compiler(
                runtime_module=args.runtime,
                header=not args.no_header,
                source_name=args.file,
            )
            if args.watch:
                watch_and_compile(
                    args.file,
                    lambda path: _cmd_compile(compiler, parse_file(path), args.output),
                )
                return 0
            return _cmd_compile(compiler, parse_file(args.file), args.output)
        else:
            taxonomy = parse_file(args.file)
            if args.command == "check":
                return _cmd_check(taxonomy)
            elif args.command == "ast":
                return _cmd_ast(taxonomy)
            elif args.command == "fmt":
                return _cmd_fmt(taxonomy)
            elif args.command == "graph":
                return _cmd_graph(taxonomy)
    except FileNotFoundError:
        print(f"Error: file not found: {args.file}", file=sys.stderr)
        return 1
    except ErrtaxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def parse_file(path: str) -> Taxonomy:
    """Parse a taxonomy file, picking the YAML or DSL parser by suffix."""
    with open(path, encoding="utf-8") as f:
        source = f.read()
    if path.lower().endswith(_YAML_SUFFIXES):
        return parse_yaml(source)
    return parse(source)


def _cmd_compile(compiler: Compiler, taxonomy: Taxonomy, output: str | None = None) -> int:
    module = compiler.compile(taxonomy)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(module)
        print(f"Wrote {len(taxonomy.kinds)} kinds, {len(taxonomy.errors)} error types to {output}")
    else:
        print(module, end="")
    return 0


def _cmd_check(taxonomy: Taxonomy) -> int:
    errors = Validator().validate(taxonomy)
    if errors:
        for e in errors:
            print(f"  {e}", file=sys.stderr)
        return 1

    print(f"Valid: {len(taxonomy.kinds)} kinds, {len(taxonomy.errors)} error types")
    return 0


def _cmd_ast(taxonomy: Taxonomy) -> int:
    if taxonomy.imports:
        print(f"Imports: {', '.join(taxonomy.imports)}")
    print(f"Kinds ({len(taxonomy.kinds)}):")
    for k in taxonomy.kinds:
        print(f"  {k.name} = ({k.message!r}, {k.code}, {k.description!r})  # line {k.line}")
    print(f"Errors ({len(taxonomy.errors)}):")
    for e in taxonomy.errors:
        print(f"  {e.name} = {e.kind}  # line {e.line}")
    return 0


def _cmd_fmt(taxonomy: Taxonomy) -> int:
    print(format_taxonomy(taxonomy), end="")
    return 0


def _cmd_graph(taxonomy: Taxonomy) -> int:
    print(generate_mermaid(taxonomy))
    return 0


if __name__ == "__main__":
    sys.exit(main())
