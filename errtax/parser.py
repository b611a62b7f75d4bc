"""Lark-based parser for errtax: transforms taxonomy source text into AST."""

from __future__ import annotations

import ast
import logging
from pathlib import Path as FilePath

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast_nodes import ErrorDefinition, KindDefinition, Taxonomy
from .errors import ErrtaxError, MalformedErrorEntry, MalformedKindEntry, ParseError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Grammar loading (cached)
# ---------------------------------------------------------------------------

_GRAMMAR_PATH = FilePath(__file__).parent / "grammar.lark"
_START_SYMBOLS = ["document", "kind_list", "error_list"]
_lark_parser: Lark | None = None


def _get_parser() -> Lark:
    global _lark_parser
    if _lark_parser is None:
        logger.debug("Loading grammar from %s", _GRAMMAR_PATH)
        grammar_text = _GRAMMAR_PATH.read_text(encoding="utf-8")
        _lark_parser = Lark(
            grammar_text,
            parser="lalr",
            start=_START_SYMBOLS,
            propagate_positions=True,
        )
    return _lark_parser


# ---------------------------------------------------------------------------
# Error examples: malformed snippets labelled with the construct that is
# missing. Lark matches a failure against them by parser state.
# ---------------------------------------------------------------------------

_KIND_EXAMPLES: dict[str, list[str]] = {
    "identifier": [
        '= ("m", 1, "d")',
        '("m", 1, "d")',
        'A = ("m", 1, "d"), = ("m", 1, "d")',
    ],
    "=": [
        'A ("m", 1, "d")',
        'A',
    ],
    "(": [
        'A = "m"',
        'A =',
        'A = B',
    ],
    "message": [
        'A = ()',
        'A = (1, 1, "d")',
        'A = (B, 1, "d")',
    ],
    "code": [
        'A = ("m")',
        'A = ("m", "c", "d")',
        'A = ("m", )',
        'A = ("m",',
    ],
    "description": [
        'A = ("m", 1)',
        'A = ("m", 1, 2)',
        'A = ("m", 1, )',
        'A = ("m", 1,',
    ],
    ",": [
        'A = ("m" 1, "d")',
        'A = ("m", 1 "d")',
        'A = ("m", 1, "d") B = ("m", 1, "d")',
    ],
    ")": [
        'A = ("m", 1, "d"',
        'A = ("m", 1, "d", )',
        'A = ("m", 1, "d" B',
    ],
}

_ERROR_EXAMPLES: dict[str, list[str]] = {
    "identifier": [
        '= IoError',
        '"A" = IoError',
        'A = IoError, , B = IoError',
    ],
    "=": [
        'A IoError',
        'A',
        'A = IoError B',
    ],
    "kind reference": [
        'A =',
        'A = "IoError"',
        'A = (IoError)',
        'A = kinds.',
        'A = kinds."x"',
        'A = 1',
    ],
}

# Human-readable names for terminals, used when no example matches.
_TERMINAL_NAMES = {
    "NAME": "identifier",
    "STRING": "string literal",
    "INT": "integer literal",
    "EQUAL": "'='",
    "LPAR": "'('",
    "RPAR": "')'",
    "COMMA": "','",
    "DOT": "'.'",
    "LBRACE": "'{'",
    "RBRACE": "'}'",
    "IMPORT": "'import'",
    "KINDS": "'kinds'",
    "ERRORS": "'errors'",
    "$END": "end of input",
}


# ---------------------------------------------------------------------------
# Transformer: Lark parse tree -> AST nodes
# ---------------------------------------------------------------------------

class TaxonomyTransformer(Transformer):
    """Converts Lark parse tree into errtax AST."""

    # --- Top-level ---

    def document(self, items):
        kinds: list[KindDefinition] = []
        errors: list[ErrorDefinition] = []
        imports: list[str] = []
        for tag, value in items:
            if tag == "kinds":
                kinds.extend(value)
            elif tag == "errors":
                errors.extend(value)
            elif tag == "import":
                imports.append(value)
        return Taxonomy(kinds=tuple(kinds), errors=tuple(errors), imports=tuple(imports))

    def import_decl(self, items):
        return ("import", items[0])

    def kinds_section(self, items):
        return ("kinds", items[0])

    def errors_section(self, items):
        return ("errors", items[0])

    # --- Kinds ---

    def kind_list(self, items):
        return tuple(items)

    def kind_entry(self, items):
        name, message, code, description = items
        return KindDefinition(
            name=str(name),
            message=_unquote(message),
            code=int(code),
            description=_unquote(description),
            line=name.line,
            column=name.column,
        )

    # --- Error types ---

    def error_list(self, items):
        return tuple(items)

    def error_entry(self, items):
        name, kind = items
        return ErrorDefinition(
            name=str(name),
            kind=kind,
            line=name.line,
            column=name.column,
        )

    def dotted_name(self, items):
        return ".".join(str(tok) for tok in items)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unquote(token: Token) -> str:
    """Decode a double-quoted STRING token, escapes included."""
    try:
        return ast.literal_eval(str(token))
    except (SyntaxError, ValueError) as e:
        raise ParseError(
            f"Invalid string literal {str(token)}: {e}",
            line=token.line,
            column=token.column,
        ) from e


def _found(e: UnexpectedInput) -> str:
    if isinstance(e, UnexpectedToken):
        if e.token.type == "$END":
            return "end of input"
        return repr(str(e.token))
    if isinstance(e, UnexpectedCharacters):
        return repr(e.char)
    return "end of input"


def _expected_terminals(e: UnexpectedInput) -> str:
    expected = getattr(e, "expected", None) or getattr(e, "allowed", None) or ()
    names = sorted({_TERMINAL_NAMES.get(t, t) for t in expected})
    return " or ".join(names) if names else "valid syntax"


def _state_key(e: UnexpectedInput) -> tuple[object, str | None]:
    state = getattr(e, "state", None)
    position = getattr(state, "position", None)
    token_type = e.token.type if isinstance(e, UnexpectedToken) else None
    return position, token_type


_example_tables: dict[str, dict[tuple[object, str | None], str]] = {}


def _example_table(start: str, examples: dict[str, list[str]]) -> dict[tuple[object, str | None], str]:
    """Map (parser state, token type) of each example failure to its label.

    Keyed on the LR state alone as well, so inputs failing on a token type
    no example covers still resolve to the first label seen in that state.
    """
    table = _example_tables.get(start)
    if table is None:
        table = {}
        for label, snippets in examples.items():
            for snippet in snippets:
                try:
                    _get_parser().parse(snippet, start=start)
                except UnexpectedInput as e:
                    position, token_type = _state_key(e)
                    table.setdefault((position, token_type), label)
                    table.setdefault((position, None), label)
        _example_tables[start] = table
    return table


def _match(e: UnexpectedInput, start: str, examples: dict[str, list[str]]) -> str | None:
    table = _example_table(start, examples)
    position, token_type = _state_key(e)
    if position is None:
        return None
    return table.get((position, token_type)) or table.get((position, None))


def _malformed_kind(e: UnexpectedInput, label: str) -> MalformedKindEntry:
    return MalformedKindEntry(
        f"Malformed kind entry: expected {label}, found {_found(e)}",
        line=e.line,
        column=e.column,
        expected=label,
    )


def _malformed_error(e: UnexpectedInput, label: str) -> MalformedErrorEntry:
    return MalformedErrorEntry(
        f"Malformed error entry: expected {label}, found {_found(e)}",
        line=e.line,
        column=e.column,
        expected=label,
    )


def _run(source: str, start: str):
    tree = _get_parser().parse(source, start=start)
    try:
        return TaxonomyTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ErrtaxError):
            raise e.orig_exc from e
        raise


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_kinds(source: str) -> tuple[KindDefinition, ...]:
    """Parse a bare kind list: ``Name = ("message", code, "description"), ...``.

    Raises MalformedKindEntry at the offending token; nothing is returned
    for a batch with any malformed entry.
    """
    try:
        kinds = _run(source, "kind_list")
    except UnexpectedInput as e:
        label = _match(e, "kind_list", _KIND_EXAMPLES) or _expected_terminals(e)
        raise _malformed_kind(e, label) from e
    logger.debug("Parsed %d kind entries", len(kinds))
    return kinds


def parse_errors(source: str) -> tuple[ErrorDefinition, ...]:
    """Parse a bare error list: ``Name = kind.path`` entries, commas optional.

    Empty input yields an empty tuple.
    """
    try:
        errors = _run(source, "error_list")
    except UnexpectedInput as e:
        label = _match(e, "error_list", _ERROR_EXAMPLES) or _expected_terminals(e)
        raise _malformed_error(e, label) from e
    logger.debug("Parsed %d error entries", len(errors))
    return errors


def parse(source: str) -> Taxonomy:
    """Parse a full taxonomy document (import lines, kinds/errors sections).

    Raises ParseError on syntax errors; malformed entries inside a section
    raise MalformedKindEntry or MalformedErrorEntry.
    """
    try:
        taxonomy = _run(source, "document")
    except UnexpectedInput as e:
        label = _match(e, "kind_list", _KIND_EXAMPLES)
        if label is not None:
            raise _malformed_kind(e, label) from e
        label = _match(e, "error_list", _ERROR_EXAMPLES)
        if label is not None:
            raise _malformed_error(e, label) from e
        raise ParseError(
            f"Unexpected {_found(e)}, expected {_expected_terminals(e)}",
            line=getattr(e, "line", None),
            column=getattr(e, "column", None),
        ) from e
    logger.debug(
        "Parsed taxonomy: %d kinds, %d errors, %d imports",
        len(taxonomy.kinds), len(taxonomy.errors), len(taxonomy.imports),
    )
    return taxonomy
