"""YAML mode: taxonomy definitions as plain YAML.

Produces the same Taxonomy AST as the DSL parser, so everything
downstream (compiler, formatter, graph, validator) works unchanged.

    imports: [mypkg.kinds]
    kinds:
      IoError: ["Err-00001", 400, "IO error"]
      UnknownError:
        message: "Err-00001"
        code: 500
        description: "Unexpected error"
    errors:
      FileNotExists: IoError
      Unexpected: UnknownError
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from .ast_nodes import ErrorDefinition, KindDefinition, Taxonomy
from .errors import ParseError

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PATH_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

_KIND_FIELDS = ("message", "code", "description")


class YamlValidationError(ParseError):
    """Raised when a YAML taxonomy fails structural validation."""


def parse_yaml(source: str) -> Taxonomy:
    """Parse YAML source into a Taxonomy."""
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        raise YamlValidationError(
            f"Invalid YAML: {exc}",
            line=mark.line + 1 if mark else None,
            column=mark.column + 1 if mark else None,
        ) from exc

    if data is None:
        return Taxonomy()
    if not isinstance(data, dict):
        raise YamlValidationError("Root must be a YAML mapping")

    unknown = set(data) - {"imports", "kinds", "errors"}
    if unknown:
        raise YamlValidationError(f"Unknown top-level keys: {', '.join(sorted(map(str, unknown)))}")

    return Taxonomy(
        kinds=tuple(_parse_kinds(data.get("kinds") or {})),
        errors=tuple(_parse_errors(data.get("errors") or {})),
        imports=tuple(_parse_imports(data.get("imports") or [])),
    )


# ── Sections ─────────────────────────────────────────────────────────

def _parse_imports(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise YamlValidationError("'imports' must be a list of module paths")
    for module in value:
        if not isinstance(module, str) or not _PATH_RE.match(module):
            raise YamlValidationError(f"Invalid import path: {module!r}")
    return list(value)


def _parse_kinds(value: Any) -> list[KindDefinition]:
    if not isinstance(value, dict):
        raise YamlValidationError("'kinds' must be a mapping of name -> (message, code, description)")
    return [_parse_kind(name, entry) for name, entry in value.items()]


def _parse_kind(name: Any, entry: Any) -> KindDefinition:
    _check_identifier(name, "kind")

    if isinstance(entry, dict):
        missing = [f for f in _KIND_FIELDS if f not in entry]
        if missing:
            raise YamlValidationError(f"Kind '{name}' missing: {', '.join(missing)}")
        message, code, description = (entry[f] for f in _KIND_FIELDS)
    elif isinstance(entry, list):
        if len(entry) != 3:
            raise YamlValidationError(
                f"Kind '{name}' needs exactly [message, code, description], got {len(entry)} items"
            )
        message, code, description = entry
    else:
        raise YamlValidationError(f"Kind '{name}' must be a list or a mapping")

    if not isinstance(message, str):
        raise YamlValidationError(f"Kind '{name}': message must be a string")
    # bool is an int subclass; YAML 'yes'/'true' must not pass as a code
    if not isinstance(code, int) or isinstance(code, bool) or code < 0:
        raise YamlValidationError(f"Kind '{name}': code must be a non-negative integer")
    if not isinstance(description, str):
        raise YamlValidationError(f"Kind '{name}': description must be a string")

    return KindDefinition(name=name, message=message, code=code, description=description)


def _parse_errors(value: Any) -> list[ErrorDefinition]:
    if not isinstance(value, dict):
        raise YamlValidationError("'errors' must be a mapping of name -> kind reference")
    errors = []
    for name, kind in value.items():
        _check_identifier(name, "error type")
        if not isinstance(kind, str) or not _PATH_RE.match(kind):
            raise YamlValidationError(f"Error type '{name}': invalid kind reference {kind!r}")
        errors.append(ErrorDefinition(name=name, kind=kind))
    return errors


def _check_identifier(name: Any, what: str) -> None:
    if not isinstance(name, str) or not _IDENT_RE.match(name):
        raise YamlValidationError(f"Invalid {what} name: {name!r}")
