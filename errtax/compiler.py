"""Compiler: taxonomy AST -> Python module source."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .ast_nodes import ErrorDefinition, KindDefinition, Taxonomy

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME_MODULE = "errtax.runtime"

# Names every generated module pulls from the runtime module.
RUNTIME_NAMES = ("AsError", "Details", "Error", "ErrorKind", "as_error", "to_value")

_INDENT = "    "


class Compiler:
    """Emits Python source for kind constants and error classes.

    Each definition is emitted independently and in input order; nothing
    is deduplicated or resolved here. Name collisions and unresolved kind
    references surface when the generated module is loaded.
    """

    def __init__(
        self,
        runtime_module: str = DEFAULT_RUNTIME_MODULE,
        header: bool = True,
        source_name: str | None = None,
    ):
        self.runtime_module = runtime_module
        self.header = header
        self.source_name = source_name

    def compile(self, taxonomy: Taxonomy) -> str:
        """Return the full module text for a parsed taxonomy."""
        blocks: list[str] = []
        if self.header:
            blocks.append(self._compile_header(taxonomy.imports))
        if taxonomy.kinds:
            blocks.append(self.compile_kinds(taxonomy.kinds))
        if taxonomy.errors:
            blocks.append(self.compile_errors(taxonomy.errors))
        names = [k.name for k in taxonomy.kinds] + [e.name for e in taxonomy.errors]
        blocks.append(_compile_all(names))
        logger.debug(
            "Compiled %d kinds and %d error types",
            len(taxonomy.kinds), len(taxonomy.errors),
        )
        return "\n\n\n".join(blocks) + "\n"

    def compile_kinds(self, kinds: Iterable[KindDefinition]) -> str:
        """Return one ``Name: Final[ErrorKind] = ErrorKind(...)`` line per kind."""
        return "\n".join(self._compile_kind(kind) for kind in kinds)

    def compile_errors(self, errors: Iterable[ErrorDefinition]) -> str:
        """Return one class definition per error entry."""
        return "\n\n\n".join(self._compile_error(definition) for definition in errors)

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def _compile_header(self, imports: Iterable[str] = ()) -> str:
        origin = f" from {self.source_name}" if self.source_name else ""
        lines = [
            f"# Generated by errtax{origin}. Do not edit.",
            "",
            "from typing import Final",
            "",
            f"from {self.runtime_module} import {', '.join(RUNTIME_NAMES)}",
        ]
        extra = [f"import {module}" for module in imports]
        if extra:
            lines.append("")
            lines.extend(extra)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Kinds
    # ------------------------------------------------------------------

    def _compile_kind(self, kind: KindDefinition) -> str:
        logger.debug("Emitting kind %s", kind.name)
        args = ", ".join([
            repr(kind.name),
            repr(kind.message),
            str(kind.code),
            repr(kind.description),
        ])
        return f"{kind.name}: Final[ErrorKind] = ErrorKind({args})"

    # ------------------------------------------------------------------
    # Error types
    # ------------------------------------------------------------------

    def _compile_error(self, definition: ErrorDefinition) -> str:
        logger.debug("Emitting error type %s (kind %s)", definition.name, definition.kind)
        name = definition.name
        type_name = repr(name)
        body = [
            f'"""{name} error (kind {definition.kind})."""',
            "",
            f"kind = {definition.kind}",
            "",
            "def __init__(self):",
            f'    self._class_path = "{{}}::{{}}::{{}}".format(self.kind.side, self.kind.name, {type_name})',
            "    self._message = self.kind.description",
            "    self._details = None",
            "",
            f'def set_message(self, message: str) -> "{name}":',
            "    error = self._copy()",
            "    error._message = message",
            "    return error",
            "",
            f'def set_details(self, details: Details) -> "{name}":',
            "    error = self._copy()",
            "    error._details = dict(details)",
            "    return error",
            "",
            "@classmethod",
            f'def convert(cls, error: "Error | AsError") -> "{name}":',
            "    error = as_error(error)",
            "    origin = error.clone()",
            "    details = dict(origin.details) if origin.details is not None else {}",
            "    origin.details = None",
            '    details["origin"] = to_value(origin)',
            "    converted = cls()",
            "    converted._details = details",
            "    return converted",
            "",
            "def __str__(self) -> str:",
            f'    return "[{{}}] {{}} ({{}}): {{}}".format(self.kind.message_id, {type_name}, self.kind.code, self._message)',
        ]
        lines = [f"class {name}(AsError):"]
        lines.extend(_INDENT + line if line else "" for line in body)
        return "\n".join(lines)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _compile_all(names: list[str]) -> str:
    if not names:
        return "__all__ = []"
    lines = ["__all__ = ["]
    lines.extend(f"{_INDENT}{name!r}," for name in names)
    lines.append("]")
    return "\n".join(lines)
