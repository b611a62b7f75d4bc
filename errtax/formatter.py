"""Formatter: Taxonomy AST -> canonical errtax DSL source.

Works for taxonomies from either input format, so it doubles as the
YAML -> DSL converter. The output re-parses to the same definitions.
"""

from __future__ import annotations

import json

from .ast_nodes import ErrorDefinition, KindDefinition, Taxonomy

_INDENT = "    "


class Formatter:
    """Renders a Taxonomy as DSL text."""

    def format(self, taxonomy: Taxonomy) -> str:
        sections: list[str] = []

        if taxonomy.imports:
            sections.append("\n".join(f"import {module}" for module in taxonomy.imports))

        if taxonomy.kinds:
            entries = [self._format_kind(k) for k in taxonomy.kinds]
            body = ",\n".join(f"{_INDENT}{e}" for e in entries)
            sections.append(f"kinds {{\n{body}\n}}")

        if taxonomy.errors:
            body = "\n".join(f"{_INDENT}{self._format_error(e)}" for e in taxonomy.errors)
            sections.append(f"errors {{\n{body}\n}}")

        return "\n\n".join(sections) + "\n" if sections else ""

    def _format_kind(self, kind: KindDefinition) -> str:
        return f"{kind.name} = ({_quote(kind.message)}, {kind.code}, {_quote(kind.description)})"

    def _format_error(self, error: ErrorDefinition) -> str:
        return f"{error.name} = {error.kind}"


def format_taxonomy(taxonomy: Taxonomy) -> str:
    """Return canonical DSL text for ``taxonomy``."""
    return Formatter().format(taxonomy)


def _quote(s: str) -> str:
    """Double-quoted literal that the grammar's STRING terminal accepts."""
    # JSON escapes decode identically under ast.literal_eval
    return json.dumps(s, ensure_ascii=False)
