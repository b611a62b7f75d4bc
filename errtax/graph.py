"""Graph visualization: Taxonomy -> Mermaid flowchart."""

from __future__ import annotations

from .ast_nodes import ErrorDefinition, KindDefinition, Taxonomy
from .runtime import ErrorKind

# Side -> Mermaid style
_SIDE_STYLES = {
    "Client": "fill:#b45309,stroke:#f59e0b,color:#e2e8f0",
    "Server": "fill:#991b1b,stroke:#ef4444,color:#e2e8f0",
}

_ERROR_STYLE = "fill:#1e293b,stroke:#64748b,color:#e2e8f0"


def generate_mermaid(taxonomy: Taxonomy) -> str:
    """Generate a Mermaid flowchart: kinds on top, error types below."""
    lines: list[str] = ["graph TD"]

    # Node declarations
    for kind in taxonomy.kinds:
        lines.append(f"    {kind.name}{_kind_shape(kind)}")
    for error in taxonomy.errors:
        lines.append(f"    {error.name}{_error_shape(error)}")

    lines.append("")

    # Classification edges; dotted references point at a kind defined elsewhere
    for error in taxonomy.errors:
        lines.append(f"    {_node_id(error.kind)} --> {error.name}")

    lines.append("")

    # Styles
    for kind in taxonomy.kinds:
        lines.append(f"    style {kind.name} {_SIDE_STYLES[_side(kind)]}")
    for error in taxonomy.errors:
        lines.append(f"    style {error.name} {_ERROR_STYLE}")

    return "\n".join(lines)


def _side(kind: KindDefinition) -> str:
    return ErrorKind(*kind.as_tuple()).side


def _kind_shape(kind: KindDefinition) -> str:
    """Kinds are rounded boxes labelled with their code."""
    return f"([{kind.name}\\n{kind.code}])"


def _error_shape(error: ErrorDefinition) -> str:
    return f"[{error.name}]"


def _node_id(path: str) -> str:
    """Mermaid ids cannot contain dots."""
    return path.replace(".", "_")
