"""AST node definitions for errtax. All frozen (immutable) dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KindDefinition:
    """A kind entry: Name = ("message", code, "description")."""
    name: str
    message: str
    code: int
    description: str
    line: int = 0
    column: int = 0

    def as_tuple(self) -> tuple[str, str, int, str]:
        return (self.name, self.message, self.code, self.description)


@dataclass(frozen=True)
class ErrorDefinition:
    """An error entry: Name = kind.reference."""
    name: str
    kind: str  # dotted path, resolved when the generated module loads
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Taxonomy:
    """Root AST node: every kind and error type of one document."""
    kinds: tuple[KindDefinition, ...] = ()
    errors: tuple[ErrorDefinition, ...] = ()
    imports: tuple[str, ...] = ()  # modules the kind references need
