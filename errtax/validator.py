"""Lint pass for errtax taxonomies.

The compiler never runs this: generation is syntax-to-output only, and
these problems otherwise surface when the generated module is loaded.
Running the validator first reports them against the source lines.
"""

from __future__ import annotations

import keyword

from .ast_nodes import Taxonomy
from .compiler import RUNTIME_NAMES
from .errors import ValidationError

# Names the generated module binds besides the definitions themselves.
RESERVED_NAMES = frozenset(RUNTIME_NAMES) | {"Final", "__all__"}


class Validator:
    """Validates a taxonomy for name-level problems."""

    def validate(self, taxonomy: Taxonomy) -> list[ValidationError]:
        """Run all checks and return a list of errors (empty = valid)."""
        errors: list[ValidationError] = []
        errors += self._validate_identifiers(taxonomy)
        errors += self._validate_unique_kinds(taxonomy)
        errors += self._validate_unique_errors(taxonomy)
        errors += self._validate_kind_error_clash(taxonomy)
        errors += self._validate_kind_references(taxonomy)
        return errors

    def _validate_identifiers(self, taxonomy: Taxonomy) -> list[ValidationError]:
        errors = []
        for what, defs in (("Kind", taxonomy.kinds), ("Error type", taxonomy.errors)):
            for d in defs:
                if keyword.iskeyword(d.name):
                    errors.append(ValidationError(
                        f"{what} name '{d.name}' is a Python keyword",
                        line=d.line or None,
                        column=d.column or None,
                    ))
                elif d.name in RESERVED_NAMES:
                    errors.append(ValidationError(
                        f"{what} name '{d.name}' shadows a name the generated module imports",
                        line=d.line or None,
                        column=d.column or None,
                    ))
        return errors

    def _validate_unique_kinds(self, taxonomy: Taxonomy) -> list[ValidationError]:
        errors = []
        seen: dict[str, int] = {}
        for kind in taxonomy.kinds:
            if kind.name in seen:
                errors.append(ValidationError(
                    f"Duplicate kind '{kind.name}' (first defined at line {seen[kind.name]})",
                    line=kind.line or None,
                    column=kind.column or None,
                ))
            else:
                seen[kind.name] = kind.line
        return errors

    def _validate_unique_errors(self, taxonomy: Taxonomy) -> list[ValidationError]:
        errors = []
        seen: dict[str, int] = {}
        for error in taxonomy.errors:
            if error.name in seen:
                errors.append(ValidationError(
                    f"Duplicate error type '{error.name}' (first defined at line {seen[error.name]})",
                    line=error.line or None,
                    column=error.column or None,
                ))
            else:
                seen[error.name] = error.line
        return errors

    def _validate_kind_error_clash(self, taxonomy: Taxonomy) -> list[ValidationError]:
        errors = []
        kind_names = {k.name for k in taxonomy.kinds}
        for error in taxonomy.errors:
            if error.name in kind_names:
                errors.append(ValidationError(
                    f"Error type '{error.name}' has the same name as a kind",
                    line=error.line or None,
                    column=error.column or None,
                ))
        return errors

    def _validate_kind_references(self, taxonomy: Taxonomy) -> list[ValidationError]:
        """Bare references must name a kind of this document.

        Dotted paths point into imported modules and are left to load time.
        """
        errors = []
        kind_names = {k.name for k in taxonomy.kinds}
        for error in taxonomy.errors:
            if "." not in error.kind and error.kind not in kind_names:
                errors.append(ValidationError(
                    f"Error type '{error.name}' references unknown kind '{error.kind}'",
                    line=error.line or None,
                    column=error.column or None,
                ))
        return errors
