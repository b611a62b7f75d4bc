"""errtax: compiler for declarative error taxonomies."""

from .ast_nodes import ErrorDefinition, KindDefinition, Taxonomy
from .compiler import Compiler
from .errors import (
    CompileError,
    ConversionError,
    ErrtaxError,
    MalformedErrorEntry,
    MalformedKindEntry,
    ParseError,
    ValidationError,
)
from .formatter import Formatter, format_taxonomy
from .graph import generate_mermaid
from .loader import load_module
from .parser import parse, parse_errors, parse_kinds
from .runtime import AsError, Error, ErrorKind, as_error, to_value
from .validator import Validator
from .yaml_mode import YamlValidationError, parse_yaml

__all__ = [
    "parse",
    "parse_kinds",
    "parse_errors",
    "parse_yaml",
    "Compiler",
    "load_module",
    "Formatter",
    "format_taxonomy",
    "generate_mermaid",
    "Validator",
    "ErrorKind",
    "Error",
    "AsError",
    "as_error",
    "to_value",
    "KindDefinition",
    "ErrorDefinition",
    "Taxonomy",
    "ErrtaxError",
    "ParseError",
    "MalformedKindEntry",
    "MalformedErrorEntry",
    "YamlValidationError",
    "ValidationError",
    "CompileError",
    "ConversionError",
]
