"""Runtime support for generated error types.

Generated modules import everything they need from here:

- ``ErrorKind``: the immutable (name, message, code, description) record
  every kind constant is built from.
- ``Error``: the generic error container used when errors cross a
  boundary (logs, RPC payloads, conversion between error types).
- ``AsError``: base class of every generated error type; carries the
  shared accessors of the error contract.
- ``to_value`` / ``as_error``: helpers the generated ``convert`` uses to
  embed an upstream error under the ``origin`` detail.
"""

from __future__ import annotations

import copy
import json
from typing import Any, ClassVar, NamedTuple

from .errors import ConversionError

# Codes at or above this value are server-side failures.
SERVER_CODE_THRESHOLD = 500

Details = dict[str, Any]


class ErrorKind(NamedTuple):
    """A kind of error: identifier, message id, numeric code, description."""
    name: str
    message: str
    code: int
    description: str

    @property
    def message_id(self) -> str:
        return self.message

    @property
    def side(self) -> str:
        return "Client" if self.code < SERVER_CODE_THRESHOLD else "Server"


class Error(Exception):
    """Generic error container.

    Any generated error can be turned into one with ``to_error()``; the
    reverse direction is the generated ``convert`` classmethod.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        class_path: str | None = None,
        details: Details | None = None,
    ):
        self.kind = kind
        self.message = kind.description if message is None else message
        self.class_path = class_path or f"{kind.side}::{kind.name}"
        self.details = details
        super().__init__(self.message)

    def clone(self) -> Error:
        """Return an independent copy; details are deep-copied."""
        return Error(
            kind=self.kind,
            message=self.message,
            class_path=self.class_path,
            details=copy.deepcopy(self.details),
        )

    def to_dict(self) -> dict:
        return {
            "class": self.class_path,
            "code": self.kind.code,
            "message_id": self.kind.message_id,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.kind.message_id}] {self.class_path} ({self.kind.code}) - {self.message}"

    def __repr__(self) -> str:
        return f"Error(class_path={self.class_path!r}, message={self.message!r})"


class AsError(Exception):
    """Base class of generated error types.

    Subclasses bind ``kind`` in their class body and set ``_class_path``,
    ``_message`` and ``_details`` in ``__init__``. Builders never mutate
    an instance in place; they return a modified copy.
    """

    kind: ClassVar[ErrorKind]

    _class_path: str
    _message: str
    _details: Details | None

    @property
    def class_path(self) -> str:
        return self._class_path

    @property
    def message(self) -> str:
        return self._message

    @property
    def details(self) -> Details | None:
        """Snapshot of the details mapping, or None when absent."""
        return copy.deepcopy(self._details)

    def _copy(self):
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        return clone

    def to_error(self) -> Error:
        """The generic container view of this error."""
        return Error(
            kind=self.kind,
            message=self._message,
            class_path=self._class_path,
            details=copy.deepcopy(self._details),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(class_path={self._class_path!r}, message={self._message!r})"


def as_error(error: Error | AsError) -> Error:
    """Coerce ``error`` to the generic container accepted by ``convert``."""
    if isinstance(error, Error):
        return error
    if isinstance(error, AsError):
        return error.to_error()
    raise TypeError(f"Cannot convert {type(error).__name__} into an errtax Error")


def to_value(obj: Any) -> Any:
    """Serialize ``obj`` into a structured (JSON-representable) value.

    Objects exposing ``to_dict()`` are serialized through it. Non-finite
    floats and unsupported types raise ConversionError.
    """
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    try:
        return json.loads(json.dumps(obj, allow_nan=False))
    except (TypeError, ValueError) as e:
        raise ConversionError(f"Cannot serialize {type(obj).__name__}: {e}") from e
