"""Shared fixtures for errtax tests."""

import pytest

from errtax.compiler import Compiler
from errtax.loader import load_module
from errtax.parser import parse
from errtax.validator import Validator


@pytest.fixture
def compiler():
    return Compiler()


@pytest.fixture
def validator():
    return Validator()


# ---------------------------------------------------------------------------
# Sample taxonomy sources
# ---------------------------------------------------------------------------

MINIMAL_TAXONOMY = '''
kinds {
    IoError = ("Err-00001", 400, "IO error")
}

errors {
    FileNotExists = IoError
}
'''

FULL_TAXONOMY = '''
# Kinds shared by the whole application
kinds {
    UnknownError = ("Err-00001", 500, "Unexpected error"),
    IoError = ("Err-00001", 400, "IO error"),
    NotFound = ("Err-00404", 404, "Resource not found"),
}

errors {
    Unexpected = UnknownError
    FileRead = IoError,
    FileNotExists = IoError
    UserNotFound = NotFound
}
'''

FULL_YAML = '''
kinds:
  UnknownError: ["Err-00001", 500, "Unexpected error"]
  IoError:
    message: "Err-00001"
    code: 400
    description: "IO error"
  NotFound: ["Err-00404", 404, "Resource not found"]
errors:
  Unexpected: UnknownError
  FileRead: IoError
  FileNotExists: IoError
  UserNotFound: NotFound
'''


@pytest.fixture
def minimal_source():
    return MINIMAL_TAXONOMY


@pytest.fixture
def full_source():
    return FULL_TAXONOMY


@pytest.fixture
def full_yaml():
    return FULL_YAML


@pytest.fixture
def full_taxonomy():
    return parse(FULL_TAXONOMY)


@pytest.fixture
def generated(full_taxonomy):
    """The FULL_TAXONOMY compiled and loaded as a module."""
    return load_module(Compiler().compile(full_taxonomy), name="errtax_test_generated")
