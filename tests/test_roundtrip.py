"""End-to-end tests: source -> parse -> validate -> compile -> load -> use."""

from errtax.compiler import Compiler
from errtax.loader import load_module
from errtax.parser import parse
from errtax.runtime import Error
from errtax.yaml_mode import parse_yaml
from errtax.validator import Validator


def roundtrip(source: str, *, yaml: bool = False):
    """Parse, validate, compile and load; return the generated module."""
    taxonomy = parse_yaml(source) if yaml else parse(source)

    errors = Validator().validate(taxonomy)
    assert errors == [], f"Validation errors: {errors}"

    return load_module(Compiler().compile(taxonomy), name="errtax_roundtrip")


class TestRoundtrip:

    def test_minimal(self, minimal_source):
        module = roundtrip(minimal_source)
        e = module.FileNotExists()
        assert str(e) == "[Err-00001] FileNotExists (400): IO error"

    def test_full_dsl_and_yaml_agree(self, full_source, full_yaml):
        from_dsl = roundtrip(full_source)
        from_yaml = roundtrip(full_yaml, yaml=True)
        for name in from_dsl.__all__:
            a, b = getattr(from_dsl, name), getattr(from_yaml, name)
            if isinstance(a, tuple):
                assert a == b
            else:
                assert a().class_path == b().class_path

    def test_raise_convert_and_report(self, full_source):
        module = roundtrip(full_source)
        try:
            raise module.FileNotExists().set_message("config.toml").set_details({"path": "config.toml"})
        except module.FileNotExists as low:
            high = module.Unexpected.convert(low).set_message("could not start")

        assert str(high) == "[Err-00001] Unexpected (500): could not start"
        assert high.details["path"] == "config.toml"
        assert high.details["origin"]["class"] == "Client::IoError::FileNotExists"
        assert high.details["origin"]["message"] == "config.toml"

    def test_generated_error_converts_to_runtime_error(self, full_source):
        module = roundtrip(full_source)
        err = module.UserNotFound().set_details({"id": 7}).to_error()
        assert isinstance(err, Error)
        assert err.to_dict() == {
            "class": "Client::NotFound::UserNotFound",
            "code": 404,
            "message_id": "Err-00404",
            "message": "Resource not found",
            "details": {"id": 7},
        }


class TestExamples:

    def test_bundled_examples_agree(self):
        import os

        from errtax.cli import parse_file

        examples = os.path.join(os.path.dirname(__file__), "..", "examples")
        dsl = parse_file(os.path.join(examples, "app.errtax"))
        yml = parse_file(os.path.join(examples, "app.yaml"))
        assert [k.as_tuple() for k in dsl.kinds] == [k.as_tuple() for k in yml.kinds]
        assert [(e.name, e.kind) for e in dsl.errors] == [(e.name, e.kind) for e in yml.errors]
        assert Validator().validate(dsl) == []
        module = load_module(Compiler().compile(dsl), name="errtax_example")
        assert module.StorageDown().class_path == "Server::Unavailable::StorageDown"
