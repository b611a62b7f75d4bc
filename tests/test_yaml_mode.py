"""Tests for YAML mode."""

import pytest

from errtax.ast_nodes import Taxonomy
from errtax.errors import ParseError
from errtax.parser import parse
from errtax.yaml_mode import YamlValidationError, parse_yaml


def _shape(t: Taxonomy):
    return (
        [k.as_tuple() for k in t.kinds],
        [(e.name, e.kind) for e in t.errors],
        t.imports,
    )


class TestParseYaml:

    def test_matches_dsl(self, full_yaml, full_source):
        assert _shape(parse_yaml(full_yaml)) == _shape(parse(full_source))

    def test_imports(self):
        t = parse_yaml("imports: [app.kinds]\nerrors:\n  Gone: app.kinds.NotFound\n")
        assert t.imports == ("app.kinds",)
        assert t.errors[0].kind == "app.kinds.NotFound"

    def test_single_import_string(self):
        assert parse_yaml("imports: app.kinds").imports == ("app.kinds",)

    def test_empty_document(self):
        assert parse_yaml("") == Taxonomy()

    def test_order_preserved(self):
        t = parse_yaml("kinds:\n  B: [m, 2, d]\n  A: [m, 1, d]\n")
        assert [k.name for k in t.kinds] == ["B", "A"]


class TestYamlErrors:

    def test_is_a_parse_error(self):
        assert issubclass(YamlValidationError, ParseError)

    def test_invalid_yaml(self):
        with pytest.raises(YamlValidationError) as exc:
            parse_yaml("kinds: [unclosed")
        assert "Invalid YAML" in str(exc.value)

    def test_root_must_be_mapping(self):
        with pytest.raises(YamlValidationError):
            parse_yaml("- a\n- b\n")

    def test_unknown_key(self):
        with pytest.raises(YamlValidationError) as exc:
            parse_yaml("types: {}")
        assert "types" in str(exc.value)

    def test_kind_missing_description(self):
        with pytest.raises(YamlValidationError) as exc:
            parse_yaml('kinds:\n  A: ["Err-1", 400]\n')
        assert "exactly" in str(exc.value)

    def test_kind_mapping_missing_field(self):
        with pytest.raises(YamlValidationError) as exc:
            parse_yaml("kinds:\n  A: {message: m, code: 1}\n")
        assert "description" in str(exc.value)

    def test_code_must_be_integer(self):
        with pytest.raises(YamlValidationError):
            parse_yaml('kinds:\n  A: [m, "400", d]\n')

    def test_boolean_code_rejected(self):
        with pytest.raises(YamlValidationError):
            parse_yaml("kinds:\n  A: [m, true, d]\n")

    def test_negative_code_rejected(self):
        with pytest.raises(YamlValidationError):
            parse_yaml("kinds:\n  A: [m, -1, d]\n")

    def test_invalid_identifier(self):
        with pytest.raises(YamlValidationError):
            parse_yaml("errors:\n  not-valid: IoError\n")

    def test_invalid_kind_reference(self):
        with pytest.raises(YamlValidationError):
            parse_yaml("errors:\n  A: [IoError]\n")
