"""Tests for the formatter (AST -> DSL)."""

from errtax import format_taxonomy, parse, parse_yaml
from errtax.ast_nodes import KindDefinition, Taxonomy


def _shape(t):
    return (
        [k.as_tuple() for k in t.kinds],
        [(e.name, e.kind) for e in t.errors],
        t.imports,
    )


class TestFormat:

    def test_canonical_layout(self):
        t = parse('kinds{A=("m",1,"d"),B=("n",2,"e")} errors{X=A,Y=B}')
        assert format_taxonomy(t) == (
            "kinds {\n"
            '    A = ("m", 1, "d"),\n'
            '    B = ("n", 2, "e")\n'
            "}\n"
            "\n"
            "errors {\n"
            "    X = A\n"
            "    Y = B\n"
            "}\n"
        )

    def test_imports_first(self):
        t = parse("errors { G = app.kinds.NotFound } import app.kinds")
        assert format_taxonomy(t).startswith("import app.kinds\n\nerrors {")

    def test_empty(self):
        assert format_taxonomy(Taxonomy()) == ""

    def test_roundtrip(self, full_source):
        original = parse(full_source)
        assert _shape(parse(format_taxonomy(original))) == _shape(original)

    def test_yaml_to_dsl(self, full_yaml, full_source):
        dsl = format_taxonomy(parse_yaml(full_yaml))
        assert _shape(parse(dsl)) == _shape(parse(full_source))

    def test_special_characters_survive(self):
        kind = KindDefinition(name="Q", message='say "hi"\\', code=1, description="tab\there\nnewline é")
        reparsed = parse(format_taxonomy(Taxonomy(kinds=(kind,))))
        assert reparsed.kinds[0].as_tuple() == kind.as_tuple()
