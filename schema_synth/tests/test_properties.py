import pytest

from schema_synth.config import ScanConfig
from schema_synth.errors import UnresolvedImportError, UnsupportedConstructError
from schema_synth.program import Field, StructType, parse_type_expr
from schema_synth.scanner import ScanContext, StructFlattener
from schema_synth.schema import Schema, SchemaTarget


@pytest.fixture
def mapper_for(make_program):
    """Build a property mapper over a one-file program; returns (mapper, source, context)."""

    def _build(decls, imports=None, extra_packages=None, config=None):
        program = make_program(decls, imports, extra_packages)
        context = ScanContext(program=program, config=config or ScanConfig())
        flattener = StructFlattener(context)
        return flattener.mapper, program.packages[0].files[0], context

    return _build


def _map(mapper, source, text):
    schema = Schema()
    mapper.map_type(source, parse_type_expr(text), SchemaTarget(schema))
    return schema


class TestPropertyMapper:
    """Test mapping of field type expressions"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("bool", {"type": "boolean"}),
            ("int32", {"type": "integer", "format": "int32"}),
            ("uint16", {"type": "integer", "format": "uint16"}),
            ("float64", {"type": "number", "format": "double"}),
            ("*string", {"type": "string"}),
            ("[]byte", {"type": "array", "items": {"type": "integer", "format": "uint8"}}),
            ("[][]bool", {"type": "array", "items": {"type": "array", "items": {"type": "boolean"}}}),
            ("map[string]bool", {"type": "object", "additionalProperties": {"type": "boolean"}}),
            ("map[int64]bool", {"type": "object"}),
            ("interface{}", {}),
            ("Unknown", {}),
        ],
    )
    def test_builtin_shapes(self, mapper_for, text, expected):
        mapper, source, _ = mapper_for([])
        assert _map(mapper, source, text).to_dict() == expected

    def test_struct_reference_is_queued(self, mapper_for):
        mapper, source, context = mapper_for([{"name": "Pet", "type": {"struct": []}}])
        schema = _map(mapper, source, "*Pet")
        assert schema.to_dict() == {"$ref": "#/definitions/Pet"}
        assert [decl.name for decl in context.worklist] == ["Pet"]

    def test_reference_uses_model_name(self, mapper_for):
        mapper, source, context = mapper_for([{"doc": "+swagger:model pet", "name": "Pet", "type": {"struct": []}}])
        schema = _map(mapper, source, "[]Pet")
        assert schema.to_dict() == {"type": "array", "items": {"$ref": "#/definitions/pet"}}
        assert context.worklist[0].internal_name == "Pet"

    def test_named_alias_follows_underlying_type(self, mapper_for):
        mapper, source, context = mapper_for(
            [
                {"name": "Names", "type": "[]Name"},
                {"name": "Name", "type": "string"},
            ]
        )
        assert _map(mapper, source, "Names").to_dict() == {"type": "array", "items": {"type": "string"}}
        assert not context.worklist

    def test_string_format_alias(self, mapper_for):
        mapper, source, _ = mapper_for(
            [
                {"doc": "+swagger:strfmt uuid", "name": "UUID", "type": "[16]byte"},
                {"doc": "+swagger:strfmt blocks", "name": "Blocks", "type": "[][]byte"},
            ]
        )
        assert _map(mapper, source, "UUID").to_dict() == {"type": "string", "format": "uuid"}
        assert _map(mapper, source, "Blocks").to_dict() == {"type": "array", "items": {"type": "string", "format": "blocks"}}

    def test_well_known_selector(self, mapper_for):
        mapper, source, _ = mapper_for([], imports=["time"])
        assert _map(mapper, source, "time.Time").to_dict() == {"type": "string", "format": "date-time"}

    def test_configured_well_known_type(self, mapper_for):
        config = ScanConfig(well_known_types={"github.com/shopspring/decimal.Decimal": ["number", ""]})
        mapper, source, _ = mapper_for([], imports=["github.com/shopspring/decimal"], config=config)
        assert _map(mapper, source, "decimal.Decimal").to_dict() == {"type": "number"}

    def test_selector_into_other_package(self, mapper_for):
        other = {
            "path": "example.com/app/common",
            "files": [{"path": "common/id.go", "decls": [{"name": "ID", "type": "int64"}, {"name": "Ref", "type": {"struct": []}}]}],
        }
        mapper, source, context = mapper_for([], imports=["example.com/app/common"], extra_packages=[other])
        assert _map(mapper, source, "common.ID").to_dict() == {"type": "integer", "format": "int64"}
        assert _map(mapper, source, "common.Ref").to_dict() == {"$ref": "#/definitions/Ref"}
        assert context.worklist[0].file.path == "common/id.go"

    def test_selector_errors(self, mapper_for):
        mapper, source, _ = mapper_for([], imports=["example.com/app/missing"])
        with pytest.raises(UnresolvedImportError):
            _map(mapper, source, "nope.Thing")
        with pytest.raises(UnresolvedImportError):
            _map(mapper, source, "missing.Thing")

    def test_unsupported_shapes(self, mapper_for):
        mapper, source, _ = mapper_for([])
        with pytest.raises(UnsupportedConstructError):
            _map(mapper, source, "func()")
        with pytest.raises(UnsupportedConstructError):
            _map(mapper, source, "[]chan int")

    def test_inline_struct(self, mapper_for):
        mapper, source, _ = mapper_for([])
        schema = Schema()
        struct = StructType(fields=[Field(names=["Count"], type=parse_type_expr("int"), tag='`json:"count"`')])
        mapper.map_type(source, struct, SchemaTarget(schema))
        assert schema.to_dict() == {
            "type": "object",
            "properties": {"count": {"type": "integer", "format": "int64", "x-go-name": "Count"}},
        }


if __name__ == "__main__":
    pytest.main([__file__])
