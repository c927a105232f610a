import json

import pytest

from schema_synth.config import OutputFormat, ScanConfig
from schema_synth.output import render, render_json, render_markdown
from schema_synth.output.render import describe_constraints, describe_type
from schema_synth.scanner import scan_program
from schema_synth.schema import Schema


class TestDescribe:
    """Test the property summaries used by the Markdown renderer"""

    @pytest.mark.parametrize(
        "schema,expected",
        [
            (Schema(ref="#/definitions/Pet"), "Pet"),
            (Schema(type="array", items=Schema(type="string")), "[]string"),
            (Schema(type="object", additional_properties=Schema(type="integer", format="int32")), "map[string]integer (int32)"),
            (Schema(type="string", format="date-time"), "string (date-time)"),
            (Schema(), "any"),
        ],
    )
    def test_describe_type(self, schema, expected):
        assert describe_type(schema) == expected

    def test_describe_constraints(self):
        schema = Schema(type="string", description="d", min_length=2, pattern="^a", extensions={"x-go-name": "A"})
        assert describe_constraints(schema) == "minLength=2, pattern=^a"


class TestRender:
    """Test JSON and Markdown rendering of scanned definitions"""

    def test_render_json(self, petstore):
        out = render_json(scan_program(petstore), generated_by="schema_synth petstore.json out.json")
        document = json.loads(out)
        assert document["x-generated-by"] == "schema_synth petstore.json out.json"
        assert list(document["definitions"]) == ["Base64", "Category", "DateTime", "Entity", "pet"]
        assert out.endswith("\n")

    def test_render_json_without_marker(self, petstore):
        document = json.loads(render_json(scan_program(petstore), indent=4))
        assert "x-generated-by" not in document

    def test_render_markdown(self, petstore):
        out = render_markdown(scan_program(petstore), generated_by="schema_synth")
        assert out.startswith("<!-- Generated by: schema_synth -->")
        assert "# Definitions" in out
        assert "## pet" in out
        assert "Pet represents a pet in the store." in out
        assert "| name | string | yes | minLength=3 | The name of the pet. |" in out
        assert "| category | Category | yes |  |  |" in out
        assert "| tags | []string |  | maxItems=10, uniqueItems=True |  |" in out
        assert "Type: string (byte)" in out

    def test_render_markdown_all_of(self):
        definitions = {"Dog": Schema(type="object", all_of=[Schema(ref="#/definitions/Animal")])}
        out = render_markdown(definitions)
        assert "Composed of: Animal" in out

    def test_render_markdown_escapes_table_cells(self):
        definitions = {"Code": Schema(type="object", properties={"code": Schema(type="string", pattern="^(a|b)$", description="One of a|b.\nCase matters.")})}
        out = render_markdown(definitions)
        assert "| code | string |  | pattern=^(a\\|b)$ | One of a\\|b. Case matters. |" in out

    def test_render_dispatches_on_format(self, petstore):
        definitions = scan_program(petstore)
        config = ScanConfig()
        config.output.format = OutputFormat.MARKDOWN
        config.add_generation_comment = False
        out = render(definitions, config, "schema_synth")
        assert out.startswith("# Definitions")

        config.output.format = OutputFormat.JSON
        assert json.loads(render(definitions, config, "schema_synth"))["definitions"]


if __name__ == "__main__":
    pytest.main([__file__])
