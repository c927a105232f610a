import json

import pytest
from click.testing import CliRunner

from schema_synth.schema_synth import schema_synth


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    """Test the schema_synth command"""

    def test_writes_json_definitions(self, runner, petstore_path, tmp_path):
        output = tmp_path / "definitions.json"
        result = runner.invoke(schema_synth, [str(petstore_path), str(output)])

        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text())
        assert document["x-generated-by"] == "schema_synth petstore.json definitions.json"
        assert document["definitions"]["pet"]["required"] == ["name", "category"]

    def test_refuses_to_overwrite(self, runner, petstore_path, tmp_path):
        output = tmp_path / "definitions.json"
        output.write_text("keep me")
        result = runner.invoke(schema_synth, [str(petstore_path), str(output)])

        assert result.exit_code != 0
        assert "already exists" in result.output
        assert output.read_text() == "keep me"

    def test_force_overwrites(self, runner, petstore_path, tmp_path):
        output = tmp_path / "definitions.json"
        output.write_text("old")
        result = runner.invoke(schema_synth, [str(petstore_path), str(output), "--force"])

        assert result.exit_code == 0, result.output
        assert "definitions" in json.loads(output.read_text())

    def test_markdown_format(self, runner, petstore_path, tmp_path):
        output = tmp_path / "definitions.md"
        result = runner.invoke(schema_synth, [str(petstore_path), str(output), "--format", "markdown"])

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert "# Definitions" in content
        assert "## Category" in content

    def test_config_file(self, runner, petstore_path, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"annotated_only": True, "add_generation_comment": False}))
        output = tmp_path / "definitions.json"
        result = runner.invoke(schema_synth, [str(petstore_path), str(output), "--config", str(config)])

        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text())
        assert "x-generated-by" not in document
        # Only the annotated model and what it references; embedded Entity is flattened
        assert sorted(document["definitions"]) == ["Category", "pet"]

    def test_annotated_only_flag(self, runner, petstore_path, tmp_path):
        output = tmp_path / "definitions.json"
        result = runner.invoke(schema_synth, [str(petstore_path), str(output), "--annotated-only"])

        assert result.exit_code == 0, result.output
        assert "Base64" not in json.loads(output.read_text())["definitions"]

    def test_scan_error_is_reported(self, runner, tmp_path):
        manifest = tmp_path / "broken.json"
        manifest.write_text(
            json.dumps(
                {
                    "packages": [
                        {
                            "path": "example.com/app",
                            "files": [{"path": "app.go", "decls": [{"name": "A", "type": {"struct": [{"name": "B", "type": "x.Y"}]}}]}],
                        }
                    ]
                }
            )
        )
        output = tmp_path / "out.json"
        result = runner.invoke(schema_synth, [str(manifest), str(output)])

        assert result.exit_code != 0
        assert "no import found for x" in result.output
        assert not output.exists()

    def test_invalid_manifest_is_reported(self, runner, tmp_path):
        manifest = tmp_path / "broken.json"
        manifest.write_text("{")
        result = runner.invoke(schema_synth, [str(manifest), str(tmp_path / "out.json")])

        assert result.exit_code != 0
        assert "not valid JSON" in result.output

    def test_non_object_declaration_is_reported(self, runner, tmp_path):
        manifest = tmp_path / "broken.json"
        manifest.write_text(json.dumps({"packages": [{"path": "example.com/app", "files": [{"path": "app.go", "decls": ["type A int"]}]}]}))
        result = runner.invoke(schema_synth, [str(manifest), str(tmp_path / "out.json")])

        assert result.exit_code != 0
        assert "declaration entry must be an object" in result.output
        assert not isinstance(result.exception, AttributeError)


if __name__ == "__main__":
    pytest.main([__file__])
