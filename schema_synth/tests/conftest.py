import json
from pathlib import Path

import pytest

from schema_synth.program import ProgramLoader

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def single_file_manifest(decls, imports=None, path="example.com/app/models"):
    """Manifest with one package holding one file."""
    return {
        "packages": [
            {
                "path": path,
                "files": [{"path": "models/types.go", "imports": imports or [], "decls": decls}],
            }
        ]
    }


@pytest.fixture
def make_program():
    """Build a program from declarations placed in a single file."""

    def _make(decls, imports=None, extra_packages=None):
        manifest = single_file_manifest(decls, imports)
        manifest["packages"].extend(extra_packages or [])
        return ProgramLoader().load(manifest)

    return _make


@pytest.fixture
def petstore():
    with open(TEST_DATA_DIR / "programs" / "petstore.json") as f:
        return ProgramLoader().load(json.load(f))


@pytest.fixture
def petstore_path():
    return TEST_DATA_DIR / "programs" / "petstore.json"
