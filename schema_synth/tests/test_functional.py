"""
Functional tests for schema synthesis.

Each case in test_data/functional/*_tests.json describes a program manifest
(inline or from a file) and either the definitions expected from scanning it
or the error the scan must raise.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from schema_synth import errors
from schema_synth.config import ScanConfig
from schema_synth.program import ProgramLoader
from schema_synth.scanner import SchemaScanner
from schema_synth.schema import definitions_to_dict

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory"""
    functional_dir = TEST_DATA_DIR / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            # Add source file info for debugging
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _load_manifest(test_case):
    """Load the manifest from a test case (either inline or from file)"""
    if "manifest" in test_case:
        return test_case["manifest"]
    elif "manifest_file" in test_case:
        with open(TEST_DATA_DIR / test_case["manifest_file"]) as f:
            return json.load(f)
    else:
        raise ValueError("Test case must have either 'manifest' or 'manifest_file'")


def _scan(test_case):
    program = ProgramLoader().load(_load_manifest(test_case))
    config = ScanConfig.from_dict(test_case.get("config", {}))
    return definitions_to_dict(SchemaScanner(program, config).scan())


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda tc: tc["name"])
def test_functional_scan(test_case):
    """Unified test for all JSON test cases using a single pattern"""
    name = test_case["name"]
    source_file = test_case.get("_source_file", "unknown")

    print(f"\nTesting: {name} (from {source_file})")
    print(f"Description: {test_case['description']}")

    if "expected_error" in test_case:
        error_class = getattr(errors, test_case["expected_error"])
        with pytest.raises(error_class):
            _scan(test_case)
        return

    definitions = _scan(test_case)

    for schema_name, expected in test_case.get("expected", {}).items():
        assert schema_name in definitions, f"Definition '{schema_name}' missing, found {sorted(definitions)}"
        assert definitions[schema_name] == expected, f"Definition '{schema_name}' differs"

    for schema_name in test_case.get("expected_absent", []):
        assert schema_name not in definitions, f"Unexpected definition '{schema_name}'"


if __name__ == "__main__":
    pytest.main([__file__])
