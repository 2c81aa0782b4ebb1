"""
Functional tests for the pipeline generator.

Each JSON test case describes the spec schema of a single CRD, an optional
generator configuration and patterns expected in the generated Go file.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from crd_schema_to_go.pipeline import GeneratorConfig, PipelineGenerator


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    functional_dir = Path(__file__).parent / "test_data" / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _crd_document(test_case):
    """Wrap the schemas of a test case into a CRD document."""
    kind = test_case["kind"]
    properties = {"spec": test_case["spec"]}
    if "status" in test_case:
        properties["status"] = test_case["status"]
    return {
        "apiVersion": "apiextensions.k8s.io/v1",
        "kind": "CustomResourceDefinition",
        "spec": {
            "group": "example.com",
            "names": {"kind": kind, "plural": f"{kind.lower()}s"},
            "versions": [
                {
                    "name": "v1",
                    "schema": {"openAPIV3Schema": {"type": "object", "properties": properties}},
                }
            ],
        },
    }


def _generate_code(test_case):
    config = GeneratorConfig.from_dict(test_case.get("config", {}))
    generator = PipelineGenerator(config)
    # JSON is valid YAML
    generated = generator.generate_stream(json.dumps(_crd_document(test_case)))
    return generator.render(generated)


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda tc: tc["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    generated_code = _generate_code(test_case)

    for pattern in test_case.get("expected_contains", []):
        assert pattern in generated_code, f"Expected pattern {pattern!r} not found in output of {test_case['name']}"

    for pattern in test_case.get("expected_not_contains", []):
        assert pattern not in generated_code, f"Unexpected pattern {pattern!r} found in output of {test_case['name']}"


if __name__ == "__main__":
    pytest.main([__file__])
