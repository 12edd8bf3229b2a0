"""Tests for schema-table validation of rule documents."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from rules_generator.errors import SchemaError
from rules_generator.schema.validator import validate


def _bytes(payload: Any) -> bytes:
    return yaml.safe_dump(payload, sort_keys=False).encode("utf-8")


def _violations(document: bytes, schema_path: Path) -> list[str]:
    with pytest.raises(SchemaError) as exc_info:
        validate(document, schema_path.read_bytes())
    return exc_info.value.violations


def test_minimal_document_is_valid(rule_payload, schema_path: Path) -> None:
    assert validate(_bytes(rule_payload()), schema_path.read_bytes()) is None


def test_full_document_is_valid(rule_payload, two_examples, schema_path: Path) -> None:
    payload = rule_payload(
        context="Legacy code",
        instructions=["Read first"],
        examples=two_examples,
        outputFormat=["List issues"],
        safeguards=["Run the tests"],
    )
    validate(_bytes(payload), schema_path.read_bytes())


def test_missing_role_is_reported(rule_payload, schema_path: Path) -> None:
    violations = _violations(_bytes(rule_payload(role=None)), schema_path)
    assert "document: missing required element 'role'" in violations


def test_out_of_order_element_is_reported(schema_path: Path) -> None:
    document = (
        b"metadata:\n  name: N\n  description: D\n"
        b"goal: Prevent NPEs\n"
        b"role: Enforce null-safety\n"
    )
    violations = _violations(document, schema_path)
    assert any("'goal' is out of order" in item for item in violations)


def test_repeated_element_is_reported(schema_path: Path) -> None:
    document = (
        b"metadata:\n  name: N\n  description: D\n"
        b"role: one\n"
        b"role: two\n"
        b"goal: g\n"
    )
    violations = _violations(document, schema_path)
    assert any("'role' appears 2 times (max 1)" in item for item in violations)


def test_unexpected_element_is_reported(rule_payload, schema_path: Path) -> None:
    violations = _violations(_bytes(rule_payload(audience="everyone")), schema_path)
    assert "document: unexpected element 'audience'" in violations


def test_all_violations_are_collected(schema_path: Path) -> None:
    violations = _violations(b"context: only context\n", schema_path)
    assert len(violations) >= 3
    assert "document: missing required element 'metadata'" in violations


def test_empty_output_format_is_rejected(rule_payload, schema_path: Path) -> None:
    violations = _violations(_bytes(rule_payload(outputFormat=[])), schema_path)
    assert any(item.startswith("outputFormat: expected at least 1") for item in violations)


def test_empty_safeguard_item_is_rejected(rule_payload, schema_path: Path) -> None:
    violations = _violations(_bytes(rule_payload(safeguards=["  "])), schema_path)
    assert "safeguards[1]: must not be empty" in violations


def test_nested_example_elements_are_checked(rule_payload, schema_path: Path) -> None:
    examples = [{"title": "T", "snippets": [{"language": "java", "code": "x"}]}]
    violations = _violations(_bytes(rule_payload(examples=examples)), schema_path)
    assert "examples[1]: missing required element 'description'" in violations


def test_example_index_gap_is_rejected(rule_payload, two_examples, schema_path: Path) -> None:
    two_examples[1] = {"index": 3, **two_examples[1]}
    violations = _violations(_bytes(rule_payload(examples=two_examples)), schema_path)
    assert any("indices must run 1..2" in item for item in violations)


def test_examples_need_good_and_bad_snippets(rule_payload, schema_path: Path) -> None:
    examples = [
        {
            "title": "Only good",
            "description": "d",
            "snippets": [{"language": "java", "kind": "good", "code": "x"}],
        }
    ]
    violations = _violations(_bytes(rule_payload(examples=examples)), schema_path)
    assert "examples: at least one 'bad' snippet is required" in violations


def test_unknown_snippet_kind_is_rejected(rule_payload, two_examples, schema_path: Path) -> None:
    two_examples[0]["snippets"][0]["kind"] = "ugly"
    violations = _violations(_bytes(rule_payload(examples=two_examples)), schema_path)
    assert any("'ugly' is not one of" in item for item in violations)


def test_build_tool_rule_needs_command_safeguard(rule_payload, schema_path: Path) -> None:
    payload = rule_payload(
        metadata={"name": "Maven Dependencies", "description": "Manage deps", "globs": ["pom.xml"]},
        safeguards=["Review the dependency list"],
    )
    violations = _violations(_bytes(payload), schema_path)
    assert "safeguards: maven rule must include a safeguard invoking maven" in violations

    payload["safeguards"].append("Run `./mvnw clean verify`")
    validate(_bytes(payload), schema_path.read_bytes())


def test_error_message_names_first_violation(rule_payload, schema_path: Path) -> None:
    with pytest.raises(SchemaError) as exc_info:
        validate(_bytes(rule_payload(goal=None)), schema_path.read_bytes())
    assert "missing required element 'goal'" in str(exc_info.value)


def test_snippet_code_with_fence_line_is_rejected(rule_payload, two_examples, schema_path: Path) -> None:
    two_examples[0]["snippets"][0]["code"] = "```java\nint x;\n```\n"
    violations = _violations(_bytes(rule_payload(examples=two_examples)), schema_path)
    assert (
        "examples[1].snippets[1].code: must not contain a line starting with a code fence"
        in violations
    )


def test_fractional_index_is_rejected(rule_payload, two_examples, schema_path: Path) -> None:
    two_examples[0] = {"index": 1.9, **two_examples[0]}
    violations = _violations(_bytes(rule_payload(examples=two_examples)), schema_path)
    assert "examples[1].index: expected an integer" in violations


def test_empty_snippet_code_is_accepted(rule_payload, two_examples, schema_path: Path) -> None:
    two_examples[1]["snippets"][0]["code"] = ""
    validate(_bytes(rule_payload(examples=two_examples)), schema_path.read_bytes())


def test_multiline_safeguard_with_command_is_accepted(rule_payload, schema_path: Path) -> None:
    payload = rule_payload(
        metadata={"name": "Maven Builds", "description": "d", "globs": ["pom.xml"]},
        safeguards=["Before committing run:\n./mvnw clean verify"],
    )
    validate(_bytes(payload), schema_path.read_bytes())
