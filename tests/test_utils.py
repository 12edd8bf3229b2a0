from pathlib import Path

import pytest
from jsonschema import Draft202012Validator

from rules_generator.errors import PathError
from rules_generator.utils import (
    compact_home_path,
    compact_home_paths_in_text,
    format_schema_error,
    read_input,
    write_text,
)


# --- read_input ---


def test_read_input_returns_bytes(tmp_path: Path) -> None:
    path = tmp_path / "rule.yaml"
    path.write_bytes(b"role: r\n")

    assert read_input(path, "rule document") == b"role: r\n"


def test_read_input_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PathError) as excinfo:
        read_input(tmp_path / "missing.yaml", "rule document")

    assert excinfo.value.message == "Missing rule document"
    assert str(tmp_path / "missing.yaml") in str(excinfo.value)


def test_read_input_directory_is_not_readable(tmp_path: Path) -> None:
    with pytest.raises(PathError, match="Cannot read schema"):
        read_input(tmp_path, "schema")


# --- write_text ---


def test_write_text_creates_parents(tmp_path: Path) -> None:
    path = tmp_path / "out" / "nested" / "rule.md"

    write_text(path, "# Rule\n")

    assert path.read_text(encoding="utf-8") == "# Rule\n"


# --- format_schema_error ---


def test_format_schema_error_includes_location() -> None:
    validator = Draft202012Validator({"properties": {"rules": {"type": "array"}}})
    error = next(validator.iter_errors({"rules": "a"}))

    assert format_schema_error(error) == "'a' is not of type 'array' at rules"


def test_format_schema_error_at_root() -> None:
    error = next(Draft202012Validator({"type": "object"}).iter_errors([]))

    assert format_schema_error(error) == "[] is not of type 'object'"


# --- compact_home_path ---


def test_compact_home_path_for_absolute_home_path(tmp_path: Path) -> None:
    assert compact_home_path(tmp_path / "rules" / "110.yaml") == "~/rules/110.yaml"


def test_compact_home_path_leaves_other_paths(tmp_path: Path) -> None:
    assert compact_home_path("/opt/rules/110.yaml") == "/opt/rules/110.yaml"
    assert compact_home_path(tmp_path) == "~"


def test_compact_home_paths_in_text_rewrites_embedded_paths(tmp_path: Path) -> None:
    message = (
        f"Failed to generate rule for: {tmp_path / 'rules' / 'a.yaml'}, "
        f"{tmp_path / 'templates' / 'cursor.yaml'}"
    )

    result = compact_home_paths_in_text(message)

    assert "~/rules/a.yaml" in result
    assert "~/templates/cursor.yaml" in result
