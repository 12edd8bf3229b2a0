"""Build manifest: which rules to generate, from where, to where."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from jsonschema import Draft202012Validator

from rules_generator.constants import (
    DEFAULT_TEMPLATE_PATH,
    RULE_EXTENSIONS,
    SOURCE_EXTENSION,
)
from rules_generator.errors import ManifestError
from rules_generator.utils import format_schema_error, read_input

MANIFEST_META: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["rules"],
    "additionalProperties": False,
    "properties": {
        "template": {"type": "string", "minLength": 1},
        "schema": {"type": "string", "minLength": 1},
        "source": {"type": "string", "minLength": 1},
        "output": {"type": "string", "minLength": 1},
        "extension": {"enum": list(RULE_EXTENSIONS)},
        "rules": {
            "type": "array",
            "items": {"type": "string", "minLength": 1, "pattern": r"^[^/\\]+$"},
            "uniqueItems": True,
        },
    },
}


@dataclass(frozen=True)
class BuildManifest:
    template: Path
    source_dir: Path
    output_dir: Path
    rules: tuple[str, ...]
    schema: Optional[Path] = None
    extension: str = RULE_EXTENSIONS[0]

    def document_path(self, rule_id: str) -> Path:
        return self.source_dir / f"{rule_id}{SOURCE_EXTENSION}"

    def output_path(self, rule_id: str) -> Path:
        return self.output_dir / f"{rule_id}{self.extension}"


def load_manifest(path: Path) -> BuildManifest:
    data = read_input(path, "build manifest")
    try:
        raw = yaml.safe_load(data.decode("utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ManifestError(path, f"not well-formed YAML: {exc}") from exc

    error = next(iter(Draft202012Validator(MANIFEST_META).iter_errors(raw)), None)
    if error is not None:
        raise ManifestError(path, format_schema_error(error))

    root = path.parent
    schema = raw.get("schema")
    return BuildManifest(
        template=root / raw["template"] if "template" in raw else DEFAULT_TEMPLATE_PATH,
        schema=root / schema if schema else None,
        source_dir=root / raw.get("source", "."),
        output_dir=root / raw.get("output", "build"),
        rules=tuple(raw["rules"]),
        extension=raw.get("extension", RULE_EXTENSIONS[0]),
    )
