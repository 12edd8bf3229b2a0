"""Load template programs and resolve their placeholders up front."""

from __future__ import annotations

from string import Formatter
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from rules_generator.errors import TemplateError
from rules_generator.templates.models import (
    NODE_FIELDS,
    REQUIRED_NODES,
    NodeKind,
    Segment,
    TemplateProgram,
    TemplateRule,
)
from rules_generator.utils import format_schema_error

TEMPLATE_PROGRAM_META: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["version", "rules"],
    "additionalProperties": False,
    "properties": {
        "version": {"const": 1},
        "rules": {
            "type": "object",
            "propertyNames": {"enum": [kind.value for kind in NodeKind]},
            "additionalProperties": {"type": "string"},
        },
    },
}


def compile_pattern(kind: NodeKind, pattern: str) -> TemplateRule:
    allowed = NODE_FIELDS[kind]
    segments: list[Segment] = []
    try:
        parsed = list(Formatter().parse(pattern.strip("\n")))
    except ValueError as exc:
        raise TemplateError(f"Malformed template rule '{kind.value}' ({exc})") from exc

    for literal, field_name, format_spec, conversion in parsed:
        if field_name is None:
            segments.append(Segment(literal=literal))
            continue
        if format_spec or conversion:
            raise TemplateError(
                f"Template rule '{kind.value}' does not support format specs",
                field=field_name,
            )
        if field_name not in allowed:
            raise TemplateError(
                f"Unresolvable reference in template rule '{kind.value}'",
                field=field_name or "{}",
            )
        segments.append(Segment(literal=literal, field=field_name))
    return TemplateRule(kind=kind, segments=tuple(segments))


def parse_template_program(data: bytes) -> TemplateProgram:
    try:
        raw = yaml.safe_load(data.decode("utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError) as exc:
        raise TemplateError(f"Template program is not well-formed YAML ({exc})") from exc

    validator = Draft202012Validator(TEMPLATE_PROGRAM_META)
    error = next(iter(validator.iter_errors(raw)), None)
    if error is not None:
        raise TemplateError(f"Invalid template program ({format_schema_error(error)})")

    rules = {
        NodeKind(name): compile_pattern(NodeKind(name), pattern)
        for name, pattern in raw["rules"].items()
    }
    for kind in REQUIRED_NODES:
        if kind not in rules:
            raise TemplateError("Template program is missing rule", field=kind.value)
    return TemplateProgram(rules=rules)
