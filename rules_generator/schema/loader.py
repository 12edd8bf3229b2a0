"""Load and meta-validate schema tables."""

from __future__ import annotations

from typing import Any, Optional

import yaml
from jsonschema import Draft202012Validator

from rules_generator.errors import SchemaError
from rules_generator.schema.models import (
    UNBOUNDED,
    ElementRule,
    ElementType,
    ItemsRule,
    RuleSchema,
)
from rules_generator.utils import format_schema_error

_BOUND = {"oneOf": [{"type": "integer", "minimum": 1}, {"const": UNBOUNDED}]}
_TYPE = {"enum": [item.value for item in ElementType]}

SCHEMA_TABLE_META: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["version", "root", "tables"],
    "additionalProperties": False,
    "properties": {
        "version": {"const": 1},
        "root": {"type": "string", "minLength": 1},
        "tables": {
            "type": "object",
            "minProperties": 1,
            "additionalProperties": {
                "type": "object",
                "additionalProperties": {"$ref": "#/$defs/element"},
            },
        },
    },
    "$defs": {
        "element": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "min": {"enum": [0, 1]},
                "max": _BOUND,
                "mustFollow": {"type": "array", "items": {"type": "string"}},
                "type": _TYPE,
                "table": {"type": "string"},
                "empty": {"type": "boolean"},
                "items": {
                    "type": "object",
                    "additionalProperties": False,
                    "properties": {
                        "min": {"type": "integer", "minimum": 0},
                        "max": _BOUND,
                        "type": _TYPE,
                        "table": {"type": "string"},
                        "empty": {"type": "boolean"},
                    },
                },
            },
        }
    },
}


def _bound(value: Any) -> Optional[int]:
    return None if value == UNBOUNDED else int(value)


def _element(name: str, raw: dict[str, Any]) -> ElementRule:
    items_raw = raw.get("items")
    items = None
    if isinstance(items_raw, dict):
        items = ItemsRule(
            min=int(items_raw.get("min", 0)),
            max=_bound(items_raw.get("max", UNBOUNDED)),
            type=ElementType(items_raw.get("type", ElementType.TEXT.value)),
            table=items_raw.get("table"),
            allow_empty=bool(items_raw.get("empty", False)),
        )
    return ElementRule(
        name=name,
        min=int(raw.get("min", 0)),
        max=_bound(raw.get("max", 1)),
        must_follow=tuple(raw.get("mustFollow", [])),
        type=ElementType(raw.get("type", ElementType.TEXT.value)),
        table=raw.get("table"),
        items=items,
        allow_empty=bool(raw.get("empty", False)),
    )


def _check_references(schema: RuleSchema) -> None:
    problems: list[str] = []
    if schema.root not in schema.tables:
        problems.append(f"schema root table '{schema.root}' is not defined")
    for table_name, rules in schema.tables.items():
        names = {rule.name for rule in rules}
        for rule in rules:
            for other in rule.must_follow:
                if other not in names:
                    problems.append(
                        f"{table_name}.{rule.name}: mustFollow references unknown element '{other}'"
                    )
            for nested in (rule.table, rule.items.table if rule.items else None):
                if nested is not None and nested not in schema.tables:
                    problems.append(
                        f"{table_name}.{rule.name}: table '{nested}' is not defined"
                    )
    if problems:
        raise SchemaError(problems)


def parse_schema(data: bytes) -> RuleSchema:
    try:
        raw = yaml.safe_load(data.decode("utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError) as exc:
        raise SchemaError([f"schema is not well-formed YAML ({exc})"]) from exc

    validator = Draft202012Validator(SCHEMA_TABLE_META)
    errors = sorted(validator.iter_errors(raw), key=lambda item: [str(part) for part in item.path])
    if errors:
        raise SchemaError([f"invalid schema table: {format_schema_error(e)}" for e in errors])

    schema = RuleSchema(
        root=raw["root"],
        tables={
            table_name: tuple(_element(name, rule or {}) for name, rule in elements.items())
            for table_name, elements in raw["tables"].items()
        },
    )
    _check_references(schema)
    return schema
