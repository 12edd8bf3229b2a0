"""Validate rule documents against a schema table and the rule invariants."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rules_generator.constants import detect_build_tools
from rules_generator.documents.models import RuleDocument, SnippetKind
from rules_generator.documents.parser import ElementPairs, build_document, load_element_tree
from rules_generator.errors import SchemaError
from rules_generator.schema.loader import parse_schema
from rules_generator.schema.models import ElementRule, ElementType, ItemsRule, RuleSchema

_SNIPPET_KINDS = tuple(kind.value for kind in SnippetKind)


def _at(location: str, key: str) -> str:
    return f"{location}.{key}" if location else key


def _plain(value: Any) -> Any:
    """Turn an element tree back into plain dicts and lists."""
    if isinstance(value, ElementPairs):
        return {key: _plain(item) for key, item in value}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


class SchemaValidator:
    def __init__(self, schema: RuleSchema) -> None:
        self._schema = schema

    def check_tree(self, tree: Any) -> list[str]:
        violations: list[str] = []
        self._check_table(tree, self._schema.root, "", violations)
        return violations

    def _check_table(
        self, pairs: Any, table_name: str, location: str, violations: list[str]
    ) -> None:
        where = location or "document"
        if not isinstance(pairs, ElementPairs):
            violations.append(f"{where}: expected a mapping of elements")
            return

        rules = self._schema.table(table_name)
        by_name = {rule.name: rule for rule in rules}
        keys = pairs.keys()

        for key in keys:
            if key not in by_name:
                violations.append(f"{where}: unexpected element '{key}'")

        for rule in rules:
            count = keys.count(rule.name)
            if count < rule.min:
                violations.append(f"{where}: missing required element '{rule.name}'")
            if rule.max is not None and count > rule.max:
                violations.append(
                    f"{where}: element '{rule.name}' appears {count} times (max {rule.max})"
                )

        first_seen: dict[str, int] = {}
        for position, key in enumerate(keys):
            first_seen.setdefault(key, position)
        for rule in rules:
            if rule.name not in first_seen:
                continue
            for other in rule.must_follow:
                if other in first_seen and first_seen[other] > first_seen[rule.name]:
                    violations.append(
                        f"{where}: element '{rule.name}' is out of order (must follow '{other}')"
                    )

        for key, value in pairs:
            rule = by_name.get(key)
            if rule is None:
                continue
            self._check_value(value, rule, _at(location, key), violations)

    def _check_value(
        self,
        value: Any,
        rule: ElementRule | ItemsRule,
        location: str,
        violations: list[str],
    ) -> None:
        if rule.type == ElementType.TEXT:
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                violations.append(f"{location}: expected text")
            elif not str(value).strip() and not rule.allow_empty:
                violations.append(f"{location}: must not be empty")
        elif rule.type == ElementType.INTEGER:
            if isinstance(value, bool) or not isinstance(value, int):
                violations.append(f"{location}: expected an integer")
        elif rule.type == ElementType.BOOLEAN:
            if not isinstance(value, bool):
                violations.append(f"{location}: expected a boolean")
        elif rule.type == ElementType.MAPPING:
            if rule.table is not None:
                self._check_table(value, rule.table, location, violations)
            elif not isinstance(value, ElementPairs):
                violations.append(f"{location}: expected a mapping of elements")
        elif rule.type == ElementType.LIST:
            self._check_list(value, rule, location, violations)

    def _check_list(
        self,
        value: Any,
        rule: ElementRule | ItemsRule,
        location: str,
        violations: list[str],
    ) -> None:
        if isinstance(value, ElementPairs) or not isinstance(value, list):
            violations.append(f"{location}: expected a list")
            return
        items = rule.items if isinstance(rule, ElementRule) else None
        if items is None:
            items = ItemsRule()
        if len(value) < items.min:
            violations.append(
                f"{location}: expected at least {items.min} item(s), found {len(value)}"
            )
        if items.max is not None and len(value) > items.max:
            violations.append(
                f"{location}: expected at most {items.max} item(s), found {len(value)}"
            )
        for position, item in enumerate(value, start=1):
            self._check_value(item, items, f"{location}[{position}]", violations)

    def check_document(self, document: RuleDocument) -> list[str]:
        return check_invariants(document)


def check_invariants(document: RuleDocument) -> list[str]:
    violations: list[str] = []

    indices = [example.index for example in document.examples]
    expected = list(range(1, len(indices) + 1))
    if indices != expected:
        violations.append(
            f"examples: indices must run 1..{len(indices)} without gaps or repeats, found {indices}"
        )

    for example in document.examples:
        for position, snippet in enumerate(example.snippets, start=1):
            if snippet.kind not in _SNIPPET_KINDS:
                violations.append(
                    f"examples[{example.index}].snippets[{position}].kind: "
                    f"'{snippet.kind}' is not one of {', '.join(_SNIPPET_KINDS)}"
                )
            if snippet.contains_fence:
                violations.append(
                    f"examples[{example.index}].snippets[{position}].code: "
                    "must not contain a line starting with a code fence"
                )

    if document.examples:
        kinds = {snippet.kind for snippet in document.snippets}
        for required in (SnippetKind.GOOD, SnippetKind.BAD):
            if required.value not in kinds:
                violations.append(
                    f"examples: at least one '{required.value}' snippet is required"
                )

    if document.safeguards:
        for tool in detect_build_tools(*_domain_texts(document)):
            if not any(tool.invoked_in(item) for item in document.safeguards):
                violations.append(
                    f"safeguards: {tool.name} rule must include a safeguard invoking {tool.name}"
                )

    return violations


def _domain_texts(document: RuleDocument) -> list[str]:
    texts = [document.source_name, document.role or "", document.goal or ""]
    if document.metadata is not None:
        texts.extend([document.metadata.name, document.metadata.description])
        texts.extend(document.metadata.globs)
    return texts


def validate(
    document_bytes: bytes,
    schema_bytes: bytes,
    base_dir: Path = Path("."),
    source_name: str = "",
) -> None:
    """Raise ``SchemaError`` listing every violation; return ``None`` when valid."""
    validator = SchemaValidator(parse_schema(schema_bytes))
    tree = load_element_tree(document_bytes, base_dir)

    violations = validator.check_tree(tree)
    if violations:
        raise SchemaError(violations)

    document = build_document(_plain(tree), source_name)
    violations = validator.check_document(document)
    if violations:
        raise SchemaError(violations)
