"""Parse rule definitions written as YAML documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml

from rules_generator.documents.models import (
    Example,
    RuleDocument,
    RuleMetadata,
    Snippet,
    SnippetKind,
)
from rules_generator.errors import PathError, SchemaError

INCLUDE_TAG = "!include"


class ElementPairs(list):
    """A YAML mapping kept as ordered ``(key, value)`` pairs, duplicates included."""

    def keys(self) -> list[str]:
        return [key for key, _ in self]

    def first(self, key: str, default: Any = None) -> Any:
        for item_key, value in self:
            if item_key == key:
                return value
        return default


class _DocumentLoader(yaml.SafeLoader):
    def __init__(self, stream: str, base_dir: Path) -> None:
        super().__init__(stream)
        self.base_dir = base_dir


def _construct_include(loader: _DocumentLoader, node: yaml.Node) -> str:
    relative = loader.construct_scalar(node)
    path = loader.base_dir / str(relative)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PathError(path, f"Cannot read included fragment ({exc.strerror or exc})") from exc


_DocumentLoader.add_constructor(INCLUDE_TAG, _construct_include)


class _ElementTreeLoader(_DocumentLoader):
    pass


def _construct_pairs(loader: _ElementTreeLoader, node: yaml.MappingNode) -> ElementPairs:
    pairs = ElementPairs()
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=True)
        value = loader.construct_object(value_node, deep=True)
        pairs.append((key, value))
    return pairs


_ElementTreeLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_pairs
)


def _load(loader_cls: type[_DocumentLoader], data: bytes, base_dir: Path) -> Any:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaError([f"document is not valid UTF-8 ({exc.reason})"]) from exc
    loader = loader_cls(text, base_dir)
    try:
        return loader.get_single_data()
    except yaml.YAMLError as exc:
        raise SchemaError([f"document is not well-formed YAML ({exc})"]) from exc
    finally:
        loader.dispose()


def load_element_tree(data: bytes, base_dir: Path = Path(".")) -> Any:
    """Load a document keeping element order and repeated keys for validation."""
    return _load(_ElementTreeLoader, data, base_dir)


def load_document_mapping(data: bytes, base_dir: Path = Path(".")) -> Any:
    return _load(_DocumentLoader, data, base_dir)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _items(value: Any) -> Optional[tuple[str, ...]]:
    if value is None:
        return None
    if not isinstance(value, list):
        value = [value]
    return tuple(str(item).strip() for item in value if item is not None)


def _parse_flag(value: Any, location: str) -> bool:
    if not isinstance(value, bool):
        raise SchemaError([f"{location} must be a boolean, found {value!r}"])
    return value


def _parse_metadata(raw: Any) -> Optional[RuleMetadata]:
    if not isinstance(raw, dict):
        return None
    globs = raw.get("globs", [])
    if isinstance(globs, str):
        globs = [part.strip() for part in globs.split(",") if part.strip()]
    if not isinstance(globs, list):
        globs = []
    return RuleMetadata(
        name=str(raw.get("name", "") or "").strip(),
        description=str(raw.get("description", "") or "").strip(),
        globs=tuple(str(g) for g in globs),
        always_apply=_parse_flag(raw.get("alwaysApply", False), "metadata.alwaysApply"),
    )


def _parse_index(raw: Any, position: int) -> int:
    value = raw.get("index")
    if value is None:
        return position
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError([f"examples[{position}].index must be an integer, found {value!r}"])
    return value


def _parse_snippet(raw: Any) -> Snippet:
    if not isinstance(raw, dict):
        return Snippet(language="", code=str(raw if raw is not None else "").rstrip("\n"))
    kind = raw.get("kind") or SnippetKind.NEUTRAL.value
    return Snippet(
        language=str(raw.get("language", "") or "").strip(),
        code=str(raw.get("code", "") or "").rstrip("\n"),
        kind=str(kind).strip().lower(),
    )


def _parse_examples(raw: Any) -> tuple[Example, ...]:
    if not isinstance(raw, list):
        return ()
    examples: list[Example] = []
    for position, item in enumerate(raw, start=1):
        if not isinstance(item, dict):
            item = {}
        snippets_raw = item.get("snippets", [])
        if not isinstance(snippets_raw, list):
            snippets_raw = [snippets_raw]
        examples.append(
            Example(
                index=_parse_index(item, position),
                title=str(item.get("title", "") or "").strip(),
                description=str(item.get("description", "") or "").strip(),
                snippets=tuple(_parse_snippet(s) for s in snippets_raw),
            )
        )
    return tuple(examples)


def build_document(raw: Any, source_name: str = "") -> RuleDocument:
    if not isinstance(raw, dict):
        raw = {}
    return RuleDocument(
        metadata=_parse_metadata(raw.get("metadata")),
        role=_text(raw.get("role")),
        goal=_text(raw.get("goal")),
        context=_text(raw.get("context")),
        instructions=_items(raw.get("instructions")),
        examples=_parse_examples(raw.get("examples")),
        output_format=_items(raw.get("outputFormat")),
        safeguards=_items(raw.get("safeguards")),
        source_name=source_name,
    )


def parse_document(
    data: bytes, base_dir: Path = Path("."), source_name: str = ""
) -> RuleDocument:
    return build_document(load_document_mapping(data, base_dir), source_name)

