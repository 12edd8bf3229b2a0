"""Render rule documents through a template program."""

from __future__ import annotations

from typing import Any, Callable

import yaml

from rules_generator.documents.models import Example, RuleDocument, Snippet
from rules_generator.errors import TemplateError
from rules_generator.templates.models import NodeKind, TemplateProgram
from rules_generator.templates.nodes import (
    ExamplesNode,
    ListNode,
    MetadataNode,
    Node,
    TextNode,
    TitleNode,
    document_nodes,
)

BLOCK_SEPARATOR = "\n\n"
LINE_SEPARATOR = "\n"
CONTINUATION_INDENT = "  "


def _yaml_scalar(value: Any) -> str:
    """Serialize one frontmatter value as a single-line YAML scalar."""
    style = '"' if isinstance(value, str) and any(ch in value for ch in "\r\n") else None
    dumped = yaml.safe_dump(value, default_style=style, width=float("inf"), allow_unicode=True)
    return dumped.split("\n", 1)[0]


def _indent_continuation(text: str) -> str:
    first, *rest = text.split("\n")
    lines = [f"{CONTINUATION_INDENT}{line}" if line.strip() else "" for line in rest]
    return LINE_SEPARATOR.join([first, *lines])


class TemplateTransformer:
    """Walks a document top-down and emits one block per element node.

    Blocks are joined with a single blank line, so every section heading a
    rule emits on its first line is preceded by exactly one blank line.
    """

    def __init__(self, program: TemplateProgram) -> None:
        self._program = program
        self._handlers: dict[type, Callable[..., str]] = {
            MetadataNode: self._render_metadata,
            TitleNode: self._render_title,
            TextNode: self._render_text,
            ListNode: self._render_list,
            ExamplesNode: self._render_examples,
        }

    def render(self, document: RuleDocument) -> str:
        blocks = [self._render_node(node) for node in document_nodes(document)]
        return BLOCK_SEPARATOR.join(block for block in blocks if block) + "\n"

    def _render_node(self, node: Node) -> str:
        return self._handlers[type(node)](node)

    def _emit(self, kind: NodeKind, values: dict[str, str]) -> str:
        rule = self._program.rule_for(kind)
        if rule is None:
            raise TemplateError("No template rule for element", field=kind.value)
        parts: list[str] = []
        for segment in rule.segments:
            parts.append(segment.literal)
            if segment.field is not None:
                parts.append(values[segment.field])
        return "".join(parts).strip("\n")

    def _render_metadata(self, node: MetadataNode) -> str:
        metadata = node.metadata
        return self._emit(
            NodeKind.FRONTMATTER,
            {
                "name": _yaml_scalar(metadata.name),
                "description": _yaml_scalar(metadata.description),
                "globs": _yaml_scalar(",".join(metadata.globs)),
                "alwaysApply": _yaml_scalar(metadata.always_apply),
            },
        )

    def _render_title(self, node: TitleNode) -> str:
        return self._emit(NodeKind.TITLE, {"name": node.name})

    def _render_text(self, node: TextNode) -> str:
        return self._emit(node.kind, {"text": node.text})

    def _render_list(self, node: ListNode) -> str:
        items = [
            self._emit(
                node.item_kind,
                {"text": _indent_continuation(text), "position": str(position)},
            )
            for position, text in enumerate(node.items, start=1)
        ]
        return self._emit(node.kind, {"items": LINE_SEPARATOR.join(items)})

    def _render_examples(self, node: ExamplesNode) -> str:
        toc = [
            self._emit(NodeKind.TOC_ENTRY, {"index": str(example.index), "title": example.title})
            for example in node.examples
        ]
        items = [self._render_example(example) for example in node.examples]
        return self._emit(
            NodeKind.EXAMPLES,
            {
                "toc": LINE_SEPARATOR.join(toc),
                "items": BLOCK_SEPARATOR.join(items),
                "count": str(len(node.examples)),
            },
        )

    def _render_example(self, example: Example) -> str:
        snippets = [self._render_snippet(snippet) for snippet in example.snippets]
        return self._emit(
            NodeKind.EXAMPLE,
            {
                "index": str(example.index),
                "title": example.title,
                "description": example.description,
                "snippets": BLOCK_SEPARATOR.join(snippets),
            },
        )

    def _render_snippet(self, snippet: Snippet) -> str:
        try:
            kind = NodeKind(f"{snippet.kind}-snippet")
        except ValueError as exc:
            raise TemplateError("No template rule for snippet kind", field=snippet.kind) from exc
        return self._emit(kind, {"language": snippet.language, "code": snippet.code})


def render(document: RuleDocument, program: TemplateProgram) -> str:
    """Render ``document`` with a fresh transformer; same inputs, same bytes."""
    return TemplateTransformer(program).render(document)
