"""Element nodes the transformer dispatches on.

A rule document is flattened into an ordered sequence of top-level nodes.
Each node carries only the fields its template rule may reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from rules_generator.documents.models import Example, RuleDocument, RuleMetadata
from rules_generator.errors import TemplateError
from rules_generator.templates.models import NodeKind


@dataclass(frozen=True)
class MetadataNode:
    kind: ClassVar[NodeKind] = NodeKind.FRONTMATTER
    metadata: RuleMetadata


@dataclass(frozen=True)
class TitleNode:
    kind: ClassVar[NodeKind] = NodeKind.TITLE
    name: str


@dataclass(frozen=True)
class TextNode:
    kind: NodeKind
    text: str


@dataclass(frozen=True)
class ListNode:
    kind: NodeKind
    item_kind: NodeKind
    items: tuple[str, ...]


@dataclass(frozen=True)
class ExamplesNode:
    kind: ClassVar[NodeKind] = NodeKind.EXAMPLES
    examples: tuple[Example, ...]


Node = Union[MetadataNode, TitleNode, TextNode, ListNode, ExamplesNode]


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise TemplateError("Required element is missing", field=field)
    return value


def _check_examples(examples: tuple[Example, ...]) -> None:
    for position, example in enumerate(examples, start=1):
        _require_text(example.title, f"examples[{position}].title")
        _require_text(example.description, f"examples[{position}].description")
        for number, snippet in enumerate(example.snippets, start=1):
            _require_text(
                snippet.language, f"examples[{position}].snippets[{number}].language"
            )
            if snippet.contains_fence:
                raise TemplateError(
                    "Snippet code would close its code block",
                    field=f"examples[{position}].snippets[{number}].code",
                )


def document_nodes(document: RuleDocument) -> list[Node]:
    if document.metadata is None:
        raise TemplateError("Required element is missing", field="metadata")
    _require_text(document.metadata.name, "metadata.name")

    nodes: list[Node] = [
        MetadataNode(document.metadata),
        TitleNode(document.metadata.name),
        TextNode(NodeKind.ROLE, _require_text(document.role, "role")),
        TextNode(NodeKind.GOAL, _require_text(document.goal, "goal")),
    ]
    if document.context is not None:
        nodes.append(TextNode(NodeKind.CONTEXT, document.context))
    if document.instructions is not None:
        nodes.append(
            ListNode(NodeKind.INSTRUCTIONS, NodeKind.INSTRUCTION, document.instructions)
        )
    if document.examples:
        _check_examples(document.examples)
        nodes.append(ExamplesNode(document.examples))
    if document.output_format is not None:
        nodes.append(
            ListNode(NodeKind.OUTPUT_FORMAT, NodeKind.OUTPUT_ITEM, document.output_format)
        )
    if document.safeguards is not None:
        nodes.append(
            ListNode(NodeKind.SAFEGUARDS, NodeKind.SAFEGUARD_ITEM, document.safeguards)
        )
    return nodes
