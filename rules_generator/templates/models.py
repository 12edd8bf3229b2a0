"""Template program data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NodeKind(str, Enum):
    FRONTMATTER = "frontmatter"
    TITLE = "title"
    ROLE = "role"
    GOAL = "goal"
    CONTEXT = "context"
    INSTRUCTIONS = "instructions"
    INSTRUCTION = "instruction"
    EXAMPLES = "examples"
    TOC_ENTRY = "toc-entry"
    EXAMPLE = "example"
    GOOD_SNIPPET = "good-snippet"
    BAD_SNIPPET = "bad-snippet"
    NEUTRAL_SNIPPET = "neutral-snippet"
    OUTPUT_FORMAT = "output-format"
    OUTPUT_ITEM = "output-item"
    SAFEGUARDS = "safeguards"
    SAFEGUARD_ITEM = "safeguard-item"


_ITEM_FIELDS = ("text", "position")
_SNIPPET_FIELDS = ("language", "code")

NODE_FIELDS: dict[NodeKind, tuple[str, ...]] = {
    NodeKind.FRONTMATTER: ("name", "description", "globs", "alwaysApply"),
    NodeKind.TITLE: ("name",),
    NodeKind.ROLE: ("text",),
    NodeKind.GOAL: ("text",),
    NodeKind.CONTEXT: ("text",),
    NodeKind.INSTRUCTIONS: ("items",),
    NodeKind.INSTRUCTION: _ITEM_FIELDS,
    NodeKind.EXAMPLES: ("toc", "items", "count"),
    NodeKind.TOC_ENTRY: ("index", "title"),
    NodeKind.EXAMPLE: ("index", "title", "description", "snippets"),
    NodeKind.GOOD_SNIPPET: _SNIPPET_FIELDS,
    NodeKind.BAD_SNIPPET: _SNIPPET_FIELDS,
    NodeKind.NEUTRAL_SNIPPET: _SNIPPET_FIELDS,
    NodeKind.OUTPUT_FORMAT: ("items",),
    NodeKind.OUTPUT_ITEM: _ITEM_FIELDS,
    NodeKind.SAFEGUARDS: ("items",),
    NodeKind.SAFEGUARD_ITEM: _ITEM_FIELDS,
}

REQUIRED_NODES: tuple[NodeKind, ...] = (
    NodeKind.FRONTMATTER,
    NodeKind.TITLE,
    NodeKind.ROLE,
    NodeKind.GOAL,
)


@dataclass(frozen=True)
class Segment:
    """Literal text followed by an optional placeholder."""

    literal: str
    field: Optional[str] = None


@dataclass(frozen=True)
class TemplateRule:
    kind: NodeKind
    segments: tuple[Segment, ...]

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(segment.field for segment in self.segments if segment.field)


@dataclass(frozen=True)
class TemplateProgram:
    rules: dict[NodeKind, TemplateRule] = field(default_factory=dict)

    def rule_for(self, kind: NodeKind) -> Optional[TemplateRule]:
        return self.rules.get(kind)
