"""Rule document data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rules_generator.constants import CODE_FENCE


class SnippetKind(str, Enum):
    GOOD = "good"
    BAD = "bad"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class RuleMetadata:
    name: str = ""
    description: str = ""
    globs: tuple[str, ...] = ()
    always_apply: bool = False


@dataclass(frozen=True)
class Snippet:
    language: str
    code: str
    kind: str = SnippetKind.NEUTRAL.value

    @property
    def contains_fence(self) -> bool:
        """True when a code line would close the surrounding Markdown fence."""
        return any(line.lstrip().startswith(CODE_FENCE) for line in self.code.split("\n"))


@dataclass(frozen=True)
class Example:
    index: int
    title: str
    description: str
    snippets: tuple[Snippet, ...] = ()


@dataclass(frozen=True)
class RuleDocument:
    """One assistant rule, as read from its structured definition.

    Required elements stay ``None`` when an unvalidated document omits them;
    the transformer reports those instead of rendering empty sections.
    """

    metadata: Optional[RuleMetadata] = None
    role: Optional[str] = None
    goal: Optional[str] = None
    context: Optional[str] = None
    instructions: Optional[tuple[str, ...]] = None
    examples: tuple[Example, ...] = ()
    output_format: Optional[tuple[str, ...]] = None
    safeguards: Optional[tuple[str, ...]] = None
    source_name: str = field(default="", compare=False)

    @property
    def snippets(self) -> list[Snippet]:
        return [snippet for example in self.examples for snippet in example.snippets]
