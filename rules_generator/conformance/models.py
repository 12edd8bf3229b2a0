"""Conformance violation models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ViolationCode(str, Enum):
    FRONTMATTER_MISSING = "frontmatter-missing"
    FRONTMATTER_UNCLOSED = "frontmatter-unclosed"
    TITLE_MISSING = "title-missing"
    ROLE_MISSING = "role-missing"
    GOAL_MISSING = "goal-missing"
    HEADING_SPACING = "heading-spacing"
    TOC_MISSING = "toc-missing"
    EXAMPLE_MISSING = "example-missing"
    EXAMPLE_NUMBERING = "example-numbering"
    TOC_MISMATCH = "toc-mismatch"
    EXAMPLE_TITLE_MISSING = "example-title-missing"
    EXAMPLE_DESCRIPTION_MISSING = "example-description-missing"
    CODE_FENCE_LANGUAGE = "code-fence-language"
    CODE_FENCE_UNCLOSED = "code-fence-unclosed"
    GOOD_EXAMPLE_MISSING = "good-example-missing"
    BAD_EXAMPLE_MISSING = "bad-example-missing"
    OUTPUT_FORMAT_EMPTY = "output-format-empty"
    SAFEGUARDS_EMPTY = "safeguards-empty"
    SAFEGUARDS_COMMAND_MISSING = "safeguards-command-missing"


@dataclass(frozen=True)
class Violation:
    code: ViolationCode
    message: str
    line: Optional[int] = None

    def __str__(self) -> str:
        where = f"line {self.line}: " if self.line is not None else ""
        return f"[{self.code.value}] {where}{self.message}"

    def as_dict(self) -> dict[str, str]:
        return {
            "code": self.code.value,
            "line": "" if self.line is None else str(self.line),
            "message": self.message,
        }
