"""Line-level view of a rendered rule."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from rules_generator.constants import CODE_FENCE, FRONTMATTER_DELIMITER, FRONTMATTER_LOOKAHEAD

EXAMPLE_HEADING_RE = re.compile(r"^### Example (\d+):")
TOC_ENTRY_RE = re.compile(r"^- Example (\d+):")


@dataclass(frozen=True)
class Fence:
    line: int
    language: str
    closed: bool


@dataclass
class RenderedLines:
    """Rendered text split into lines, with fenced code tracked.

    ``prose`` flags lines outside fenced code (fence lines included), so
    heading-level checks ignore code that happens to look like Markdown.
    """

    lines: list[str]
    prose: list[bool] = field(default_factory=list)
    fences: list[Fence] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "RenderedLines":
        rendered = cls(lines=text.split("\n"))
        rendered._scan_fences()
        return rendered

    def _scan_fences(self) -> None:
        self.prose = [True] * len(self.lines)
        opening: Optional[tuple[int, str]] = None
        for index, line in enumerate(self.lines):
            if opening is None:
                if line.startswith(CODE_FENCE):
                    opening = (index, line[len(CODE_FENCE):].strip())
                    self.prose[index] = False
                continue
            self.prose[index] = False
            if line.strip() == CODE_FENCE:
                self.fences.append(Fence(line=opening[0] + 1, language=opening[1], closed=True))
                opening = None
        if opening is not None:
            self.fences.append(Fence(line=opening[0] + 1, language=opening[1], closed=False))

    def prose_lines(self) -> Iterator[tuple[int, str]]:
        """Yield ``(index, line)`` for lines outside fenced code."""
        for index, line in enumerate(self.lines):
            if self.prose[index]:
                yield index, line

    def has_line(self, text: str) -> bool:
        return any(line == text for _, line in self.prose_lines())

    def find_line(self, text: str) -> Optional[int]:
        for index, line in self.prose_lines():
            if line == text:
                return index
        return None

    def next_non_blank(self, start: int) -> Optional[int]:
        for index in range(start, len(self.lines)):
            if self.lines[index].strip():
                return index
        return None

    def section(self, heading: str) -> list[tuple[int, str]]:
        """Prose lines after ``heading`` up to the next ``## `` heading."""
        start = self.find_line(heading)
        if start is None:
            return []
        body: list[tuple[int, str]] = []
        for index in range(start + 1, len(self.lines)):
            line = self.lines[index]
            if self.prose[index] and line.startswith("## "):
                break
            if self.prose[index]:
                body.append((index, line))
        return body

    def frontmatter(self) -> list[str]:
        if not self.lines or self.lines[0] != FRONTMATTER_DELIMITER:
            return []
        for index in range(1, min(FRONTMATTER_LOOKAHEAD, len(self.lines))):
            if self.lines[index] == FRONTMATTER_DELIMITER:
                return self.lines[1:index]
        return []

    def example_headings(self) -> list[tuple[int, int]]:
        headings: list[tuple[int, int]] = []
        for index, line in self.prose_lines():
            match = EXAMPLE_HEADING_RE.match(line)
            if match:
                headings.append((index, int(match.group(1))))
        return headings

    def toc_numbers(self) -> list[int]:
        start = self.find_line("### Table of contents")
        if start is None:
            return []
        numbers: list[int] = []
        for index in range(start + 1, len(self.lines)):
            line = self.lines[index]
            if not self.prose[index]:
                continue
            if line.startswith("### ") or line.startswith("## "):
                break
            match = TOC_ENTRY_RE.match(line)
            if match:
                numbers.append(int(match.group(1)))
        return numbers
