"""Structural predicates over rendered rules.

Each check takes the rendered lines plus the optional rule identifier and
returns the violations it found. Checks never look at the source document.
"""

from __future__ import annotations

from typing import Callable, Optional

from rules_generator.constants import (
    BAD_MARKER,
    FRONTMATTER_DELIMITER,
    FRONTMATTER_LOOKAHEAD,
    GOOD_MARKER,
    detect_build_tools,
)
from rules_generator.conformance.models import Violation, ViolationCode
from rules_generator.conformance.text import RenderedLines

Check = Callable[[RenderedLines, Optional[str]], list[Violation]]


def check_frontmatter(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    lines = doc.lines
    if not lines or lines[0] != FRONTMATTER_DELIMITER:
        return [
            Violation(
                ViolationCode.FRONTMATTER_MISSING,
                "document should start with frontmatter (---)",
                line=1,
            )
        ]
    window = range(1, min(FRONTMATTER_LOOKAHEAD, len(lines)))
    if not any(lines[i] == FRONTMATTER_DELIMITER for i in window):
        return [
            Violation(
                ViolationCode.FRONTMATTER_UNCLOSED,
                f"frontmatter is not closed within the first {FRONTMATTER_LOOKAHEAD} lines",
            )
        ]
    return []


def check_main_title(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    if any(line.startswith("# ") for _, line in doc.prose_lines()):
        return []
    return [Violation(ViolationCode.TITLE_MISSING, "document should have a main title (# heading)")]


def check_required_sections(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    violations: list[Violation] = []
    if not doc.has_line("## Role"):
        violations.append(Violation(ViolationCode.ROLE_MISSING, "missing ## Role section"))
    if not doc.has_line("## Goal"):
        violations.append(Violation(ViolationCode.GOAL_MISSING, "missing ## Goal section"))
    return violations


def check_heading_spacing(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    violations: list[Violation] = []
    headings = [index for index, line in doc.prose_lines() if line.startswith("## ")]
    for index in headings[1:]:
        previous = doc.lines[index - 1]
        if previous.strip() and previous != FRONTMATTER_DELIMITER:
            violations.append(
                Violation(
                    ViolationCode.HEADING_SPACING,
                    f"heading '{doc.lines[index]}' should have a blank line before it",
                    line=index + 1,
                )
            )
    return violations


def check_examples_structure(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    if not doc.has_line("## Examples"):
        return []

    violations: list[Violation] = []
    if not doc.has_line("### Table of contents"):
        violations.append(
            Violation(ViolationCode.TOC_MISSING, "Examples section should have a Table of contents")
        )

    headings = doc.example_headings()
    if not headings:
        violations.append(
            Violation(ViolationCode.EXAMPLE_MISSING, "Examples section has no '### Example N:' heading")
        )
        return violations

    numbers = [number for _, number in headings]
    expected = list(range(1, len(numbers) + 1))
    if numbers != expected:
        first_bad = next(
            index for (index, number), want in zip(headings, expected) if number != want
        )
        violations.append(
            Violation(
                ViolationCode.EXAMPLE_NUMBERING,
                f"example numbers should run {expected}, found {numbers}",
                line=first_bad + 1,
            )
        )

    toc = doc.toc_numbers()
    if toc != numbers:
        violations.append(
            Violation(
                ViolationCode.TOC_MISMATCH,
                f"table of contents lists {toc}, example headings are {numbers}",
            )
        )
    return violations


def check_example_title_description(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    violations: list[Violation] = []
    for index, _ in doc.example_headings():
        title_index = doc.next_non_blank(index + 1)
        if title_index is None or not doc.lines[title_index].startswith("Title:"):
            violations.append(
                Violation(
                    ViolationCode.EXAMPLE_TITLE_MISSING,
                    "example heading should be followed by a 'Title:' line",
                    line=index + 1,
                )
            )
            continue
        description_index = doc.next_non_blank(title_index + 1)
        if description_index is None or not doc.lines[description_index].startswith("Description:"):
            violations.append(
                Violation(
                    ViolationCode.EXAMPLE_DESCRIPTION_MISSING,
                    "example 'Title:' line should be followed by a 'Description:' line",
                    line=index + 1,
                )
            )
    return violations


def check_code_fences(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    violations: list[Violation] = []
    for fence in doc.fences:
        if not fence.language:
            violations.append(
                Violation(
                    ViolationCode.CODE_FENCE_LANGUAGE,
                    "code block should specify a language",
                    line=fence.line,
                )
            )
        if not fence.closed:
            violations.append(
                Violation(
                    ViolationCode.CODE_FENCE_UNCLOSED,
                    "code block is not properly closed",
                    line=fence.line,
                )
            )
    return violations


def check_good_bad_markers(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    if not doc.example_headings():
        return []
    violations: list[Violation] = []
    if not doc.has_line(GOOD_MARKER):
        violations.append(
            Violation(ViolationCode.GOOD_EXAMPLE_MISSING, f"examples need at least one '{GOOD_MARKER}'")
        )
    if not doc.has_line(BAD_MARKER):
        violations.append(
            Violation(ViolationCode.BAD_EXAMPLE_MISSING, f"examples need at least one '{BAD_MARKER}'")
        )
    return violations


def _bullets(doc: RenderedLines, heading: str) -> list[str]:
    """Bullet items of a section, each joined with its indented continuation lines."""
    bullets: list[str] = []
    for _, line in doc.section(heading):
        if line.startswith("- "):
            bullets.append(line)
        elif bullets and line.startswith(" ") and line.strip():
            bullets[-1] = f"{bullets[-1]}\n{line.strip()}"
    return bullets


def check_output_format(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    heading = "## Output Format"
    if not doc.has_line(heading) or _bullets(doc, heading):
        return []
    return [
        Violation(
            ViolationCode.OUTPUT_FORMAT_EMPTY,
            "Output Format section should contain bullet point items",
            line=(doc.find_line(heading) or 0) + 1,
        )
    ]


def _domain_texts(doc: RenderedLines, rule_id: Optional[str]) -> list[str]:
    texts = list(doc.frontmatter())
    texts.extend(line for _, line in doc.prose_lines() if line.startswith("# "))
    if rule_id:
        texts.append(rule_id)
    return texts


def check_safeguards(doc: RenderedLines, rule_id: Optional[str]) -> list[Violation]:
    heading = "## Safeguards"
    if not doc.has_line(heading):
        return []
    line = (doc.find_line(heading) or 0) + 1
    bullets = _bullets(doc, heading)
    if not bullets:
        return [
            Violation(
                ViolationCode.SAFEGUARDS_EMPTY,
                "Safeguards section should contain bullet point items",
                line=line,
            )
        ]
    violations: list[Violation] = []
    for tool in detect_build_tools(*_domain_texts(doc, rule_id)):
        if not any(tool.invoked_in(bullet) for bullet in bullets):
            violations.append(
                Violation(
                    ViolationCode.SAFEGUARDS_COMMAND_MISSING,
                    f"{tool.name}-related rule should invoke {tool.name} in Safeguards",
                    line=line,
                )
            )
    return violations


DEFAULT_CHECKS: tuple[Check, ...] = (
    check_frontmatter,
    check_main_title,
    check_required_sections,
    check_heading_spacing,
    check_examples_structure,
    check_example_title_description,
    check_code_fences,
    check_good_bad_markers,
    check_output_format,
    check_safeguards,
)
