from typing import Optional, Sequence

from rules_generator.conformance.checks import DEFAULT_CHECKS, Check
from rules_generator.conformance.models import Violation
from rules_generator.conformance.text import RenderedLines


class ConformanceChecker:
    def __init__(self, checks: Sequence[Check] = DEFAULT_CHECKS) -> None:
        self._checks = tuple(checks)

    def check(self, rendered_text: str, rule_id: Optional[str] = None) -> list[Violation]:
        doc = RenderedLines.from_text(rendered_text)
        violations: list[Violation] = []
        for run_check in self._checks:
            violations.extend(run_check(doc, rule_id))
        return violations


def check(rendered_text: str, rule_id: Optional[str] = None) -> list[Violation]:
    return ConformanceChecker().check(rendered_text, rule_id)
