from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from rules_generator.conformance.checker import ConformanceChecker
from rules_generator.conformance.models import Violation
from rules_generator.errors import GenerationError
from rules_generator.generator import RulesGenerator
from rules_generator.manifest import BuildManifest
from rules_generator.utils import write_text


class BuildStatus(str, Enum):
    WRITTEN = "written"
    NONCONFORMING = "nonconforming"
    FAILED = "failed"


@dataclass
class BuildResult:
    rule_id: str
    output_path: Path
    status: BuildStatus
    error: Optional[GenerationError] = None
    violations: list[Violation] = field(default_factory=list)

    def as_dict(self) -> dict[str, str]:
        if self.error is not None:
            detail = str(self.error)
        elif self.violations:
            detail = "; ".join(str(item) for item in self.violations)
        else:
            detail = ""
        return {
            "rule": self.rule_id,
            "status": self.status.value,
            "path": str(self.output_path),
            "detail": detail,
        }


@dataclass
class BuildReport:
    results: list[BuildResult]

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in BuildStatus}
        for result in self.results:
            counts[result.status.value] += 1
        counts["rules"] = len(self.results)
        return counts

    def is_success(self) -> bool:
        return all(result.status == BuildStatus.WRITTEN for result in self.results)


class BatchBuilder:
    """Generates every rule listed in a manifest, one independent call each."""

    def __init__(self, manifest: BuildManifest) -> None:
        self._manifest = manifest

    def build(self, check: bool = False) -> BuildReport:
        return BuildReport(
            results=[self._build_one(rule_id, check) for rule_id in self._manifest.rules]
        )

    def _build_one(self, rule_id: str, check: bool) -> BuildResult:
        manifest = self._manifest
        output_path = manifest.output_path(rule_id)
        try:
            content = RulesGenerator().generate(
                manifest.document_path(rule_id), manifest.template, manifest.schema
            )
        except GenerationError as exc:
            return BuildResult(rule_id, output_path, BuildStatus.FAILED, error=exc)

        write_text(output_path, content)
        violations = ConformanceChecker().check(content, rule_id=rule_id) if check else []
        status = BuildStatus.NONCONFORMING if violations else BuildStatus.WRITTEN
        return BuildResult(rule_id, output_path, status, violations=violations)
