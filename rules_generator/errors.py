from pathlib import Path
from typing import Optional, Sequence


class RulesGeneratorError(Exception):
    """Base user-facing application error."""


class PathError(RulesGeneratorError):
    def __init__(self, path: Path, message: str = "Cannot read input file") -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class SchemaError(RulesGeneratorError):
    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = list(violations)
        first = self.violations[0] if self.violations else "unknown violation"
        extra = len(self.violations) - 1
        suffix = f" (+{extra} more)" if extra > 0 else ""
        super().__init__(f"Schema violation: {first}{suffix}")


class TemplateError(RulesGeneratorError):
    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.message = message
        self.field = field
        super().__init__(f"{message}: {field}" if field else message)


class ManifestError(RulesGeneratorError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid build manifest ({detail}): {path}")


class GenerationError(RulesGeneratorError):
    def __init__(
        self,
        document_path: Path,
        template_path: Path,
        schema_path: Optional[Path] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        self.document_path = document_path
        self.template_path = template_path
        self.schema_path = schema_path
        self.cause = cause
        sources = [str(document_path), str(template_path)]
        if schema_path is not None:
            sources.append(str(schema_path))
        message = f"Failed to generate rule for: {', '.join(sources)}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)
