from rules_generator.conformance.checker import ConformanceChecker, check
from rules_generator.conformance.models import Violation, ViolationCode
from rules_generator.errors import (
    GenerationError,
    ManifestError,
    PathError,
    RulesGeneratorError,
    SchemaError,
    TemplateError,
)
from rules_generator.generator import RulesGenerator, generate

__all__ = [
    "ConformanceChecker",
    "GenerationError",
    "ManifestError",
    "PathError",
    "RulesGenerator",
    "RulesGeneratorError",
    "SchemaError",
    "TemplateError",
    "Violation",
    "ViolationCode",
    "check",
    "generate",
]
