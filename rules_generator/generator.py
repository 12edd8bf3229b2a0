"""Generation facade: load, optionally validate, then render one rule."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from rules_generator.documents.parser import parse_document
from rules_generator.errors import GenerationError, RulesGeneratorError
from rules_generator.schema.validator import validate
from rules_generator.templates.loader import parse_template_program
from rules_generator.templates.transformer import render
from rules_generator.utils import read_input

PathLike = Union[str, Path]


class RulesGenerator:
    """Turns rule definitions into rendered Markdown rules.

    The generator keeps no state between calls: every ``generate`` call reads
    its inputs and builds a fresh validator and transformer, so one instance
    may be used from several threads at once.
    """

    def generate(
        self,
        document_path: PathLike,
        template_path: PathLike,
        schema_path: Optional[PathLike] = None,
    ) -> str:
        document = Path(document_path)
        template = Path(template_path)
        schema = Path(schema_path) if schema_path is not None else None
        try:
            return self._generate(document, template, schema)
        except RulesGeneratorError as exc:
            raise GenerationError(document, template, schema, cause=exc) from exc

    def _generate(self, document: Path, template: Path, schema: Optional[Path]) -> str:
        document_bytes = read_input(document, "rule document")
        template_bytes = read_input(template, "template program")
        if schema is not None:
            schema_bytes = read_input(schema, "schema")
            validate(
                document_bytes,
                schema_bytes,
                base_dir=document.parent,
                source_name=document.stem,
            )

        program = parse_template_program(template_bytes)
        rule = parse_document(document_bytes, base_dir=document.parent, source_name=document.stem)
        return render(rule, program)


def generate(
    document_path: PathLike,
    template_path: PathLike,
    schema_path: Optional[PathLike] = None,
) -> str:
    return RulesGenerator().generate(document_path, template_path, schema_path)
