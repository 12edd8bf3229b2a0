from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from rules_generator.batch import BatchBuilder
from rules_generator.conformance.checker import ConformanceChecker
from rules_generator.constants import DEFAULT_MANIFEST_FILENAME, DEFAULT_TEMPLATE_PATH
from rules_generator.errors import GenerationError, ManifestError, PathError
from rules_generator.generator import RulesGenerator
from rules_generator.manifest import load_manifest
from rules_generator.tui import GeneratorConsoleUI
from rules_generator.utils import read_input, write_text


def _file_path() -> click.Path:
    return click.Path(path_type=Path, dir_okay=False)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """Generate assistant rules from structured definitions."""


@cli.command(help="Render one rule definition to Markdown.")
@click.argument("document", type=_file_path())
@click.option(
    "-t",
    "--template",
    type=_file_path(),
    default=DEFAULT_TEMPLATE_PATH,
    show_default="bundled cursor-rules.yaml",
    help="Template program.",
)
@click.option("-s", "--schema", type=_file_path(), default=None, help="Schema table to validate against.")
@click.option("-o", "--output", type=_file_path(), default=None, help="Write to this file instead of stdout.")
@click.option("--check", "run_check", is_flag=True, help="Run conformance checks on the result.")
def generate(
    document: Path,
    template: Path,
    schema: Optional[Path],
    output: Optional[Path],
    run_check: bool,
) -> None:
    ui = GeneratorConsoleUI(Console(stderr=True))
    try:
        content = RulesGenerator().generate(document, template, schema)
    except GenerationError as exc:
        ui.render_error(exc)
        raise click.exceptions.Exit(1)

    if output is not None:
        write_text(output, content)
        ui.render_written(output)
    else:
        click.echo(content, nl=False)

    if run_check:
        violations = ConformanceChecker().check(content, rule_id=document.stem)
        ui.render_violations(str(output or document), violations)
        if violations:
            raise click.exceptions.Exit(1)


@cli.command(help="Run conformance checks over rendered rule files.")
@click.argument("files", nargs=-1, required=True, type=_file_path())
@click.option("--rule-id", default=None, help="Rule identifier used for domain detection.")
def check(files: tuple[Path, ...], rule_id: Optional[str]) -> None:
    ui = GeneratorConsoleUI(Console())
    checker = ConformanceChecker()
    failed = False
    for path in files:
        try:
            text = read_input(path, "rendered rule").decode("utf-8")
        except (PathError, UnicodeDecodeError) as exc:
            ui.render_error(exc)
            failed = True
            continue
        violations = checker.check(text, rule_id=rule_id or path.stem)
        ui.render_violations(str(path), violations)
        failed = failed or bool(violations)
    if failed:
        raise click.exceptions.Exit(1)


@cli.command(help="Generate every rule listed in a build manifest.")
@click.argument("manifest", required=False, type=_file_path(), default=DEFAULT_MANIFEST_FILENAME)
@click.option("--check", "run_check", is_flag=True, help="Run conformance checks on each result.")
def build(manifest: Path, run_check: bool) -> None:
    ui = GeneratorConsoleUI(Console())
    try:
        loaded = load_manifest(manifest)
    except (ManifestError, PathError) as exc:
        raise click.ClickException(str(exc))

    report = BatchBuilder(loaded).build(check=run_check)
    ui.render_build(report)
    if not report.is_success():
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
