from pathlib import Path

from rich.console import Console
from rich.markup import escape

from rules_generator.batch import BuildReport
from rules_generator.conformance.models import Violation
from rules_generator.tui.enums import UIStyle
from rules_generator.tui.sections import UISection
from rules_generator.tui.tables import BuildTable, ViolationTable
from rules_generator.utils import compact_home_paths_in_text


class GeneratorConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_written(self, path: Path) -> None:
        self.console.print(
            UISection.note(
                "generate",
                f"Rule written: [bold]{UISection.source_label(path)}[/bold]",
                style=UIStyle.GREEN.value,
            )
        )

    def render_violations(self, source: str, violations: list[Violation]) -> None:
        if not violations:
            self.console.print(
                UISection.note(
                    "check",
                    f"{UISection.source_label(source)}: conforms",
                    style=UIStyle.GREEN.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "check",
                ViolationTable.violations_table(violations),
                style=UIStyle.RED.value,
                subtitle=UISection.violation_subtitle(source, len(violations)),
            )
        )

    def render_error(self, error: Exception) -> None:
        self.console.print(
            UISection.note(
                "error",
                escape(compact_home_paths_in_text(str(error))),
                style=UIStyle.RED.value,
            )
        )

    def render_build(self, report: BuildReport) -> None:
        self.console.print(
            UISection.wrap(
                "build overview",
                BuildTable.summary_block(report),
                style=UIStyle.BLUE.value,
            )
        )
        if report.results:
            self.console.print(
                UISection.wrap(
                    "rules",
                    BuildTable.results_table(report),
                    style=UIStyle.CYAN.value,
                )
            )
        else:
            self.console.print(
                UISection.note("rules", "No rules listed in manifest.", style=UIStyle.DIM.value)
            )
        self.console.print(BuildTable.stats_panel(report))
