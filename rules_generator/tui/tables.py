from rich.markup import escape
from rich.panel import Panel
from rich.table import Column, Table

from rules_generator.batch import BuildReport, BuildStatus
from rules_generator.conformance.models import Violation
from rules_generator.tui.enums import BUILD_STATUS_STYLE, UIStyle


class ViolationTable:
    @staticmethod
    def violations_table(violations: list[Violation]) -> Table:
        table = Table(
            Column(header="Check", width=28),
            Column(header="Line", width=6, justify="right"),
            Column(header="Detail", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for item in violations:
            row = item.as_dict()
            table.add_row(
                f"[{UIStyle.RED.value}]{row['code']}[/{UIStyle.RED.value}]",
                row["line"],
                escape(row["message"]),
            )
        return table


class BuildTable:
    @staticmethod
    def summary_block(report: BuildReport):
        counts = report.summary()
        chips = [
            f"{status.value}={counts[status.value]}"
            for status in BuildStatus
            if counts[status.value] > 0
        ]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Rules", str(counts["rules"]))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def results_table(report: BuildReport) -> Table:
        table = Table(
            Column(header="Rule", width=36),
            Column(header="Status", width=14),
            Column(header="Output", overflow="ellipsis", max_width=50),
            Column(header="Detail", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for result in report.results:
            style = BUILD_STATUS_STYLE.get(result.status, UIStyle.WHITE.value)
            row = result.as_dict()
            table.add_row(
                escape(row["rule"]),
                f"[{style}]{row['status']}[/{style}]",
                escape(row["path"]),
                escape(row["detail"]),
            )
        return table

    @staticmethod
    def stats_panel(report: BuildReport) -> Panel:
        counts = report.summary()
        table = Table(show_header=False, box=None)
        for status in BuildStatus:
            table.add_row(f"[bold]{status.value}[/bold]", str(counts[status.value]))
        return Panel(
            table,
            title="build",
            border_style=UIStyle.GREEN.value if report.is_success() else UIStyle.RED.value,
        )
