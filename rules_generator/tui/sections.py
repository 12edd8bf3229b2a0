from pathlib import Path
from typing import Optional, Union

from rich.markup import escape
from rich.panel import Panel

from rules_generator.tui.enums import UIStyle
from rules_generator.utils import compact_home_path


class UISection:
    """Panels shared by the generate, check and build views."""

    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(
            body,
            title=title,
            subtitle=subtitle,
            border_style=style,
            padding=(0, 1),
            title_align="left",
            subtitle_align="left",
        )

    @staticmethod
    def note(title: str, body: str, style: str) -> Panel:
        return UISection.wrap(title, body, style=style)

    @staticmethod
    def source_label(source: Union[str, Path]) -> str:
        return escape(compact_home_path(source))

    @staticmethod
    def violation_subtitle(source: Union[str, Path], count: int) -> str:
        noun = "violation" if count == 1 else "violations"
        return f"{UISection.source_label(source)}: {count} {noun}"
