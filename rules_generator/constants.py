import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final


RESOURCES_DIR: Final[Path] = Path(__file__).resolve().parent / "resources"
DEFAULT_TEMPLATE_PATH: Final[Path] = RESOURCES_DIR / "cursor-rules.yaml"
DEFAULT_SCHEMA_PATH: Final[Path] = RESOURCES_DIR / "rule.schema.yaml"

DEFAULT_MANIFEST_FILENAME: Final[str] = "rules.yaml"
RULE_EXTENSIONS: Final[tuple[str, ...]] = (".md", ".mdc")
SOURCE_EXTENSION: Final[str] = ".yaml"

FRONTMATTER_DELIMITER: Final[str] = "---"
FRONTMATTER_LOOKAHEAD: Final[int] = 10
CODE_FENCE: Final[str] = "```"
GOOD_MARKER: Final[str] = "**Good example:**"
BAD_MARKER: Final[str] = "**Bad example:**"


@dataclass(frozen=True)
class BuildTool:
    name: str
    markers: tuple[str, ...]
    command: re.Pattern

    def concerns(self, text: str) -> bool:
        lowered = text.lower()
        return any(marker in lowered for marker in self.markers)

    def invoked_in(self, text: str) -> bool:
        return self.command.search(text) is not None


BUILD_TOOLS: Final[tuple[BuildTool, ...]] = (
    BuildTool(
        name="maven",
        markers=("maven", "pom.xml"),
        command=re.compile(r"(?<![\w-])(?:\./)?mvnw?\b"),
    ),
    BuildTool(
        name="gradle",
        markers=("gradle", "build.gradle"),
        command=re.compile(r"(?<![\w-])(?:\./)?gradlew?\b"),
    ),
)


def detect_build_tools(*texts: str) -> list[BuildTool]:
    return [tool for tool in BUILD_TOOLS if any(tool.concerns(text) for text in texts)]
