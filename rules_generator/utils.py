import os
from pathlib import Path
from typing import Any

from rules_generator.errors import PathError


def read_input(path: Path, label: str) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise PathError(path, f"Missing {label}") from exc
    except OSError as exc:
        raise PathError(path, f"Cannot read {label} ({exc.strerror or exc})") from exc


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def compact_home_path(path: str | Path) -> str:
    """Show a path under the home directory as ``~`` or ``~/...``."""
    try:
        relative = Path(path).relative_to(Path.home())
    except ValueError:
        return str(path)
    return f"~/{relative.as_posix()}" if relative.parts else "~"


def compact_home_paths_in_text(text: str) -> str:
    """Shorten every home-directory path embedded in an error message."""
    return text.replace(f"{Path.home()}{os.sep}", "~/")
