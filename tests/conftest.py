import sys
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml
from click.testing import CliRunner


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def template_path() -> Path:
    from rules_generator.constants import DEFAULT_TEMPLATE_PATH

    return DEFAULT_TEMPLATE_PATH


@pytest.fixture
def schema_path() -> Path:
    from rules_generator.constants import DEFAULT_SCHEMA_PATH

    return DEFAULT_SCHEMA_PATH


@pytest.fixture
def rule_payload() -> Callable[..., dict[str, Any]]:
    def _payload(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "metadata": {
                "name": "Null Safety",
                "description": "Guard against null references",
                "globs": ["**/*.java"],
                "alwaysApply": False,
            },
            "role": "Enforce null-safety",
            "goal": "Prevent NPEs",
        }
        payload.update(overrides)
        return {key: value for key, value in payload.items() if value is not None}

    return _payload


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[..., Path]:
    def _write(payload: Any, name: str = "rule.yaml") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def two_examples() -> list[dict[str, Any]]:
    return [
        {
            "title": "Use Optional for absent values",
            "description": "Return Optional instead of null.",
            "snippets": [
                {"language": "java", "kind": "good", "code": "return Optional.empty();"},
                {"language": "java", "kind": "bad", "code": "return null;"},
            ],
        },
        {
            "title": "Validate arguments",
            "description": "Fail fast on null arguments.",
            "snippets": [
                {
                    "language": "java",
                    "kind": "good",
                    "code": "this.name = Objects.requireNonNull(name);",
                },
            ],
        },
    ]


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
