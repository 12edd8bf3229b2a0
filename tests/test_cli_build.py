"""Tests for the build command and the console entry point."""

import sys
from pathlib import Path

from rules_generator.__main__ import cli, main


def _project(tmp_path: Path, fixtures_dir: Path, rules: list[str]) -> Path:
    manifest = tmp_path / "rules.yaml"
    lines = [
        f"source: {fixtures_dir / 'rules'}",
        "output: out",
        "extension: .mdc",
        "rules:",
        *[f"  - {rule}" for rule in rules],
    ]
    manifest.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return manifest


def test_build_generates_inventory(cli_runner, tmp_path: Path, fixtures_dir: Path) -> None:
    manifest = _project(tmp_path, fixtures_dir, ["126-java-logging", "110-java-maven-best-practices"])

    result = cli_runner.invoke(cli, ["build", str(manifest), "--check"])

    assert result.exit_code == 0
    assert (tmp_path / "out" / "126-java-logging.mdc").exists()
    assert (tmp_path / "out" / "110-java-maven-best-practices.mdc").exists()
    assert "written" in result.output


def test_build_reports_failures(cli_runner, tmp_path: Path, fixtures_dir: Path) -> None:
    manifest = _project(tmp_path, fixtures_dir, ["126-java-logging", "999-missing"])

    result = cli_runner.invoke(cli, ["build", str(manifest)])

    assert result.exit_code == 1
    assert "failed" in result.output
    assert (tmp_path / "out" / "126-java-logging.mdc").exists()


def test_build_uses_default_manifest_name(cli_runner, tmp_path: Path, fixtures_dir: Path) -> None:
    with cli_runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
        _project(Path(cwd), fixtures_dir, ["126-java-logging"])

        result = cli_runner.invoke(cli, ["build"])

        assert result.exit_code == 0
        assert (Path(cwd) / "out" / "126-java-logging.mdc").exists()


def test_build_invalid_manifest(cli_runner, tmp_path: Path) -> None:
    manifest = tmp_path / "rules.yaml"
    manifest.write_text("rules: [a, a]\n", encoding="utf-8")

    result = cli_runner.invoke(cli, ["build", str(manifest)])

    assert result.exit_code == 1
    assert "Invalid build manifest" in result.output


def test_main_maps_exit_codes(monkeypatch, tmp_path: Path, capsys) -> None:
    conforming = tmp_path / "rule.md"
    conforming.write_text("---\n---\n\n# Rule\n\n## Role\n\nr\n\n## Goal\n\ng\n", encoding="utf-8")

    monkeypatch.setattr(sys, "argv", ["rules-generator", "check", str(conforming)])
    assert main() == 0

    monkeypatch.setattr(sys, "argv", ["rules-generator", "check", str(tmp_path / "missing.md")])
    assert main() == 1

    monkeypatch.setattr(sys, "argv", ["rules-generator", "build", str(tmp_path / "absent.yaml")])
    assert main() == 2
    assert "Missing build manifest" in capsys.readouterr().err
