"""CLI behaviour tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hookgen.cli import _build_parser, main


def _seed(project) -> None:
    project.component("Btn", "lib/btn.ex", hooks="export {}\n", css=".btn {}\n")
    project.component("Card", "lib/card.ex", css=".card {}\n")
    project.write(
        ".hookgen.yml",
        """
        components:
          - id: Btn
            path: lib/btn.ex
          - id: Card
            path: lib/card.ex
        """,
    )


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "compile"])
    assert args.verbose is True
    assert args.command == "compile"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["list", "--verbose"])
    assert args.verbose is True
    assert args.command == "list"


def test_cli_accepts_output_dir_and_sources() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["compile", "app", "--output-dir", "out", "--source", "static", "--source", "packages"]
    )
    assert args.path == "app"
    assert args.output_dir == "out"
    assert args.sources == ["static", "packages"]


def test_cli_compile_reports_changes_then_no_changes(project, capsys) -> None:
    _seed(project)

    main(["compile", str(project.root)])
    first = capsys.readouterr().out
    main(["compile", str(project.root)])
    second = capsys.readouterr().out

    assert first.startswith("Changes applied")
    assert second.strip() == "No changes"
    assert (project.output_dir / "Btn.hooks.js").exists()


def test_cli_compile_honours_output_dir(project, capsys) -> None:
    _seed(project)

    main(["compile", str(project.root), "--output-dir", "build/hooks"])

    assert (project.root / "build" / "hooks" / "index.js").exists()
    assert not project.output_dir.exists()


def test_cli_list_prints_hooks_and_styles(project, capsys) -> None:
    _seed(project)

    main(["list", str(project.root)])
    out = capsys.readouterr().out

    assert "Hooks:\n  Btn.hooks.js <- " in out
    assert "Styles:\n  Btn.css <- " in out
    assert "Card.css <- " in out
    assert "Card.hooks.js" not in out


def test_cli_reports_config_errors(tmp_path: Path, capsys) -> None:
    (tmp_path / ".hookgen.yml").write_text("- nope\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["compile", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "must contain a mapping" in capsys.readouterr().err


def test_cli_reports_unknown_source(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["compile", str(tmp_path), "--source", "nowhere"])

    assert excinfo.value.code == 1
    assert "nowhere" in capsys.readouterr().err


def test_cli_writes_log_file(project, tmp_path: Path, capsys) -> None:
    _seed(project)
    log_file = tmp_path / "hookgen.log"

    try:
        main(["--log-file", str(log_file), "compile", str(project.root)])
    finally:
        logger = logging.getLogger("hookgen")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    content = log_file.read_text(encoding="utf-8")
    assert "hookgen.stager: Staged Btn.hooks.js" in content
    assert "Generated index.js" in content
