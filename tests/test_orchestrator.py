"""Tests for hookgen.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from hookgen.aggregator import EMPTY_INDEX
from hookgen.config import load_config
from hookgen.models import CompileStatus, ComponentRecord
from hookgen.orchestrator import Orchestrator
from hookgen.stager import StagingError
from tests._fixtures.project_builder import ListSource, shift_mtime


def _staged_names(output_dir: Path) -> list[str]:
    return sorted(path.name for path in output_dir.iterdir())


def test_first_build_stages_all_hooks_and_writes_index(tmp_path: Path) -> None:
    lib = tmp_path / "p"
    lib.mkdir()
    for name in ("btn", "card"):
        (lib / f"{name}.ex").write_text("", encoding="utf-8")
        (lib / f"{name}.hooks.js").write_text(f"export const {name} = {{}}\n", encoding="utf-8")
    source = ListSource(
        [
            ComponentRecord("Card", lib / "card.ex"),
            ComponentRecord("Btn", lib / "btn.ex"),
        ]
    )
    output_dir = tmp_path / "assets" / "js" / "_hooks"

    status = Orchestrator(source, output_dir).run()

    assert status is CompileStatus.OK
    assert status.changed
    assert _staged_names(output_dir) == ["Btn.hooks.js", "Card.hooks.js", "index.js"]
    index = (output_dir / "index.js").read_text(encoding="utf-8")
    assert 'import * as c1 from "./Btn.hooks"' in index
    assert 'import * as c2 from "./Card.hooks"' in index
    assert '  ns(c1, "Btn"),\n  ns(c2, "Card")\n' in index
    assert index.endswith("export default hooks\n")


def test_second_run_without_changes_is_noop(project) -> None:
    source = ListSource([project.component("Btn", "lib/btn.ex", hooks="export {}\n")])
    orchestrator = Orchestrator(source, project.output_dir)

    assert orchestrator.run() is CompileStatus.OK
    index_before = orchestrator.index_path.stat().st_mtime_ns

    assert orchestrator.run() is CompileStatus.NOOP
    assert orchestrator.index_path.stat().st_mtime_ns == index_before


def test_removed_component_is_pruned_from_output_and_index(project) -> None:
    btn = project.component("Btn", "lib/btn.ex", hooks="export {}\n")
    card = project.component("Card", "lib/card.ex", hooks="export {}\n")
    source = ListSource([btn, card])
    orchestrator = Orchestrator(source, project.output_dir)
    orchestrator.run()

    source.records = [btn]
    status = orchestrator.run()

    assert status is CompileStatus.OK
    assert _staged_names(project.output_dir) == ["Btn.hooks.js", "index.js"]
    index = orchestrator.index_path.read_text(encoding="utf-8")
    assert "Card" not in index


def test_changed_hooks_are_recopied(project) -> None:
    record = project.component("Btn", "lib/btn.ex", hooks="export const A = {}\n")
    orchestrator = Orchestrator(ListSource([record]), project.output_dir)
    orchestrator.run()

    source_hooks = project.root / "lib" / "btn.hooks.js"
    source_hooks.write_text("export const B = {}\n", encoding="utf-8")
    shift_mtime(source_hooks, 10)

    assert orchestrator.run() is CompileStatus.OK
    staged = project.output_dir / "Btn.hooks.js"
    assert staged.read_text(encoding="utf-8") == "export const B = {}\n"


def test_deleted_index_is_regenerated(project) -> None:
    source = ListSource([project.component("Btn", "lib/btn.ex", hooks="export {}\n")])
    orchestrator = Orchestrator(source, project.output_dir)
    orchestrator.run()
    orchestrator.index_path.unlink()

    assert orchestrator.run() is CompileStatus.OK
    assert orchestrator.index_path.exists()


def test_components_without_hooks_are_never_staged(project) -> None:
    source = ListSource(
        [
            project.component("Btn", "lib/btn.ex", hooks="export {}\n"),
            project.component("Badge", "lib/badge.ex", css=".badge {}\n"),
        ]
    )
    orchestrator = Orchestrator(source, project.output_dir)

    orchestrator.run()

    assert _staged_names(project.output_dir) == ["Btn.hooks.js", "index.js"]
    assert "Badge" not in orchestrator.index_path.read_text(encoding="utf-8")
    assert {c.destination_name for c in orchestrator.locate().styles} == {"Badge.css"}


def test_no_hooks_writes_empty_index(project) -> None:
    source = ListSource([project.component("Plain", "lib/plain.ex")])
    orchestrator = Orchestrator(source, project.output_dir)

    assert orchestrator.run() is CompileStatus.OK
    assert orchestrator.index_path.read_text(encoding="utf-8") == EMPTY_INDEX
    assert orchestrator.run() is CompileStatus.NOOP


def test_all_components_removed_leaves_empty_index(project) -> None:
    source = ListSource([project.component("Btn", "lib/btn.ex", hooks="export {}\n")])
    orchestrator = Orchestrator(source, project.output_dir)
    orchestrator.run()

    source.records = []

    assert orchestrator.run() is CompileStatus.OK
    assert _staged_names(project.output_dir) == ["index.js"]
    assert orchestrator.index_path.read_text(encoding="utf-8") == EMPTY_INDEX


def test_index_write_failure_aborts(project, monkeypatch) -> None:
    source = ListSource([project.component("Btn", "lib/btn.ex", hooks="export {}\n")])
    orchestrator = Orchestrator(source, project.output_dir)

    def _fail(self: Path, *args, **kwargs) -> int:
        raise OSError("disk full")

    monkeypatch.setattr(Path, "write_text", _fail)

    with pytest.raises(StagingError, match="disk full"):
        orchestrator.run()


def test_from_config_uses_configured_output_dir(project) -> None:
    project.component("Btn", "lib/btn.ex", hooks="export {}\n")
    project.write(
        ".hookgen.yml",
        """
        compiler:
          hooks_output_dir: priv/static/hooks
        components:
          - id: Btn
            path: lib/btn.ex
        """,
    )
    config = load_config(project.root)

    orchestrator = Orchestrator.from_config(config)

    assert orchestrator.output_dir == project.root.resolve() / "priv" / "static" / "hooks"
    assert orchestrator.run() is CompileStatus.OK
    assert (orchestrator.output_dir / "Btn.hooks.js").exists()


def test_from_config_output_dir_override(project, tmp_path: Path) -> None:
    config = load_config(project.root)
    target = tmp_path / "elsewhere"

    orchestrator = Orchestrator.from_config(config, output_dir=target)

    assert orchestrator.output_dir == target
    assert orchestrator.run() is CompileStatus.OK
    assert (target / "index.js").read_text(encoding="utf-8") == EMPTY_INDEX
