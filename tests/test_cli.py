"""Tests for the headless CLI commands and argument parsing."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import build_state, build_task
from minikanban.__main__ import main, parse_args
from minikanban.cli.commands import (
    run_audit_report,
    run_check,
    run_export,
    run_fix,
    run_import,
    run_query,
)
from minikanban.config import Settings
from minikanban.repositories import FilesystemRepository
from minikanban.services import TransferService


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def repo(settings: Settings) -> FilesystemRepository:
    repo = FilesystemRepository(settings.data_dir)
    repo.save(
        build_state(
            build_task(id="a", title="Revisar bomba", tags=["seguridad"], priority="high"),
            build_task(id="b", title="Cambiar filtro", estimate_minutes=-5, status="doing"),
        )
    )
    return repo


class TestExportImport:
    def test_export(self, settings: Settings, repo, tmp_path: Path, capsys):
        assert run_export(settings, tmp_path / "out") == 0
        (path,) = (tmp_path / "out").glob("kanban-export-*.json")
        assert set(json.loads(path.read_text())["tasks"]) == {"a", "b"}
        assert "Exported board" in capsys.readouterr().out

    def test_import_replaces_board(self, settings: Settings, repo, tmp_path: Path):
        other = build_state(build_task(id="z", title="Importada"))
        path = TransferService().write_export(other, tmp_path)

        assert run_import(settings, path) == 0

        assert list(repo.load().tasks) == ["z"]

    def test_import_rejected(self, settings: Settings, repo, tmp_path: Path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"version": 1}))

        assert run_import(settings, path) == 1

        out = capsys.readouterr().out
        assert "Import rejected" in out
        assert "tasks: Field required" in out
        assert set(repo.load().tasks) == {"a", "b"}


class TestIntegrityCommands:
    def test_check_reports_issues(self, settings: Settings, repo, capsys):
        assert run_check(settings) == 1
        assert "Invalid estimate" in capsys.readouterr().out

    def test_fix_then_check(self, settings: Settings, repo, capsys):
        assert run_fix(settings) == 0
        assert "Fixed 1 task(s)" in capsys.readouterr().out
        assert repo.load().tasks["b"].estimate_minutes == 0
        assert run_check(settings) == 0


class TestReports:
    def test_audit_report_empty(self, settings: Settings, repo, capsys):
        assert run_audit_report(settings) == 0
        assert "Audit log is empty." in capsys.readouterr().out

    def test_query(self, settings: Settings, repo, capsys):
        assert run_query(settings, "tag:seguridad p:urgent") == 0
        out = capsys.readouterr().out
        assert 'invalid priority in "p:urgent"' in out
        assert "Revisar bomba" in out
        assert "Cambiar filtro" not in out
        assert "1 matching task(s)" in out

    def test_empty_data_dir_gets_demo(self, settings: Settings, capsys):
        assert run_query(settings, "") == 0
        assert "3 matching task(s)" in capsys.readouterr().out


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.data_dir is None
        assert args.verbose == 0
        assert args.export is None
        assert not args.check

    def test_export_without_dir(self):
        assert parse_args(["--export"]).export == Path(".")

    def test_verbosity_counts(self):
        assert parse_args(["-vv"]).verbose == 2

    def test_actions_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--check", "--fix"])


class TestMain:
    def test_generate(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc:
            main(["--data-dir", str(tmp_path), "--generate"])
        assert exc.value.code == 0
        assert (tmp_path / "minikanban.yml").exists()

    def test_check_exit_code(self, settings: Settings, repo):
        with pytest.raises(SystemExit) as exc:
            main(["--data-dir", str(settings.data_dir), "--check"])
        assert exc.value.code == 1

    def test_no_action_runs_app(self, tmp_path: Path):
        with patch("minikanban.app.run") as run:
            main(["--data-dir", str(tmp_path)])
        (settings,) = run.call_args[0]
        assert settings.data_dir == tmp_path
