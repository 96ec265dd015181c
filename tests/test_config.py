"""Tests for linelog.config — layered resolution and worker registration."""

import json
from pathlib import Path

import pytest

from linelog.config import (
    LoggingConfig, apply_config, find_project_config, load_json,
    parse_file_spec, resolve_config, save_project_config,
)
from linelog.levels import DEBUG, ERROR, INFO, TRACE, WARNING
from linelog.worker import CONSOLE


def write_config(directory, data, name=".linelog.json"):
    path = Path(directory) / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadJson:

    def test_missing_file(self, tmp_path):
        assert load_json(tmp_path / "nope.json") == {}

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_json(path) == {}

    def test_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_json(path) == {}


class TestFindProjectConfig:

    def test_walks_up(self, tmp_path):
        config = write_config(tmp_path, {})
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        assert find_project_config(deep) == config.resolve()

    def test_save_then_find(self, tmp_path):
        path = save_project_config({"console": "DEBUG"}, tmp_path)
        assert find_project_config(tmp_path) == path.resolve()
        assert load_json(path) == {"console": "DEBUG"}


class TestParseFileSpec:

    def test_path_only(self):
        assert parse_file_spec("logs/app.log") == ("logs/app.log", INFO)

    def test_path_and_level(self):
        assert parse_file_spec("logs/app.log:debug") == ("logs/app.log", DEBUG)

    def test_windows_drive_letter(self):
        assert parse_file_spec("C:\\logs\\app.log") == ("C:\\logs\\app.log", INFO)
        assert parse_file_spec("C:\\logs\\app.log:ERROR") == ("C:\\logs\\app.log", ERROR)


class TestResolveConfig:

    def test_defaults(self, tmp_path, tmp_config_home):
        config = resolve_config(start_dir=tmp_path, environ={})
        assert config == LoggingConfig()

    def test_project_file(self, tmp_path, tmp_config_home):
        write_config(tmp_path, {
            "console": "warning",
            "color": False,
            "files": {"logs/app.log": "DEBUG", "/abs/other.log": "TRACE"},
        })
        config = resolve_config(start_dir=tmp_path, environ={})
        assert config.console == WARNING
        assert config.color is False
        assert config.files == {
            tmp_path.resolve() / "logs" / "app.log": DEBUG,
            Path("/abs/other.log"): TRACE,
        }

    def test_console_null_disables(self, tmp_path, tmp_config_home):
        write_config(tmp_path, {"console": None})
        config = resolve_config(start_dir=tmp_path, environ={})
        assert config.console is None

    def test_global_file_used_when_no_project(self, tmp_path, tmp_config_home):
        global_dir = tmp_config_home / ".linelog"
        global_dir.mkdir()
        write_config(global_dir, {"console": "ERROR"}, name="config.json")
        work = tmp_path / "work"
        work.mkdir()
        config = resolve_config(start_dir=work, environ={})
        assert config.console == ERROR

    def test_environment_beats_file(self, tmp_path, tmp_config_home):
        write_config(tmp_path, {"console": "ERROR", "color": True})
        env = {"LINELOG_LEVEL": "debug", "LINELOG_FILE": "env.log:TRACE",
               "NO_COLOR": "1"}
        config = resolve_config(start_dir=tmp_path, environ=env)
        assert config.console == DEBUG
        assert config.color is False
        assert config.files[Path("env.log")] == TRACE

    def test_explicit_beats_environment(self, tmp_path, tmp_config_home):
        env = {"LINELOG_LEVEL": "debug"}
        config = resolve_config(console="ERROR", color=True,
                                files=["x.log:WARNING"],
                                start_dir=tmp_path, environ=env)
        assert config.console == ERROR
        assert config.color is True
        assert config.files == {Path("x.log"): WARNING}

    def test_explicit_config_path(self, tmp_path, tmp_config_home):
        path = write_config(tmp_path, {"console": "TRACE"}, name="custom.json")
        config = resolve_config(config_path=path, environ={})
        assert config.console == TRACE
        assert config.source == path

    def test_bad_level_raises(self, tmp_path, tmp_config_home):
        write_config(tmp_path, {"console": "loud"})
        with pytest.raises(ValueError):
            resolve_config(start_dir=tmp_path, environ={})


class TestApplyConfig:

    def test_registers_workers(self, mgr, tmp_path):
        config = LoggingConfig(console=WARNING, color=False,
                               files={tmp_path / "a.log": DEBUG})
        apply_config(config, mgr)
        assert mgr.identities == (CONSOLE, tmp_path / "a.log")
        assert mgr.get_worker(CONSOLE).level == WARNING
        assert mgr.get_worker(CONSOLE).color is False
        assert mgr.get_worker(tmp_path / "a.log").level == DEBUG

    def test_console_off(self, mgr, tmp_path):
        apply_config(LoggingConfig(console=None), mgr)
        assert len(mgr) == 0

    def test_default_manager(self):
        from linelog.manager import get_manager

        assert apply_config(LoggingConfig()) is get_manager()
        assert get_manager().identities == (CONSOLE,)
