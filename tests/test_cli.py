"""Tests for the actorgen command line."""

import json
import logging

import pytest
from click.testing import CliRunner

from actorgen.cli import main
from actorgen.logging import LOGGER_NAME

from conftest import FIXTURES


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _fixture(name):
    return str(FIXTURES / name)


class TestGenerateCommand:

    def test_success(self, runner, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(main, [_fixture("multi-actor.yaml"), str(out)])
        assert result.exit_code == 0, result.output
        assert "Generated 2 actor packages" in result.output
        assert (out / "calculatoractor" / "api.py").is_file()
        assert (out / "counteractor" / "types.py").is_file()
        assert (out / "shared" / "types.py").is_file()
        assert (out / "__init__.py").is_file()

    def test_lists_written_files(self, runner, tmp_path):
        result = runner.invoke(main, [_fixture("basic-actor.yaml"), str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert str(tmp_path / "testactor" / "api.py") in result.output

    def test_dump_model(self, runner, tmp_path):
        dump = tmp_path / "model" / "model.json"
        result = runner.invoke(main, [_fixture("multi-actor.yaml"), str(tmp_path / "out"), "--dump-model", str(dump)])
        assert result.exit_code == 0, result.output
        data = json.loads(dump.read_text())
        assert [a["actor_type"] for a in data["actors"]] == ["Calculator", "Counter"]
        assert [s["name"] for s in data["shared"]["structs"]] == ["LogMetadata", "LogTag", "OperationLog", "Orphan"]

    def test_shared_package_option(self, runner, tmp_path):
        result = runner.invoke(main, [_fixture("multi-actor.yaml"), str(tmp_path), "--shared-package", "common"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "common" / "types.py").is_file()
        assert not (tmp_path / "shared").exists()

    def test_invalid_shared_package(self, runner, tmp_path):
        result = runner.invoke(main, [_fixture("multi-actor.yaml"), str(tmp_path), "--shared-package", "Not-Valid"])
        assert result.exit_code == 1
        assert "invalid shared_package" in result.output

    def test_config_file(self, runner, tmp_path):
        config = tmp_path / "gen.yaml"
        config.write_text("package_suffix: svc\nshared_package: common\n")
        out = tmp_path / "out"
        result = runner.invoke(main, [_fixture("multi-actor.yaml"), str(out), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert (out / "calculatorsvc" / "api.py").is_file()
        assert (out / "common" / "types.py").is_file()

    def test_option_overrides_config_file(self, runner, tmp_path):
        config = tmp_path / "gen.yaml"
        config.write_text("shared_package: common\n")
        result = runner.invoke(
            main,
            [_fixture("multi-actor.yaml"), str(tmp_path / "out"), "--config", str(config), "--shared-package", "base"],
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "base" / "types.py").is_file()

    def test_discovered_config(self, runner, tmp_path, monkeypatch):
        (tmp_path / "actorgen.yaml").write_text("package_suffix: svc\n")
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(main, [_fixture("basic-actor.yaml"), "out"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "testsvc" / "api.py").is_file()

    def test_quiet(self, runner, tmp_path):
        result = runner.invoke(main, [_fixture("basic-actor.yaml"), str(tmp_path), "-q"])
        assert result.exit_code == 0, result.output
        assert "Generated" not in result.output
        assert "[INFO]" not in result.output

    def test_verbose(self, runner, tmp_path):
        result = runner.invoke(main, [_fixture("multi-actor.yaml"), str(tmp_path), "-v"])
        assert result.exit_code == 0, result.output
        assert "[DEBUG]" in result.output

    def test_fallback_warning(self, runner, tmp_path):
        result = runner.invoke(main, [_fixture("untagged.yaml"), str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "[WARNING]" in result.output
        assert (tmp_path / "widgetactor" / "api.py").is_file()


class TestFailures:

    def test_malformed_path(self, runner, tmp_path):
        result = runner.invoke(main, [_fixture("malformed-path.yaml"), str(tmp_path / "out")])
        assert result.exit_code == 1
        assert "cannot extract method name" in result.output
        assert not (tmp_path / "out").exists()

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.yaml"), str(tmp_path)])
        assert result.exit_code == 2

    def test_not_openapi(self, runner, tmp_path):
        doc = tmp_path / "swagger.yaml"
        doc.write_text("swagger: '2.0'\npaths: {}\n")
        result = runner.invoke(main, [str(doc), str(tmp_path / "out")])
        assert result.exit_code == 1
        assert "Swagger 2.0" in result.output

    def test_bad_config(self, runner, tmp_path):
        config = tmp_path / "gen.yaml"
        config.write_text("colour: blue\n")
        result = runner.invoke(main, [_fixture("basic-actor.yaml"), str(tmp_path / "out"), "--config", str(config)])
        assert result.exit_code == 1
        assert "unknown config keys: colour" in result.output
