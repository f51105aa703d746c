"""Tests for generator configuration."""

from pathlib import Path

import pytest

from actorgen.config import (
    GeneratorConfig,
    find_config_file,
    load_config,
    load_config_from_dict,
    substitute_env_vars,
)
from actorgen.errors import ConfigError


class TestGeneratorConfig:

    def test_defaults(self):
        config = GeneratorConfig()
        assert config.shared_package == "shared"
        assert config.package_suffix == "actor"
        assert config.write_root_init is True
        assert config.template_dir is None

    @pytest.mark.parametrize("name", ["Shared", "my-types", "1types", ""])
    def test_invalid_shared_package(self, name):
        with pytest.raises(ConfigError, match="shared_package"):
            GeneratorConfig(shared_package=name)

    def test_empty_suffix_allowed(self):
        assert GeneratorConfig(package_suffix="").package_suffix == ""

    def test_template_dir_coerced(self):
        assert GeneratorConfig(template_dir="tpl").template_dir == Path("tpl")

    def test_with_overrides_skips_none(self):
        config = GeneratorConfig(shared_package="common")
        assert config.with_overrides(shared_package=None).shared_package == "common"
        assert config.with_overrides(shared_package="base").shared_package == "base"


class TestEnvSubstitution:

    def test_substitutes(self, monkeypatch):
        monkeypatch.setenv("ACTORGEN_SHARED", "common")
        assert substitute_env_vars({"a": ["${ACTORGEN_SHARED}_types"]}) == {"a": ["common_types"]}

    def test_non_strings_untouched(self):
        assert substitute_env_vars({"flag": True, "n": 3}) == {"flag": True, "n": 3}

    def test_missing_variable(self, monkeypatch):
        monkeypatch.delenv("ACTORGEN_MISSING", raising=False)
        with pytest.raises(ConfigError, match="ACTORGEN_MISSING"):
            substitute_env_vars("${ACTORGEN_MISSING}")


class TestLoadConfig:

    def test_from_dict(self):
        config = load_config_from_dict({"shared_package": "common", "write_root_init": False})
        assert config.shared_package == "common"
        assert config.write_root_init is False

    def test_unknown_keys(self):
        with pytest.raises(ConfigError, match="unknown config keys: colour"):
            load_config_from_dict({"colour": "blue"})

    def test_from_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ACTORGEN_SUFFIX", "svc")
        path = tmp_path / "actorgen.yaml"
        path.write_text("package_suffix: ${ACTORGEN_SUFFIX}\n")
        assert load_config(path).package_suffix == "svc"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "actorgen.yaml"
        path.write_text("")
        assert load_config(path) == GeneratorConfig()

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "actorgen.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "actorgen.yaml"
        path.write_text("shared_package: [unclosed\n")
        with pytest.raises(ConfigError, match="cannot load config"):
            load_config(path)

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == GeneratorConfig()


class TestFindConfigFile:

    def test_none(self, tmp_path):
        assert find_config_file(tmp_path) is None

    def test_root_file_preferred(self, tmp_path):
        (tmp_path / ".actorgen").mkdir()
        (tmp_path / ".actorgen" / "config.yaml").write_text("")
        assert find_config_file(tmp_path) == (tmp_path / ".actorgen" / "config.yaml").resolve()
        (tmp_path / "actorgen.yaml").write_text("")
        assert find_config_file(tmp_path) == (tmp_path / "actorgen.yaml").resolve()
