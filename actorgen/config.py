"""Generator configuration.

Read from YAML, CLI options override individual values. Discovery order:
1. CLI --config argument
2. ./actorgen.yaml
3. ./.actorgen/config.yaml

String values support ${VAR} environment substitution.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

_PACKAGE_RE = re.compile(r"^[a-z_][a-z0-9_]*$")
_ENV_RE = re.compile(r"\$\{([^}]+)\}")


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for one generator run.

    Attributes:
        shared_package: Package holding types used by several actors
        package_suffix: Appended to lower-cased actor types for package names
        write_root_init: Create an empty __init__.py in the output directory
        template_dir: Directory overriding the bundled templates
    """

    shared_package: str = "shared"
    package_suffix: str = "actor"
    write_root_init: bool = True
    template_dir: Path | None = None

    def __post_init__(self) -> None:
        if not _PACKAGE_RE.match(self.shared_package):
            raise ConfigError(f"invalid shared_package: {self.shared_package!r}")
        if self.package_suffix and not _PACKAGE_RE.match(self.package_suffix):
            raise ConfigError(f"invalid package_suffix: {self.package_suffix!r}")
        if self.template_dir is not None and not isinstance(self.template_dir, Path):
            object.__setattr__(self, "template_dir", Path(self.template_dir))

    def with_overrides(self, **overrides: Any) -> GeneratorConfig:
        """Copy with the given non-None values replaced."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} in strings, recursing into dicts and lists."""
    if isinstance(value, str):
        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ConfigError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_RE.sub(replace_var, value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(v) for v in value]
    return value


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Look for a config file in the standard locations."""
    start_path = (start_path or Path.cwd()).resolve()
    for candidate in (
        start_path / "actorgen.yaml",
        start_path / ".actorgen" / "config.yaml",
    ):
        if candidate.is_file():
            return candidate
    return None


def load_config_from_dict(data: dict[str, Any]) -> GeneratorConfig:
    data = substitute_env_vars(data or {})
    allowed = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
    return GeneratorConfig(**data)


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load config from `path`, a discovered file, or defaults."""
    path = path or find_config_file()
    if path is None:
        return GeneratorConfig()
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot load config {path}: {e}") from e
    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: config must be a mapping")
    return load_config_from_dict(data)
