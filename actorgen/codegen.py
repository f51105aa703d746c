"""Render templates and write the generated packages.

Layout under the output directory:

  <shared>/__init__.py, <shared>/types.py     only if shared types exist
  <actor package>/__init__.py
  <actor package>/types.py                    private dataclasses and aliases
  <actor package>/api.py                      Protocol contract for the actor

Generated modules import dataclasses and typing names under underscore
aliases (_dataclasses, _Any, _Optional ...). Field attributes are
snake_case and never begin with an underscore and a letter, so a property
or schema called `dataclasses` or `Any` cannot shadow them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorConfig
from .context_builder import actor_context, shared_context
from .errors import RenderError
from .model import (
    AliasType,
    GenerationModel,
    Mapping,
    Primitive,
    PrimitiveKind,
    Reference,
    Sequence,
    TypeRef,
    referenced_names,
)
from .naming import snake_case

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

_PRIMITIVE_TYPES: dict[PrimitiveKind, str] = {
    PrimitiveKind.STRING: "str",
    PrimitiveKind.INT: "int",
    PrimitiveKind.INT32: "int",
    PrimitiveKind.INT64: "int",
    PrimitiveKind.FLOAT32: "float",
    PrimitiveKind.FLOAT64: "float",
    PrimitiveKind.BOOL: "bool",
    PrimitiveKind.ANY: "_Any",
}


def pytype(ref: TypeRef) -> str:
    """Python annotation for a type reference."""
    if isinstance(ref, Primitive):
        return _PRIMITIVE_TYPES[ref.kind]
    if isinstance(ref, Reference):
        return ref.name
    if isinstance(ref, Sequence):
        return f"list[{pytype(ref.item)}]"
    if isinstance(ref, Mapping):
        return f"dict[str, {pytype(ref.value)}]"
    raise TypeError(f"not a type reference: {ref!r}")


def alias_value(alias: AliasType) -> str:
    """Right-hand side of an alias assignment.

    Targets naming other generated types are quoted so definition order
    and cross-package imports never matter at import time.
    """
    if alias.enum:
        return "_Literal[{}]".format(", ".join(repr(v) for v in alias.enum))
    value = pytype(alias.target)
    if any(True for _ in referenced_names(alias.target)):
        return repr(value)
    return value


def comment(text: str) -> str:
    """Collapse a description onto one line."""
    return " ".join((text or "").split())


def docstring(text: str) -> str:
    """Escape text for use inside a triple-quoted string."""
    return comment(text).replace("\\", "\\\\").replace('"', '\\"')


def create_environment(template_dir: Path | None = None) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["pytype"] = pytype
    env.filters["alias_value"] = alias_value
    env.filters["snake"] = snake_case
    env.filters["comment"] = comment
    env.filters["docstring"] = docstring
    return env


def render(model: GenerationModel, config: GeneratorConfig | None = None) -> dict[Path, str]:
    """Render every output file, keyed by path relative to the output directory."""
    config = config or GeneratorConfig()
    env = create_environment(config.template_dir)
    files: dict[Path, str] = {}

    try:
        if not model.shared.is_empty:
            context = shared_context(model, config)
            package = Path(config.shared_package)
            files[package / "__init__.py"] = _render(env, "shared_init.py.j2", context)
            files[package / "types.py"] = _render(env, "shared_types.py.j2", context)

        for actor in model.actors:
            context = actor_context(actor, config)
            package = Path(actor.package_name)
            files[package / "__init__.py"] = _render(env, "actor_init.py.j2", context)
            files[package / "types.py"] = _render(env, "actor_types.py.j2", context)
            files[package / "api.py"] = _render(env, "interface.py.j2", context)
    except jinja2.TemplateError as e:
        raise RenderError(f"template rendering failed: {e}") from e

    return files


def _render(env: jinja2.Environment, name: str, context: dict[str, Any]) -> str:
    return env.get_template(name).render(**context)


def generate(
    model: GenerationModel,
    output_dir: Path,
    config: GeneratorConfig | None = None,
) -> list[Path]:
    """Render the model and write it under output_dir. Returns written paths."""
    config = config or GeneratorConfig()
    files = render(model, config)
    written: list[Path] = []

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        root_init = output_dir / "__init__.py"
        if config.write_root_init and not root_init.exists():
            root_init.write_text("")
            written.append(root_init)

        for relative, content in sorted(files.items()):
            path = output_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            written.append(path)
    except OSError as e:
        raise RenderError(f"cannot write generated code to {output_dir}: {e}") from e

    for actor in model.actors:
        logger.info("Generated actor package: %s", output_dir / actor.package_name)
    if not model.shared.is_empty:
        logger.info("Generated shared types package: %s", output_dir / config.shared_package)

    return sorted(written)
