"""Assemble the generation model and the Jinja2 template contexts.

build_model runs the whole analysis: extract types and actor methods,
compute usage, place every type, and freeze the result. The *_context
functions turn the model into the plain dicts the templates read.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .actor_parser import extract_actor_methods
from .config import GeneratorConfig
from .model import Actor, GenerationModel, Method, TypeCollection, referenced_names
from .naming import interface_name, package_name
from .placement import categorize_types
from .schema_parser import extract_types
from .usage import analyze_usage

logger = logging.getLogger(__name__)


def _actor_description(actor_type: str) -> str:
    return (
        "defines the interface that must be implemented to satisfy "
        f"the OpenAPI schema for {actor_type}"
    )


def build_model(doc: dict[str, Any], config: GeneratorConfig | None = None) -> GenerationModel:
    """Build the intermediate model for a loaded OpenAPI document."""
    config = config or GeneratorConfig()

    types = extract_types(doc)
    actor_methods = extract_actor_methods(doc, types)
    usage = analyze_usage(types, actor_methods)
    private, shared = categorize_types(types, usage, list(actor_methods))

    actors = tuple(
        Actor(
            actor_type=actor_type,
            interface_name=interface_name(actor_type),
            description=_actor_description(actor_type),
            package_name=package_name(actor_type, config.package_suffix),
            methods=methods,
            types=private.get(actor_type, TypeCollection()),
            shared=shared,
        )
        for actor_type, methods in actor_methods.items()
    )

    logger.info(
        "Built model: %d actors, %d shared types, %d private types",
        len(actors),
        len(shared),
        sum(len(a.types) for a in actors),
    )
    return GenerationModel(actors=actors, shared=shared)


def _dependencies(types: TypeCollection) -> set[str]:
    names: set[str] = set()
    for t in types:
        names.update(t.dependencies())
    return names


def _signature_names(methods: Iterable[Method]) -> set[str]:
    """Type names appearing in the rendered method signatures."""
    names: set[str] = set()
    for method in methods:
        if method.request_type is not None:
            names.add(method.request_type.name)
        names.update(referenced_names(method.return_type))
    return names


def actor_context(actor: Actor, config: GeneratorConfig) -> dict[str, Any]:
    """Context for one actor's types.py, api.py and __init__.py."""
    signature = _signature_names(actor.methods)
    return {
        "package_name": actor.package_name,
        "shared_package": config.shared_package,
        "actor": actor,
        "actor_type": actor.actor_type,
        "types": actor.types,
        "types_shared_imports": sorted(_dependencies(actor.types) & set(actor.shared.names)),
        "api_local_imports": sorted(signature & set(actor.types.names)),
        "api_shared_imports": sorted(signature & set(actor.shared.names)),
    }


def shared_context(model: GenerationModel, config: GeneratorConfig) -> dict[str, Any]:
    """Context for the shared package.

    Shared types only reach into actor packages when an unused shared type
    depends on a private one; those imports are emitted for type checkers only.
    """
    deps = _dependencies(model.shared)
    private_imports: dict[str, list[str]] = {}
    for actor in model.actors:
        names = sorted(deps & set(actor.types.names))
        if names:
            private_imports[actor.package_name] = names
    return {
        "package_name": config.shared_package,
        "types": model.shared,
        "private_imports": private_imports,
    }
