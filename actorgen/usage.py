"""Work out which actors use which types.

Usage is seeded from method signatures (request type, return type, string
path parameters) and then pushed along type dependencies: if struct A has a
field of type B, every actor using A also uses B. Propagation runs to a
fixed point so chains like A -> B -> C are covered.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Mapping

from .model import Method, TypeDef

logger = logging.getLogger(__name__)


def dependency_graph(types: list[TypeDef]) -> dict[str, tuple[str, ...]]:
    """Edges A -> B for every known custom type B referenced by A."""
    known = {t.name for t in types}
    graph: dict[str, tuple[str, ...]] = {}
    for t in types:
        deps: list[str] = []
        for name in t.dependencies():
            if name in known and name != t.name and name not in deps:
                deps.append(name)
        graph[t.name] = tuple(deps)
    return graph


def seed_usage(
    types: list[TypeDef], actor_methods: Mapping[str, tuple[Method, ...]],
) -> dict[str, set[str]]:
    """Direct usage from method signatures."""
    usage: dict[str, set[str]] = {t.name: set() for t in types}
    for actor_type, methods in actor_methods.items():
        for method in methods:
            for name in method.used_type_names():
                if name in usage:
                    usage[name].add(actor_type)
    return usage


def propagate_usage(
    usage: dict[str, set[str]], graph: Mapping[str, tuple[str, ...]],
) -> dict[str, set[str]]:
    """Copy each type's users onto its dependencies until nothing changes."""
    result = {name: set(actors) for name, actors in usage.items()}
    pending = deque(name for name in result if result[name])
    while pending:
        parent = pending.popleft()
        for dep in graph.get(parent, ()):
            missing = result[parent] - result[dep]
            if missing:
                result[dep] |= missing
                pending.append(dep)
    return result


def analyze_usage(
    types: list[TypeDef], actor_methods: Mapping[str, tuple[Method, ...]],
) -> dict[str, frozenset[str]]:
    """Usage set per type name, in type extraction order."""
    usage = propagate_usage(seed_usage(types, actor_methods), dependency_graph(types))
    for name, actors in usage.items():
        if not actors:
            logger.debug("Type %s is not used by any actor", name)
    return {t.name: frozenset(usage[t.name]) for t in types}
