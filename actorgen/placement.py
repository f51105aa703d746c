"""Assign each type to the shared package or to one actor's package.

Only the size of the usage set matters: exactly one actor makes the type
private to that actor, anything else (several actors, or none) makes it
shared.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .model import TypeCollection, TypeDef

logger = logging.getLogger(__name__)


def owner_of(usage: frozenset[str]) -> str | None:
    """The single actor using a type, or None if the type is shared."""
    if len(usage) == 1:
        return next(iter(usage))
    return None


def categorize_types(
    types: list[TypeDef],
    usage: Mapping[str, frozenset[str]],
    actor_types: list[str],
) -> tuple[dict[str, TypeCollection], TypeCollection]:
    """Return (private collection per actor, shared collection)."""
    private: dict[str, list[TypeDef]] = {actor: [] for actor in actor_types}
    shared: list[TypeDef] = []

    for t in types:
        actors = usage.get(t.name, frozenset())
        owner = owner_of(actors)
        if owner is None:
            if not actors:
                logger.debug("Unused type %s placed in shared package", t.name)
            shared.append(t)
        else:
            private.setdefault(owner, []).append(t)

    return (
        {actor: TypeCollection.from_types(ts) for actor, ts in private.items()},
        TypeCollection.from_types(shared),
    )
