"""Names derived from OpenAPI paths, tags and titles.

Actor operations follow the calling convention /{actorId}/method/{name}:

  GET  /{actorId}/method/get          -> Get
  POST /{actorId}/method/setValue     -> SetValue
  GET  /{actorId}/method/getHistory   -> GetHistory

Actor types come from an "ActorType:<Name>" tag:

  ActorType:CounterActor   -> actor CounterActor, package counteractor
  ActorType:BankAccount    -> actor BankAccount,  package bankaccountactor
"""

from __future__ import annotations

import keyword
import re

ACTOR_TAG_PREFIX = "ActorType:"

METHOD_SEGMENT = "method"

DEFAULT_ACTOR_NAME = "Actor"

# Checked in order, only the first match is stripped
_TITLE_SUFFIXES = (" API", " Service", " Interface")


def capitalize_first(s: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    if not s:
        return s
    return s[:1].upper() + s[1:]


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def snake_case(name: str) -> str:
    """Turn a schema property or method name into a Python identifier."""
    result = _camel_to_snake(name)
    result = re.sub(r"[.\- ]", "_", result)
    result = re.sub(r"[^a-z0-9_]", "", result)
    result = re.sub(r"_+", "_", result).strip("_")
    if not result:
        return "field_"
    if result[0].isdigit():
        result = f"_{result}"
    if keyword.iskeyword(result):
        result += "_"
    return result


def raw_method_name(path: str) -> str | None:
    """Return the segment following the literal 'method' segment, if any."""
    parts = path.split("/")
    for i, part in enumerate(parts):
        if part == METHOD_SEGMENT and i + 1 < len(parts):
            return parts[i + 1] or None
    return None


def method_name(path: str) -> str | None:
    """Build the exported method name from an actor path, or None."""
    raw = raw_method_name(path)
    return capitalize_first(raw) if raw else None


def actor_type_from_tags(tags: list[str]) -> str | None:
    """Return the first non-empty ActorType:<Name> tag value."""
    for tag in tags or []:
        if isinstance(tag, str) and tag.startswith(ACTOR_TAG_PREFIX):
            name = tag[len(ACTOR_TAG_PREFIX):].strip()
            if name:
                return name
    return None


def interface_name(actor_type: str) -> str:
    return f"{actor_type}API"


def package_name(actor_type: str, suffix: str = "actor") -> str:
    """Lower-case the actor type and append the suffix unless present."""
    name = actor_type.lower()
    if suffix and not name.endswith(suffix):
        name += suffix
    return name


def fallback_actor_name(title: str | None) -> str:
    """Derive a single actor name from the document title."""
    if not title or not title.strip():
        return DEFAULT_ACTOR_NAME
    title = title.strip()
    for suffix in _TITLE_SUFFIXES:
        if title.endswith(suffix):
            title = title[: -len(suffix)]
            break
    name = title.replace(" ", "")
    return name or DEFAULT_ACTOR_NAME
