"""Intermediate model produced from an OpenAPI document.

The model is independent of the template layer: codegen only reads it.
All classes are frozen and hold tuples so a built model cannot change.

Type references are a closed set of variants instead of type-name strings:

  Primitive(kind)   string, int, int32, int64, float32, float64, bool, any
  Reference(name)   a named type extracted from the document
  Sequence(item)    list of another reference
  Mapping(value)    string-keyed map
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Union

from .naming import snake_case


class PrimitiveKind(str, Enum):
    STRING = "string"
    INT = "int"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    ANY = "any"


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class Reference:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Sequence:
    item: "TypeRef"

    def __str__(self) -> str:
        return f"list[{self.item}]"


@dataclass(frozen=True)
class Mapping:
    value: "TypeRef"

    def __str__(self) -> str:
        return f"map[string]{self.value}"


TypeRef = Union[Primitive, Reference, Sequence, Mapping]

ANY = Primitive(PrimitiveKind.ANY)
STRING = Primitive(PrimitiveKind.STRING)


def referenced_names(ref: TypeRef) -> Iterator[str]:
    """Yield every custom type name inside a reference."""
    if isinstance(ref, Reference):
        yield ref.name
    elif isinstance(ref, Sequence):
        yield from referenced_names(ref.item)
    elif isinstance(ref, Mapping):
        yield from referenced_names(ref.value)


def is_any(ref: TypeRef) -> bool:
    return ref == ANY


@dataclass(frozen=True)
class Field:
    """A struct field. `name` is the source property and serialization key.

    `attribute` is the Python name, snake_case of `name` unless given.
    """

    name: str
    type: TypeRef
    optional: bool = True
    description: str = ""
    attribute: str = ""

    def __post_init__(self) -> None:
        if not self.attribute:
            object.__setattr__(self, "attribute", snake_case(self.name))

    @property
    def json_tag(self) -> str:
        return f"{self.name},omitempty" if self.optional else self.name


@dataclass(frozen=True)
class StructType:
    name: str
    description: str = ""
    fields: tuple[Field, ...] = ()

    def dependencies(self) -> Iterator[str]:
        for f in self.fields:
            yield from referenced_names(f.type)


@dataclass(frozen=True)
class AliasType:
    name: str
    target: TypeRef
    original_name: str = ""
    description: str = ""
    enum: tuple[Any, ...] = ()

    def dependencies(self) -> Iterator[str]:
        yield from referenced_names(self.target)


TypeDef = Union[StructType, AliasType]


@dataclass(frozen=True)
class TypeCollection:
    """Struct and alias definitions rendered into one types module."""

    structs: tuple[StructType, ...] = ()
    aliases: tuple[AliasType, ...] = ()

    def __iter__(self) -> Iterator[TypeDef]:
        yield from self.structs
        yield from self.aliases

    def __len__(self) -> int:
        return len(self.structs) + len(self.aliases)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self)

    @property
    def is_empty(self) -> bool:
        return not self.structs and not self.aliases

    def get(self, name: str) -> TypeDef | None:
        for t in self:
            if t.name == name:
                return t
        return None

    @classmethod
    def from_types(cls, types: list[TypeDef]) -> TypeCollection:
        return cls(
            structs=tuple(t for t in types if isinstance(t, StructType)),
            aliases=tuple(t for t in types if isinstance(t, AliasType)),
        )


@dataclass(frozen=True)
class Method:
    name: str
    http_method: str
    path: str
    comment: str
    has_request: bool = False
    request_type: Reference | None = None
    return_type: TypeRef = ANY
    parameters: tuple[str, ...] = ()

    @property
    def attribute(self) -> str:
        return snake_case(self.name)

    def used_type_names(self) -> Iterator[str]:
        """Names this method references directly (request, return, path params)."""
        if self.has_request and self.request_type is not None:
            yield self.request_type.name
        if not is_any(self.return_type):
            yield from referenced_names(self.return_type)
        yield from self.parameters


@dataclass(frozen=True)
class Actor:
    actor_type: str
    interface_name: str
    description: str
    package_name: str
    methods: tuple[Method, ...]
    types: TypeCollection = field(default_factory=TypeCollection)
    shared: TypeCollection = field(default_factory=TypeCollection)


@dataclass(frozen=True)
class GenerationModel:
    actors: tuple[Actor, ...]
    shared: TypeCollection = field(default_factory=TypeCollection)

    def all_types(self) -> Iterator[TypeDef]:
        yield from self.shared
        for actor in self.actors:
            yield from actor.types

    def placement_of(self, name: str) -> str | None:
        """Return the owning actor type, or None when the type is shared.

        Raises KeyError if no collection holds the type.
        """
        if name in self.shared:
            return None
        for actor in self.actors:
            if name in actor.types:
                return actor.actor_type
        raise KeyError(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "actors": [_actor_dict(a) for a in self.actors],
            "shared": _collection_dict(self.shared),
        }


def _type_dict(t: TypeDef) -> dict[str, Any]:
    if isinstance(t, StructType):
        return {
            "name": t.name,
            "kind": "struct",
            "description": t.description,
            "fields": [
                {
                    "name": f.name,
                    "type": str(f.type),
                    "json_tag": f.json_tag,
                    "description": f.description,
                }
                for f in t.fields
            ],
        }
    return {
        "name": t.name,
        "kind": "alias",
        "target": str(t.target),
        "original_name": t.original_name,
        "description": t.description,
        "enum": list(t.enum),
    }


def _collection_dict(c: TypeCollection) -> dict[str, Any]:
    return {
        "structs": [_type_dict(t) for t in c.structs],
        "aliases": [_type_dict(t) for t in c.aliases],
    }


def _actor_dict(a: Actor) -> dict[str, Any]:
    return {
        "actor_type": a.actor_type,
        "interface_name": a.interface_name,
        "description": a.description,
        "package_name": a.package_name,
        "methods": [
            {
                "name": m.name,
                "http_method": m.http_method,
                "path": m.path,
                "comment": m.comment,
                "has_request": m.has_request,
                "request_type": m.request_type.name if m.request_type else None,
                "return_type": str(m.return_type),
                "parameters": list(m.parameters),
            }
            for m in a.methods
        ],
        "types": _collection_dict(a.types),
    }
