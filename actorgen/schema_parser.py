"""Extract type definitions from OpenAPI schemas and parameters.

Handles:
- Struct types (object schemas with at least one property)
- Aliases for every other schema (primitives, arrays, enums, maps)
- $ref fields kept as references to the named schema, not inlined
- Single-entry allOf wrappers around a $ref
- Integer / number width formats (int32, int64, float)
- Alias types for string path parameters and parameter components

Anything the mapping does not understand degrades to the untyped marker.
"""

from __future__ import annotations

import logging
from typing import Any, Collection

from .loader import (
    get_component_parameters,
    get_paths,
    get_schemas,
    iter_operations,
    resolve,
    schema_ref_name,
)
from .model import (
    ANY,
    STRING,
    AliasType,
    Field,
    Mapping,
    Primitive,
    PrimitiveKind,
    Reference,
    Sequence,
    StructType,
    TypeDef,
    TypeRef,
)
from .naming import capitalize_first, snake_case

logger = logging.getLogger(__name__)

_INT_FORMATS = {"int32": PrimitiveKind.INT32, "int64": PrimitiveKind.INT64}


def _reference(name: str, known: Collection[str]) -> TypeRef:
    """Resolve a schema name against the known types."""
    if name in known:
        return Reference(name)
    logger.warning("Unknown schema reference %r, using untyped value", name)
    return ANY


def map_schema(schema: Any, known: Collection[str]) -> TypeRef:
    """Map an OpenAPI schema to a type reference."""
    if not isinstance(schema, dict) or not schema:
        return ANY

    name = schema_ref_name(schema)
    if name is not None:
        return _reference(name, known)

    all_of = schema.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1:
        return map_schema(all_of[0], known)

    schema_type = schema.get("type")
    if schema_type == "string":
        return STRING
    if schema_type == "integer":
        return Primitive(_INT_FORMATS.get(schema.get("format"), PrimitiveKind.INT))
    if schema_type == "number":
        if schema.get("format") == "float":
            return Primitive(PrimitiveKind.FLOAT32)
        return Primitive(PrimitiveKind.FLOAT64)
    if schema_type == "boolean":
        return Primitive(PrimitiveKind.BOOL)
    if schema_type == "array":
        return Sequence(map_schema(schema.get("items"), known))
    if schema_type == "object":
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return Mapping(map_schema(additional, known))
        if additional is True:
            return Mapping(ANY)
        return ANY

    logger.debug("Unmapped schema %s, using untyped value", sorted(schema))
    return ANY


def is_struct_schema(schema: dict[str, Any]) -> bool:
    """A struct is an object schema declaring at least one property."""
    return schema.get("type") == "object" and bool(schema.get("properties"))


def _enum_values(schema: dict[str, Any]) -> tuple[Any, ...]:
    values = schema.get("enum")
    if not isinstance(values, list):
        return ()
    if all(isinstance(v, (str, int, bool)) for v in values):
        return tuple(values)
    return ()


# Attribute names the generated dataclasses define themselves
_RESERVED_ATTRIBUTES = frozenset({"to_dict"})


def _string_keys(mapping: dict[Any, Any]) -> list[tuple[str, Any]]:
    """Items with string keys, sorted. Guards against non-string YAML keys."""
    return sorted(((str(key), value) for key, value in mapping.items()), key=lambda item: item[0])


def _unique_attribute(prop_name: str, taken: set[str]) -> str:
    """snake_case attribute for a property, suffixed with _2, _3 ... on collision."""
    base = snake_case(prop_name)
    attribute = base
    n = 2
    while attribute in taken or attribute in _RESERVED_ATTRIBUTES:
        attribute = f"{base}_{n}"
        n += 1
    if attribute != base:
        logger.warning("Property %r renamed to attribute %s to avoid a clash", prop_name, attribute)
    taken.add(attribute)
    return attribute


def parse_struct(name: str, schema: dict[str, Any], known: Collection[str]) -> StructType:
    """Build a struct type with fields sorted by property name."""
    required = {str(r) for r in schema.get("required") or []}
    taken: set[str] = set()
    fields = []
    for prop_name, prop in _string_keys(schema["properties"]):
        prop = prop if isinstance(prop, dict) else {}
        fields.append(Field(
            name=prop_name,
            type=map_schema(prop, known),
            optional=prop_name not in required,
            description=(prop.get("description") or "").strip(),
            attribute=_unique_attribute(prop_name, taken),
        ))
    return StructType(
        name=name,
        description=(schema.get("description") or "").strip(),
        fields=tuple(fields),
    )


def parse_alias(name: str, schema: dict[str, Any], known: Collection[str]) -> AliasType:
    return AliasType(
        name=name,
        target=map_schema(schema, known),
        original_name=name,
        description=(schema.get("description") or "").strip(),
        enum=_enum_values(schema),
    )


def extract_schema_types(doc: dict[str, Any]) -> list[TypeDef]:
    """One type per component schema, in schema-name order."""
    schemas = get_schemas(doc)
    known = {str(name) for name in schemas}
    types: list[TypeDef] = []

    for name, schema in _string_keys(schemas):
        schema = schema if isinstance(schema, dict) else {}
        if is_struct_schema(schema):
            types.append(parse_struct(name, schema, known))
        else:
            types.append(parse_alias(name, schema, known))

    return types


def _is_string_parameter(param: dict[str, Any]) -> bool:
    """String-typed inline schema; $ref'd schemas already have a named type."""
    schema = param.get("schema")
    return (
        isinstance(schema, dict)
        and "$ref" not in schema
        and schema.get("type") == "string"
    )


def parameter_alias_name(param_name: str) -> str:
    return capitalize_first(param_name)


def _parameter_alias(param: dict[str, Any]) -> AliasType:
    original = param["name"]
    return AliasType(
        name=parameter_alias_name(original),
        target=STRING,
        original_name=original,
        description=f"defines model for `{original}`",
    )


def path_parameters(
    doc: dict[str, Any],
    path_item: dict[str, Any],
    operation: dict[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """String path parameters declared on a path item and, optionally, an operation."""
    raw = list(path_item.get("parameters") or [])
    if operation is not None:
        raw.extend(operation.get("parameters") or [])

    params = []
    for param in raw:
        param = resolve(doc, param)
        if not isinstance(param, dict) or not param.get("name"):
            continue
        if param.get("in") == "path" and _is_string_parameter(param):
            params.append(param)
    return params


def extract_parameter_aliases(
    doc: dict[str, Any], taken: Collection[str],
) -> list[AliasType]:
    """Alias types for string path parameters and parameter components."""
    candidates: list[dict[str, Any]] = []

    for path_item in get_paths(doc).values():
        if isinstance(path_item, dict):
            candidates.extend(path_parameters(doc, path_item))
    for _path, _method, path_item, operation in iter_operations(doc):
        candidates.extend(path_parameters(doc, {}, operation))
    for param in get_component_parameters(doc).values():
        param = resolve(doc, param)
        if isinstance(param, dict) and param.get("name") and _is_string_parameter(param):
            candidates.append(param)

    aliases: dict[str, AliasType] = {}
    for param in candidates:
        alias = _parameter_alias(param)
        if alias.name in taken:
            logger.debug("Parameter %s shadowed by schema %s", param["name"], alias.name)
            continue
        aliases.setdefault(alias.name, alias)

    return [aliases[name] for name in sorted(aliases)]


def extract_types(doc: dict[str, Any]) -> list[TypeDef]:
    """All types of the document: schema types first, then parameter aliases."""
    types = extract_schema_types(doc)
    types.extend(extract_parameter_aliases(doc, {t.name for t in types}))
    logger.debug("Extracted %d types", len(types))
    return types
