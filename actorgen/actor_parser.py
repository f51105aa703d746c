"""Group OpenAPI operations into actor method lists.

An operation belongs to the actor named by its first "ActorType:<Name>"
tag; untagged operations are skipped. The method name comes from the
/method/<name> path segment, which every actor operation must have.

When no operation carries an ActorType tag the whole document is treated
as one actor named after info.title. This degraded mode loses any
multi-actor structure and is logged as a warning.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .errors import ConventionError, NoActorTypesError
from .loader import get_title, iter_operations, json_schema, resolve, schema_ref_name
from .model import ANY, AliasType, Method, Reference, Sequence, TypeDef, TypeRef
from .naming import actor_type_from_tags, fallback_actor_name, method_name
from .schema_parser import parameter_alias_name, path_parameters

logger = logging.getLogger(__name__)

DEFAULT_COMMENT = "Generated method from OpenAPI operation"


def operation_comment(operation: dict[str, Any]) -> str:
    """Summary, else first line of the description, else a default."""
    summary = (operation.get("summary") or "").strip()
    if summary:
        return summary
    description = (operation.get("description") or "").strip()
    if description:
        return description.splitlines()[0].strip()
    return DEFAULT_COMMENT


def extract_request_type(
    doc: dict[str, Any], operation: dict[str, Any], known: Mapping[str, TypeDef],
) -> tuple[bool, Reference | None]:
    """Return (has_request, request type) for an operation."""
    body = operation.get("requestBody")
    if not body:
        return False, None
    body = resolve(doc, body)
    if not body:
        return False, None

    name = schema_ref_name(json_schema(body.get("content")))
    if name is None:
        return True, None
    if name not in known:
        logger.warning("Request body references unknown schema %r", name)
        return True, None
    return True, Reference(name)


def _success_response(doc: dict[str, Any], operation: dict[str, Any]) -> dict[str, Any]:
    responses = operation.get("responses") or {}
    # YAML reads an unquoted 200 key as an int
    response = responses.get("200", responses.get(200))
    if not isinstance(response, dict):
        return {}
    return resolve(doc, response)


def extract_return_type(
    doc: dict[str, Any], operation: dict[str, Any], known: Mapping[str, TypeDef],
) -> TypeRef:
    """Resolve the 200 response schema to a reference, a list of one, or ANY."""
    schema = json_schema(_success_response(doc, operation).get("content"))
    if schema is None:
        return ANY

    name = schema_ref_name(schema)
    if name is not None:
        if name in known:
            return Reference(name)
        logger.warning("Response references unknown schema %r", name)
        return ANY

    if schema.get("type") == "array":
        item = schema_ref_name(schema.get("items"))
        if item is not None and item in known:
            return Sequence(Reference(item))

    return ANY


def _parameter_types(
    doc: dict[str, Any],
    path_item: dict[str, Any],
    operation: dict[str, Any],
    known: Mapping[str, TypeDef],
) -> tuple[str, ...]:
    names: list[str] = []
    for param in path_parameters(doc, path_item, operation):
        alias = known.get(parameter_alias_name(param["name"]))
        if isinstance(alias, AliasType) and alias.original_name == param["name"]:
            if alias.name not in names:
                names.append(alias.name)
    return tuple(names)


def extract_method(
    doc: dict[str, Any],
    path: str,
    http_method: str,
    path_item: dict[str, Any],
    operation: dict[str, Any],
    known: Mapping[str, TypeDef],
) -> Method:
    """Build the method for one actor operation."""
    name = method_name(path)
    if name is None:
        raise ConventionError(
            f"{http_method.upper()} {path}: cannot extract method name, "
            "path must follow '/{actorId}/method/{methodName}'"
        )

    has_request, request_type = extract_request_type(doc, operation, known)
    return Method(
        name=name,
        http_method=http_method.upper(),
        path=path,
        comment=operation_comment(operation),
        has_request=has_request,
        request_type=request_type,
        return_type=extract_return_type(doc, operation, known),
        parameters=_parameter_types(doc, path_item, operation, known),
    )


def _has_actor_tags(doc: dict[str, Any]) -> bool:
    return any(
        actor_type_from_tags(op.get("tags") or []) is not None
        for _path, _method, _item, op in iter_operations(doc)
    )


def extract_actor_methods(
    doc: dict[str, Any], types: list[TypeDef],
) -> dict[str, tuple[Method, ...]]:
    """Map each actor type to its methods, in first-seen order.

    Actor types without methods are dropped. Raises ConventionError for a
    path without a method segment or two methods of one actor sharing a name
    or Python attribute, and NoActorTypesError when nothing is left.
    """
    known = {t.name: t for t in types}
    fallback: str | None = None
    if not _has_actor_tags(doc):
        fallback = fallback_actor_name(get_title(doc))
        logger.warning(
            "No ActorType tags found, treating all operations as actor %s", fallback,
        )

    actor_methods: dict[str, list[Method]] = {}
    if fallback is not None:
        actor_methods[fallback] = []

    for path, http_method, path_item, operation in iter_operations(doc):
        actor_type = fallback or actor_type_from_tags(operation.get("tags") or [])
        if actor_type is None:
            logger.debug("Skipping %s %s: no actor type", http_method.upper(), path)
            continue

        method = extract_method(doc, path, http_method, path_item, operation, known)
        methods = actor_methods.setdefault(actor_type, [])
        for existing in methods:
            if existing.name == method.name:
                raise ConventionError(
                    f"{method.http_method} {path}: method {method.name} already "
                    f"defined for {actor_type} by {existing.http_method} {existing.path}"
                )
            if existing.attribute == method.attribute:
                raise ConventionError(
                    f"{method.http_method} {path}: method {method.name} clashes with "
                    f"{existing.name} ({existing.http_method} {existing.path}), both map "
                    f"to Python method {method.attribute}"
                )
        methods.append(method)

    result = {}
    for actor_type, methods in actor_methods.items():
        if not methods:
            logger.debug("Dropping actor %s: no methods", actor_type)
            continue
        result[actor_type] = tuple(methods)

    if not result:
        raise NoActorTypesError("no actor types found in OpenAPI document")
    return result
