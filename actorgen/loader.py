"""Load and query an OpenAPI 3 document.

Reads YAML or JSON from disk and exposes the handful of lookups the
extractors need: paths, component schemas, parameters and $ref resolution.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from .errors import DocumentLoadError

logger = logging.getLogger(__name__)

# Verb order fixes method order in the generated contracts
HTTP_METHODS = ("get", "post", "put", "delete", "patch")

SCHEMA_REF_PREFIX = "#/components/schemas/"

_BOOL_TAG = "tag:yaml.org,2002:bool"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 booleans.

    YAML 1.1 reads on/off/yes/no as booleans, which turns property names
    like `on` into True. Only true/false are booleans here.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DocumentLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def load_document(path: Path | str) -> dict[str, Any]:
    """Load an OpenAPI document from disk and check its basic shape."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            doc = json.loads(text)
        else:
            doc = yaml.load(text, Loader=DocumentLoader)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentLoadError(f"cannot parse {path}: {e}") from e

    validate_document(doc, source=str(path))
    logger.debug("Loaded %s (%d paths)", path, len(get_paths(doc)))
    return doc


def validate_document(doc: Any, source: str = "document") -> None:
    """Reject documents that are not OpenAPI 3.x."""
    if not isinstance(doc, dict):
        raise DocumentLoadError(f"{source}: top level must be a mapping")
    version = str(doc.get("openapi", ""))
    if not version:
        if "swagger" in doc:
            raise DocumentLoadError(f"{source}: Swagger 2.0 is not supported, convert to OpenAPI 3")
        raise DocumentLoadError(f"{source}: missing 'openapi' version field")
    if not version.startswith("3."):
        raise DocumentLoadError(f"{source}: unsupported OpenAPI version {version}")
    if not isinstance(doc.get("paths"), dict):
        raise DocumentLoadError(f"{source}: missing 'paths' object")


def get_paths(doc: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return doc.get("paths") or {}


def get_schemas(doc: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the document."""
    return (doc.get("components") or {}).get("schemas") or {}


def get_component_parameters(doc: dict[str, Any]) -> dict[str, Any]:
    """Extract reusable parameter components."""
    return (doc.get("components") or {}).get("parameters") or {}


def get_title(doc: dict[str, Any]) -> str | None:
    return (doc.get("info") or {}).get("title")


def iter_operations(doc: dict[str, Any]):
    """Yield (path, verb, path_item, operation) in sorted path and fixed verb order."""
    for path, path_item in sorted(get_paths(doc).items()):
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                yield path, method, path_item, operation


def resolve_ref(doc: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the document."""
    if not ref.startswith("#/"):
        raise DocumentLoadError(f"external reference not supported: {ref}")
    node: Any = doc
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise DocumentLoadError(f"unresolvable reference: {ref}")
        node = node[part]
    return node


def resolve(doc: dict[str, Any], node: dict[str, Any]) -> dict[str, Any]:
    """Follow $ref chains until a concrete object is reached."""
    seen: set[str] = set()
    while isinstance(node, dict) and "$ref" in node:
        ref = node["$ref"]
        if ref in seen:
            raise DocumentLoadError(f"circular reference: {ref}")
        seen.add(ref)
        node = resolve_ref(doc, ref)
    return node


def ref_name(ref: str) -> str:
    """Return the last segment of a $ref pointer."""
    return ref.rsplit("/", 1)[-1]


def schema_ref_name(schema: Any) -> str | None:
    """Return the component schema name if `schema` is a direct $ref."""
    if isinstance(schema, dict) and isinstance(schema.get("$ref"), str):
        return ref_name(schema["$ref"])
    return None


def json_schema(content: Any) -> dict[str, Any] | None:
    """Pick the application/json schema out of a content map."""
    if not isinstance(content, dict):
        return None
    media = content.get("application/json")
    if not isinstance(media, dict):
        return None
    schema = media.get("schema")
    return schema if isinstance(schema, dict) else None
