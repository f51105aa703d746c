"""Shared fixtures: OpenAPI documents under tests/fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from actorgen.context_builder import build_model
from actorgen.loader import load_document

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict[str, Any]:
    return load_document(FIXTURES / name)


@pytest.fixture
def basic_doc() -> dict[str, Any]:
    return load_fixture("basic-actor.yaml")


@pytest.fixture
def multi_doc() -> dict[str, Any]:
    return load_fixture("multi-actor.yaml")


@pytest.fixture
def alias_doc() -> dict[str, Any]:
    return load_fixture("type-alias.yaml")


@pytest.fixture
def multi_model(multi_doc):
    return build_model(multi_doc)


def make_doc(paths: dict[str, Any], schemas: dict[str, Any] | None = None, **extra: Any) -> dict[str, Any]:
    """Minimal in-memory OpenAPI document."""
    doc: dict[str, Any] = {
        "openapi": "3.0.3",
        "info": {"title": "Inline API", "version": "1.0.0"},
        "paths": paths,
        "components": {"schemas": schemas or {}},
    }
    doc.update(extra)
    return doc


def actor_op(actor: str, returns: str | None = None, request: str | None = None, **extra: Any) -> dict[str, Any]:
    """An operation tagged for `actor`, optionally with $ref request/response."""
    op: dict[str, Any] = {"tags": [f"ActorType:{actor}"], "responses": {"200": {"description": "OK"}}}
    if returns:
        op["responses"]["200"]["content"] = {
            "application/json": {"schema": {"$ref": f"#/components/schemas/{returns}"}},
        }
    if request:
        op["requestBody"] = {
            "content": {"application/json": {"schema": {"$ref": f"#/components/schemas/{request}"}}},
        }
    op.update(extra)
    return op
