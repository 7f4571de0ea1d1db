"""Registration of taxonomy documentation in a FastAPI OpenAPI document."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from json_resp.openapi import DocArtifact, DocArtifacts
from json_resp.taxonomy import JsonErrorEnum

DocSource = type[JsonErrorEnum] | DocArtifacts | DocArtifact


def collect_components(*sources: DocSource) -> dict[str, dict[str, Any]]:
    """Merge the ``components`` sections of units, artifact sets and single artifacts."""
    components: dict[str, dict[str, Any]] = {"schemas": {}, "responses": {}}
    for source in sources:
        if isinstance(source, type) and issubclass(source, JsonErrorEnum):
            part = source.oai.components()
        elif isinstance(source, (DocArtifacts, DocArtifact)):
            part = source.components()
        else:
            raise TypeError(f"Cannot document {source!r}: expected a JsonErrorEnum subclass or doc artifacts")
        for section, entries in part.items():
            components[section].update(entries)
    return components


def register_openapi(app: FastAPI, *sources: DocSource) -> None:
    """Add the error schemas of ``sources`` to the app's OpenAPI document.

    Routes reference these schemas through ``responses=`` built from the same
    artifacts, so both must be registered for the document to resolve.
    """
    components = collect_components(*sources)
    build_openapi = app.openapi

    def openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = build_openapi()
        schema_components = schema.setdefault("components", {})
        for section, entries in components.items():
            if entries:
                schema_components.setdefault(section, {}).update(entries)
        return schema

    app.openapi = openapi  # type: ignore[method-assign]
