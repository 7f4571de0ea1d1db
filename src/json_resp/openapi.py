"""Lowering of an IR into OpenAPI documentation fragments.

Every client-facing case becomes one ``DocArtifact`` (schema, response and a
status-keyed response index). All internal cases share a single
``InternalError`` artifact. ``combine_errors`` merges two artifacts that
document the same status into a ``oneOf`` alternative.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from json_resp.attrs import INTERNAL_SERVER_ERROR, ClientFacing
from json_resp.errors import ContractViolation
from json_resp.ir import INTERNAL_ERROR_NAME, Case, ErrorTaxonomyIR

SCHEMA_REF_PREFIX = "#/components/schemas/"
MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class DocArtifact:
    schema_name: str
    schema: dict[str, Any]
    response: dict[str, Any]
    status_index: dict[str, dict[str, Any]]
    status: int
    codes: tuple[str, ...]
    parts: tuple[DocArtifact, ...] = ()

    @property
    def description(self) -> str:
        return str(self.response["description"])

    @property
    def leaves(self) -> tuple[DocArtifact, ...]:
        return self.parts or (self,)

    def responses(self) -> dict[int | str, dict[str, Any]]:
        """Status-keyed responses, ready for a FastAPI ``responses=`` argument."""
        return {status: copy.deepcopy(response) for status, response in self.status_index.items()}

    def schemas(self) -> dict[str, dict[str, Any]]:
        schemas = {leaf.schema_name: copy.deepcopy(leaf.schema) for leaf in self.leaves}
        schemas[self.schema_name] = copy.deepcopy(self.schema)
        return schemas

    def components(self) -> dict[str, Any]:
        return {
            "schemas": self.schemas(),
            "responses": {self.schema_name: copy.deepcopy(self.response)},
        }


class DocArtifacts(Mapping[str, DocArtifact]):
    """Documentation artifacts of one unit, keyed (and attribute-accessible) by name."""

    def __init__(self, type_name: str, artifacts: list[DocArtifact]) -> None:
        self.type_name = type_name
        self._artifacts = {a.schema_name: a for a in artifacts}

    def __getitem__(self, name: str) -> DocArtifact:
        return self._artifacts[name]

    def __getattr__(self, name: str) -> DocArtifact:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._artifacts[name]
        except KeyError:
            raise AttributeError(f"{self.type_name} documents no error named {name!r}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._artifacts)

    def __len__(self) -> int:
        return len(self._artifacts)

    def __repr__(self) -> str:
        return f"DocArtifacts({self.type_name!r}, {list(self._artifacts)!r})"

    def components(self) -> dict[str, Any]:
        components: dict[str, Any] = {"schemas": {}, "responses": {}}
        for artifact in self._artifacts.values():
            part = artifact.components()
            components["schemas"].update(part["schemas"])
            components["responses"].update(part["responses"])
        return components


def _schema_ref(name: str) -> dict[str, str]:
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}


def _enum_property(schema_type: str, value: int | str) -> dict[str, Any]:
    return {"type": schema_type, "enum": [value], "example": value}


def _build_artifact(
    name: str,
    status: int,
    codes: tuple[str, ...],
    schema: dict[str, Any],
    description: str,
    parts: tuple[DocArtifact, ...] = (),
) -> DocArtifact:
    response = {
        "description": description,
        "content": {MEDIA_TYPE: {"schema": _schema_ref(name)}},
    }
    return DocArtifact(
        schema_name=name,
        schema=schema,
        response=response,
        status_index={str(status): response},
        status=status,
        codes=codes,
        parts=parts,
    )


def _error_schema(status: int, code: str, hint: str | None = None, with_content: bool = False) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "status": _enum_property("integer", status),
        "code": _enum_property("string", code),
    }
    required = ["status", "code"]
    if hint is not None:
        properties["hint"] = _enum_property("string", hint)
        required.append("hint")
    if with_content:
        properties["content"] = {"type": "object"}
        required.append("content")
    return {"type": "object", "properties": properties, "required": required}


def document_case(case: Case) -> DocArtifact | None:
    """Artifact for one client-facing case; internal cases are documented collectively."""
    attrs = case.attributes
    if not isinstance(attrs, ClientFacing):
        return None
    status = attrs.status.value
    schema = _error_schema(status, attrs.code, attrs.hint, with_content=not case.naive)
    if attrs.description is not None:
        description = attrs.description
    elif attrs.hint is not None:
        description = attrs.hint
    else:
        description = attrs.code
    return _build_artifact(case.name, status, (attrs.code,), schema, description)


def document_internal_error(internal_error_code: str) -> DocArtifact:
    status = INTERNAL_SERVER_ERROR.value
    schema = _error_schema(status, internal_error_code)
    return _build_artifact(INTERNAL_ERROR_NAME, status, (internal_error_code,), schema, "Internal server error")


def lower_openapi(ir: ErrorTaxonomyIR) -> DocArtifacts:
    artifacts: list[DocArtifact] = []
    has_internal_error = False
    for case in ir.cases:
        artifact = document_case(case)
        if artifact is None:
            has_internal_error = True
        else:
            artifacts.append(artifact)

    if has_internal_error:
        artifacts.append(document_internal_error(ir.config.internal_error_code))
    return DocArtifacts(ir.type_name, artifacts)


def combine_errors(first: DocArtifact, second: DocArtifact) -> DocArtifact:
    """Document two errors sharing one status as a single ``oneOf`` response.

    Raises ``ContractViolation`` if the statuses differ.
    """
    if first.status != second.status:
        raise ContractViolation(
            "combine_errors can only be used for errors with the same status: "
            f"{first.schema_name} is {first.status}, {second.schema_name} is {second.status}"
        )

    leaves = first.leaves + second.leaves
    name = "Or".join(leaf.schema_name for leaf in leaves)
    schema: dict[str, Any] = {"oneOf": [_schema_ref(leaf.schema_name) for leaf in leaves]}

    codes = tuple(code for leaf in leaves for code in leaf.codes)
    if len(set(codes)) == len(codes) == len(leaves):
        schema["discriminator"] = {
            "propertyName": "code",
            "mapping": {leaf.codes[0]: _schema_ref(leaf.schema_name)["$ref"] for leaf in leaves},
        }

    description = " | ".join(leaf.description for leaf in leaves)
    return _build_artifact(name, first.status, codes, schema, description, parts=leaves)


def merge_responses(*artifacts: DocArtifact) -> dict[int | str, dict[str, Any]]:
    """Merge several artifacts into one ``responses=`` dict.

    Two artifacts documenting the same status must be combined first.
    """
    merged: dict[int | str, dict[str, Any]] = {}
    owners: dict[int | str, str] = {}
    for artifact in artifacts:
        for status, response in artifact.responses().items():
            if status in merged:
                raise ContractViolation(
                    f"{owners[status]} and {artifact.schema_name} both document status {status}; "
                    "use combine_errors to merge them"
                )
            merged[status] = response
            owners[status] = artifact.schema_name
    return merged
