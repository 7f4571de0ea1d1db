from json_resp.attrs import Annotation, Disposition, Status, internal, json_error, request
from json_resp.compiler import CompiledUnit, compile_unit
from json_resp.diagnostics import Context, Diagnostic
from json_resp.errors import CompileError, ContractViolation, JsonRespError
from json_resp.ir import Case, ErrorTaxonomyIR, RawCase, RawUnit
from json_resp.openapi import DocArtifact, DocArtifacts, combine_errors, merge_responses
from json_resp.response import JsonError, JsonResponse, ResponseTable
from json_resp.taxonomy import JsonErrorEnum

__all__ = [
    "Annotation",
    "Case",
    "CompileError",
    "CompiledUnit",
    "Context",
    "ContractViolation",
    "Diagnostic",
    "Disposition",
    "DocArtifact",
    "DocArtifacts",
    "ErrorTaxonomyIR",
    "JsonError",
    "JsonErrorEnum",
    "JsonRespError",
    "JsonResponse",
    "RawCase",
    "RawUnit",
    "ResponseTable",
    "Status",
    "combine_errors",
    "compile_unit",
    "internal",
    "json_error",
    "merge_responses",
    "request",
]
