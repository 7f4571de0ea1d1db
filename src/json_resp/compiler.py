import logging
from dataclasses import dataclass

from json_resp.config import Settings, parse_unit_config
from json_resp.diagnostics import Context
from json_resp.ir import Case, ErrorTaxonomyIR, RawUnit, build_ir, classify_case
from json_resp.openapi import DocArtifacts, lower_openapi
from json_resp.response import ResponseTable, lower_responses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledUnit:
    ir: ErrorTaxonomyIR
    responses: ResponseTable
    openapi: DocArtifacts


def compile_unit(raw: RawUnit, settings: Settings | None = None) -> CompiledUnit:
    """Validate a unit and lower it into a response table and documentation.

    Raises ``CompileError`` with every diagnostic if any declaration is malformed;
    nothing is lowered in that case.
    """
    settings = settings or Settings()
    ctxt = Context()

    config = parse_unit_config(raw.annotation, raw.name)

    cases: list[Case] = []
    for raw_case in raw.cases:
        case = classify_case(
            raw_case,
            raw.name,
            ctxt,
            suppress_redundant=settings.suppress_redundant_diagnostics,
        )
        if case is not None:
            cases.append(case)

    ir = build_ir(raw.name, config, cases, ctxt, reserved_names=raw.reserved_names)
    ctxt.check()

    compiled = CompiledUnit(ir=ir, responses=lower_responses(ir, settings), openapi=lower_openapi(ir))
    logger.debug(
        "Compiled %s: %d case(s), %d documentation artifact(s)",
        raw.name,
        len(ir.cases),
        len(compiled.openapi),
    )
    return compiled
