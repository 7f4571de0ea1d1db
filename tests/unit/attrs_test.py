"""Unit tests for parsing json_error annotations."""

from http import HTTPStatus

import pytest

from json_resp.attrs import (
    MSG_BAD_CODE,
    MSG_BAD_DISPOSITION,
    MSG_BAD_STATUS,
    MSG_BOTH_REQUIRED,
    MSG_ONLY_ASSIGNMENTS,
    MSG_UNKNOWN_ATTRIBUTE,
    ClientFacing,
    Disposition,
    Internal,
    Status,
    extract_status,
    internal,
    json_error,
    parse_attributes,
    request,
)
from json_resp.diagnostics import Context


def _messages(ctxt: Context) -> list[str]:
    return [d.message for d in ctxt.diagnostics]


class TestDisposition:
    def test_internal_short_circuits(self, ctxt: Context) -> None:
        attrs = parse_attributes(json_error(internal, status="ignored", bogus=1), "E.Boom", ctxt)
        assert attrs == Internal()
        assert not ctxt.has_errors()

    def test_string_disposition_is_accepted(self, ctxt: Context) -> None:
        attrs = parse_attributes(json_error("request", status=404, code="nf"), "E.NotFound", ctxt)
        assert isinstance(attrs, ClientFacing)
        assert Disposition("internal") is internal

    @pytest.mark.parametrize(
        "args",
        [(), ("oops",), (42,), (None,)],
        ids=["missing", "unknown-word", "number", "none"],
    )
    def test_bad_first_token_is_reported(self, ctxt: Context, args: tuple[object, ...]) -> None:
        assert parse_attributes(json_error(*args, status=404, code="nf"), "E.NotFound", ctxt) is None
        assert _messages(ctxt) == [MSG_BAD_DISPOSITION]
        assert ctxt.diagnostics[0].span == "E.NotFound"


class TestRequestAttributes:
    def test_full_request_case(self, ctxt: Context) -> None:
        attrs = parse_attributes(
            json_error(request, status=HTTPStatus.CONFLICT, code="odd", hint="Try even", description="Odd numbers"),
            "E.Odd",
            ctxt,
        )
        assert attrs == ClientFacing(
            status=Status(409, "CONFLICT"),
            code="odd",
            hint="Try even",
            description="Odd numbers",
        )
        assert not ctxt.has_errors()

    def test_literal_status(self, ctxt: Context) -> None:
        attrs = parse_attributes(json_error(request, status=418, code="teapot"), "E.Teapot", ctxt)
        assert isinstance(attrs, ClientFacing)
        assert attrs.status == Status(418)
        assert attrs.hint is None
        assert attrs.description is None

    def test_missing_code_reports_both_required_once(self, ctxt: Context) -> None:
        assert parse_attributes(json_error(request, status=404), "E.NotFound", ctxt) is None
        assert _messages(ctxt) == [MSG_BOTH_REQUIRED]

    def test_missing_status_reports_both_required(self, ctxt: Context) -> None:
        assert parse_attributes(json_error(request, code="nf"), "E.NotFound", ctxt) is None
        assert _messages(ctxt) == [MSG_BOTH_REQUIRED]

    def test_wrong_status_kind_suppresses_generic_message(self, ctxt: Context) -> None:
        assert parse_attributes(json_error(request, status="not-a-number", code="nf"), "E.NotFound", ctxt) is None
        assert _messages(ctxt) == [MSG_BAD_STATUS]
        assert ctxt.diagnostics[0].span == "E.NotFound.status"

    def test_wrong_code_kind_suppresses_generic_message(self, ctxt: Context) -> None:
        assert parse_attributes(json_error(request, status=404, code=404), "E.NotFound", ctxt) is None
        assert _messages(ctxt) == [MSG_BAD_CODE]

    def test_suppression_can_be_turned_off(self, ctxt: Context) -> None:
        parse_attributes(json_error(request, status="404"), "E.NotFound", ctxt, suppress_redundant=False)
        assert _messages(ctxt) == [MSG_BAD_STATUS, MSG_BOTH_REQUIRED]

    def test_every_bad_key_is_reported(self, ctxt: Context) -> None:
        parse_attributes(
            json_error(request, status=404, code="nf", hint=1, description=[], colour="red"),
            "E.NotFound",
            ctxt,
        )
        assert _messages(ctxt) == ["hint should be a str", "description should be a str", MSG_UNKNOWN_ATTRIBUTE]
        assert [d.span for d in ctxt.diagnostics] == ["E.NotFound.hint", "E.NotFound.description", "E.NotFound.colour"]

    def test_unknown_key_still_yields_case(self, ctxt: Context) -> None:
        attrs = parse_attributes(json_error(request, status=404, code="nf", colour="red"), "E.NotFound", ctxt)
        assert isinstance(attrs, ClientFacing)
        assert _messages(ctxt) == [MSG_UNKNOWN_ATTRIBUTE]

    def test_extra_positional_tokens_are_rejected(self, ctxt: Context) -> None:
        parse_attributes(json_error(request, "stray", status=404, code="nf"), "E.NotFound", ctxt)
        assert _messages(ctxt) == [MSG_ONLY_ASSIGNMENTS]

    def test_empty_code_is_a_type_error(self, ctxt: Context) -> None:
        assert parse_attributes(json_error(request, status=404, code=""), "E.NotFound", ctxt) is None
        assert _messages(ctxt) == [MSG_BAD_CODE]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (404, Status(404)),
        (HTTPStatus.NOT_FOUND, Status(404, "NOT_FOUND")),
        (True, None),
        (99, None),
        (1000, None),
        ("404", None),
        (404.0, None),
    ],
)
def test_extract_status(value: object, expected: Status | None) -> None:
    assert extract_status(value) == expected


def test_status_conversions() -> None:
    assert int(Status(499)) == 499
    assert str(Status(499)) == "499"


def test_annotation_repr() -> None:
    assert repr(json_error("request", status=404)) == "json_error('request', status=404)"
