"""Shared fixtures and helpers for tests."""

from pathlib import Path
from typing import Any

import pytest

from json_resp.attrs import Annotation, json_error
from json_resp.config import Settings
from json_resp.diagnostics import Context
from json_resp.ir import RawCase, RawUnit

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Helpers for building raw declarations by hand
# ---------------------------------------------------------------------------


def raw_case(name: str, *args: Any, naive: bool = True, **kwargs: Any) -> RawCase:
    """A case annotated with ``json_error(*args, **kwargs)``."""
    return RawCase(name=name, naive=naive, annotation=json_error(*args, **kwargs))


def raw_unit(name: str, *cases: RawCase, **config: Any) -> RawUnit:
    return RawUnit(name=name, annotation=Annotation(kwargs=config) if config else None, cases=cases)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def ctxt() -> Context:
    return Context()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the taxonomy fixture modules."""
    return Path(__file__).parent / "fixtures"
