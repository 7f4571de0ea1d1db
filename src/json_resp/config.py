import logging
import os
from dataclasses import dataclass

from json_resp.attrs import Annotation

logger = logging.getLogger(__name__)

DEFAULT_INTERNAL_CODE = "internal-error"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logger.warning("Ignoring %s=%r: expected one of 1/0, true/false, yes/no, on/off", name, raw)
    return default


@dataclass(frozen=True)
class Settings:
    log_internal_errors: bool = True
    suppress_redundant_diagnostics: bool = True
    log_level: str = "WARNING"


def get_settings() -> Settings:
    """Read settings from ``JSON_RESP_*`` environment variables."""
    return Settings(
        log_internal_errors=_env_flag("JSON_RESP_LOG_INTERNAL_ERRORS", True),
        suppress_redundant_diagnostics=_env_flag("JSON_RESP_SUPPRESS_REDUNDANT_DIAGNOSTICS", True),
        log_level=os.getenv("JSON_RESP_LOG_LEVEL", "WARNING").upper(),
    )


@dataclass(frozen=True)
class UnitConfig:
    internal_error_code: str = DEFAULT_INTERNAL_CODE


def parse_unit_config(annotation: Annotation | None, unit_name: str = "") -> UnitConfig:
    """Read ``internal_code`` from a unit annotation.

    Anything malformed falls back to the default code; the unit never fails here.
    """
    if annotation is None or (not annotation.kwargs and not annotation.args):
        return UnitConfig()

    if annotation.args or set(annotation.kwargs) != {"internal_code"}:
        logger.warning(
            "%s: unit configuration should be exactly `internal_code=\"...\"`, got %r; using %r",
            unit_name,
            annotation,
            DEFAULT_INTERNAL_CODE,
        )
        return UnitConfig()

    code = annotation.kwargs["internal_code"]
    if not isinstance(code, str) or not code:
        logger.warning("%s: internal_code should be a non-empty str, got %r; using %r", unit_name, code, DEFAULT_INTERNAL_CODE)
        return UnitConfig()
    return UnitConfig(internal_error_code=code)
