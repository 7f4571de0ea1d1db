"""Resolving ``module:Class`` targets to compiled taxonomies."""

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from json_resp.errors import TargetError
from json_resp.taxonomy import JsonErrorEnum


def _is_target_missing(exc: ModuleNotFoundError, module_ref: str) -> bool:
    return exc.name is not None and (module_ref == exc.name or module_ref.startswith(f"{exc.name}."))


def _load_module(module_ref: str) -> ModuleType:
    if module_ref.endswith(".py"):
        path = Path(module_ref)
        if not path.is_file():
            raise TargetError(f"File not found: {module_ref}")
        module_name = f"_json_resp_target_{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise TargetError(f"Cannot import {module_ref}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except (ImportError, SyntaxError) as exc:
            sys.modules.pop(module_name, None)
            raise TargetError(f"Cannot import {module_ref}: {exc}") from exc
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module

    try:
        return importlib.import_module(module_ref)
    except (ImportError, SyntaxError) as exc:
        if isinstance(exc, ModuleNotFoundError) and _is_target_missing(exc, module_ref):
            raise TargetError(f"Module not found: {module_ref}") from exc
        raise TargetError(f"Cannot import {module_ref}: {exc}") from exc


def load_taxonomy(target: str) -> type[JsonErrorEnum]:
    """Import ``pkg.module:Class`` or ``path/to/file.py:Class``.

    Importing compiles the taxonomy, so a malformed one raises ``CompileError`` here.
    """
    module_ref, sep, class_name = target.rpartition(":")
    if not sep or not module_ref or not class_name:
        raise TargetError(f"Expected `module:Class` or `file.py:Class`, got {target!r}")

    module = _load_module(module_ref)
    taxonomy = getattr(module, class_name, None)
    if taxonomy is None:
        raise TargetError(f"{module_ref} has no attribute {class_name!r}")
    if not (isinstance(taxonomy, type) and issubclass(taxonomy, JsonErrorEnum)) or taxonomy is JsonErrorEnum:
        raise TargetError(f"{target} is not a JsonErrorEnum subclass")
    return taxonomy
