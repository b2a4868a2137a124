"""
Locate a work unit from a ``module[:attr]`` or ``path.py[:attr]`` target.
"""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from workscript.core.errors import DefinitionError
from workscript.framework.logging import get_logger

log = get_logger(__name__)

# Attribute names tried, in order, when the target doesn't name one
DEFAULT_ATTRS = ("unit", "machine", "definition", "invocation")


def split_target(target: str) -> tuple[str, str | None]:
    """Split ``"pkg.mod:attr"`` into ``("pkg.mod", "attr")``."""
    module_part, sep, attr = target.rpartition(":")
    if sep and attr.isidentifier() and module_part:
        return module_part, attr
    return target, None


def import_target_module(module_ref: str) -> ModuleType:
    """Import a dotted module name or a ``.py`` file path."""
    path = Path(module_ref)
    if path.suffix == ".py" or path.is_file():
        if not path.is_file():
            raise DefinitionError(f"No such file: {module_ref}")
        module_name = f"_workscript_target_{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise DefinitionError(f"Cannot import {module_ref}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
        return module

    try:
        return importlib.import_module(module_ref)
    except ImportError as e:
        raise DefinitionError(f"Cannot import module {module_ref!r}", cause=e) from e


def load_target(target: str) -> Any:
    """Return the work unit (or already-wrapped invocation) named by ``target``."""
    module_ref, attr = split_target(target)
    module = import_target_module(module_ref)

    candidates = (attr,) if attr else DEFAULT_ATTRS
    for name in candidates:
        if hasattr(module, name):
            log.debug("loader.found", target=target, attr=name)
            return getattr(module, name)

    tried = ", ".join(candidates)
    raise DefinitionError(f"{module_ref} has no work unit attribute (tried: {tried})")


__all__ = ["DEFAULT_ATTRS", "split_target", "import_target_module", "load_target"]
