"""Engine resolution from ``module:attribute`` import paths."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from brili.errors import EngineLoadError
from brili.types import Engine

logger = logging.getLogger(__name__)


def load_engine(path: str) -> Engine:
    """Import and return the engine named by `path`.

    A class is instantiated with no arguments; any other object is used as-is.

    :param str path: Import path like ``"my_interp.engine:Interpreter"``.
    :raises EngineLoadError: If the path is malformed, the import fails, or the
        object lacks callable ``check``/``execute`` methods.
    :return Engine: Ready-to-use engine.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise EngineLoadError(f"engine must look like 'module:attribute', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise EngineLoadError(f"cannot import engine module {module_name!r}: {e}") from e

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise EngineLoadError(f"engine {path!r} not found: no attribute {part!r}") from e

    if isinstance(obj, type):
        obj = obj()

    if not all(callable(getattr(obj, name, None)) for name in ("check", "execute")):
        raise EngineLoadError(
            f"engine {path!r} must provide callable check() and execute() methods"
        )
    logger.debug("Loaded engine %s (%s)", path, type(obj).__name__)
    return obj
