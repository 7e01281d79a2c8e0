"""
Default logger names from the call stack.
"""

from __future__ import annotations

import inspect
from types import CodeType

UNKNOWN = "unknown"


def _is_internal(module: str, skip_prefixes: tuple[str, ...]) -> bool:
    return any(module == prefix or module.startswith(prefix + ".") for prefix in skip_prefixes)


def _simplify_module_name(name: str) -> str:
    if name == "__main__":
        return "main"
    return name.rsplit(".", 1)[-1]


def _qualified_name(module: str, code: CodeType) -> str:
    short_module = _simplify_module_name(module) if module else ""
    if code.co_name == "<module>":
        return short_module or UNKNOWN
    qualname = getattr(code, "co_qualname", code.co_name)
    parts = [part for part in qualname.split(".") if part != "<locals>"]
    return ".".join([short_module, *parts]) if short_module else ".".join(parts)


def caller_name(skip_prefixes: tuple[str, ...] = ("daylog",)) -> str:
    """Name of the first caller outside ``skip_prefixes``.

    A test method ``TestApi.test_boot`` in ``tests/test_api.py`` yields
    ``"test_api.TestApi.test_boot"``. Returns ``"unknown"`` when the
    interpreter does not expose frames.
    """
    frame = inspect.currentframe()
    if frame is None:
        return UNKNOWN

    try:
        frame = frame.f_back
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            if not _is_internal(module, skip_prefixes):
                return _qualified_name(module, frame.f_code)
            frame = frame.f_back
    finally:
        del frame

    return UNKNOWN
