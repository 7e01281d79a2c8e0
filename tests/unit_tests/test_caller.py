"""
Caller-name inference unit tests.

Covers the default logger name derived from the calling function.
"""

from __future__ import annotations

import pytest

from daylog import caller
from daylog.caller import UNKNOWN, caller_name

MODULE = __name__.rsplit(".", 1)[-1]


def module_level_helper() -> str:
    return caller_name()


class TestCallerName:
    """Default name from the call stack"""

    def test_method_name_is_module_class_function(self) -> None:
        """Methods are named module.Class.method"""
        assert caller_name() == f"{MODULE}.TestCallerName.test_method_name_is_module_class_function"

    def test_plain_function(self) -> None:
        """Module-level functions are named module.function"""
        assert module_level_helper() == f"{MODULE}.module_level_helper"

    def test_nested_function_drops_locals_marker(self) -> None:
        """The <locals> marker of nested functions is removed"""
        def inner() -> str:
            return caller_name()

        name = inner()
        assert "<locals>" not in name
        assert name.endswith("test_nested_function_drops_locals_marker.inner")

    def test_frames_of_skipped_modules_are_passed_over(self) -> None:
        """Frames from skipped module prefixes are not used"""
        assert not caller_name(skip_prefixes=(__name__,)).startswith(MODULE + ".")

    def test_no_frame_support_falls_back_to_unknown(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Interpreters without frame introspection yield the fallback name"""
        monkeypatch.setattr(caller.inspect, "currentframe", lambda: None)
        assert caller_name() == UNKNOWN

    def test_main_module_is_named_main(self) -> None:
        """Code run as a script is named main"""
        code = compile("def run():\n    pass\n", "<script>", "exec")
        namespace: dict = {"__name__": "__main__"}
        exec(code, namespace)
        run_code = namespace["run"].__code__
        assert caller._qualified_name("__main__", run_code) == "main.run"

    def test_module_level_code_uses_module_name(self) -> None:
        module_code = compile("x = 1\n", "<script>", "exec")
        assert caller._qualified_name("pkg.jobs.nightly", module_code) == "nightly"
