"""Tests for domain models (core/models.py).

The option and record models are frozen dataclasses; these tests verify
immutability, defaults, and derived properties.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from pubctl.core.models import CommandSpecOptions, HookModuleRecord, LifecycleStep


# ---------------------------------------------------------------------------
# LifecycleStep
# ---------------------------------------------------------------------------

class TestLifecycleStep:
    def test_values(self) -> None:
        assert LifecycleStep.PREPARE.value == "prepare"
        assert LifecycleStep.FINALIZE.value == "finalize"

    def test_only_two_steps(self) -> None:
        assert len(LifecycleStep) == 2

    def test_renders_as_value(self) -> None:
        assert str(LifecycleStep.PREPARE) == "prepare"
        assert f"{LifecycleStep.FINALIZE}" == "finalize"

    def test_compares_equal_to_string(self) -> None:
        assert LifecycleStep.PREPARE == "prepare"


# ---------------------------------------------------------------------------
# CommandSpecOptions
# ---------------------------------------------------------------------------

class TestCommandSpecOptions:
    def test_defaults(self) -> None:
        opts = CommandSpecOptions(version="v0.1.0")
        assert opts.custom_handlers == ()
        assert opts.usage is None
        assert opts.prepare_context is None
        assert opts.project_home is None
        assert opts.called_from_main is False

    def test_frozen(self) -> None:
        opts = CommandSpecOptions(version="v0.1.0")
        with pytest.raises(dataclasses.FrozenInstanceError):
            opts.version = "v9.9.9"  # type: ignore[misc]

    def test_entry_script_from_path(self) -> None:
        opts = CommandSpecOptions(version="v0.1.0", called_from="/site/tools/pubctl.py")
        assert opts.entry_script == "pubctl.py"

    def test_entry_script_from_file_url(self) -> None:
        opts = CommandSpecOptions(
            version="v0.1.0", called_from="file:///site/tools/pubctl.py",
        )
        assert opts.entry_script == "pubctl.py"


# ---------------------------------------------------------------------------
# HookModuleRecord
# ---------------------------------------------------------------------------

class TestHookModuleRecord:
    def test_defaults_are_not_imported_not_executed(self) -> None:
        record = HookModuleRecord(name="a/hook.py", path=Path("/p/a/hook.py"))
        assert record.imported is False
        assert record.executed is False
        assert record.failed is False

    def test_failed_when_error_present(self) -> None:
        record = HookModuleRecord(
            name="a/hook.py", path=Path("/p/a/hook.py"), error="boom",
        )
        assert record.failed is True

    def test_frozen(self) -> None:
        record = HookModuleRecord(name="a/hook.py", path=Path("/p/a/hook.py"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.executed = True  # type: ignore[misc]
