"""
Tests for scoped launcher artifacts.

The launcher file must be gone once the scope exits, whether the body
finished, raised, or the toolchain failed to populate the file.
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import FakeToolchain
from runway.core.config.models import JsConfig, NativeConfig
from runway.core.runner.launcher import (
    LAUNCHER_PREFIX,
    linked_script,
    native_launcher,
    scoped_launcher,
)
from runway.core.runner.models import TargetKind


class TestLinkedScript:
    def test_yields_populated_script(self, fake_toolchain, sample_build) -> None:
        with linked_script(fake_toolchain, sample_build, "Main", False, JsConfig()) as artifact:
            assert artifact.kind == TargetKind.LINKED_SCRIPT
            assert artifact.path.exists()
            assert artifact.path.name.startswith(LAUNCHER_PREFIX)
            assert artifact.path.suffix == ".js"
            assert "hello" in artifact.path.read_text()

        assert not artifact.path.exists()
        assert fake_toolchain.linked[0]["entry_point"] == "Main"
        assert fake_toolchain.linked[0]["test_mode"] is False

    def test_removed_when_body_raises(self, fake_toolchain, sample_build) -> None:
        with pytest.raises(RuntimeError, match="boom"):
            with linked_script(fake_toolchain, sample_build, "Main", False, JsConfig()) as artifact:
                raise RuntimeError("boom")

        assert not artifact.path.exists()

    def test_removed_when_linking_fails(self, sample_build) -> None:
        toolchain = FakeToolchain(link_error=ValueError("link failed"))
        created: list[Path] = []
        real_mkstemp = tempfile.mkstemp

        def recording_mkstemp(*args, **kwargs):
            fd, name = real_mkstemp(*args, **kwargs)
            created.append(Path(name))
            return fd, name

        with patch("runway.core.runner.launcher.tempfile.mkstemp", side_effect=recording_mkstemp):
            with pytest.raises(ValueError, match="link failed"):
                with linked_script(toolchain, sample_build, "Main", False, JsConfig()):
                    pytest.fail("body must not run")

        assert len(created) == 1
        assert not created[0].exists()


class TestNativeLauncher:
    def test_yields_compiled_binary(self, fake_toolchain, sample_build, tmp_path) -> None:
        work_dir = tmp_path / "native"
        with native_launcher(
            fake_toolchain, sample_build, "Main", NativeConfig(), work_dir
        ) as artifact:
            assert artifact.kind == TargetKind.NATIVE_BINARY
            assert artifact.path.read_bytes() == b"\x7fELF"

        assert not artifact.path.exists()
        assert work_dir.is_dir()
        compiled = fake_toolchain.compiled[0]
        assert compiled["entry_point"] == "Main"
        assert compiled["work_dir"] == work_dir

    def test_removed_when_body_raises(self, fake_toolchain, sample_build, tmp_path) -> None:
        with pytest.raises(KeyboardInterrupt):
            with native_launcher(
                fake_toolchain, sample_build, "Main", NativeConfig(), tmp_path / "native"
            ) as artifact:
                raise KeyboardInterrupt

        assert not artifact.path.exists()


class TestScopedLauncher:
    def test_body_may_remove_file_itself(self) -> None:
        with scoped_launcher(lambda dest: None, TargetKind.LINKED_SCRIPT) as artifact:
            artifact.path.unlink()

        assert not artifact.path.exists()

    def test_cleanup_failure_is_not_raised(self) -> None:
        with patch.object(Path, "unlink", side_effect=PermissionError("denied")):
            with scoped_launcher(lambda dest: None, TargetKind.NATIVE_BINARY) as artifact:
                result = "body result"

        assert result == "body result"
        artifact.path.unlink()

    def test_names_are_unique(self) -> None:
        with scoped_launcher(lambda dest: None, TargetKind.LINKED_SCRIPT) as first:
            with scoped_launcher(lambda dest: None, TargetKind.LINKED_SCRIPT) as second:
                assert first.path != second.path
