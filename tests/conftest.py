"""
Pytest configuration and shared fixtures.

Provides an in-memory toolchain and process runner that record what the
runner asked of them, sample builds, and isolation of configuration from the
developer's own environment.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from runway.core.build.models import (
    BuildOptions,
    BuildOutcome,
    Failed,
    Inputs,
    Successful,
)
from runway.core.config import clear_cache
from runway.core.errors import InputResolutionError

# ==============================================================================
# Fakes
# ==============================================================================


class FakeWatchSession:
    """Watch session that counts disposals."""

    def __init__(self) -> None:
        self.dispose_count = 0

    def dispose(self) -> None:
        self.dispose_count += 1


class FakeToolchain:
    """
    Toolchain that builds nothing.

    resolve_inputs() uses the working directory as the workspace. build()
    pops from `outcomes`; watch() delivers every entry of
    `watch_outcomes` synchronously, calling post_action after each one.
    """

    def __init__(
        self,
        outcomes: list[BuildOutcome] | None = None,
        watch_outcomes: list[BuildOutcome] | None = None,
        input_error: str | None = None,
        link_error: Exception | None = None,
    ) -> None:
        self.outcomes = list(outcomes or [])
        self.watch_outcomes = list(watch_outcomes or [])
        self.input_error = input_error
        self.link_error = link_error
        self.resolved: list[tuple[list[str], bytes | None]] = []
        self.build_options: list[BuildOptions] = []
        self.linked: list[dict] = []
        self.compiled: list[dict] = []
        self.sessions: list[FakeWatchSession] = []
        self.post_actions = 0

    @property
    def name(self) -> str:
        return "fake"

    def resolve_inputs(
        self, args: list[str], cwd: Path, directories: list[str], stdin: bytes | None
    ) -> Inputs:
        if self.input_error:
            raise InputResolutionError(self.input_error)
        self.resolved.append((args, stdin))
        return Inputs(workspace=cwd, project_name="demo", stdin=stdin)

    def build(self, inputs: Inputs, options: BuildOptions) -> BuildOutcome:
        self.build_options.append(options)
        return self.outcomes.pop(0)

    def watch(
        self,
        inputs: Inputs,
        options: BuildOptions,
        on_outcome: Callable[[BuildOutcome], None],
        post_action: Callable[[], None],
    ) -> FakeWatchSession:
        self.build_options.append(options)
        for outcome in self.watch_outcomes:
            on_outcome(outcome)
            post_action()
            self.post_actions += 1
        session = FakeWatchSession()
        self.sessions.append(session)
        return session

    def link_script(self, build, dest, entry_point, test_mode, config) -> None:
        if self.link_error:
            raise self.link_error
        dest.write_text("console.log('hello')\n")
        self.linked.append(
            {"dest": dest, "entry_point": entry_point, "test_mode": test_mode, "config": config}
        )

    def compile_native(self, build, entry_point, dest, config, work_dir, logger) -> None:
        if self.link_error:
            raise self.link_error
        dest.write_bytes(b"\x7fELF")
        self.compiled.append(
            {"dest": dest, "entry_point": entry_point, "work_dir": work_dir, "logger": logger}
        )


class FakeProcessRunner:
    """Process runner that records launches and returns canned exit codes."""

    def __init__(self, codes: list[int] | None = None) -> None:
        self.codes = list(codes or [])
        self.calls: list[dict] = []

    def _next_code(self) -> int:
        return self.codes.pop(0) if self.codes else 0

    def run_managed(self, java_command, java_options, class_path, entry_point, args, allow_replace):
        self.calls.append(
            {
                "strategy": "managed",
                "java_command": java_command,
                "java_options": tuple(java_options),
                "class_path": tuple(class_path),
                "entry_point": entry_point,
                "args": list(args),
                "allow_replace": allow_replace,
            }
        )
        return self._next_code()

    def run_script(self, path, args, allow_replace):
        self.calls.append(
            {
                "strategy": "script",
                "path": path,
                "existed": path.exists(),
                "args": list(args),
                "allow_replace": allow_replace,
            }
        )
        return self._next_code()

    def run_binary(self, path, args, allow_replace):
        self.calls.append(
            {
                "strategy": "binary",
                "path": path,
                "existed": path.exists(),
                "args": list(args),
                "allow_replace": allow_replace,
            }
        )
        return self._next_code()


# ==============================================================================
# Environment isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config, RUNWAY_* variables and the config cache out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in (
        "RUNWAY_TOOLCHAIN",
        "RUNWAY_JAVA_COMMAND",
        "RUNWAY_JAVA_OPTS",
        "RUNWAY_JS",
        "RUNWAY_NATIVE",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Provide an empty project directory and chdir into it."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


# ==============================================================================
# Sample Data Fixtures
# ==============================================================================


@pytest.fixture
def sample_build() -> Successful:
    """A successful build with a single main class."""
    return Successful(
        class_path=(Path("/workspace/out"), Path("/deps/lib.jar")),
        options=BuildOptions(),
        retained_main_classes=("Main",),
        project_name="demo",
    )


@pytest.fixture
def failed_build() -> Failed:
    return Failed(message="1 error found")


@pytest.fixture
def fake_toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def fake_runner() -> FakeProcessRunner:
    return FakeProcessRunner()

