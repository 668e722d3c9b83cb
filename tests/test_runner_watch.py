"""
Tests for the watch loop.

FakeToolchain.watch() delivers its outcomes synchronously before returning
the session, so a whole watch cycle runs inside run_watch().
"""

import threading
from pathlib import Path

import pytest

from conftest import FakeProcessRunner, FakeToolchain, FakeWatchSession
from runway.core.build.models import BuildOptions, Failed, Inputs, Successful
from runway.core.config.models import RunwayConfig
from runway.core.runner.dispatcher import Dispatcher
from runway.core.runner.orchestrator import RunOrchestrator
from runway.core.runner.watch import (
    COMPILATION_FAILED,
    ScopedWatchSession,
    outcome_handler,
    run_watch,
    watch,
)

INPUTS = Inputs(workspace=Path("/workspace"), project_name="demo")


def successful() -> Successful:
    return Successful(
        class_path=(Path("/workspace/out"),),
        options=BuildOptions(),
        retained_main_classes=("Main",),
    )


class TestScopedWatchSession:
    def test_dispose_is_idempotent(self) -> None:
        inner = FakeWatchSession()
        session = ScopedWatchSession(inner)

        session.dispose()
        session.dispose()

        assert inner.dispose_count == 1
        assert session.disposed

    def test_context_manager_disposes(self) -> None:
        inner = FakeWatchSession()

        with ScopedWatchSession(inner) as session:
            assert not session.disposed

        assert inner.dispose_count == 1

    def test_concurrent_dispose(self) -> None:
        inner = FakeWatchSession()
        session = ScopedWatchSession(inner)
        threads = [threading.Thread(target=session.dispose) for _ in range(8)]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert inner.dispose_count == 1


class TestOutcomeHandler:
    def test_runs_successful_builds(self) -> None:
        ran: list[Successful] = []
        reports: list[str] = []
        build = successful()

        outcome_handler(ran.append, sink=reports.append)(build)

        assert ran == [build]
        assert reports == []

    def test_reports_failed_builds(self) -> None:
        ran: list[Successful] = []
        reports: list[str] = []

        outcome_handler(ran.append, sink=reports.append)(Failed("error"))

        assert ran == []
        assert reports == [COMPILATION_FAILED]


class TestWatch:
    def test_returns_scoped_session(self) -> None:
        toolchain = FakeToolchain()

        session = watch(toolchain, INPUTS, BuildOptions(), lambda outcome: None, lambda: None)

        assert isinstance(session, ScopedWatchSession)
        assert not session.disposed

    def test_post_action_after_every_outcome(self) -> None:
        toolchain = FakeToolchain(watch_outcomes=[Failed(), successful()])
        actions: list[str] = []

        watch(toolchain, INPUTS, BuildOptions(), lambda outcome: None,
              lambda: actions.append("msg"))

        assert actions == ["msg", "msg"]


class TestRunWatch:
    def test_disposes_after_wait(self) -> None:
        toolchain = FakeToolchain()

        run_watch(toolchain, INPUTS, BuildOptions(), lambda outcome: None, lambda: None,
                  wait=lambda: None)

        assert toolchain.sessions[0].dispose_count == 1

    def test_disposes_when_interrupted(self) -> None:
        toolchain = FakeToolchain()

        def interrupted() -> None:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            run_watch(toolchain, INPUTS, BuildOptions(), lambda outcome: None, lambda: None,
                      wait=interrupted)

        assert toolchain.sessions[0].dispose_count == 1

    def test_failures_never_stop_the_loop(self) -> None:
        toolchain = FakeToolchain(watch_outcomes=[Failed(), successful(), successful()])
        runner = FakeProcessRunner(codes=[0, 2])
        diagnostics: list[str] = []
        reports: list[str] = []
        orchestrator = RunOrchestrator(
            Dispatcher(toolchain, runner),
            RunwayConfig(),
            Path("/workspace"),
            sink=diagnostics.append,
        )
        results: list[bool | None] = []

        def run_build(build: Successful) -> None:
            results.append(
                orchestrator.maybe_run(
                    build, None, [], allow_process_replace=False, exit_on_error=False
                )
            )

        run_watch(
            toolchain,
            INPUTS,
            BuildOptions(),
            outcome_handler(run_build, sink=reports.append),
            post_action=lambda: None,
            wait=lambda: None,
        )

        assert reports == [COMPILATION_FAILED]
        assert results == [True, False]
        assert len(diagnostics) == 1
        assert "2" in diagnostics[0]
        assert all(call["allow_replace"] is False for call in runner.calls)
        assert toolchain.post_actions == 3
        assert toolchain.sessions[0].dispose_count == 1
