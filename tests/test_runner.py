"""Tests for the action runner: single-flight, cancellation and error capture."""

import asyncio

from academy.log_stream import LogStream
from academy.models import LogKind, RunStatus, SessionConfig
from academy.runner import ActionRunner

from conftest import FailingAction, FakeBackend, GatedAction, make_module


def _messages(stream: LogStream):
    return [e.message for e in stream.entries()]


class TestRunnerHappyPath:
    def test_balance_run_completes(self, registry):
        stream = LogStream()
        runner = ActionRunner(stream)
        backend = FakeBackend(balance=123)
        config = SessionConfig(focus_address="0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045")

        outcome = asyncio.run(runner.run(registry.find_by_id("balance"), backend, config))

        assert outcome.status == RunStatus.COMPLETED
        assert outcome.result == 123
        assert outcome.generation == 1
        assert outcome.finished_at
        assert not runner.busy
        entries = stream.entries()
        assert entries[0].message == "Using Fake Backend..."
        assert entries[0].kind == LogKind.INFO
        assert entries[-1].message == "Raw Balance (Wei): 123"
        assert entries[-1].kind == LogKind.OUTPUT

    def test_run_clears_previous_output(self, registry):
        stream = LogStream()
        stream.append("left over from an earlier run")
        runner = ActionRunner(stream)

        asyncio.run(runner.run(registry.find_by_id("utils"), FakeBackend(), SessionConfig()))

        assert "left over from an earlier run" not in _messages(stream)

    def test_each_run_gets_a_new_generation(self, registry):
        runner = ActionRunner(LogStream())
        module = registry.find_by_id("utils")

        first = asyncio.run(runner.run(module, FakeBackend(), SessionConfig()))
        second = asyncio.run(runner.run(module, FakeBackend(), SessionConfig()))

        assert second.generation == first.generation + 1


class TestRunnerFailures:
    def test_missing_address_fails_before_network(self, registry):
        stream = LogStream()
        runner = ActionRunner(stream)
        backend = FakeBackend(balance=5)

        outcome = asyncio.run(runner.run(registry.find_by_id("balance"), backend, SessionConfig()))

        assert outcome.status == RunStatus.FAILED
        assert outcome.error == "Please enter a Target Address first."
        assert backend.calls == []
        last = stream.entries()[-1]
        assert last.kind == LogKind.ERROR
        assert last.message == "Execution Error: Please enter a Target Address first."
        assert not runner.busy

    def test_action_exception_is_captured(self):
        stream = LogStream()
        runner = ActionRunner(stream)

        outcome = asyncio.run(runner.run(make_module(FailingAction()), FakeBackend(), SessionConfig()))

        assert outcome.status == RunStatus.FAILED
        assert outcome.error == "Lesson crashed!"
        assert _messages(stream) == [
            "Using Fake Backend...",
            "about to fail",
            "Execution Error: Lesson crashed!",
        ]
        assert not runner.busy

    def test_capability_error_becomes_log_entry(self, registry):
        stream = LogStream()
        runner = ActionRunner(stream)

        outcome = asyncio.run(
            runner.run(registry.find_by_id("wallet-connect"), FakeBackend(), SessionConfig())
        )

        assert outcome.status == RunStatus.FAILED
        assert stream.entries()[-1].message.startswith("Execution Error: No wallet detected.")


class TestSingleFlight:
    def test_second_run_rejected_while_busy(self):
        async def scenario():
            stream = LogStream()
            runner = ActionRunner(stream)
            action = GatedAction()
            module = make_module(action)

            first = asyncio.create_task(runner.run(module, FakeBackend(), SessionConfig()))
            await action.started.wait()
            busy_during_run = runner.busy
            entries_before = len(stream)
            second = await runner.run(module, FakeBackend(), SessionConfig())
            entries_after = len(stream)
            action.release.set()
            return await first, second, busy_during_run, entries_before, entries_after, runner

        first, second, busy, before, after, runner = asyncio.run(scenario())

        assert busy is True
        assert second.status == RunStatus.REJECTED
        assert before == after
        assert first.status == RunStatus.COMPLETED
        assert not runner.busy

    def test_cancelled_run_output_is_discarded(self):
        async def scenario():
            stream = LogStream()
            runner = ActionRunner(stream)
            old_action = GatedAction("old")
            new_action = GatedAction("new")

            old = asyncio.create_task(
                runner.run(make_module(old_action), FakeBackend(), SessionConfig())
            )
            await old_action.started.wait()
            runner.cancel()
            assert not runner.busy

            new = asyncio.create_task(
                runner.run(make_module(new_action), FakeBackend(), SessionConfig())
            )
            await new_action.started.wait()

            old_action.release.set()
            old_outcome = await old
            busy_after_old_finished = runner.busy

            new_action.release.set()
            new_outcome = await new
            return old_outcome, new_outcome, busy_after_old_finished, stream, runner

        old, new, busy_after_old, stream, runner = asyncio.run(scenario())

        assert old.status == RunStatus.SUPERSEDED
        assert new.status == RunStatus.COMPLETED
        # the stale run must not release the newer run's flag
        assert busy_after_old is True
        assert not runner.busy
        messages = _messages(stream)
        assert "old: step 2" not in messages
        assert "old: step 1" not in messages
        assert messages == ["Using Fake Backend...", "new: step 1", "new: step 2"]

    def test_cancel_does_not_touch_log_stream(self):
        stream = LogStream()
        stream.append("keep me")
        runner = ActionRunner(stream)

        runner.cancel()

        assert _messages(stream) == ["keep me"]
        assert runner.generation == 1


class TestBoundLogger:
    def test_bound_logger_writes_while_current(self):
        stream = LogStream()
        runner = ActionRunner(stream)

        log = runner.bind_logger()
        log("hello", LogKind.SUCCESS)

        assert stream.entries()[0].kind == LogKind.SUCCESS

    def test_bound_logger_goes_stale_after_cancel(self):
        stream = LogStream()
        runner = ActionRunner(stream)

        log = runner.bind_logger()
        runner.cancel()
        log("too late")

        assert log.stale
        assert len(stream) == 0
