"""Unit tests for document_store.debounce module."""

import asyncio
import logging

import pytest

from src.document_store.debounce import DebounceState, Debouncer


class TestDebouncerScheduling:
    """Test cases for schedule() and the timer firing."""

    @pytest.mark.asyncio
    async def test_burst_coalesces_to_last_call(self):
        """Three calls within the window fire once with the last arguments."""
        calls = []
        debouncer = Debouncer(lambda *args: calls.append(args), delay_seconds=0.02)

        debouncer.schedule("p1", 1)
        debouncer.schedule("p1", 2)
        debouncer.schedule("p1", 3)
        await asyncio.sleep(0.08)

        assert calls == [("p1", 3)]
        assert debouncer.state is DebounceState.IDLE

    @pytest.mark.asyncio
    async def test_pending_until_fired(self):
        """pending() is True between schedule and fire."""
        debouncer = Debouncer(lambda: None, delay_seconds=0.02)

        assert debouncer.pending() is False
        debouncer.schedule()
        assert debouncer.pending() is True
        assert debouncer.state is DebounceState.PENDING
        await asyncio.sleep(0.08)
        assert debouncer.pending() is False

    def test_schedule_requires_running_loop(self):
        """Scheduling outside an event loop is an error."""
        debouncer = Debouncer(lambda: None, delay_seconds=0.02)

        with pytest.raises(RuntimeError):
            debouncer.schedule()


class TestDebouncerControl:
    """Test cases for flush(), flush_sync() and cancel()."""

    @pytest.mark.asyncio
    async def test_flush_fires_immediately(self):
        """flush() invokes the pending call synchronously."""
        calls = []
        debouncer = Debouncer(calls.append, delay_seconds=10)

        debouncer.schedule("v1")
        debouncer.flush()

        assert calls == ["v1"]
        assert debouncer.pending() is False

    @pytest.mark.asyncio
    async def test_flush_without_pending_is_noop(self):
        """flush() with nothing pending calls nothing."""
        calls = []
        debouncer = Debouncer(calls.append, delay_seconds=10)

        debouncer.flush()

        assert calls == []

    @pytest.mark.asyncio
    async def test_flush_does_not_fire_twice(self):
        """A flushed call does not fire again when the window elapses."""
        calls = []
        debouncer = Debouncer(calls.append, delay_seconds=0.02)

        debouncer.schedule("v1")
        debouncer.flush()
        await asyncio.sleep(0.06)

        assert calls == ["v1"]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_call(self):
        """cancel() discards the pending call without firing it."""
        calls = []
        debouncer = Debouncer(calls.append, delay_seconds=0.02)

        debouncer.schedule("v1")
        debouncer.cancel()
        await asyncio.sleep(0.06)

        assert calls == []
        assert debouncer.pending() is False

    @pytest.mark.asyncio
    async def test_flush_sync_lets_host_work_run(self):
        """Work the callee defers with call_soon has run when flush_sync returns."""
        processed = []

        def notify(value):
            asyncio.get_running_loop().call_soon(processed.append, value)

        debouncer = Debouncer(notify, delay_seconds=10)
        debouncer.schedule("v2")

        await debouncer.flush_sync()

        assert processed == ["v2"]

    @pytest.mark.asyncio
    async def test_flush_sync_runs_async_callee(self):
        """A coroutine callee is scheduled and completes within the turns."""
        processed = []

        async def notify(value):
            processed.append(value)

        debouncer = Debouncer(notify, delay_seconds=10, flush_sync_turns=2)
        debouncer.schedule("v3")

        await debouncer.flush_sync()

        assert processed == ["v3"]


class TestDebouncerErrors:
    """Test cases for failures inside the debounced call."""

    @pytest.mark.asyncio
    async def test_callee_exception_is_logged(self, caplog):
        """An exception from the callee is logged, not raised."""
        def explode():
            raise ValueError("boom")

        debouncer = Debouncer(explode, delay_seconds=10)
        debouncer.schedule()

        with caplog.at_level(logging.ERROR):
            debouncer.flush()

        assert "Debounced call failed" in caplog.text
        assert debouncer.pending() is False

    @pytest.mark.asyncio
    async def test_async_callee_exception_is_logged(self, caplog):
        """A coroutine callee that raises is logged once its task finishes."""
        async def explode():
            raise RuntimeError("host boom")

        debouncer = Debouncer(explode, delay_seconds=10)
        debouncer.schedule()

        with caplog.at_level(logging.ERROR):
            await debouncer.flush_sync()
            await asyncio.sleep(0.01)

        records = [r for r in caplog.records if r.message == "Debounced call failed"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR
        assert "host boom" in caplog.text
