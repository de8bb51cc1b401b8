"""Tests for the asyncio tick timer."""

from __future__ import annotations

import asyncio

import pytest

from solo_snake.timer import TickTimer


class _Counter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


class TestTickTimer:
    @pytest.mark.asyncio
    async def test_ticks_repeatedly(self):
        counter = _Counter()
        timer = TickTimer(counter)
        timer.start(10)
        await asyncio.sleep(0.2)
        await timer.aclose()
        assert counter.calls >= 3

    @pytest.mark.asyncio
    async def test_stop_halts_ticks(self):
        counter = _Counter()
        timer = TickTimer(counter)
        timer.start(10)
        await asyncio.sleep(0.05)
        timer.stop()
        assert not timer.running
        calls = counter.calls
        await asyncio.sleep(0.05)
        assert counter.calls == calls

    @pytest.mark.asyncio
    async def test_restart_replaces_handle(self):
        timer = TickTimer(_Counter())
        timer.start(1_000)
        first = timer.handle
        timer.restart(500)
        second = timer.handle
        assert second is not first
        assert timer.interval_ms == 500
        await asyncio.sleep(0)
        assert first.done()
        assert timer.running
        await timer.aclose()

    @pytest.mark.asyncio
    async def test_restart_from_inside_callback(self):
        handles: list = []
        timer: TickTimer

        def callback() -> None:
            handles.append(timer.handle)
            if len(handles) == 1:
                timer.restart(5)

        timer = TickTimer(callback)
        timer.start(5)
        await asyncio.sleep(0.1)
        await timer.aclose()
        assert len(handles) >= 2
        assert handles[0] is not handles[1]
        assert handles[0].done()
        assert timer.interval_ms == 5

    @pytest.mark.asyncio
    async def test_failing_callback_stops_timer(self, caplog):
        def callback() -> None:
            raise RuntimeError("boom")

        timer = TickTimer(callback)
        timer.start(5)
        await asyncio.sleep(0.05)
        assert not timer.running
        assert timer.handle is None
        assert "Tick callback failed" in caplog.text

    @pytest.mark.asyncio
    async def test_invalid_interval(self):
        timer = TickTimer(_Counter())
        with pytest.raises(ValueError, match="positive"):
            timer.start(0)

    @pytest.mark.asyncio
    async def test_aclose_without_start(self):
        timer = TickTimer(_Counter())
        await timer.aclose()
        assert not timer.running
