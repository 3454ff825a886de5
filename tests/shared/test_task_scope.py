"""Tests for TaskScope."""

import asyncio

import pytest

from app.shared.task_scope import TaskScope


class TestSpawn:
    async def test_spawn_tracks_until_done(self):
        scope = TaskScope("spawn")
        gate = asyncio.Event()

        async def work():
            await gate.wait()
            return 42

        task = scope.spawn(work(), name="work")
        await asyncio.sleep(0)
        assert scope.active_count == 1

        gate.set()
        assert await task == 42
        await asyncio.sleep(0)
        assert scope.active_count == 0

    async def test_spawn_on_closed_scope_raises(self):
        scope = TaskScope("closed")
        await scope.aclose()

        async def work():
            return None

        with pytest.raises(RuntimeError):
            scope.spawn(work())

    async def test_failed_task_does_not_break_scope(self):
        scope = TaskScope("failing")

        async def boom():
            raise ValueError("boom")

        scope.spawn(boom(), name="boom")
        await scope.wait_idle()

        assert scope.active_count == 0
        assert scope.closed is False


class TestEvery:
    async def test_runs_repeatedly(self):
        scope = TaskScope("every")
        ticks = []

        scope.every(0.01, lambda: ticks.append(1), name="tick")
        await asyncio.sleep(0.06)
        await scope.aclose()

        assert len(ticks) >= 2

    async def test_async_callback(self):
        scope = TaskScope("every-async")
        ticks = []

        async def tick():
            ticks.append(1)

        scope.every(0.01, tick, name="tick")
        await asyncio.sleep(0.05)
        await scope.aclose()

        assert ticks

    async def test_failing_tick_keeps_schedule(self):
        scope = TaskScope("every-failing")
        calls = []

        def tick():
            calls.append(1)
            raise RuntimeError("tick failed")

        scope.every(0.01, tick, name="tick")
        await asyncio.sleep(0.06)

        assert len(calls) >= 2
        assert scope.recurring_count == 1
        await scope.aclose()

    async def test_first_tick_waits_one_interval(self):
        scope = TaskScope("every-delay")
        ticks = []

        scope.every(3600, lambda: ticks.append(1), name="tick")
        await asyncio.sleep(0.01)

        assert ticks == []
        await scope.aclose()


class TestClose:
    async def test_aclose_cancels_everything(self):
        scope = TaskScope("close")
        ticks = []

        async def forever():
            await asyncio.Event().wait()

        one_shot = scope.spawn(forever(), name="forever")
        scope.every(0.01, lambda: ticks.append(1), name="tick")

        await scope.aclose()
        count = len(ticks)
        await asyncio.sleep(0.05)

        assert one_shot.cancelled()
        assert scope.closed is True
        assert scope.active_count == 0
        assert len(ticks) == count

    async def test_aclose_is_idempotent(self):
        scope = TaskScope("close-twice")

        await scope.aclose()
        await scope.aclose()

        assert scope.closed is True

    async def test_aclose_from_inside_scope_task(self):
        scope = TaskScope("self-close")
        done = asyncio.Event()

        async def closer():
            await scope.aclose()
            done.set()

        scope.spawn(closer(), name="closer")
        await asyncio.wait_for(done.wait(), timeout=1)

        assert scope.closed is True
