"""Testes do controle de tasks de handler em background."""

from __future__ import annotations

import asyncio
import logging

import pytest

from app.interactions.handler_tasks import HandlerTaskTracker


@pytest.mark.asyncio
async def test_track_removes_task_when_done() -> None:
    tracker = HandlerTaskTracker()
    event = asyncio.Event()

    async def _work() -> None:
        await event.wait()

    tracker.track(asyncio.create_task(_work()), interaction_id="1")
    assert len(tracker) == 1

    event.set()
    await tracker.drain(timeout_seconds=1.0)
    assert len(tracker) == 0


@pytest.mark.asyncio
async def test_track_logs_failure(caplog: pytest.LogCaptureFixture) -> None:
    tracker = HandlerTaskTracker()

    async def _fail() -> None:
        raise ValueError("x")

    with caplog.at_level(logging.ERROR):
        task = asyncio.create_task(_fail())
        tracker.track(task, interaction_id="2")
        await asyncio.gather(task, return_exceptions=True)
        await asyncio.sleep(0)

    assert any(r.getMessage() == "handler_task_failed" for r in caplog.records)


@pytest.mark.asyncio
async def test_drain_cancels_tasks_after_timeout() -> None:
    tracker = HandlerTaskTracker()

    async def _forever() -> None:
        await asyncio.Event().wait()

    task = asyncio.create_task(_forever())
    tracker.track(task)

    await tracker.drain(timeout_seconds=0.01)

    assert task.cancelled()


@pytest.mark.asyncio
async def test_drain_without_tasks_returns_immediately() -> None:
    await HandlerTaskTracker().drain(timeout_seconds=0)
