"""异步任务线程单元测试."""

from __future__ import annotations

import asyncio

import pytest

from src.core.task_runner import AsyncTaskRunner, TaskGroup


async def _answer() -> int:
    await asyncio.sleep(0)
    return 42


async def _boom() -> None:
    raise ValueError("boom")


class TestAsyncTaskRunner:
    """单个后台协程测试."""

    def test_success(self, qtbot):
        runner = AsyncTaskRunner(_answer)
        with qtbot.waitSignal(runner.succeeded, timeout=5000) as blocker:
            runner.start()
        assert blocker.args == [42]
        runner.wait(1000)

    def test_failure(self, qtbot):
        runner = AsyncTaskRunner(_boom)
        with qtbot.waitSignal(runner.failed, timeout=5000) as blocker:
            runner.start()
        assert isinstance(blocker.args[0], ValueError)
        runner.wait(1000)


class TestTaskGroup:
    """任务组测试."""

    def test_submit_and_release(self, qtbot):
        group = TaskGroup()
        results = []

        runner = group.submit(_answer, results.append)
        assert group.active_count == 1
        qtbot.waitUntil(lambda: results == [42], timeout=5000)
        qtbot.waitUntil(lambda: group.active_count == 0, timeout=5000)
        assert runner is not None

    def test_failure_callback(self, qtbot):
        group = TaskGroup()
        errors = []

        group.submit(_boom, lambda _: None, errors.append)
        qtbot.waitUntil(lambda: len(errors) == 1, timeout=5000)
        assert str(errors[0]) == "boom"

    def test_wait_all(self, qtbot):
        group = TaskGroup()
        results = []
        group.submit(_answer, results.append)
        group.wait_all(5000)
        qtbot.waitUntil(lambda: results == [42], timeout=5000)
