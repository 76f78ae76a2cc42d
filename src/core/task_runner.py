"""异步任务线程.

在独立 QThread 中用新的事件循环运行一个协程，结果通过信号回到 UI 线程。
登录、注册、访问校验等网络请求都经由这里执行。
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from src.utils.logger import setup_logger

logger = setup_logger(__name__)

CoroutineFactory = Callable[[], Awaitable[Any]]


class AsyncTaskRunner(QThread):
    """运行单个协程的后台线程.

    Signals:
        succeeded: 协程返回值
        failed: 协程抛出的异常

    Example:
        >>> runner = AsyncTaskRunner(lambda: service.login(email, password))
        >>> runner.succeeded.connect(self._on_login_result)
        >>> runner.start()
    """

    succeeded = pyqtSignal(object)  # 返回值
    failed = pyqtSignal(object)  # Exception

    def __init__(
        self,
        factory: CoroutineFactory,
        parent: Optional[QObject] = None,
    ) -> None:
        """初始化线程.

        Args:
            factory: 返回协程的可调用对象，在工作线程中调用
            parent: 父对象
        """
        super().__init__(parent)
        self._factory = factory

    def run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            result = loop.run_until_complete(self._factory())
        except Exception as e:
            logger.exception(f"后台任务异常: {e}")
            self.failed.emit(e)
        else:
            self.succeeded.emit(result)
        finally:
            loop.close()
            asyncio.set_event_loop(None)


class TaskGroup(QObject):
    """持有运行中的 AsyncTaskRunner，线程结束后释放引用."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._runners: set[AsyncTaskRunner] = set()

    @property
    def active_count(self) -> int:
        return len(self._runners)

    def submit(
        self,
        factory: CoroutineFactory,
        on_success: Callable[[Any], None],
        on_failure: Optional[Callable[[Exception], None]] = None,
    ) -> AsyncTaskRunner:
        """启动一个后台协程.

        Args:
            factory: 协程工厂
            on_success: 成功回调（UI 线程）
            on_failure: 失败回调（UI 线程）

        Returns:
            已启动的线程
        """
        runner = AsyncTaskRunner(factory, self)
        runner.succeeded.connect(on_success)
        if on_failure is not None:
            runner.failed.connect(on_failure)
        runner.finished.connect(lambda: self._release(runner))
        self._runners.add(runner)
        runner.start()
        return runner

    def _release(self, runner: AsyncTaskRunner) -> None:
        self._runners.discard(runner)
        runner.deleteLater()

    def wait_all(self, msecs: int = 5000) -> None:
        """等待所有线程结束（关闭窗口时调用）."""
        for runner in list(self._runners):
            runner.wait(msecs)
