"""页面基类.

所有页面共享的能力：提示、跳转请求、后台协程和加载遮罩。
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QWidget

from src.core.task_runner import CoroutineFactory, TaskGroup
from src.services.auth_service import AuthResult, AuthService, Page
from src.ui.widgets.loading_overlay import LoadingOverlay
from src.ui.widgets.toast_notification import ToastManager, get_toast_manager
from src.utils.error_messages import get_user_friendly_error
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class BasePage(QWidget):
    """页面基类.

    Signals:
        navigate_requested: 请求跳转 (Page, 延迟毫秒)
        session_changed: 本地会话发生变化（登录、退出）
    """

    navigate_requested = pyqtSignal(object, int)  # Page, delay_ms
    session_changed = pyqtSignal()

    page: Page

    def __init__(self, auth_service: AuthService, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._auth = auth_service
        self._tasks = TaskGroup(self)
        self._overlay: Optional[LoadingOverlay] = None

    @property
    def auth_service(self) -> AuthService:
        return self._auth

    @property
    def toast(self) -> ToastManager:
        return get_toast_manager()

    @property
    def overlay(self) -> LoadingOverlay:
        if self._overlay is None:
            self._overlay = LoadingOverlay(self)
        return self._overlay

    @property
    def tasks(self) -> TaskGroup:
        return self._tasks

    def on_enter(self) -> None:
        """页面切换到前台时调用."""

    def run_async(
        self,
        factory: CoroutineFactory,
        on_success: Callable[[Any], None],
        on_failure: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        """在后台线程执行协程，回调在 UI 线程."""
        self._tasks.submit(factory, on_success, on_failure or self._on_task_failed)

    def _on_task_failed(self, error: Exception) -> None:
        self.overlay.hide_loading()
        self.toast.show_user_error(get_user_friendly_error(error))

    def apply_result(self, result: AuthResult) -> None:
        """展示结果中的提示并执行跳转请求."""
        for notice in result.notices:
            self.toast.show_notice(notice)
        if result.redirect is not None:
            logger.debug(f"请求跳转: {result.redirect.value} ({result.redirect_delay_ms}ms)")
            self.navigate_requested.emit(result.redirect, result.redirect_delay_ms)
