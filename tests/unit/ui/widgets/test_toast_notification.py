"""Toast 通知组件单元测试."""

from __future__ import annotations

from PyQt6.QtWidgets import QWidget

from src.services.auth_service import Notice, NoticeLevel
from src.ui.widgets.toast_notification import (
    ToastManager,
    ToastNotification,
    ToastType,
    get_toast_manager,
)
from src.utils.error_messages import ErrorSeverity, UserFriendlyError


class TestToastNotification:
    """单条通知测试."""

    def test_properties(self, qtbot) -> None:
        toast = ToastNotification("Saved", ToastType.SUCCESS, duration=0)
        qtbot.addWidget(toast)
        assert toast.message == "Saved"
        assert toast.toast_type == ToastType.SUCCESS

    def test_fades_out(self, qtbot) -> None:
        """到时后发出 closed 信号."""
        toast = ToastNotification("Bye", ToastType.INFO, duration=50)
        with qtbot.waitSignal(toast.closed, timeout=3000):
            toast.show()


class TestToastManager:
    """管理器测试."""

    def test_show_variants(self, qtbot) -> None:
        parent = QWidget()
        qtbot.addWidget(parent)
        manager = ToastManager(parent)

        assert manager.show_success("a").toast_type == ToastType.SUCCESS
        assert manager.show_error("b").toast_type == ToastType.ERROR
        assert manager.show_info("c").toast_type == ToastType.INFO
        assert manager.show_warning("d").toast_type == ToastType.WARNING
        assert manager.messages == ["a", "b", "c", "d"]

    def test_queue_beyond_max(self, qtbot) -> None:
        parent = QWidget()
        qtbot.addWidget(parent)
        manager = ToastManager(parent)

        for i in range(ToastManager.MAX_VISIBLE + 2):
            manager.show_info(f"msg {i}", duration=0)

        assert len(manager.notifications) == ToastManager.MAX_VISIBLE
        assert len(manager.messages) == ToastManager.MAX_VISIBLE + 2

    def test_show_notice(self, qtbot) -> None:
        parent = QWidget()
        qtbot.addWidget(parent)
        manager = ToastManager(parent)

        toast = manager.show_notice(Notice("Logged out successfully", NoticeLevel.SUCCESS))
        assert toast.toast_type == ToastType.SUCCESS
        assert toast.message == "Logged out successfully"

    def test_show_user_error(self, qtbot) -> None:
        parent = QWidget()
        qtbot.addWidget(parent)
        manager = ToastManager(parent)

        warning = UserFriendlyError("t", "Check input", ErrorSeverity.WARNING, "X")
        critical = UserFriendlyError("t", "Disk full", ErrorSeverity.CRITICAL, "Y")
        assert manager.show_user_error(warning).toast_type == ToastType.WARNING
        assert manager.show_user_error(critical).toast_type == ToastType.ERROR

    def test_position_bottom_right(self, qtbot) -> None:
        parent = QWidget()
        parent.resize(1000, 700)
        qtbot.addWidget(parent)
        manager = ToastManager(parent)

        manager.show_info("hello", duration=0)
        geometry = manager.geometry()
        assert geometry.right() == 1000 - 20 - 1
        assert geometry.bottom() == 700 - 20 - 1

    def test_global_manager(self, qtbot) -> None:
        first = get_toast_manager()
        assert get_toast_manager() is first
