"""Toast 通知组件.

窗口右下角的轻量提示，用于登录、注册、导出等操作反馈。

Features:
    - 四种类型（成功、错误、信息、警告），带图标
    - 到时自动淡出，可点击关闭
    - 超出上限的通知排队显示
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from PyQt6.QtCore import (
    QEasingCurve,
    QPropertyAnimation,
    Qt,
    QTimer,
    pyqtSignal,
)
from PyQt6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.services.auth_service import Notice
from src.utils.constants import TOAST_DURATION
from src.utils.error_messages import ErrorSeverity, UserFriendlyError


class ToastType(str, Enum):
    """通知类型."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


# 类型样式配置
TOAST_STYLES = {
    ToastType.SUCCESS: {"background": "#10b981", "icon": "✓"},
    ToastType.ERROR: {"background": "#ef4444", "icon": "✕"},
    ToastType.INFO: {"background": "#0077b5", "icon": "ℹ"},
    ToastType.WARNING: {"background": "#f59e0b", "icon": "⚠"},
}

TOAST_WIDTH = 360
TOAST_MARGIN = 20
TOAST_SPACING = 8


class ToastNotification(QFrame):
    """单条通知.

    Signals:
        closed: 淡出结束后发出

    Example:
        >>> toast = ToastNotification("Logged out successfully", ToastType.SUCCESS)
        >>> toast.show()
    """

    closed = pyqtSignal()

    def __init__(
        self,
        message: str,
        toast_type: ToastType = ToastType.INFO,
        duration: int = TOAST_DURATION,
        parent: Optional[QWidget] = None,
    ) -> None:
        """初始化通知.

        Args:
            message: 通知文案
            toast_type: 通知类型
            duration: 显示时长（毫秒），0 表示不自动关闭
            parent: 父组件
        """
        super().__init__(parent)
        self._message = message
        self._toast_type = ToastType(toast_type)
        self._duration = duration
        self._opacity_effect: Optional[QGraphicsOpacityEffect] = None
        self._fade_animation: Optional[QPropertyAnimation] = None

        self._setup_ui()

        if duration > 0:
            QTimer.singleShot(duration, self._start_fade_out)

    @property
    def message(self) -> str:
        return self._message

    @property
    def toast_type(self) -> ToastType:
        return self._toast_type

    def _setup_ui(self) -> None:
        self.setFixedWidth(TOAST_WIDTH)
        style = TOAST_STYLES[self._toast_type]

        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 12, 12)
        layout.setSpacing(12)

        icon_label = QLabel(style["icon"])
        icon_label.setFixedWidth(20)
        icon_label.setStyleSheet("font-size: 16px; color: white;")
        layout.addWidget(icon_label)

        self._message_label = QLabel(self._message)
        self._message_label.setWordWrap(True)
        self._message_label.setStyleSheet("font-size: 13px; font-weight: 500; color: white;")
        layout.addWidget(self._message_label, 1)

        close_btn = QPushButton("×")
        close_btn.setFixedSize(20, 20)
        close_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        close_btn.setStyleSheet("""
            QPushButton {
                border: none;
                background: transparent;
                color: rgba(255, 255, 255, 0.8);
                font-size: 16px;
                font-weight: bold;
            }
            QPushButton:hover { color: white; }
        """)
        close_btn.clicked.connect(self._start_fade_out)
        layout.addWidget(close_btn, 0, Qt.AlignmentFlag.AlignTop)

        self.setStyleSheet(f"""
            ToastNotification {{
                background-color: {style["background"]};
                border-radius: 8px;
            }}
        """)

        self._opacity_effect = QGraphicsOpacityEffect(self)
        self._opacity_effect.setOpacity(1.0)
        self.setGraphicsEffect(self._opacity_effect)

    def _start_fade_out(self) -> None:
        if self._fade_animation is not None:
            return

        self._fade_animation = QPropertyAnimation(self._opacity_effect, b"opacity")
        self._fade_animation.setDuration(300)
        self._fade_animation.setStartValue(1.0)
        self._fade_animation.setEndValue(0.0)
        self._fade_animation.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._fade_animation.finished.connect(self._on_fade_finished)
        self._fade_animation.start()

    def _on_fade_finished(self) -> None:
        self.closed.emit()
        self.deleteLater()


class ToastManager(QWidget):
    """通知管理器，负责排列和排队.

    Example:
        >>> manager = ToastManager(main_window)
        >>> manager.show_success("Design downloaded as PNG!")
    """

    MAX_VISIBLE = 4

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._notifications: list[ToastNotification] = []
        self._pending: list[ToastNotification] = []

        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(TOAST_SPACING)
        self._layout.addStretch()
        self.hide()

    @property
    def notifications(self) -> list[ToastNotification]:
        """当前显示中的通知."""
        return list(self._notifications)

    @property
    def messages(self) -> list[str]:
        return [t.message for t in self._notifications + self._pending]

    def show_toast(
        self,
        message: str,
        toast_type: ToastType = ToastType.INFO,
        duration: int = TOAST_DURATION,
    ) -> ToastNotification:
        """显示通知.

        Args:
            message: 文案
            toast_type: 类型
            duration: 显示时长（毫秒）

        Returns:
            创建的通知组件
        """
        toast = ToastNotification(message, toast_type, duration, parent=self)
        if len(self._notifications) >= self.MAX_VISIBLE:
            toast.hide()
            self._pending.append(toast)
        else:
            self._add_toast(toast)
        return toast

    def show_success(self, message: str, duration: int = TOAST_DURATION) -> ToastNotification:
        return self.show_toast(message, ToastType.SUCCESS, duration)

    def show_error(self, message: str, duration: int = TOAST_DURATION) -> ToastNotification:
        return self.show_toast(message, ToastType.ERROR, duration)

    def show_info(self, message: str, duration: int = TOAST_DURATION) -> ToastNotification:
        return self.show_toast(message, ToastType.INFO, duration)

    def show_warning(self, message: str, duration: int = TOAST_DURATION) -> ToastNotification:
        return self.show_toast(message, ToastType.WARNING, duration)

    def show_notice(self, notice: Notice, duration: int = TOAST_DURATION) -> ToastNotification:
        """显示服务层返回的提示."""
        return self.show_toast(notice.message, ToastType(notice.level.value), duration)

    def show_user_error(self, error: UserFriendlyError) -> ToastNotification:
        """显示 UserFriendlyError."""
        toast_type = {
            ErrorSeverity.INFO: ToastType.INFO,
            ErrorSeverity.WARNING: ToastType.WARNING,
        }.get(error.severity, ToastType.ERROR)
        return self.show_toast(error.message, toast_type)

    def _add_toast(self, toast: ToastNotification) -> None:
        toast.closed.connect(lambda: self._remove_toast(toast))
        self._notifications.append(toast)
        self._layout.insertWidget(self._layout.count() - 1, toast)
        toast.show()
        self.update_position()
        self.show()
        self.raise_()

    def _remove_toast(self, toast: ToastNotification) -> None:
        if toast in self._notifications:
            self._notifications.remove(toast)
            self._layout.removeWidget(toast)

        if self._pending and len(self._notifications) < self.MAX_VISIBLE:
            self._add_toast(self._pending.pop(0))

        if not self._notifications:
            self.hide()
        else:
            self.update_position()

    def update_position(self) -> None:
        """贴在父窗口右下角."""
        parent = self.parentWidget()
        if parent is None:
            return

        height = sum(t.sizeHint().height() for t in self._notifications)
        height += TOAST_SPACING * max(len(self._notifications) - 1, 0)
        height = max(height, 60)
        self.setGeometry(
            parent.width() - TOAST_WIDTH - TOAST_MARGIN,
            parent.height() - height - TOAST_MARGIN,
            TOAST_WIDTH,
            height,
        )

    def clear_all(self) -> None:
        for toast in list(self._notifications):
            toast._start_fade_out()
        self._pending.clear()


# 全局 Toast 管理器
_toast_manager: Optional[ToastManager] = None


def get_toast_manager(parent: Optional[QWidget] = None) -> ToastManager:
    """获取全局 Toast 管理器.

    Args:
        parent: 父组件（仅首次调用有效）
    """
    global _toast_manager
    if _toast_manager is None:
        _toast_manager = ToastManager(parent)
    return _toast_manager


def reset_toast_manager() -> None:
    """丢弃全局管理器（窗口销毁或测试时使用）."""
    global _toast_manager
    _toast_manager = None
