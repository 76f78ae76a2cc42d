"""加载遮罩.

盖住父组件的半透明遮罩，中间显示一行状态文字
（如 "Verifying access..."、"Creating your account..."）。
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

DEFAULT_LOADING_TEXT = "Processing..."


class LoadingOverlay(QWidget):
    """加载遮罩.

    Example:
        >>> overlay = LoadingOverlay(page)
        >>> overlay.show_loading("Verifying access...")
        >>> overlay.hide_loading()
    """

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet("LoadingOverlay { background-color: rgba(0, 0, 0, 0.5); }")

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._label = QLabel(DEFAULT_LOADING_TEXT)
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setStyleSheet(
            "color: white; font-size: 16px; font-weight: 500;"
            "background: transparent;"
        )
        layout.addWidget(self._label)

        parent.installEventFilter(self)
        self.hide()

    @property
    def text(self) -> str:
        return self._label.text()

    @property
    def is_active(self) -> bool:
        return not self.isHidden()

    def show_loading(self, message: str = DEFAULT_LOADING_TEXT) -> None:
        self._label.setText(message)
        self.setGeometry(self.parentWidget().rect())
        self.show()
        self.raise_()

    def hide_loading(self) -> None:
        self.hide()

    def eventFilter(self, watched: Optional[QObject], event: Optional[QEvent]) -> bool:
        """跟随父组件尺寸."""
        if watched is self.parentWidget() and event is not None:
            if event.type() == QEvent.Type.Resize:
                self.setGeometry(self.parentWidget().rect())
        return super().eventFilter(watched, event)
