"""说明对话框.

登录页的“账号待审核”说明和注册成功后的提示。
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

PENDING_APPROVAL_TITLE = "Account Pending Approval"
PENDING_APPROVAL_TEXT = (
    "Your registration has been received and your payment is being verified. "
    "An admin will review your account shortly. You will be able to log in "
    "once your account has been approved."
)

REGISTRATION_SUCCESS_TITLE = "Registration Successful!"
REGISTRATION_SUCCESS_TEXT = (
    "Thank you for registering. Your payment screenshot has been submitted "
    "and your account is awaiting admin approval. You can log in once your "
    "account has been approved."
)


class NoticeDialog(QDialog):
    """标题 + 正文 + 按钮的简单对话框.

    Args:
        title: 标题
        text: 正文
        icon: 标题上方的图标字符
        button_text: 按钮文字
        parent: 父窗口
    """

    def __init__(
        self,
        title: str,
        text: str,
        icon: str = "ℹ",
        button_text: str = "Got it",
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setFixedWidth(420)
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setSpacing(16)
        layout.setContentsMargins(24, 24, 24, 24)

        icon_label = QLabel(icon)
        icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        icon_label.setStyleSheet("font-size: 36px; color: #0077b5;")
        layout.addWidget(icon_label)

        self._title_label = QLabel(f"<h3>{title}</h3>")
        self._title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._title_label)

        self._text_label = QLabel(text)
        self._text_label.setWordWrap(True)
        self._text_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._text_label.setStyleSheet("color: #4b5563;")
        layout.addWidget(self._text_label)

        button_layout = QHBoxLayout()
        button_layout.addStretch()
        self._button = QPushButton(button_text)
        self._button.setDefault(True)
        self._button.clicked.connect(self.accept)
        button_layout.addWidget(self._button)
        button_layout.addStretch()
        layout.addLayout(button_layout)

    @property
    def text(self) -> str:
        return self._text_label.text()

    @classmethod
    def pending_approval(cls, parent: Optional[QWidget] = None) -> "NoticeDialog":
        return cls(PENDING_APPROVAL_TITLE, PENDING_APPROVAL_TEXT, "⏳", parent=parent)

    @classmethod
    def registration_success(cls, parent: Optional[QWidget] = None) -> "NoticeDialog":
        return cls(
            REGISTRATION_SUCCESS_TITLE,
            REGISTRATION_SUCCESS_TEXT,
            "✓",
            button_text="Go to Login",
            parent=parent,
        )
