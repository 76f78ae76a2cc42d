"""登录页."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.services.auth_service import AuthOutcome, AuthResult, AuthService, Page
from src.ui.dialogs.notice_dialog import NoticeDialog
from src.ui.pages.base_page import BasePage
from src.utils.logger import setup_logger
from src.utils.validators import is_valid_email

logger = setup_logger(__name__)

BORDER_DEFAULT = "#d1d5db"
BORDER_ERROR = "#ef4444"
BORDER_OK = "#10b981"

LOGIN_TEXT = "Login"
LOGGING_IN_TEXT = "Logging in..."


class LoginPage(BasePage):
    """登录页.

    打开时回填记住的邮箱、提示待审核注册，并检查已有 token。
    """

    page = Page.LOGIN

    def __init__(self, auth_service: AuthService, parent: Optional[QWidget] = None) -> None:
        super().__init__(auth_service, parent)
        self._info_dialog: Optional[NoticeDialog] = None
        self._setup_ui()

    def _setup_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.addStretch()

        card = QFrame()
        card.setObjectName("formCard")
        card.setFixedWidth(420)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(16)

        title = QLabel("<h2>Welcome Back</h2>")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        form = QFormLayout()
        self._email_input = QLineEdit()
        self._email_input.setPlaceholderText("you@example.com")
        self._email_input.editingFinished.connect(self._on_email_blur)
        self._email_input.textChanged.connect(
            lambda text: self._reset_border(self._email_input, text)
        )
        form.addRow("Email", self._email_input)

        self._password_input = QLineEdit()
        self._password_input.setEchoMode(QLineEdit.EchoMode.Password)
        self._password_input.setPlaceholderText("Enter your password")
        self._password_input.returnPressed.connect(self.submit)
        self._password_input.textChanged.connect(
            lambda text: self._reset_border(self._password_input, text)
        )
        form.addRow("Password", self._password_input)
        layout.addLayout(form)

        options = QHBoxLayout()
        self._remember_check = QCheckBox("Remember me")
        options.addWidget(self._remember_check)
        options.addStretch()
        forgot_btn = QPushButton("Forgot password?")
        forgot_btn.setFlat(True)
        forgot_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        forgot_btn.clicked.connect(
            lambda: self.toast.show_info("Password reset functionality coming soon!")
        )
        options.addWidget(forgot_btn)
        layout.addLayout(options)

        self._submit_btn = QPushButton(LOGIN_TEXT)
        self._submit_btn.setObjectName("primaryButton")
        self._submit_btn.clicked.connect(self.submit)
        layout.addWidget(self._submit_btn)

        register_btn = QPushButton("Don't have an account? Register")
        register_btn.setFlat(True)
        register_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        register_btn.clicked.connect(lambda: self.navigate_requested.emit(Page.REGISTER, 0))
        layout.addWidget(register_btn)

        row = QHBoxLayout()
        row.addStretch()
        row.addWidget(card)
        row.addStretch()
        outer.addLayout(row)
        outer.addStretch()

    # ===================
    # 页面进入
    # ===================
    def on_enter(self) -> None:
        remembered = self._auth.remembered_email
        if remembered:
            self._email_input.setText(remembered)
            self._remember_check.setChecked(True)

        notice = self._auth.pending_registration_notice()
        if notice is not None:
            self.toast.show_notice(notice)

        if self._auth.is_authenticated:
            self.run_async(self._auth.check_auth_status, self.apply_result)

    # ===================
    # 表单
    # ===================
    @staticmethod
    def _set_border(widget: QWidget, color: str) -> None:
        widget.setStyleSheet(f"border: 1px solid {color};")

    def _reset_border(self, widget: QWidget, text: str) -> None:
        if text:
            self._set_border(widget, BORDER_DEFAULT)

    def _on_email_blur(self) -> None:
        email = self._email_input.text()
        if not email:
            return
        self._set_border(self._email_input, BORDER_OK if is_valid_email(email) else BORDER_ERROR)

    def _set_busy(self, busy: bool) -> None:
        self._submit_btn.setEnabled(not busy)
        self._submit_btn.setText(LOGGING_IN_TEXT if busy else LOGIN_TEXT)

    def submit(self) -> None:
        """提交登录表单."""
        if not self._submit_btn.isEnabled():
            return
        email = self._email_input.text()
        password = self._password_input.text()
        remember_me = self._remember_check.isChecked()

        self._set_busy(True)
        self.run_async(
            lambda: self._auth.login(email, password, remember_me),
            self._on_login_finished,
            self._on_login_failed,
        )

    def _on_login_finished(self, result: AuthResult) -> None:
        self._set_busy(False)
        self.apply_result(result)
        if result.show_info_dialog:
            self._info_dialog = NoticeDialog.pending_approval(self)
            self._info_dialog.open()
        if result.outcome == AuthOutcome.APPROVED:
            self._password_input.clear()
        self.session_changed.emit()

    def _on_login_failed(self, error: Exception) -> None:
        self._set_busy(False)
        self._on_task_failed(error)
