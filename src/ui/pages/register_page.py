"""注册页.

填写资料、选择付款方式并上传付款截图，提交后账号进入待审核状态。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFileDialog,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from src.models.session import PAYMENT_METHODS
from src.services.auth_service import AuthOutcome, AuthResult, AuthService, Page
from src.ui.dialogs.notice_dialog import NoticeDialog
from src.ui.pages.base_page import BasePage
from src.utils.constants import TOAST_DURATION_LONG
from src.utils.helpers import format_file_size
from src.utils.logger import setup_logger
from src.utils.validators import (
    RegistrationInput,
    is_valid_email,
    password_strength,
    validate_password,
)

logger = setup_logger(__name__)

BORDER_DEFAULT = "#d1d5db"
BORDER_ERROR = "#ef4444"
BORDER_OK = "#10b981"

REGISTER_TEXT = "Create Account"
PREVIEW_MAX_SIZE = 240


class RegisterPage(BasePage):
    """注册页."""

    page = Page.REGISTER

    def __init__(self, auth_service: AuthService, parent: Optional[QWidget] = None) -> None:
        super().__init__(auth_service, parent)
        self._screenshot: Optional[Path] = None
        self._success_dialog: Optional[NoticeDialog] = None
        self._setup_ui()

    # ===================
    # 界面
    # ===================
    def _setup_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        outer.addWidget(scroll)

        container = QWidget()
        scroll.setWidget(container)
        row = QHBoxLayout(container)
        row.addStretch()

        card = QFrame()
        card.setObjectName("formCard")
        card.setFixedWidth(480)
        row.addWidget(card)
        row.addStretch()

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(16)

        title = QLabel("<h2>Create Your Account</h2>")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        form = QFormLayout()
        self._name_input = QLineEdit()
        self._name_input.setPlaceholderText("John Doe")
        form.addRow("Full Name", self._name_input)

        self._email_input = QLineEdit()
        self._email_input.setPlaceholderText("you@example.com")
        self._email_input.editingFinished.connect(self._on_email_blur)
        form.addRow("Email", self._email_input)

        self._password_input = QLineEdit()
        self._password_input.setEchoMode(QLineEdit.EchoMode.Password)
        self._password_input.setPlaceholderText("At least 8 characters")
        self._password_input.textChanged.connect(self._on_password_changed)
        form.addRow("Password", self._password_input)

        self._confirm_input = QLineEdit()
        self._confirm_input.setEchoMode(QLineEdit.EchoMode.Password)
        form.addRow("Confirm Password", self._confirm_input)

        self._payment_combo = QComboBox()
        self._payment_combo.addItem("Select payment method", "")
        for key, method in PAYMENT_METHODS.items():
            self._payment_combo.addItem(method.title.replace(" Payment", ""), key)
        self._payment_combo.currentIndexChanged.connect(self._on_payment_method_changed)
        form.addRow("Payment Method", self._payment_combo)
        layout.addLayout(form)

        for widget in (self._name_input, self._email_input, self._password_input, self._confirm_input):
            widget.textChanged.connect(lambda text, w=widget: self._on_required_input(w, text))

        # 付款说明
        self._payment_details = QFrame()
        self._payment_details.setObjectName("paymentDetails")
        details_layout = QVBoxLayout(self._payment_details)
        self._payment_title = QLabel()
        self._payment_title.setStyleSheet("font-weight: bold;")
        details_layout.addWidget(self._payment_title)
        self._payment_instructions = QLabel()
        self._payment_instructions.setWordWrap(True)
        self._payment_instructions.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse
        )
        details_layout.addWidget(self._payment_instructions)
        self._payment_details.hide()
        layout.addWidget(self._payment_details)

        # 付款截图
        upload_row = QHBoxLayout()
        self._upload_btn = QPushButton("Upload Payment Screenshot")
        self._upload_btn.clicked.connect(self._on_choose_screenshot)
        upload_row.addWidget(self._upload_btn)
        upload_row.addStretch()
        layout.addLayout(upload_row)

        self._preview_label = QLabel()
        self._preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview_label.hide()
        layout.addWidget(self._preview_label)
        self._file_label = QLabel()
        self._file_label.hide()
        layout.addWidget(self._file_label)

        self._terms_check = QCheckBox("I agree to the terms and conditions")
        layout.addWidget(self._terms_check)

        self._submit_btn = QPushButton(REGISTER_TEXT)
        self._submit_btn.setObjectName("primaryButton")
        self._submit_btn.clicked.connect(self.submit)
        layout.addWidget(self._submit_btn)

        login_btn = QPushButton("Already have an account? Login")
        login_btn.setFlat(True)
        login_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        login_btn.clicked.connect(lambda: self.navigate_requested.emit(Page.LOGIN, 0))
        layout.addWidget(login_btn)

    # ===================
    # 字段反馈
    # ===================
    @staticmethod
    def _set_border(widget: QWidget, color: str) -> None:
        widget.setStyleSheet(f"border: 1px solid {color};")

    def _on_required_input(self, widget: QWidget, text: str) -> None:
        if widget is self._password_input:
            return
        if text.strip():
            self._set_border(widget, BORDER_DEFAULT)

    def _on_email_blur(self) -> None:
        if is_valid_email(self._email_input.text()):
            self._set_border(self._email_input, BORDER_OK)
        else:
            self._set_border(self._email_input, BORDER_ERROR)
            self.toast.show_error("Please enter a valid email address")

    def _on_password_changed(self, text: str) -> None:
        """边框颜色表示密码强度，提示框列出未满足的规则."""
        self._set_border(self._password_input, password_strength(text).color)
        self._password_input.setToolTip("\n".join(validate_password(text)))

    def _on_payment_method_changed(self, index: int) -> None:
        method = PAYMENT_METHODS.get(self._payment_combo.itemData(index) or "")
        if method is None:
            self._payment_details.hide()
            return
        self._payment_title.setText(method.title)
        self._payment_instructions.setText(method.instructions)
        self._payment_details.show()

    # ===================
    # 付款截图
    # ===================
    def _on_choose_screenshot(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Payment Screenshot",
            "",
            "Images (*.png *.jpg *.jpeg *.gif *.webp *.bmp)",
        )
        if path:
            self.set_screenshot(Path(path))

    def set_screenshot(self, path: Path) -> bool:
        """校验并设置付款截图.

        Returns:
            是否通过校验
        """
        notice = self._auth.validate_screenshot(path)
        if notice is not None:
            self.toast.show_notice(notice)
            self._clear_screenshot()
            return False

        self._screenshot = path
        pixmap = QPixmap(str(path))
        if not pixmap.isNull():
            self._preview_label.setPixmap(
                pixmap.scaled(
                    PREVIEW_MAX_SIZE,
                    PREVIEW_MAX_SIZE,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
            self._preview_label.show()
        self._file_label.setText(f"File: {path.name} ({format_file_size(path.stat().st_size)})")
        self._file_label.show()
        return True

    def _clear_screenshot(self) -> None:
        self._screenshot = None
        self._preview_label.clear()
        self._preview_label.hide()
        self._file_label.clear()
        self._file_label.hide()

    @property
    def screenshot(self) -> Optional[Path]:
        return self._screenshot

    # ===================
    # 提交
    # ===================
    def form_input(self) -> RegistrationInput:
        return RegistrationInput(
            full_name=self._name_input.text(),
            email=self._email_input.text(),
            password=self._password_input.text(),
            confirm_password=self._confirm_input.text(),
            payment_method=self._payment_combo.currentData() or "",
            payment_screenshot=self._screenshot,
            agree_terms=self._terms_check.isChecked(),
        )

    def submit(self) -> None:
        """提交注册表单."""
        if not self._submit_btn.isEnabled():
            return
        form = self.form_input()
        notice = self._auth.validate_registration(form)
        if notice is not None:
            self.toast.show_notice(notice)
            return

        self._submit_btn.setEnabled(False)
        self.overlay.show_loading("Creating your account...")
        self.run_async(
            lambda: self._auth.register(form),
            self._on_register_finished,
            self._on_register_failed,
        )

    def _on_register_finished(self, result: AuthResult) -> None:
        self.overlay.hide_loading()
        self._submit_btn.setEnabled(True)

        if result.outcome != AuthOutcome.SUCCESS:
            self.apply_result(result)
            return

        self.reset_form()
        for notice in result.notices:
            self.toast.show_notice(notice, TOAST_DURATION_LONG)
        self._success_dialog = NoticeDialog.registration_success(self)
        self._success_dialog.accepted.connect(
            lambda: self.navigate_requested.emit(Page.LOGIN, 0)
        )
        self._success_dialog.open()

    def _on_register_failed(self, error: Exception) -> None:
        self._submit_btn.setEnabled(True)
        self._on_task_failed(error)

    def reset_form(self) -> None:
        for widget in (self._name_input, self._email_input, self._password_input, self._confirm_input):
            widget.clear()
            widget.setStyleSheet("")
        self._payment_combo.setCurrentIndex(0)
        self._terms_check.setChecked(False)
        self._clear_screenshot()
        self._payment_details.hide()
