"""登录页单元测试."""

from __future__ import annotations

import httpx
import pytest
from PyQt6.QtWidgets import QPushButton

from src.services.auth_service import Page
from src.ui.pages.login_page import BORDER_ERROR, BORDER_OK, LOGIN_TEXT, LoginPage
from src.ui.widgets.toast_notification import get_toast_manager


@pytest.fixture
def page(qtbot, offline_auth):
    widget = LoginPage(offline_auth)
    qtbot.addWidget(widget)
    return widget


class TestLoginPageEnter:
    """进入页面测试."""

    def test_prefills_remembered_email(self, page, storage):
        storage.set_item("rememberedEmail", "ada@example.com")
        page.on_enter()
        assert page._email_input.text() == "ada@example.com"
        assert page._remember_check.isChecked()

    def test_pending_registration_notice(self, page, storage):
        storage.set_json(
            "pendingRegistration",
            {"fullName": "Ada", "email": "a@b.co", "paymentMethod": "binance",
             "status": "pending_approval"},
        )
        page.on_enter()
        assert any("pending approval" in m for m in get_toast_manager().messages)

    def test_existing_token_redirects(self, qtbot, make_auth_service, logged_in):
        service, _ = make_auth_service(
            lambda request: httpx.Response(
                200, json={"success": True, "user": {"status": "approved"}}
            )
        )
        page = LoginPage(service)
        qtbot.addWidget(page)

        with qtbot.waitSignal(page.navigate_requested, timeout=5000) as blocker:
            page.on_enter()
        assert blocker.args == [Page.DESIGNER, 0]


class TestLoginForm:
    """表单测试."""

    def test_forgot_password(self, page):
        buttons = [b for b in page.findChildren(QPushButton) if b.text() == "Forgot password?"]
        buttons[0].click()
        assert "Password reset functionality coming soon!" in get_toast_manager().messages

    def test_email_blur_feedback(self, page):
        page._email_input.setText("bad")
        page._email_input.editingFinished.emit()
        assert BORDER_ERROR in page._email_input.styleSheet()

        page._email_input.setText("ada@example.com")
        page._email_input.editingFinished.emit()
        assert BORDER_OK in page._email_input.styleSheet()

    def test_invalid_submit(self, qtbot, page):
        page.submit()
        qtbot.waitUntil(
            lambda: "Please enter both email and password" in get_toast_manager().messages,
            timeout=5000,
        )
        assert page._submit_btn.isEnabled()
        assert page._submit_btn.text() == LOGIN_TEXT

    def test_successful_login(self, qtbot, make_auth_service, storage):
        service, _ = make_auth_service(
            lambda request: httpx.Response(
                200,
                json={"success": True, "token": "tok",
                      "user": {"name": "Ada", "status": "approved"}},
            )
        )
        page = LoginPage(service)
        qtbot.addWidget(page)
        page._email_input.setText("ada@example.com")
        page._password_input.setText("Secret123")
        page._remember_check.setChecked(True)

        with qtbot.waitSignal(page.navigate_requested, timeout=5000) as blocker:
            page.submit()
            assert page._submit_btn.text() == "Logging in..."

        assert blocker.args == [Page.DESIGNER, 1000]
        assert storage.get_item("userToken") == "tok"
        assert storage.get_item("rememberedEmail") == "ada@example.com"
        assert page._password_input.text() == ""

    def test_pending_login_opens_dialog(self, qtbot, make_auth_service):
        service, _ = make_auth_service(
            lambda request: httpx.Response(403, json={"success": False, "status": "pending"})
        )
        page = LoginPage(service)
        qtbot.addWidget(page)
        page._email_input.setText("ada@example.com")
        page._password_input.setText("Secret123")

        with qtbot.waitSignal(page.session_changed, timeout=5000):
            page.submit()
        assert page._info_dialog is not None
        page._info_dialog.close()
