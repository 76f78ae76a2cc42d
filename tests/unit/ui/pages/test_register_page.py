"""注册页单元测试."""

from __future__ import annotations

import httpx
import pytest

from src.services.auth_service import Page
from src.ui.pages.register_page import RegisterPage
from src.ui.widgets.toast_notification import get_toast_manager


@pytest.fixture
def page(qtbot, offline_auth):
    widget = RegisterPage(offline_auth)
    qtbot.addWidget(widget)
    return widget


def fill_form(page, screenshot_file, confirm="Secret123"):
    page._name_input.setText("Ada Lovelace")
    page._email_input.setText("ada@example.com")
    page._password_input.setText("Secret123")
    page._confirm_input.setText(confirm)
    page._payment_combo.setCurrentIndex(page._payment_combo.findData("binance"))
    page.set_screenshot(screenshot_file)
    page._terms_check.setChecked(True)


class TestRegisterFields:
    """字段反馈测试."""

    def test_password_strength_border(self, page):
        page._password_input.setText("abc")
        assert "#ef4444" in page._password_input.styleSheet()
        page._password_input.setText("abcdefgh")
        assert "#f59e0b" in page._password_input.styleSheet()
        page._password_input.setText("Abcdefg1")
        assert "#10b981" in page._password_input.styleSheet()

    def test_password_rules_tooltip(self, page):
        page._password_input.setText("abc")
        assert "uppercase" in page._password_input.toolTip()
        page._password_input.setText("Abcdefg1")
        assert page._password_input.toolTip() == ""

    def test_payment_instructions(self, page):
        assert page._payment_details.isHidden()
        page._payment_combo.setCurrentIndex(page._payment_combo.findData("easypaisa"))
        assert not page._payment_details.isHidden()
        assert page._payment_title.text() == "EasyPaisa Payment"
        assert "PKR 8,000" in page._payment_instructions.text()

        page._payment_combo.setCurrentIndex(0)
        assert page._payment_details.isHidden()

    def test_valid_screenshot(self, page, screenshot_file):
        assert page.set_screenshot(screenshot_file)
        assert page.screenshot == screenshot_file
        assert page._file_label.text().startswith("File: payment.png (")

    def test_invalid_screenshot(self, page, tmp_path):
        text_file = tmp_path / "notes.txt"
        text_file.write_text("hello")
        assert not page.set_screenshot(text_file)
        assert page.screenshot is None
        assert "Please upload an image file" in get_toast_manager().messages

    def test_email_blur(self, page):
        page._email_input.setText("nope")
        page._email_input.editingFinished.emit()
        assert "Please enter a valid email address" in get_toast_manager().messages

    def test_form_input(self, page, screenshot_file):
        fill_form(page, screenshot_file)
        form = page.form_input()
        assert form.full_name == "Ada Lovelace"
        assert form.payment_method == "binance"
        assert form.payment_screenshot == screenshot_file
        assert form.agree_terms


class TestRegisterSubmit:
    """提交测试."""

    def test_mismatch_shows_error_without_request(self, page, screenshot_file):
        fill_form(page, screenshot_file, confirm="Different1")
        page.submit()

        assert "Passwords do not match" in get_toast_manager().messages
        assert not page.overlay.is_active
        assert page.tasks.active_count == 0

    def test_success_flow(self, qtbot, make_auth_service, storage, screenshot_file):
        service, transport = make_auth_service(
            lambda request: httpx.Response(201, json={"success": True})
        )
        page = RegisterPage(service)
        qtbot.addWidget(page)
        fill_form(page, screenshot_file)

        page.submit()
        assert page.overlay.text == "Creating your account..."
        qtbot.waitUntil(lambda: page._success_dialog is not None, timeout=5000)

        assert len(transport.requests) == 1
        assert not page.overlay.is_active
        assert page._name_input.text() == ""
        assert page.screenshot is None
        assert storage.get_json("pendingRegistration")["email"] == "ada@example.com"
        assert "✓ Registration successful! Awaiting admin approval" in get_toast_manager().messages

        with qtbot.waitSignal(page.navigate_requested, timeout=1000) as blocker:
            page._success_dialog.accept()
        assert blocker.args == [Page.LOGIN, 0]

    def test_server_error(self, qtbot, make_auth_service, screenshot_file):
        service, _ = make_auth_service(
            lambda request: httpx.Response(
                400, json={"success": False, "message": "Email already registered"}
            )
        )
        page = RegisterPage(service)
        qtbot.addWidget(page)
        fill_form(page, screenshot_file)

        page.submit()
        qtbot.waitUntil(
            lambda: "Email already registered" in get_toast_manager().messages, timeout=5000
        )
        assert page._submit_btn.isEnabled()
        assert page._name_input.text() == "Ada Lovelace"
