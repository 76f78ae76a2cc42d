"""设计器页面单元测试."""

from __future__ import annotations

import httpx
import pytest
from PIL import Image

from src.models.design_state import NudgeDirection, TextAlign
from src.models.design_template import DesignMode
from src.services.auth_service import Page
from src.services.export_service import ExportFormat
from src.ui.pages.designer_page import DesignerPage, gradient_style
from src.ui.widgets.toast_notification import get_toast_manager


@pytest.fixture
def page(qtbot, offline_auth, tmp_path):
    widget = DesignerPage(offline_auth, tmp_path / "exports")
    qtbot.addWidget(widget)
    return widget


class TestGradientStyle:
    """按钮样式测试."""

    def test_colored(self):
        style = gradient_style(("#0077b5", "#00a0dc"))
        assert "stop:0 #0077b5" in style
        assert "color: white" in style

    def test_white_uses_dark_text(self):
        assert "color: #1f2937" in gradient_style(("#ffffff", "#f3f4f6"))


class TestDesignerInit:
    """初始化测试."""

    def test_initial_state(self, page):
        assert page.store.render_count == 1
        assert sorted(page._template_buttons) == [1, 2, 3, 4, 5, 6]
        assert page._template_buttons[1].isChecked()
        assert page._dimensions_label.text() == "1584 × 396"
        assert page._preview.pixmap.width() == 1584

    def test_controls_match_state(self, page):
        assert page._headline_input.text() == "Professional LinkedIn Designer"
        assert page._headline_slider.value() == 36
        assert page._subtext_slider.value() == 18
        assert page._headline_slider.minimum() == 20
        assert page._headline_slider.maximum() == 72
        assert page._align_buttons[TextAlign.CENTER].isChecked()


class TestDesignerControls:
    """控件操作测试."""

    def test_switch_mode(self, page):
        page._mode_buttons[DesignMode.POST].click()

        assert page.store.mode == DesignMode.POST
        assert sorted(page._template_buttons) == [1, 2, 3, 4]
        assert page._template_buttons[1].isChecked()
        assert page._dimensions_label.text() == "1200 × 1200"
        assert page._preview.pixmap.width() == 600

    def test_select_template(self, page):
        page._template_buttons[4].click()
        assert page.store.active_template_id == 4
        assert page.store.state.theme.colors == ("#f43f5e", "#fb923c")
        checked = [tid for tid, btn in page._template_buttons.items() if btn.isChecked()]
        assert checked == [4]

    def test_theme_keeps_template(self, page):
        page._template_buttons[2].click()
        page._theme_buttons["light"].click()
        assert page.store.state.theme.colors == ("#ffffff", "#f3f4f6")
        assert page.store.active_template_id == 2

    def test_active_theme_highlight(self, page):
        """测试主题按钮高亮跟随当前背景."""
        assert page._theme_buttons["professional"].isChecked()
        page._theme_buttons["light"].click()
        assert page._theme_buttons["light"].isChecked()
        assert not page._theme_buttons["professional"].isChecked()
        page._template_buttons[2].click()
        assert not any(btn.isChecked() for btn in page._theme_buttons.values())
        page._template_buttons[1].click()
        assert page._theme_buttons["professional"].isChecked()

    def test_edit_text(self, page):
        page._headline_input.setText("Hello World")
        page._subtext_input.setText("")
        assert page.store.state.headline_text == "Hello World"
        assert page.store.state.subtext_text == ""

    def test_sliders(self, page):
        page._headline_slider.setValue(50)
        page._subtext_slider.setValue(24)
        assert page.store.state.headline_size == 50
        assert page.store.state.subtext_size == 24
        assert page._headline_size_label.text() == "50px"
        assert page._subtext_size_label.text() == "24px"

    def test_font_family(self, page):
        index = page._font_combo.findData("Georgia, serif")
        page._font_combo.setCurrentIndex(index)
        assert page.store.state.font_family == "Georgia, serif"
        assert page._font_combo.itemText(index) == "Georgia"

    def test_alignment(self, page):
        page._align_buttons[TextAlign.RIGHT].click()
        assert page.store.state.alignment == TextAlign.RIGHT

    def test_nudge(self, page):
        page._nudge_buttons[NudgeDirection.RIGHT].click()
        page._nudge_buttons[NudgeDirection.RIGHT].click()
        page._nudge_buttons[NudgeDirection.UP].click()
        assert (page.store.state.offset_x, page.store.state.offset_y) == (20, -10)

        page._nudge_buttons[NudgeDirection.RESET].click()
        assert (page.store.state.offset_x, page.store.state.offset_y) == (0, 0)


class TestDownload:
    """导出测试."""

    def test_download_png(self, page):
        path = page.download(ExportFormat.PNG)

        assert path.parent == page.export_dir
        assert path.name.startswith("linkedin-cover-")
        with Image.open(path) as img:
            assert img.size == (1584, 396)
        assert "Design downloaded as PNG!" in get_toast_manager().messages

    def test_download_jpeg_post(self, page):
        page._mode_buttons[DesignMode.POST].click()
        path = page.download(ExportFormat.JPEG)

        assert path.suffix == ".jpg"
        assert path.name.startswith("linkedin-post-")
        with Image.open(path) as img:
            assert img.size == (1200, 1200)
        assert "Design downloaded as JPEG!" in get_toast_manager().messages

    def test_download_failure(self, qtbot, offline_auth, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        page = DesignerPage(offline_auth, blocker)
        qtbot.addWidget(page)

        assert page.download(ExportFormat.PNG) is None
        assert not any("downloaded" in m for m in get_toast_manager().messages)


class TestAccessCheck:
    """访问校验测试."""

    def test_no_token_redirects_to_login(self, qtbot, page):
        with qtbot.waitSignal(page.navigate_requested, timeout=5000) as blocker:
            page.on_enter()
            assert page.overlay.text == "Verifying access..."

        assert blocker.args == [Page.LOGIN, 1500]
        assert not page.overlay.is_active
        assert "Please login to access the designer" in get_toast_manager().messages

    def test_approved_shows_welcome(self, qtbot, make_auth_service, logged_in, tmp_path):
        service, _ = make_auth_service(
            lambda request: httpx.Response(200, json={"success": True, "canAccess": True})
        )
        page = DesignerPage(service, tmp_path)
        qtbot.addWidget(page)

        page.on_enter()
        qtbot.waitUntil(
            lambda: "Welcome back, Ada!" in get_toast_manager().messages, timeout=5000
        )
        assert not page.overlay.is_active
