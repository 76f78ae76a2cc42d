"""设计预览组件单元测试."""

from __future__ import annotations

from PIL import Image

from src.models.design_state import set_mode
from src.models.design_template import DesignMode
from src.services.design_renderer import render_design
from src.ui.widgets.design_preview import DesignPreview, pil_to_qimage


class TestPilToQImage:
    """图片转换测试."""

    def test_size_and_pixel(self, qtbot) -> None:
        image = Image.new("RGBA", (8, 4), (0, 119, 181, 255))
        qimage = pil_to_qimage(image)
        assert (qimage.width(), qimage.height()) == (8, 4)
        color = qimage.pixelColor(0, 0)
        assert (color.red(), color.green(), color.blue()) == (0, 119, 181)


class TestDesignPreview:
    """DesignPreview 测试."""

    def test_banner_full_size(self, qtbot, design_state) -> None:
        preview = DesignPreview()
        qtbot.addWidget(preview)
        preview.update_preview(design_state, render_design(design_state))
        assert (preview.pixmap.width(), preview.pixmap.height()) == (1584, 396)

    def test_post_half_scale(self, qtbot, design_state) -> None:
        """帖子模式按 0.5 缩放显示."""
        preview = DesignPreview()
        qtbot.addWidget(preview)
        state = set_mode(design_state, DesignMode.POST)
        preview.update_preview(state, render_design(state))
        assert (preview.pixmap.width(), preview.pixmap.height()) == (600, 600)
