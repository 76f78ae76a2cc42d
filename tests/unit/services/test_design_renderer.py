"""设计渲染引擎单元测试."""

import pytest
from PIL import Image

from src.models.design_state import (
    DesignState,
    NudgeDirection,
    TextAlign,
    TextField,
    apply_theme,
    nudge,
    set_alignment,
    set_mode,
    set_text,
)
from src.models.design_template import DesignMode
from src.services.design_renderer import (
    DesignRenderer,
    anchor_x,
    compute_layout,
    decoration_color,
    find_font,
    linear_gradient,
    parse_font_stack,
    render_design,
    text_colors,
)


@pytest.fixture
def renderer():
    return DesignRenderer()


# ===================
# 字体
# ===================


class TestFonts:
    """字体查找测试."""

    def test_parse_font_stack(self):
        assert parse_font_stack("'Segoe UI', sans-serif") == ["Segoe UI", "sans-serif"]
        assert parse_font_stack('"Courier New", monospace') == ["Courier New", "monospace"]
        assert parse_font_stack(" , Arial ,") == ["Arial"]

    def test_find_font_always_returns_font(self):
        """找不到任何字体时回退到内置字体."""
        font = find_font("'No Such Font Family', nonexistent-family", 24)
        assert font is not None
        assert font.getbbox("Hello") is not None


# ===================
# 布局
# ===================


class TestLayout:
    """布局计算测试."""

    def test_default_banner_layout(self, design_state):
        """默认横幅：标题基线 (792, 178)，副标题基线 (792, 234)."""
        layout = compute_layout(design_state)
        assert layout.anchor == (792, 198)
        assert layout.headline_origin == (792, 178)
        assert layout.subtext_origin == (792, 234)
        assert layout.text_anchor == "ms"

    def test_post_layout(self, design_state):
        layout = compute_layout(set_mode(design_state, DesignMode.POST))
        assert layout.anchor == (600, 600)
        assert layout.headline_origin == (600, 580)
        assert layout.subtext_origin == (600, 636)

    def test_offsets_shift_anchor(self, design_state):
        state = nudge(nudge(design_state, NudgeDirection.RIGHT), NudgeDirection.DOWN)
        layout = compute_layout(state)
        assert layout.anchor == (802, 208)

    @pytest.mark.parametrize(
        "align,x,text_anchor",
        [
            (TextAlign.LEFT, 100, "ls"),
            (TextAlign.CENTER, 792, "ms"),
            (TextAlign.RIGHT, 1484, "rs"),
        ],
    )
    def test_alignment(self, design_state, align, x, text_anchor):
        layout = compute_layout(set_alignment(design_state, align))
        assert layout.anchor[0] == x
        assert layout.text_anchor == text_anchor

    def test_left_inset_independent_of_width(self):
        assert anchor_x(TextAlign.LEFT, 1584, 0) == anchor_x(TextAlign.LEFT, 1200, 0) == 100

    def test_right_alignment_with_offset(self):
        assert anchor_x(TextAlign.RIGHT, 1200, -20) == 1080


class TestContrast:
    """文字对比度测试."""

    def test_white_background_dark_text(self):
        headline, subtext = text_colors("#ffffff")
        assert headline == (31, 41, 55, 255)
        assert subtext == (107, 114, 128, 255)

    def test_colored_background_white_text(self):
        headline, subtext = text_colors("#0077b5")
        assert headline == (255, 255, 255, 255)
        assert subtext == (255, 255, 255, 230)

    def test_near_white_still_white_text(self):
        """只有纯白切换深色文字."""
        headline, _ = text_colors("#f3f4f6")
        assert headline == (255, 255, 255, 255)

    def test_decoration_colors(self):
        assert decoration_color(DesignMode.BANNER, "#ffffff") == (0, 0, 0, 26)
        assert decoration_color(DesignMode.BANNER, "#0077b5") == (255, 255, 255, 51)
        assert decoration_color(DesignMode.POST, "#0077b5") == (255, 255, 255, 76)

    def test_layout_uses_theme(self, design_state):
        layout = compute_layout(apply_theme(design_state, "light"))
        assert layout.headline_color[:3] == (31, 41, 55)


# ===================
# 渐变
# ===================


class TestGradient:
    """渐变测试."""

    def test_endpoints(self):
        image = linear_gradient((1584, 396), "#0077b5", "#00a0dc")
        assert image.getpixel((0, 0)) == (0, 119, 181, 255)
        assert image.getpixel((1583, 395)) == (0, 160, 220, 255)

    def test_monotonic_along_diagonal(self):
        image = linear_gradient((200, 200), "#000000", "#ffffff")
        values = [image.getpixel((i, i))[0] for i in range(0, 200, 20)]
        assert values == sorted(values)

    def test_opaque(self):
        image = linear_gradient((64, 32), "#6366f1", "#8b5cf6")
        assert image.mode == "RGBA"
        assert image.getextrema()[3] == (255, 255)


# ===================
# 渲染
# ===================


class TestRender:
    """完整渲染测试."""

    def test_banner_size(self, renderer, design_state):
        image = renderer.render(design_state)
        assert image.size == (1584, 396)
        assert image.mode == "RGBA"

    def test_post_size(self, renderer, design_state):
        image = renderer.render(set_mode(design_state, DesignMode.POST))
        assert image.size == (1200, 1200)

    def test_idempotent(self, renderer, design_state):
        """同一状态渲染两次结果逐像素一致."""
        first = renderer.render(design_state)
        second = renderer.render(design_state)
        assert first.tobytes() == second.tobytes()

    def test_corner_pixels(self, renderer, design_state):
        image = renderer.render(design_state)
        assert image.getpixel((0, 0)) == (0, 119, 181, 255)
        r, g, b, a = image.getpixel((1583, 395))
        assert (r, g, b, a) == (0, 160, 220, 255)

    def test_text_is_drawn(self, renderer, design_state):
        empty = set_text(set_text(design_state, TextField.HEADLINE, ""), TextField.SUBTEXT, "")
        assert renderer.render(design_state).tobytes() != renderer.render(empty).tobytes()

    def test_empty_text_leaves_background(self, renderer, design_state):
        """空文字时文字区域只剩渐变."""
        empty = set_text(set_text(design_state, TextField.HEADLINE, ""), TextField.SUBTEXT, "")
        image = renderer.render(empty)
        gradient = linear_gradient((1584, 396), "#0077b5", "#00a0dc")
        box = (600, 150, 1000, 250)
        assert image.crop(box).tobytes() == gradient.crop(box).tobytes()

    def test_state_not_mutated(self, renderer, design_state):
        before = design_state.model_dump()
        renderer.render(design_state)
        assert design_state.model_dump() == before

    def test_banner_accent_lines(self, renderer, design_state):
        image = renderer.render(design_state)
        gradient = linear_gradient((1584, 396), "#0077b5", "#00a0dc")
        # 左上短横线位于 y=50，白色 20% 叠加后更亮
        assert any(
            image.getpixel((100, y))[0] > gradient.getpixel((100, y))[0] for y in (49, 50, 51)
        )

    def test_post_border(self, renderer, design_state):
        image = renderer.render(set_mode(design_state, DesignMode.POST))
        gradient = linear_gradient((1200, 1200), "#0077b5", "#00a0dc")
        assert image.getpixel((31, 600))[0] > gradient.getpixel((31, 600))[0] + 50
        assert image.getpixel((15, 600)) == gradient.getpixel((15, 600))

    def test_light_theme_dark_decoration(self, renderer, design_state):
        image = renderer.render(apply_theme(design_state, "light"))
        gradient = linear_gradient((1584, 396), "#ffffff", "#f3f4f6")
        assert image.getpixel((0, 0)) == (255, 255, 255, 255)
        assert any(
            image.getpixel((100, y))[0] < gradient.getpixel((100, y))[0] for y in (49, 50, 51)
        )

    def test_render_design_helper(self, design_state):
        assert isinstance(render_design(design_state), Image.Image)
