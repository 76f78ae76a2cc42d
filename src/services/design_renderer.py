"""设计渲染引擎.

根据 DesignState 从零绘制一张完整的画布，每次调用都重新生成，
结果只取决于状态和固定的尺寸表。

渲染顺序:
    1. 透明底的空画布
    2. 左上 -> 右下的对角线性渐变
    3. 标题（粗体，锚点上方 20px）
    4. 副标题（常规，锚点下方 headline_size px）
    5. 模式装饰：横幅两条角线，帖子内嵌边框
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional

from PIL import Image, ImageChops, ImageDraw, ImageFont

from src.models.design_state import DesignState, TextAlign
from src.models.design_template import CanvasSize, DesignMode, get_dimensions
from src.utils.constants import (
    ALIGN_INSET,
    DARK_TEXT_COLOR,
    HEADLINE_RISE,
    MUTED_TEXT_COLOR,
    WHITE,
)
from src.utils.helpers import alpha, hex_to_rgb
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

RGBA = tuple[int, int, int, int]
Point = tuple[float, float]


# ===================
# 常量定义
# ===================

# 字体搜索路径
FONT_SEARCH_PATHS = [
    "/System/Library/Fonts/",
    "/System/Library/Fonts/Supplemental/",
    "/Library/Fonts/",
    "~/Library/Fonts/",
    "C:/Windows/Fonts/",
    "/usr/share/fonts/",
    "/usr/share/fonts/truetype/",
    "/usr/share/fonts/truetype/dejavu/",
    "/usr/share/fonts/truetype/liberation/",
]

# 常见字体名 -> (常规, 粗体) 文件名候选
KNOWN_FONT_FILES: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "segoe ui": (("segoeui.ttf", "Segoe UI.ttf"), ("segoeuib.ttf", "Segoe UI Bold.ttf")),
    "arial": (("Arial.ttf", "arial.ttf"), ("Arial Bold.ttf", "arialbd.ttf")),
    "georgia": (("Georgia.ttf", "georgia.ttf"), ("Georgia Bold.ttf", "georgiab.ttf")),
    "times new roman": (
        ("Times New Roman.ttf", "times.ttf"),
        ("Times New Roman Bold.ttf", "timesbd.ttf"),
    ),
    "courier new": (("Courier New.ttf", "cour.ttf"), ("Courier New Bold.ttf", "courbd.ttf")),
    "sans-serif": (
        ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "arial.ttf"),
        ("DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf"),
    ),
    "serif": (
        ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times New Roman.ttf", "times.ttf"),
        ("DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf", "timesbd.ttf"),
    ),
    "monospace": (
        ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf", "cour.ttf"),
        ("DejaVuSansMono-Bold.ttf", "LiberationMono-Bold.ttf", "courbd.ttf"),
    ),
}

# 装饰线
BANNER_ACCENT_INSET = 50
BANNER_ACCENT_LENGTH = 100
BANNER_ACCENT_WIDTH = 2
POST_BORDER_INSET = 30
POST_BORDER_WIDTH = 3

# Pillow 文字锚点：水平对齐 + 字母基线
TEXT_ANCHORS = {
    TextAlign.LEFT: "ls",
    TextAlign.CENTER: "ms",
    TextAlign.RIGHT: "rs",
}


# ===================
# 字体管理
# ===================


def parse_font_stack(stack: str) -> list[str]:
    """拆分 CSS 字体栈.

    Args:
        stack: 如 "'Segoe UI', sans-serif"

    Returns:
        去掉引号的字体名列表
    """
    families = []
    for part in stack.split(","):
        name = part.strip().strip("'\"").strip()
        if name:
            families.append(name)
    return families


def _search_font_file(candidates: tuple[str, ...] | list[str], size: int) -> Optional[ImageFont.FreeTypeFont]:
    for search_path in FONT_SEARCH_PATHS:
        expanded_path = os.path.expanduser(search_path)
        if not os.path.isdir(expanded_path):
            continue
        for filename in candidates:
            font_path = os.path.join(expanded_path, filename)
            if os.path.exists(font_path):
                try:
                    return ImageFont.truetype(font_path, size)
                except OSError:
                    continue
    return None


def _load_family(family: str, size: int, bold: bool) -> Optional[ImageFont.FreeTypeFont]:
    """加载单个字体族."""
    known = KNOWN_FONT_FILES.get(family.lower())
    if known:
        regular, bold_files = known
        candidates = bold_files + regular if bold else regular
        font = _search_font_file(candidates, size)
        if font:
            return font

    # 直接按名称加载（系统字体目录由 FreeType 自行查找）
    variants = [f"{family} Bold", f"{family}-Bold", family] if bold else [family]
    for variant in variants:
        for name in (variant, f"{variant}.ttf", f"{variant}.otf", f"{variant}.ttc"):
            try:
                return ImageFont.truetype(name, size)
            except OSError:
                continue

    return _search_font_file(
        [f"{v}{ext}" for v in variants for ext in (".ttf", ".otf", ".ttc")], size
    )


@lru_cache(maxsize=64)
def find_font(stack: str, size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    """按字体栈顺序查找可用字体.

    Args:
        stack: CSS 字体栈
        size: 字号（像素）
        bold: 是否粗体

    Returns:
        第一个可加载的字体，全部失败时回退到 Pillow 内置字体
    """
    size = max(1, int(size))
    for family in parse_font_stack(stack):
        font = _load_family(family, size, bold)
        if font is not None:
            return font

    logger.debug(f"字体栈 '{stack}' 无可用字体，使用内置字体")
    return ImageFont.load_default(size)


# ===================
# 布局计算
# ===================


@dataclass(frozen=True)
class TextLayout:
    """一次渲染的文字布局（纯计算结果）.

    Attributes:
        anchor: 文字锚点 (x, y)
        headline_origin: 标题基线位置
        subtext_origin: 副标题基线位置
        text_anchor: Pillow 锚点字符串
        headline_color: 标题颜色
        subtext_color: 副标题颜色
        decoration_color: 装饰线颜色
    """

    anchor: Point
    headline_origin: Point
    subtext_origin: Point
    text_anchor: str
    headline_color: RGBA
    subtext_color: RGBA
    decoration_color: RGBA


def _rgba(hex_color: str, opacity: float = 1.0) -> RGBA:
    return (*hex_to_rgb(hex_color), alpha(opacity))


def anchor_x(alignment: TextAlign, width: int, offset_x: int) -> float:
    """水平锚点.

    居中为画布中线；左/右对齐距边缘固定 100px，与画布宽度无关（左）。
    """
    if alignment == TextAlign.LEFT:
        return ALIGN_INSET + offset_x
    if alignment == TextAlign.RIGHT:
        return width - ALIGN_INSET + offset_x
    return width / 2 + offset_x


def text_colors(primary: str) -> tuple[RGBA, RGBA]:
    """对比度规则：纯白背景用深色文字，其它一律白色文字."""
    if primary.lower() == WHITE:
        return _rgba(DARK_TEXT_COLOR), _rgba(MUTED_TEXT_COLOR)
    return _rgba(WHITE), _rgba(WHITE, 0.9)


def decoration_color(mode: DesignMode, primary: str) -> RGBA:
    if primary.lower() == WHITE:
        return (0, 0, 0, alpha(0.1))
    return _rgba(WHITE, 0.2 if mode == DesignMode.BANNER else 0.3)


def compute_layout(state: DesignState, canvas: Optional[CanvasSize] = None) -> TextLayout:
    """计算文字锚点与颜色.

    Args:
        state: 设计状态
        canvas: 画布尺寸，默认使用模式尺寸

    Returns:
        TextLayout
    """
    canvas = canvas or get_dimensions(state.mode)
    x = anchor_x(state.alignment, canvas.width, state.offset_x)
    y = canvas.height / 2 + state.offset_y
    headline_color, subtext_color = text_colors(state.theme.primary)
    return TextLayout(
        anchor=(x, y),
        headline_origin=(x, y - HEADLINE_RISE),
        subtext_origin=(x, y + state.headline_size),
        text_anchor=TEXT_ANCHORS[state.alignment],
        headline_color=headline_color,
        subtext_color=subtext_color,
        decoration_color=decoration_color(state.mode, state.theme.primary),
    )


# ===================
# 绘制
# ===================


def linear_gradient(size: tuple[int, int], start: str, end: str) -> Image.Image:
    """从左上角到右下角的线性渐变.

    像素 (x, y) 的插值位置 t = (x*w + y*h) / (w² + h²)，
    与浏览器 createLinearGradient(0, 0, w, h) 一致。

    Args:
        size: 画布尺寸
        start: 起点颜色（t=0）
        end: 终点颜色（t=1）

    Returns:
        RGBA 图片
    """
    w, h = size
    denom = w * w + h * h

    # t 可拆成 x 分量和 y 分量之和，分别生成一维渐变再相加
    xs = Image.new("L", (w, 1))
    xs.putdata([round(255 * x * w / denom) for x in range(w)])
    ys = Image.new("L", (1, h))
    ys.putdata([round(255 * y * h / denom) for y in range(h)])
    mask = ImageChops.add(
        xs.resize((w, h), Image.Resampling.NEAREST),
        ys.resize((w, h), Image.Resampling.NEAREST),
    )

    start_img = Image.new("RGBA", size, _rgba(start))
    end_img = Image.new("RGBA", size, _rgba(end))
    return Image.composite(end_img, start_img, mask)


def _composite(image: Image.Image, paint: Callable[[ImageDraw.ImageDraw], None]) -> Image.Image:
    """在透明图层上绘制后叠加到画布."""
    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    paint(ImageDraw.Draw(layer))
    return Image.alpha_composite(image, layer)


class DesignRenderer:
    """设计渲染器.

    Example:
        >>> renderer = DesignRenderer()
        >>> image = renderer.render(DesignState())
        >>> image.size
        (1584, 396)
    """

    def render(self, state: DesignState) -> Image.Image:
        """渲染完整画布.

        Args:
            state: 设计状态

        Returns:
            模式尺寸的 RGBA 图片
        """
        canvas = get_dimensions(state.mode)
        layout = compute_layout(state, canvas)

        image = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        image = Image.alpha_composite(
            image, linear_gradient(canvas.size, *state.theme.colors)
        )

        if state.headline_text:
            font = find_font(state.font_family, state.headline_size, bold=True)
            image = _composite(
                image,
                lambda draw: draw.text(
                    layout.headline_origin,
                    state.headline_text,
                    font=font,
                    fill=layout.headline_color,
                    anchor=layout.text_anchor,
                ),
            )

        if state.subtext_text:
            font = find_font(state.font_family, state.subtext_size, bold=False)
            image = _composite(
                image,
                lambda draw: draw.text(
                    layout.subtext_origin,
                    state.subtext_text,
                    font=font,
                    fill=layout.subtext_color,
                    anchor=layout.text_anchor,
                ),
            )

        if state.mode == DesignMode.BANNER:
            image = _composite(
                image, lambda draw: self._draw_banner_accents(draw, canvas, layout.decoration_color)
            )
        else:
            image = _composite(
                image, lambda draw: self._draw_post_border(draw, canvas, layout.decoration_color)
            )

        return image

    def _draw_banner_accents(
        self,
        draw: ImageDraw.ImageDraw,
        canvas: CanvasSize,
        color: RGBA,
    ) -> None:
        """左上、右下两条短横线."""
        inset = BANNER_ACCENT_INSET
        length = BANNER_ACCENT_LENGTH
        w, h = canvas.size
        draw.line(
            [(inset, inset), (inset + length, inset)],
            fill=color,
            width=BANNER_ACCENT_WIDTH,
        )
        draw.line(
            [(w - inset - length, h - inset), (w - inset, h - inset)],
            fill=color,
            width=BANNER_ACCENT_WIDTH,
        )

    def _draw_post_border(
        self,
        draw: ImageDraw.ImageDraw,
        canvas: CanvasSize,
        color: RGBA,
    ) -> None:
        """距四边 30px 的内嵌边框."""
        inset = POST_BORDER_INSET
        w, h = canvas.size
        draw.rectangle(
            [inset, inset, w - inset, h - inset],
            outline=color,
            width=POST_BORDER_WIDTH,
        )


# ===================
# 便捷函数
# ===================


def render_design(state: DesignState) -> Image.Image:
    """渲染设计（便捷函数）."""
    return DesignRenderer().render(state)
