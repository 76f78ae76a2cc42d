"""设计模式、画布尺寸与预设模板.

Features:
    - 横幅 / 帖子两种设计模式
    - 每种模式固定的导出尺寸与预览缩放
    - 每种模式一组渐变预设模板
    - 主题按钮预设
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.constants import (
    BANNER_DISPLAY_SCALE,
    BANNER_HEIGHT,
    BANNER_WIDTH,
    POST_DISPLAY_SCALE,
    POST_HEIGHT,
    POST_WIDTH,
)

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


# ===================
# 枚举定义
# ===================


class DesignMode(str, Enum):
    """设计模式.

    枚举值会出现在导出文件名中（linkedin-cover-xxx.png）。
    """

    BANNER = "cover"  # 个人主页横幅
    POST = "post"  # 帖子配图

    @property
    def label(self) -> str:
        return {DesignMode.BANNER: "Cover Banner", DesignMode.POST: "Post"}[self]


# ===================
# 画布尺寸
# ===================


class CanvasSize(BaseModel):
    """画布尺寸.

    Attributes:
        width: 导出宽度（像素）
        height: 导出高度（像素）
        display_scale: 界面预览缩放比例，不影响导出
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=1)
    height: int = Field(ge=1)
    display_scale: float = Field(default=1.0, gt=0)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def display_size(self) -> tuple[int, int]:
        """预览控件尺寸."""
        return (
            int(self.width * self.display_scale),
            int(self.height * self.display_scale),
        )

    @property
    def label(self) -> str:
        return f"{self.width} × {self.height}"


DIMENSIONS: dict[DesignMode, CanvasSize] = {
    DesignMode.BANNER: CanvasSize(
        width=BANNER_WIDTH, height=BANNER_HEIGHT, display_scale=BANNER_DISPLAY_SCALE
    ),
    DesignMode.POST: CanvasSize(
        width=POST_WIDTH, height=POST_HEIGHT, display_scale=POST_DISPLAY_SCALE
    ),
}


def get_dimensions(mode: DesignMode) -> CanvasSize:
    """获取模式对应的画布尺寸."""
    return DIMENSIONS[mode]


# ===================
# 模板
# ===================


class Template(BaseModel):
    """渐变预设模板（不可变）.

    Attributes:
        id: 模板 ID，在所属模式内唯一，从 1 开始
        name: 显示名称
        gradient: 渐变起止颜色
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    name: str
    gradient: tuple[str, str]

    @field_validator("gradient")
    @classmethod
    def validate_gradient(cls, v: tuple[str, str]) -> tuple[str, str]:
        for color in v:
            if not re.match(HEX_COLOR_PATTERN, color):
                raise ValueError(f"无效的颜色值: {color}")
        return (v[0].lower(), v[1].lower())

    @property
    def css_gradient(self) -> str:
        """135 度 CSS 渐变，用于模板按钮背景."""
        return f"linear-gradient(135deg, {self.gradient[0]}, {self.gradient[1]})"


PROFESSIONAL_GRADIENT = ("#0077b5", "#00a0dc")
MODERN_GRADIENT = ("#6366f1", "#8b5cf6")
ELEGANT_GRADIENT = ("#1f2937", "#374151")
VIBRANT_GRADIENT = ("#f43f5e", "#fb923c")
SUCCESS_GRADIENT = ("#10b981", "#059669")
MINIMAL_GRADIENT = ("#ffffff", "#f3f4f6")

BANNER_TEMPLATES: tuple[Template, ...] = (
    Template(id=1, name="Professional", gradient=PROFESSIONAL_GRADIENT),
    Template(id=2, name="Modern", gradient=MODERN_GRADIENT),
    Template(id=3, name="Elegant", gradient=ELEGANT_GRADIENT),
    Template(id=4, name="Vibrant", gradient=VIBRANT_GRADIENT),
    Template(id=5, name="Success", gradient=SUCCESS_GRADIENT),
    Template(id=6, name="Minimal", gradient=MINIMAL_GRADIENT),
)

POST_TEMPLATES: tuple[Template, ...] = (
    Template(id=1, name="Bold", gradient=PROFESSIONAL_GRADIENT),
    Template(id=2, name="Creative", gradient=MODERN_GRADIENT),
    Template(id=3, name="Classic", gradient=ELEGANT_GRADIENT),
    Template(id=4, name="Energetic", gradient=VIBRANT_GRADIENT),
)

TEMPLATES: dict[DesignMode, tuple[Template, ...]] = {
    DesignMode.BANNER: BANNER_TEMPLATES,
    DesignMode.POST: POST_TEMPLATES,
}


def get_templates(mode: DesignMode) -> tuple[Template, ...]:
    """获取模式对应的模板列表."""
    return TEMPLATES[mode]


def find_template(mode: DesignMode, template_id: int) -> Template | None:
    """按 ID 查找当前模式下的模板."""
    for template in TEMPLATES[mode]:
        if template.id == template_id:
            return template
    return None


# ===================
# 主题按钮
# ===================

DEFAULT_THEME_NAME = "professional"

# 主题按钮只区分白色背景和其它背景
THEME_PRESETS: dict[str, tuple[str, str]] = {
    "light": MINIMAL_GRADIENT,
    DEFAULT_THEME_NAME: PROFESSIONAL_GRADIENT,
}


def theme_colors(name: str) -> tuple[str, str]:
    """主题名 -> 渐变颜色，未知主题回退到 professional."""
    return THEME_PRESETS.get(name, THEME_PRESETS[DEFAULT_THEME_NAME])
