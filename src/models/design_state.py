"""设计状态模型与状态转换.

DesignState 描述一次编辑会话：模式、模板、主题、文字、字体、对齐和偏移。
所有转换函数都是纯函数，返回新的 DesignState，不修改入参，
由 DesignStore 负责持有状态并在每次转换后重新渲染。

Example:
    >>> state = DesignState()
    >>> state = nudge(state, NudgeDirection.RIGHT)
    >>> state.offset_x
    10
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.models.design_template import (
    HEX_COLOR_PATTERN,
    PROFESSIONAL_GRADIENT,
    DesignMode,
    Template,
    find_template,
    theme_colors,
)
from src.utils.constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_HEADLINE,
    DEFAULT_HEADLINE_SIZE,
    DEFAULT_SUBTEXT,
    DEFAULT_SUBTEXT_SIZE,
    NUDGE_STEP,
    WHITE,
)
from src.utils.exceptions import InvalidTemplateError


# ===================
# 枚举定义
# ===================


class TextAlign(str, Enum):
    """文字对齐方式."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TextField(str, Enum):
    """可编辑的文字字段."""

    HEADLINE = "headline"
    SUBTEXT = "subtext"


class NudgeDirection(str, Enum):
    """方向键."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RESET = "reset"


# 方向 -> (dx, dy)
NUDGE_VECTORS: dict[NudgeDirection, tuple[int, int]] = {
    NudgeDirection.UP: (0, -NUDGE_STEP),
    NudgeDirection.DOWN: (0, NUDGE_STEP),
    NudgeDirection.LEFT: (-NUDGE_STEP, 0),
    NudgeDirection.RIGHT: (NUDGE_STEP, 0),
}


# ===================
# 数据模型
# ===================


class Theme(BaseModel):
    """背景渐变主题.

    Attributes:
        colors: 渐变起止颜色，固定两个
    """

    model_config = ConfigDict(frozen=True)

    colors: tuple[str, str] = PROFESSIONAL_GRADIENT

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, v: tuple[str, str]) -> tuple[str, str]:
        for color in v:
            if not re.match(HEX_COLOR_PATTERN, color):
                raise ValueError(f"无效的颜色值: {color}")
        return (v[0].lower(), v[1].lower())

    @property
    def primary(self) -> str:
        return self.colors[0]

    @property
    def secondary(self) -> str:
        return self.colors[1]

    @property
    def is_light(self) -> bool:
        """起始颜色是否为纯白.

        只有纯白会切换到深色文字，其它浅色背景仍然使用白色文字。
        """
        return self.primary == WHITE


class DesignState(BaseModel):
    """设计会话状态.

    Attributes:
        mode: 设计模式
        template_id: 当前模板 ID
        theme: 背景主题
        headline_text: 标题文字
        subtext_text: 副标题文字
        headline_size: 标题字号（像素）
        subtext_size: 副标题字号（像素）
        font_family: 字体栈（CSS 写法）
        alignment: 对齐方式
        offset_x: 水平偏移
        offset_y: 垂直偏移
    """

    model_config = ConfigDict(frozen=True)

    mode: DesignMode = DesignMode.BANNER
    template_id: int = Field(default=1, ge=1)
    theme: Theme = Field(default_factory=Theme)
    headline_text: str = DEFAULT_HEADLINE
    subtext_text: str = DEFAULT_SUBTEXT
    headline_size: int = DEFAULT_HEADLINE_SIZE
    subtext_size: int = DEFAULT_SUBTEXT_SIZE
    font_family: str = DEFAULT_FONT_FAMILY
    alignment: TextAlign = TextAlign.CENTER
    offset_x: int = 0
    offset_y: int = 0

    @model_validator(mode="after")
    def validate_template_id(self) -> "DesignState":
        """模板 ID 必须属于当前模式的模板列表."""
        if find_template(self.mode, self.template_id) is None:
            raise ValueError(f"模板 {self.template_id} 不属于模式 {self.mode.value}")
        return self

    def text(self, field: TextField) -> str:
        if field == TextField.HEADLINE:
            return self.headline_text
        return self.subtext_text

    def font_size(self, field: TextField) -> int:
        if field == TextField.HEADLINE:
            return self.headline_size
        return self.subtext_size


# ===================
# 状态转换
# ===================


def set_mode(state: DesignState, mode: DesignMode) -> DesignState:
    """切换设计模式.

    同一模式直接返回原状态；否则模板回到 1，偏移清零。
    主题颜色保持不变。
    """
    mode = DesignMode(mode)
    if state.mode == mode:
        return state
    return state.model_copy(
        update={"mode": mode, "template_id": 1, "offset_x": 0, "offset_y": 0}
    )


def select_template(state: DesignState, template: Template) -> DesignState:
    """选择模板，并用模板渐变覆盖主题颜色.

    Raises:
        InvalidTemplateError: 模板不属于当前模式
    """
    if find_template(state.mode, template.id) != template:
        raise InvalidTemplateError(template.id, state.mode.value)
    return state.model_copy(
        update={"template_id": template.id, "theme": Theme(colors=template.gradient)}
    )


def apply_theme(state: DesignState, name: str) -> DesignState:
    """应用主题按钮预设，不改变当前模板."""
    return state.model_copy(update={"theme": Theme(colors=theme_colors(name))})


def set_text(state: DesignState, field: TextField, value: str) -> DesignState:
    """原样更新文字（允许空字符串）."""
    key = "headline_text" if field == TextField.HEADLINE else "subtext_text"
    return state.model_copy(update={key: value})


def set_font_size(state: DesignState, field: TextField, px: int) -> DesignState:
    """更新字号，范围由调用方（滑块）保证."""
    key = "headline_size" if field == TextField.HEADLINE else "subtext_size"
    return state.model_copy(update={key: int(px)})


def set_font_family(state: DesignState, stack: str) -> DesignState:
    return state.model_copy(update={"font_family": stack})


def set_alignment(state: DesignState, align: TextAlign) -> DesignState:
    return state.model_copy(update={"alignment": TextAlign(align)})


def nudge(state: DesignState, direction: NudgeDirection) -> DesignState:
    """按方向移动文字 10px，reset 把两个偏移清零."""
    direction = NudgeDirection(direction)
    if direction == NudgeDirection.RESET:
        return state.model_copy(update={"offset_x": 0, "offset_y": 0})
    dx, dy = NUDGE_VECTORS[direction]
    return state.model_copy(
        update={"offset_x": state.offset_x + dx, "offset_y": state.offset_y + dy}
    )
