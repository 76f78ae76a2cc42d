"""数据模型模块."""

from src.models.design_state import (
    # 枚举
    NudgeDirection,
    TextAlign,
    TextField,
    # 状态
    DesignState,
    Theme,
    # 转换
    apply_theme,
    nudge,
    select_template,
    set_alignment,
    set_font_family,
    set_font_size,
    set_mode,
    set_text,
)
from src.models.design_template import (
    DIMENSIONS,
    CanvasSize,
    DesignMode,
    Template,
    find_template,
    get_dimensions,
    get_templates,
)
from src.models.session import (
    PAYMENT_METHODS,
    PaymentMethod,
    PendingRegistration,
    UserInfo,
    UserStatus,
)

__all__ = [
    # 枚举
    "DesignMode",
    "NudgeDirection",
    "TextAlign",
    "TextField",
    # 状态
    "DesignState",
    "Theme",
    # 模板与尺寸
    "CanvasSize",
    "DIMENSIONS",
    "Template",
    "find_template",
    "get_dimensions",
    "get_templates",
    # 转换
    "apply_theme",
    "nudge",
    "select_template",
    "set_alignment",
    "set_font_family",
    "set_font_size",
    "set_mode",
    "set_text",
    # 会话
    "PAYMENT_METHODS",
    "PaymentMethod",
    "PendingRegistration",
    "UserInfo",
    "UserStatus",
]
