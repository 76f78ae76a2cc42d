"""设计状态容器.

持有当前 DesignState 和最近一次渲染结果。所有修改都通过这里进行，
每次修改后立即同步重绘并通知监听者（预览控件）。
"""

from __future__ import annotations

from typing import Callable, Optional

from PIL import Image

from src.models.design_state import (
    DesignState,
    NudgeDirection,
    TextAlign,
    TextField,
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
    CanvasSize,
    DesignMode,
    Template,
    find_template,
    get_dimensions,
    get_templates,
)
from src.services.design_renderer import DesignRenderer
from src.utils.exceptions import InvalidTemplateError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

# 监听者签名：(新状态, 渲染结果)
RenderListener = Callable[[DesignState, Image.Image], None]


class DesignStore:
    """设计状态容器.

    Example:
        >>> store = DesignStore()
        >>> store.set_mode(DesignMode.POST)
        >>> store.image.size
        (1200, 1200)
    """

    def __init__(
        self,
        renderer: Optional[DesignRenderer] = None,
        state: Optional[DesignState] = None,
    ) -> None:
        """初始化并完成首次渲染.

        Args:
            renderer: 渲染器，默认新建
            state: 初始状态，默认 DesignState()
        """
        self._renderer = renderer or DesignRenderer()
        self._state = state or DesignState()
        self._listeners: list[RenderListener] = []
        self._render_count = 0
        self._image = self._render()

    # ===================
    # 只读属性
    # ===================
    @property
    def state(self) -> DesignState:
        return self._state

    @property
    def image(self) -> Image.Image:
        """最近一次渲染结果."""
        return self._image

    @property
    def render_count(self) -> int:
        return self._render_count

    @property
    def mode(self) -> DesignMode:
        return self._state.mode

    @property
    def templates(self) -> tuple[Template, ...]:
        """当前模式的模板列表."""
        return get_templates(self._state.mode)

    @property
    def active_template_id(self) -> int:
        """模板选择器中唯一高亮的模板."""
        return self._state.template_id

    @property
    def canvas_size(self) -> CanvasSize:
        return get_dimensions(self._state.mode)

    @property
    def display_size(self) -> tuple[int, int]:
        """预览尺寸（已乘显示缩放）."""
        return self.canvas_size.display_size

    # ===================
    # 监听
    # ===================
    def add_listener(self, listener: RenderListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: RenderListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ===================
    # 渲染
    # ===================
    def _render(self) -> Image.Image:
        self._render_count += 1
        return self._renderer.render(self._state)

    def render(self) -> Image.Image:
        """强制重绘并通知监听者."""
        self._image = self._render()
        self._notify()
        return self._image

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state, self._image)
            except Exception as e:
                logger.exception(f"渲染监听回调异常: {e}")

    def _commit(self, state: DesignState) -> None:
        self._state = state
        self.render()

    # ===================
    # 修改操作
    # ===================
    def set_mode(self, mode: DesignMode) -> None:
        """切换模式；同一模式不做任何事（不重绘）."""
        mode = DesignMode(mode)
        if mode == self._state.mode:
            return
        logger.debug(f"切换设计模式: {self._state.mode.value} -> {mode.value}")
        self._commit(set_mode(self._state, mode))

    def select_template(self, template: Template | int) -> None:
        """选择模板（模板对象或当前模式下的模板 id）.

        Raises:
            InvalidTemplateError: 模板不属于当前模式
        """
        if isinstance(template, int):
            found = find_template(self._state.mode, template)
            if found is None:
                raise InvalidTemplateError(template, self._state.mode.value)
            template = found
        self._commit(select_template(self._state, template))

    def apply_theme(self, name: str) -> None:
        self._commit(apply_theme(self._state, name))

    def set_text(self, field: TextField, value: str) -> None:
        self._commit(set_text(self._state, field, value))

    def set_font_size(self, field: TextField, px: int) -> None:
        self._commit(set_font_size(self._state, field, px))

    def set_font_family(self, stack: str) -> None:
        self._commit(set_font_family(self._state, stack))

    def set_alignment(self, align: TextAlign) -> None:
        self._commit(set_alignment(self._state, align))

    def nudge(self, direction: NudgeDirection) -> None:
        self._commit(nudge(self._state, direction))
