"""设计器页面.

布局结构:
    ┌───────────────────────┬─────────────────────────────────────┐
    │  模式 / 模板 / 主题    │              预览画布               │
    │  文字 / 字体 / 字号    │                                     │
    │  对齐 / 位置           │   尺寸            下载 PNG / JPG     │
    └───────────────────────┴─────────────────────────────────────┘

进入页面时先校验设计器访问权限；所有控件操作直接修改 DesignStore，
由渲染回调刷新预览。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PIL import Image
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QButtonGroup,
    QComboBox,
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from src.core.design_store import DesignStore
from src.models.design_state import DesignState, NudgeDirection, TextAlign, TextField
from src.models.design_template import THEME_PRESETS, DesignMode, Template
from src.services.auth_service import AuthResult, AuthService, Page
from src.services.export_service import ExportFormat, export_design
from src.ui.pages.base_page import BasePage
from src.ui.widgets.design_preview import DesignPreview
from src.utils.constants import (
    FONT_FAMILIES,
    HEADLINE_SIZE_RANGE,
    SUBTEXT_SIZE_RANGE,
)
from src.utils.error_messages import get_user_friendly_error
from src.utils.exceptions import ExportError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

PANEL_WIDTH = 340
TEMPLATE_COLUMNS = 3

NUDGE_BUTTONS = (
    (NudgeDirection.UP, "↑", 0, 1),
    (NudgeDirection.LEFT, "←", 1, 0),
    (NudgeDirection.RESET, "⟲", 1, 1),
    (NudgeDirection.RIGHT, "→", 1, 2),
    (NudgeDirection.DOWN, "↓", 2, 1),
)

ALIGN_BUTTONS = (
    (TextAlign.LEFT, "Left"),
    (TextAlign.CENTER, "Center"),
    (TextAlign.RIGHT, "Right"),
)


def gradient_style(colors: tuple[str, str]) -> str:
    """渐变按钮样式（135 度，与画布方向一致），白色背景用深色文字."""
    start, end = colors
    text_color = "#1f2937" if start == "#ffffff" else "white"
    return (
        "QPushButton {"
        f" background: qlineargradient(x1:0, y1:0, x2:1, y2:1, stop:0 {start}, stop:1 {end});"
        " border: 2px solid transparent; border-radius: 6px; min-height: 48px;"
        f" color: {text_color}; font-weight: 600; }}"
        "QPushButton:checked { border: 2px solid #111827; }"
    )


class DesignerPage(BasePage):
    """设计器页面.

    Args:
        auth_service: 账号服务（访问校验）
        export_dir: 导出目录
        store: 设计状态容器，默认新建
        parent: 父组件
    """

    page = Page.DESIGNER

    def __init__(
        self,
        auth_service: AuthService,
        export_dir: Path,
        store: Optional[DesignStore] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(auth_service, parent)
        self._export_dir = Path(export_dir)
        self._store = store or DesignStore()
        self._template_buttons: dict[int, QPushButton] = {}
        self._template_group: Optional[QButtonGroup] = None
        self._template_mode = self._store.mode

        self._setup_ui()
        self._store.add_listener(self._on_rendered)
        self._rebuild_templates()
        self._on_rendered(self._store.state, self._store.image)

    @property
    def store(self) -> DesignStore:
        return self._store

    @property
    def export_dir(self) -> Path:
        return self._export_dir

    # ===================
    # 界面
    # ===================
    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(16)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        scroll.setFixedWidth(PANEL_WIDTH + 20)
        panel = QWidget()
        panel.setFixedWidth(PANEL_WIDTH)
        panel_layout = QVBoxLayout(panel)
        panel_layout.setSpacing(12)
        scroll.setWidget(panel)
        layout.addWidget(scroll)

        panel_layout.addWidget(self._create_mode_group())
        panel_layout.addWidget(self._create_template_group())
        panel_layout.addWidget(self._create_theme_group())
        panel_layout.addWidget(self._create_text_group())
        panel_layout.addWidget(self._create_align_group())
        panel_layout.addWidget(self._create_position_group())
        panel_layout.addStretch()

        layout.addWidget(self._create_canvas_area(), 1)

    def _create_mode_group(self) -> QGroupBox:
        group = QGroupBox("Design Type")
        row = QHBoxLayout(group)
        self._mode_group = QButtonGroup(self)
        self._mode_buttons: dict[DesignMode, QPushButton] = {}
        for mode in DesignMode:
            btn = QPushButton(mode.label)
            btn.setCheckable(True)
            btn.setChecked(mode == self._store.mode)
            btn.clicked.connect(lambda _checked, m=mode: self._store.set_mode(m))
            self._mode_group.addButton(btn)
            self._mode_buttons[mode] = btn
            row.addWidget(btn)
        return group

    def _create_template_group(self) -> QGroupBox:
        group = QGroupBox("Templates")
        self._template_grid = QGridLayout(group)
        self._template_grid.setSpacing(8)
        return group

    def _create_theme_group(self) -> QGroupBox:
        group = QGroupBox("Theme")
        row = QHBoxLayout(group)
        self._theme_group = QButtonGroup(self)
        self._theme_buttons: dict[str, QPushButton] = {}
        for name, colors in THEME_PRESETS.items():
            btn = QPushButton(name.title())
            btn.setCheckable(True)
            btn.setChecked(colors == self._store.state.theme.colors)
            btn.setStyleSheet(gradient_style(colors))
            btn.clicked.connect(lambda _checked, n=name: self._store.apply_theme(n))
            self._theme_group.addButton(btn)
            self._theme_buttons[name] = btn
            row.addWidget(btn)
        return group

    def _create_text_group(self) -> QGroupBox:
        group = QGroupBox("Text")
        layout = QVBoxLayout(group)
        state = self._store.state

        layout.addWidget(QLabel("Headline"))
        self._headline_input = QLineEdit(state.headline_text)
        self._headline_input.textChanged.connect(
            lambda text: self._store.set_text(TextField.HEADLINE, text)
        )
        layout.addWidget(self._headline_input)

        layout.addWidget(QLabel("Subtext"))
        self._subtext_input = QLineEdit(state.subtext_text)
        self._subtext_input.textChanged.connect(
            lambda text: self._store.set_text(TextField.SUBTEXT, text)
        )
        layout.addWidget(self._subtext_input)

        layout.addWidget(QLabel("Font"))
        self._font_combo = QComboBox()
        for stack in FONT_FAMILIES:
            self._font_combo.addItem(stack.split(",")[0].strip("'\" "), stack)
        index = self._font_combo.findData(state.font_family)
        self._font_combo.setCurrentIndex(max(index, 0))
        self._font_combo.currentIndexChanged.connect(
            lambda i: self._store.set_font_family(self._font_combo.itemData(i))
        )
        layout.addWidget(self._font_combo)

        self._headline_slider, self._headline_size_label = self._add_size_slider(
            layout, "Headline Size", TextField.HEADLINE, HEADLINE_SIZE_RANGE, state.headline_size
        )
        self._subtext_slider, self._subtext_size_label = self._add_size_slider(
            layout, "Subtext Size", TextField.SUBTEXT, SUBTEXT_SIZE_RANGE, state.subtext_size
        )
        return group

    def _add_size_slider(
        self,
        layout: QVBoxLayout,
        title: str,
        field: TextField,
        size_range: tuple[int, int],
        value: int,
    ) -> tuple[QSlider, QLabel]:
        header = QHBoxLayout()
        header.addWidget(QLabel(title))
        header.addStretch()
        value_label = QLabel(f"{value}px")
        header.addWidget(value_label)
        layout.addLayout(header)

        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(*size_range)
        slider.setValue(value)

        def on_change(px: int) -> None:
            value_label.setText(f"{px}px")
            self._store.set_font_size(field, px)

        slider.valueChanged.connect(on_change)
        layout.addWidget(slider)
        return slider, value_label

    def _create_align_group(self) -> QGroupBox:
        group = QGroupBox("Alignment")
        row = QHBoxLayout(group)
        self._align_group = QButtonGroup(self)
        self._align_buttons: dict[TextAlign, QPushButton] = {}
        for align, text in ALIGN_BUTTONS:
            btn = QPushButton(text)
            btn.setCheckable(True)
            btn.setChecked(align == self._store.state.alignment)
            btn.clicked.connect(lambda _checked, a=align: self._store.set_alignment(a))
            self._align_group.addButton(btn)
            self._align_buttons[align] = btn
            row.addWidget(btn)
        return group

    def _create_position_group(self) -> QGroupBox:
        group = QGroupBox("Position")
        grid = QGridLayout(group)
        self._nudge_buttons: dict[NudgeDirection, QPushButton] = {}
        for direction, text, grid_row, grid_col in NUDGE_BUTTONS:
            btn = QPushButton(text)
            btn.setFixedSize(40, 32)
            btn.setToolTip(direction.value.title())
            btn.clicked.connect(lambda _checked, d=direction: self._store.nudge(d))
            grid.addWidget(btn, grid_row, grid_col)
            self._nudge_buttons[direction] = btn
        return group

    def _create_canvas_area(self) -> QWidget:
        area = QWidget()
        layout = QVBoxLayout(area)
        layout.setContentsMargins(0, 0, 0, 0)

        preview_scroll = QScrollArea()
        preview_scroll.setWidgetResizable(True)
        preview_scroll.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview = DesignPreview()
        preview_scroll.setWidget(self._preview)
        layout.addWidget(preview_scroll, 1)

        footer = QHBoxLayout()
        self._dimensions_label = QLabel()
        self._dimensions_label.setStyleSheet("color: #6b7280;")
        footer.addWidget(self._dimensions_label)
        footer.addStretch()

        self._png_btn = QPushButton("Download PNG")
        self._png_btn.setObjectName("primaryButton")
        self._png_btn.clicked.connect(lambda: self.download(ExportFormat.PNG))
        footer.addWidget(self._png_btn)

        self._jpg_btn = QPushButton("Download JPG")
        self._jpg_btn.clicked.connect(lambda: self.download(ExportFormat.JPEG))
        footer.addWidget(self._jpg_btn)
        layout.addLayout(footer)
        return area

    def _rebuild_templates(self) -> None:
        """按当前模式重建模板按钮."""
        while self._template_grid.count():
            item = self._template_grid.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        if self._template_group is not None:
            self._template_group.deleteLater()

        self._template_group = QButtonGroup(self)
        self._template_buttons = {}
        for index, template in enumerate(self._store.templates):
            btn = QPushButton(template.name)
            btn.setCheckable(True)
            btn.setStyleSheet(gradient_style(template.gradient))
            btn.clicked.connect(lambda _checked, t=template: self._on_template_clicked(t))
            self._template_group.addButton(btn)
            self._template_buttons[template.id] = btn
            self._template_grid.addWidget(btn, index // TEMPLATE_COLUMNS, index % TEMPLATE_COLUMNS)
        self._sync_template_selection()
        self._template_mode = self._store.mode

    def _sync_template_selection(self) -> None:
        for template_id, btn in self._template_buttons.items():
            btn.setChecked(template_id == self._store.active_template_id)

    def _on_template_clicked(self, template: Template) -> None:
        self._store.select_template(template)

    def _sync_theme_selection(self, state: DesignState) -> None:
        """高亮与当前背景颜色一致的主题按钮，没有匹配时全部取消."""
        self._theme_group.setExclusive(False)
        for name, btn in self._theme_buttons.items():
            btn.setChecked(THEME_PRESETS[name] == state.theme.colors)
        self._theme_group.setExclusive(True)

    # ===================
    # 渲染回调
    # ===================
    def _on_rendered(self, state: DesignState, image: Image.Image) -> None:
        if self._template_mode != state.mode:
            self._rebuild_templates()
        else:
            self._sync_template_selection()
        self._mode_buttons[state.mode].setChecked(True)
        self._align_buttons[state.alignment].setChecked(True)
        self._sync_theme_selection(state)
        self._dimensions_label.setText(self._store.canvas_size.label)
        self._preview.update_preview(state, image)

    # ===================
    # 访问校验
    # ===================
    def on_enter(self) -> None:
        self.overlay.show_loading("Verifying access...")
        self.run_async(self._auth.check_design_access, self._on_access_checked)

    def _on_access_checked(self, result: AuthResult) -> None:
        self.overlay.hide_loading()
        self.apply_result(result)
        if result.redirect is not None:
            self.session_changed.emit()

    # ===================
    # 导出
    # ===================
    def download(self, fmt: ExportFormat) -> Optional[Path]:
        """导出当前画布.

        Returns:
            写入的文件路径，失败返回 None
        """
        try:
            path = export_design(self._store.image, self._store.mode, fmt, self._export_dir)
        except ExportError as e:
            self.toast.show_user_error(get_user_friendly_error(e))
            return None
        self.toast.show_success(f"Design downloaded as {fmt.value.upper()}!")
        return path
