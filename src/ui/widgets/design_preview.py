"""设计预览组件.

把渲染出的 Pillow 图片按模式的显示缩放贴到 QLabel 上。
"""

from __future__ import annotations

from typing import Optional

from PIL import Image
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

from src.models.design_state import DesignState
from src.models.design_template import get_dimensions
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


def pil_to_qimage(image: Image.Image) -> QImage:
    """Pillow 图片转 QImage（深拷贝，不依赖原缓冲区）."""
    rgba = image.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    qimage = QImage(
        data, rgba.width, rgba.height, rgba.width * 4, QImage.Format.Format_RGBA8888
    )
    return qimage.copy()


class DesignPreview(QWidget):
    """画布预览.

    Example:
        >>> preview = DesignPreview()
        >>> store.add_listener(preview.update_preview)
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._pixmap: Optional[QPixmap] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._image_label.setStyleSheet(
            "background-color: #f3f4f6; border: 1px solid #e5e7eb; border-radius: 8px;"
        )
        layout.addWidget(self._image_label, 0, Qt.AlignmentFlag.AlignCenter)

    @property
    def pixmap(self) -> Optional[QPixmap]:
        """当前显示的（已缩放）图像."""
        return self._pixmap

    def update_preview(self, state: DesignState, image: Image.Image) -> None:
        """渲染监听回调：按显示缩放更新预览."""
        display_w, display_h = get_dimensions(state.mode).display_size
        pixmap = QPixmap.fromImage(pil_to_qimage(image))
        if pixmap.width() != display_w or pixmap.height() != display_h:
            pixmap = pixmap.scaled(
                display_w,
                display_h,
                Qt.AspectRatioMode.IgnoreAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        self._pixmap = pixmap
        self._image_label.setFixedSize(display_w, display_h)
        self._image_label.setPixmap(pixmap)
        logger.debug(f"预览已更新: {display_w}x{display_h}")
