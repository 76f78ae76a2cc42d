"""UI 组件模块."""

from src.ui.widgets.design_preview import DesignPreview, pil_to_qimage
from src.ui.widgets.loading_overlay import LoadingOverlay
from src.ui.widgets.toast_notification import (
    ToastManager,
    ToastNotification,
    ToastType,
    get_toast_manager,
    reset_toast_manager,
)

__all__ = [
    "DesignPreview",
    "LoadingOverlay",
    "ToastManager",
    "ToastNotification",
    "ToastType",
    "get_toast_manager",
    "pil_to_qimage",
    "reset_toast_manager",
]
