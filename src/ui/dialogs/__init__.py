"""对话框模块."""

from src.ui.dialogs.notice_dialog import NoticeDialog

__all__ = [
    "NoticeDialog",
]
