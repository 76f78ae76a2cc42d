"""服务层模块."""

from src.services.api_client import ApiClient, ApiResponse
from src.services.auth_service import (
    AuthOutcome,
    AuthResult,
    AuthService,
    Notice,
    NoticeLevel,
    Page,
)
from src.services.design_renderer import (
    DesignRenderer,
    TextLayout,
    compute_layout,
    find_font,
    render_design,
)
from src.services.export_service import (
    ExportFormat,
    build_export_filename,
    encode_image,
    export_design,
    to_data_url,
)
from src.services.local_storage import LocalStorage, get_local_storage

__all__ = [
    # API 客户端
    "ApiClient",
    "ApiResponse",
    # 账号服务
    "AuthOutcome",
    "AuthResult",
    "AuthService",
    "Notice",
    "NoticeLevel",
    "Page",
    # 渲染
    "DesignRenderer",
    "TextLayout",
    "compute_layout",
    "find_font",
    "render_design",
    # 导出
    "ExportFormat",
    "build_export_filename",
    "encode_image",
    "export_design",
    "to_data_url",
    # 本地存储
    "LocalStorage",
    "get_local_storage",
]
