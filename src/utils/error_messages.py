"""用户友好的错误消息.

把异常和 HTTP 状态码转换为界面上展示的提示文案。
界面文案保持英文，与线上网页版一致。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.utils.exceptions import (
    ApiRequestError,
    AppException,
    ConfigError,
    ExportError,
    NetworkError,
    StorageError,
    ValidationError,
)

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection and try again."


class ErrorSeverity(str, Enum):
    """错误严重级别."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class UserFriendlyError:
    """用户友好的错误信息.

    Attributes:
        title: 错误标题
        message: 错误描述
        severity: 错误严重级别
        error_code: 错误代码
        details: 详细技术信息（可选，用于调试）
    """

    title: str
    message: str
    severity: ErrorSeverity
    error_code: str
    details: Optional[str] = None


# HTTP 状态码 -> 提示文案
HTTP_STATUS_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    401: "Unauthorized. Please login again.",
    403: "Access denied",
    404: "Resource not found",
    500: "Server error. Please try again later.",
}


def api_error_message(
    status_code: Optional[int],
    server_message: Optional[str] = None,
    default: str = "An error occurred",
) -> str:
    """根据 HTTP 状态码给出提示文案.

    400 和未知状态码优先使用服务端返回的 message。

    Args:
        status_code: HTTP 状态码，None 表示请求根本没有发出去
        server_message: 服务端返回的 message 字段
        default: 兜底文案

    Returns:
        提示文案
    """
    if status_code is None:
        return "Network error. Please check your connection."
    if status_code == 400:
        return server_message or HTTP_STATUS_MESSAGES[400]
    if status_code in HTTP_STATUS_MESSAGES:
        return HTTP_STATUS_MESSAGES[status_code]
    return server_message or default


def get_user_friendly_error(
    exception: Exception,
    include_details: bool = False,
) -> UserFriendlyError:
    """将异常转换为用户友好的错误信息.

    Args:
        exception: 异常对象
        include_details: 是否附带技术细节

    Returns:
        UserFriendlyError 对象
    """
    details = str(exception) if include_details else None

    if isinstance(exception, ValidationError):
        return UserFriendlyError(
            "Invalid input", exception.message, ErrorSeverity.WARNING, exception.code, details
        )
    if isinstance(exception, NetworkError):
        return UserFriendlyError(
            "Network error", NETWORK_ERROR_MESSAGE, ErrorSeverity.ERROR, exception.code, details
        )
    if isinstance(exception, ApiRequestError):
        return UserFriendlyError(
            "Request failed",
            api_error_message(exception.status_code),
            ErrorSeverity.ERROR,
            exception.code,
            details,
        )
    if isinstance(exception, ExportError):
        return UserFriendlyError(
            "Export failed", exception.message, ErrorSeverity.ERROR, exception.code, details
        )
    if isinstance(exception, StorageError):
        return UserFriendlyError(
            "Storage error",
            "Could not read or write local session data.",
            ErrorSeverity.ERROR,
            exception.code,
            details,
        )
    if isinstance(exception, ConfigError):
        return UserFriendlyError(
            "Configuration error",
            "Invalid application settings. Check your .env file.",
            ErrorSeverity.CRITICAL,
            exception.code,
            details,
        )
    if isinstance(exception, AppException):
        return UserFriendlyError(
            "Error", exception.message, ErrorSeverity.ERROR, exception.code, details
        )
    if isinstance(exception, OSError):
        if "No space left" in str(exception):
            return UserFriendlyError(
                "Disk full",
                "There is not enough disk space to save the file.",
                ErrorSeverity.CRITICAL,
                "DISK_FULL",
                details,
            )
        if "Permission denied" in str(exception):
            return UserFriendlyError(
                "Permission denied",
                "You do not have permission to write to this location.",
                ErrorSeverity.ERROR,
                "PERMISSION_DENIED",
                details,
            )
    return UserFriendlyError(
        "Unexpected error",
        "Something went wrong. Please try again.",
        ErrorSeverity.ERROR,
        "UNKNOWN_ERROR",
        details,
    )
