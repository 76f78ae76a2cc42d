"""自定义异常类."""

from __future__ import annotations

from typing import Optional


class AppException(Exception):
    """应用基础异常类.

    所有自定义异常都应继承此类。

    Attributes:
        message: 错误消息（可直接展示给用户）
        code: 错误代码
    """

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# ===================
# 配置相关异常
# ===================
class ConfigError(AppException):
    """配置错误异常."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIG_ERROR")


# ===================
# 表单校验异常
# ===================
class ValidationError(AppException):
    """客户端校验失败.

    在发起任何网络请求之前抛出，message 即提示给用户的文案。

    Attributes:
        field: 出错的字段名（可选）
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message, "VALIDATION_ERROR")


# ===================
# API 相关异常
# ===================
class ApiError(AppException):
    """API 调用错误基类."""

    def __init__(self, message: str, code: str = "API_ERROR") -> None:
        super().__init__(message, code)


class ApiRequestError(ApiError):
    """服务端返回了无法解析的响应."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        msg = message
        if status_code:
            msg = f"API 请求失败 (HTTP {status_code}): {message}"
        super().__init__(msg, "API_REQUEST_ERROR")


class NetworkError(ApiError):
    """网络/传输层错误（连接失败、请求中断等）."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "NETWORK_ERROR")


# ===================
# 本地存储异常
# ===================
class StorageError(AppException):
    """本地存储读写失败."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "STORAGE_ERROR")


# ===================
# 设计/导出相关异常
# ===================
class InvalidTemplateError(AppException):
    """模板不属于当前模式."""

    def __init__(self, template_id: int, mode: str) -> None:
        self.template_id = template_id
        super().__init__(f"模板 {template_id} 不属于模式 '{mode}'", "INVALID_TEMPLATE")


class ExportError(AppException):
    """导出图片失败."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "EXPORT_ERROR")


class UnsupportedExportFormatError(ExportError):
    """不支持的导出格式."""

    def __init__(self, format: str) -> None:
        super().__init__(f"不支持的导出格式: {format}")
