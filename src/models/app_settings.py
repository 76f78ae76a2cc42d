"""应用设置模型."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.constants import DEFAULT_API_BASE, DEFAULT_EXPORT_DIR, LOCAL_STORAGE_PATH


class Settings(BaseSettings):
    """应用设置.

    支持从环境变量和 .env 文件加载配置。

    Attributes:
        api_base_url: 后端 API 地址
        log_level: 日志级别
        storage_path: 本地存储文件路径
        export_dir: 导出图片目录
        debug: 调试模式
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE,
        description="后端 API 地址",
    )

    log_level: str = Field(
        default="INFO",
        description="日志级别",
    )

    storage_path: Optional[Path] = Field(
        default=None,
        description="本地存储文件路径",
    )

    export_dir: Optional[Path] = Field(
        default=None,
        description="导出图片目录",
    )

    debug: bool = Field(
        default=False,
        description="调试模式",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """验证日志级别."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"无效的日志级别: {v}，有效值: {valid_levels}")
        return upper_v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def local_storage_path(self) -> Path:
        return self.storage_path or LOCAL_STORAGE_PATH

    @property
    def export_directory(self) -> Path:
        return self.export_dir or DEFAULT_EXPORT_DIR
