"""设计导出服务.

把渲染好的画布编码为 PNG / JPEG，生成文件名并写入导出目录。
"""

from __future__ import annotations

import base64
import io
from enum import Enum
from pathlib import Path
from typing import Optional

from PIL import Image

from src.models.design_template import DesignMode
from src.utils.constants import EXPORT_FILE_PREFIX, EXPORT_JPEG_QUALITY
from src.utils.exceptions import ExportError, UnsupportedExportFormatError
from src.utils.helpers import now_millis
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class ExportFormat(str, Enum):
    """导出格式."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def extension(self) -> str:
        return "jpg" if self == ExportFormat.JPEG else "png"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()

    @classmethod
    def parse(cls, value: str | "ExportFormat") -> "ExportFormat":
        """解析格式名，接受 png / jpeg / jpg."""
        if isinstance(value, ExportFormat):
            return value
        normalized = str(value).lower().lstrip(".")
        if normalized == "jpg":
            normalized = "jpeg"
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedExportFormatError(str(value)) from None


def build_export_filename(
    mode: DesignMode,
    fmt: ExportFormat,
    timestamp_ms: Optional[int] = None,
) -> str:
    """生成导出文件名.

    Args:
        mode: 设计模式
        fmt: 导出格式
        timestamp_ms: Unix 毫秒时间戳，默认当前时间

    Returns:
        如 linkedin-cover-1700000000000.png
    """
    if timestamp_ms is None:
        timestamp_ms = now_millis()
    return f"{EXPORT_FILE_PREFIX}-{mode.value}-{timestamp_ms}.{fmt.extension}"


def encode_image(image: Image.Image, fmt: ExportFormat) -> bytes:
    """按最高质量编码图片.

    JPEG 不支持透明通道，先合并为 RGB。

    Args:
        image: 渲染结果
        fmt: 导出格式

    Returns:
        编码后的字节
    """
    fmt = ExportFormat.parse(fmt)
    buffer = io.BytesIO()
    if fmt == ExportFormat.JPEG:
        image.convert("RGB").save(buffer, format="JPEG", quality=EXPORT_JPEG_QUALITY)
    else:
        image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(image: Image.Image, fmt: ExportFormat = ExportFormat.PNG) -> str:
    """编码为 data URL."""
    fmt = ExportFormat.parse(fmt)
    encoded = base64.b64encode(encode_image(image, fmt)).decode("ascii")
    return f"data:{fmt.mime_type};base64,{encoded}"


def export_design(
    image: Image.Image,
    mode: DesignMode,
    fmt: ExportFormat,
    directory: Path | str,
    timestamp_ms: Optional[int] = None,
) -> Path:
    """导出设计到目录.

    Args:
        image: 渲染结果
        mode: 设计模式（写入文件名）
        fmt: 导出格式
        directory: 导出目录，不存在时自动创建
        timestamp_ms: 文件名时间戳

    Returns:
        写入的文件路径

    Raises:
        ExportError: 写入失败
    """
    fmt = ExportFormat.parse(fmt)
    directory = Path(directory)
    path = directory / build_export_filename(mode, fmt, timestamp_ms)

    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(encode_image(image, fmt))
    except OSError as e:
        logger.error(f"导出失败: {path}, {e}")
        raise ExportError(f"Could not save {path.name}: {e.strerror or e}") from e

    logger.info(f"设计已导出: {path}")
    return path
