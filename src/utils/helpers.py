"""辅助函数模块."""

from __future__ import annotations

import math
import time
from datetime import datetime
from typing import Optional


def format_file_size(size_bytes: int) -> str:
    """格式化文件大小.

    Args:
        size_bytes: 文件大小（字节）

    Returns:
        如 "0 Bytes"、"1.5 KB"、"2 MB"
    """
    if size_bytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = min(int(math.floor(math.log(size_bytes, 1024))), len(units) - 1)
    value = round(size_bytes / (1024 ** i), 2)
    if value == int(value):
        value = int(value)
    return f"{value} {units[i]}"


def now_millis() -> int:
    """当前 Unix 时间戳（毫秒）."""
    return int(time.time() * 1000)


def now_iso(dt: Optional[datetime] = None) -> str:
    """当前时间的 ISO 8601 字符串."""
    return (dt or datetime.now()).isoformat()


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """十六进制颜色转 RGB.

    Args:
        hex_color: "#rrggbb" 或 "#rgb"

    Returns:
        RGB 元组
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) == 3:
        hex_color = "".join(c * 2 for c in hex_color)
    return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))


def alpha(opacity: float) -> int:
    """CSS 透明度 (0-1) 转 0-255 的 alpha 值."""
    return int(round(clamp_float(opacity, 0.0, 1.0) * 255))


def clamp_float(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(max_val, value))
