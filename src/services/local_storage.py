"""本地键值存储.

对应网页版的 localStorage：字符串键、字符串值，保存在一个 JSON 文件里，
没有过期时间。userToken、userInfo、pendingRegistration、rememberedEmail
都存放在这里。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from src.utils.exceptions import StorageError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class LocalStorage:
    """JSON 文件实现的键值存储.

    每次读写都直接访问文件，多个实例指向同一路径时看到的数据一致。

    Example:
        >>> storage = LocalStorage(Path("/tmp/storage.json"))
        >>> storage.set_item("userToken", "abc")
        >>> storage.get_item("userToken")
        'abc'
    """

    def __init__(self, path: Path | str) -> None:
        """初始化存储.

        Args:
            path: JSON 文件路径
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"读取本地存储失败，按空存储处理: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("本地存储格式错误，按空存储处理")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"写入本地存储失败: {e}")
            raise StorageError(f"写入本地存储失败: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        """读取值，不存在返回 None."""
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def remove_item(self, *keys: str) -> None:
        """删除一个或多个键，不存在的键忽略."""
        data = self._load()
        changed = False
        for key in keys:
            if key in data:
                del data[key]
                changed = True
        if changed:
            self._save(data)

    def clear(self) -> None:
        self._save({})

    def keys(self) -> list[str]:
        return list(self._load().keys())

    def get_json(self, key: str) -> Optional[Any]:
        """读取 JSON 值，不存在或无法解析时返回 None."""
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"本地存储键 '{key}' 不是合法 JSON")
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))


_local_storage: Optional[LocalStorage] = None


def get_local_storage(path: Optional[Path] = None) -> LocalStorage:
    """获取全局本地存储实例.

    Args:
        path: 存储文件路径（仅首次调用有效），默认取自设置
    """
    global _local_storage
    if _local_storage is None:
        if path is None:
            from src.models.app_settings import Settings

            path = Settings().local_storage_path
        _local_storage = LocalStorage(path)
    return _local_storage
