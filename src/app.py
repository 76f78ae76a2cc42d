"""应用初始化和管理."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

from src.utils.logger import setup_logger

if TYPE_CHECKING:
    from src.models.app_settings import Settings
    from src.services.api_client import ApiClient
    from src.services.auth_service import AuthService
    from src.ui.main_window import MainWindow

logger = setup_logger(__name__)


class Application:
    """应用管理类.

    负责加载设置、组装服务和主窗口，以及退出时的资源清理。

    Attributes:
        settings: 应用设置
        auth_service: 账号服务
    """

    def __init__(self) -> None:
        """初始化应用管理器."""
        self.settings: Optional["Settings"] = None
        self._api_client: Optional["ApiClient"] = None
        self.auth_service: Optional["AuthService"] = None
        self._main_window: Optional["MainWindow"] = None
        self._initialized: bool = False

    def initialize(self) -> None:
        """初始化应用.

        执行以下初始化步骤:
        1. 加载设置并调整日志级别
        2. 确保应用数据目录存在
        3. 初始化服务
        """
        if self._initialized:
            logger.warning("应用已初始化，跳过重复初始化")
            return

        logger.info("开始初始化应用...")
        self._load_settings()
        self._ensure_data_directory()
        self._init_services()

        self._initialized = True
        logger.info("应用初始化完成")

    def _load_settings(self) -> None:
        from pydantic import ValidationError

        from src.models.app_settings import Settings
        from src.utils.exceptions import ConfigError
        from src.utils.logger import set_log_level

        try:
            self.settings = Settings()
        except ValidationError as e:
            logger.error(f"加载应用设置失败: {e}")
            raise ConfigError(f"加载应用设置失败: {e}") from e
        set_log_level("DEBUG" if self.settings.debug else self.settings.log_level)
        logger.debug(f"API 地址: {self.settings.api_base_url}")

    def _ensure_data_directory(self) -> None:
        from src.utils.constants import APP_DATA_DIR

        APP_DATA_DIR.mkdir(parents=True, exist_ok=True)
        logger.debug(f"数据目录: {APP_DATA_DIR}")

    def _init_services(self) -> None:
        from src.services.api_client import ApiClient
        from src.services.auth_service import AuthService
        from src.services.local_storage import get_local_storage

        storage = get_local_storage(self.settings.local_storage_path)
        self._api_client = ApiClient(self.settings.api_base_url)
        self.auth_service = AuthService(self._api_client, storage)
        logger.debug(f"本地存储: {storage.path}")

    def show_main_window(self) -> None:
        """显示主窗口，启动时进入首页."""
        from src.services.auth_service import Page
        from src.ui.main_window import MainWindow

        if self._main_window is None:
            self._main_window = MainWindow(self.auth_service, self.settings.export_directory)
            self._main_window.navigate(Page.HOME)

        self._main_window.show()
        logger.info("主窗口已显示")

    def cleanup(self) -> None:
        """清理应用资源."""
        logger.info("开始清理应用资源...")
        if self._api_client is not None:
            asyncio.run(self._api_client.close())
            logger.debug("HTTP 客户端已关闭")
        logger.info("应用资源清理完成")

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def main_window(self) -> Optional["MainWindow"]:
        return self._main_window
