"""LinkedIn Design Studio - 应用入口."""

from __future__ import annotations

import sys
from pathlib import Path

# 确保项目根目录在 Python 路径中
root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))


def main() -> int:
    """应用主入口函数.

    Returns:
        退出码，0 表示正常退出
    """
    from PyQt6.QtWidgets import QApplication

    from src.app import Application
    from src.utils.constants import APP_AUTHOR, APP_NAME, APP_VERSION
    from src.utils.logger import setup_logger

    logger = setup_logger(__name__)
    logger.info(f"启动 {APP_NAME} v{APP_VERSION}")

    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName(APP_NAME)
    qt_app.setApplicationVersion(APP_VERSION)
    qt_app.setOrganizationName(APP_AUTHOR)

    try:
        app = Application()
        app.initialize()
        app.show_main_window()

        exit_code = qt_app.exec()

        app.cleanup()
        logger.info(f"应用正常退出，退出码: {exit_code}")
        return exit_code

    except Exception as e:
        logger.exception(f"应用运行时发生错误: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
