"""主窗口模块.

布局结构:
    ┌─────────────────────────────────────────────────────────────┐
    │  导航栏  Logo    Home  Designer        用户名 / 登录 注册     │
    ├─────────────────────────────────────────────────────────────┤
    │                                                             │
    │          页面区域（首页 / 登录 / 注册 / 设计器）              │
    │                                                             │
    └─────────────────────────────────────────────────────────────┘
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QTimer, pyqtSignal
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence, QResizeEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from src.services.auth_service import AuthService, Page
from src.ui.pages.base_page import BasePage
from src.ui.pages.designer_page import DesignerPage
from src.ui.pages.home_page import HomePage
from src.ui.pages.login_page import LoginPage
from src.ui.pages.register_page import RegisterPage
from src.ui.widgets.toast_notification import ToastManager, get_toast_manager
from src.utils.constants import (
    APP_NAME,
    APP_VERSION,
    WINDOW_MIN_HEIGHT,
    WINDOW_MIN_WIDTH,
)
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


def _get_stylesheet() -> str:
    """加载样式表."""
    style_path = Path(__file__).parent / "resources" / "styles.qss"
    if style_path.exists():
        try:
            return style_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"加载样式表失败: {e}")
    return ""


class MainWindow(QMainWindow):
    """应用主窗口.

    Signals:
        page_changed: 当前页面变化 (Page)
    """

    page_changed = pyqtSignal(object)  # Page

    def __init__(self, auth_service: AuthService, export_dir: Path) -> None:
        """初始化主窗口.

        Args:
            auth_service: 账号服务
            export_dir: 设计导出目录
        """
        super().__init__()
        self._auth = auth_service
        self._export_dir = export_dir
        self._pages: dict[Page, BasePage] = {}
        self._current_page: Optional[Page] = None
        self._pending_timers: list[QTimer] = []

        self._setup_window()
        self._apply_stylesheet()
        self._setup_menubar()
        self._setup_central_widget()
        self._toast_manager: ToastManager = get_toast_manager(self)
        self.update_navigation()

        logger.debug("主窗口初始化完成")

    # ========================
    # 属性
    # ========================

    @property
    def current_page(self) -> Optional[Page]:
        return self._current_page

    @property
    def toast_manager(self) -> ToastManager:
        return self._toast_manager

    def page_widget(self, page: Page) -> BasePage:
        return self._pages[page]

    # ========================
    # 初始化方法
    # ========================

    def _setup_window(self) -> None:
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)
        self.resize(1440, 900)
        self._center_window()

    def _center_window(self) -> None:
        screen = QApplication.primaryScreen()
        if screen:
            window_geometry = self.frameGeometry()
            window_geometry.moveCenter(screen.availableGeometry().center())
            self.move(window_geometry.topLeft())

    def _apply_stylesheet(self) -> None:
        stylesheet = _get_stylesheet()
        if stylesheet:
            self.setStyleSheet(stylesheet)
            logger.debug("样式表已应用")

    def _setup_menubar(self) -> None:
        menubar = self.menuBar()
        if menubar is None:
            return

        file_menu = menubar.addMenu("&File")
        if file_menu is None:
            return

        for page, text, shortcut in (
            (Page.HOME, "&Home", "Ctrl+1"),
            (Page.DESIGNER, "&Designer", "Ctrl+2"),
        ):
            action = QAction(text, self)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(lambda _checked, p=page: self.navigate(p))
            file_menu.addAction(action)

        file_menu.addSeparator()
        action_exit = QAction("E&xit", self)
        action_exit.setShortcut(QKeySequence.StandardKey.Quit)
        action_exit.triggered.connect(self.close)
        file_menu.addAction(action_exit)

    def _setup_central_widget(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        layout.addWidget(self._create_nav_bar())

        self._stack = QStackedWidget()
        layout.addWidget(self._stack, 1)

        pages: list[BasePage] = [
            HomePage(self._auth),
            LoginPage(self._auth),
            RegisterPage(self._auth),
            DesignerPage(self._auth, self._export_dir),
        ]
        for page in pages:
            page.navigate_requested.connect(self.navigate)
            page.session_changed.connect(self.update_navigation)
            self._pages[page.page] = page
            self._stack.addWidget(page)

        self.setCentralWidget(central)

    def _create_nav_bar(self) -> QFrame:
        nav = QFrame()
        nav.setObjectName("navBar")
        row = QHBoxLayout(nav)
        row.setContentsMargins(24, 12, 24, 12)

        logo = QPushButton(APP_NAME)
        logo.setObjectName("navLogo")
        logo.setFlat(True)
        logo.clicked.connect(lambda: self.navigate(Page.HOME))
        row.addWidget(logo)
        row.addStretch()

        self._designer_link = QPushButton("Designer")
        self._designer_link.setFlat(True)
        self._designer_link.clicked.connect(lambda: self.navigate(Page.DESIGNER))
        row.addWidget(self._designer_link)

        self._user_label = QLabel()
        self._user_label.setObjectName("navUserName")
        row.addWidget(self._user_label)

        self._logout_btn = QPushButton("Logout")
        self._logout_btn.setObjectName("logoutButton")
        self._logout_btn.clicked.connect(self.logout)
        row.addWidget(self._logout_btn)

        self._login_link = QPushButton("Login")
        self._login_link.setFlat(True)
        self._login_link.clicked.connect(lambda: self.navigate(Page.LOGIN))
        row.addWidget(self._login_link)

        self._register_link = QPushButton("Register")
        self._register_link.setObjectName("primaryButton")
        self._register_link.clicked.connect(lambda: self.navigate(Page.REGISTER))
        row.addWidget(self._register_link)
        return nav

    # ========================
    # 导航
    # ========================

    def update_navigation(self) -> None:
        """按登录状态切换导航栏：用户名 + 退出，或登录 / 注册入口."""
        logged_in = self._auth.is_authenticated
        self._user_label.setText(self._auth.display_name() if logged_in else "")
        self._user_label.setVisible(logged_in)
        self._logout_btn.setVisible(logged_in)
        self._login_link.setVisible(not logged_in)
        self._register_link.setVisible(not logged_in)

    def navigate(self, page: Page, delay_ms: int = 0) -> None:
        """切换页面，delay_ms > 0 时延迟执行."""
        if delay_ms > 0:
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.timeout.connect(lambda: self._on_delayed_navigate(timer, page))
            self._pending_timers.append(timer)
            timer.start(delay_ms)
            return
        self._show_page(page)

    def _on_delayed_navigate(self, timer: QTimer, page: Page) -> None:
        if timer in self._pending_timers:
            self._pending_timers.remove(timer)
        timer.deleteLater()
        self._show_page(page)

    def _show_page(self, page: Page) -> None:
        widget = self._pages[page]
        self._current_page = page
        self._stack.setCurrentWidget(widget)
        self.update_navigation()
        logger.info(f"切换页面: {page.value}")
        self.page_changed.emit(page)
        widget.on_enter()

    def logout(self) -> None:
        result = self._auth.logout()
        for notice in result.notices:
            self._toast_manager.show_notice(notice)
        self.update_navigation()
        if result.redirect is not None:
            self.navigate(result.redirect, result.redirect_delay_ms)

    # ========================
    # 事件处理
    # ========================

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._toast_manager.update_position()

    def closeEvent(self, event: QCloseEvent) -> None:
        for timer in self._pending_timers:
            timer.stop()
        self._pending_timers.clear()
        for page in self._pages.values():
            page.tasks.wait_all()
        logger.info("主窗口关闭")
        event.accept()
