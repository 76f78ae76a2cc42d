"""页面模块."""

from src.ui.pages.base_page import BasePage
from src.ui.pages.designer_page import DesignerPage
from src.ui.pages.home_page import HomePage
from src.ui.pages.login_page import LoginPage
from src.ui.pages.register_page import RegisterPage

__all__ = [
    "BasePage",
    "DesignerPage",
    "HomePage",
    "LoginPage",
    "RegisterPage",
]
