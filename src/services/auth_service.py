"""登录态与账号流程服务.

设计器访问校验、登录、登录状态检查、注册、退出登录。

服务本身不依赖界面：每个流程返回 AuthResult，描述要弹出的提示、
要跳转的页面以及跳转延迟，由界面层负责执行。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from src.models.session import PendingRegistration, UserInfo, UserStatus
from src.services.api_client import ApiClient
from src.services.local_storage import LocalStorage
from src.utils.constants import (
    REDIRECT_DELAY_DEFAULT,
    REDIRECT_DELAY_LONG,
    REDIRECT_DELAY_SHORT,
    STORAGE_KEY_PENDING_REGISTRATION,
    STORAGE_KEY_REMEMBERED_EMAIL,
    STORAGE_KEY_TOKEN,
    STORAGE_KEY_USER_INFO,
)
from src.utils.error_messages import NETWORK_ERROR_MESSAGE
from src.utils.exceptions import ApiError, ValidationError
from src.utils.logger import setup_logger
from src.utils.validators import (
    RegistrationInput,
    validate_login_input,
    validate_payment_screenshot,
    validate_registration_input,
)

logger = setup_logger(__name__)


# ===================
# 结果类型
# ===================
class Page(str, Enum):
    """应用页面."""

    HOME = "home"
    LOGIN = "login"
    REGISTER = "register"
    DESIGNER = "designer"


class NoticeLevel(str, Enum):
    """提示级别，与 toast 类型一一对应."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Notice:
    """一条界面提示."""

    message: str
    level: NoticeLevel = NoticeLevel.INFO


class AuthOutcome(str, Enum):
    """流程结果."""

    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"
    DENIED = "denied"
    SUCCESS = "success"
    FAILED = "failed"
    INVALID = "invalid"
    NETWORK_ERROR = "network_error"
    NOOP = "noop"


@dataclass
class AuthResult:
    """流程执行结果.

    Attributes:
        outcome: 结果分类
        notices: 需要展示的提示
        redirect: 需要跳转的页面
        redirect_delay_ms: 跳转前等待的毫秒数
        show_info_dialog: 是否弹出说明对话框（待审核 / 注册成功）
    """

    outcome: AuthOutcome
    notices: list[Notice] = field(default_factory=list)
    redirect: Optional[Page] = None
    redirect_delay_ms: int = 0
    show_info_dialog: bool = False

    @property
    def message(self) -> Optional[str]:
        """第一条提示文案."""
        return self.notices[0].message if self.notices else None


def _result(
    outcome: AuthOutcome,
    message: Optional[str] = None,
    level: NoticeLevel = NoticeLevel.INFO,
    **kwargs,
) -> AuthResult:
    notices = [Notice(message, level)] if message else []
    return AuthResult(outcome=outcome, notices=notices, **kwargs)


class AuthService:
    """账号流程服务.

    Example:
        >>> service = AuthService(ApiClient(base_url), LocalStorage(path))
        >>> result = await service.check_design_access()
        >>> result.outcome
        <AuthOutcome.DENIED: 'denied'>
    """

    def __init__(self, api_client: ApiClient, storage: LocalStorage) -> None:
        self._api = api_client
        self._storage = storage

    @property
    def storage(self) -> LocalStorage:
        return self._storage

    # ===================
    # 会话
    # ===================
    @property
    def token(self) -> Optional[str]:
        return self._storage.get_item(STORAGE_KEY_TOKEN) or None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def get_user_info(self) -> Optional[UserInfo]:
        """读取本地保存的用户信息."""
        data = self._storage.get_json(STORAGE_KEY_USER_INFO)
        if not isinstance(data, dict):
            return None
        try:
            return UserInfo.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(f"本地用户信息无效: {e}")
            return None

    def display_name(self) -> str:
        """导航栏显示的用户名."""
        user = self.get_user_info()
        return (user.name if user else None) or "User"

    def _clear_session(self) -> None:
        self._storage.remove_item(STORAGE_KEY_TOKEN, STORAGE_KEY_USER_INFO)

    @property
    def remembered_email(self) -> Optional[str]:
        return self._storage.get_item(STORAGE_KEY_REMEMBERED_EMAIL)

    # ===================
    # 设计器访问校验
    # ===================
    async def check_design_access(self) -> AuthResult:
        """进入设计器前校验账号是否已通过审核.

        没有 token 时直接拒绝，不发请求。
        """
        token = self.token
        if not token:
            logger.info("未登录，拒绝访问设计器")
            return _result(
                AuthOutcome.DENIED,
                "Please login to access the designer",
                NoticeLevel.ERROR,
                redirect=Page.LOGIN,
                redirect_delay_ms=REDIRECT_DELAY_DEFAULT,
            )

        try:
            response = await self._api.get_design_access(token)
        except ApiError as e:
            logger.error(f"访问校验失败: {e}")
            self._clear_session()
            return _result(
                AuthOutcome.DENIED,
                "Authentication error. Please login again.",
                NoticeLevel.ERROR,
                redirect=Page.LOGIN,
                redirect_delay_ms=REDIRECT_DELAY_DEFAULT,
            )

        if response.success and response.data.get("canAccess"):
            logger.info("设计器访问已授权")
            user = self.get_user_info()
            if user and user.name:
                return _result(
                    AuthOutcome.APPROVED, f"Welcome back, {user.name}!", NoticeLevel.SUCCESS
                )
            return _result(AuthOutcome.APPROVED)

        message = response.message
        if "pending" in message:
            outcome, text, level = (
                AuthOutcome.PENDING,
                "Your account is pending approval",
                NoticeLevel.INFO,
            )
        elif "rejected" in message:
            outcome, text, level = (
                AuthOutcome.REJECTED,
                "Your account was rejected. Please contact admin.",
                NoticeLevel.ERROR,
            )
        else:
            outcome, text, level = (
                AuthOutcome.DENIED,
                "Access denied. Please login again.",
                NoticeLevel.ERROR,
            )

        logger.info(f"设计器访问被拒绝: {outcome.value}")
        self._clear_session()
        return _result(
            outcome, text, level, redirect=Page.LOGIN, redirect_delay_ms=REDIRECT_DELAY_LONG
        )

    # ===================
    # 登录
    # ===================
    def remember_email(self, email: str, remember_me: bool) -> None:
        """按“记住我”勾选状态保存或清除邮箱."""
        if remember_me:
            self._storage.set_item(STORAGE_KEY_REMEMBERED_EMAIL, email)
        else:
            self._storage.remove_item(STORAGE_KEY_REMEMBERED_EMAIL)

    async def login(self, email: str, password: str, remember_me: bool = False) -> AuthResult:
        """登录.

        “记住我”在提交时处理，与校验结果无关。

        Args:
            email: 邮箱
            password: 密码
            remember_me: 是否记住邮箱

        Returns:
            AuthResult
        """
        self.remember_email(email, remember_me)

        try:
            validate_login_input(email, password)
        except ValidationError as e:
            return _result(AuthOutcome.INVALID, e.message, NoticeLevel.ERROR)

        try:
            response = await self._api.login(email, password)
        except ApiError as e:
            logger.error(f"登录请求失败: {e}")
            return _result(AuthOutcome.NETWORK_ERROR, NETWORK_ERROR_MESSAGE, NoticeLevel.ERROR)

        data = response.data
        if response.ok and response.success:
            return self._handle_login_success(data)

        if response.status_code == 403:
            if data.get("status") == "pending" or "pending" in response.message:
                logger.info(f"登录被拒: 账号待审核 ({email})")
                return _result(
                    AuthOutcome.PENDING,
                    "Your account is pending approval. Please wait for admin verification.",
                    NoticeLevel.INFO,
                    show_info_dialog=True,
                )
            if data.get("reason"):
                return _result(
                    AuthOutcome.REJECTED,
                    f"Account rejected: {data['reason']}",
                    NoticeLevel.ERROR,
                )
            return _result(
                AuthOutcome.FAILED,
                response.message or "Account not approved",
                NoticeLevel.ERROR,
            )

        logger.info(f"登录失败: HTTP {response.status_code}")
        return _result(
            AuthOutcome.FAILED,
            response.message or "Login failed. Please check your credentials.",
            NoticeLevel.ERROR,
        )

    def _handle_login_success(self, data: dict) -> AuthResult:
        """校验用户记录，通过后才写入会话."""
        user_data = data.get("user") or {}
        try:
            user = UserInfo.model_validate(user_data)
        except PydanticValidationError as e:
            logger.error(f"登录响应中的用户信息无效: {e}")
            return _result(
                AuthOutcome.FAILED,
                "Login failed. Please try again.",
                NoticeLevel.ERROR,
            )

        self._storage.set_item(STORAGE_KEY_TOKEN, str(data.get("token") or ""))
        self._storage.set_json(STORAGE_KEY_USER_INFO, user_data)
        self._storage.remove_item(STORAGE_KEY_PENDING_REGISTRATION)
        status = user.user_status

        if status == UserStatus.APPROVED:
            logger.info(f"登录成功: {user.email}")
            return _result(
                AuthOutcome.APPROVED,
                "Login successful! Redirecting...",
                NoticeLevel.SUCCESS,
                redirect=Page.DESIGNER,
                redirect_delay_ms=REDIRECT_DELAY_SHORT,
            )

        if status == UserStatus.PENDING:
            self._clear_session()
            return _result(
                AuthOutcome.PENDING,
                "Your account is pending approval",
                NoticeLevel.INFO,
                show_info_dialog=True,
            )

        if status == UserStatus.REJECTED:
            self._clear_session()
            reason = user.rejection_reason or "Please contact admin"
            return _result(
                AuthOutcome.REJECTED,
                f"Your account was rejected: {reason}",
                NoticeLevel.ERROR,
            )

        # 未知状态：保留会话，不提示
        logger.warning(f"未知的账号状态: {user.status}")
        return _result(AuthOutcome.NOOP)

    async def check_auth_status(self) -> AuthResult:
        """登录页打开时检查已有 token，已审核则直接进入设计器."""
        token = self.token
        if not token:
            return _result(AuthOutcome.NOOP)

        try:
            response = await self._api.get_auth_status(token)
        except ApiError as e:
            logger.info(f"token 无效，已清除: {e}")
            self._clear_session()
            return _result(AuthOutcome.NOOP)

        user = response.data.get("user")
        approved = isinstance(user, dict) and user.get("status") == UserStatus.APPROVED.value
        if response.success and approved:
            return _result(AuthOutcome.APPROVED, redirect=Page.DESIGNER)
        return _result(AuthOutcome.NOOP)

    def pending_registration_notice(self) -> Optional[Notice]:
        """有待审核的注册记录时返回登录页提示."""
        data = self._storage.get_json(STORAGE_KEY_PENDING_REGISTRATION)
        if not isinstance(data, dict):
            return None
        try:
            pending = PendingRegistration.model_validate(data)
        except PydanticValidationError:
            return None
        if not pending.is_pending:
            return None
        return Notice(
            "Your account is pending approval. Please wait for admin verification.",
            NoticeLevel.INFO,
        )

    # ===================
    # 注册
    # ===================
    def validate_screenshot(self, path: Path | str) -> Optional[Notice]:
        """选择付款截图时的即时校验，通过返回 None."""
        try:
            validate_payment_screenshot(path)
        except ValidationError as e:
            return Notice(e.message, NoticeLevel.ERROR)
        return None

    def validate_registration(self, form: RegistrationInput) -> Optional[Notice]:
        """提交前的表单校验，通过返回 None."""
        try:
            validate_registration_input(form)
        except ValidationError as e:
            return Notice(e.message, NoticeLevel.ERROR)
        return None

    async def register(self, form: RegistrationInput) -> AuthResult:
        """提交注册.

        Args:
            form: 注册表单输入

        Returns:
            成功时 show_info_dialog 为 True，界面应弹出成功对话框并重置表单
        """
        try:
            validate_registration_input(form)
        except ValidationError as e:
            return _result(AuthOutcome.INVALID, e.message, NoticeLevel.ERROR)

        try:
            response = await self._api.register(
                name=form.full_name,
                email=form.email,
                password=form.password,
                payment_method=form.payment_method,
                payment_screenshot=form.payment_screenshot,
            )
        except ValidationError as e:
            return _result(AuthOutcome.INVALID, e.message, NoticeLevel.ERROR)
        except ApiError as e:
            logger.error(f"注册请求失败: {e}")
            return _result(AuthOutcome.NETWORK_ERROR, NETWORK_ERROR_MESSAGE, NoticeLevel.ERROR)

        if not response.success:
            logger.info(f"注册失败: HTTP {response.status_code}")
            return _result(
                AuthOutcome.FAILED,
                response.message or "Registration failed. Please try again.",
                NoticeLevel.ERROR,
            )

        pending = PendingRegistration(
            full_name=form.full_name,
            email=form.email,
            payment_method=form.payment_method,
        )
        self._storage.set_json(STORAGE_KEY_PENDING_REGISTRATION, pending.to_storage())
        logger.info(f"注册已提交，等待审核: {form.email}")
        return _result(
            AuthOutcome.SUCCESS,
            "✓ Registration successful! Awaiting admin approval",
            NoticeLevel.SUCCESS,
            show_info_dialog=True,
        )

    # ===================
    # 退出登录
    # ===================
    def logout(self) -> AuthResult:
        """清除本地会话并回到首页."""
        self._storage.remove_item(
            STORAGE_KEY_TOKEN, STORAGE_KEY_USER_INFO, STORAGE_KEY_PENDING_REGISTRATION
        )
        logger.info("已退出登录")
        return _result(
            AuthOutcome.SUCCESS,
            "Logged out successfully",
            NoticeLevel.SUCCESS,
            redirect=Page.HOME,
            redirect_delay_ms=REDIRECT_DELAY_SHORT,
        )
