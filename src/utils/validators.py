"""表单校验工具.

登录、注册表单在发请求前的客户端校验。校验失败抛出
ValidationError，message 直接作为 toast 文案。
"""

from __future__ import annotations

import mimetypes
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from src.utils.constants import MAX_SCREENSHOT_SIZE, MIN_PASSWORD_LENGTH
from src.utils.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_SPECIAL_CHARS = "$@#&!"


def is_valid_email(email: str) -> bool:
    """检查邮箱格式."""
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def validate_login_input(email: str, password: str) -> None:
    """校验登录表单.

    Raises:
        ValidationError: 邮箱或密码为空，或邮箱格式错误
    """
    if not email or not password:
        raise ValidationError("Please enter both email and password")
    if not is_valid_email(email):
        raise ValidationError("Please enter a valid email address", field="email")


def validate_password(password: str) -> list[str]:
    """检查密码复杂度.

    Returns:
        未满足的规则列表，空列表表示通过
    """
    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    return errors


class PasswordStrength(str, Enum):
    """密码强度等级."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"

    @property
    def color(self) -> str:
        return {
            PasswordStrength.WEAK: "#ef4444",
            PasswordStrength.MEDIUM: "#f59e0b",
            PasswordStrength.STRONG: "#10b981",
        }[self]


def password_score(password: str) -> int:
    """密码强度打分 (0-5)."""
    score = 0
    if len(password) >= MIN_PASSWORD_LENGTH:
        score += 1
    if re.search(r"[a-z]", password):
        score += 1
    if re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"[0-9]", password):
        score += 1
    if any(c in PASSWORD_SPECIAL_CHARS for c in password):
        score += 1
    return score


def password_strength(password: str) -> PasswordStrength:
    """根据打分给出强度等级."""
    score = password_score(password)
    if score < 2:
        return PasswordStrength.WEAK
    if score < 4:
        return PasswordStrength.MEDIUM
    return PasswordStrength.STRONG


@dataclass
class RegistrationInput:
    """注册表单原始输入."""

    full_name: str
    email: str
    password: str
    confirm_password: str
    payment_method: str
    payment_screenshot: Optional[Path]
    agree_terms: bool


def validate_registration_input(form: RegistrationInput) -> None:
    """按页面顺序校验注册表单.

    Raises:
        ValidationError: 第一个未通过的规则
    """
    if not form.full_name.strip():
        raise ValidationError("Please enter your full name", field="full_name")
    if not is_valid_email(form.email):
        raise ValidationError("Please enter a valid email address", field="email")
    if form.password != form.confirm_password:
        raise ValidationError("Passwords do not match", field="confirm_password")
    if len(form.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
        )
    if not form.payment_method:
        raise ValidationError("Please select a payment method", field="payment_method")
    if form.payment_screenshot is None:
        raise ValidationError("Please upload payment screenshot", field="payment_screenshot")
    if not form.agree_terms:
        raise ValidationError("Please agree to the terms and conditions", field="agree_terms")


def validate_payment_screenshot(path: Path | str) -> Path:
    """校验付款截图文件.

    Args:
        path: 截图路径

    Returns:
        规范化后的路径

    Raises:
        ValidationError: 不是图片或超过 5MB
    """
    path = Path(path)
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise ValidationError("Please upload an image file", field="payment_screenshot")
    if not path.is_file():
        raise ValidationError("Please upload an image file", field="payment_screenshot")
    if path.stat().st_size > MAX_SCREENSHOT_SIZE:
        raise ValidationError("File size must be less than 5MB", field="payment_screenshot")
    return path
