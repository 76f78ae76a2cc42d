"""登录会话相关数据模型.

本地存储中的 userInfo / pendingRegistration 记录，字段名与服务端
JSON 保持一致（camelCase），Python 侧使用 snake_case 访问。
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.utils.helpers import now_iso


class UserStatus(str, Enum):
    """账号审核状态."""

    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class UserInfo(BaseModel):
    """服务端返回的用户记录.

    只声明客户端用到的字段，其余字段原样保留。
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    status: Optional[str] = None
    rejection_reason: Optional[str] = Field(default=None, alias="rejectionReason")

    @property
    def user_status(self) -> Optional[UserStatus]:
        try:
            return UserStatus(self.status) if self.status else None
        except ValueError:
            return None


PENDING_APPROVAL = "pending_approval"


class PendingRegistration(BaseModel):
    """注册成功后写入本地的待审核标记."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="fullName")
    email: str
    payment_method: str = Field(alias="paymentMethod")
    registered_at: str = Field(default_factory=now_iso, alias="registeredAt")
    status: str = PENDING_APPROVAL

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING_APPROVAL

    def to_storage(self) -> dict:
        """按网页版的字段名序列化."""
        return self.model_dump(by_alias=True)


class PaymentMethod(BaseModel):
    """付款方式说明."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    amount: str
    account: str
    steps: tuple[str, ...]

    @property
    def instructions(self) -> str:
        """纯文本的分步说明."""
        lines = [f"Pay {self.amount} via {self.title.replace(' Payment', '')}:"]
        lines.extend(f"{i}. {step}" for i, step in enumerate(self.steps, start=1))
        return "\n".join(lines)


PAYMENT_METHODS: dict[str, PaymentMethod] = {
    "binance": PaymentMethod(
        key="binance",
        title="Binance Payment",
        amount="$29 USDT",
        account="binance_wallet_id_here",
        steps=(
            "Open your Binance app",
            "Go to Pay → Send",
            "Send $29 USDT to: binance_wallet_id_here",
            "Take a screenshot of the confirmation",
            "Upload the screenshot below",
        ),
    ),
    "easypaisa": PaymentMethod(
        key="easypaisa",
        title="EasyPaisa Payment",
        amount="PKR 8,000",
        account="03XX-XXXXXXX",
        steps=(
            "Open EasyPaisa app",
            "Go to Send Money",
            "Send PKR 8,000 to: 03XX-XXXXXXX",
            "Take a screenshot of the transaction",
            "Upload the screenshot below",
        ),
    ),
    "nayapay": PaymentMethod(
        key="nayapay",
        title="NayaPay Payment",
        amount="PKR 8,000",
        account="03XX-XXXXXXX",
        steps=(
            "Open NayaPay app",
            "Go to Send Money",
            "Send PKR 8,000 to: 03XX-XXXXXXX",
            "Take a screenshot of the confirmation",
            "Upload the screenshot below",
        ),
    ),
}
