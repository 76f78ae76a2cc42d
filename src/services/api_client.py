"""后端 REST API 客户端.

封装网页版调用的四个接口：

    - GET  /api/user/design-access  (Bearer)
    - POST /api/auth/login          (JSON)
    - GET  /api/auth/status         (Bearer)
    - POST /api/auth/register       (multipart)

客户端只负责收发，不做重试，也不设置超时。
"""

from __future__ import annotations

import asyncio
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import httpx

from src.utils.constants import (
    API_AUTH_LOGIN,
    API_AUTH_REGISTER,
    API_AUTH_STATUS,
    API_DESIGN_ACCESS,
)
from src.utils.exceptions import ApiRequestError, NetworkError, ValidationError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class ApiResponse:
    """接口响应.

    Attributes:
        status_code: HTTP 状态码
        data: 解析后的 JSON 对象
    """

    status_code: int
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """对应 fetch 的 response.ok（2xx）."""
        return 200 <= self.status_code < 300

    @property
    def success(self) -> bool:
        return bool(self.data.get("success"))

    @property
    def message(self) -> str:
        return str(self.data.get("message") or "")


class ApiClient:
    """后端 API 客户端.

    Attributes:
        base_url: API 基础地址

    Example:
        >>> client = ApiClient("http://localhost:5000")
        >>> response = await client.login("a@b.co", "secret123")
        >>> response.success
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """初始化客户端.

        Args:
            base_url: API 基础地址
            transport: 自定义传输层（测试时注入 MockTransport）
        """
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None
        self._http_client_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def http_client(self) -> httpx.AsyncClient:
        """获取 HTTP 客户端.

        每个请求可能运行在新的事件循环里，循环变化时重新创建客户端。
        """
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if self._http_client is not None:
            loop_changed = (
                self._http_client_loop is None
                or self._http_client_loop != current_loop
                or self._http_client_loop.is_closed()
            )
            if loop_changed:
                logger.debug("事件循环已改变，重新创建 HTTP 客户端")
                self._http_client = None
                self._http_client_loop = None

        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=None,
                transport=self._transport,
            )
            self._http_client_loop = current_loop
        return self._http_client

    async def close(self) -> None:
        """关闭 HTTP 客户端.

        创建客户端的事件循环已关闭时，连接随循环一起释放，只丢弃引用。
        """
        client, loop = self._http_client, self._http_client_loop
        self._http_client = None
        self._http_client_loop = None
        if client is None:
            return
        if loop is not None and loop.is_closed():
            logger.debug("事件循环已关闭，丢弃 HTTP 客户端")
            return
        await client.aclose()

    @staticmethod
    def _bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        """发送请求并解析 JSON.

        Raises:
            NetworkError: 连接失败等传输层错误
            ApiRequestError: 响应不是 JSON 对象
        """
        logger.debug(f"{method} {path}")
        try:
            response = await self.http_client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"请求失败: {method} {path}, {e}")
            raise NetworkError(f"{method} {path} 请求失败: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"响应解析失败: {method} {path}, HTTP {response.status_code}")
            raise ApiRequestError("响应不是合法 JSON", response.status_code) from e

        if not isinstance(data, dict):
            raise ApiRequestError("响应不是 JSON 对象", response.status_code)

        logger.debug(f"{method} {path} -> HTTP {response.status_code}")
        return ApiResponse(status_code=response.status_code, data=data)

    async def get_design_access(self, token: str) -> ApiResponse:
        """查询设计器访问权限 -> {success, canAccess, message}."""
        return await self._request("GET", API_DESIGN_ACCESS, headers=self._bearer(token))

    async def login(self, email: str, password: str) -> ApiResponse:
        """登录 -> {success, token, user}."""
        return await self._request(
            "POST", API_AUTH_LOGIN, json={"email": email, "password": password}
        )

    async def get_auth_status(self, token: str) -> ApiResponse:
        """查询登录状态 -> {success, user:{status}}."""
        return await self._request("GET", API_AUTH_STATUS, headers=self._bearer(token))

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        payment_method: str,
        payment_screenshot: Path,
    ) -> ApiResponse:
        """提交注册（multipart 表单，附付款截图）.

        Raises:
            ValidationError: 截图无法读取
            NetworkError: 请求失败
        """
        payment_screenshot = Path(payment_screenshot)
        try:
            content = payment_screenshot.read_bytes()
        except OSError as e:
            logger.warning(f"读取付款截图失败: {e}")
            raise ValidationError("Please upload payment screenshot", field="payment_screenshot") from e

        content_type = mimetypes.guess_type(payment_screenshot.name)[0] or "application/octet-stream"
        return await self._request(
            "POST",
            API_AUTH_REGISTER,
            data={
                "name": name,
                "email": email,
                "password": password,
                "paymentMethod": payment_method,
            },
            files={"paymentScreenshot": (payment_screenshot.name, content, content_type)},
        )
