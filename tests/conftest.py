"""Pytest 配置和共享 fixtures."""

import os
from pathlib import Path
from typing import Callable

import httpx
import pytest
from PIL import Image

# 无显示环境下运行 Qt
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from src.models.design_state import DesignState  # noqa: E402
from src.services.api_client import ApiClient  # noqa: E402
from src.services.auth_service import AuthService  # noqa: E402
from src.services.local_storage import LocalStorage  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    """临时目录下的本地存储."""
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def design_state() -> DesignState:
    """默认设计状态."""
    return DesignState()


@pytest.fixture
def screenshot_file(tmp_path: Path) -> Path:
    """一张小的付款截图."""
    path = tmp_path / "payment.png"
    Image.new("RGB", (40, 30), (0, 119, 181)).save(path)
    return path


class RecordingTransport(httpx.MockTransport):
    """记录所有请求的 MockTransport."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def make_api_client():
    """按给定处理函数构造 ApiClient，返回 (client, transport)."""

    def factory(handler: Handler) -> tuple[ApiClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        return ApiClient("http://testserver/", transport=transport), transport

    return factory


@pytest.fixture
def make_auth_service(storage: LocalStorage, make_api_client):
    """按给定处理函数构造 AuthService，返回 (service, transport)."""

    def factory(handler: Handler) -> tuple[AuthService, RecordingTransport]:
        client, transport = make_api_client(handler)
        return AuthService(client, storage), transport

    return factory
