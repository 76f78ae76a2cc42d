"""UI 测试共享 fixtures."""

from __future__ import annotations

import httpx
import pytest

from src.ui.widgets.toast_notification import reset_toast_manager


@pytest.fixture(autouse=True)
def fresh_toast_manager():
    """每个测试使用新的全局 Toast 管理器."""
    reset_toast_manager()
    yield
    reset_toast_manager()


def unreachable(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"不应发出请求: {request.url}")


@pytest.fixture
def offline_auth(make_auth_service):
    """不允许发请求的 AuthService."""
    service, _ = make_auth_service(unreachable)
    return service


@pytest.fixture
def logged_in(storage):
    """写入一个已审核用户的本地会话."""
    storage.set_item("userToken", "tok-1")
    storage.set_json("userInfo", {"name": "Ada", "email": "ada@example.com", "status": "approved"})
    return storage
