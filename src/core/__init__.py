"""核心业务逻辑模块."""

from src.core.design_store import DesignStore, RenderListener
from src.core.task_runner import AsyncTaskRunner, TaskGroup

__all__ = [
    # 设计状态容器
    "DesignStore",
    "RenderListener",
    # 后台任务
    "AsyncTaskRunner",
    "TaskGroup",
]
