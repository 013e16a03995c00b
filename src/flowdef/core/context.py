"""
解析上下文
"""
import logging
from contextlib import contextmanager
from typing import List

from ..exceptions import WorkflowValidationError


logger = logging.getLogger(__name__)


class ParseContext:
    """解析上下文：提供类型注册表，并收集解析错误

    错误不会立即抛出，而是记录下来，使定义作者一次看到全部问题。
    """

    def __init__(self, registry):
        self.registry = registry
        self.errors: List[str] = []
        self._path: List[str] = []

    @property
    def path(self) -> str:
        return ".".join(self._path)

    @contextmanager
    def push(self, segment: str):
        """进入嵌套路径，错误消息会带上该路径"""
        self._path.append(segment)
        try:
            yield self
        finally:
            self._path.pop()

    def add_error(self, message: str):
        """记录错误"""
        if self._path:
            message = f"{self.path}: {message}"
        logger.warning(f"Definition error: {message}")
        self.errors.append(message)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def raise_if_errors(self, message: str = None):
        """存在错误时汇总抛出"""
        if self.errors:
            raise WorkflowValidationError(self.errors, message)
