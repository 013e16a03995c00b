"""
二元比较条件实现

比较永远不抛出异常：类型不匹配降级为 False，保证条件求值总是返回布尔值。
"""
import math
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from ..models.conditions import (
    Comparator, LessThan, LessThanOrEqual, GreaterThan,
    GreaterThanOrEqual, Equals, NotEquals
)
from .data_types import is_number
from ..models.scope import ScopeInstance


logger = logging.getLogger(__name__)


def widen(value: Any) -> Optional[float]:
    """转换为浮点数，超出范围时取无穷大；无法转换（如 Decimal('sNaN')）时返回 None"""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
    except ValueError:
        return None


class ComparatorImpl(ABC):
    """比较器接口"""

    api_type: Type[Comparator] = Comparator
    symbol: str = ""

    @abstractmethod
    def compare(self, left_value: Any, right_value: Any, scope: Optional[ScopeInstance]) -> bool:
        """比较两个已解析的运行时值"""
        pass

    def evaluate(self, condition: Comparator, scope: Optional[ScopeInstance]) -> bool:
        """解析左右绑定后比较"""
        left_value = condition.left.resolve(scope) if condition.left else None
        right_value = condition.right.resolve(scope) if condition.right else None
        result = self.compare(left_value, right_value, scope)
        logger.debug(f"{left_value!r} {self.symbol} {right_value!r} -> {result}")
        return result


class NumericComparatorImpl(ComparatorImpl):
    """数值比较

    两侧都为 None 视为相等（返回 True），只有一侧为 None 返回 False，
    任一侧不是数值返回 False，否则按浮点数比较。
    """

    def compare(self, left_value: Any, right_value: Any, scope: Optional[ScopeInstance]) -> bool:
        if left_value is None and right_value is None:
            return True
        if left_value is None or right_value is None:
            return False
        if not is_number(left_value) or not is_number(right_value):
            return False
        left, right = widen(left_value), widen(right_value)
        if left is None or right is None:
            return False
        return self.compare_numbers(left, right)

    @abstractmethod
    def compare_numbers(self, left: float, right: float) -> bool:
        pass


class LessThanImpl(NumericComparatorImpl):
    api_type = LessThan
    symbol = "<"

    def compare_numbers(self, left: float, right: float) -> bool:
        return left < right


class LessThanOrEqualImpl(NumericComparatorImpl):
    api_type = LessThanOrEqual
    symbol = "<="

    def compare_numbers(self, left: float, right: float) -> bool:
        return left <= right


class GreaterThanImpl(NumericComparatorImpl):
    api_type = GreaterThan
    symbol = ">"

    def compare_numbers(self, left: float, right: float) -> bool:
        return left > right


class GreaterThanOrEqualImpl(NumericComparatorImpl):
    api_type = GreaterThanOrEqual
    symbol = ">="

    def compare_numbers(self, left: float, right: float) -> bool:
        return left >= right


class EqualsImpl(ComparatorImpl):
    api_type = Equals
    symbol = "=="

    def compare(self, left_value: Any, right_value: Any, scope: Optional[ScopeInstance]) -> bool:
        if left_value is None and right_value is None:
            return True
        if left_value is None or right_value is None:
            return False
        if is_number(left_value) and is_number(right_value):
            left, right = widen(left_value), widen(right_value)
            return left is not None and right is not None and left == right
        try:
            return bool(left_value == right_value)
        except Exception as e:
            logger.debug(f"Equality check failed: {e}")
            return False


class NotEqualsImpl(EqualsImpl):
    api_type = NotEquals
    symbol = "!="

    def compare(self, left_value: Any, right_value: Any, scope: Optional[ScopeInstance]) -> bool:
        return not super().compare(left_value, right_value, scope)


class ConditionService:
    """条件服务：按条件类型分派到比较器实现"""

    def __init__(self):
        self.comparators: Dict[Type[Comparator], ComparatorImpl] = {}
        self._register_default_comparators()

    def _register_default_comparators(self):
        """注册默认比较器"""
        for impl in (
            LessThanImpl(), LessThanOrEqualImpl(), GreaterThanImpl(),
            GreaterThanOrEqualImpl(), EqualsImpl(), NotEqualsImpl()
        ):
            self.register_comparator(impl)

    def register_comparator(self, impl: ComparatorImpl):
        """注册比较器"""
        self.comparators[impl.api_type] = impl

    def get_comparator(self, condition: Comparator) -> ComparatorImpl:
        impl = self.comparators.get(type(condition))
        if impl is None:
            raise ValueError(f"No comparator registered for condition: {type(condition).__name__}")
        return impl

    def evaluate(self, condition: Comparator, scope: Optional[ScopeInstance] = None) -> bool:
        """求值条件"""
        return self.get_comparator(condition).evaluate(condition, scope)
