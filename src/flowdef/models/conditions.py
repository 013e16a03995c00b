"""
条件模型
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Type

from .binding import Binding
from ..exceptions import UnsupportedDiscriminatorError


@dataclass(frozen=True)
class Comparator:
    """二元比较条件"""
    type_name: ClassVar[str] = ""

    left: Optional[Binding] = None
    right: Optional[Binding] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type_name}
        if self.left is not None:
            data["left"] = self.left.to_data()
        if self.right is not None:
            data["right"] = self.right.to_data()
        return data


@dataclass(frozen=True)
class LessThan(Comparator):
    type_name: ClassVar[str] = "lessThan"


@dataclass(frozen=True)
class LessThanOrEqual(Comparator):
    type_name: ClassVar[str] = "lessThanOrEqual"


@dataclass(frozen=True)
class GreaterThan(Comparator):
    type_name: ClassVar[str] = "greaterThan"


@dataclass(frozen=True)
class GreaterThanOrEqual(Comparator):
    type_name: ClassVar[str] = "greaterThanOrEqual"


@dataclass(frozen=True)
class Equals(Comparator):
    type_name: ClassVar[str] = "equals"


@dataclass(frozen=True)
class NotEquals(Comparator):
    type_name: ClassVar[str] = "notEquals"


CONDITION_TYPES: Dict[str, Type[Comparator]] = {
    condition_class.type_name: condition_class
    for condition_class in (
        LessThan, LessThanOrEqual, GreaterThan,
        GreaterThanOrEqual, Equals, NotEquals
    )
}


def read_condition(data: Optional[Dict[str, Any]]) -> Optional[Comparator]:
    """按 type 字段读取比较条件"""
    if data is None:
        return None
    type_name = data.get("type")
    condition_class = CONDITION_TYPES.get(type_name) if isinstance(type_name, str) else None
    if condition_class is None:
        raise UnsupportedDiscriminatorError(type_name, list(CONDITION_TYPES))
    return condition_class(
        left=Binding.from_data(data.get("left")),
        right=Binding.from_data(data.get("right"))
    )
