"""
运行时类型处理器（DataType）
"""
import numbers
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional, Tuple, Type

from pydantic import TypeAdapter, ValidationError

from ..models.types import (
    TypeDescriptor, TextType, NumberType, BooleanType, DateType, ChoiceType
)
from ..exceptions import InvalidValueError


logger = logging.getLogger(__name__)


def is_number(value: Any) -> bool:
    """数值判断：bool 与复数不算数值"""
    if isinstance(value, (bool, complex)):
        return False
    return isinstance(value, numbers.Number)


class DataType(ABC):
    """运行时类型处理器接口

    每个声明的类型出现对应一个实例；``parse`` 必须在其他操作之前且只调用一次，
    之后实例不再修改，可在并发执行的工作流实例之间只读共享。
    """

    descriptor_class: Type[TypeDescriptor] = TypeDescriptor

    def __init__(self):
        self.descriptor: Optional[TypeDescriptor] = None

    def parse(self, descriptor: TypeDescriptor, context):
        """解析类型描述符，填充嵌套的类型处理器"""
        self.descriptor = descriptor
        logger.debug(f"Parsed data type: {self.type_name}")

    @property
    def type_name(self) -> str:
        return self.descriptor_class.name

    @abstractmethod
    def is_serialize_required(self) -> bool:
        """值是否需要非平凡的 JSON 转换"""
        pass

    @abstractmethod
    def validate_internal_value(self, internal_value: Any):
        """校验内部值，不符合时抛出 InvalidValueError；None 总是合法"""
        pass

    @abstractmethod
    def convert_json_to_internal_value(self, json_value: Any) -> Any:
        """JSON 值转换为内部值"""
        pass

    @abstractmethod
    def convert_internal_to_json_value(self, internal_value: Any) -> Any:
        """内部值转换为 JSON 值"""
        pass


class AbstractDataType(DataType):
    """基于 isinstance 检查的通用实现，JSON 与内部表示相同"""

    value_types: Tuple[type, ...] = (object,)

    def is_serialize_required(self) -> bool:
        return False

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.value_types)

    def invalid_value(self, value: Any, kind: str = "Value") -> InvalidValueError:
        expected = " or ".join(t.__name__ for t in self.value_types)
        return InvalidValueError(
            f"{kind} for type '{self.type_name}' must be {expected}, "
            f"but was {value!r} ({type(value).__name__})",
            value
        )

    def validate_internal_value(self, internal_value: Any):
        if internal_value is None:
            return
        if not self.accepts(internal_value):
            raise self.invalid_value(internal_value)

    def convert_json_to_internal_value(self, json_value: Any) -> Any:
        if json_value is None:
            return None
        if not self.accepts(json_value):
            raise self.invalid_value(json_value, "Json value")
        return json_value

    def convert_internal_to_json_value(self, internal_value: Any) -> Any:
        return internal_value


class TextDataType(AbstractDataType):
    descriptor_class = TextType
    value_types = (str,)


class NumberDataType(AbstractDataType):
    descriptor_class = NumberType
    value_types = (int, float)

    def accepts(self, value: Any) -> bool:
        return is_number(value)


class BooleanDataType(AbstractDataType):
    descriptor_class = BooleanType
    value_types = (bool,)


_DATETIME_ADAPTER = TypeAdapter(datetime)


class DateDataType(AbstractDataType):
    """日期时间：内部为 datetime，JSON 为 ISO-8601 字符串"""

    descriptor_class = DateType
    value_types = (datetime,)

    def is_serialize_required(self) -> bool:
        return True

    def convert_json_to_internal_value(self, json_value: Any) -> Any:
        if json_value is None or isinstance(json_value, datetime):
            return json_value
        if not isinstance(json_value, str):
            raise InvalidValueError(
                f"Json value for type 'date' must be an ISO-8601 string, "
                f"but was {json_value!r} ({type(json_value).__name__})",
                json_value
            )
        try:
            return _DATETIME_ADAPTER.validate_python(json_value)
        except ValidationError as e:
            raise InvalidValueError(
                f"Json value for type 'date' is not a valid date: {json_value!r} "
                f"({e.error_count()} error(s))",
                json_value
            )

    def convert_internal_to_json_value(self, internal_value: Any) -> Any:
        if internal_value is None:
            return None
        self.validate_internal_value(internal_value)
        return internal_value.isoformat()


class ChoiceDataType(AbstractDataType):
    """枚举选项：值必须是声明的选项之一"""

    descriptor_class = ChoiceType
    value_types = (str,)

    def __init__(self):
        super().__init__()
        self.options: Tuple[str, ...] = ()

    def parse(self, descriptor: ChoiceType, context):
        super().parse(descriptor, context)
        self.options = tuple(descriptor.options)
        if not self.options:
            context.add_error("Choice type requires at least one option")

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.options

    def invalid_value(self, value: Any, kind: str = "Value") -> InvalidValueError:
        return InvalidValueError(
            f"{kind} for type 'choice' must be one of {list(self.options)}, but was {value!r}",
            value
        )
