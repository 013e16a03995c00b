"""
列表类型处理器
"""
from typing import Any, List, Optional

from .data_types import DataType
from ..models.types import ListType
from ..exceptions import InvalidValueError


class ListDataType(DataType):
    """元素类型为 T 的列表

    转换与校验按顺序逐个委托给元素类型处理器，元素的数量和顺序保持不变。
    """

    descriptor_class = ListType

    def __init__(self, element_data_type: Optional[DataType] = None):
        super().__init__()
        self.element_data_type = element_data_type

    def parse(self, descriptor: ListType, context):
        super().parse(descriptor, context)
        if descriptor.element_type is None:
            context.add_error("List type requires an element_type")
            return
        with context.push("element_type"):
            self.element_data_type = context.registry.create_data_type(
                descriptor.element_type, context
            )

    def is_serialize_required(self) -> bool:
        if self.element_data_type is None:
            return False
        return self.element_data_type.is_serialize_required()

    def validate_internal_value(self, internal_value: Any):
        if internal_value is None:
            return
        self._check_list(internal_value, "Value")
        element_data_type = self._resolved_element_type(internal_value)
        # 遇到第一个不合法的元素即失败
        for element in internal_value:
            element_data_type.validate_internal_value(element)

    def convert_json_to_internal_value(self, json_value: Any) -> Any:
        if json_value is None:
            return None
        self._check_list(json_value, "Json value")
        element_data_type = self._resolved_element_type(json_value)
        return [
            element_data_type.convert_json_to_internal_value(element)
            for element in json_value
        ]

    def convert_internal_to_json_value(self, internal_value: Any) -> Any:
        if internal_value is None:
            return None
        self._check_list(internal_value, "Value")
        element_data_type = self._resolved_element_type(internal_value)
        json_values: List[Any] = []
        for element in internal_value:
            json_values.append(element_data_type.convert_internal_to_json_value(element))
        return json_values

    def _check_list(self, value: Any, kind: str):
        if not isinstance(value, (list, tuple)):
            raise InvalidValueError(
                f"{kind} for type 'list' must be a list, "
                f"but was {value!r} ({type(value).__name__})",
                value
            )

    def _resolved_element_type(self, value: Any) -> DataType:
        # 元素类型在 parse 中解析；解析失败的列表类型不能处理值
        if self.element_data_type is None:
            raise InvalidValueError("List type has no resolved element type", value)
        return self.element_data_type
