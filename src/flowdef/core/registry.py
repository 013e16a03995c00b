"""
类型注册表

类型名 -> (描述符类, 类型处理器构造函数) 的显式注册表，进程启动时填充。
新增类型只需注册，不需要修改已有的类型处理器。
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Type

from .context import ParseContext
from .data_types import (
    DataType, TextDataType, NumberDataType, BooleanDataType,
    DateDataType, ChoiceDataType
)
from .list_type import ListDataType
from ..models.types import TypeDescriptor
from ..exceptions import UnknownTypeError, InvalidArgumentError


logger = logging.getLogger(__name__)


DataTypeConstructor = Callable[[], DataType]


class TypeRegistry:
    """类型注册表"""

    def __init__(self):
        self.descriptors: Dict[str, Type[TypeDescriptor]] = {}
        self.constructors: Dict[Type[TypeDescriptor], DataTypeConstructor] = {}

    def register(
        self,
        descriptor_class: Type[TypeDescriptor],
        constructor: DataTypeConstructor
    ) -> "TypeRegistry":
        """注册类型"""
        if not descriptor_class.name:
            raise ValueError(f"Descriptor {descriptor_class.__name__} must declare a name")
        if not callable(constructor):
            raise ValueError(f"Constructor for type {descriptor_class.name} must be callable")

        self.descriptors[descriptor_class.name] = descriptor_class
        self.constructors[descriptor_class] = constructor

        logger.debug(f"Registered type: {descriptor_class.name}")
        return self

    def type_names(self) -> List[str]:
        """列出所有已注册的类型名"""
        return sorted(self.descriptors)

    def read_descriptor(self, data: Any) -> TypeDescriptor:
        """从字符串简写或字典读取类型描述符"""
        if isinstance(data, TypeDescriptor):
            return data
        if isinstance(data, str):
            data = {"name": data}
        if not isinstance(data, dict):
            raise UnknownTypeError(data, "type descriptor must be a name or a mapping")

        name = data.get("name")
        if not isinstance(name, str):
            raise UnknownTypeError(name, "type name must be a string")
        descriptor_class = self.descriptors.get(name)
        if descriptor_class is None:
            raise UnknownTypeError(name)
        return descriptor_class.from_dict(data, self)

    def instantiate_data_type(self, descriptor: TypeDescriptor) -> DataType:
        """创建未解析的类型处理器"""
        constructor = self.constructors.get(type(descriptor))
        if constructor is None:
            raise UnknownTypeError(getattr(descriptor, "name", descriptor))
        return constructor()

    def create_data_type(self, descriptor: Any, context: ParseContext) -> Optional[DataType]:
        """创建并解析类型处理器树

        未注册的类型通过 context 报告并返回 None，解析继续进行以收集更多错误。
        """
        try:
            descriptor = self.read_descriptor(descriptor)
            data_type = self.instantiate_data_type(descriptor)
        except (UnknownTypeError, InvalidArgumentError) as e:
            context.add_error(str(e))
            return None

        data_type.parse(descriptor, context)
        return data_type

    def parse_data_type(self, descriptor: Any) -> DataType:
        """在独立的上下文中创建类型处理器，有错误时汇总抛出"""
        context = ParseContext(self)
        data_type = self.create_data_type(descriptor, context)
        context.raise_if_errors("Type parsing failed")
        return data_type


def default_registry() -> TypeRegistry:
    """创建包含内置类型的注册表"""
    registry = TypeRegistry()
    for constructor in (
        TextDataType, NumberDataType, BooleanDataType,
        DateDataType, ChoiceDataType, ListDataType
    ):
        registry.register(constructor.descriptor_class, constructor)
    return registry
