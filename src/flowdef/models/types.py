"""
类型描述符模型
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple

from ..exceptions import InvalidArgumentError


@dataclass(frozen=True)
class TypeDescriptor:
    """类型描述符基类

    描述变量或参数值的形状，由工作流定义持有，解析后不可变。
    子类通过类属性 ``name`` 声明其类型名。
    """
    name: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {"name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry) -> "TypeDescriptor":
        """从字典构建描述符，嵌套类型通过 registry 读取"""
        return cls()


@dataclass(frozen=True)
class TextType(TypeDescriptor):
    """文本类型"""
    name: ClassVar[str] = "text"


@dataclass(frozen=True)
class NumberType(TypeDescriptor):
    """数值类型"""
    name: ClassVar[str] = "number"


@dataclass(frozen=True)
class BooleanType(TypeDescriptor):
    """布尔类型"""
    name: ClassVar[str] = "boolean"


@dataclass(frozen=True)
class DateType(TypeDescriptor):
    """日期时间类型"""
    name: ClassVar[str] = "date"


@dataclass(frozen=True)
class ChoiceType(TypeDescriptor):
    """枚举选项类型"""
    name: ClassVar[str] = "choice"
    options: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "options": list(self.options)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry) -> "ChoiceType":
        options = data.get("options") or ()
        if not isinstance(options, (list, tuple)) or not all(isinstance(o, str) for o in options):
            raise InvalidArgumentError(f"Choice options must be a list of strings, but was {options!r}")
        return cls(options=tuple(options))


@dataclass(frozen=True)
class ListType(TypeDescriptor):
    """列表类型（元素类型可任意嵌套）"""
    name: ClassVar[str] = "list"
    element_type: Optional[TypeDescriptor] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.element_type is not None:
            data["element_type"] = self.element_type.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry) -> "ListType":
        element_data = data.get("element_type")
        element_type = None
        if element_data is not None:
            element_type = registry.read_descriptor(element_data)
        return cls(element_type=element_type)
