"""
绑定模型
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Binding:
    """绑定：字面量或变量引用，执行时解析为具体值"""
    value: Any = None
    expression: Optional[str] = None

    @property
    def is_bound(self) -> bool:
        return self.value is not None or self.expression is not None

    def resolve(self, scope) -> Any:
        """在作用域中解析绑定值"""
        if self.expression is not None:
            if scope is None:
                return None
            return scope.get_variable(self.expression)
        return self.value

    def to_data(self) -> Any:
        """序列化；只有表达式时写为字符串"""
        if self.expression is not None and self.value is None:
            return self.expression
        data = {}
        if self.value is not None:
            data["value"] = self.value
        if self.expression is not None:
            data["expression"] = self.expression
        return data

    @classmethod
    def from_data(cls, data: Any) -> Optional["Binding"]:
        """反序列化；字符串视为变量表达式"""
        if data is None:
            return None
        if isinstance(data, str):
            return cls(expression=data)
        if isinstance(data, dict):
            return cls(value=data.get("value"), expression=data.get("expression"))
        return cls(value=data)

    @classmethod
    def variable(cls, variable_id: str) -> "Binding":
        return cls(expression=variable_id)

    @classmethod
    def literal(cls, value: Any) -> "Binding":
        return cls(value=value)
