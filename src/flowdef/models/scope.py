"""
作用域实例模型
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ScopeInstance:
    """作用域实例：保存工作流实例当前的变量值"""
    workflow_id: str = ""
    instance_id: str = ""
    variables: Dict[str, Any] = field(default_factory=dict)
    parent: Optional['ScopeInstance'] = None

    def get_variable(self, key: str, default: Any = None) -> Any:
        """获取变量值，本作用域没有时向父作用域查找"""
        if key in self.variables:
            return self.variables[key]
        elif self.parent:
            return self.parent.get_variable(key, default)
        return default

    def set_variable(self, key: str, value: Any):
        """设置变量值"""
        self.variables[key] = value

    def has_variable(self, key: str) -> bool:
        if key in self.variables:
            return True
        return self.parent.has_variable(key) if self.parent else False
