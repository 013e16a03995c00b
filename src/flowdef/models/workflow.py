"""
工作流定义模型
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from uuid import uuid4
from datetime import datetime

from .types import TypeDescriptor
from .relative_time import RelativeTime


@dataclass
class Variable:
    """工作流变量"""
    id: str
    type: Optional[TypeDescriptor] = None
    description: Optional[str] = None
    data_type: Any = field(default=None, repr=False, compare=False)  # 解析后的运行时类型

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id}
        if self.type is not None:
            data["type"] = self.type.to_dict()
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class Timer:
    """定时器"""
    id: str
    due_date: Optional[RelativeTime] = None
    activity_id: Optional[str] = None  # 绑定的活动ID

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id}
        if self.due_date is not None:
            data["due_date"] = self.due_date.to_dict()
        if self.activity_id:
            data["activity_id"] = self.activity_id
        return data


@dataclass
class Workflow:
    """工作流定义"""
    id: str = field(default_factory=lambda: str(uuid4()))
    name: str = ""
    description: Optional[str] = None
    source_workflow_id: Optional[str] = None  # 来源（编辑器/BPMN文件）中的ID
    create_time: Optional[datetime] = None
    creator_id: Optional[str] = None
    variables: List[Variable] = field(default_factory=list)
    timers: List[Timer] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_variable(self, variable_id: str, type: TypeDescriptor = None) -> "Workflow":
        """添加变量"""
        self.variables.append(Variable(id=variable_id, type=type))
        return self

    def add_timer(self, timer: Timer) -> "Workflow":
        """添加定时器"""
        self.timers.append(timer)
        return self

    def get_variable(self, variable_id: str) -> Optional[Variable]:
        """根据ID获取变量"""
        for variable in self.variables:
            if variable.id == variable_id:
                return variable
        return None

    def get_timer(self, timer_id: str) -> Optional[Timer]:
        """根据ID获取定时器"""
        for timer in self.timers:
            if timer.id == timer_id:
                return timer
        return None

    def validate(self) -> List[str]:
        """验证工作流定义的合法性"""
        errors = []

        # 检查变量ID唯一性
        variable_ids = [variable.id for variable in self.variables]
        if len(variable_ids) != len(set(variable_ids)):
            errors.append("Duplicate variable IDs found")

        # 检查定时器ID唯一性
        timer_ids = [timer.id for timer in self.timers]
        if len(timer_ids) != len(set(timer_ids)):
            errors.append("Duplicate timer IDs found")

        for timer in self.timers:
            if timer.due_date is not None and not timer.due_date.valid():
                errors.append(f"Timer '{timer.id}' has an invalid due date: {timer.due_date}")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.description:
            data["description"] = self.description
        if self.source_workflow_id:
            data["source_workflow_id"] = self.source_workflow_id
        if self.create_time:
            data["create_time"] = self.create_time.isoformat()
        if self.creator_id:
            data["creator_id"] = self.creator_id
        data["variables"] = [variable.to_dict() for variable in self.variables]
        data["timers"] = [timer.to_dict() for timer in self.timers]
        if self.metadata:
            data["metadata"] = self.metadata
        return data
