"""
flowdef - 工作流定义的类型转换与相对时间核心
"""

__version__ = "0.1.0"

from .core.registry import TypeRegistry, default_registry
from .core.parser import WorkflowParser
from .core.conditions import ConditionService
from .core.timers import resolve_due_date
from .models.workflow import Workflow, Variable, Timer
from .models.relative_time import (
    RelativeTime, AfterRelativeTime, NextRelativeTime,
    read_relative_time, parse_backwards_compatible_string
)

__all__ = [
    "TypeRegistry",
    "default_registry",
    "WorkflowParser",
    "ConditionService",
    "resolve_due_date",
    "Workflow",
    "Variable",
    "Timer",
    "RelativeTime",
    "AfterRelativeTime",
    "NextRelativeTime",
    "read_relative_time",
    "parse_backwards_compatible_string"
]
