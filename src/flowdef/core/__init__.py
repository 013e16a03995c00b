"""Core runtime components"""

from .context import ParseContext
from .data_types import (
    DataType, AbstractDataType, TextDataType, NumberDataType,
    BooleanDataType, DateDataType, ChoiceDataType
)
from .list_type import ListDataType
from .registry import TypeRegistry, default_registry
from .conditions import (
    ComparatorImpl, LessThanImpl, LessThanOrEqualImpl, GreaterThanImpl,
    GreaterThanOrEqualImpl, EqualsImpl, NotEqualsImpl, ConditionService
)
from .parser import WorkflowParser
from .timers import resolve_due_date
from .variables import convert_variables_from_json, convert_variables_to_json

__all__ = [
    "ParseContext",
    "DataType",
    "AbstractDataType",
    "TextDataType",
    "NumberDataType",
    "BooleanDataType",
    "DateDataType",
    "ChoiceDataType",
    "ListDataType",
    "TypeRegistry",
    "default_registry",
    "ComparatorImpl",
    "LessThanImpl",
    "LessThanOrEqualImpl",
    "GreaterThanImpl",
    "GreaterThanOrEqualImpl",
    "EqualsImpl",
    "NotEqualsImpl",
    "ConditionService",
    "WorkflowParser",
    "resolve_due_date",
    "convert_variables_from_json",
    "convert_variables_to_json"
]
