"""Workflow definition models"""

from .types import (
    TypeDescriptor, TextType, NumberType, BooleanType, DateType,
    ChoiceType, ListType
)
from .binding import Binding
from .scope import ScopeInstance
from .relative_time import (
    RelativeTime, AfterRelativeTime, NextRelativeTime, TimeInDay,
    read_relative_time, parse_backwards_compatible_string, parse_time_in_day
)
from .conditions import (
    Comparator, LessThan, LessThanOrEqual, GreaterThan,
    GreaterThanOrEqual, Equals, NotEquals, read_condition
)
from .workflow import Workflow, Variable, Timer

__all__ = [
    "TypeDescriptor",
    "TextType",
    "NumberType",
    "BooleanType",
    "DateType",
    "ChoiceType",
    "ListType",
    "Binding",
    "ScopeInstance",
    "RelativeTime",
    "AfterRelativeTime",
    "NextRelativeTime",
    "TimeInDay",
    "read_relative_time",
    "parse_backwards_compatible_string",
    "parse_time_in_day",
    "Comparator",
    "LessThan",
    "LessThanOrEqual",
    "GreaterThan",
    "GreaterThanOrEqual",
    "Equals",
    "NotEquals",
    "read_condition",
    "Workflow",
    "Variable",
    "Timer"
]
