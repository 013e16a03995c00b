"""
定时器到期时间测试
"""
import pytest
from datetime import date, datetime

from flowdef.core.timers import resolve_base, resolve_due_date
from flowdef.models.binding import Binding
from flowdef.models.relative_time import AfterRelativeTime, NextRelativeTime, TimeInDay
from flowdef.models.scope import ScopeInstance
from flowdef.exceptions import InvalidArgumentError, InvalidValueError


NOW = datetime(2024, 3, 10, 12, 0)


class TestResolveDueDate:
    """到期时间解析测试类"""

    def test_unbound_base_uses_now(self, scope):
        expression = AfterRelativeTime(duration=1, unit="hours")
        assert resolve_due_date(expression, scope, NOW) == datetime(2024, 3, 10, 13, 0)

    def test_base_from_scope_variable(self, scope):
        expression = AfterRelativeTime(
            base=Binding.variable("start_time"),
            at=TimeInDay(hour=9, minutes=0),
            duration=2,
            unit="days"
        )

        assert resolve_due_date(expression, scope, NOW) == datetime(2024, 2, 2, 9, 0)

    def test_base_from_parent_scope(self, scope):
        child = ScopeInstance(workflow_id="test-workflow", instance_id="child", parent=scope)
        expression = NextRelativeTime(base=Binding.variable("start_time"), unit="month")

        assert resolve_due_date(expression, child, NOW) == datetime(2024, 2, 1, 15, 30)

    def test_missing_variable_falls_back_to_now(self, scope):
        expression = AfterRelativeTime(base=Binding.variable("missing"), duration=1, unit="days")
        assert resolve_due_date(expression, scope, NOW) == datetime(2024, 3, 11, 12, 0)

    def test_no_scope(self):
        expression = AfterRelativeTime(base=Binding.variable("start_time"), duration=1, unit="days")
        assert resolve_due_date(expression, None, NOW) == datetime(2024, 3, 11, 12, 0)

    def test_literal_iso_string_base(self):
        expression = AfterRelativeTime(
            base=Binding.literal("2023-01-31T10:00:00"), duration=1, unit="months"
        )
        assert resolve_due_date(expression, None, NOW) == datetime(2023, 2, 28, 10, 0)

    def test_date_base_starts_at_midnight(self):
        expression = AfterRelativeTime(base=Binding.literal(date(2024, 2, 28)), duration=1, unit="days")
        assert resolve_due_date(expression, None, NOW) == datetime(2024, 2, 29, 0, 0)

    def test_non_date_base(self, scope):
        expression = AfterRelativeTime(base=Binding.variable("amount"), duration=1, unit="days")

        with pytest.raises(InvalidValueError) as exc_info:
            resolve_due_date(expression, scope, NOW)
        assert exc_info.value.value == 42

    def test_unparseable_string_base(self):
        expression = AfterRelativeTime(base=Binding.literal("not-a-date"), duration=1, unit="days")
        with pytest.raises(InvalidValueError):
            resolve_due_date(expression, None, NOW)

    def test_invalid_expression(self, scope):
        with pytest.raises(InvalidArgumentError):
            resolve_due_date(NextRelativeTime(unit="fortnight"), scope, NOW)

    def test_resolve_base_keeps_datetime(self, scope):
        expression = AfterRelativeTime(base=Binding.variable("start_time"), duration=1, unit="days")
        assert resolve_base(expression, scope, NOW) is scope.get_variable("start_time")
