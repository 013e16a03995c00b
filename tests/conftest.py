"""
Pytest 配置和公共 fixtures
"""
import pytest
from datetime import datetime

from flowdef.core.context import ParseContext
from flowdef.core.parser import WorkflowParser
from flowdef.core.registry import TypeRegistry, default_registry
from flowdef.models.scope import ScopeInstance


@pytest.fixture
def registry() -> TypeRegistry:
    """创建包含内置类型的注册表"""
    return default_registry()


@pytest.fixture
def parse_context(registry) -> ParseContext:
    """创建解析上下文"""
    return ParseContext(registry)


@pytest.fixture
def parser(registry) -> WorkflowParser:
    """创建解析器实例"""
    return WorkflowParser(registry=registry)


@pytest.fixture
def scope() -> ScopeInstance:
    """创建作用域实例"""
    return ScopeInstance(
        workflow_id="test-workflow",
        instance_id="test-instance",
        variables={
            "amount": 42,
            "start_time": datetime(2024, 1, 31, 15, 30),
            "label": "urgent"
        }
    )


@pytest.fixture
def sample_workflow_definition() -> dict:
    """示例工作流定义"""
    return {
        "workflow": {
            "id": "vacation-request",
            "name": "Vacation Request",
            "description": "Request days off",
            "source_workflow_id": "vacation.bpmn",
            "creator_id": "ann",
            "variables": [
                {"id": "reason", "type": "text"},
                {"id": "days", "type": {"name": "number"}},
                {"id": "approvers", "type": {"name": "list", "element_type": "text"}},
                {
                    "id": "periods",
                    "type": {
                        "name": "list",
                        "element_type": {"name": "list", "element_type": "date"}
                    }
                },
                {"id": "priority", "type": {"name": "choice", "options": ["low", "high"]}},
                {"id": "notes"}
            ],
            "timers": [
                {
                    "id": "reminder",
                    "due_date": {
                        "type": "after",
                        "duration": 2,
                        "unit": "days",
                        "base": "start_time",
                        "at": "9:00"
                    }
                },
                {
                    "id": "weekly-report",
                    "activity_id": "report",
                    "due_date": {"type": "next", "unit": "monday", "at": "8:30"}
                },
                {"id": "escalation", "due_date": {"after": "5 days"}}
            ]
        }
    }
