"""
类型注册表测试
"""
import pytest
from dataclasses import dataclass
from typing import Any, ClassVar

from flowdef.core.context import ParseContext
from flowdef.core.data_types import AbstractDataType, TextDataType
from flowdef.core.list_type import ListDataType
from flowdef.core.registry import TypeRegistry
from flowdef.models.types import TypeDescriptor, ListType, TextType
from flowdef.exceptions import UnknownTypeError, InvalidValueError, WorkflowValidationError


@dataclass(frozen=True)
class EmailType(TypeDescriptor):
    name: ClassVar[str] = "email"


class EmailDataType(AbstractDataType):
    descriptor_class = EmailType
    value_types = (str,)

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str) and "@" in value


class TestTypeRegistry:
    """类型注册表测试类"""

    def test_builtin_type_names(self, registry):
        assert registry.type_names() == ["boolean", "choice", "date", "list", "number", "text"]

    def test_read_descriptor_shorthand(self, registry):
        assert registry.read_descriptor("text") == TextType()

    def test_read_nested_descriptor(self, registry):
        descriptor = registry.read_descriptor({
            "name": "list",
            "element_type": {"name": "list", "element_type": "text"}
        })
        assert descriptor == ListType(element_type=ListType(element_type=TextType()))
        assert descriptor.to_dict() == {
            "name": "list",
            "element_type": {"name": "list", "element_type": {"name": "text"}}
        }

    def test_read_unknown_descriptor(self, registry):
        with pytest.raises(UnknownTypeError) as exc_info:
            registry.read_descriptor("money")
        assert exc_info.value.type_name == "money"

    def test_unknown_type_is_reported_not_raised(self, registry, parse_context):
        data_type = registry.create_data_type("money", parse_context)

        assert data_type is None
        assert parse_context.errors == ["Unknown type 'money'"]

    def test_unknown_nested_type_is_reported(self, registry, parse_context):
        data_type = registry.create_data_type(
            {"name": "list", "element_type": "money"}, parse_context
        )

        assert data_type is None
        assert "money" in parse_context.errors[0]

    def test_unregistered_descriptor_instance(self, registry, parse_context):
        assert registry.create_data_type(EmailType(), parse_context) is None
        assert parse_context.has_errors()

    def test_create_returns_fresh_instances(self, registry, parse_context):
        first = registry.create_data_type("text", parse_context)
        second = registry.create_data_type("text", parse_context)

        assert isinstance(first, TextDataType)
        assert first is not second

    def test_parse_data_type_raises_collected_errors(self, registry):
        with pytest.raises(WorkflowValidationError) as exc_info:
            registry.parse_data_type({"name": "list"})
        assert len(exc_info.value.errors) == 1

    def test_register_custom_type(self, registry):
        """新增类型只需注册，列表类型无需修改即可嵌套使用"""
        registry.register(EmailType, EmailDataType)

        email_list = registry.parse_data_type({"name": "list", "element_type": "email"})

        assert isinstance(email_list, ListDataType)
        email_list.validate_internal_value(["ann@example.com"])
        with pytest.raises(InvalidValueError):
            email_list.validate_internal_value(["ann@example.com", "bob"])

    def test_register_requires_name(self):
        registry = TypeRegistry()
        with pytest.raises(ValueError):
            registry.register(TypeDescriptor, TextDataType)

    def test_empty_registry(self):
        context = ParseContext(TypeRegistry())
        assert context.registry.create_data_type("text", context) is None
        assert context.errors == ["Unknown type 'text'"]


class TestParseContext:
    """解析上下文测试类"""

    def test_errors_carry_path(self, parse_context):
        with parse_context.push("variables[0]"):
            with parse_context.push("type"):
                parse_context.add_error("broken")
        parse_context.add_error("top level")

        assert parse_context.errors == ["variables[0].type: broken", "top level"]

    def test_raise_if_errors(self, parse_context):
        parse_context.raise_if_errors()

        parse_context.add_error("first")
        parse_context.add_error("second")
        with pytest.raises(WorkflowValidationError) as exc_info:
            parse_context.raise_if_errors()
        assert exc_info.value.errors == ["first", "second"]


class TestMalformedDescriptors:
    """结构错误的类型描述符测试类"""

    def test_non_string_type_name(self, registry, parse_context):
        with pytest.raises(UnknownTypeError):
            registry.read_descriptor({"name": ["list"]})

        assert registry.create_data_type({"name": ["list"]}, parse_context) is None
        assert registry.create_data_type({"name": "choice", "options": 5}, parse_context) is None
        assert len(parse_context.errors) == 2
