"""
类型处理器测试
"""
import pytest
from datetime import datetime
from decimal import Decimal

from flowdef.core.data_types import (
    TextDataType, NumberDataType, BooleanDataType, DateDataType, ChoiceDataType
)
from flowdef.models.types import TextType, NumberType, BooleanType, DateType, ChoiceType
from flowdef.exceptions import InvalidValueError


@pytest.fixture(params=["text", "number", "boolean", "date", {"name": "choice", "options": ["a"]}])
def primitive_data_type(request, registry):
    """所有内置基本类型"""
    return registry.parse_data_type(request.param)


class TestPrimitiveDataTypes:
    """基本类型测试类"""

    def test_none_is_always_valid(self, primitive_data_type):
        """None 总是合法"""
        primitive_data_type.validate_internal_value(None)
        assert primitive_data_type.convert_json_to_internal_value(None) is None
        assert primitive_data_type.convert_internal_to_json_value(None) is None

    def test_text(self, parse_context):
        data_type = TextDataType()
        data_type.parse(TextType(), parse_context)

        data_type.validate_internal_value("hello")
        assert data_type.convert_json_to_internal_value("hello") == "hello"
        assert not data_type.is_serialize_required()

        with pytest.raises(InvalidValueError) as exc_info:
            data_type.validate_internal_value(5)
        assert exc_info.value.value == 5
        assert "text" in str(exc_info.value)

    def test_number_accepts_real_numbers(self, parse_context):
        data_type = NumberDataType()
        data_type.parse(NumberType(), parse_context)

        for value in (0, -3, 2.5, Decimal("1.5")):
            data_type.validate_internal_value(value)
        assert data_type.convert_json_to_internal_value(7) == 7

    def test_number_rejects_booleans_and_strings(self, parse_context):
        data_type = NumberDataType()
        data_type.parse(NumberType(), parse_context)

        with pytest.raises(InvalidValueError):
            data_type.validate_internal_value(True)
        with pytest.raises(InvalidValueError):
            data_type.convert_json_to_internal_value("5")

    def test_boolean(self, parse_context):
        data_type = BooleanDataType()
        data_type.parse(BooleanType(), parse_context)

        data_type.validate_internal_value(False)
        with pytest.raises(InvalidValueError):
            data_type.validate_internal_value(0)


class TestDateDataType:
    """日期类型测试类"""

    @pytest.fixture
    def data_type(self, parse_context):
        data_type = DateDataType()
        data_type.parse(DateType(), parse_context)
        return data_type

    def test_serialize_required(self, data_type):
        assert data_type.is_serialize_required()

    def test_json_to_internal(self, data_type):
        value = data_type.convert_json_to_internal_value("2024-01-31T10:15:00")
        assert value == datetime(2024, 1, 31, 10, 15)

    def test_internal_to_json(self, data_type):
        json_value = data_type.convert_internal_to_json_value(datetime(2024, 1, 31, 10, 15))
        assert json_value == "2024-01-31T10:15:00"

    def test_internal_value_is_kept(self, data_type):
        """已经是内部表示的值保持不变"""
        value = datetime(2024, 1, 31)
        assert data_type.convert_json_to_internal_value(value) is value

    def test_invalid_string(self, data_type):
        with pytest.raises(InvalidValueError) as exc_info:
            data_type.convert_json_to_internal_value("not a date")
        assert exc_info.value.value == "not a date"

    def test_non_string_json(self, data_type):
        with pytest.raises(InvalidValueError):
            data_type.convert_json_to_internal_value(12345)

    def test_validate_rejects_strings(self, data_type):
        with pytest.raises(InvalidValueError):
            data_type.validate_internal_value("2024-01-31")


class TestChoiceDataType:
    """枚举类型测试类"""

    def test_value_must_be_an_option(self, parse_context):
        data_type = ChoiceDataType()
        data_type.parse(ChoiceType(options=("low", "high")), parse_context)

        data_type.validate_internal_value("low")
        with pytest.raises(InvalidValueError) as exc_info:
            data_type.validate_internal_value("medium")
        assert "['low', 'high']" in str(exc_info.value)

    def test_choice_without_options_is_reported(self, parse_context):
        data_type = ChoiceDataType()
        data_type.parse(ChoiceType(), parse_context)

        assert parse_context.has_errors()
        assert "option" in parse_context.errors[0]
