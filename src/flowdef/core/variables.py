"""
变量值的 JSON 转换
"""
import logging
from typing import Any, Dict

from ..models.workflow import Workflow, Variable
from ..exceptions import InvalidValueError


logger = logging.getLogger(__name__)


def _get_typed_variable(workflow: Workflow, variable_id: str) -> Variable:
    variable = workflow.get_variable(variable_id)
    if variable is None:
        raise InvalidValueError(f"Unknown variable '{variable_id}'", variable_id)
    return variable


def convert_variables_from_json(workflow: Workflow, payload: Dict[str, Any]) -> Dict[str, Any]:
    """JSON 变量值转换为内部值并校验"""
    values = {}
    for variable_id, json_value in payload.items():
        variable = _get_typed_variable(workflow, variable_id)
        data_type = variable.data_type
        if data_type is None:
            values[variable_id] = json_value
            continue

        if data_type.is_serialize_required():
            internal_value = data_type.convert_json_to_internal_value(json_value)
        else:
            internal_value = json_value
        data_type.validate_internal_value(internal_value)
        values[variable_id] = internal_value

    logger.debug(f"Converted {len(values)} variable(s) of workflow {workflow.id} from json")
    return values


def convert_variables_to_json(workflow: Workflow, values: Dict[str, Any]) -> Dict[str, Any]:
    """内部变量值转换为 JSON 值"""
    payload = {}
    for variable_id, internal_value in values.items():
        data_type = _get_typed_variable(workflow, variable_id).data_type
        if data_type is not None and data_type.is_serialize_required():
            payload[variable_id] = data_type.convert_internal_to_json_value(internal_value)
        else:
            payload[variable_id] = internal_value
    return payload
