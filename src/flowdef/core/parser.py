"""
工作流解析器
"""
import yaml
import json
import logging
from datetime import date, datetime, time
from typing import Dict, Any, List, Optional, Union
from pathlib import Path

from jsonschema import Draft7Validator

from .context import ParseContext
from .data_types import DateDataType
from .registry import TypeRegistry, default_registry
from ..models.workflow import Workflow, Variable, Timer
from ..models.relative_time import read_relative_time
from ..exceptions import (
    WorkflowParseError, UnknownTypeError, InvalidArgumentError,
    InvalidValueError, UnsupportedDiscriminatorError
)


logger = logging.getLogger(__name__)


WORKFLOW_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
        "description": {"type": ["string", "null"]},
        "source_workflow_id": {"type": ["string", "null"]},
        "creator_id": {"type": ["string", "null"]},
        "metadata": {"type": "object"},
        "variables": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string"},
                    "type": {"type": ["string", "object"]},
                    "description": {"type": "string"}
                }
            }
        },
        "timers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string"},
                    "due_date": {"type": "object"},
                    "activity_id": {"type": "string"}
                }
            }
        }
    }
}


class WorkflowParser:
    """工作流解析器

    解析变量的类型描述符为类型处理器树，并读取定时器的相对时间。
    所有定义错误都会被收集，最后以 WorkflowValidationError 汇总抛出。
    """

    def __init__(self, registry: Optional[TypeRegistry] = None, validate_schema: bool = True):
        self.registry = registry or default_registry()
        self.validate_schema = validate_schema
        self.schema_validator = Draft7Validator(WORKFLOW_SCHEMA)
        self.parsers = {
            'yaml': self._parse_yaml,
            'yml': self._parse_yaml,
            'json': self._parse_json
        }

    def parse(self, source: Union[str, Path, Dict[str, Any]]) -> Workflow:
        """
        解析工作流定义

        Args:
            source: 工作流定义来源，可以是文件路径、字符串或字典

        Returns:
            Workflow: 解析后的工作流对象，变量的 data_type 已完全解析
        """
        if isinstance(source, dict):
            return self._parse_dict(source)

        if isinstance(source, Path):
            return self.parse_file(source)

        if isinstance(source, str):
            if "\n" not in source:
                path = Path(source)
                if path.suffix and path.is_file():
                    return self.parse_file(path)
            return self.parse_string(source)

        raise WorkflowParseError(f"Unsupported source type: {type(source)}")

    def parse_file(self, file_path: Path) -> Workflow:
        """解析工作流文件"""
        file_path = Path(file_path)
        suffix = file_path.suffix.lower().lstrip('.')
        if suffix not in self.parsers:
            raise WorkflowParseError(f"Unsupported file format: {suffix}")

        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()

        data = self.parsers[suffix](content)
        return self._parse_dict(data)

    def parse_string(self, content: str) -> Workflow:
        """解析工作流字符串"""
        # 先尝试 YAML，再尝试 JSON
        try:
            data = self._parse_yaml(content)
        except WorkflowParseError:
            data = self._parse_json(content)
        return self._parse_dict(data)

    def _parse_yaml(self, content: str) -> Dict[str, Any]:
        """解析YAML格式"""
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise WorkflowParseError(f"Failed to parse YAML: {e}")

    def _parse_json(self, content: str) -> Dict[str, Any]:
        """解析JSON格式"""
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise WorkflowParseError(f"Failed to parse JSON: {e}")

    def _parse_dict(self, data: Dict[str, Any]) -> Workflow:
        """解析字典格式的工作流定义"""
        if not isinstance(data, dict):
            raise WorkflowParseError(
                f"Workflow definition must be a mapping, but was {type(data).__name__}"
            )
        if 'workflow' in data:
            data = data['workflow']
        if not isinstance(data, dict):
            raise WorkflowParseError("Workflow definition must be a mapping")

        context = ParseContext(self.registry)

        if self.validate_schema:
            self._validate_schema(data, context)
            context.raise_if_errors("Workflow schema validation failed")

        workflow = Workflow(
            id=data.get('id') or Workflow().id,
            name=data.get('name', ''),
            description=data.get('description'),
            source_workflow_id=data.get('source_workflow_id'),
            create_time=self._parse_create_time(data.get('create_time'), context),
            creator_id=data.get('creator_id'),
            metadata=data.get('metadata', {})
        )

        # 解析变量
        for index, variable_data in enumerate(self._as_list(data, 'variables', context)):
            with context.push(f"variables[{index}]"):
                variable = self._parse_variable(variable_data, context)
            if variable is not None:
                workflow.variables.append(variable)

        # 解析定时器
        for index, timer_data in enumerate(self._as_list(data, 'timers', context)):
            with context.push(f"timers[{index}]"):
                timer = self._parse_timer(timer_data, context)
            if timer is not None:
                workflow.timers.append(timer)

        for error in workflow.validate():
            context.add_error(error)

        context.raise_if_errors()

        logger.info(
            f"Parsed workflow '{workflow.name}' ({workflow.id}): "
            f"{len(workflow.variables)} variable(s), {len(workflow.timers)} timer(s)"
        )
        return workflow

    def _validate_schema(self, data: Dict[str, Any], context: ParseContext):
        """使用 JSON Schema 校验文档结构"""
        for error in self.schema_validator.iter_errors(data):
            path = ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
            context.add_error(f"{path}: {error.message}")

    def _as_list(self, data: Dict[str, Any], key: str, context: ParseContext) -> List[Any]:
        value = data.get(key) or []
        if not isinstance(value, list):
            context.add_error(f"'{key}' must be a list")
            return []
        return value

    def _parse_create_time(self, value: Any, context: ParseContext) -> Optional[datetime]:
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.min)
        try:
            return DateDataType().convert_json_to_internal_value(value)
        except InvalidValueError as e:
            context.add_error(f"create_time: {e}")
            return None

    def _parse_variable(self, data: Dict[str, Any], context: ParseContext) -> Optional[Variable]:
        """解析变量"""
        if not isinstance(data, dict) or not data.get('id'):
            context.add_error("Variable must have an id")
            return None

        variable = Variable(id=data['id'], description=data.get('description'))

        type_data = data.get('type')
        if type_data is None:
            # 未声明类型的变量不做转换
            return variable

        with context.push("type"):
            try:
                variable.type = self.registry.read_descriptor(type_data)
            except (UnknownTypeError, InvalidArgumentError) as e:
                context.add_error(str(e))
                return variable
            variable.data_type = self.registry.create_data_type(variable.type, context)

        return variable

    def _parse_timer(self, data: Dict[str, Any], context: ParseContext) -> Optional[Timer]:
        """解析定时器"""
        if not isinstance(data, dict) or not data.get('id'):
            context.add_error("Timer must have an id")
            return None

        timer = Timer(id=data['id'], activity_id=data.get('activity_id'))

        with context.push("due_date"):
            try:
                timer.due_date = read_relative_time(data.get('due_date'))
            except (InvalidArgumentError, UnsupportedDiscriminatorError) as e:
                context.add_error(str(e))

        return timer
