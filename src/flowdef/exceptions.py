"""
工作流定义核心异常定义
"""
from typing import Any, List, Optional, Sequence


class FlowdefError(Exception):
    """基础异常"""
    pass


class WorkflowParseError(FlowdefError):
    """工作流解析异常（YAML/JSON 语法错误等）"""
    pass


class WorkflowValidationError(FlowdefError):
    """工作流验证异常，汇总解析期间收集到的所有错误"""
    def __init__(self, errors: Sequence[str], message: str = None):
        self.errors = list(errors)
        msg = message or "Workflow validation failed"
        super().__init__(f"{msg}: {self.errors}")


class UnknownTypeError(FlowdefError):
    """未注册的类型描述符"""
    def __init__(self, type_name: Any, message: str = None):
        self.type_name = type_name
        msg = f"Unknown type '{type_name}'"
        if message:
            msg += f": {message}"
        super().__init__(msg)


class InvalidValueError(FlowdefError):
    """值未通过结构校验或转换失败"""
    def __init__(self, message: str, value: Any = None):
        self.message = message
        self.value = value
        super().__init__(message)


class InvalidArgumentError(FlowdefError, ValueError):
    """构造参数非法（旧格式时间字符串、整数解析失败等）"""
    pass


class UnsupportedDiscriminatorError(FlowdefError):
    """多态读取时遇到无法识别的 type 字段"""
    def __init__(self, discriminator: Any, supported: Optional[List[str]] = None):
        self.discriminator = discriminator
        self.supported = list(supported or [])
        msg = f"Unsupported type discriminator '{discriminator}'"
        if self.supported:
            msg += f" (expected one of {self.supported})"
        super().__init__(msg)
