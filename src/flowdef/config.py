"""
运行配置
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class FlowdefConfig:
    """配置项"""
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    validate_schema: bool = True


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(dotenv_path: Optional[str] = None) -> FlowdefConfig:
    """从环境变量（以及 .env 文件）加载配置"""
    load_dotenv(dotenv_path)

    return FlowdefConfig(
        log_level=os.getenv("FLOWDEF_LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("FLOWDEF_LOG_FORMAT", DEFAULT_LOG_FORMAT),
        validate_schema=_env_flag("FLOWDEF_VALIDATE_SCHEMA", True)
    )


def configure_logging(config: FlowdefConfig):
    """配置日志"""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=config.log_format
    )
