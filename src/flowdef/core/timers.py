"""
定时器到期时间解析
"""
import logging
from datetime import date, datetime, time
from typing import Any, Optional

from .data_types import DateDataType
from ..models.relative_time import RelativeTime
from ..models.scope import ScopeInstance
from ..exceptions import InvalidArgumentError, InvalidValueError


logger = logging.getLogger(__name__)

_DATE_DATA_TYPE = DateDataType()


def resolve_base(relative_time: RelativeTime, scope: Optional[ScopeInstance], now: datetime) -> datetime:
    """解析基准时间；未绑定或绑定值为空时使用调用方提供的 now"""
    if relative_time.base is None or not relative_time.base.is_bound:
        return now

    value: Any = relative_time.base.resolve(scope)
    if value is None:
        logger.debug(f"Base binding of '{relative_time}' resolved to nothing, using now")
        return now
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return _DATE_DATA_TYPE.convert_json_to_internal_value(value)
    raise InvalidValueError(
        f"Base of relative time must be a date, but was {value!r} ({type(value).__name__})",
        value
    )


def resolve_due_date(
    relative_time: RelativeTime,
    scope: Optional[ScopeInstance],
    now: datetime
) -> datetime:
    """计算相对时间在给定作用域中的绝对时间"""
    if not relative_time.valid():
        raise InvalidArgumentError(f"Invalid relative time: {relative_time}")

    base = resolve_base(relative_time, scope, now)
    due_date = relative_time.resolve(base)
    logger.debug(f"Resolved '{relative_time}' against {base.isoformat()} to {due_date.isoformat()}")
    return due_date
