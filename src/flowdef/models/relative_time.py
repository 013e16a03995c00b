"""
相对时间表达式模型

相对时间描述一个尚未解析的未来时间点，例如 "2 days after X"、
"next monday at 9:00"。定义解析时构造，之后不可变；执行时以基准时间
调用 ``resolve`` 得到绝对时间。
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, Mapping, Optional, Type

from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

from .binding import Binding
from ..exceptions import InvalidArgumentError, UnsupportedDiscriminatorError


NEXT = "next"
AFTER = "after"

SECONDS = "seconds"
MINUTES = "minutes"
HOURS = "hours"
DAYS = "days"
WEEKS = "weeks"
MONTHS = "months"
YEARS = "years"

AFTER_UNITS = (SECONDS, MINUTES, HOURS, DAYS, WEEKS, MONTHS, YEARS)

DAY = "day"
WEEK = "week"
MONTH = "month"
YEAR = "year"

WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

NEXT_UNITS = (DAY, WEEK, MONTH, YEAR) + tuple(WEEKDAYS)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer '{text}'")
    return int(text)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class TimeInDay:
    """一天中的时刻（小时、分钟）"""
    hour: int
    minutes: int = 0

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise InvalidArgumentError(f"Hour must be in [0,23], but was {self.hour}")
        if not 0 <= self.minutes <= 59:
            raise InvalidArgumentError(f"Minutes must be in [0,59], but was {self.minutes}")

    def apply(self, value: datetime) -> datetime:
        """保留日期部分，替换时刻"""
        return value.replace(hour=self.hour, minute=self.minutes, second=0, microsecond=0)

    def __str__(self) -> str:
        return f"{self.hour}:{self.minutes:02d}"


def parse_time_in_day(value: Optional[str]) -> Optional[TimeInDay]:
    """解析 ``H:MM`` 格式的 at 属性

    没有冒号，或冒号位于最后一个字符（没有分钟），都视为未指定时刻。
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Time of day must be a string 'H:MM', but was {value!r}")
    colon_index = value.find(":")
    if colon_index == -1 or colon_index >= len(value) - 1:
        return None
    try:
        hour = _parse_int(value[:colon_index])
        minute = _parse_int(value[colon_index + 1:])
    except ValueError:
        raise InvalidArgumentError(f"Invalid time of day '{value}'")
    return TimeInDay(hour=hour, minutes=minute)


@dataclass(frozen=True)
class RelativeTime(ABC):
    """相对时间表达式基类"""
    type_name: ClassVar[str] = ""

    base: Optional[Binding] = None
    at: Optional[TimeInDay] = None

    @abstractmethod
    def valid(self) -> bool:
        """单位合法且必要字段齐全"""

    @abstractmethod
    def resolve(self, base: datetime) -> datetime:
        """以 base 为基准解析为绝对时间"""

    def _apply_at(self, value: datetime) -> datetime:
        if self.at is None:
            return value
        return self.at.apply(value)

    def _check_valid(self):
        if not self.valid():
            raise InvalidArgumentError(f"Cannot resolve invalid relative time '{self}'")

    def to_dict(self) -> Dict[str, Any]:
        """序列化为属性字典"""
        data: Dict[str, Any] = {"type": self.type_name}
        if self.base is not None:
            data["base"] = self.base.to_data()
        if self.at is not None:
            data["at"] = str(self.at)
        return data

    def _at_suffix(self) -> str:
        return f" at {self.at}" if self.at is not None else ""


@dataclass(frozen=True)
class AfterRelativeTime(RelativeTime):
    """在基准时间之后经过一段时长"""
    type_name: ClassVar[str] = AFTER

    duration: Optional[int] = None
    unit: Optional[str] = None

    def valid(self) -> bool:
        return self.unit in AFTER_UNITS and _is_int(self.duration)

    def resolve(self, base: datetime) -> datetime:
        self._check_valid()
        # relativedelta 处理月末与闰年
        result = base + relativedelta(**{self.unit: self.duration})
        return self._apply_at(result)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.duration is not None:
            data["duration"] = self.duration
        if self.unit is not None:
            data["unit"] = self.unit
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AfterRelativeTime":
        duration = data.get("duration")
        if isinstance(duration, str):
            try:
                duration = _parse_int(duration.strip())
            except ValueError:
                raise InvalidArgumentError(f"Invalid duration '{duration}'")
        elif duration is not None and not _is_int(duration):
            raise InvalidArgumentError(f"Duration must be an integer, but was {duration!r}")
        return cls(
            base=Binding.from_data(data.get("base")),
            at=parse_time_in_day(data.get("at")),
            duration=duration,
            unit=data.get("unit")
        )

    def __str__(self) -> str:
        return f"{self.duration} {self.unit}{self._at_suffix()}"


@dataclass(frozen=True)
class NextRelativeTime(RelativeTime):
    """基准时间之后某个日历单位的下一次出现"""
    type_name: ClassVar[str] = NEXT

    unit: Optional[str] = None

    def valid(self) -> bool:
        return self.unit in NEXT_UNITS

    def resolve(self, base: datetime) -> datetime:
        self._check_valid()
        if self.unit == DAY:
            delta = relativedelta(days=+1)
        elif self.unit == MONTH:
            delta = relativedelta(months=+1, day=1)
        elif self.unit == YEAR:
            delta = relativedelta(years=+1, month=1, day=1)
        else:
            # 先前进一天，保证结果严格晚于基准日期
            weekday = MO if self.unit == WEEK else WEEKDAYS[self.unit]
            delta = relativedelta(days=+1, weekday=weekday(+1))
        return self._apply_at(base + delta)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.unit is not None:
            data["unit"] = self.unit
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NextRelativeTime":
        return cls(
            base=Binding.from_data(data.get("base")),
            at=parse_time_in_day(data.get("at")),
            unit=data.get("unit")
        )

    def __str__(self) -> str:
        return f"next {self.unit}{self._at_suffix()}"


RELATIVE_TIME_TYPES: Dict[str, Type[RelativeTime]] = {
    AFTER: AfterRelativeTime,
    NEXT: NextRelativeTime,
}


def read_relative_time(data: Optional[Mapping[str, Any]]) -> Optional[RelativeTime]:
    """按 type 字段多态读取相对时间

    没有 type 时回退到旧格式的 ``after`` 字符串；两者都没有则返回 None。
    """
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(f"Relative time must be a mapping, but was {data!r}")
    type_name = data.get("type")
    if type_name is None:
        after = data.get(AFTER)
        if after is not None:
            return parse_backwards_compatible_string(after)
        return None

    if not isinstance(type_name, str):
        raise UnsupportedDiscriminatorError(type_name, list(RELATIVE_TIME_TYPES))
    relative_time_class = RELATIVE_TIME_TYPES.get(type_name)
    if relative_time_class is None:
        raise UnsupportedDiscriminatorError(type_name, list(RELATIVE_TIME_TYPES))
    return relative_time_class.from_dict(data)


def parse_backwards_compatible_string(value: Optional[str]) -> AfterRelativeTime:
    """解析旧格式字符串，例如 ``"5 days"``"""
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Cannot parse relative time from value '{value}'")
    parts = value.strip().split(" ")
    if len(parts) != 2:
        raise InvalidArgumentError(f"Cannot parse relative time from value '{value}'")
    try:
        duration = _parse_int(parts[0])
    except ValueError:
        raise InvalidArgumentError(f"Invalid time value in relative time '{value}'")

    relative_time = AfterRelativeTime(duration=duration, unit=parts[1])
    if not relative_time.valid():
        raise InvalidArgumentError(f"Invalid time unit in relative time '{value}'")
    return relative_time


def seconds(value: int) -> AfterRelativeTime:
    return AfterRelativeTime(duration=value, unit=SECONDS)


def minutes(value: int) -> AfterRelativeTime:
    return AfterRelativeTime(duration=value, unit=MINUTES)


def hours(value: int) -> AfterRelativeTime:
    return AfterRelativeTime(duration=value, unit=HOURS)


def days(value: int) -> AfterRelativeTime:
    return AfterRelativeTime(duration=value, unit=DAYS)


def weeks(value: int) -> AfterRelativeTime:
    return AfterRelativeTime(duration=value, unit=WEEKS)


def months(value: int) -> AfterRelativeTime:
    return AfterRelativeTime(duration=value, unit=MONTHS)


def years(value: int) -> AfterRelativeTime:
    return AfterRelativeTime(duration=value, unit=YEARS)


def next_(unit: str) -> NextRelativeTime:
    return NextRelativeTime(unit=unit)
