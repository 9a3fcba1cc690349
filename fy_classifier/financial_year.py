"""
Модуль для вычисления финансового года по токену даты.

Финансовый год длится с июля по июнь и называется по году, в котором заканчивается:
файлы с января по июнь относятся к году из даты, с июля по декабрь - к следующему.

Формат токена определяется только по его длине:
    * 6 символов - год с суффиксом FY ("2022FY");
    * 7 символов - месяц и год ("JAN2022");
    * 9 символов - день, месяц и год ("21JAN2022").
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Callable, Optional

try:
    from .date_token import FileNameToken, extract
    from .exceptions import (
        InvalidDayError,
        InvalidFormatError,
        InvalidYearError,
        UnknownMonthError,
        UnrecognizedFormatError,
    )
except ImportError:
    from date_token import FileNameToken, extract
    from exceptions import (
        InvalidDayError,
        InvalidFormatError,
        InvalidYearError,
        UnknownMonthError,
        UnrecognizedFormatError,
    )


FY_SUFFIX = "FY"

UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")

# Смещение, которое нужно прибавить к году даты, чтобы получить финансовый год
MONTH_OFFSETS = MappingProxyType({
    "JAN": 0,
    "FEB": 0,
    "MAR": 0,
    "APR": 0,
    "MAY": 0,
    "JUN": 0,
    "JUL": 1,
    "AUG": 1,
    "SEP": 1,
    "OCT": 1,
    "NOV": 1,
    "DEC": 1,
})


def _is_unsigned(text: str) -> bool:
    """Проверяет, что строка - беззнаковое целое: цифры ASCII, допускается один ведущий "+"."""
    return UNSIGNED_PATTERN.fullmatch(text) is not None


def month_offset(month: str) -> int:
    """
    Возвращает смещение финансового года для месяца.

    Args:
        month: Трехбуквенный код месяца в верхнем регистре ("JAN")

    Returns:
        int: 0 для января-июня, 1 для июля-декабря

    Raises:
        UnknownMonthError: Если код месяца не распознан
    """
    try:
        return MONTH_OFFSETS[month]
    except KeyError:
        raise UnknownMonthError(f"Месяц не распознан: {month!r}") from None


def _resolve_year_fy(date: str) -> int:
    """Финансовый год из токена вида "2022FY"."""
    if date[4:6] != FY_SUFFIX:
        raise InvalidFormatError(f"Дата не является финансовым годом: {date!r}")

    year = date[0:4]
    if not _is_unsigned(year):
        raise InvalidFormatError(f"Не удалось разобрать год в {date!r}")

    return int(year)


def _resolve_month_year(date: str) -> int:
    """Финансовый год из токена вида "JAN2022"."""
    offset = month_offset(date[0:3])

    year = date[3:7]
    if not _is_unsigned(year):
        raise InvalidYearError(f"Не удалось разобрать год {year!r}")

    return int(year) + offset


def _resolve_full_date(date: str) -> int:
    """Финансовый год из токена вида "21JAN2022". День проверяется, но не используется."""
    day = date[0:2]
    if not _is_unsigned(day):
        raise InvalidDayError(f"Не удалось разобрать день месяца {day!r}")

    return _resolve_month_year(date[2:9])


def _unrecognized(date: str) -> int:
    raise UnrecognizedFormatError(f"Имя файла не заканчивается датой: {date!r}")


class DateFormat(Enum):
    """Поддерживаемые форматы токена даты, различаемые по длине."""

    YEAR_FY = (6, _resolve_year_fy)
    MONTH_YEAR = (7, _resolve_month_year)
    FULL_DATE = (9, _resolve_full_date)
    UNRECOGNIZED = (None, _unrecognized)

    def __init__(self, length: Optional[int], parser: Callable[[str], int]):
        self.length = length
        self.parser = parser

    @classmethod
    def for_length(cls, length: int) -> "DateFormat":
        for date_format in cls:
            if date_format.length == length:
                return date_format
        return cls.UNRECOGNIZED


def detect_format(token: FileNameToken) -> DateFormat:
    """
    Определяет формат токена по его длине.

    Args:
        token: Токен даты

    Returns:
        DateFormat: Формат токена (UNRECOGNIZED для неизвестной длины)
    """
    return DateFormat.for_length(token.length)


def resolve(token: FileNameToken) -> int:
    """
    Вычисляет финансовый год по токену даты.

    Args:
        token: Токен даты

    Returns:
        int: Финансовый год

    Raises:
        UnrecognizedFormatError: Если длина токена не 6, 7 или 9
        InvalidFormatError: Если токен вида YYYYFY некорректен
        InvalidYearError: Если год не является числом
        InvalidDayError: Если день не является числом
        UnknownMonthError: Если месяц не распознан
    """
    return detect_format(token).parser(token.raw)


def financial_year_for(stem: str) -> int:
    """
    Вычисляет финансовый год по основе имени файла.

    Args:
        stem: Имя файла без расширения ("report_21JAN2021")

    Returns:
        int: Финансовый год

    Raises:
        ClassificationError: Если имя файла не позволяет определить год
    """
    return resolve(extract(stem))


if __name__ == "__main__":
    import sys

    for name in sys.argv[1:]:
        try:
            print(f"{name}: {financial_year_for(name)}FY")
        except Exception as e:
            print(f"{name}: {type(e).__name__}: {e}")
