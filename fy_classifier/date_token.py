"""
Модуль для выделения токена даты из имени файла.

Токен - это последний непустой сегмент основы имени файла (без расширения),
отделенный символом подчеркивания. Содержимое токена здесь не проверяется,
формат определяется в модуле financial_year.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

try:
    from .exceptions import NoTokenError
except ImportError:
    from exceptions import NoTokenError


TOKEN_SEPARATOR = "_"


@dataclass(frozen=True)
class FileNameToken:
    """Токен даты, выделенный из имени файла."""
    raw: str

    @property
    def length(self) -> int:
        return len(self.raw)

    def __str__(self) -> str:
        return self.raw


def stem_of(path: Union[str, Path]) -> str:
    """
    Возвращает имя файла без последнего расширения.

    Args:
        path: Путь к файлу

    Returns:
        str: Основа имени файла ("text_2020FY.txt" -> "text_2020FY", "text_2020FY." -> "text_2020FY")
    """
    name = Path(path).name
    base, dot, _ = name.rpartition(".")
    # Скрытые файлы (".profile") и ".." расширения не имеют
    if not dot or not base or name == "..":
        return name
    return base


def extract(stem: str) -> FileNameToken:
    """
    Выделяет токен даты из основы имени файла.

    Если подчеркиваний нет, токеном считается вся основа имени.

    Args:
        stem: Имя файла без расширения

    Returns:
        FileNameToken: Последний непустой сегмент после "_"

    Raises:
        NoTokenError: Если основа пустая или состоит только из подчеркиваний
    """
    segments = [segment for segment in stem.split(TOKEN_SEPARATOR) if segment]
    if not segments:
        raise NoTokenError(f"Имя файла не содержит токена даты: {stem!r}")

    return FileNameToken(segments[-1])
