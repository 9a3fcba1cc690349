"""
Модуль для загрузки и валидации конфигурации приложения.

Обеспечивает загрузку параметров из config/settings.ini с валидацией.
Ядро классификации конфигурацию не читает: она нужна только CLI и логированию.
"""

import configparser
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


DEFAULT_CONFIG_PATH = "config/settings.ini"

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class PathsConfig:
    """Конфигурация каталогов для классификации."""
    directories: List[Path] = field(default_factory=lambda: [Path(".")])


@dataclass
class LoggingConfig:
    """Конфигурация логирования."""
    level: str = "INFO"
    log_file: Optional[Path] = None
    max_log_size: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Основная конфигурация приложения."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Отсутствующие секции и ключи заменяются значениями по умолчанию.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если файл конфигурации не найден
            ValueError: Если конфигурация некорректна
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")

        config_parser = configparser.ConfigParser()

        try:
            config_parser.read(self.config_path, encoding='utf-8')

            self._config = Config(
                paths=self._load_paths_config(config_parser),
                logging=self._load_logging_config(config_parser)
            )

            self._validate_config()

            return self._config

        except (configparser.Error, ValueError) as e:
            raise ValueError(f"Ошибка загрузки конфигурации: {e}") from e

    def _load_paths_config(self, parser: configparser.ConfigParser) -> PathsConfig:
        """Загружает конфигурацию каталогов."""
        section = 'paths'

        if not parser.has_section(section):
            return PathsConfig()

        raw = parser.get(section, 'directories', fallback='.')
        directories = [Path(item.strip()) for item in re.split(r'[,\n]', raw) if item.strip()]

        return PathsConfig(directories=directories or [Path(".")])

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'

        if not parser.has_section(section):
            return LoggingConfig()

        log_file = parser.get(section, 'log_file', fallback='').strip()

        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            log_file=Path(log_file) if log_file else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5)
        )

    def _validate_config(self) -> None:
        """Валидирует загруженную конфигурацию."""
        if not self._config:
            raise ValueError("Конфигурация не загружена")

        if self._config.logging.level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Некорректный уровень логирования: {self._config.logging.level}")

        if self._config.logging.max_log_size <= 0:
            raise ValueError("Размер файла лога должен быть больше 0")

        if self._config.logging.backup_count < 0:
            raise ValueError("Количество резервных копий лога не может быть отрицательным")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()


def default_config() -> Config:
    """Конфигурация по умолчанию, если файл настроек отсутствует."""
    return Config()
