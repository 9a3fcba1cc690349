"""
Модуль для настройки и управления логированием приложения.

Обеспечивает цветной вывод в консоль и, если задан файл лога,
запись в файл с ротацией.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

try:
    from .config_loader import LoggingConfig
except ImportError:
    from config_loader import LoggingConfig


LOGGER_NAME = 'fy_classifier'

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            # Запись может попасть и в файловый обработчик
            record.levelname = levelname


class FYClassifierLogger:
    """Класс для управления логированием приложения FY Classifier."""

    def __init__(self, config: LoggingConfig):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
        """
        self.config = config
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с консольным и, при необходимости, файловым выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        # Очищаем обработчики от предыдущей настройки
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if self.config.log_file:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,  # MB -> байты
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def get_logger(self) -> logging.Logger:
        """
        Возвращает настроенный логгер.

        Returns:
            logging.Logger: Настроенный логгер
        """
        if self.logger is None:
            raise RuntimeError("Логгер не инициализирован")
        return self.logger

    def log_run_start(self, directories: int, dry_run: bool = False) -> None:
        """
        Логирует начало классификации.

        Args:
            directories: Количество каталогов
            dry_run: Пробный запуск без перемещения файлов
        """
        mode = " (пробный запуск)" if dry_run else ""
        self.logger.info(f"🚀 Начало классификации файлов по финансовым годам{mode}")
        self.logger.info(f"📂 Каталогов: {directories}")
        self.logger.info(f"⏰ Время начала: {datetime.now().strftime(LOG_DATE_FORMAT)}")

    def log_run_end(self, total_files: int, placed_files: int, skipped_files: int) -> None:
        """
        Логирует завершение классификации.

        Args:
            total_files: Обработано файлов
            placed_files: Разложено по каталогам
            skipped_files: Оставлено на месте
        """
        self.logger.info("✅ Классификация завершена")
        self.logger.info("📊 Статистика:")
        self.logger.info(f"   • Обработано: {total_files}")
        self.logger.info(f"   • Разложено: {placed_files}")
        self.logger.info(f"   • Оставлено на месте: {skipped_files}")
        self.logger.info(f"⏰ Время завершения: {datetime.now().strftime(LOG_DATE_FORMAT)}")

    def log_directory_start(self, directory: Path, files: int) -> None:
        self.logger.info(f"📂 Каталог {directory}: файлов {files}")

    def log_file_processing(self, file_path: Path) -> None:
        self.logger.debug(f"🔍 Обработка файла: {file_path.name}")

    def log_file_placed(self, source_path: Path, target_path: Path, fy: int) -> None:
        """
        Логирует перемещение файла в каталог финансового года.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
            fy: Финансовый год
        """
        self.logger.info(f"📁 {source_path.name} → {fy}FY: {source_path} → {target_path}")

    def log_file_skipped(self, file_path: Path, error: Exception) -> None:
        """
        Логирует файл, для которого не удалось определить финансовый год.

        Args:
            file_path: Путь к файлу
            error: Ошибка классификации
        """
        self.logger.warning(f"⏭️ Не удалось определить FY для {file_path}, файл остается на месте: {error}")

    def log_directory_created(self, directory: Path) -> None:
        self.logger.info(f"🆕 Создан каталог: {directory}")

    def log_config_loaded(self, config_path: str) -> None:
        self.logger.info(f"⚙️ Конфигурация загружена из {config_path}")

    def log_system_info(self, info: str) -> None:
        """
        Логирует системную информацию.

        Args:
            info: Информационное сообщение
        """
        self.logger.info(f"ℹ️ {info}")

    def log_warning(self, message: str) -> None:
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")


def setup_logger(config: LoggingConfig) -> logging.Logger:
    """
    Удобная функция для быстрой настройки логгера.

    Args:
        config: Конфигурация логирования

    Returns:
        logging.Logger: Настроенный логгер
    """
    return FYClassifierLogger(config).get_logger()


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Получает логгер по имени."""
    return logging.getLogger(name)
