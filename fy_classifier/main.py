"""
Главный модуль CLI интерфейса утилиты классификации файлов.

Предоставляет команды для раскладки файлов по каталогам финансовых лет,
предварительного просмотра и просмотра статистики.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

try:
    from .classifier import FinancialYearClassifier, create_classifier
    from .config_loader import DEFAULT_CONFIG_PATH, default_config, load_config
    from .exceptions import FileSystemInvariantError
    from .logger import FYClassifierLogger
except ImportError:
    from classifier import FinancialYearClassifier, create_classifier
    from config_loader import DEFAULT_CONFIG_PATH, default_config, load_config
    from exceptions import FileSystemInvariantError
    from logger import FYClassifierLogger


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FATAL = 2


class FYClassifierCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config = None
        self.logger = None

    def setup(self, config_path: Optional[str] = None, verbose: bool = False) -> bool:
        """
        Инициализирует CLI с конфигурацией.

        Если путь не указан и файла по умолчанию нет, используются настройки по умолчанию.

        Args:
            config_path: Путь к файлу конфигурации
            verbose: Включить отладочный вывод

        Returns:
            bool: True если инициализация успешна
        """
        try:
            if config_path is None and not Path(DEFAULT_CONFIG_PATH).exists():
                self.config = default_config()
                config_source = "настроек по умолчанию"
            else:
                config_source = config_path or DEFAULT_CONFIG_PATH
                self.config = load_config(config_source)

            if verbose:
                self.config.logging.level = 'DEBUG'

            self.logger = FYClassifierLogger(self.config.logging)
            self.logger.log_config_loaded(config_source)
            return True

        except (FileNotFoundError, ValueError) as e:
            print(f"❌ Ошибка инициализации: {e}")
            return False

    def _directories(self, args) -> List[Path]:
        if args.directories:
            return [Path(d) for d in args.directories]
        return list(self.config.paths.directories)

    def _classifier(self, dry_run: bool = False) -> FinancialYearClassifier:
        return create_classifier(self.logger, dry_run=dry_run)

    def cmd_classify(self, args) -> int:
        """
        Команда раскладки файлов по каталогам финансовых лет.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата (0 - запуск завершен, 2 - нарушены инварианты ФС)
        """
        classifier = self._classifier(dry_run=args.dry_run)

        try:
            stats = classifier.classify_directories(self._directories(args))
        except FileSystemInvariantError as e:
            self.logger.log_critical_error("Классификация прервана", e)
            return EXIT_FATAL

        print("\n✅ Классификация завершена!" if not args.dry_run else "\n✅ Пробный запуск завершен!")
        print("📊 Статистика:")
        print(f"   • Обработано: {stats.total_files}")
        print(f"   • Разложено: {stats.placed_files}")
        print(f"   • Оставлено на месте: {stats.skipped_files}")
        for fy, count in sorted(stats.placements.items()):
            print(f"   • {fy}FY: {count}")

        if stats.skipped_files > 0:
            print(f"\n⚠️ Не классифицировано файлов: {stats.skipped_files}")
            for error in stats.errors[:10]:
                print(f"   • {error['file']}: {error['kind']}")
            if len(stats.errors) > 10:
                print(f"   ... и еще {len(stats.errors) - 10}")

        return EXIT_OK

    def cmd_preview(self, args) -> int:
        """
        Команда просмотра финансовых лет без перемещения файлов.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата
        """
        classifier = self._classifier(dry_run=True)

        try:
            for directory in self._directories(args):
                print(f"📂 {directory}")
                for file_path, fy, kind in classifier.preview_directory(directory):
                    if fy is None:
                        print(f"   • {file_path.name}: оставлен на месте ({kind})")
                    else:
                        print(f"   • {file_path.name} → {fy}FY")
        except FileSystemInvariantError as e:
            self.logger.log_critical_error("Просмотр прерван", e)
            return EXIT_FATAL

        return EXIT_OK

    def cmd_status(self, args) -> int:
        """
        Команда просмотра статистики раскладки.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата
        """
        classifier = self._classifier()

        try:
            statuses = classifier.get_status(self._directories(args))
        except FileSystemInvariantError as e:
            self.logger.log_critical_error("Не удалось получить статус", e)
            return EXIT_FATAL

        for status in statuses:
            print(f"📊 Каталог {status['directory']}")
            print("=" * 50)
            print(f"   • Не разложено файлов: {status['unclassified_files_count']}")
            print(f"   • Каталогов FY: {status['fy_directories_count']}")
            print(f"   • Разложено файлов: {status['classified_files_count']}")
            for fy, count in sorted(status['files_per_fy'].items()):
                print(f"   • {fy}FY: {count}")

        return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog="fy-classifier",
        description="Утилита раскладки файлов по каталогам финансовых лет (июль - июнь)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Разложить файлы текущего каталога
  fy-classifier classify

  # Разложить файлы нескольких каталогов
  fy-classifier classify reports/ invoices/

  # Показать, куда попадут файлы, ничего не перемещая
  fy-classifier classify --dry-run reports/
  fy-classifier preview reports/

  # Статистика раскладки
  fy-classifier status reports/
        """
    )

    parser.add_argument(
        '--config',
        default=None,
        help=f'Путь к файлу конфигурации (по умолчанию: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )

    subparsers = parser.add_subparsers(dest='command', help='Доступные команды')

    classify_parser = subparsers.add_parser('classify', help='Разложить файлы по каталогам FY')
    classify_parser.add_argument('directories', nargs='*', help='Каталоги (по умолчанию из конфигурации)')
    classify_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Только показать, куда будут перемещены файлы'
    )

    preview_parser = subparsers.add_parser('preview', help='Показать финансовый год каждого файла')
    preview_parser.add_argument('directories', nargs='*', help='Каталоги (по умолчанию из конфигурации)')

    status_parser = subparsers.add_parser('status', help='Статистика раскладки')
    status_parser.add_argument('directories', nargs='*', help='Каталоги (по умолчанию из конфигурации)')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    cli = FYClassifierCLI()

    if not cli.setup(args.config, verbose=args.verbose):
        return EXIT_ERROR

    commands = {
        'classify': cli.cmd_classify,
        'preview': cli.cmd_preview,
        'status': cli.cmd_status,
    }

    try:
        return commands[args.command](args)

    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
        return EXIT_ERROR
    except Exception as e:
        print(f"❌ Неожиданная ошибка: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
