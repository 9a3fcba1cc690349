"""
Модуль бизнес-логики классификации файлов.

Объединяет разбор имени файла и операции с файловой системой: для каждого
файла каталога определяет финансовый год и перемещает файл в каталог <FY>FY.
Файлы, для которых год определить нельзя, остаются на месте; нарушения
инвариантов файловой системы прерывают запуск.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

try:
    from .date_token import stem_of
    from .exceptions import ClassificationError, DirectoryNotFoundError, InvalidDirectoryError
    from .financial_year import financial_year_for
    from .logger import FYClassifierLogger
    from .placement import FilePlacer
except ImportError:
    from date_token import stem_of
    from exceptions import ClassificationError, DirectoryNotFoundError, InvalidDirectoryError
    from financial_year import financial_year_for
    from logger import FYClassifierLogger
    from placement import FilePlacer


class ClassificationStats:
    """Класс для хранения статистики классификации."""

    def __init__(self):
        self.total_files = 0
        self.placed_files = 0
        self.skipped_files = 0
        self.start_time = None
        self.end_time = None
        self.placements: Dict[int, int] = {}
        self.errors = []

    def add_placement(self, fy: int):
        self.placed_files += 1
        self.placements[fy] = self.placements.get(fy, 0) + 1

    def add_error(self, file_path: Path, error: ClassificationError):
        """Добавляет пропущенный файл в список."""
        self.skipped_files += 1
        self.errors.append({
            'file': str(file_path),
            'kind': error.kind,
            'error': str(error),
            'timestamp': datetime.now()
        })

    def merge(self, other: "ClassificationStats"):
        """Добавляет к статистике результаты другого каталога."""
        self.total_files += other.total_files
        self.placed_files += other.placed_files
        self.skipped_files += other.skipped_files
        for fy, count in other.placements.items():
            self.placements[fy] = self.placements.get(fy, 0) + count
        self.errors.extend(other.errors)

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность классификации в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def get_success_rate(self) -> float:
        """Возвращает процент разложенных файлов."""
        if self.total_files == 0:
            return 0.0
        return (self.placed_files / self.total_files) * 100

    def to_dict(self) -> Dict:
        """Преобразует статистику в словарь."""
        return {
            'total_files': self.total_files,
            'placed_files': self.placed_files,
            'skipped_files': self.skipped_files,
            'placements': dict(sorted(self.placements.items())),
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.get_duration(),
            'success_rate': self.get_success_rate(),
            'error_count': len(self.errors)
        }


class FinancialYearClassifier:
    """Основной класс для классификации файлов по финансовым годам."""

    def __init__(self, logger: FYClassifierLogger, dry_run: bool = False):
        """
        Инициализация классификатора.

        Args:
            logger: Логгер для записи операций
            dry_run: Только вычислять пути назначения, не перемещая файлы
        """
        self.logger = logger
        self.dry_run = dry_run
        self.placer = FilePlacer(logger)

    def get_fy(self, file_path: Path) -> int:
        """
        Определяет финансовый год по имени файла.

        Args:
            file_path: Путь к файлу

        Returns:
            int: Финансовый год

        Raises:
            ClassificationError: Если имя файла не позволяет определить год
        """
        return financial_year_for(stem_of(file_path))

    def _check_directory(self, directory: Path) -> Path:
        directory = Path(directory)
        if not directory.exists():
            raise DirectoryNotFoundError(f"{directory} не существует")
        if not directory.is_dir():
            raise InvalidDirectoryError(f"{directory} не является каталогом")
        return directory

    def classify_file(self, file_path: Path, stats: Optional[ClassificationStats] = None) -> Optional[Path]:
        """
        Классифицирует один файл.

        Args:
            file_path: Путь к файлу
            stats: Статистика, в которую записывается результат

        Returns:
            Path или None: Новый (в пробном режиме - планируемый) путь файла,
            None если файл оставлен на месте

        Raises:
            FileSystemInvariantError: Если файл нельзя безопасно переместить
        """
        file_path = Path(file_path)
        if stats is None:
            stats = ClassificationStats()

        stats.total_files += 1
        self.logger.log_file_processing(file_path)

        try:
            fy = self.get_fy(file_path)
        except ClassificationError as e:
            stats.add_error(file_path, e)
            self.logger.log_file_skipped(file_path, e)
            return None

        if self.dry_run:
            target_path = self.placer.plan(file_path, fy)
            self.logger.log_system_info(f"{file_path.name} будет перемещен в {target_path}")
        else:
            target_path = self.placer.place(file_path, fy)

        stats.add_placement(fy)
        return target_path

    def classify_directory(self, directory: Path) -> ClassificationStats:
        """
        Классифицирует все файлы каталога без обхода подкаталогов.

        Args:
            directory: Каталог

        Returns:
            ClassificationStats: Статистика по каталогу

        Raises:
            DirectoryNotFoundError: Если каталог не существует
            InvalidDirectoryError: Если путь не является каталогом
            PlacementError: Если файл нельзя безопасно переместить
        """
        directory = self._check_directory(directory)
        stats = ClassificationStats()
        stats.start_time = datetime.now()

        # Список берется заранее: создаваемые каталоги FY не должны попасть в обход
        files = self.placer.list_candidate_files(directory)
        self.logger.log_directory_start(directory, len(files))

        for file_path in files:
            self.classify_file(file_path, stats)

        stats.end_time = datetime.now()
        return stats

    def classify_directories(self, directories: Iterable[Path]) -> ClassificationStats:
        """
        Классифицирует файлы нескольких каталогов.

        Args:
            directories: Каталоги (по умолчанию текущий)

        Returns:
            ClassificationStats: Суммарная статистика
        """
        directories = [Path(d) for d in directories] or [Path(".")]
        total = ClassificationStats()
        total.start_time = datetime.now()

        self.logger.log_run_start(len(directories), self.dry_run)

        for directory in directories:
            total.merge(self.classify_directory(directory))

        total.end_time = datetime.now()
        self.logger.log_run_end(total.total_files, total.placed_files, total.skipped_files)

        if total.skipped_files:
            self.logger.log_warning(f"Оставлено на месте файлов: {total.skipped_files}")
        self.logger.log_system_info(f"Статистика запуска: {total.to_dict()}")

        return total

    def preview_directory(self, directory: Path) -> List[Tuple[Path, Optional[int], Optional[str]]]:
        """
        Показывает, в какой финансовый год попадет каждый файл каталога.

        Args:
            directory: Каталог

        Returns:
            List[Tuple[Path, Optional[int], Optional[str]]]: (файл, FY, вид ошибки)
        """
        directory = self._check_directory(directory)
        result = []

        for file_path in self.placer.list_candidate_files(directory):
            try:
                result.append((file_path, self.get_fy(file_path), None))
            except ClassificationError as e:
                result.append((file_path, None, e.kind))

        return result

    def get_status(self, directories: Iterable[Path]) -> List[Dict]:
        """Статистика раскладки по каждому каталогу."""
        directories = [Path(d) for d in directories] or [Path(".")]
        return [self.placer.get_directory_statistics(self._check_directory(d)) for d in directories]


def create_classifier(logger: FYClassifierLogger, dry_run: bool = False) -> FinancialYearClassifier:
    """
    Удобная функция для создания классификатора.

    Args:
        logger: Логгер
        dry_run: Пробный режим

    Returns:
        FinancialYearClassifier: Объект классификатора
    """
    return FinancialYearClassifier(logger, dry_run=dry_run)
