"""
Модуль для операций с файловой системой.

Перемещает файлы в каталоги финансовых лет <FY>FY рядом с исходным файлом.
Любое нарушение инвариантов (каталог занят файлом, файл с таким именем уже
есть в каталоге назначения) считается фатальным и поднимает PlacementError.
"""

import re
from pathlib import Path
from typing import Dict, List

try:
    from .exceptions import DestinationExistsError, DestinationNotDirectoryError, PlacementError
    from .logger import FYClassifierLogger
except ImportError:
    from exceptions import DestinationExistsError, DestinationNotDirectoryError, PlacementError
    from logger import FYClassifierLogger


FY_DIRECTORY_SUFFIX = "FY"
FY_DIRECTORY_PATTERN = re.compile(r'^(\d+)FY$')


def fy_directory_name(fy: int) -> str:
    """Имя каталога финансового года: 2023 -> "2023FY"."""
    return f"{fy}{FY_DIRECTORY_SUFFIX}"


class FilePlacer:
    """Класс для размещения файлов по каталогам финансовых лет."""

    def __init__(self, logger: FYClassifierLogger):
        """
        Инициализация.

        Args:
            logger: Логгер для записи операций
        """
        self.logger = logger

    def destination_directory(self, source_path: Path, fy: int) -> Path:
        """
        Получает путь к каталогу финансового года для файла.

        Args:
            source_path: Путь к исходному файлу
            fy: Финансовый год

        Returns:
            Path: <каталог файла>/<FY>FY
        """
        return Path(source_path).parent / fy_directory_name(fy)

    def ensure_directory(self, directory: Path) -> Path:
        """
        Создает каталог финансового года, если он не существует.

        Args:
            directory: Путь к каталогу

        Returns:
            Path: Путь к каталогу

        Raises:
            DestinationNotDirectoryError: Если путь занят не каталогом
            PlacementError: Если каталог не удалось создать
        """
        if not directory.exists():
            try:
                directory.mkdir()
            except OSError as e:
                raise PlacementError(f"Не удалось создать каталог {directory}: {e}") from e
            self.logger.log_directory_created(directory)

        if not directory.is_dir():
            raise DestinationNotDirectoryError(f"{directory} не является каталогом")

        return directory

    def plan(self, source_path: Path, fy: int) -> Path:
        """
        Вычисляет путь назначения без изменений на диске.

        Args:
            source_path: Путь к исходному файлу
            fy: Финансовый год

        Returns:
            Path: Путь, по которому окажется файл

        Raises:
            DestinationNotDirectoryError: Если путь каталога занят не каталогом
            DestinationExistsError: Если файл с таким именем уже есть в каталоге
        """
        source_path = Path(source_path)
        target_dir = self.destination_directory(source_path, fy)

        if target_dir.exists() and not target_dir.is_dir():
            raise DestinationNotDirectoryError(f"{target_dir} не является каталогом")

        target_path = target_dir / source_path.name
        if target_path.exists():
            raise DestinationExistsError(f"{target_path} уже существует")

        return target_path

    def place(self, source_path: Path, fy: int) -> Path:
        """
        Перемещает файл в каталог финансового года, сохраняя имя.

        Args:
            source_path: Путь к исходному файлу
            fy: Финансовый год

        Returns:
            Path: Путь к перемещенному файлу

        Raises:
            PlacementError: Если каталог не удалось создать или файл переместить
            DestinationNotDirectoryError: Если путь каталога занят не каталогом
            DestinationExistsError: Если файл с таким именем уже есть в каталоге
        """
        source_path = Path(source_path)
        target_dir = self.ensure_directory(self.destination_directory(source_path, fy))

        target_path = target_dir / source_path.name
        if target_path.exists():
            raise DestinationExistsError(f"{target_path} уже существует")

        try:
            # Каталог назначения лежит рядом с файлом, rename атомарен
            source_path.rename(target_path)
        except OSError as e:
            raise PlacementError(f"Не удалось переместить {source_path} в {target_path}: {e}") from e

        self.logger.log_file_placed(source_path, target_path, fy)
        return target_path

    def list_candidate_files(self, directory: Path) -> List[Path]:
        """
        Получает список файлов каталога без обхода подкаталогов.

        Args:
            directory: Каталог

        Returns:
            List[Path]: Файлы, отсортированные по имени
        """
        return sorted(entry for entry in Path(directory).iterdir() if entry.is_file())

    def get_directory_statistics(self, directory: Path) -> Dict:
        """
        Получает статистику раскладки каталога.

        Args:
            directory: Каталог

        Returns:
            Dict: Количество неразложенных файлов, каталогов FY и файлов в них
        """
        directory = Path(directory)
        stats = {
            'directory': str(directory),
            'unclassified_files_count': len(self.list_candidate_files(directory)),
            'fy_directories_count': 0,
            'classified_files_count': 0,
            'files_per_fy': {}
        }

        for entry in sorted(directory.iterdir()):
            match = FY_DIRECTORY_PATTERN.match(entry.name)
            if not match or not entry.is_dir():
                continue

            files = [f for f in entry.iterdir() if f.is_file()]
            stats['fy_directories_count'] += 1
            stats['classified_files_count'] += len(files)
            stats['files_per_fy'][int(match.group(1))] = len(files)

        return stats
