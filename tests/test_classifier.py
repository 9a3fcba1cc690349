"""
Тесты для модуля classifier.py
"""

import pytest
import tempfile
import shutil
from datetime import datetime
from pathlib import Path
from unittest.mock import Mock

from fy_classifier.classifier import ClassificationStats, FinancialYearClassifier, create_classifier
from fy_classifier.exceptions import (
    DestinationExistsError,
    DirectoryNotFoundError,
    InvalidDirectoryError,
    InvalidFormatError,
    UnknownMonthError,
)
from fy_classifier.logger import FYClassifierLogger


# Имя файла -> каталог, в котором он должен оказаться (None - остается на месте)
SAMPLE_FILES = {
    "text_21JAN2021.txt": "2021FY",
    "text_27FEB2021.txt": "2021FY",
    "text_03MAR2021.txt": "2021FY",
    "text_10APR2020.txt": "2020FY",
    "text_more_10MAY2020.txt": "2020FY",
    "text_JUN2020": "2020FY",
    "text_10JUL2022.txt": "2023FY",
    "text_12AUG2021.txt": "2022FY",
    "14SEP2022.txt": "2023FY",
    "text_20OCT2020.txt": "2021FY",
    "text_08NOV2020": "2021FY",
    "text_01DEC2021.txt": "2022FY",
    "text_2020FY.txt": "2020FY",
    "text.txt": None,
    "text_other_2015fy.txt": None,
    "text_abcdFY.txt": None,
    "text_A1JAN2020.txt": None,
    "text_10NAN2020.txt": None,
}


def collect_files(path: Path) -> set:
    """Все файлы каталога с учетом подкаталогов."""
    return {p for p in path.rglob("*") if p.is_file()}


class TestClassificationStats:
    """Тесты для класса ClassificationStats."""

    def test_initialization(self):
        stats = ClassificationStats()

        assert stats.total_files == 0
        assert stats.placed_files == 0
        assert stats.skipped_files == 0
        assert stats.start_time is None
        assert stats.end_time is None
        assert stats.placements == {}
        assert stats.errors == []

    def test_add_placement(self):
        stats = ClassificationStats()
        stats.add_placement(2021)
        stats.add_placement(2021)
        stats.add_placement(2023)

        assert stats.placed_files == 3
        assert stats.placements == {2021: 2, 2023: 1}

    def test_add_error(self):
        """Тест добавления пропущенного файла."""
        stats = ClassificationStats()
        stats.add_error(Path("text_10NAN2020.txt"), UnknownMonthError("Месяц не распознан"))

        assert stats.skipped_files == 1
        assert stats.errors[0]['file'] == "text_10NAN2020.txt"
        assert stats.errors[0]['kind'] == "UnknownMonth"
        assert stats.errors[0]['error'] == "Месяц не распознан"
        assert 'timestamp' in stats.errors[0]

    def test_merge(self):
        first = ClassificationStats()
        first.total_files = 2
        first.add_placement(2020)
        first.add_error(Path("a"), InvalidFormatError("x"))
        second = ClassificationStats()
        second.total_files = 1
        second.add_placement(2020)

        first.merge(second)

        assert first.total_files == 3
        assert first.placed_files == 2
        assert first.skipped_files == 1
        assert first.placements == {2020: 2}
        assert len(first.errors) == 1

    def test_get_duration(self):
        stats = ClassificationStats()
        assert stats.get_duration() is None

        stats.start_time = datetime(2024, 1, 1, 10, 0, 0)
        stats.end_time = datetime(2024, 1, 1, 10, 0, 30)
        assert stats.get_duration() == 30.0

    def test_get_success_rate(self):
        stats = ClassificationStats()
        assert stats.get_success_rate() == 0.0

        stats.total_files = 4
        stats.add_placement(2020)
        assert stats.get_success_rate() == 25.0

    def test_to_dict(self):
        """Тест преобразования в словарь."""
        stats = ClassificationStats()
        stats.total_files = 2
        stats.add_placement(2023)
        stats.add_placement(2020)
        stats.start_time = datetime(2024, 1, 1, 10, 0, 0)
        stats.end_time = datetime(2024, 1, 1, 10, 5, 0)

        result = stats.to_dict()

        assert result['total_files'] == 2
        assert result['placed_files'] == 2
        assert result['skipped_files'] == 0
        assert list(result['placements']) == [2020, 2023]
        assert result['start_time'] == '2024-01-01T10:00:00'
        assert result['end_time'] == '2024-01-01T10:05:00'
        assert result['duration_seconds'] == 300.0
        assert result['success_rate'] == 100.0
        assert result['error_count'] == 0


class TestFinancialYearClassifier:
    """Тесты для класса FinancialYearClassifier."""

    @pytest.fixture
    def temp_dir(self):
        """Создает временную директорию для тестов."""
        temp_path = tempfile.mkdtemp()
        yield Path(temp_path)
        shutil.rmtree(temp_path, ignore_errors=True)

    @pytest.fixture
    def mock_logger(self):
        return Mock(spec=FYClassifierLogger)

    @pytest.fixture
    def classifier(self, mock_logger):
        return FinancialYearClassifier(mock_logger)

    @pytest.fixture
    def sample_dir(self, temp_dir):
        """Каталог с набором файлов разных форматов."""
        for name in SAMPLE_FILES:
            (temp_dir / name).write_text(name)
        return temp_dir

    def expected_files(self, base: Path) -> set:
        return {
            base / subdir / name if subdir else base / name
            for name, subdir in SAMPLE_FILES.items()
        }

    def test_create_classifier(self, mock_logger):
        classifier = create_classifier(mock_logger, dry_run=True)

        assert isinstance(classifier, FinancialYearClassifier)
        assert classifier.dry_run is True
        assert classifier.placer.logger is mock_logger

    def test_get_fy(self, classifier):
        assert classifier.get_fy(Path("/data/text_10JUL2022.txt")) == 2023
        assert classifier.get_fy(Path("/data/text_JUN2020")) == 2020

    def test_classify_file_success(self, classifier, temp_dir):
        source = temp_dir / "text_21JAN2021.txt"
        source.write_text("content")
        stats = ClassificationStats()

        result = classifier.classify_file(source, stats)

        assert result == temp_dir / "2021FY" / "text_21JAN2021.txt"
        assert result.exists()
        assert stats.total_files == 1
        assert stats.placements == {2021: 1}

    def test_classify_file_trailing_dot(self, classifier, temp_dir):
        """Тест: точка в конце имени не мешает определить дату."""
        source = temp_dir / "text_2020FY."
        source.write_text("content")

        result = classifier.classify_file(source, ClassificationStats())

        assert result == temp_dir / "2020FY" / "text_2020FY."
        assert result.exists()

    def test_classify_file_skipped(self, classifier, temp_dir, mock_logger):
        """Тест: файл без даты остается на месте."""
        source = temp_dir / "text_abcdFY.txt"
        source.write_text("content")
        stats = ClassificationStats()

        result = classifier.classify_file(source, stats)

        assert result is None
        assert source.exists()
        assert stats.skipped_files == 1
        assert stats.errors[0]['kind'] == "InvalidFormat"
        mock_logger.log_file_skipped.assert_called_once()

    def test_classify_directory(self, classifier, sample_dir):
        """Сквозной тест раскладки каталога."""
        stats = classifier.classify_directory(sample_dir)

        assert collect_files(sample_dir) == self.expected_files(sample_dir)
        assert stats.total_files == 18
        assert stats.placed_files == 13
        assert stats.skipped_files == 5
        assert stats.placements == {2020: 4, 2021: 5, 2022: 2, 2023: 2}
        assert {e['kind'] for e in stats.errors} == {
            "UnrecognizedFormat", "InvalidFormat", "InvalidDay", "UnknownMonth"
        }
        assert stats.get_duration() is not None

    def test_second_run_is_idempotent(self, classifier, sample_dir):
        """Тест: повторный запуск не трогает уже разложенные файлы."""
        classifier.classify_directory(sample_dir)

        stats = classifier.classify_directory(sample_dir)

        assert collect_files(sample_dir) == self.expected_files(sample_dir)
        assert stats.total_files == 5
        assert stats.placed_files == 0
        assert stats.skipped_files == 5

    def test_dry_run_moves_nothing(self, mock_logger, sample_dir):
        """Тест: пробный запуск ничего не перемещает."""
        classifier = FinancialYearClassifier(mock_logger, dry_run=True)
        before = collect_files(sample_dir)

        stats = classifier.classify_directory(sample_dir)

        assert collect_files(sample_dir) == before
        assert not any(p.is_dir() for p in sample_dir.iterdir())
        assert stats.placed_files == 13

    def test_collision_aborts_run(self, classifier, temp_dir):
        """Тест: коллизия имен прерывает запуск."""
        (temp_dir / "2021FY").mkdir()
        (temp_dir / "2021FY" / "text_21JAN2021.txt").write_text("existing")
        (temp_dir / "text_21JAN2021.txt").write_text("new")

        with pytest.raises(DestinationExistsError):
            classifier.classify_directory(temp_dir)

        assert (temp_dir / "text_21JAN2021.txt").read_text() == "new"

    def test_missing_directory(self, classifier, temp_dir):
        with pytest.raises(DirectoryNotFoundError):
            classifier.classify_directory(temp_dir / "missing")

    def test_not_a_directory(self, classifier, temp_dir):
        path = temp_dir / "file.txt"
        path.write_text("content")

        with pytest.raises(InvalidDirectoryError):
            classifier.classify_directory(path)

    def test_classify_directories(self, classifier, temp_dir, mock_logger):
        """Тест раскладки нескольких каталогов."""
        first = temp_dir / "first"
        second = temp_dir / "second"
        first.mkdir()
        second.mkdir()
        (first / "a_2020FY.txt").write_text("a")
        (second / "b_JUL2020.txt").write_text("b")
        (second / "c.txt").write_text("c")

        stats = classifier.classify_directories([first, second])

        assert (first / "2020FY" / "a_2020FY.txt").exists()
        assert (second / "2021FY" / "b_JUL2020.txt").exists()
        assert (second / "c.txt").exists()
        assert stats.total_files == 3
        assert stats.placed_files == 2
        assert stats.skipped_files == 1
        mock_logger.log_run_start.assert_called_once_with(2, False)
        mock_logger.log_run_end.assert_called_once_with(3, 2, 1)
        mock_logger.log_warning.assert_called_once()
        assert "1" in mock_logger.log_warning.call_args[0][0]
        assert "'placed_files': 2" in mock_logger.log_system_info.call_args[0][0]

    def test_classify_directories_defaults_to_cwd(self, classifier, temp_dir, monkeypatch, mock_logger):
        monkeypatch.chdir(temp_dir)
        (temp_dir / "a_2020FY.txt").write_text("a")

        stats = classifier.classify_directories([])

        assert stats.placed_files == 1
        assert (temp_dir / "2020FY" / "a_2020FY.txt").exists()
        mock_logger.log_warning.assert_not_called()

    def test_preview_directory(self, classifier, sample_dir):
        result = {path.name: (fy, kind) for path, fy, kind in classifier.preview_directory(sample_dir)}

        assert result["text_10JUL2022.txt"] == (2023, None)
        assert result["text_10NAN2020.txt"] == (None, "UnknownMonth")
        assert result["text.txt"] == (None, "UnrecognizedFormat")
        assert len(result) == 18
        assert collect_files(sample_dir) == {sample_dir / name for name in SAMPLE_FILES}

    def test_get_status(self, classifier, sample_dir):
        classifier.classify_directory(sample_dir)

        [status] = classifier.get_status([sample_dir])

        assert status['unclassified_files_count'] == 5
        assert status['classified_files_count'] == 13
        assert status['files_per_fy'] == {2020: 4, 2021: 5, 2022: 2, 2023: 2}
