"""
Исключения утилиты FY Classifier.

Делятся на две группы:
    * ClassificationError - файл не удалось классифицировать, он остается на месте,
      обработка каталога продолжается;
    * FileSystemInvariantError - окружение нарушено (каталог не существует,
      коллизия имен и т.п.), запуск прерывается.
"""


class FYClassifierError(Exception):
    """Базовый класс для всех ошибок утилиты."""
    pass


class ClassificationError(FYClassifierError):
    """Имя файла не позволяет определить финансовый год."""

    kind = "Classification"


class NoTokenError(ClassificationError):
    """В имени файла нет сегмента с датой."""

    kind = "NoToken"


class ResolveError(ClassificationError):
    """Базовый класс ошибок вычисления финансового года по токену."""

    kind = "Resolve"


class UnrecognizedFormatError(ResolveError):
    """Длина токена не соответствует ни одному из поддерживаемых форматов."""

    kind = "UnrecognizedFormat"


class InvalidFormatError(ResolveError):
    """Токен вида YYYYFY не содержит год или суффикс FY."""

    kind = "InvalidFormat"


class InvalidYearError(ResolveError):
    """Год не является числом."""

    kind = "InvalidYear"


class InvalidDayError(ResolveError):
    """День месяца не является числом."""

    kind = "InvalidDay"


class UnknownMonthError(ResolveError):
    """Трехбуквенный код месяца не распознан."""

    kind = "UnknownMonth"


class FileSystemInvariantError(FYClassifierError):
    """Нарушение инвариантов файловой системы. Прерывает весь запуск."""
    pass


class DirectoryNotFoundError(FileSystemInvariantError):
    """Каталог для классификации не существует."""
    pass


class InvalidDirectoryError(FileSystemInvariantError):
    """Путь для классификации существует, но не является каталогом."""
    pass


class PlacementError(FileSystemInvariantError):
    """Ошибка при создании каталога или перемещении файла."""
    pass


class DestinationNotDirectoryError(PlacementError):
    """Путь каталога финансового года занят файлом."""
    pass


class DestinationExistsError(PlacementError):
    """В каталоге финансового года уже есть файл с таким именем."""
    pass
