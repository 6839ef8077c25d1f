# roster/config.py
"""Настройки приложения: имя файла хранилища, кодировка, логирование."""
import logging
import os
from pathlib import Path
from typing import Optional, Union

# --- КОНФИГУРАЦИЯ ---
DEFAULT_STORAGE_FILENAME = "students.csv"
FILE_ENCODING = "utf-8"
STORAGE_ENV_VAR = "ROSTER_STORAGE_FILE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PathLike = Union[str, "os.PathLike[str]"]


def resolve_storage_path(path: Optional[PathLike] = None, home: Optional[Path] = None) -> Path:
    """Определяет абсолютный путь к файлу хранилища.

    Относительные пути (и имя по умолчанию) отсчитываются от домашнего
    каталога пользователя, а не от текущего каталога, чтобы данные не
    зависели от места запуска программы.
    """
    base = Path(home) if home is not None else Path.home()
    target = Path(path) if path is not None else Path(DEFAULT_STORAGE_FILENAME)
    target = target.expanduser()
    if not target.is_absolute():
        target = base / target
    return target.absolute()


def storage_path_from_env() -> Optional[str]:
    """Путь к хранилищу из переменной окружения, если она задана."""
    value = os.environ.get(STORAGE_ENV_VAR, "").strip()
    return value or None


def setup_logging(level: Union[int, str] = logging.INFO):
    """Настраивает корневой логгер для консольного приложения."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
