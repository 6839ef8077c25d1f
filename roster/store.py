# roster/store.py
"""Хранилище записей о студентах: список в памяти + CSV-файл на диске.

Каждая изменяющая операция сразу же полностью перезаписывает файл
хранилища. Загрузка и сохранение работают в режиме "по возможности":
ошибки файла пишутся в лог, но не прерывают работу приложения. Импорт и
экспорт — явные действия пользователя, их ошибки передаются вызывающему
коду как FileProcessingError.

Хранилище не потокобезопасно: при доступе из нескольких потоков вызовы
нужно сериализовать снаружи.
"""
import logging
import os
from typing import List, NamedTuple, Optional

from . import csv_codec
from .config import resolve_storage_path
from .errors import FileProcessingError
from .models import Student

logger = logging.getLogger(__name__)


class ImportSummary(NamedTuple):
    """Итоги импорта для отображения пользователю."""
    imported: int
    added: int
    replaced: int
    skipped_lines: List[int]


class StudentStore:
    """Упорядоченная коллекция студентов с уникальными ID."""

    def __init__(self, storage_path=None):
        self._storage_file = resolve_storage_path(storage_path)
        self._students: List[Student] = []
        self._skipped_lines: List[int] = []
        self.load()

    @property
    def skipped_lines(self) -> List[int]:
        """Номера строк, пропущенных при последней загрузке."""
        return list(self._skipped_lines)

    def storage_file_path(self) -> str:
        """Абсолютный путь к файлу хранилища (для диагностики)."""
        return str(self._storage_file)

    def load(self) -> int:
        """Перечитывает файл хранилища. Возвращает число загруженных записей."""
        self._students = []
        self._skipped_lines = []
        if not self._storage_file.exists():
            logger.info("Файл хранилища %s не найден, начинаем с пустого списка", self._storage_file)
            return 0
        try:
            result = csv_codec.read_students(self._storage_file)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Не удалось прочитать файл хранилища %s: %s", self._storage_file, e)
            return 0

        self._students = result.students
        self._skipped_lines = result.skipped
        if result.skipped:
            logger.warning("В файле %s пропущены некорректные строки: %s",
                           self._storage_file, result.skipped)
        logger.info("Загружено %d студентов из %s", len(self._students), self._storage_file)
        return len(self._students)

    def _save(self):
        try:
            self._storage_file.parent.mkdir(parents=True, exist_ok=True)
            csv_codec.write_students(self._storage_file, self._students)
        except (OSError, UnicodeError) as e:
            logger.error("Не удалось сохранить файл хранилища %s: %s", self._storage_file, e)

    def get_all(self) -> List[Student]:
        return list(self._students)

    def get(self, student_id: int) -> Optional[Student]:
        return next((s for s in self._students if s.id == student_id), None)

    def exists_id(self, student_id: int) -> bool:
        return any(s.id == student_id for s in self._students)

    def add(self, student: Student):
        """Добавляет запись в конец списка.

        Уникальность ID проверяет вызывающий код (см. exists_id).
        """
        self._students.append(student)
        self._save()

    def update(self, student: Student) -> bool:
        """Заменяет запись с тем же ID, сохраняя её позицию.

        Если такого ID нет, ничего не меняется. Возвращает True, если
        запись была заменена.
        """
        replaced = False
        for i, s in enumerate(self._students):
            if s.id == student.id:
                self._students[i] = student
                replaced = True
                break
        if not replaced:
            logger.debug("Обновление: студент с ID %s не найден", student.id)
        self._save()
        return replaced

    def delete(self, student_id: int) -> bool:
        """Удаляет запись(и) с заданным ID. Возвращает True, если что-то удалено."""
        before = len(self._students)
        self._students = [s for s in self._students if s.id != student_id]
        removed = len(self._students) != before
        if not removed:
            logger.debug("Удаление: студент с ID %s не найден", student_id)
        self._save()
        return removed

    def import_csv(self, source_path, merge: bool) -> ImportSummary:
        """Импортирует записи из внешнего CSV-файла.

        В режиме слияния записи с совпадающим ID заменяются на месте, новые
        добавляются в конец в порядке файла. В режиме перезаписи текущий
        список полностью заменяется содержимым файла (дубликаты ID внутри
        файла не устраняются). Результат всегда сохраняется в файл
        хранилища.
        """
        try:
            result = csv_codec.read_students(source_path)
        except FileNotFoundError:
            raise FileProcessingError(f"Файл не найден по пути: {source_path}")
        except (OSError, UnicodeDecodeError) as e:
            raise FileProcessingError(f"Не удалось прочитать файл {source_path}: {e}")

        candidates = result.students
        if merge:
            merged = {s.id: s for s in self._students}
            added = replaced = 0
            for s in candidates:
                if s.id in merged:
                    replaced += 1
                else:
                    added += 1
                merged[s.id] = s
            self._students = list(merged.values())
        else:
            added, replaced = len(candidates), 0
            self._students = list(candidates)

        if result.skipped:
            logger.warning("При импорте из %s пропущены некорректные строки: %s",
                           source_path, result.skipped)
        logger.info("Импорт из %s (%s): %d записей, добавлено %d, заменено %d",
                    source_path, "слияние" if merge else "перезапись",
                    len(candidates), added, replaced)
        self._save()
        return ImportSummary(len(candidates), added, replaced, list(result.skipped))

    def export_csv(self, destination_path):
        """Экспортирует текущий список в произвольный CSV-файл."""
        try:
            csv_codec.write_students(destination_path, self._students)
        except (OSError, UnicodeError) as e:
            raise FileProcessingError(f"Ошибка экспорта в файл {destination_path}: {e}")
        logger.info("Экспортировано %d студентов в %s", len(self._students),
                    os.path.abspath(destination_path))
