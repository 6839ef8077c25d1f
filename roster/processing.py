# roster/processing.py
"""Проверка пользовательского ввода и вспомогательные операции над списком."""
from typing import List

from .errors import DataValidationError, DuplicateStudentIdError, StudentNotFoundError
from .models import Student

SORT_KEYS = {
    'id': lambda s: s.id,
    'name': lambda s: s.name.lower(),
    'age': lambda s: (s.age, s.id),
    'course': lambda s: (s.course.lower(), s.id),
}


def parse_int(text: str, field_label: str) -> int:
    """Преобразует введённый текст в целое число."""
    try:
        return int(str(text).strip())
    except ValueError:
        raise DataValidationError(f"Поле '{field_label}' должно быть целым числом, получено: {text!r}")


def _clean_text(name: str, course: str):
    name = (name or "").strip()
    course = (course or "").strip()
    if not name or not course:
        raise DataValidationError("Имя и курс не могут быть пустыми.")
    return name, course


def build_student(id_text: str, name: str, age_text: str, course: str) -> Student:
    """Собирает запись из пользовательского ввода, проверяя все поля."""
    student_id = parse_int(id_text, "ID")
    age = parse_int(age_text, "Возраст")
    name, course = _clean_text(name, course)
    return Student(student_id, name, age, course)


def apply_edits(current: Student, name: str, age_text: str, course: str) -> Student:
    """Возвращает изменённую копию записи; пустой ввод оставляет прежнее значение."""
    age = parse_int(age_text, "Возраст") if age_text.strip() else current.age
    name, course = _clean_text(name or current.name, course or current.course)
    return current.replace(name=name, age=age, course=course)


def ensure_unique_id(store, student_id: int):
    """Проверяет, что ID ещё не занят (предусловие для store.add)."""
    if store.exists_id(student_id):
        raise DuplicateStudentIdError(f"Студент с ID {student_id} уже существует.")


def ensure_existing_id(store, student_id: int) -> Student:
    """Возвращает запись с заданным ID или выбрасывает StudentNotFoundError."""
    student = store.get(student_id)
    if student is None:
        raise StudentNotFoundError(f"Студент с ID {student_id} не найден.")
    return student


def sort_students(students: List[Student], by: str) -> List[Student]:
    """Сортирует список студентов по заданному критерию."""
    key = SORT_KEYS.get(by)
    if key is None:
        raise ValueError(f"Неверный ключ для сортировки. Доступно: {', '.join(repr(k) for k in SORT_KEYS)}.")
    return sorted(students, key=key)
