# tests/conftest.py
import pytest
from typing import List
from roster.models import Student
from roster.store import StudentStore


@pytest.fixture
def sample_students() -> List[Student]:
    """Фикстура, предоставляющая тестовый набор студентов."""
    return [
        Student(1, "Иванов Иван", 19, "Математика"),
        Student(3, "Петров Петр", 21, "Физика"),
        Student(2, "Сидорова Анна", 20, "Информатика"),
    ]


@pytest.fixture
def storage_file(tmp_path):
    return tmp_path / "students.csv"


@pytest.fixture
def store(storage_file, sample_students) -> StudentStore:
    """Хранилище во временном каталоге, заполненное тестовыми студентами."""
    s = StudentStore(storage_file)
    for student in sample_students:
        s.add(student)
    return s
