# roster/models.py
"""Модуль, определяющий основную модель данных — запись о студенте."""


class Student:
    """Запись о студенте: ID, имя, возраст и курс.

    Запись неизменяема: хранилище никогда не правит её на месте, а заменяет
    целиком. Для получения изменённой копии используйте ``replace``.
    Проверка непустых имени и курса выполняется вызывающей стороной.
    """

    __slots__ = ("_id", "_name", "_age", "_course")

    def __init__(self, student_id: int, name: str, age: int, course: str):
        object.__setattr__(self, "_id", student_id)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_age", age)
        object.__setattr__(self, "_course", course)

    def __setattr__(self, key, value):
        raise AttributeError("Запись Student неизменяема, используйте replace().")

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def age(self) -> int:
        return self._age

    @property
    def course(self) -> str:
        return self._course

    def replace(self, **changes) -> "Student":
        """Возвращает копию записи с заменёнными полями."""
        fields = {"student_id": self.id, "name": self.name, "age": self.age, "course": self.course}
        if "id" in changes:
            changes["student_id"] = changes.pop("id")
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"Неизвестные поля: {', '.join(sorted(unknown))}")
        fields.update(changes)
        return Student(**fields)

    def _key(self):
        return (self.id, self.name, self.age, self.course)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        """Возвращает строковое представление объекта для отладки."""
        return f"Student(id={self.id}, name={self.name!r}, age={self.age}, course={self.course!r})"

    def __str__(self) -> str:
        """Возвращает удобное для пользователя строковое представление объекта."""
        return f"ID: {self.id:<5} | Имя: {self.name:<20} | Возраст: {self.age:<3} | Курс: {self.course}"
