# roster/errors.py
"""Модуль для определения пользовательских исключений приложения."""


class StudentAppError(Exception):
    """Базовый класс для всех исключений в этом приложении."""
    pass


class DataValidationError(StudentAppError):
    """Некорректный пользовательский ввод (пустое имя, нечисловой ID и т.п.)."""
    pass


class MalformedLineError(StudentAppError):
    """Строку CSV не удалось разобрать в запись о студенте."""
    pass


class FileProcessingError(StudentAppError):
    """Исключение, связанное с ошибками импорта или экспорта файлов."""
    pass


class StudentNotFoundError(StudentAppError):
    """Исключение, когда студент с заданным ID не найден."""
    pass


class DuplicateStudentIdError(StudentAppError):
    """Исключение при попытке добавить студента с уже существующим ID."""
    pass
