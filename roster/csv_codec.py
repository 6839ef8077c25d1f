# roster/csv_codec.py
"""Модуль для преобразования записей о студентах в строки CSV и обратно.

Формат файла: UTF-8, одна запись на строку, поля ``id,name,age,course``
без заголовка. Текстовое поле берётся в двойные кавычки, если содержит
запятую, кавычку или перевод строки; кавычки внутри удваиваются.
"""
import os
import re
from typing import Iterable, Iterator, List, NamedTuple

from .config import FILE_ENCODING
from .errors import MalformedLineError
from .models import Student

FIELD_SEPARATOR = ","
QUOTE = '"'
_SPECIAL_CHARS = (FIELD_SEPARATOR, QUOTE, "\n", "\r")
MIN_FIELDS = 4
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class ReadResult(NamedTuple):
    """Результат чтения файла: разобранные записи и номера пропущенных строк."""
    students: List[Student]
    skipped: List[int]


def escape_field(text: str) -> str:
    """Экранирует текстовое поле для записи в CSV."""
    if text is None:
        return ""
    if any(ch in text for ch in _SPECIAL_CHARS):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def encode_student(student: Student) -> str:
    """Кодирует запись в одну строку CSV (без символа конца строки)."""
    return FIELD_SEPARATOR.join([
        str(int(student.id)),
        escape_field(student.name),
        str(int(student.age)),
        escape_field(student.course),
    ])


def split_line(line: str) -> List[str]:
    """Разбивает строку CSV на поля за один проход.

    Внутри кавычек ``""`` даёт одну литеральную кавычку, одиночная кавычка
    закрывает область. Вне кавычек кавычка открывает область, запятая
    завершает поле. Закавыченные и обычные фрагменты могут чередоваться
    внутри одного поля.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if in_quotes:
            if ch == QUOTE:
                if i + 1 < length and line[i + 1] == QUOTE:
                    current.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(ch)
        else:
            if ch == QUOTE:
                in_quotes = True
            elif ch == FIELD_SEPARATOR:
                fields.append("".join(current))
                current = []
            else:
                current.append(ch)
        i += 1
    fields.append("".join(current))
    return fields


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def parse_int_field(text: str) -> int:
    """Разбирает целое поле: необязательный знак и только цифры ASCII.

    Пробелы, подчёркивания и не-ASCII цифры, которые допускает ``int()``,
    считаются ошибкой.
    """
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"не целое число: {text!r}")
    return int(text)


def decode_student(line: str) -> Student:
    """Декодирует строку CSV в запись.

    Лишние поля после четвёртого игнорируются. Если полей меньше четырёх
    или ID/возраст не являются целыми числами, выбрасывается
    MalformedLineError.
    """
    parts = split_line(_strip_terminator(line))
    if len(parts) < MIN_FIELDS:
        raise MalformedLineError(f"Ожидалось минимум {MIN_FIELDS} поля, получено {len(parts)}: {line!r}")
    try:
        student_id = parse_int_field(parts[0])
        age = parse_int_field(parts[2])
    except ValueError as e:
        raise MalformedLineError(f"Нечисловой ID или возраст в строке {line!r}: {e}")
    return Student(student_id, parts[1], age, parts[3])


class LogicalLine(NamedTuple):
    """Одна логическая запись файла и физические строки, из которых она собрана."""
    start: int
    physical: List[str]
    closed: bool


def iter_logical_lines(stream: Iterable[str]) -> Iterator[LogicalLine]:
    """Группирует физические строки потока в логические записи.

    Поток должен быть открыт с ``newline=''``. Если физическая строка
    оставляет кавычку открытой (нечётное число кавычек), она склеивается со
    следующими, поэтому поле с переводом строки внутри читается как одна
    запись. Если файл закончился при открытой кавычке, последняя группа
    отдаётся с ``closed=False``.
    """
    buffer = []
    quotes = 0
    start = 0
    for line_num, raw in enumerate(stream, start=1):
        if not buffer:
            start = line_num
        buffer.append(raw)
        quotes += raw.count(QUOTE)
        if quotes % 2:
            continue
        yield LogicalLine(start, buffer, True)
        buffer = []
        quotes = 0
    if buffer:
        yield LogicalLine(start, buffer, False)


def _decode_physical_lines(record: LogicalLine, students: List[Student], skipped: List[int]):
    # Каждая строка сама по себе: ошибочная кавычка портит только свою строку
    for offset, raw in enumerate(record.physical):
        line = _strip_terminator(raw)
        if not line.strip():
            continue
        try:
            students.append(decode_student(line))
        except MalformedLineError:
            skipped.append(record.start + offset)


def parse_stream(stream: Iterable[str]) -> ReadResult:
    """Разбирает все записи потока, пропуская некорректные строки.

    Если склеенная запись не разбирается или кавычка осталась открытой до
    конца файла, её физические строки разбираются по отдельности, так что
    пропускается только сама ошибочная строка.
    """
    students = []
    skipped = []
    for record in iter_logical_lines(stream):
        logical = _strip_terminator("".join(record.physical))
        if not logical.strip():
            continue
        if record.closed:
            try:
                students.append(decode_student(logical))
                continue
            except MalformedLineError:
                if len(record.physical) == 1:
                    skipped.append(record.start)
                    continue
        _decode_physical_lines(record, students, skipped)
    return ReadResult(students, skipped)


def read_students(filepath) -> ReadResult:
    """Читает записи из CSV-файла.

    Ошибки ввода-вывода (OSError, UnicodeDecodeError) передаются
    вызывающему коду: решать, глотать их или нет, должен он.
    """
    with open(filepath, mode='r', encoding=FILE_ENCODING, newline='') as file:
        return parse_stream(file)


def encode_file(students: Iterable[Student], line_terminator: str = os.linesep) -> bytes:
    """Кодирует все записи в содержимое файла (UTF-8).

    UnicodeEncodeError (например, одиночный суррогат в имени) возникает
    здесь, до того как целевой файл открыт на запись.
    """
    text = "".join(encode_student(s) + line_terminator for s in students)
    return text.encode(FILE_ENCODING)


def write_students(filepath, students: Iterable[Student]):
    """Полностью перезаписывает CSV-файл записями о студентах.

    Каталог файла должен существовать.
    """
    data = encode_file(students)
    with open(filepath, mode='wb') as file:
        file.write(data)
