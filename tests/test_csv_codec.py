# tests/test_csv_codec.py
import io

import pytest
from roster.csv_codec import (
    decode_student, encode_file, encode_student, escape_field, parse_stream, read_students,
    split_line, write_students,
)
from roster.errors import MalformedLineError
from roster.models import Student


def test_encode_quotes_commas_and_doubles_quotes():
    s = Student(7, "Doe, Jane", 20, 'A"B')
    line = encode_student(s)
    assert line == '7,"Doe, Jane",20,"A""B"'
    assert decode_student(line) == s


def test_escape_field_leaves_plain_text_alone():
    assert escape_field("Plain name") == "Plain name"
    assert escape_field("") == ""
    assert escape_field("a\nb") == '"a\nb"'


@pytest.mark.parametrize("name,course", [
    (",", '"'),
    ('""', ',,'),
    ('He said "hi", then left', "line1\nline2"),
    ('"quoted"', 'trailing,'),
    ("multi\r\nline", 'mixed, "all"\nof it'),
])
def test_roundtrip_special_characters(name, course):
    s = Student(42, name, 33, course)
    assert decode_student(encode_student(s)) == s


def test_split_line_concatenates_quoted_and_plain_spans():
    assert split_line('ab"c,d"e,f') == ["abc,de", "f"]
    assert split_line('"x""y"z,') == ['x"yz', ""]


def test_decode_ignores_extra_fields():
    assert decode_student("1,A,20,X,extra,more") == Student(1, "A", 20, "X")


def test_decode_strips_crlf():
    assert decode_student("1,A,20,X\r\n") == Student(1, "A", 20, "X")


@pytest.mark.parametrize("line", [
    "abc,A,20,X", "1,A,old,X", "1,A,20", "",
    " 7 ,A,20,X", "1_000,A,20,X", "1,A,\u0663,X",
])
def test_decode_rejects_malformed_lines(line):
    with pytest.raises(MalformedLineError):
        decode_student(line)


def test_parse_stream_skips_bad_lines_and_joins_multiline_records():
    data = '1,A,20,X\r\nbad,B,21,Y\r\n2,"multi\nline",22,Z\r\n\r\n3,C,23,W\n'
    result = parse_stream(io.StringIO(data, newline=""))
    assert [s.id for s in result.students] == [1, 2, 3]
    assert result.students[1].name == "multi\nline"
    assert result.skipped == [2]


def test_file_roundtrip(sample_students, tmp_path):
    """Тестирует полный цикл: запись в CSV и чтение обратно."""
    sample_students.append(Student(9, 'Имя, с "кавычками"', 18, "курс\nс переносом"))
    filepath = tmp_path / "test.csv"

    write_students(filepath, sample_students)
    result = read_students(filepath)

    assert result.students == sample_students
    assert result.skipped == []


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        read_students(tmp_path / "missing.csv")


def test_decode_accepts_signed_integers():
    assert decode_student("-3,A,+20,X") == Student(-3, "A", 20, "X")


def _parse(data):
    return parse_stream(io.StringIO(data, newline=""))


def test_unclosed_quote_at_end_of_file_drops_only_that_line():
    result = _parse('1,"Bob,20,CS\n2,Ann,21,Math\n3,Joe,22,Art\n')
    assert [s.id for s in result.students] == [2, 3]
    assert result.skipped == [1]


def test_stray_quotes_that_pair_up_do_not_swallow_records():
    result = _parse('1,"Bob,20,CS\n2,Ann,21,Math\n3,Joe",22\n4,Dan,23,Art\n')
    assert [s.id for s in result.students] == [2, 4]
    assert result.skipped == [1, 3]


def test_encode_file_fails_before_touching_target(tmp_path):
    target = tmp_path / "out.csv"
    target.write_bytes(b"1,A,20,X\n")
    with pytest.raises(UnicodeEncodeError):
        write_students(target, [Student(2, "bad\udcff", 20, "X")])
    assert target.read_bytes() == b"1,A,20,X\n"
    with pytest.raises(UnicodeEncodeError):
        encode_file([Student(2, "bad\udcff", 20, "X")])


def test_write_students_does_not_create_directories(tmp_path):
    with pytest.raises(OSError):
        write_students(tmp_path / "missing" / "out.csv", [Student(1, "A", 20, "X")])
    assert not (tmp_path / "missing").exists()
