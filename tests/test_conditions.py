import pytest

from secretariat.conditions import Condition, parse_conditions
from secretariat.models import Enrollment, Student, Subject


@pytest.fixture
def student():
    return Student(id=3, name="Ana Pop", year=2, status="b", average=8.5)


def test_parse_without_where_is_empty():
    assert parse_conditions("SELECT * FROM studenti\n") == []


def test_parse_single_condition():
    assert parse_conditions("SELECT * FROM studenti WHERE an_studiu >= 2") == [
        Condition("an_studiu", ">=", "2")
    ]


def test_parse_two_conditions():
    query = "SELECT * FROM studenti WHERE an_studiu >= 2 AND statut = b"
    assert parse_conditions(query) == [
        Condition("an_studiu", ">=", "2"),
        Condition("statut", "=", "b"),
    ]


def test_parse_missing_tokens_become_empty():
    assert parse_conditions("SELECT * FROM studenti WHERE id") == [Condition("id", "", "")]


@pytest.mark.parametrize(
    "comparison, value, expected",
    [
        ("=", "3", True),
        ("!=", "3", False),
        ("<", "3", False),
        ("<=", "3", True),
        (">", "2", True),
        (">=", "4", False),
    ],
)
def test_student_id_operators(student, comparison, value, expected):
    assert Condition("id", comparison, value).matches_student(student) is expected


def test_student_year_with_trailing_newline(student):
    assert Condition("an_studiu", "=", "2\n").matches_student(student) is True


def test_student_status(student):
    assert Condition("statut", "=", "b").matches_student(student) is True
    assert Condition("statut", "=", "t").matches_student(student) is False
    assert Condition("statut", "<", "t").matches_student(student) is True


def test_average_threshold_is_nudged_up(student):
    assert Condition("medie_generala", "=", "8.5").matches_student(student) is False
    assert Condition("medie_generala", "<", "8.5").matches_student(student) is True
    assert Condition("medie_generala", ">", "8.5").matches_student(student) is False


def test_unknown_operator_never_matches(student):
    assert Condition("id", "~", "3").matches_student(student) is False


def test_unknown_field_never_matches(student):
    assert Condition("nume", "=", "Ana").matches_student(student) is False


def test_subject_only_compares_id():
    subject = Subject(id=4, name="Algebra", teacher="Ion Ionescu")
    assert Condition("id", ">=", "4").matches_subject(subject) is True
    assert Condition("id", "<", "4").matches_subject(subject) is False
    assert Condition("nume", "=", "Algebra").matches_subject(subject) is False


def test_enrollment_fields():
    enrollment = Enrollment(student_id=1, subject_id=5, grades=[1.0, 2.0, 3.0])
    assert Condition("id_student", "=", "1").matches_enrollment(enrollment) is True
    assert Condition("id_materie", "!=", "5").matches_enrollment(enrollment) is False
    assert Condition("id_materie", ">", "4").matches_enrollment(enrollment) is True
    assert Condition("note", "=", "1").matches_enrollment(enrollment) is False