"""SELECT queries over the secretariat tables."""

from __future__ import annotations

from typing import Optional, Sequence

from .conditions import Condition, parse_conditions
from .models import Enrollment, Secretariat, Student, Subject

# Field lists are read from a copy of the query held in a 100-byte buffer.
_FIELD_BUFFER = 100


def _query_head(query: str) -> str:
    """The part of the query up to and including ``WHERE``."""
    start = query.find("WHERE")
    return query if start < 0 else query[: start + len("WHERE")]


def _field_tokens(head: str) -> list[str]:
    tokens = [token for token in head[: _FIELD_BUFFER - 1].split(" ") if token]
    fields = []
    for token in tokens[1:]:
        if "FROM" in token:
            break
        fields.append(token)
    return fields


def _render(fields: Sequence[str], columns) -> str:
    """Join the columns each field token names; a token ending in ',' adds a space."""
    parts = []
    for token in fields:
        separator = " " if token.endswith(",") else ""
        for matches, text in columns:
            if matches(token):
                parts.append(text + separator)
    return "".join(parts)


def _grades(enrollment: Enrollment) -> str:
    return " ".join(f"{grade:.2f}" for grade in enrollment.grades)


def format_student(student: Student, fields: Optional[Sequence[str]]):
    """Render a student row; ``fields`` of None selects every column."""
    if fields is None:
        return (
            f"{student.id} {student.name} {student.year} "
            f"{student.status} {student.average:.2f}"
        )
    return _render(
        fields,
        (
            (lambda t: "id" in t, str(student.id)),
            (lambda t: "nume" in t, student.name),
            (lambda t: "an_studiu" in t, str(student.year)),
            (lambda t: "statut" in t, student.status),
            (lambda t: "medie_generala" in t, f"{student.average:.2f}"),
        ),
    )


def format_subject(subject: Subject, fields: Optional[Sequence[str]]):
    """Render a subject row; ``fields`` of None selects every column."""
    if fields is None:
        return f"{subject.id} {subject.name} {subject.teacher}"
    return _render(
        fields,
        (
            (lambda t: "id" in t, str(subject.id)),
            (lambda t: "nume" in t and "nume_titular" not in t, subject.name),
            (lambda t: "nume_titular" in t, subject.teacher),
        ),
    )


def format_enrollment(enrollment: Enrollment, fields: Optional[Sequence[str]]):
    """Render an enrollment row; ``fields`` of None selects every column."""
    if fields is None:
        return f"{enrollment.student_id} {enrollment.subject_id} {_grades(enrollment)}"
    return _render(
        fields,
        (
            (lambda t: "id_student" in t, str(enrollment.student_id)),
            (lambda t: "id_materie" in t, str(enrollment.subject_id)),
            (lambda t: "note" in t, _grades(enrollment)),
        ),
    )


def select(secretariat: Secretariat, query):
    """Run a SELECT query and return its output lines, without newlines.

    Every table whose name appears before ``WHERE`` is listed, in the order
    students, subjects, enrollments. All conditions must hold for a row.
    """
    head = _query_head(query)
    fields = None if "*" in head else _field_tokens(head)
    conditions: list[Condition] = parse_conditions(query)
    lines: list[str] = []

    if "studenti" in head:
        lines.extend(
            format_student(student, fields)
            for student in secretariat.students
            if all(c.matches_student(student) for c in conditions)
        )
    if "materii" in head:
        lines.extend(
            format_subject(subject, fields)
            for subject in secretariat.subjects
            if all(c.matches_subject(subject) for c in conditions)
        )
    if "inrolari" in head:
        lines.extend(
            format_enrollment(enrollment, fields)
            for enrollment in secretariat.enrollments
            if all(c.matches_enrollment(enrollment) for c in conditions)
        )
    return lines