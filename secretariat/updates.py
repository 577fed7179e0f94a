"""UPDATE queries over the secretariat tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .conditions import Condition, parse_conditions
from .models import (
    MAX_STUDENT_NAME,
    NUMBER_OF_GRADES,
    Secretariat,
    _atof,
    _atoi,
    _clip,
    _f32,
)

_TOKEN_BUFFER = 50
_TEXT_BUFFER = 100


@dataclass(frozen=True)
class Assignment:
    """The ``column = value`` part of an UPDATE query.

    ``text`` holds the first double-quoted string of the query when the
    column is a name, and ``grades`` the value token with the two tokens
    that follow it, read as numbers.
    """

    field: str
    value: str
    text: Optional[str]
    grades: tuple[float, ...]

    @property
    def integer(self) -> int:
        return _atoi(self.value)

    @property
    def character(self) -> str:
        return self.value[:1] or "\0"

    @property
    def number(self) -> float:
        return _f32(_atof(self.value))


def _quoted(query: str) -> Optional[str]:
    parts = query.split('"')
    candidates = [part for part in parts[1:] if part]
    if len(parts) < 3 or not candidates:
        return None
    return _clip(candidates[0], _TEXT_BUFFER)


def parse_assignment(query):
    """Read the SET clause of an UPDATE query."""
    start = query.find("SET")
    if start < 0:
        raise ValueError(f"query has no SET clause: {query!r}")
    tokens = [token for token in query[start:].split(" ") if token]

    def token(position: int) -> str:
        return tokens[position] if position < len(tokens) else ""

    column = _clip(token(1), _TOKEN_BUFFER)
    value = _clip(token(3), _TOKEN_BUFFER)
    text = None
    if "nume" in column:
        text = _quoted(query)
        if text is None:
            raise ValueError(f"name value must be quoted: {query!r}")
    grades = tuple(_f32(_atof(token(3 + offset))) for offset in range(NUMBER_OF_GRADES))
    return Assignment(field=column, value=value, text=text, grades=grades)


def update(secretariat: Secretariat, query):
    """Run an UPDATE query and return how many rows matched.

    The table is named before ``SET``. Setting an enrollment's grades
    refreshes the average of the student at the position given by its
    student id.
    """
    conditions: list[Condition] = parse_conditions(query)
    if not conditions:
        raise ValueError(f"query has no WHERE clause: {query!r}")
    assignment = parse_assignment(query)
    column = assignment.field
    head = query[: query.find("SET")]
    matched = 0

    if "studenti" in head:
        for student in secretariat.students:
            if not all(c.matches_student(student) for c in conditions):
                continue
            matched += 1
            if "id" in column:
                student.id = assignment.integer
            if "nume" in column:
                student.name = _clip(assignment.text or "", MAX_STUDENT_NAME)
            if "an_studiu" in column:
                student.year = assignment.integer
            if "statut" in column:
                student.status = assignment.character
            if "medie_generala" in column:
                student.average = assignment.number

    if "materii" in head:
        for subject in secretariat.subjects:
            if not all(c.matches_subject(subject) for c in conditions):
                continue
            matched += 1
            if "id" in column:
                subject.id = assignment.integer
            if "nume_titular" in column:
                subject.teacher = assignment.text or ""
            elif "nume" in column:
                subject.name = assignment.text or ""

    if "inrolari" in head:
        for enrollment in secretariat.enrollments:
            if not all(c.matches_enrollment(enrollment) for c in conditions):
                continue
            matched += 1
            if "id_student" in column:
                enrollment.student_id = assignment.integer
            if "id_materie" in column:
                enrollment.subject_id = assignment.integer
            if "note" in column:
                enrollment.grades = list(assignment.grades)
                secretariat.recompute_average(enrollment.student_id)

    return matched