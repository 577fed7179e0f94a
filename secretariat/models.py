"""Records kept by the secretariat and the reader for its text database."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

MAX_STUDENT_NAME = 40
MAX_SUBJECT_TEXT = 50
NUMBER_OF_GRADES = 3
EPSILON = 0.0005

# id, name, year of study, status, general average -- packed, little endian.
STUDENT_LAYOUT = struct.Struct("<i40sicf")

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _clip(text: str, size: int) -> str:
    """Keep what fits in a NUL-terminated buffer of ``size`` bytes."""
    return text.encode("utf-8")[: size - 1].decode("utf-8", "ignore")


def _tokens(line: str, separator: str) -> list[str]:
    return [token for token in line.split(separator) if token]


@dataclass
class Student:
    """A student with a fixed-size binary layout."""

    id: int
    name: str
    year: int
    status: str
    average: float = 0.0

    def pack(self) -> bytes:
        """Return the packed 53-byte record of this student."""
        name = self.name.encode("utf-8")[: MAX_STUDENT_NAME - 1]
        status = self.status.encode("latin-1", "replace")[:1] or b"\0"
        return STUDENT_LAYOUT.pack(self.id, name, self.year, status, _f32(self.average))


@dataclass
class Subject:
    """A subject and the teacher who holds it."""

    id: int
    name: str
    teacher: str


@dataclass
class Enrollment:
    """A student's enrollment in a subject with its three grades."""

    student_id: int
    subject_id: int
    grades: list[float] = field(default_factory=lambda: [0.0] * NUMBER_OF_GRADES)

    @property
    def total(self) -> float:
        first, second, third = self.grades
        return _f32(_f32(first + second) + third)


def _mean(enrollments: Iterable[Enrollment]) -> Optional[float]:
    total = 0.0
    count = 0
    for enrollment in enrollments:
        total = _f32(total + enrollment.total)
        count += 1
    if count == 0:
        return None
    return _f32(total / count)


def _scaled(mean: float) -> float:
    return _f32((mean + EPSILON) * 1000 / 1000)


@dataclass
class Secretariat:
    """The three tables: students, subjects and enrollments."""

    students: list[Student] = field(default_factory=list)
    subjects: list[Subject] = field(default_factory=list)
    enrollments: list[Enrollment] = field(default_factory=list)

    def add_student(self, id, name, year, status, average):
        """Append a new student and return it."""
        student = Student(
            id=id,
            name=_clip(name, MAX_STUDENT_NAME),
            year=year,
            status=status[:1] or "\0",
            average=_f32(average),
        )
        self.students.append(student)
        return student

    def average_for(self, student_id, excluded_subject=None):
        """Average of a student's grade totals, optionally leaving out one subject.

        Returns 0.0 when no enrollment is left to average.
        """
        mean = _mean(
            enrollment
            for enrollment in self.enrollments
            if enrollment.student_id == student_id
            and (excluded_subject is None or enrollment.subject_id != excluded_subject)
        )
        return 0.0 if mean is None else _scaled(mean)

    def recompute_average(self, student_id, excluded_subject=None):
        """Store a fresh average on the student at position ``student_id``.

        Student ids double as positions in the table; an id outside the table
        leaves every student untouched. The computed average is returned.
        """
        value = self.average_for(student_id, excluded_subject)
        if 0 <= student_id < len(self.students):
            self.students[student_id].average = value
        return value


def _parse_student(line: str, number: int) -> Student:
    tokens = _tokens(line, ",")
    if len(tokens) < 4:
        raise ValueError(f"line {number}: malformed student record {line!r}")
    return Student(
        id=_atoi(tokens[0]),
        name=_clip(tokens[1][1:], MAX_STUDENT_NAME),
        year=_atoi(tokens[2]),
        status=tokens[3][1:2] or "\0",
    )


def _parse_subject(line: str, number: int) -> Subject:
    tokens = _tokens(line, ",")
    if len(tokens) < 3:
        raise ValueError(f"line {number}: malformed subject record {line!r}")
    return Subject(
        id=_atoi(tokens[0]),
        name=_clip(tokens[1][1:], MAX_SUBJECT_TEXT),
        teacher=_clip(tokens[2].rstrip("\r\n")[1:], MAX_SUBJECT_TEXT),
    )


def _parse_enrollment(line: str, number: int) -> Enrollment:
    tokens = _tokens(line, " ")
    if len(tokens) < 2:
        raise ValueError(f"line {number}: malformed enrollment record {line!r}")
    grades = [_f32(_atof(token)) for token in tokens[2 : 2 + NUMBER_OF_GRADES]]
    grades.extend([0.0] * (NUMBER_OF_GRADES - len(grades)))
    return Enrollment(student_id=_atoi(tokens[0]), subject_id=_atoi(tokens[1]), grades=grades)


_SECTION_PARSERS = {
    "S": ("students", _parse_student),
    "M": ("subjects", _parse_subject),
    "I": ("enrollments", _parse_enrollment),
}


def parse_secretariat(text):
    """Build a secretariat from the sectioned text format.

    Sections start with a line beginning with ``[``; the second character
    picks the table (``S`` students, ``M`` subjects, ``I`` enrollments).
    Every student's average is computed from its enrollments.
    """
    secretariat = Secretariat()
    section = None
    for number, line in enumerate(text.splitlines(keepends=True), start=1):
        if line.startswith("["):
            section = _SECTION_PARSERS.get(line[1:2])
            continue
        if section is None or not line.strip():
            continue
        table, parser = section
        getattr(secretariat, table).append(parser(line, number))

    for student in secretariat.students:
        mean = _mean(e for e in secretariat.enrollments if e.student_id == student.id)
        student.average = _scaled(0.0 if mean is None else mean)
    return secretariat


def read_secretariat(path: Union[str, Path]):
    """Read a secretariat database file."""
    with open(path, encoding="utf-8") as handle:
        return parse_secretariat(handle.read())