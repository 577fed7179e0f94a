"""WHERE clauses of the query language and their evaluation against records."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable

from .models import EPSILON, Enrollment, Student, Subject, _atof, _atoi, _f32

# Checked in this order: the two-character operators come before their
# one-character prefixes, and "!=" before "=".
_OPERATORS: tuple[tuple[str, Callable[[Any, Any], bool]], ...] = (
    ("<=", operator.le),
    (">=", operator.ge),
    ("!=", operator.ne),
    ("=", operator.eq),
    ("<", operator.lt),
    (">", operator.gt),
)


@dataclass(frozen=True)
class Condition:
    """A single ``field operator value`` test from a WHERE clause.

    Field names and operators are matched by substring, so a token such as
    ``id,`` still names the ``id`` column. A condition on a column the table
    does not have never matches.
    """

    field: str
    comparison: str
    value: str

    def _compare(self, actual, expected) -> bool:
        for symbol, test in _OPERATORS:
            if symbol in self.comparison:
                return bool(test(actual, expected))
        return False

    @property
    def _int(self) -> int:
        return _atoi(self.value)

    @property
    def _char(self) -> str:
        return self.value[:1] or "\0"

    @property
    def _float(self) -> float:
        # The threshold is nudged upwards to absorb rounding in stored averages.
        return _f32(_atof(self.value) + 2 * EPSILON)

    def matches_student(self, student: Student) -> bool:
        """Whether the student satisfies this condition."""
        if "id" in self.field and self._compare(student.id, self._int):
            return True
        if "an_studiu" in self.field and self._compare(student.year, self._int):
            return True
        if "statut" in self.field and self._compare(student.status, self._char):
            return True
        if "medie_generala" in self.field and self._compare(student.average, self._float):
            return True
        return False

    def matches_subject(self, subject: Subject) -> bool:
        """Whether the subject satisfies this condition; only ``id`` is comparable."""
        return "id" in self.field and self._compare(subject.id, self._int)

    def matches_enrollment(self, enrollment: Enrollment) -> bool:
        """Whether the enrollment satisfies this condition."""
        if "id_student" in self.field and self._compare(enrollment.student_id, self._int):
            return True
        if "id_materie" in self.field and self._compare(enrollment.subject_id, self._int):
            return True
        return False


def parse_conditions(query):
    """Return the conditions of the query's WHERE clause.

    A query without ``WHERE`` has none. When ``AND`` appears in the query a
    second condition follows the first. Missing tokens become empty strings.
    """
    start = query.find("WHERE")
    if start < 0:
        return []
    tokens = [token for token in query[start:].split(" ") if token]

    def token(position: int) -> str:
        return tokens[position] if position < len(tokens) else ""

    conditions = [Condition(token(1), token(2), token(3))]
    if "AND" in query:
        conditions.append(Condition(token(5), token(6), token(7)))
    return conditions