"""DELETE queries over the secretariat tables."""

from __future__ import annotations

from .conditions import Condition, parse_conditions
from .models import Enrollment, Secretariat


def _where(query: str) -> list[Condition]:
    conditions = parse_conditions(query)
    if not conditions:
        raise ValueError(f"query has no WHERE clause: {query!r}")
    return conditions


def _remove_identical(records: list, target) -> None:
    for position, record in enumerate(records):
        if record is target:
            del records[position]
            return


def delete(secretariat: Secretariat, query):
    """Run a DELETE query and return how many rows were removed.

    Every table named in the query is filtered, in the order students,
    subjects, enrollments. Removing an enrollment first refreshes the
    average of the student at the position given by its student id,
    leaving that enrollment's subject out.
    """
    conditions = _where(query)
    removed = 0

    if "studenti" in query:
        kept = [
            student
            for student in secretariat.students
            if not all(c.matches_student(student) for c in conditions)
        ]
        removed += len(secretariat.students) - len(kept)
        secretariat.students[:] = kept

    if "materii" in query:
        kept = [
            subject
            for subject in secretariat.subjects
            if not all(c.matches_subject(subject) for c in conditions)
        ]
        removed += len(secretariat.subjects) - len(kept)
        secretariat.subjects[:] = kept

    if "inrolari" in query:
        doomed: list[Enrollment] = [
            enrollment
            for enrollment in secretariat.enrollments
            if all(c.matches_enrollment(enrollment) for c in conditions)
        ]
        # Each average is taken over the enrollments still present at that moment.
        for enrollment in doomed:
            secretariat.recompute_average(enrollment.student_id, enrollment.subject_id)
            _remove_identical(secretariat.enrollments, enrollment)
            removed += 1

    return removed