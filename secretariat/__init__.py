"""In-memory student records with an SQL-like query language and a student-table cipher."""

__version__ = "0.1.0"
__all__ = ["__version__"]