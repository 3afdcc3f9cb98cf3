# Database module
from src.database.exam_source import (
    ExamSource,
    ExamSourceError,
    FirestoreExamSource,
    InMemoryExamSource
)

__all__ = [
    "ExamSource",
    "ExamSourceError",
    "FirestoreExamSource",
    "InMemoryExamSource",
]
