"""
Shared FastAPI dependencies
Overridden in tests through app.dependency_overrides.
"""
from functools import lru_cache

from config.settings import get_settings
from src.assembly.assembler import ExamAssembler
from src.database.exam_source import ExamSource, FirestoreExamSource


@lru_cache()
def get_exam_source() -> ExamSource:
    """Firestore-backed exam source (singleton, client created lazily)"""
    return FirestoreExamSource()


def get_assembler() -> ExamAssembler:
    """Assembler configured with the deployment's default base / max"""
    settings = get_settings()
    return ExamAssembler(
        default_base=settings.assembly_default_base,
        default_max=settings.assembly_default_max
    )
