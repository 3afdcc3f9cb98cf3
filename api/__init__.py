# API module
from api.models import (
    ExamIdsRequest,
    QuestionOut,
    ExamOut,
    AssembledExamResponse,
    HealthResponse,
    ErrorResponse
)
from api.main import app

__all__ = [
    "app",
    "ExamIdsRequest",
    "QuestionOut",
    "ExamOut",
    "AssembledExamResponse",
    "HealthResponse",
    "ErrorResponse",
]
