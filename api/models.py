"""
Exam Prep API - API Models
Request/Response models for FastAPI endpoints
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union
from datetime import datetime, timezone

from src.assembly.models import Exam, Question


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ================== REQUEST MODELS ==================

class ExamIdsRequest(BaseModel):
    """Request for fetching specific exams (chapters)"""
    ids: Optional[List[Union[str, int]]] = Field(None, description="Exam IDs to fetch")

    model_config = {
        "json_schema_extra": {
            "example": {
                "ids": ["algebra-1", "geometry-2"]
            }
        }
    }


# ================== RESPONSE MODELS ==================

class QuestionOut(BaseModel):
    """A question as returned to clients (stored field names)"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str = ""
    options: List[str] = Field(default_factory=list)
    correct_answer: int = Field(0, alias="correctAnswer")
    image: Optional[str] = None
    set_id: Optional[str] = Field(None, alias="setId")
    set_order: Union[int, float] = Field(0, alias="setOrder")

    @classmethod
    def from_question(cls, question: Question) -> "QuestionOut":
        return cls(
            id=question.id,
            text=question.text,
            options=list(question.options),
            correct_answer=question.correct_answer,
            image=question.image,
            set_id=question.group_id,
            set_order=question.order,
        )


class ExamOut(BaseModel):
    """An exam with its questions"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    question_percentage: Union[int, float] = Field(0, alias="questionPercentage")
    questions: List[QuestionOut] = Field(default_factory=list)

    @classmethod
    def from_exam(cls, exam: Exam) -> "ExamOut":
        return cls(
            id=exam.id,
            title=exam.title,
            question_percentage=exam.weight_percent,
            questions=[QuestionOut.from_question(q) for q in exam.questions],
        )


class AssembledExamResponse(BaseModel):
    """Response for the assembled exam endpoint"""
    base: int = Field(..., description="Effective base size after defaults")
    max: int = Field(..., description="Effective global cap after defaults")
    count: int = Field(..., description="Number of questions returned")
    questions: List[QuestionOut] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = "healthy"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=_utcnow)
    services: dict = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    detail: Optional[str] = None
    status_code: int = 500
