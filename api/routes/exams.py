"""
Exam Prep API - Exam Routes
Read-only exam listing and block-aware exam assembly
"""
import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from api.deps import get_assembler, get_exam_source
from api.limiter import limiter
from api.models import AssembledExamResponse, ExamIdsRequest, ExamOut, QuestionOut
from config.settings import get_settings
from src.assembly.assembler import ExamAssembler, make_rng
from src.assembly.images import to_absolute_image_url
from src.assembly.models import Exam
from src.database.exam_source import ExamSource, ExamSourceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Exams"])


async def _fetch(coro) -> List[Exam]:
    """
    Await an exam source call under the configured timeout.

    Upstream failures become 503, timeouts 504.
    """
    settings = get_settings()
    try:
        return await asyncio.wait_for(coro, timeout=settings.fetch_timeout)
    except ExamSourceError as e:
        logger.error(f"Exam source error: {e}")
        raise HTTPException(status_code=503, detail="Exam source unavailable")
    except asyncio.TimeoutError:
        logger.error(f"Exam source timed out after {settings.fetch_timeout}s")
        raise HTTPException(status_code=504, detail="Exam source timed out")


@router.get("/exams/assembled", response_model=AssembledExamResponse)
@limiter.limit("30/minute")
async def get_assembled_exam(
    request: Request,
    base: Optional[str] = Query(None, description="Base size; missing or <= 0 uses 25"),
    max_questions: Optional[str] = Query(
        None, alias="max", description="Global cap; missing or <= 0 uses 100"
    ),
    absolute_images: str = Query(
        "true", alias="absoluteImages", description="Rewrite image references to absolute URLs"
    ),
    seed: Optional[int] = Query(None, description="Fix the random source for reproducible output"),
    source: ExamSource = Depends(get_exam_source),
    assembler: ExamAssembler = Depends(get_assembler)
):
    """
    Assemble a randomized exam from every stored exam.

    Each exam contributes about base * questionPercentage / 100 questions.
    Grouped questions (same setId) are never split. The result never exceeds
    max, unless a single group alone is larger than max.

    Returns:
        Effective base / max, the question count and the questions
    """
    exams = await _fetch(source.fetch_all_exams())

    try:
        result = assembler.assemble(
            exams,
            base=base,
            max_questions=max_questions,
            rng=make_rng(seed)
        )
    except Exception as e:
        logger.error(f"Exam assembly error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error assembling exam")

    questions = [QuestionOut.from_question(q) for q in result.questions]
    if absolute_images.strip().lower() == "true":
        base_url = str(request.base_url)
        questions = [
            q.model_copy(update={"image": to_absolute_image_url(base_url, q.image)})
            for q in questions
        ]

    return AssembledExamResponse(
        base=result.base,
        max=result.max,
        count=len(questions),
        questions=questions
    )


@router.get("/exams", response_model=List[ExamOut])
async def list_exams(source: ExamSource = Depends(get_exam_source)):
    """
    List every exam with its questions.
    """
    exams = await _fetch(source.fetch_all_exams())
    return [ExamOut.from_exam(exam) for exam in exams]


@router.post("/chapters/byIds", response_model=List[ExamOut])
async def get_chapters_by_ids(
    body: ExamIdsRequest,
    source: ExamSource = Depends(get_exam_source)
):
    """
    Fetch specific exams (chapters) by ID.

    Unknown IDs are skipped.
    """
    if not body.ids:
        raise HTTPException(status_code=400, detail="No IDs provided")

    exams = await _fetch(source.fetch_exams_by_ids([str(i) for i in body.ids]))
    return [ExamOut.from_exam(exam) for exam in exams]
