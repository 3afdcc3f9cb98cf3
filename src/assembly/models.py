"""
Exam Prep API - Assembly Models
Question / Exam / Block value objects used by the exam assembler.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def _finite_number(value: Any, default: float = 0.0) -> float:
    """Coerce a loosely typed record field to a finite number."""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def _plain_number(value: Any) -> float:
    number = _finite_number(value)
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class Question:
    """A single multiple-choice question as stored under an exam"""
    id: str
    text: str = ""
    options: Tuple[str, ...] = ()
    correct_answer: int = 0
    image: Optional[str] = None
    group_id: Optional[str] = None
    order: float = 0

    @classmethod
    def from_record(cls, question_id: str, data: Dict[str, Any]) -> "Question":
        """
        Build a Question from a raw document record.

        Wire names follow the stored documents (setId, setOrder, correctAnswer).
        Non-finite or missing setOrder is normalized to 0; nothing is rejected.
        The image reference is kept as stored.
        """
        image = data.get("image")
        if image is not None:
            image = str(image)

        group_id = data.get("setId")
        return cls(
            id=str(question_id),
            text=str(data.get("text") or ""),
            options=tuple(str(o) for o in (data.get("options") or [])),
            correct_answer=int(_finite_number(data.get("correctAnswer"))),
            image=image,
            group_id=str(group_id) if group_id else None,
            order=_plain_number(data.get("setOrder")),
        )


@dataclass(frozen=True)
class Exam:
    """An exam (chapter) with its weight and question pool"""
    id: str
    title: str = ""
    weight_percent: float = 0
    questions: Tuple[Question, ...] = ()

    @classmethod
    def from_record(
        cls,
        exam_id: str,
        data: Dict[str, Any],
        questions: List[Question]
    ) -> "Exam":
        return cls(
            id=str(exam_id),
            title=str(data.get("title") or ""),
            weight_percent=_plain_number(data.get("questionPercentage")),
            questions=tuple(questions),
        )


@dataclass(frozen=True)
class Block:
    """
    Indivisible unit of selection.

    Either every question of one group sorted by order, or one ungrouped
    question. Selection only ever accepts or rejects a whole block.
    """
    questions: Tuple[Question, ...]
    group_id: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.questions)

    def __len__(self) -> int:
        return len(self.questions)


@dataclass
class BlockSelection:
    """Blocks accepted for one budget, in acceptance order."""
    blocks: List[Block] = field(default_factory=list)
    total: int = 0
    fallback_used: bool = False


@dataclass
class ExamAllocation:
    """Per-exam diagnostics from one assembly run."""
    exam_id: str
    target: int
    block_count: int
    selected_questions: int
    fallback_used: bool = False


@dataclass
class AssemblyResult:
    """Outcome of one assembly request."""
    base: int
    max: int
    questions: List[Question] = field(default_factory=list)
    allocations: List[ExamAllocation] = field(default_factory=list)
    fallback_used: bool = False

    @property
    def count(self) -> int:
        return len(self.questions)

    @property
    def requested(self) -> int:
        """Sum of per-exam targets (may differ from base, no renormalization)."""
        return sum(a.target for a in self.allocations)
