"""
Exam Prep API - Exam Source
Read-only access to exams and their nested questions.

Exam documents live in one collection; each exam keeps its questions in a
subcollection. Every exam's questions are fetched concurrently and joined
before assembly. Completion order does not matter, exams are unordered.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional

from config.settings import get_settings
from src.assembly.models import Exam, Question
from src.utils.resilience import RetryConfig, retry_with_backoff

logger = logging.getLogger(__name__)


class ExamSourceError(Exception):
    """Raised when the upstream store cannot be read after retries."""
    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"Exam source failed during '{operation}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ExamSource(ABC):
    """
    Abstract read interface used by the API layer.

    Implementations return fully materialized exams (questions included).
    """

    @abstractmethod
    async def fetch_all_exams(self) -> List[Exam]:
        """Every exam with its questions."""
        pass

    @abstractmethod
    async def fetch_exams_by_ids(self, exam_ids: Iterable[str]) -> List[Exam]:
        """
        Exams for the given ids, in request order.

        Unknown ids are skipped.
        """
        pass


class FirestoreExamSource(ExamSource):
    """Exam source backed by Cloud Firestore via firebase_admin."""

    def __init__(
        self,
        client: Any = None,
        retry_config: Optional[RetryConfig] = None,
        exams_collection: Optional[str] = None,
        questions_subcollection: Optional[str] = None
    ):
        settings = get_settings()
        self._client = client
        self.retry_config = retry_config or RetryConfig.from_settings()
        self.exams_collection = exams_collection or settings.firestore_exams_collection
        self.questions_subcollection = (
            questions_subcollection or settings.firestore_questions_subcollection
        )

    @property
    def client(self):
        if self._client is None:
            from src.database.firebase import get_firestore_client
            self._client = get_firestore_client()
        return self._client

    async def _read(self, operation: str, func: Callable, *args) -> Any:
        """Run a blocking Firestore call off the event loop, with retries."""
        async def attempt():
            return await asyncio.to_thread(func, *args)

        try:
            return await retry_with_backoff(attempt, self.retry_config)
        except Exception as e:
            logger.error(f"Firestore read failed ({operation}): {e}", exc_info=True)
            raise ExamSourceError(operation, e) from e

    def _exam_ref(self, exam_id: str):
        return self.client.collection(self.exams_collection).document(exam_id)

    def _list_exam_snapshots(self) -> list:
        return list(self.client.collection(self.exams_collection).get())

    def _get_exam_snapshot(self, exam_id: str):
        return self._exam_ref(exam_id).get()

    def _list_question_snapshots(self, exam_id: str) -> list:
        return list(self._exam_ref(exam_id).collection(self.questions_subcollection).get())

    async def _load_exam(self, snapshot) -> Exam:
        question_snaps = await self._read(
            f"questions:{snapshot.id}", self._list_question_snapshots, snapshot.id
        )
        questions = [
            Question.from_record(q.id, q.to_dict() or {})
            for q in question_snaps
        ]
        return Exam.from_record(snapshot.id, snapshot.to_dict() or {}, questions)

    async def fetch_all_exams(self) -> List[Exam]:
        snapshots = await self._read("exams", self._list_exam_snapshots)
        exams = await asyncio.gather(*(self._load_exam(s) for s in snapshots))
        logger.debug(f"Fetched {len(exams)} exams from '{self.exams_collection}'")
        return list(exams)

    async def fetch_exams_by_ids(self, exam_ids: Iterable[str]) -> List[Exam]:
        exam_ids = [str(i) for i in exam_ids]
        snapshots = await asyncio.gather(*(
            self._read(f"exam:{exam_id}", self._get_exam_snapshot, exam_id)
            for exam_id in exam_ids
        ))
        found = [s for s in snapshots if s.exists]
        if len(found) < len(exam_ids):
            logger.info(f"{len(exam_ids) - len(found)} requested exams not found")
        exams = await asyncio.gather(*(self._load_exam(s) for s in found))
        return list(exams)


class InMemoryExamSource(ExamSource):
    """
    Exam source over raw records held in memory.

    Records use the stored document shape:
        {"id": ..., "title": ..., "questionPercentage": ..., "questions": [{...}]}
    Useful for local runs and tests.
    """

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self.records = list(records or [])

    @staticmethod
    def _to_exam(record: Dict[str, Any]) -> Exam:
        questions = [
            Question.from_record(q.get("id", f"{record.get('id')}-{i}"), q)
            for i, q in enumerate(record.get("questions") or [])
        ]
        return Exam.from_record(record.get("id", ""), record, questions)

    async def fetch_all_exams(self) -> List[Exam]:
        return [self._to_exam(r) for r in self.records]

    async def fetch_exams_by_ids(self, exam_ids: Iterable[str]) -> List[Exam]:
        by_id = {str(r.get("id")): r for r in self.records}
        return [self._to_exam(by_id[str(i)]) for i in exam_ids if str(i) in by_id]
