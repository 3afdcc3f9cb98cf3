"""
Exam Prep API - Pytest Configuration and Fixtures
Shared fixtures for all test modules
"""
import os
import random
import pytest
from unittest.mock import MagicMock, patch
from typing import Any, Dict, List, Optional

# Set test environment before importing settings
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FIREBASE_CREDENTIALS_PATH"] = "does-not-exist.json"

from src.assembly.models import Exam, Question  # noqa: E402


# ================== Mock Settings ==================

@pytest.fixture
def mock_settings():
    """Mock settings for testing without real Firebase credentials."""
    settings = MagicMock()
    # Firebase / Firestore
    settings.firebase_credentials_path = "does-not-exist.json"
    settings.firebase_project_id = ""
    settings.firestore_exams_collection = "exams"
    settings.firestore_questions_subcollection = "questions"
    # Application
    settings.frontend_url = "http://localhost:3000"
    settings.debug = True
    settings.log_level = "DEBUG"
    settings.rate_limit_enabled = False
    # Assembly
    settings.assembly_default_base = 25
    settings.assembly_default_max = 100
    # Exam Source
    settings.fetch_timeout = 5.0
    # Retry Settings
    settings.retry_max_attempts = 3
    settings.retry_base_delay = 0.0
    settings.retry_max_delay = 0.0
    settings.retry_exponential_base = 2.0
    return settings


@pytest.fixture
def patched_settings(mock_settings):
    """Patch get_settings in every module that reads it."""
    with patch('config.settings.get_settings', return_value=mock_settings), \
         patch('config.logging.get_settings', return_value=mock_settings), \
         patch('src.utils.resilience.get_settings', return_value=mock_settings), \
         patch('src.database.exam_source.get_settings', return_value=mock_settings), \
         patch('api.routes.exams.get_settings', return_value=mock_settings), \
         patch('api.deps.get_settings', return_value=mock_settings):
        yield mock_settings


# ================== Data Factories ==================

def make_question(
    question_id: str,
    group_id: Optional[str] = None,
    order: float = 0,
    image: Optional[str] = None
) -> Question:
    """Create a question with throwaway text/options."""
    return Question(
        id=question_id,
        text=f"Question {question_id}",
        options=("A", "B", "C", "D"),
        correct_answer=0,
        image=image,
        group_id=group_id,
        order=order
    )


def make_exam(
    exam_id: str,
    weight_percent: float,
    singles: int = 0,
    groups: Optional[Dict[str, int]] = None
) -> Exam:
    """
    Create an exam with `singles` ungrouped questions plus one set per
    entry of `groups` (set id -> size).
    """
    questions: List[Question] = [
        make_question(f"{exam_id}-q{i}") for i in range(singles)
    ]
    for group_id, size in (groups or {}).items():
        questions.extend(
            make_question(f"{exam_id}-{group_id}-{i}", group_id=f"{exam_id}-{group_id}", order=i)
            for i in range(size)
        )
    return Exam(id=exam_id, title=f"Exam {exam_id}", weight_percent=weight_percent, questions=tuple(questions))


def make_exam_record(
    exam_id: str,
    percentage: Any,
    questions: List[Dict[str, Any]]
) -> Dict[str, Any]:
    """Raw stored-document shape used by InMemoryExamSource."""
    return {
        "id": exam_id,
        "title": f"Exam {exam_id}",
        "questionPercentage": percentage,
        "questions": questions
    }


@pytest.fixture
def question_factory():
    return make_question


@pytest.fixture
def exam_factory():
    return make_exam


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def sample_exam_records() -> List[Dict[str, Any]]:
    """Two exams: one with a reading set, one with plain questions."""
    reading = [
        {"id": f"r{i}", "text": f"Reading {i}", "options": ["a", "b"], "correctAnswer": 1,
         "setId": "passage-1", "setOrder": 3 - i}
        for i in range(3)
    ]
    reading += [
        {"id": f"rs{i}", "text": f"Single {i}", "options": ["a", "b"], "correctAnswer": 0,
         "image": "/uploads/fig.png" if i == 0 else None}
        for i in range(7)
    ]
    algebra = [
        {"id": f"a{i}", "text": f"Algebra {i}", "options": ["1", "2", "3"], "correctAnswer": 2,
         "image": "https://cdn.example.com/a.png" if i == 0 else "img/a.png"}
        for i in range(10)
    ]
    return [
        make_exam_record("reading", 40, reading),
        make_exam_record("algebra", "60", algebra),
    ]


# ================== FastAPI Test Client Fixtures ==================

@pytest.fixture
def in_memory_source(sample_exam_records):
    from src.database.exam_source import InMemoryExamSource
    return InMemoryExamSource(sample_exam_records)


@pytest.fixture
def test_client(in_memory_source, patched_settings):
    """
    FastAPI TestClient with the exam source swapped for in-memory records.

    Lifespan is not run, so Firebase is never initialized during tests.
    """
    from fastapi.testclient import TestClient
    from api.main import app
    from api.deps import get_exam_source

    app.dependency_overrides[get_exam_source] = lambda: in_memory_source

    client = TestClient(app, raise_server_exceptions=False)
    yield client

    app.dependency_overrides.clear()
