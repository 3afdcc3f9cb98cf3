# API Routes
from api.routes.exams import router as exams_router

__all__ = [
    "exams_router",
]
