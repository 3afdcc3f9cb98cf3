"""
Exam Prep API - Central Configuration
Pydantic V2 settings loaded from environment / .env
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    # ===== Firebase / Firestore =====
    firebase_credentials_path: str = "firebase-service-account.json"
    firebase_project_id: str = ""
    firestore_exams_collection: str = "exams"
    firestore_questions_subcollection: str = "questions"

    # ===== Frontend URL (for CORS) =====
    frontend_url: str = "http://localhost:3000"

    # ===== Application =====
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_enabled: bool = True

    # ===== Exam Assembly =====
    assembly_default_base: int = 25   # Used when caller sends base <= 0
    assembly_default_max: int = 100   # Used when caller sends max <= 0

    # ===== Exam Source =====
    fetch_timeout: float = 30.0  # Whole fan-out, seconds

    # ===== Retry Settings =====
    retry_max_attempts: int = 3
    retry_base_delay: float = 0.5
    retry_max_delay: float = 8.0
    retry_exponential_base: float = 2.0

    # Pydantic V2 Modern Config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Don't error on extra env vars
    )


@lru_cache()
def get_settings() -> Settings:
    """Singleton settings instance"""
    return Settings()
