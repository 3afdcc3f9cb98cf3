"""
Exam Prep API - Utility Modules
"""
from src.utils.resilience import (
    RetryConfig,
    retry_with_backoff
)

__all__ = [
    "RetryConfig",
    "retry_with_backoff"
]
