"""
Exam Prep API - Image URL helpers
"""
import re
from typing import Optional

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


def to_absolute_image_url(base_url: str, image: Optional[str]) -> Optional[str]:
    """
    Rewrite a stored image reference to an absolute URL.

    Args:
        base_url: Scheme and host of the incoming request, e.g. "http://host:8000"
        image: Stored reference (absolute URL, "/uploads/..." or relative path)

    Returns:
        Absolute URL, or None for an empty reference
    """
    if image is None or not str(image).strip():
        return None

    src = str(image).strip()
    if _ABSOLUTE_URL.match(src):
        return src

    base_url = base_url.rstrip("/")
    if src.startswith("/uploads"):
        return f"{base_url}{src}"
    return f"{base_url}/{src[1:] if src.startswith('/') else src}"
