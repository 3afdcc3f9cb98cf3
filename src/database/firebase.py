"""
Firebase Admin SDK initialization and Firestore client access
"""
import os
import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore

from config.settings import get_settings

logger = logging.getLogger("src.database.firebase")

_firebase_app: Optional[firebase_admin.App] = None


def get_firebase_app() -> firebase_admin.App:
    """
    Initialize Firebase Admin SDK (singleton).

    Credentials are resolved in this order:
    1. Path to a service account file (development)
    2. JSON string from FIREBASE_CREDENTIALS_JSON (production/Docker)
    3. Application default credentials (GOOGLE_APPLICATION_CREDENTIALS)
    """
    global _firebase_app

    if _firebase_app is not None:
        return _firebase_app

    settings = get_settings()
    cred = None

    if settings.firebase_credentials_path and os.path.exists(settings.firebase_credentials_path):
        logger.info(f"Loading Firebase credentials from file: {settings.firebase_credentials_path}")
        cred = credentials.Certificate(settings.firebase_credentials_path)

    elif os.environ.get("FIREBASE_CREDENTIALS_JSON"):
        logger.info("Loading Firebase credentials from FIREBASE_CREDENTIALS_JSON environment variable")
        cred_dict = json.loads(os.environ["FIREBASE_CREDENTIALS_JSON"])
        # Keys pasted into env vars often carry escaped newlines
        if "\\n" in cred_dict.get("private_key", ""):
            cred_dict["private_key"] = cred_dict["private_key"].replace("\\n", "\n")
        cred = credentials.Certificate(cred_dict)

    elif os.environ.get("GOOGLE_APPLICATION_CREDENTIALS"):
        logger.info("Using Google application default credentials")
        cred = credentials.ApplicationDefault()

    else:
        raise RuntimeError(
            "Firebase credentials not found. Please provide either:\n"
            "1. FIREBASE_CREDENTIALS_PATH in .env pointing to service account JSON file\n"
            "2. FIREBASE_CREDENTIALS_JSON environment variable with JSON string\n"
            "3. GOOGLE_APPLICATION_CREDENTIALS for application default credentials"
        )

    options = {}
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id

    _firebase_app = firebase_admin.initialize_app(cred, options or None)
    logger.info("Firebase Admin SDK initialized successfully")

    return _firebase_app


def get_firestore_client():
    """Firestore client bound to the shared Firebase app."""
    return firestore.client(get_firebase_app())


def is_firebase_initialized() -> bool:
    return _firebase_app is not None
