import logging
from pathlib import Path

import firebase_admin
from firebase_admin import credentials

from app.core.config import Settings

logger = logging.getLogger(__name__)

COMMON_SERVICE_ACCOUNT_FILES = (
    "firebase-service-account.json",
    "serviceAccountKey.json",
    "firebase-adminsdk.json",
)


def resolve_service_account_path(explicit: str | None, search_dir: Path | None = None) -> Path | None:
    """An explicit key path wins; otherwise look for a well-known file name in ``search_dir``."""
    if explicit:
        return Path(explicit)
    search_dir = search_dir or Path.cwd()
    for name in COMMON_SERVICE_ACCOUNT_FILES:
        candidate = search_dir / name
        if candidate.is_file():
            return candidate
    return None


def initialize_firebase(config: Settings, *, search_dir: Path | None = None) -> firebase_admin.App:
    """Initialize the default Firebase Admin app once per process."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options: dict[str, str] = {}
    if config.FIREBASE_PROJECT_ID:
        options["projectId"] = config.FIREBASE_PROJECT_ID
    if config.FIREBASE_STORAGE_BUCKET:
        options["storageBucket"] = config.FIREBASE_STORAGE_BUCKET

    key_path = resolve_service_account_path(config.FIREBASE_SERVICE_ACCOUNT_KEY, search_dir)
    if key_path:
        logger.info("Initializing Firebase Admin with service account %s", key_path)
        credential = credentials.Certificate(str(key_path))
    else:
        logger.info("Initializing Firebase Admin with application default credentials")
        credential = None
    return firebase_admin.initialize_app(credential, options or None)
