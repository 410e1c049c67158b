import logging

import firebase_admin
from firebase_admin import auth

from app.core.errors import Unauthorized

logger = logging.getLogger(__name__)


class IdentityProvider:
    """Thin wrapper over Firebase Authentication bound to one Admin app."""

    def __init__(self, app: firebase_admin.App | None = None):
        self.app = app

    def verify_id_token(self, id_token: str) -> str:
        """Return the uid behind a Firebase ID token or raise Unauthorized."""
        try:
            decoded = auth.verify_id_token(id_token, app=self.app)
        except (auth.InvalidIdTokenError, auth.UserDisabledError, ValueError) as e:
            logger.warning("Rejected ID token: %s", e)
            raise Unauthorized("Invalid or expired ID token") from e
        return decoded["uid"]

    def find_user_by_email(self, email: str) -> auth.UserRecord | None:
        try:
            return auth.get_user_by_email(email, app=self.app)
        except auth.UserNotFoundError:
            return None

    def create_user(self, *, email: str, password: str, display_name: str) -> str:
        record = auth.create_user(
            email=email,
            password=password,
            display_name=display_name,
            # Invited addresses are trusted.
            email_verified=True,
            app=self.app,
        )
        return record.uid

    def delete_user(self, uid: str) -> None:
        auth.delete_user(uid, app=self.app)
