import logging

from firebase_admin import firestore

from app import crud
from app.core.errors import RequestValidationFailed
from app.models import AuthenticatedUser
from app.services.identity import IdentityProvider

logger = logging.getLogger(__name__)


def remove_user(
    *,
    db: firestore.Client,
    identity: IdentityProvider,
    admin: AuthenticatedUser,
    user_id: str,
) -> None:
    if user_id == admin.uid:
        raise RequestValidationFailed("Cannot delete your own account")

    identity.delete_user(user_id)
    crud.delete_user_profile(db=db, uid=user_id)
    logger.info("User %s removed by %s", user_id, admin.uid)
