"""Firestore reads and writes for users, invitations and quotes."""
import logging
from datetime import datetime, timezone
from typing import Any

from firebase_admin import firestore

from app.core.errors import InvitationExpired, InvitationNotFound
from app.models import Invitation, UserProfile

logger = logging.getLogger(__name__)

USERS = "users"
INVITATIONS = "invitations"
QUOTES = "quotes"


def get_user_profile(*, db: firestore.Client, uid: str) -> dict[str, Any] | None:
    snapshot = db.collection(USERS).document(uid).get()
    if not snapshot.exists:
        return None
    return snapshot.to_dict() or {}


def create_user_profile(*, db: firestore.Client, uid: str, profile: UserProfile) -> None:
    db.collection(USERS).document(uid).set(
        {
            **profile.to_document(),
            "createdAt": firestore.SERVER_TIMESTAMP,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        }
    )


def delete_user_profile(*, db: firestore.Client, uid: str) -> None:
    db.collection(USERS).document(uid).delete()


def new_invitation_token(*, db: firestore.Client) -> str:
    """Firestore auto-id: 20 random characters, also used as the document id."""
    return db.collection(INVITATIONS).document().id


def create_invitation(*, db: firestore.Client, invitation: Invitation) -> None:
    data = invitation.to_document()
    data["createdAt"] = firestore.SERVER_TIMESTAMP
    db.collection(INVITATIONS).document(invitation.token).set(data)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def check_invitation_claimable(data: dict[str, Any] | None, now: datetime) -> dict[str, Any]:
    """Raise unless the invitation exists, is still pending and has not expired."""
    if not data or data.get("status") != "pending":
        raise InvitationNotFound()
    expires_at = data.get("expiresAt")
    if not isinstance(expires_at, datetime) or _as_utc(expires_at) < _as_utc(now):
        raise InvitationExpired()
    return data


@firestore.transactional
def _claim_in_transaction(transaction, ref, now: datetime) -> dict[str, Any]:
    snapshot = ref.get(transaction=transaction)
    data = check_invitation_claimable(snapshot.to_dict() if snapshot.exists else None, now)
    transaction.update(
        ref,
        {
            "status": "accepted",
            "acceptedAt": firestore.SERVER_TIMESTAMP,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        },
    )
    return data


def claim_invitation(*, db: firestore.Client, token: str, now: datetime) -> Invitation:
    """
    Atomically move an invitation from pending to accepted.

    The read, the checks and the status write share one transaction, so of two
    concurrent claims on the same token only one commits; the other is retried
    by Firestore, sees ``accepted`` and fails with InvitationNotFound.
    """
    ref = db.collection(INVITATIONS).document(token)
    data = _claim_in_transaction(db.transaction(), ref, now)
    return Invitation.model_validate({**data, "token": data.get("token") or token, "status": "accepted"})


def complete_invitation(*, db: firestore.Client, token: str, user_id: str) -> None:
    db.collection(INVITATIONS).document(token).update(
        {"acceptedByUserId": user_id, "updatedAt": firestore.SERVER_TIMESTAMP}
    )


def release_invitation(*, db: firestore.Client, token: str) -> None:
    """Undo a claim whose account creation failed so the token can be used again."""
    db.collection(INVITATIONS).document(token).update(
        {
            "status": "pending",
            "acceptedAt": firestore.DELETE_FIELD,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        }
    )


def save_ui_layout(*, db: firestore.Client, quote_id: str, layout: dict[str, Any]) -> None:
    db.collection(QUOTES).document(quote_id).update({"uiLayout": layout})


def save_mockup(*, db: firestore.Client, quote_id: str, mockup_url: str, mockup_html: str) -> None:
    db.collection(QUOTES).document(quote_id).set(
        {
            "mockupUrl": mockup_url,
            "mockupHTML": mockup_html,
            "mockupGeneratedAt": firestore.SERVER_TIMESTAMP,
        },
        merge=True,
    )
