import logging
from typing import Any

from fastapi import APIRouter

from app.api.deps import CurrentAdmin, DbDep, IdentityDep, MailerDep, SettingsDep
from app.core.errors import failure_envelope
from app.models import (
    AcceptInvitationRequest,
    InvitationAccepted,
    InvitationCreated,
    InviteUserRequest,
    RemoveUserRequest,
    UserRemoved,
)
from app.services import invitations, users

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/inviteUser", response_model=InvitationCreated)
def invite_user(
    payload: InviteUserRequest,
    admin: CurrentAdmin,
    db: DbDep,
    identity: IdentityDep,
    mailer: MailerDep,
    config: SettingsDep,
) -> Any:
    with failure_envelope("Failed to send invitation"):
        token = invitations.invite_user(
            db=db,
            identity=identity,
            mailer=mailer,
            admin=admin,
            request=payload,
            frontend_url=config.FRONTEND_URL,
            ttl_days=config.INVITATION_TTL_DAYS,
        )
    return InvitationCreated(invitation_id=token)


@router.delete("/removeUser", response_model=UserRemoved)
def remove_user(payload: RemoveUserRequest, admin: CurrentAdmin, db: DbDep, identity: IdentityDep) -> Any:
    with failure_envelope("Failed to remove user"):
        users.remove_user(db=db, identity=identity, admin=admin, user_id=payload.user_id)
    return UserRemoved()


@router.post("/acceptInvitation", response_model=InvitationAccepted)
def accept_invitation(payload: AcceptInvitationRequest, db: DbDep, identity: IdentityDep) -> Any:
    with failure_envelope("Failed to accept invitation"):
        user_id = invitations.accept_invitation(db=db, identity=identity, request=payload)
    return InvitationAccepted(user_id=user_id)
