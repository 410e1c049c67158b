import html
import logging
from datetime import datetime, timedelta, timezone

from firebase_admin import firestore

from app import crud
from app.core.errors import RequestValidationFailed
from app.models import AcceptInvitationRequest, AuthenticatedUser, Invitation, InviteUserRequest, UserProfile
from app.services.identity import IdentityProvider
from app.services.mailer import GraphMailer

logger = logging.getLogger(__name__)

INVITATION_SUBJECT = "You're invited to join Insytify CRM"


def render_invitation_email(*, inviter_name: str, role: str, link: str, expires_at: datetime) -> str:
    safe_link = html.escape(link, quote=True)
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #4285F4;">You're invited to join Insytify CRM</h2>
  <p>Hello,</p>
  <p>{html.escape(inviter_name)} has invited you to join their team on Insytify CRM.</p>
  <p><strong>Your role:</strong> {html.escape(role.capitalize())}</p>
  <p>Click the button below to accept your invitation and set up your account:</p>
  <div style="text-align: center; margin: 30px 0;">
    <a href="{safe_link}"
       style="background-color: #4285F4; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block;">
      Accept Invitation
    </a>
  </div>
  <p style="color: #666; font-size: 14px;">
    This invitation will expire on {expires_at.strftime("%B %d, %Y")}.
  </p>
  <p style="color: #666; font-size: 14px;">
    If you can't click the button, copy and paste this link into your browser:<br>
    <a href="{safe_link}">{safe_link}</a>
  </p>
</div>
"""


def invitation_link(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/accept-invitation?token={token}"


def invite_user(
    *,
    db: firestore.Client,
    identity: IdentityProvider,
    mailer: GraphMailer,
    admin: AuthenticatedUser,
    request: InviteUserRequest,
    frontend_url: str,
    ttl_days: int = 7,
    now: datetime | None = None,
) -> str:
    """Store a pending invitation, email the link and return the invitation token."""
    if identity.find_user_by_email(request.email) is not None:
        raise RequestValidationFailed("User with this email already exists")

    now = now or datetime.now(timezone.utc)
    token = crud.new_invitation_token(db=db)
    invitation = Invitation(
        token=token,
        email=request.email,
        role=request.role,
        invited_by=admin.uid,
        invited_by_name=admin.name or "Admin",
        company_id=request.company_id or admin.company_id,
        expires_at=now + timedelta(days=ttl_days),
    )
    crud.create_invitation(db=db, invitation=invitation)

    mailer.send(
        request.email,
        INVITATION_SUBJECT,
        render_invitation_email(
            inviter_name=admin.name or "An admin",
            role=request.role,
            link=invitation_link(frontend_url, token),
            expires_at=invitation.expires_at,
        ),
    )
    logger.info("User invitation sent to %s as %s by %s (token %s)", request.email, request.role, admin.uid, token)
    return token


def accept_invitation(
    *,
    db: firestore.Client,
    identity: IdentityProvider,
    request: AcceptInvitationRequest,
    now: datetime | None = None,
) -> str:
    """Redeem an invitation token, creating the auth account and profile. Returns the new uid."""
    now = now or datetime.now(timezone.utc)
    invitation = crud.claim_invitation(db=db, token=request.token, now=now)

    try:
        uid = identity.create_user(email=invitation.email, password=request.password, display_name=request.name)
    except Exception:
        logger.exception("Account creation failed for invitation %s; releasing it", request.token)
        crud.release_invitation(db=db, token=request.token)
        raise

    crud.create_user_profile(
        db=db,
        uid=uid,
        profile=UserProfile(
            email=invitation.email,
            name=request.name,
            role=invitation.role,
            company_id=invitation.company_id,
        ),
    )
    crud.complete_invitation(db=db, token=request.token, user_id=uid)
    logger.info("User %s created from invitation for %s (company %s)", uid, invitation.email, invitation.company_id)
    return uid
