from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import EmailStr, Field

from app.agent.artifacts import CamelModel, NonEmptyStr


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


UserRole = Literal["admin", "standard"]
InvitationStatus = Literal["pending", "accepted"]


class DocumentModel(CamelModel):
    """Firestore documents are stored with camelCase field names."""

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# Firestore documents

class Invitation(DocumentModel):
    token: str
    email: EmailStr
    role: UserRole
    status: InvitationStatus = "pending"
    invited_by: str
    invited_by_name: str = "Admin"
    company_id: str | None = None
    expires_at: datetime
    created_at: datetime | None = None
    accepted_at: datetime | None = None
    accepted_by_user_id: str | None = None


class UserProfile(DocumentModel):
    email: EmailStr
    name: str
    role: UserRole
    company_id: str | None = None


# Request bodies

class InviteUserRequest(CamelModel):
    email: EmailStr
    role: UserRole
    company_id: str | None = None


class RemoveUserRequest(CamelModel):
    user_id: NonEmptyStr


class AcceptInvitationRequest(CamelModel):
    token: NonEmptyStr
    name: NonEmptyStr
    # Firebase Auth rejects passwords shorter than six characters.
    password: str = Field(min_length=6, max_length=128)


# Responses

class HealthStatus(CamelModel):
    status: str = "healthy"
    timestamp: datetime = Field(default_factory=get_datetime_utc)
    service: str


class InvitationCreated(CamelModel):
    success: bool = True
    message: str = "Invitation sent successfully"
    invitation_id: str


class UserRemoved(CamelModel):
    success: bool = True
    message: str = "User removed successfully"


class InvitationAccepted(CamelModel):
    success: bool = True
    user_id: str
    message: str = "Account created successfully"


class MockupGenerated(CamelModel):
    success: bool = True
    mockup_url: str
    timestamp: datetime = Field(default_factory=get_datetime_utc)


class AuthenticatedUser(CamelModel):
    """Caller resolved from a verified ID token plus their profile document."""

    uid: str
    role: str | None = None
    name: str | None = None
    company_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
