from datetime import datetime, timedelta, timezone

import pytest

from app import crud
from app.core.config import settings
from app.core.errors import InvitationExpired, InvitationNotFound, Unauthorized
from app.services.invitations import INVITATION_SUBJECT, invitation_link
from app.services.mailer import MailDeliveryError


@pytest.fixture
def stored_invitations(monkeypatch):
    created = []
    monkeypatch.setattr(crud, "new_invitation_token", lambda *, db: "tok-123")
    monkeypatch.setattr(crud, "create_invitation", lambda *, db, invitation: created.append(invitation))
    return created


def test_invite_user_requires_bearer_token(client, clients):
    response = client.post("/inviteUser", json={"email": "new@example.com", "role": "standard"})

    assert response.status_code == 401
    assert response.json()["success"] is False
    clients.mailer.send.assert_not_called()


def test_invite_user_rejects_invalid_token(client, clients):
    clients.identity.verify_id_token.side_effect = Unauthorized("Invalid or expired ID token")

    response = client.post(
        "/inviteUser",
        json={"email": "new@example.com", "role": "standard"},
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired ID token"


def test_invite_user_requires_admin_profile(client, clients, monkeypatch):
    clients.identity.verify_id_token.return_value = "user-uid"
    monkeypatch.setattr(crud, "get_user_profile", lambda *, db, uid: {"role": "standard", "name": "Sam"})

    response = client.post(
        "/inviteUser",
        json={"email": "new@example.com", "role": "standard"},
        headers={"Authorization": "Bearer good-token"},
    )

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "error": "Admin access required",
        "message": "Admin access required",
    }


def test_invite_user_rejected_for_standard_user(client, clients, standard_user):
    response = client.post("/inviteUser", json={"email": "new@example.com", "role": "standard"})

    assert response.status_code == 403


def test_invite_user_sends_email(client, clients, admin, stored_invitations):
    clients.identity.find_user_by_email.return_value = None

    response = client.post("/inviteUser", json={"email": "new@example.com", "role": "standard"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Invitation sent successfully",
        "invitationId": "tok-123",
    }
    (invitation,) = stored_invitations
    assert invitation.email == "new@example.com"
    assert invitation.status == "pending"
    assert invitation.invited_by == "admin-uid"
    assert invitation.company_id == "company-1"
    ttl = invitation.expires_at - datetime.now(timezone.utc)
    assert timedelta(days=settings.INVITATION_TTL_DAYS - 1) < ttl <= timedelta(days=settings.INVITATION_TTL_DAYS)

    to, subject, html = clients.mailer.send.call_args.args
    assert to == "new@example.com"
    assert subject == INVITATION_SUBJECT
    assert invitation_link(settings.FRONTEND_URL, "tok-123") in html


def test_invite_existing_user_is_rejected(client, clients, admin, stored_invitations):
    clients.identity.find_user_by_email.return_value = object()

    response = client.post("/inviteUser", json={"email": "old@example.com", "role": "admin"})

    assert response.status_code == 400
    assert response.json()["message"] == "User with this email already exists"
    assert stored_invitations == []
    clients.mailer.send.assert_not_called()


def test_invite_user_mail_failure(client, clients, admin, stored_invitations):
    clients.identity.find_user_by_email.return_value = None
    clients.mailer.send.side_effect = MailDeliveryError("Failed to authenticate with Microsoft Graph API")

    response = client.post("/inviteUser", json={"email": "new@example.com", "role": "standard"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to send invitation"


@pytest.mark.parametrize(
    "body",
    [{}, {"email": "not-an-email", "role": "standard"}, {"email": "a@example.com", "role": "owner"}],
)
def test_invite_user_validation(client, clients, admin, body):
    response = client.post("/inviteUser", json=body)

    assert response.status_code == 400
    clients.mailer.send.assert_not_called()


def test_remove_self_is_rejected_without_deleting(client, clients, admin, monkeypatch):
    deleted = []
    monkeypatch.setattr(crud, "delete_user_profile", lambda *, db, uid: deleted.append(uid))

    response = client.request("DELETE", "/removeUser", json={"userId": "admin-uid"})

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot delete your own account"
    clients.identity.delete_user.assert_not_called()
    assert deleted == []


def test_remove_user(client, clients, admin, monkeypatch):
    deleted = []
    monkeypatch.setattr(crud, "delete_user_profile", lambda *, db, uid: deleted.append(uid))

    response = client.request("DELETE", "/removeUser", json={"userId": "other-uid"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "User removed successfully"}
    clients.identity.delete_user.assert_called_once_with("other-uid")
    assert deleted == ["other-uid"]


def test_remove_user_requires_user_id(client, clients, admin):
    response = client.request("DELETE", "/removeUser", json={"userId": ""})

    assert response.status_code == 400
    clients.identity.delete_user.assert_not_called()


def test_accept_invitation(client, clients, monkeypatch):
    monkeypatch.setattr(
        "app.services.invitations.accept_invitation",
        lambda *, db, identity, request: f"uid-for-{request.token}",
    )

    response = client.post("/acceptInvitation", json={"token": "tok-1", "name": "Nia", "password": "secret1"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "userId": "uid-for-tok-1",
        "message": "Account created successfully",
    }


@pytest.mark.parametrize(
    ("error", "status"),
    [(InvitationNotFound(), 404), (InvitationExpired(), 400)],
)
def test_accept_invitation_errors(client, clients, monkeypatch, error, status):
    def fail(**kwargs):
        raise error

    monkeypatch.setattr("app.services.invitations.accept_invitation", fail)

    response = client.post("/acceptInvitation", json={"token": "tok-1", "name": "Nia", "password": "secret1"})

    assert response.status_code == status
    assert response.json()["error"] == error.error


@pytest.mark.parametrize(
    "body",
    [
        {"name": "Nia", "password": "secret1"},
        {"token": "tok-1", "password": "secret1"},
        {"token": "tok-1", "name": "Nia"},
        {"token": "tok-1", "name": "Nia", "password": "short"},
    ],
)
def test_accept_invitation_validation(client, clients, body):
    response = client.post("/acceptInvitation", json=body)

    assert response.status_code == 400
    clients.identity.create_user.assert_not_called()
