from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth

from app import crud
from app.core.errors import RequestValidationFailed, Unauthorized
from app.core.config import Settings
from app.models import AuthenticatedUser
from app.services.firebase import COMMON_SERVICE_ACCOUNT_FILES, initialize_firebase, resolve_service_account_path
from app.services.identity import IdentityProvider
from app.services.users import remove_user


def test_verify_id_token_returns_uid():
    with patch("app.services.identity.auth.verify_id_token", return_value={"uid": "u-1"}) as verify:
        assert IdentityProvider().verify_id_token("token") == "u-1"
    verify.assert_called_once_with("token", app=None)


@pytest.mark.parametrize("error", [ValueError("malformed"), auth.InvalidIdTokenError("bad token")])
def test_verify_id_token_rejects_bad_tokens(error):
    with patch("app.services.identity.auth.verify_id_token", side_effect=error):
        with pytest.raises(Unauthorized):
            IdentityProvider().verify_id_token("token")


def test_find_user_by_email_returns_none_when_missing():
    with patch(
        "app.services.identity.auth.get_user_by_email",
        side_effect=auth.UserNotFoundError("no user"),
    ):
        assert IdentityProvider().find_user_by_email("nobody@example.com") is None


def test_create_user_marks_email_verified():
    record = MagicMock(uid="new-uid")
    with patch("app.services.identity.auth.create_user", return_value=record) as create:
        uid = IdentityProvider().create_user(email="a@example.com", password="secret1", display_name="A")

    assert uid == "new-uid"
    assert create.call_args.kwargs["email_verified"] is True


def test_remove_user_refuses_self(monkeypatch):
    delete_profile = MagicMock()
    monkeypatch.setattr(crud, "delete_user_profile", delete_profile)
    identity = MagicMock()
    admin = AuthenticatedUser(uid="admin-uid", role="admin")

    with pytest.raises(RequestValidationFailed) as excinfo:
        remove_user(db=MagicMock(), identity=identity, admin=admin, user_id="admin-uid")

    assert excinfo.value.message == "Cannot delete your own account"
    identity.delete_user.assert_not_called()
    delete_profile.assert_not_called()


def test_remove_user_deletes_account_then_profile(monkeypatch):
    calls = []
    monkeypatch.setattr(crud, "delete_user_profile", lambda *, db, uid: calls.append(("profile", uid)))
    identity = MagicMock()
    identity.delete_user.side_effect = lambda uid: calls.append(("auth", uid))

    remove_user(db=MagicMock(), identity=identity, admin=AuthenticatedUser(uid="admin-uid"), user_id="u-2")

    assert calls == [("auth", "u-2"), ("profile", "u-2")]


def test_resolve_service_account_path(tmp_path):
    assert resolve_service_account_path("/keys/explicit.json", tmp_path).as_posix() == "/keys/explicit.json"
    assert resolve_service_account_path(None, tmp_path) is None

    (tmp_path / COMMON_SERVICE_ACCOUNT_FILES[1]).write_text("{}")
    assert resolve_service_account_path(None, tmp_path) == tmp_path / COMMON_SERVICE_ACCOUNT_FILES[1]

    (tmp_path / COMMON_SERVICE_ACCOUNT_FILES[0]).write_text("{}")
    assert resolve_service_account_path(None, tmp_path) == tmp_path / COMMON_SERVICE_ACCOUNT_FILES[0]


def test_initialize_firebase_uses_application_default_credentials(tmp_path):
    config = Settings(
        FIREBASE_PROJECT_ID="demo-project",
        FIREBASE_STORAGE_BUCKET="demo.appspot.com",
        FIREBASE_SERVICE_ACCOUNT_KEY=None,
    )
    with (
        patch("app.services.firebase.firebase_admin.get_app", side_effect=ValueError("no app")),
        patch("app.services.firebase.firebase_admin.initialize_app") as initialize,
    ):
        initialize_firebase(config, search_dir=tmp_path)

    initialize.assert_called_once_with(
        None, {"projectId": "demo-project", "storageBucket": "demo.appspot.com"}
    )
