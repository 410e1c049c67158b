from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import firestore
from starlette.concurrency import run_in_threadpool

from app import crud
from app.agent.llm_client import LLMClient
from app.core.config import Settings, settings
from app.core.errors import Forbidden, Unauthorized
from app.models import AuthenticatedUser
from app.services.container import ServiceClients
from app.services.identity import IdentityProvider
from app.services.mailer import GraphMailer
from app.services.mockups import MockupPublisher

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings() -> Settings:
    return settings


def get_clients(request: Request) -> ServiceClients:
    return request.app.state.clients


def get_llm(request: Request) -> LLMClient:
    return get_clients(request).llm


def get_db(request: Request) -> firestore.Client:
    return get_clients(request).db


def get_identity(request: Request) -> IdentityProvider:
    return get_clients(request).identity


def get_mailer(request: Request) -> GraphMailer:
    return get_clients(request).mailer


def get_mockup_publisher(request: Request) -> MockupPublisher:
    return get_clients(request).mockups


SettingsDep = Annotated[Settings, Depends(get_settings)]
LLMDep = Annotated[LLMClient, Depends(get_llm)]
DbDep = Annotated[firestore.Client, Depends(get_db)]
IdentityDep = Annotated[IdentityProvider, Depends(get_identity)]
MailerDep = Annotated[GraphMailer, Depends(get_mailer)]
MockupPublisherDep = Annotated[MockupPublisher, Depends(get_mockup_publisher)]


async def get_current_user(
    db: DbDep,
    identity: IdentityDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthenticatedUser:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise Unauthorized()

    uid = await run_in_threadpool(identity.verify_id_token, credentials.credentials)
    profile = await run_in_threadpool(lambda: crud.get_user_profile(db=db, uid=uid))
    profile = profile or {}
    return AuthenticatedUser(
        uid=uid,
        role=profile.get("role"),
        name=profile.get("name"),
        company_id=profile.get("companyId"),
    )


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]


def get_current_admin(current_user: CurrentUser) -> AuthenticatedUser:
    if not current_user.is_admin:
        raise Forbidden()
    return current_user


CurrentAdmin = Annotated[AuthenticatedUser, Depends(get_current_admin)]
