from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.agent.llm_client import LLMClient
from app.api.deps import get_current_user
from app.main import app
from app.models import AuthenticatedUser
from app.services.container import ServiceClients


@pytest.fixture
def clients():
    llm = LLMClient(api_key="dummy_key")
    llm.complete = AsyncMock()
    mockups = MagicMock()
    mockups.publish = AsyncMock()
    services = ServiceClients(
        llm=llm,
        db=MagicMock(),
        identity=MagicMock(),
        mailer=MagicMock(),
        mockups=mockups,
    )
    # The lifespan is not run by a bare TestClient, so wire the clients directly.
    app.state.clients = services
    yield services
    app.dependency_overrides.clear()


@pytest.fixture
def client(clients):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def admin():
    user = AuthenticatedUser(uid="admin-uid", role="admin", name="Ada Admin", company_id="company-1")
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def standard_user():
    user = AuthenticatedUser(uid="user-uid", role="standard", name="Sam")
    app.dependency_overrides[get_current_user] = lambda: user
    return user
