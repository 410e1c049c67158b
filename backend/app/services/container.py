from dataclasses import dataclass

from firebase_admin import firestore, storage
from google.cloud.storage import Bucket

from app.agent.llm_client import LLMClient
from app.core.config import Settings
from app.services.firebase import initialize_firebase
from app.services.identity import IdentityProvider
from app.services.mailer import GraphMailer
from app.services.mockups import MockupPublisher, MockupRenderer


@dataclass
class ServiceClients:
    """SDK clients built once at startup and handed to request handlers."""

    llm: LLMClient
    db: firestore.Client
    identity: IdentityProvider
    mailer: GraphMailer
    mockups: MockupPublisher


def build_clients(config: Settings) -> ServiceClients:
    app = initialize_firebase(config)
    bucket: Bucket | None = storage.bucket(app=app) if config.FIREBASE_STORAGE_BUCKET else None
    return ServiceClients(
        llm=LLMClient.from_settings(config),
        db=firestore.client(app),
        identity=IdentityProvider(app),
        mailer=GraphMailer(
            tenant_id=config.MICROSOFT_TENANT_ID,
            client_id=config.MICROSOFT_CLIENT_ID,
            client_secret=config.MICROSOFT_CLIENT_SECRET,
            sender_email=config.sender_email,
        ),
        mockups=MockupPublisher(MockupRenderer(), bucket),
    )
