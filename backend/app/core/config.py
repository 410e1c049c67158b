from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parents[1] / "templates" / "dashboard-template.html"


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "quote-generator"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[list[str] | str, BeforeValidator(parse_cors)] = ["*"]
    FRONTEND_URL: str = "http://localhost:5173"

    # LLM provider. OpenRouter wins when its key is present.
    OPENAI_API_KEY: str | None = None
    OPENROUTER_API_KEY: str | None = None
    OPENROUTER_BASE_URL: str = OPENROUTER_DEFAULT_BASE_URL
    OPENROUTER_MODEL: str | None = None
    LLM_MODEL: str | None = None

    # Firebase Admin
    FIREBASE_PROJECT_ID: str | None = None
    FIREBASE_STORAGE_BUCKET: str | None = None
    FIREBASE_SERVICE_ACCOUNT_KEY: str | None = None

    # Microsoft Graph mail
    MICROSOFT_TENANT_ID: str | None = None
    MICROSOFT_CLIENT_ID: str | None = None
    MICROSOFT_CLIENT_SECRET: str | None = None
    MICROSOFT_SENDER_EMAIL: str | None = None
    EMAIL_FROM: str | None = None

    INVITATION_TTL_DAYS: int = 7
    MOCKUP_TEMPLATE_PATH: Path = DEFAULT_TEMPLATE_PATH

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            return [self.BACKEND_CORS_ORIGINS]
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def uses_openrouter(self) -> bool:
        return bool(self.OPENROUTER_API_KEY)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def llm_api_key(self) -> str | None:
        return self.OPENROUTER_API_KEY or self.OPENAI_API_KEY

    @computed_field  # type: ignore[prop-decorator]
    @property
    def llm_base_url(self) -> str | None:
        return self.OPENROUTER_BASE_URL if self.uses_openrouter else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def default_model(self) -> str | None:
        """Environment-level model override; None means the generator fallback applies."""
        if self.uses_openrouter:
            return self.OPENROUTER_MODEL or self.LLM_MODEL
        return self.LLM_MODEL

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sender_email(self) -> str | None:
        return self.MICROSOFT_SENDER_EMAIL or self.EMAIL_FROM


settings = Settings()  # type: ignore
