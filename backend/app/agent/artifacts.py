from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel, to_pascal

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """Request bodies arrive with camelCase keys from the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PascalModel(BaseModel):
    """Quote documents use the PascalCase keys the quote prompt asks the model for."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="allow")


# Quote shape ("Scope of Work")

class ScopeItem(PascalModel):
    item_name: str = ""
    description: str = ""


class ScopeOfWorkFeature(PascalModel):
    feature_name: str = ""
    description: str = ""
    items: list[ScopeItem] = Field(default_factory=list)
    estimated_hours: float = 0
    estimated_cost: float = 0


class QuoteData(PascalModel):
    """A previously generated quote sent back by the client; only ScopeOfWork is mandatory."""

    project_overview: str | None = None
    scope_of_work: list[ScopeOfWorkFeature]
    hourly_rate: float | None = None
    total_estimated_cost: float | None = None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class QuoteResponse(QuoteData):
    project_overview: NonEmptyStr


# Generation requests

class QuoteRequest(CamelModel):
    company_name: NonEmptyStr
    project_description: NonEmptyStr
    hourly_rate: int | float = Field(default=100, gt=0)


class StatementOfWorkRequest(CamelModel):
    company_name: NonEmptyStr
    project_description: NonEmptyStr
    industry: str | None = None
    target_audience: str | None = None
    model: str | None = None

    @property
    def industry_or_default(self) -> str:
        return (self.industry or "").strip() or "General Business"

    @property
    def audience_or_default(self) -> str:
        return (self.target_audience or "").strip() or "Business users and stakeholders"


class BoltPromptRequest(CamelModel):
    quote_response: QuoteResponse
    company_name: NonEmptyStr
    additional_context: str | None = None


class UILayoutRequest(CamelModel):
    quote_data: QuoteData
    quote_id: str | None = None


class MockupRequest(CamelModel):
    quote_data: QuoteData
    quote_id: NonEmptyStr
    company_name: NonEmptyStr


# Generation outputs

class GenerationResult(BaseModel):
    """Decoded, key-checked model output plus what produced it."""

    data: dict[str, Any]
    model: str
    generated_at: datetime
    inputs: dict[str, Any] = Field(default_factory=dict)

    def metadata(self) -> dict[str, Any]:
        return {"generatedAt": self.generated_at.isoformat(), "model": self.model, **self.inputs}


class TextGenerationResult(BaseModel):
    text: str
    model: str
    generated_at: datetime
