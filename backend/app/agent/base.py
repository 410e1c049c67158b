import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from app.agent.artifacts import GenerationResult, TextGenerationResult
from app.agent.llm_client import (
    OPENAI_FALLBACK_MODEL,
    OPENROUTER_FALLBACK_MODEL,
    LLMClient,
    decode_json_object,
    strip_code_fences,
)
from app.core.errors import SchemaViolation, UpstreamEmptyResponse

logger = logging.getLogger(__name__)

InType = TypeVar("InType", bound=BaseModel)
OutType = TypeVar("OutType")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_number(value: Any, default: float | int) -> float | int:
    """Best-effort numeric coercion of model output; never raises.

    Accepts numbers and numeric strings ("1,200" included). Booleans, NaN,
    infinities and anything unparsable fall back to ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return int(number) if number.is_integer() else number


def _is_empty(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return value is None or (isinstance(value, (bool, int, float)) and not value)


def require_keys(data: Any, required: tuple[str, ...], list_keys: frozenset[str] = frozenset()) -> dict:
    """Check the decoded object carries every required top-level key.

    A key is missing when absent, null, false, zero or a blank string; keys
    listed in ``list_keys`` must also hold a JSON array.
    """
    if not isinstance(data, dict):
        raise SchemaViolation(["<object>"], "Expected a JSON object from AI")

    missing = []
    for key in required:
        value = data.get(key)
        if _is_empty(value):
            missing.append(key)
        elif key in list_keys and not isinstance(value, list):
            missing.append(key)
    if missing:
        raise SchemaViolation(missing)
    return data


class BaseGenerator(ABC, Generic[InType, OutType]):
    """One prompt, one chat completion, one artifact."""

    system_prompt: str = ""
    temperature: float = 0.7
    max_tokens: int = 2000
    openai_fallback_model: str = OPENAI_FALLBACK_MODEL
    openrouter_fallback_model: str = OPENROUTER_FALLBACK_MODEL

    def __init__(self, llm: LLMClient):
        self.llm = llm

    @abstractmethod
    def build_prompt(self, request: InType) -> str:
        """Render the user prompt from the request fields."""

    def requested_model(self, request: InType) -> str | None:
        return None

    def pick_model(self, request: InType) -> str:
        return self.llm.pick_model(
            self.requested_model(request),
            openai_fallback=self.openai_fallback_model,
            openrouter_fallback=self.openrouter_fallback_model,
        )

    def get_system_prompt(self, request: InType) -> str:
        return self.system_prompt

    @abstractmethod
    async def run(self, request: InType) -> OutType:
        pass


class StructuredGenerator(BaseGenerator[InType, GenerationResult]):
    """Generator whose output is a JSON object with a few mandatory keys."""

    required_keys: tuple[str, ...] = ()
    list_keys: frozenset[str] = frozenset()

    def coerce(self, data: dict, request: InType) -> dict:
        return data

    def build_metadata(self, request: InType) -> dict[str, Any]:
        return {}

    async def run(self, request: InType) -> GenerationResult:
        model = self.pick_model(request)
        completion = await self.llm.complete(
            self.get_system_prompt(request),
            self.build_prompt(request),
            model=model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        decoded = decode_json_object(completion.text)
        data = require_keys(decoded, self.required_keys, self.list_keys)
        data = self.coerce(data, request)
        return GenerationResult(
            data=data,
            model=completion.model,
            generated_at=utc_now(),
            inputs=self.build_metadata(request),
        )


class TextGenerator(BaseGenerator[InType, TextGenerationResult]):
    """Generator whose output is free text (a prompt, an HTML page)."""

    async def run(self, request: InType) -> TextGenerationResult:
        model = self.pick_model(request)
        completion = await self.llm.complete(
            self.get_system_prompt(request),
            self.build_prompt(request),
            model=model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        text = strip_code_fences(completion.text)
        if not text:
            raise UpstreamEmptyResponse(f"No response from AI model {completion.model}")
        return TextGenerationResult(text=text, model=completion.model, generated_at=utc_now())
