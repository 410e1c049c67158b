import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from openai import AsyncOpenAI

from app.core.config import Settings, settings as default_settings
from app.core.errors import MalformedUpstreamJSON, UpstreamEmptyResponse

logger = logging.getLogger(__name__)

OPENAI_FALLBACK_MODEL = "gpt-4o-mini"
OPENROUTER_FALLBACK_MODEL = "meta-llama/llama-3.3-70b-instruct"

_LEADING_FENCE = re.compile(r"^\s*```[a-zA-Z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")


def strip_code_fences(text: str | None) -> str:
    """Remove a leading and/or trailing markdown fence around model output.

    Handles fully fenced (```json ... ```), unfenced and half-fenced text.
    Fences inside the body are left alone.
    """
    if not text:
        return ""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_json_object(raw_text: str) -> Any:
    """Fence-strip and decode model output, raising MalformedUpstreamJSON on failure.

    NaN, Infinity and -Infinity are rejected as in strict JSON.
    """
    cleaned = strip_code_fences(raw_text)
    try:
        return json.loads(cleaned, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response as JSON: %s", raw_text)
        raise MalformedUpstreamJSON(raw_text, f"Invalid JSON response from AI: {e.msg}") from e
    except ValueError as e:
        logger.error("Failed to parse AI response as JSON: %s", raw_text)
        raise MalformedUpstreamJSON(raw_text, f"Invalid JSON response from AI: {e}") from e


def resolve_model(
    requested: str | None,
    environment_default: str | None,
    fallback: str,
) -> str:
    """Request field wins, then the environment default, then the hard-coded fallback."""
    for candidate in (requested, environment_default):
        if candidate and candidate.strip():
            return candidate.strip()
    return fallback


@dataclass
class Completion:
    text: str
    model: str


class LLMClient:
    """Chat-completion client for OpenAI or OpenRouter (both speak the OpenAI API)."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        default_model: str | None = None,
        uses_openrouter: bool = False,
    ):
        self.default_model = default_model
        self.uses_openrouter = uses_openrouter
        self._api_key = api_key
        self._base_url = base_url
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        # Built on first use so the app can boot without provider credentials.
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "LLMClient":
        config = config or default_settings
        return cls(
            api_key=config.llm_api_key,
            base_url=config.llm_base_url,
            default_model=config.default_model,
            uses_openrouter=config.uses_openrouter,
        )

    def pick_model(
        self,
        requested: str | None = None,
        *,
        openai_fallback: str = OPENAI_FALLBACK_MODEL,
        openrouter_fallback: str = OPENROUTER_FALLBACK_MODEL,
    ) -> str:
        fallback = openrouter_fallback if self.uses_openrouter else openai_fallback
        return resolve_model(requested, self.default_model, fallback)

    @staticmethod
    def _chat_completion_kwargs(model_name: str, *, temperature: float | None, max_tokens: int | None) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        kwargs: dict[str, Any] = {}
        # GPT-5 family rejects non-default temperature and the legacy max_tokens field.
        if model_name.lower().startswith("gpt-5"):
            if max_tokens is not None:
                kwargs["max_completion_tokens"] = max_tokens
            return kwargs
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        return kwargs

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Completion:
        """Single chat completion. Raises UpstreamEmptyResponse when no content comes back."""
        logger.info("Issuing chat completion to model %s...", model)
        response = await self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **self._chat_completion_kwargs(model, temperature=temperature, max_tokens=max_tokens),
        )

        choices = getattr(response, "choices", None)
        if not choices:
            logger.error("Received no choices from %s: %s", model, response)
            raise UpstreamEmptyResponse(f"No response from AI model {model}")

        text = choices[0].message.content or ""
        if not text.strip():
            raise UpstreamEmptyResponse(f"No response from AI model {model}")

        logger.info("Received %s characters from %s.", len(text), model)
        return Completion(text=text, model=model)
