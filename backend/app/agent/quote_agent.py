import logging
from typing import Any

from app.agent.artifacts import GenerationResult, QuoteRequest
from app.agent.base import StructuredGenerator, coerce_number
from app.agent.prompts.quote import QUOTE_SYSTEM_PROMPT, build_quote_prompt

logger = logging.getLogger(__name__)


class QuoteAgent(StructuredGenerator[QuoteRequest]):
    """
    Turns a company name and free-text project description into a priced
    Scope of Work quote.
    """

    system_prompt = QUOTE_SYSTEM_PROMPT
    temperature = 0.7
    max_tokens = 2000
    openai_fallback_model = "gpt-4"
    required_keys = ("ProjectOverview", "ScopeOfWork")
    list_keys = frozenset({"ScopeOfWork"})

    def build_prompt(self, request: QuoteRequest) -> str:
        return build_quote_prompt(request.company_name, request.project_description, request.hourly_rate)

    def coerce(self, data: dict, request: QuoteRequest) -> dict:
        data["HourlyRate"] = coerce_number(data.get("HourlyRate"), request.hourly_rate)
        data["TotalEstimatedCost"] = coerce_number(data.get("TotalEstimatedCost"), 0)

        features: list[Any] = []
        for feature in data["ScopeOfWork"]:
            if not isinstance(feature, dict):
                logger.warning("Dropping non-object ScopeOfWork entry: %r", feature)
                continue
            features.append(
                {
                    **feature,
                    "EstimatedHours": coerce_number(feature.get("EstimatedHours"), 0),
                    "EstimatedCost": coerce_number(feature.get("EstimatedCost"), 0),
                }
            )
        data["ScopeOfWork"] = features
        return data

    def build_metadata(self, request: QuoteRequest) -> dict[str, Any]:
        return {"companyName": request.company_name, "hourlyRate": request.hourly_rate}

    async def run(self, request: QuoteRequest) -> GenerationResult:
        result = await super().run(request)
        logger.info(
            "Quote generated successfully for %s: total cost %s, %s features",
            request.company_name,
            result.data["TotalEstimatedCost"],
            len(result.data["ScopeOfWork"]),
        )
        return result
