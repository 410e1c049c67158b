import logging
from typing import Any

from app.agent.artifacts import GenerationResult, StatementOfWorkRequest
from app.agent.base import StructuredGenerator
from app.agent.prompts.statement_of_work import (
    STATEMENT_OF_WORK_SYSTEM_PROMPT,
    build_statement_of_work_prompt,
)

logger = logging.getLogger(__name__)


class StatementOfWorkAgent(StructuredGenerator[StatementOfWorkRequest]):
    """
    Produces a business-facing Statement of Work. The caller may pick the
    model; otherwise the environment default or provider fallback is used.
    """

    system_prompt = STATEMENT_OF_WORK_SYSTEM_PROMPT
    temperature = 0.7
    max_tokens = 2000
    required_keys = ("ExecutiveSummary", "CoreComponents")
    list_keys = frozenset({"CoreComponents"})

    def requested_model(self, request: StatementOfWorkRequest) -> str | None:
        return request.model

    def build_prompt(self, request: StatementOfWorkRequest) -> str:
        return build_statement_of_work_prompt(
            request.company_name,
            request.project_description,
            request.industry_or_default,
            request.audience_or_default,
        )

    def build_metadata(self, request: StatementOfWorkRequest) -> dict[str, Any]:
        return {
            "companyName": request.company_name,
            "industry": request.industry_or_default,
            "targetAudience": request.audience_or_default,
        }

    async def run(self, request: StatementOfWorkRequest) -> GenerationResult:
        result = await super().run(request)
        logger.info(
            "Statement of Work generated successfully for %s with %s: %s components (%s)",
            request.company_name,
            result.model,
            len(result.data["CoreComponents"]),
            request.industry_or_default,
        )
        return result
