import json
import logging

from app.agent.artifacts import BoltPromptRequest, TextGenerationResult
from app.agent.base import TextGenerator
from app.agent.prompts.bolt import BOLT_SYSTEM_PROMPT, build_bolt_user_prompt

logger = logging.getLogger(__name__)


class BoltPromptAgent(TextGenerator[BoltPromptRequest]):
    """Writes a build prompt for the Bolt.New no-code tool from an accepted quote."""

    system_prompt = BOLT_SYSTEM_PROMPT
    temperature = 0.7
    max_tokens = 4000
    openai_fallback_model = "gpt-4"

    def build_prompt(self, request: BoltPromptRequest) -> str:
        quote_json = json.dumps(request.quote_response.to_document(), indent=2)
        return build_bolt_user_prompt(request.company_name, quote_json, request.additional_context)

    async def run(self, request: BoltPromptRequest) -> TextGenerationResult:
        result = await super().run(request)
        logger.info(
            "Bolt.New prompt generated successfully for %s: %s features, %s characters",
            request.company_name,
            len(request.quote_response.scope_of_work),
            len(result.text),
        )
        return result
