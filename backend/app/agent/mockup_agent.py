from pathlib import Path

from app.agent.artifacts import MockupRequest
from app.agent.base import TextGenerator
from app.agent.llm_client import LLMClient
from app.agent.prompts.mockup import MOCKUP_SYSTEM_PROMPT, build_mockup_prompt


class MockupHTMLAgent(TextGenerator[MockupRequest]):
    """
    Rewrites the copy and navigation of a dashboard HTML template for one
    customer. Output is raw HTML, not JSON.
    """

    system_prompt = MOCKUP_SYSTEM_PROMPT
    temperature = 0.3
    max_tokens = 8000
    # Needs a large context window for the template.
    openai_fallback_model = "gpt-4o"
    openrouter_fallback_model = "anthropic/claude-3.5-sonnet"

    def __init__(self, llm: LLMClient, template_path: Path):
        super().__init__(llm)
        self.template_path = template_path

    def load_template(self) -> str:
        return self.template_path.read_text(encoding="utf-8")

    def build_prompt(self, request: MockupRequest) -> str:
        quote = request.quote_data
        features = [f"{feature.feature_name}: {feature.description}" for feature in quote.scope_of_work]
        return build_mockup_prompt(
            request.company_name,
            quote.project_overview or "",
            features,
            quote.total_estimated_cost,
            quote.hourly_rate,
            self.load_template(),
        )
