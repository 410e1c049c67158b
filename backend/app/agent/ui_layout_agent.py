from app.agent.artifacts import QuoteData, UILayoutRequest
from app.agent.base import StructuredGenerator
from app.agent.prompts.ui_layout import UI_LAYOUT_SYSTEM_PROMPT, build_ui_layout_prompt


def describe_screens(quote: QuoteData) -> list[str]:
    screens = []
    for feature in quote.scope_of_work:
        components = ", ".join(item.item_name for item in feature.items)
        screens.append(
            f"Screen: {feature.feature_name} → Purpose: {feature.description}. Components: {components}"
        )
    return screens


class UILayoutAgent(StructuredGenerator[UILayoutRequest]):
    """Sketches screen layouts (component trees) for each feature of a quote."""

    system_prompt = UI_LAYOUT_SYSTEM_PROMPT
    temperature = 0.3
    max_tokens = 4000
    openai_fallback_model = "gpt-4"

    def build_prompt(self, request: UILayoutRequest) -> str:
        app_name = request.quote_data.project_overview or "Generated App"
        return build_ui_layout_prompt(app_name, describe_screens(request.quote_data))

    def build_metadata(self, request: UILayoutRequest) -> dict:
        return {"quoteId": request.quote_id}
