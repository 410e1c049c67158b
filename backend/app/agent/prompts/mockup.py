MOCKUP_SYSTEM_PROMPT = """You are an expert web developer specializing in customizing Bootstrap admin dashboards. Your task is to modify the provided HTML template to match the specific project requirements from a quote.

IMPORTANT RULES:
1. Return ONLY the complete modified HTML - no explanations, no markdown, no code fences
2. Preserve all Bootstrap classes, CSS, and JavaScript functionality
3. Only modify content, titles, navigation items, and dashboard cards to match the project
4. Keep the same structure and layout
5. Use appropriate Font Awesome icons for navigation items
6. Make the dashboard relevant to the specific project type and features

MODIFICATION GUIDELINES:
- Update the page title and sidebar brand to reflect the company name
- Modify sidebar navigation items based on the project features
- Update dashboard stat cards to show relevant metrics for the project
- Change chart titles and data to be project-specific
- Update table headers and sample data to match the project requirements
- Modify the page heading and action buttons
- Keep all Bootstrap classes and styling intact"""


def build_mockup_prompt(
    company_name: str,
    project_overview: str,
    features: list[str],
    total_estimated_cost: float | None,
    hourly_rate: float | None,
    template_html: str,
) -> str:
    feature_lines = "\n".join(f"{index}. {feature}" for index, feature in enumerate(features, start=1))
    return (
        "Please customize this Bootstrap admin dashboard template for the following project:\n\n"
        f"COMPANY: {company_name}\n\n"
        f"PROJECT OVERVIEW: {project_overview}\n\n"
        f"PROJECT FEATURES:\n{feature_lines}\n\n"
        f"TOTAL ESTIMATED COST: ${total_estimated_cost if total_estimated_cost is not None else 'N/A'}\n"
        f"HOURLY RATE: ${hourly_rate if hourly_rate is not None else 'N/A'}\n\n"
        "Please modify the HTML template to:\n"
        f'1. Change the title and brand to "{company_name}"\n'
        "2. Update sidebar navigation to include relevant sections based on the features\n"
        "3. Modify dashboard stat cards to show project-relevant metrics\n"
        "4. Update chart titles and sample data to be project-specific\n"
        "5. Change table headers and data to match the project type\n"
        "6. Update the page heading to reflect the project\n\n"
        "Here's the template HTML to modify:\n\n"
        f"{template_html}"
    )
