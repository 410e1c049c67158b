QUOTE_SYSTEM_PROMPT = (
    "You are a professional software consultant who generates accurate project quotes in JSON format."
)

JSON_ONLY_RULES = """OUTPUT:
IMPORTANT:
- Return ONLY a valid JSON object.
- Do NOT include markdown, backticks, code fences, or additional text.
- The response must start with '{' and end with '}'."""

QUOTE_STRUCTURE = """STRUCTURE:
{
  "ProjectOverview": "A concise paragraph summarizing the project, including the company name and purpose.",
  "TimeFrame": {
    "RequirementsClarificationPhase": "Estimated time in days",
    "Stage1Development": "Estimated time in days",
    "Stage2FinalDraft": "Estimated time in days",
    "Stage3Signoff": "Estimated time in days"
  },
  "ScopeOfWork": [
    {
      "FeatureName": "Feature name",
      "Description": "Detailed explanation of what this feature does and why it's needed",
      "Items": [
        { "ItemName": "Specific component name", "Description": "Detailed functionality description" }
      ],
      "EstimatedHours": number,
      "EstimatedCost": number
    }
  ],
  "HourlyRate": number,
  "TotalEstimatedCost": number
}

Guidelines:
- Break down ALL functional requirements from the description into detailed features.
- Include core features even if not explicitly stated:
  - User authentication (email/password + Google OAuth)
  - Role-based authorization (Admin, Standard User)
- Assign realistic EstimatedHours per feature group:
  - Small feature: 4-8 hours
  - Medium feature: 8-12 hours
  - Large feature: 12-18 hours
- For each feature:
  - Provide multiple items (sub-components, workflows, integrations).
  - Calculate EstimatedCost = EstimatedHours * HourlyRate.
- Add features for automation, dashboards, and reporting if implied.
- At least 5 features for moderately complex projects.
- Ensure HourlyRate and TotalEstimatedCost are numeric values.
- Output only the JSON object, no explanations."""


def build_quote_prompt(company_name: str, project_description: str, hourly_rate: float) -> str:
    return (
        "You are a professional software consultant. Generate a detailed software development "
        "quotation in JSON format based on the following input:\n\n"
        f'Company Name: "{company_name}"\n'
        f'Project Description: "{project_description}"\n'
        f"Hourly Rate: {hourly_rate}\n\n"
        f"{JSON_ONLY_RULES}\n\n"
        f"{QUOTE_STRUCTURE}\n"
    )
