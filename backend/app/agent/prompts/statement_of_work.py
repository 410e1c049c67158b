from app.agent.prompts.quote import JSON_ONLY_RULES

STATEMENT_OF_WORK_SYSTEM_PROMPT = (
    "You are a professional business consultant who creates compelling Statement of Work documents "
    "that emphasize business value and customer benefits."
)

STATEMENT_OF_WORK_GUIDELINES = """Guidelines:
- Write from the customer's perspective, emphasizing business value and user benefits
- Use business language rather than technical jargon
- Include standard components like authentication, user management, dashboard, reporting
- Focus on how each component solves business problems or improves efficiency
- Include 3-5 core components based on the project description
- Make the document compelling and professional for executive audiences
- Emphasize security, performance, and user experience benefits within the core components"""


def build_statement_of_work_prompt(
    company_name: str,
    project_description: str,
    industry: str,
    target_audience: str,
) -> str:
    structure = (
        "STRUCTURE:\n"
        "{\n"
        f'  "ExecutiveSummary": "A compelling 2-3 sentence summary of the project\'s business value and expected outcomes for {company_name}.",\n'
        '  "ProjectObjectives": ["Primary business objective 1", "Primary business objective 2", "Primary business objective 3"],\n'
        '  "SolutionOverview": {\n'
        '    "PrimaryBenefits": ["Key business benefit 1", "Key business benefit 2", "Key business benefit 3"],\n'
        '    "KeyCapabilities": ["Core capability 1", "Core capability 2", "Core capability 3"]\n'
        "  },\n"
        '  "CoreComponents": [\n'
        "    {\n"
        '      "ComponentName": "User Authentication & Access Management",\n'
        '      "Purpose": "Business-focused description of why this component is needed",\n'
        '      "Benefits": ["Benefit 1", "Benefit 2", "Benefit 3"],\n'
        '      "KeyFeatures": ["Feature 1", "Feature 2", "Feature 3"]\n'
        "    }\n"
        "  ]\n"
        "}"
    )
    return (
        "You are a professional business consultant who creates customer-focused Statement of Work "
        "documents. Generate a comprehensive statement of work in JSON format that emphasizes business "
        "value, user benefits, and solution components.\n\n"
        f'Company Name: "{company_name}"\n'
        f'Project Description: "{project_description}"\n'
        f'Industry: "{industry}"\n'
        f'Target Audience: "{target_audience}"\n\n'
        f"{JSON_ONLY_RULES}\n"
        "- Focus on business benefits, user value, and solution outcomes rather than technical "
        "implementation details.\n\n"
        f"{structure}\n\n"
        f"{STATEMENT_OF_WORK_GUIDELINES}\n"
    )
