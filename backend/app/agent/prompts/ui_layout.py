UI_LAYOUT_SYSTEM_PROMPT = (
    "You are a UI/UX expert that generates structured JSON layouts for web applications. "
    "Always return valid JSON without markdown formatting."
)

UI_LAYOUT_EXAMPLES = """Generate a JSON object with the following EXACT structure:

For Authentication Screens (Login/Register):
{
  "ScreenName": "Login",
  "Route": "/login",
  "Components": [
    { "Type": "header", "Title": "Welcome to ABC House Cleaning" },
    {
      "Type": "main",
      "Props": { "layout": "flex", "justifyContent": "center", "alignItems": "center" },
      "Components": [
        {
          "Type": "card",
          "Title": "Login to Your Account",
          "Props": { "width": "md" },
          "Components": [
            { "Type": "form", "Fields": ["Email", "Password"] },
            { "Type": "button", "Title": "Login", "Props": { "variant": "primary", "fullWidth": true } }
          ]
        }
      ]
    }
  ]
}

For Dashboard/App Screens:
{
  "ScreenName": "Dashboard",
  "Route": "/dashboard",
  "Components": [
    { "Type": "header", "Title": "Dashboard" },
    {
      "Type": "sidebar",
      "Props": {
        "navigationItems": [
          { "name": "Dashboard", "icon": "dashboard", "route": "/dashboard" },
          { "name": "Bookings", "icon": "assignment", "route": "/bookings" }
        ]
      }
    },
    {
      "Type": "main",
      "Props": { "layout": "grid", "gap": 16 },
      "Components": [
        { "Type": "card", "Title": "Welcome", "Props": { "width": "full" } }
      ]
    }
  ]
}

CRITICAL REQUIREMENTS:
- Return ONLY valid JSON, no markdown or backticks
- ALWAYS include a "main" component for proper layout structure
- Use "Components" NOT "Children" for nested components
- Keep the structure simple and flat - avoid deeply nested components
- Include authentication screens (login, signup) if not already present
- Add a dashboard screen if not present
- Use semantic component types
- Include responsive design considerations
- Ensure all screens have proper navigation structure
- For buttons with icons, use Material Design icon names in Props.icon
- For sidebar navigation, use appropriate Material Design icons: home, dashboard, people, description, assignment, bar_chart, settings, etc.
- For Google sign-in buttons, use "login" icon or just text "Google" without icon
- DO NOT use "Children" property - only use "Components"
- Keep component nesting to maximum 2 levels deep
- For login/registration screens: Use main component with flex layout and center alignment
- For dashboard screens: Use main component with grid layout for card arrangements
- For screens with navigation: Include sidebar component with navigationItems
- For screens without navigation: Use only header and main components"""


def build_ui_layout_prompt(app_name: str, screens: list[str]) -> str:
    screen_lines = "\n".join(screens)
    return (
        "You are a UI/UX assistant. Generate a structured UI layout for a responsive web application.\n\n"
        f"App Name: {app_name}\n"
        "Style: Google Material Design, Tailwind-based layout, Primary color #4285F4.\n"
        "Icon Library: Use Material Design Icons (https://fonts.google.com/icons). Common icons: home, "
        "dashboard, people, description, assignment, bar_chart, settings, calendar_today, add_circle, "
        "download, search, filter_list, etc.\n\n"
        f"Screens:\n{screen_lines}\n\n"
        f"{UI_LAYOUT_EXAMPLES}\n"
    )
