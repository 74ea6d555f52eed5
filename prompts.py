ANALYSIS_HEADER = """
Analyze this retail store image for compliance with these rules:

"""

# The model's output format depends on this exact wording; keep it byte-stable.
RESPONSE_FORMAT_INSTRUCTIONS = """
Analyze the image to determine if the retail store is compliant with these rules.
Return your response in the following JSON format ONLY (no additional text before or after):
{
  "overallStatus": "compliant" | "non-compliant" | "partial",
  "score": <percentage as number between 0-100>,
  "issues": [
    {
      "rule": "<rule category>",
      "description": "<specific rule>",
      "status": "pass" | "fail" | "warning",
      "details": "<explanation>"
    }
  ],
  "summary": "<general overview of compliance>"
}
"""


def format_rule(rule):
    """Render one rule category as "<id>: <name>" followed by a bullet per statement."""
    lines = [f"{rule.id}: {rule.name}"]
    lines.extend(f"- {statement}" for statement in rule.description)
    return "\n".join(lines) + "\n\n"


def build_prompt(rules):
    """
    Build the compliance analysis prompt sent alongside the store image.

    Args:
        rules: ordered sequence of Rule objects

    Returns:
        str: the rule list followed by the fixed JSON response instructions
    """
    rule_section = "".join(format_rule(rule) for rule in rules)
    return ANALYSIS_HEADER + rule_section + RESPONSE_FORMAT_INSTRUCTIONS
