from models import Rule
from prompts import ANALYSIS_HEADER, RESPONSE_FORMAT_INSTRUCTIONS, build_prompt, format_rule
from rules import RULES, get_rules


def test_build_prompt_is_deterministic():
    assert build_prompt(get_rules()) == build_prompt(get_rules())


def test_rules_are_rendered_in_catalog_order():
    prompt = build_prompt(RULES)

    positions = [prompt.index(f"{rule.id}: {rule.name}\n") for rule in RULES]
    assert positions == sorted(positions)
    assert len(RULES) == 12


def test_each_statement_is_a_bullet_under_its_rule():
    rule = Rule(id="Rule 8", name="Refrigerator/Freezer Rules", description=("Refrigerator doors must be closed.", "No condensation puddles under refrigerators."))

    assert format_rule(rule) == (
        "Rule 8: Refrigerator/Freezer Rules\n"
        "- Refrigerator doors must be closed.\n"
        "- No condensation puddles under refrigerators.\n"
        "\n"
    )


def test_schema_block_does_not_depend_on_catalog():
    full = build_prompt(RULES)
    single = build_prompt(RULES[:1])

    assert full.endswith(RESPONSE_FORMAT_INSTRUCTIONS)
    assert single.endswith(RESPONSE_FORMAT_INSTRUCTIONS)
    for field in ('"overallStatus"', '"score"', '"issues"', '"rule"', '"description"', '"status"', '"details"', '"summary"'):
        assert field in RESPONSE_FORMAT_INSTRUCTIONS


def test_empty_catalog_still_has_instructions():
    prompt = build_prompt([])

    assert prompt == ANALYSIS_HEADER + RESPONSE_FORMAT_INSTRUCTIONS
    assert "JSON format ONLY" in prompt
