"""
Heuristic reduction of free-text Gemini replies.

Used when the model ignores the JSON instructions and answers in prose. The
score is estimated from how often pass-like and fail-like words occur, and
each paragraph of the reply becomes one compliance issue.
"""
import logging
import math
import re

from models import ComplianceIssue, ComplianceResult, IssueStatus, OverallStatus

logger = logging.getLogger(__name__)

POSITIVE_TERMS = ("pass", "compliant", "followed", "adherence", "correctly placed", "properly organized")
NEGATIVE_TERMS = ("fail", "non-compliant", "violated", "not followed", "missing", "incorrect")

POSITIVE_PATTERN = re.compile("|".join(re.escape(term) for term in POSITIVE_TERMS), re.IGNORECASE)
NEGATIVE_PATTERN = re.compile("|".join(re.escape(term) for term in NEGATIVE_TERMS), re.IGNORECASE)

RULE_NUMBER_PATTERN = re.compile(r"Rule\s+(\d+)[ \t]*:?[ \t]*([\w&/ ]*)", re.IGNORECASE)
RULE_HEADING_PATTERN = re.compile(r"([\w&/ ]+Rules):", re.IGNORECASE)
PARAGRAPH_SEPARATOR = re.compile(r"\n[ \t]*\n")

NEUTRAL_SCORE = 50
COMPLIANT_THRESHOLD = 80
NON_COMPLIANT_THRESHOLD = 30
MIN_PARAGRAPH_LENGTH = 10

DEFAULT_CATEGORY = "General Compliance"
ELLIPSIS = "..."
DESCRIPTION_LENGTH = 100
DETAILS_LENGTH = 300
SUMMARY_LENGTH = 200


def count_positive(text):
    return len(POSITIVE_PATTERN.findall(text))


def count_negative(text):
    return len(NEGATIVE_PATTERN.findall(text))


def has_positive(text):
    return POSITIVE_PATTERN.search(text) is not None


def has_negative(text):
    return NEGATIVE_PATTERN.search(text) is not None


def estimate_score(positive, negative):
    """Share of positive mentions as a 0-100 integer, 50 when there are none."""
    total = positive + negative
    if total == 0:
        return NEUTRAL_SCORE
    # halves round up
    return int(math.floor(100 * positive / total + 0.5))


def status_for_score(score):
    if score >= COMPLIANT_THRESHOLD:
        return OverallStatus.COMPLIANT
    if score <= NON_COMPLIANT_THRESHOLD:
        return OverallStatus.NON_COMPLIANT
    return OverallStatus.PARTIAL


def issue_status_for_overall(overall_status):
    if overall_status == OverallStatus.COMPLIANT:
        return IssueStatus.PASS
    if overall_status == OverallStatus.NON_COMPLIANT:
        return IssueStatus.FAIL
    return IssueStatus.WARNING


def truncate(text, length):
    if len(text) > length:
        return text[:length] + ELLIPSIS
    return text


def split_paragraphs(text):
    return PARAGRAPH_SEPARATOR.split(text)


def extract_rule_name(paragraph):
    """
    Find the rule category a paragraph talks about.

    "Rule 2: Checkout Counter Rules" is preferred, then a heading such as
    "Checkout Counter Rules:", otherwise the paragraph is filed under
    General Compliance.
    """
    match = RULE_NUMBER_PATTERN.search(paragraph)
    if match:
        category = match.group(2).strip()
        if category:
            return f"Rule {match.group(1)}: {category}"
        return f"Rule {match.group(1)}"

    match = RULE_HEADING_PATTERN.search(paragraph)
    if match:
        return match.group(1).strip()

    return DEFAULT_CATEGORY


def classify_paragraph(paragraph):
    if has_positive(paragraph):
        return IssueStatus.PASS
    if has_negative(paragraph):
        return IssueStatus.FAIL
    return IssueStatus.WARNING


def extract_issues(text):
    """One issue per paragraph longer than MIN_PARAGRAPH_LENGTH, in reading order."""
    issues = []
    for paragraph in split_paragraphs(text):
        paragraph = paragraph.strip()
        if len(paragraph) <= MIN_PARAGRAPH_LENGTH:
            continue
        issues.append(
            ComplianceIssue(
                rule=extract_rule_name(paragraph),
                description=paragraph[:DESCRIPTION_LENGTH] + ELLIPSIS,
                status=classify_paragraph(paragraph).value,
                details=paragraph,
            )
        )
    return issues


def parse_text_response(text):
    """
    Build a ComplianceResult from a reply that is not valid compliance JSON.

    Args:
        text (str): raw text generated by the model

    Returns:
        ComplianceResult: score and overall status follow the vocabulary
        thresholds; issues come from the reply's paragraphs
    """
    logger.info("Processing text response as structured data...")

    score = estimate_score(count_positive(text), count_negative(text))
    overall_status = status_for_score(score)

    issues = extract_issues(text)
    if not issues:
        issues.append(
            ComplianceIssue(
                rule=DEFAULT_CATEGORY,
                description="Overall store compliance assessment",
                status=issue_status_for_overall(overall_status).value,
                details=truncate(text, DETAILS_LENGTH),
            )
        )

    logger.info(f"Text response scored {score} ({overall_status.value}) with {len(issues)} issues")

    return ComplianceResult(
        overall_status=overall_status.value,
        score=score,
        issues=tuple(issues),
        summary=truncate(text, SUMMARY_LENGTH),
    )
