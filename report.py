from datetime import date
import textwrap

import fitz  # PyMuPDF

from models import IssueStatus

REPORT_TITLE = "Retail Compliance Report"

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("letter")
MARGIN = 54

STATUS_COLORS = {
    "compliant": (0.09, 0.5, 0.24),
    "non-compliant": (0.73, 0.11, 0.11),
    "partial": (0.71, 0.45, 0.0),
    "pass": (0.09, 0.5, 0.24),
    "fail": (0.73, 0.11, 0.11),
    "warning": (0.71, 0.45, 0.0),
}
BLACK = (0, 0, 0)
GREY = (0.4, 0.4, 0.4)

STATUS_PRIORITY = (IssueStatus.FAIL.value, IssueStatus.WARNING.value, IssueStatus.PASS.value)


def group_issues(issues):
    """Group issues by rule category, keeping first-appearance order."""
    groups = {}
    for issue in issues:
        groups.setdefault(issue.rule, []).append(issue)
    return groups


def select_key_findings(issues, max_categories=12, per_category=2):
    """
    Pick the issues worth showing in a printed report.

    At most max_categories categories are kept, and for each one at most
    per_category issues, failures first, then warnings, then passes.
    """
    findings = []
    for category_issues in list(group_issues(issues).values())[:max_categories]:
        ordered = [issue for status in STATUS_PRIORITY for issue in category_issues if issue.status == status]
        findings.extend(ordered[:per_category])
    return findings


def format_score(result):
    return f"{str(result.overall_status).upper()}: {result.score}%"


def format_report(result):
    """Render a result as plain text for the terminal."""
    lines = [REPORT_TITLE, "=" * len(REPORT_TITLE), format_score(result), "", result.summary, ""]
    for category, category_issues in group_issues(result.issues).items():
        lines.append(category)
        for issue in category_issues:
            lines.append(f"  [{str(issue.status).upper()}] {issue.description}")
            if issue.details and issue.details != issue.description:
                lines.extend("      " + line for line in textwrap.wrap(issue.details, 76))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def report_lines(result, generated_on):
    """Lines of the PDF report as (text, fontsize, color) tuples."""
    lines = [
        (REPORT_TITLE, 20, (0.11, 0.31, 0.85)),
        (f"Generated on {generated_on.isoformat()}", 10, GREY),
        ("", 10, BLACK),
        ("Overall Compliance Status", 14, BLACK),
        (format_score(result), 12, STATUS_COLORS.get(result.overall_status, BLACK)),
        (result.summary, 11, BLACK),
        ("", 10, BLACK),
        ("Key Compliance Findings", 14, BLACK),
    ]
    for issue in select_key_findings(result.issues):
        lines.append((f"{issue.rule} [{issue.status}]", 11, STATUS_COLORS.get(issue.status, BLACK)))
        lines.append((issue.description, 10, BLACK))
        lines.append(("", 6, BLACK))
    return lines


def write_pages(doc, lines):
    page = None
    y = 0
    usable_width = PAGE_WIDTH - 2 * MARGIN
    for text, fontsize, color in lines:
        width = max(int(usable_width / (fontsize * 0.5)), 20)
        for chunk in textwrap.wrap(text, width) or [""]:
            if page is None or y + fontsize > PAGE_HEIGHT - MARGIN:
                page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
                y = MARGIN
            y += fontsize
            if chunk:
                page.insert_text((MARGIN, y), chunk, fontsize=fontsize, color=color)
            y += fontsize * 0.4


def export_pdf(result, path, generated_on=None):
    """
    Write a result to a PDF report.

    Args:
        result (ComplianceResult): the analysis to export
        path (str): output file path
        generated_on (date): date printed under the title, today by default
    """
    if generated_on is None:
        generated_on = date.today()

    doc = fitz.open()
    try:
        write_pages(doc, report_lines(result, generated_on))
        doc.save(path)
    finally:
        doc.close()
    return path
