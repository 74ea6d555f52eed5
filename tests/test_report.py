from datetime import date
from unittest.mock import MagicMock

import fitz  # PyMuPDF
import pytest

import report
from models import ComplianceIssue, ComplianceResult
from report import export_pdf, format_report, select_key_findings


def make_result(issues=(), summary="Checkout area needs attention."):
    return ComplianceResult(overall_status="partial", score=75, issues=tuple(issues), summary=summary)


def issue(rule, status, description="statement"):
    return ComplianceIssue(rule=rule, description=description, status=status, details=f"{rule} {status}")


def test_key_findings_prioritise_failures_per_category():
    issues = [
        issue("Checkout Counter Rules", "pass", "counter has POS"),
        issue("Checkout Counter Rules", "warning", "queue unclear"),
        issue("Aisle Arrangement Rules", "pass", "aisles wide"),
        issue("Checkout Counter Rules", "fail", "helmet on counter"),
    ]

    findings = select_key_findings(issues)

    assert [finding.description for finding in findings] == ["helmet on counter", "queue unclear", "aisles wide"]


def test_key_findings_keep_at_most_twelve_categories():
    issues = [issue(f"Category {n}", "pass") for n in range(15)]

    findings = select_key_findings(issues)

    assert len(findings) == 12
    assert findings[-1].rule == "Category 11"


def test_format_report_groups_issues_by_rule():
    result = make_result(
        [
            issue("Checkout Counter Rules", "fail", "helmet on counter"),
            issue("Floor & Cleanliness Rules", "pass", "floor clean"),
            issue("Checkout Counter Rules", "pass", "POS visible"),
        ]
    )

    text = format_report(result)

    assert "PARTIAL: 75%" in text
    assert "Checkout area needs attention." in text
    assert text.count("Checkout Counter Rules\n") == 1
    assert text.index("[FAIL] helmet on counter") < text.index("[PASS] POS visible") < text.index("Floor & Cleanliness Rules")


def test_export_pdf_writes_report(tmp_path):
    path = tmp_path / "retail-compliance-report.pdf"

    export_pdf(make_result([issue("Checkout Counter Rules", "fail", "helmet on counter")]), str(path), generated_on=date(2024, 5, 1))

    with fitz.open(str(path)) as doc:
        text = doc[0].get_text()
    assert "Retail Compliance Report" in text
    assert "Generated on 2024-05-01" in text
    assert "PARTIAL: 75%" in text
    assert "helmet on counter" in text


def test_export_pdf_paginates_long_reports(tmp_path):
    path = tmp_path / "long.pdf"

    export_pdf(make_result(summary="shelf " * 1500), str(path))

    with fitz.open(str(path)) as doc:
        assert doc.page_count >= 2


def test_export_pdf_closes_document_when_save_fails(monkeypatch, tmp_path):
    doc = MagicMock()
    doc.save.side_effect = OSError("disk full")
    monkeypatch.setattr(report.fitz, "open", lambda: doc)

    with pytest.raises(OSError):
        export_pdf(make_result(), str(tmp_path / "report.pdf"))

    doc.close.assert_called_once()
