from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class OverallStatus(str, Enum):
    COMPLIANT = "compliant"
    NON_COMPLIANT = "non-compliant"
    PARTIAL = "partial"


class IssueStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class Rule(BaseModel):
    """A rule category and its ordered statements, e.g. "Rule 2: Checkout Counter Rules"."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Tuple[str, ...] = ()


class ComplianceIssue(BaseModel):
    """One evaluated rule statement."""

    model_config = ConfigDict(frozen=True, extra="allow")

    rule: str
    description: str
    status: str
    details: Optional[str] = None


class ComplianceResult(BaseModel):
    """
    Outcome of a single image analysis.

    A well-formed model reply is kept verbatim, so status and score may hold
    values the fallback path never produces (e.g. "compliant" with a score of 5).
    Serialise with ``model_dump(by_alias=True)`` to get the camelCase wire keys.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    overall_status: str = Field(alias="overallStatus")
    score: Union[int, float]
    issues: Tuple[ComplianceIssue, ...] = ()
    summary: str

    def to_dict(self):
        return self.model_dump(by_alias=True, mode="json")
