"""
Validation Result Models

Form validation reports problems, it never fixes them. Each problem is a
ValidationIssue whose message and suggested_fix are shown to the user as
a toast title and description.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'too_short', 'invalid_type')"
    )
    message: str = Field(
        ...,
        description="Short human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="What the user should do about it"
    )


class ValidationResult(BaseModel):
    """Outcome of validating a reimbursement form or a picked file."""

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found, in check order"
    )

    @property
    def is_valid(self) -> bool:
        """Valid when there are no error-level issues; warnings are allowed."""
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        """The first error-level issue, the one reported to the user."""
        return next((i for i in self.issues if i.severity == "error"), None)

    def for_field(self, field: str) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.field == field]
