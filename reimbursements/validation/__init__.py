"""Form validation package."""

from reimbursements.validation.validator import ReimbursementDraft, ReimbursementValidator

__all__ = ["ReimbursementDraft", "ReimbursementValidator"]
