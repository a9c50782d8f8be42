"""
Data Models Package

Pydantic models for reimbursement records, listings and toast
notifications. All data flowing through the system conforms to these.
"""

from reimbursements.models.reimbursement import (
    PaginatedResponse,
    Reimbursement,
    ReimbursementCategory,
    ReimbursementCreate,
)
from reimbursements.models.toast import (
    AddToast,
    DismissToast,
    RemoveToast,
    Toast,
    ToastAction,
    ToastState,
    ToastUpdate,
    ToastVariant,
    UpdateToast,
)
from reimbursements.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Reimbursement models
    "PaginatedResponse",
    "Reimbursement",
    "ReimbursementCategory",
    "ReimbursementCreate",
    # Toast models
    "AddToast",
    "DismissToast",
    "RemoveToast",
    "Toast",
    "ToastAction",
    "ToastState",
    "ToastUpdate",
    "ToastVariant",
    "UpdateToast",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
