"""
Reimbursement Form Validation

The data service stores whatever it is given, so every rule lives here
and runs before create() is called:

- name is required and at least UploadSettings.min_name_length characters
- category is one of ReimbursementCategory
- a receipt file is attached
- amount parses as a positive number ("34,78" or "34.78")
- the file is JPEG, PNG or PDF and no larger than UploadSettings.max_size_mb

Image files are also opened with Pillow, so a file that only claims to
be a JPEG or PNG is caught before it is stored.

IMPORTANT: Validation NEVER silently fixes issues. It reports them.
"""

import math
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict

from reimbursements.config import UploadSettings, get_settings
from reimbursements.models.reimbursement import ReimbursementCategory
from reimbursements.models.validation import ValidationIssue, ValidationResult
from reimbursements.receipts.files import ReceiptFile
from reimbursements.utils.format import parse_currency


# Pillow format names for the image types we accept
_PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
}


class ReimbursementDraft(BaseModel):
    """Raw form input, before validation."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = ""
    category: str = ""
    amount: str = ""
    receipt: Optional[ReceiptFile] = None


class ReimbursementValidator:
    """Checks reimbursement forms and picked receipt files."""

    def __init__(self, settings: Optional[UploadSettings] = None):
        self._settings = settings or get_settings().upload

    def _check_name(self, name: str) -> list[ValidationIssue]:
        if not name:
            return [ValidationIssue(
                field="name",
                issue_type="missing",
                message="Nome é obrigatório",
                severity="error",
            )]
        if len(name) < self._settings.min_name_length:
            return [ValidationIssue(
                field="name",
                issue_type="too_short",
                message=f"Nome deve ter no mínimo {self._settings.min_name_length} caracteres",
                severity="error",
            )]
        return []

    def _check_category(self, category: str) -> list[ValidationIssue]:
        if not category:
            return [ValidationIssue(
                field="category",
                issue_type="missing",
                message="Categoria obrigatória",
                severity="error",
                suggested_fix="Por favor, selecione uma categoria.",
            )]
        if category not in ReimbursementCategory.labels():
            return [ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message="Categoria inválida",
                severity="error",
                suggested_fix=f"Escolha uma de: {', '.join(ReimbursementCategory.labels())}.",
            )]
        return []

    def _check_amount(self, amount: str) -> list[ValidationIssue]:
        value = parse_currency(amount)
        if math.isnan(value) or value <= 0 or not math.isfinite(value):
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Valor inválido",
                severity="error",
                suggested_fix="Por favor, insira um valor válido.",
            )]
        return []

    def _check_image_content(self, file: ReceiptFile) -> list[ValidationIssue]:
        expected = _PIL_FORMATS.get(file.mime_type.lower())
        if expected is None:
            return []

        try:
            with Image.open(BytesIO(file.data)) as img:
                actual = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            return [ValidationIssue(
                field="receipt",
                issue_type="unreadable_image",
                message="Arquivo inválido",
                severity="error",
                suggested_fix="Não foi possível ler a imagem. Envie outro arquivo.",
            )]

        if actual != expected:
            return [ValidationIssue(
                field="receipt",
                issue_type="type_mismatch",
                message=f"O arquivo é {actual}, mas foi enviado como {file.mime_type}",
                severity="warning",
            )]
        return []

    def validate_file(self, file: ReceiptFile) -> ValidationResult:
        """
        Check a picked receipt file.

        Type (media type and filename extension) is checked first, then
        size, then the image content.
        """
        if (
            file.mime_type.lower() not in self._settings.accepted_types_list
            or file.extension not in self._settings.accepted_extensions_list
        ):
            return ValidationResult(issues=[ValidationIssue(
                field="receipt",
                issue_type="invalid_type",
                message="Arquivo inválido",
                severity="error",
                suggested_fix="Por favor, envie um arquivo JPG, PNG ou PDF.",
            )])

        if file.size > self._settings.max_size_bytes:
            return ValidationResult(issues=[ValidationIssue(
                field="receipt",
                issue_type="too_large",
                message="Arquivo muito grande",
                severity="error",
                suggested_fix=f"O arquivo deve ter no máximo {self._settings.max_size_mb}MB.",
            )])

        return ValidationResult(issues=self._check_image_content(file))

    def validate(self, draft: ReimbursementDraft) -> ValidationResult:
        """
        Check a whole form.

        Issues are listed in the order the form reports them:
        name, category, receipt, amount.
        """
        issues: list[ValidationIssue] = []
        issues.extend(self._check_name(draft.name))
        issues.extend(self._check_category(draft.category))

        if draft.receipt is None:
            issues.append(ValidationIssue(
                field="receipt",
                issue_type="missing",
                message="Comprovante obrigatório",
                severity="error",
                suggested_fix="Por favor, envie o comprovante da despesa.",
            ))
        else:
            issues.extend(self.validate_file(draft.receipt).issues)

        issues.extend(self._check_amount(draft.amount))
        return ValidationResult(issues=issues)
