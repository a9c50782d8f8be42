"""
Reimbursement Flows

Ties validation, the data service and toast notifications together for
the actions a user takes:
1. Pick a receipt file  (validate -> confirm or reject with a toast)
2. Submit the form      (validate -> encode receipt -> create)
3. Delete a request     (delete -> success or failure toast)

DESIGN DECISION: The data service never validates and never talks to the
user. This module is the boundary where form rules are enforced and
where storage failures become a generic failure toast.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from reimbursements.config import get_settings
from reimbursements.models.reimbursement import Reimbursement, ReimbursementCreate
from reimbursements.models.toast import ToastVariant
from reimbursements.models.validation import ValidationResult
from reimbursements.notifications import ToastManager, get_toast_manager
from reimbursements.observability import get_logger
from reimbursements.receipts import (
    ReceiptFile,
    ReceiptTranscoder,
    TempFileHandleRegistry,
    file_to_data_url,
)
from reimbursements.services import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    ReimbursementService,
    StorageError,
)
from reimbursements.utils.format import parse_currency
from reimbursements.validation import ReimbursementDraft, ReimbursementValidator


logger = get_logger(__name__)


class ReimbursementFlow:
    """
    Orchestrates user actions on reimbursements.

    Every outcome the user must see is reported as a toast; methods
    return the result (or None/False) so callers can move on.
    """

    def __init__(
        self,
        service: ReimbursementService,
        validator: Optional[ReimbursementValidator] = None,
        toast_manager: Optional[ToastManager] = None,
    ):
        self._service = service
        self._validator = validator or ReimbursementValidator()
        self._toast_manager = toast_manager

    @property
    def toasts(self) -> ToastManager:
        return self._toast_manager or get_toast_manager()

    def _report_invalid(self, result: ValidationResult) -> None:
        issue = result.first_error
        self.toasts.toast(
            title=issue.message,
            description=issue.suggested_fix,
            variant=ToastVariant.DESTRUCTIVE,
        )
        logger.info(
            "validation_failed",
            fields=[i.field for i in result.issues if i.severity == "error"],
        )

    def select_file(self, file: ReceiptFile) -> bool:
        """
        Validate a picked receipt file and tell the user the outcome.

        Returns:
            True if the file can be attached to the form
        """
        result = self._validator.validate_file(file)
        if not result.is_valid:
            self._report_invalid(result)
            return False

        self.toasts.toast(
            title="Arquivo selecionado",
            description=f"{file.filename} foi selecionado com sucesso.",
        )
        return True

    async def submit(self, draft: ReimbursementDraft) -> Optional[Reimbursement]:
        """
        Validate the form and create the reimbursement.

        Returns:
            The created reimbursement, or None if validation or storage failed
        """
        result = self._validator.validate(draft)
        if not result.is_valid:
            self._report_invalid(result)
            return None

        data = ReimbursementCreate(
            name=draft.name,
            category=draft.category,
            amount=parse_currency(draft.amount),
            receipt=file_to_data_url(draft.receipt),
            receipt_name=draft.receipt.filename,
        )

        try:
            return await self._service.create(data)
        except (StorageError, ValidationError) as e:
            logger.error("reimbursement_create_failed", error=str(e))
            self.toasts.toast(
                title="Erro",
                description="Não foi possível criar o reembolso. Tente novamente.",
                variant=ToastVariant.DESTRUCTIVE,
            )
            return None

    async def delete(self, reimbursement_id: str) -> bool:
        """
        Delete a reimbursement and tell the user the outcome.

        Returns:
            True if the collection was rewritten
        """
        try:
            await self._service.delete(reimbursement_id)
        except (StorageError, ValidationError) as e:
            logger.error(
                "reimbursement_delete_failed",
                reimbursement_id=reimbursement_id,
                error=str(e),
            )
            self.toasts.toast(
                title="Erro",
                description="Não foi possível excluir o reembolso.",
                variant=ToastVariant.DESTRUCTIVE,
            )
            return False

        self.toasts.toast(
            title="Sucesso",
            description="Reembolso excluído com sucesso.",
            variant=ToastVariant.SUCCESS,
        )
        return True


class AppComponents(BaseModel):
    """Everything a front end needs, wired from settings."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    storage: KeyValueStorage
    service: ReimbursementService
    toasts: ToastManager
    transcoder: ReceiptTranscoder
    flow: ReimbursementFlow


def create_storage(backend: Optional[str] = None) -> KeyValueStorage:
    """
    Build the storage backend named in StorageSettings.

    Args:
        backend: "memory" or "file"; overrides the configured backend
    """
    settings = get_settings().storage
    backend = backend or settings.backend

    if backend == "memory":
        return InMemoryStorage(quota_chars=settings.quota_chars)
    if backend == "file":
        return JsonFileStorage(settings.path, quota_chars=settings.quota_chars)
    raise ValueError(f"Unknown storage backend: {backend}")


def create_app_components(
    storage: Optional[Union[KeyValueStorage, str]] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        storage: A storage instance, a backend name, or None for the
                 configured backend.
    """
    if storage is None or isinstance(storage, str):
        storage = create_storage(storage)

    service = ReimbursementService(storage)
    toasts = get_toast_manager()

    return AppComponents(
        storage=storage,
        service=service,
        toasts=toasts,
        transcoder=ReceiptTranscoder(TempFileHandleRegistry()),
        flow=ReimbursementFlow(service, toast_manager=toasts),
    )
