"""
Tests for the user-facing reimbursement flows.

Flows are checked through their return values and the toasts they show.
"""

import asyncio
import json

import pytest

from reimbursements.models.toast import ToastVariant
from reimbursements.orchestrator import (
    AppComponents,
    ReimbursementFlow,
    create_app_components,
    create_storage,
)
from reimbursements.receipts import ReceiptFile, decode_data_url
from reimbursements.services import InMemoryStorage, JsonFileStorage, ReimbursementService
from reimbursements.utils import format_currency
from reimbursements.validation import ReimbursementDraft


COLLECTION_KEY = "reimbursements"


@pytest.fixture
def flow(service, toasts) -> ReimbursementFlow:
    return ReimbursementFlow(service, toast_manager=toasts)


@pytest.fixture
def png_file(png_bytes) -> ReceiptFile:
    return ReceiptFile(filename="nota.png", mime_type="image/png", data=png_bytes)


class TestSelectFile:
    """Tests for picking a receipt file."""

    def test_valid_file_confirms(self, flow, toasts, png_file):
        assert flow.select_file(png_file) is True
        assert toasts.toasts[0].title == "Arquivo selecionado"
        assert toasts.toasts[0].description == "nota.png foi selecionado com sucesso."

    def test_invalid_file_rejects(self, flow, toasts):
        file = ReceiptFile(filename="a.gif", mime_type="image/gif", data=b"GIF89a")

        assert flow.select_file(file) is False
        assert toasts.toasts[0].title == "Arquivo inválido"
        assert toasts.toasts[0].variant == ToastVariant.DESTRUCTIVE


class TestSubmit:
    """Tests for submitting the form."""

    def test_creates_reimbursement(self, flow, service, png_file, png_bytes):
        draft = ReimbursementDraft(
            name="Rodrigo",
            category="Alimentação",
            amount="34,78",
            receipt=png_file,
        )
        created = asyncio.run(flow.submit(draft))

        assert created is not None
        assert created.amount == 34.78
        assert created.receipt_name == "nota.png"
        assert decode_data_url(created.receipt).data == png_bytes
        assert asyncio.run(service.get_by_id(created.id)) == created

    def test_invalid_form_is_not_stored(self, flow, service, toasts, png_file):
        draft = ReimbursementDraft(name="Al", category="Alimentação", amount="10", receipt=png_file)

        assert asyncio.run(flow.submit(draft)) is None
        assert asyncio.run(service.list(1, 10)).total == 3
        assert toasts.toasts[0].title == "Nome deve ter no mínimo 3 caracteres"
        assert toasts.toasts[0].variant == ToastVariant.DESTRUCTIVE

    def test_huge_amount_is_stored_and_formats(self, flow, png_file):
        draft = ReimbursementDraft(name="Rodrigo", category="Outros", amount="1e30", receipt=png_file)
        created = asyncio.run(flow.submit(draft))

        assert created is not None
        assert format_currency(created.amount) == f"{int(1e30)},00"

    def test_storage_failure_shows_toast(self, fast_settings, toasts, png_file):
        storage = InMemoryStorage({COLLECTION_KEY: "[]"}, quota_chars=100)
        service = ReimbursementService(storage, settings=fast_settings, collection_key=COLLECTION_KEY)
        flow = ReimbursementFlow(service, toast_manager=toasts)
        draft = ReimbursementDraft(name="Rodrigo", category="Outros", amount="1", receipt=png_file)

        assert asyncio.run(flow.submit(draft)) is None
        assert toasts.toasts[0].title == "Erro"
        assert toasts.toasts[0].description == "Não foi possível criar o reembolso. Tente novamente."
        assert storage.read(COLLECTION_KEY) == "[]"


class TestDelete:
    """Tests for deleting from the list."""

    def test_success_toast(self, flow, service, toasts):
        assert asyncio.run(flow.delete("1")) is True
        assert asyncio.run(service.get_by_id("1")) is None
        assert toasts.toasts[0].title == "Sucesso"
        assert toasts.toasts[0].description == "Reembolso excluído com sucesso."
        assert toasts.toasts[0].variant == ToastVariant.SUCCESS

    def test_failure_toast(self, fast_settings, toasts):
        storage = InMemoryStorage({COLLECTION_KEY: "not json"})
        service = ReimbursementService(storage, settings=fast_settings, collection_key=COLLECTION_KEY)
        flow = ReimbursementFlow(service, toast_manager=toasts)

        assert asyncio.run(flow.delete("1")) is False
        assert toasts.toasts[0].title == "Erro"
        assert toasts.toasts[0].description == "Não foi possível excluir o reembolso."

    def test_uses_process_wide_manager_by_default(self, service):
        from reimbursements.notifications import get_toast_manager

        asyncio.run(ReimbursementFlow(service).delete("2"))

        assert get_toast_manager().toasts[0].title == "Sucesso"


class TestComponents:
    """Tests for wiring components from settings."""

    def test_memory_backend(self):
        assert isinstance(create_storage("memory"), InMemoryStorage)

    def test_file_backend(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REIMBURSEMENT_STORAGE_PATH", str(tmp_path / "store.json"))
        storage = create_storage("file")

        assert isinstance(storage, JsonFileStorage)
        assert storage.path == tmp_path / "store.json"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_storage("redis")

    def test_create_app_components(self, monkeypatch):
        monkeypatch.setenv("REIMBURSEMENT_SERVICE_LIST_DELAY_MS", "0")
        storage = InMemoryStorage()
        components = create_app_components(storage)

        assert isinstance(components, AppComponents)
        assert components.storage is storage
        page = asyncio.run(components.service.list())
        assert page.total == 6
        assert json.loads(storage.read(COLLECTION_KEY))[0]["name"] == "Rodrigo"
