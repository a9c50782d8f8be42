"""
Tests for Reimbursement Tracker models and configuration

Test strategy:
1. Unit tests for models and settings
2. Flow tests run against in-memory storage (see test_orchestrator.py)
3. No real timers in tests (use ManualScheduler)
"""

import logging
from datetime import datetime, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from reimbursements.config import (
    AppSettings,
    NotificationSettings,
    ServiceSettings,
    StorageSettings,
    UploadSettings,
    get_settings,
    validate_all_settings,
)
from reimbursements.models import (
    PaginatedResponse,
    Reimbursement,
    ReimbursementCategory,
    ReimbursementCreate,
    Toast,
    ToastUpdate,
    ToastVariant,
)
from reimbursements.models.toast import DismissToast, ToastAction
from reimbursements.observability import configure_logging, get_logger


class TestReimbursementModels:
    """Tests for reimbursement Pydantic models."""

    def test_category_labels(self):
        """Labels are the persisted Portuguese names, in display order."""
        assert ReimbursementCategory.labels() == [
            "Alimentação", "Hospedagem", "Transporte", "Serviços", "Outros",
        ]

    def test_enum_category_is_stored_as_label(self):
        data = ReimbursementCreate(name="Ana", category=ReimbursementCategory.TRANSPORT, amount=10)

        assert data.category == "Transporte"

    def test_accepts_camel_case_and_snake_case(self):
        by_alias = ReimbursementCreate.model_validate(
            {"name": "Ana", "category": "Outros", "amount": 1, "receiptName": "a.pdf"}
        )
        by_name = ReimbursementCreate(name="Ana", category="Outros", amount=1, receipt_name="a.pdf")

        assert by_alias == by_name

    def test_storage_dict_uses_camel_case(self):
        record = Reimbursement(
            id="1",
            name="Ana",
            category="Outros",
            amount=25.89,
            receipt_name="recibo.pdf",
            created_at=datetime(2024, 1, 10, tzinfo=timezone.utc),
        )
        stored = record.to_storage_dict()

        assert stored["receiptName"] == "recibo.pdf"
        assert stored["createdAt"].startswith("2024-01-10T00:00:00")
        assert "receipt" not in stored

    def test_reads_records_written_by_the_web_client(self):
        raw = (
            '[{"id":"1705276800000","name":"Ana","category":"Hospedagem",'
            '"amount":1200,"createdAt":"2024-01-15T00:00:00.000Z"}]'
        )
        records = TypeAdapter(list[Reimbursement]).validate_json(raw)

        assert records[0].amount == 1200.0
        assert records[0].created_at == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert records[0].receipt is None

    def test_paginated_response_rejects_negative_totals(self):
        with pytest.raises(ValidationError):
            PaginatedResponse(data=[], total=-1, pages=0)


class TestToastModels:
    """Tests for toast Pydantic models."""

    def test_toast_defaults(self):
        toast = Toast(id="1")

        assert toast.open is True
        assert toast.variant == ToastVariant.DEFAULT
        assert toast.title is None

    def test_toast_is_frozen(self):
        toast = Toast(id="1")

        with pytest.raises(ValidationError):
            toast.open = False

    def test_update_changes_only_set_fields(self):
        assert ToastUpdate(title="Novo").changes() == {"title": "Novo"}
        assert ToastUpdate(description=None).changes() == {"description": None}

    def test_actions_parse_by_type(self):
        action = TypeAdapter(ToastAction).validate_python({"type": "DISMISS_TOAST", "toast_id": "3"})

        assert isinstance(action, DismissToast)
        assert action.toast_id == "3"


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_service_defaults(self):
        settings = ServiceSettings()

        assert settings.list_delay_ms == 300
        assert settings.get_delay_ms == 200
        assert settings.create_delay_ms == 500
        assert settings.delete_delay_ms == 300
        assert settings.default_page_size == 6

    def test_notification_defaults(self):
        settings = NotificationSettings()

        assert settings.limit == 1
        assert settings.remove_delay_ms == 1_000_000
        assert settings.remove_delay_seconds == 1000.0

    def test_upload_defaults(self):
        settings = UploadSettings()

        assert settings.max_size_bytes == 5 * 1024 * 1024
        assert settings.accepted_types_list == ["image/jpeg", "image/png", "application/pdf"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("REIMBURSEMENT_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("TOAST_LIMIT", "3")

        assert StorageSettings().backend == "memory"
        assert NotificationSettings().limit == 3

    def test_rejects_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("REIMBURSEMENT_STORAGE_BACKEND", "redis")

        with pytest.raises(ValidationError):
            StorageSettings()

    def test_log_level_is_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError):
            AppSettings(log_level="loud")

    def test_validate_all_settings_reports_failures(self, monkeypatch):
        monkeypatch.setenv("REIMBURSEMENT_SERVICE_LIST_DELAY_MS", "-1")
        results = validate_all_settings()

        assert results["storage"] is True
        assert results["service"] is False
        assert "service_error" in results

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for structlog setup."""

    def test_configure_logging_sets_root_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("warning")
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)

    def test_get_logger_logs_events(self, caplog):
        caplog.set_level(logging.INFO)
        get_logger("reimbursements.test").info("event_logged", answer=42)

        assert "event_logged" in caplog.text
