"""Unit tests for the structured logging setup."""

import json
import logging

import pytest

from entity_metadata.schema import Column, ColumnType, Entity, EntityRegistry, table
from entity_metadata.utils.logging import bind_context, get_logger, sanitize_for_logging


def _json_records(caplog: pytest.LogCaptureFixture):
    records = []
    for record in caplog.records:
        try:
            records.append(json.loads(record.getMessage()))
        except ValueError:
            continue
    return records


@pytest.mark.unit
def test_get_logger_returns_bound_logger() -> None:
    logger = get_logger("test_module")

    assert hasattr(logger, "bind")
    assert hasattr(logger, "info")


@pytest.mark.unit
def test_get_logger_name_preserved(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    get_logger("my_test_logger").info("test_event")

    events = [r for r in _json_records(caplog) if r.get("event") == "test_event"]
    assert events and events[-1]["logger"] == "my_test_logger"
    assert "timestamp" in events[-1]


@pytest.mark.unit
def test_sensitive_fields_redacted_in_output(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    get_logger("auth").info("login_attempt", username="alice", password="hunter2")

    (event,) = [r for r in _json_records(caplog) if r.get("event") == "login_attempt"]
    assert event["username"] == "alice"
    assert event["password"] == "[REDACTED]"


@pytest.mark.unit
def test_sanitize_for_logging_handles_nested_dicts() -> None:
    data = {"user": "admin", "auth": {"password": "secret123", "api_key": "k"}}
    sanitized = sanitize_for_logging(data)

    assert sanitized["user"] == "admin"
    assert sanitized["auth"]["password"] == "[REDACTED]"
    assert sanitized["auth"]["api_key"] == "[REDACTED]"


@pytest.mark.unit
def test_bind_context(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    bind_context(phase="bootstrap").info("bound_event")

    (event,) = [r for r in _json_records(caplog) if r.get("event") == "bound_event"]
    assert event["phase"] == "bootstrap"


@pytest.mark.unit
def test_registration_is_logged(caplog: pytest.LogCaptureFixture, store) -> None:
    caplog.set_level(logging.INFO)

    @table("audit_entries", store=store)
    class AuditEntry(Entity):
        id = Column("id", ColumnType.NUMBER, primary=True, store=store)

    EntityRegistry(store).register(AuditEntry)

    (event,) = [r for r in _json_records(caplog) if r.get("event") == "entity_registered"]
    assert event["table_name"] == "audit_entries"
    assert event["columns"] == ["id"]
