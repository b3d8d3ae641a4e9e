"""Tests for the error hierarchy — codes, statuses and REST envelope."""

from storefront.core.errors import (
    ErrorCategory, ErrorContext, ExportError, OrderValidationError,
    PersistenceError, UpstreamFetchError,
)


def test_validation_error_is_400():
    err = OrderValidationError("bad", "cliente_email")
    assert err.http_status == 400
    assert err.code == "VALIDATION_ERROR"
    assert err.category == ErrorCategory.VALIDATION


def test_infrastructure_error_codes():
    assert PersistenceError("x", "commit").http_status == 503
    assert ExportError("x", "/tmp/o.csv").code == "EXPORT_ERROR"
    upstream = UpstreamFetchError("HTTP 500", "https://x/1", 500)
    assert upstream.status_code == 500
    assert upstream.context.url == "https://x/1"


def test_to_response_envelope():
    err = PersistenceError(
        "Integrity constraint violated", "commit",
        context=ErrorContext(order_group_id=7),
    )
    body = err.to_response()["error"]
    assert body["code"] == "PERSISTENCE_ERROR"
    assert body["message"] == "Database commit failed: Integrity constraint violated"
    assert body["category"] == "database"
    assert body["severity"] == "critical"
    assert body["context"]["order_group_id"] == 7
    assert "timestamp" in body


def test_details_name_what_the_client_can_act_on():
    assert OrderValidationError("bad", "quantities.25").to_response()["error"]["details"] == {
        "field": "quantities.25",
    }
    upstream = UpstreamFetchError("HTTP 404", "https://x/1", 404)
    assert upstream.details == {"url": "https://x/1", "upstream_status": 404}
    assert PersistenceError("x", "commit").details["rolled_back"] is True


def test_export_error_message_omits_the_file_path():
    err = ExportError("Permission denied", "/srv/exports/ordenes.csv")
    assert "/srv/exports" not in err.to_response()["error"]["message"]
    assert "details" not in err.to_response()["error"]
    assert err.path == "/srv/exports/ordenes.csv"
