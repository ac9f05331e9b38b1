import logging

from fastapi.testclient import TestClient
import pytest

from tests.integration.api_fixtures import build_test_app

LISTED = "https://godrejarden.in"
UNLISTED = "https://unknown.example"


@pytest.mark.integration
def test_strict_mode_answers_listed_origins_only() -> None:
    app, _ = build_test_app(cors_mode="strict", cors_allowed_origins=(LISTED,))

    with TestClient(app) as client:
        listed = client.get("/health", headers={"Origin": LISTED})
        unlisted = client.get("/health", headers={"Origin": UNLISTED})
        preflight = client.options(
            "/api/submit-form",
            headers={"Origin": UNLISTED, "Access-Control-Request-Method": "POST"},
        )

    assert listed.headers["access-control-allow-origin"] == LISTED
    assert listed.headers["access-control-allow-credentials"] == "true"
    assert "access-control-allow-origin" not in unlisted.headers
    assert preflight.status_code == 400


@pytest.mark.integration
def test_strict_mode_preflight_for_listed_origin() -> None:
    app, _ = build_test_app(cors_mode="strict", cors_allowed_origins=(LISTED,))

    with TestClient(app) as client:
        preflight = client.options(
            "/api/submit-form",
            headers={
                "Origin": LISTED,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

    assert preflight.status_code == 200
    assert preflight.headers["access-control-allow-origin"] == LISTED


@pytest.mark.integration
def test_permissive_mode_allows_and_logs_unlisted_origins(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="lead_intake.cors")
    app, _ = build_test_app(cors_mode="permissive", cors_allowed_origins=(LISTED,))

    with TestClient(app) as client:
        listed = client.get("/health", headers={"Origin": LISTED})
        unlisted = client.get("/health", headers={"Origin": UNLISTED})

    assert listed.headers["access-control-allow-origin"] == LISTED
    assert unlisted.headers["access-control-allow-origin"] == UNLISTED
    warnings = [record for record in caplog.records if record.getMessage() == "cors origin not in allowlist"]
    assert [record.origin for record in warnings] == [UNLISTED]
