"""Minimal API tests for CORS headers."""

from __future__ import annotations

import importlib

from fastapi.testclient import TestClient

import backend.api


def test_options_transactions_returns_cors_headers_for_ui_origin(monkeypatch) -> None:
    ui_origin = "https://transactions-dashboard.example.com"
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
    monkeypatch.setenv("UI_ORIGIN", ui_origin)

    api = importlib.reload(backend.api)
    client = TestClient(api.app)

    response = client.options(
        "/api/transactions",
        headers={
            "Origin": ui_origin,
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ui_origin


def test_get_transaction_stats_allows_any_origin_in_dev(monkeypatch) -> None:
    monkeypatch.setenv("APP_ENV", "dev")
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    api = importlib.reload(backend.api)

    class _Service:
        def price_range_stats(self, month):
            return []

    monkeypatch.setattr(api, "get_transaction_service", lambda: _Service())
    client = TestClient(api.app)

    response = client.get(
        "/api/transaction-stats",
        params={"month": "october"},
        headers={"Origin": "http://localhost:3000"},
    )

    assert response.status_code == 200
    assert response.json() == {"data": []}
    assert response.headers["access-control-allow-origin"] == "*"
