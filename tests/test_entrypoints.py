from __future__ import annotations

# ruff: noqa: S101
import importlib
import sys

import pytest

import manage


def test_manage_main_invokes_execute_from_command_line(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    called = {}

    def _fake_execute(argv: list[str]) -> None:
        called["argv"] = argv

    monkeypatch.setattr(
        "django.core.management.execute_from_command_line",
        _fake_execute,
    )
    monkeypatch.setattr(sys, "argv", ["manage.py", "check"])

    manage.main()

    assert called["argv"] == ["manage.py", "check"]


def test_asgi_application_importable() -> None:
    module = importlib.import_module("config.asgi")
    module = importlib.reload(module)
    assert module.application is not None


def test_wsgi_application_importable() -> None:
    module = importlib.import_module("config.wsgi")
    module = importlib.reload(module)
    assert module.application is not None


def test_forecast_urls_are_routed() -> None:
    from django.urls import reverse

    assert reverse("forecasts-point") == "/api/v1/forecasts/point/"
    assert (
        reverse("forecasts-approved-time")
        == "/api/v1/forecasts/approved-time/"
    )
    assert reverse("forecasts-parameters") == "/api/v1/forecasts/parameters/"
