from __future__ import annotations

from typing import cast

from django.conf import settings

from .base import ForecastProvider
from .smhi import SmhiProvider
from .types import ProviderName


def build_registry() -> dict[ProviderName, ForecastProvider]:
    """Instantiate supported providers."""

    providers: dict[ProviderName, ForecastProvider] = {
        "smhi": SmhiProvider(),
    }
    return providers


def default_provider_name() -> ProviderName:
    configured = getattr(settings, "FORECASTS_PROVIDER", "smhi")
    return cast(ProviderName, configured.lower())


def validate_provider(
    provider: str | None, registry: dict[ProviderName, ForecastProvider]
) -> ProviderName:
    name = (provider or default_provider_name()).lower()
    if name not in registry:
        raise ValueError(f"Unsupported forecast provider: {name}")
    return cast(ProviderName, name)
