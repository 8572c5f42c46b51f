from __future__ import annotations

from typing import Sequence


class AdapterFeaturesError(Exception):
    """Base exception for the adapterfeatures package."""


class InvalidFeatureMapError(AdapterFeaturesError, ValueError):
    """Raised when a raw adapter feature map does not match the expected shape."""


class InvalidConfigError(AdapterFeaturesError, ValueError):
    """Raised when a raw project configuration cannot be turned into a ProjectConfig."""


class FeatureNotSupportedError(AdapterFeaturesError):
    """Raised by callers that choose to abort when an adapter rejects configured features."""

    def __init__(self, adapter_name: str, features: Sequence[str]):
        self.adapter_name = str(adapter_name)
        self.features = tuple(features)
        super().__init__(
            f"Adapter '{self.adapter_name}' does not support the configured features: {', '.join(self.features)}."
        )
