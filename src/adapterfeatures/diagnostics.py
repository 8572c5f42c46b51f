"""Diagnostic intents and their rendering to a logger.

Validation code never talks to a logger directly: it returns `Diagnostic`
values, and `emit_diagnostics` turns them into `warn`/`error` calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Protocol

from .types import ImageService

CONFIG_SCOPE = "config"


class DiagnosticKind(str, Enum):
    UNSUPPORTED = "unsupported"
    EXPERIMENTAL = "experimental"
    DEPRECATED = "deprecated"
    IMAGE_SERVICE_INCOMPATIBLE = "image_service_incompatible"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    adapter_name: str
    feature_name: Optional[str] = None
    image_service: Optional[ImageService] = None

    def __post_init__(self) -> None:
        if self.kind is DiagnosticKind.IMAGE_SERVICE_INCOMPATIBLE and self.image_service is None:
            raise ValueError("An image service incompatibility diagnostic needs the image service.")

    @property
    def level(self) -> str:
        return "error" if self.kind is DiagnosticKind.UNSUPPORTED else "warn"

    @property
    def scope(self) -> Optional[str]:
        if self.kind is DiagnosticKind.IMAGE_SERVICE_INCOMPATIBLE:
            return None
        return CONFIG_SCOPE

    @property
    def message(self) -> str:
        if self.kind is DiagnosticKind.UNSUPPORTED:
            return f"The feature {self.feature_name} is not supported (used by {self.adapter_name})."
        if self.kind is DiagnosticKind.EXPERIMENTAL:
            return f"The feature is experimental and subject to change (used by {self.adapter_name})."
        if self.kind is DiagnosticKind.DEPRECATED:
            return f"The feature is deprecated and will be removed in the future (used by {self.adapter_name})."
        return (
            f"The currently selected adapter `{self.adapter_name}` is not compatible "
            f'with the image service "{self.image_service.display_name}".'
        )


class FeatureLogger(Protocol):
    """Logger collaborator: a free-form scope tag (or None) plus the message."""

    def warn(self, scope: Optional[str], message: str) -> None: ...

    def error(self, scope: Optional[str], message: str) -> None: ...


class StdlibFeatureLogger:
    """`FeatureLogger` backed by the standard `logging` module.

    A scope becomes a child logger, so `config` diagnostics are emitted on
    `adapterfeatures.config` and unscoped ones on `adapterfeatures`.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("adapterfeatures")

    def _scoped(self, scope: Optional[str]) -> logging.Logger:
        return self._logger.getChild(scope) if scope else self._logger

    def warn(self, scope: Optional[str], message: str) -> None:
        self._scoped(scope).warning(message)

    def error(self, scope: Optional[str], message: str) -> None:
        self._scoped(scope).error(message)


def emit_diagnostics(diagnostics: Iterable[Diagnostic], logger: FeatureLogger) -> None:
    for d in diagnostics:
        if d.level == "error":
            logger.error(d.scope, d.message)
        else:
            logger.warn(d.scope, d.message)
