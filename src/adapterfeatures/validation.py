"""Checks whether an adapter supports the features enabled by the project config.

A feature the config depends on but the adapter declares `unsupported` is
reported as an error and yields False in the result. A failed feature is
never raised: callers decide whether it aborts the build.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .diagnostics import Diagnostic, DiagnosticKind, FeatureLogger, StdlibFeatureLogger, emit_diagnostics
from .feature_map import resolve_feature_map
from .types import (
    AdapterFeatureMap,
    ImageService,
    OutputMode,
    ProjectConfig,
    ResolvedAssetsFeature,
    SupportKind,
    ValidationResult,
)


@dataclass(frozen=True)
class FeatureDecision:
    allowed: bool
    diagnostics: Tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class FeatureValidationReport:
    result: ValidationResult
    diagnostics: Tuple[Diagnostic, ...]


def decide_support_kind(
    support_kind: SupportKind,
    adapter_name: str,
    feature_name: str,
    is_activated: Callable[[], bool],
) -> FeatureDecision:
    support_kind = SupportKind(support_kind)
    if support_kind is SupportKind.STABLE:
        return FeatureDecision(allowed=True)

    diagnostics: Tuple[Diagnostic, ...] = ()
    if support_kind is SupportKind.DEPRECATED:
        diagnostics = (Diagnostic(DiagnosticKind.DEPRECATED, adapter_name, feature_name),)
    elif support_kind is SupportKind.EXPERIMENTAL:
        diagnostics = (Diagnostic(DiagnosticKind.EXPERIMENTAL, adapter_name, feature_name),)

    if is_activated() and support_kind is SupportKind.UNSUPPORTED:
        return FeatureDecision(
            allowed=False,
            diagnostics=diagnostics + (Diagnostic(DiagnosticKind.UNSUPPORTED, adapter_name, feature_name),),
        )
    return FeatureDecision(allowed=True, diagnostics=diagnostics)


def _incompatible_image_service(assets: ResolvedAssetsFeature, entrypoint: str) -> Optional[ImageService]:
    if entrypoint == ImageService.SHARP.value and not assets.is_sharp_compatible:
        return ImageService.SHARP
    if entrypoint == ImageService.SQUOOSH.value and not assets.is_squoosh_compatible:
        return ImageService.SQUOOSH
    return None


def decide_assets_feature(assets: ResolvedAssetsFeature, adapter_name: str, config: ProjectConfig) -> FeatureDecision:
    """Image service compatibility first, then the generic support-kind policy.

    An incompatible built-in image service fails the feature without looking
    at `support_kind`, so no deprecated/experimental warning is produced then.
    """
    service = _incompatible_image_service(assets, config.image.service.entrypoint)
    if service is not None:
        return FeatureDecision(
            allowed=False,
            diagnostics=(Diagnostic(DiagnosticKind.IMAGE_SERVICE_INCOMPATIBLE, adapter_name, "assets", service),),
        )
    # Assets have no on/off switch in the config: always treated as in use.
    return decide_support_kind(assets.support_kind, adapter_name, "assets", lambda: True)


def evaluate_supported_features(
    adapter_name: str,
    feature_map: Optional[AdapterFeatureMap],
    config: ProjectConfig,
) -> FeatureValidationReport:
    """Pure variant of `validate_supported_features`: returns the diagnostics instead of logging them."""
    features = resolve_feature_map(feature_map)

    static = decide_support_kind(
        features.static_output, adapter_name, "staticOutput", lambda: config.output == OutputMode.STATIC
    )
    hybrid = decide_support_kind(
        features.hybrid_output, adapter_name, "hybridOutput", lambda: config.output == OutputMode.HYBRID
    )
    server = decide_support_kind(
        features.server_output, adapter_name, "serverOutput", lambda: config.output == OutputMode.SERVER
    )
    assets = decide_assets_feature(features.assets, adapter_name, config)

    return FeatureValidationReport(
        result=ValidationResult(
            static_output=static.allowed,
            hybrid_output=hybrid.allowed,
            server_output=server.allowed,
            assets=assets.allowed,
        ),
        diagnostics=static.diagnostics + hybrid.diagnostics + server.diagnostics + assets.diagnostics,
    )


def validate_supported_features(
    adapter_name: str,
    feature_map: Optional[AdapterFeatureMap],
    config: ProjectConfig,
    logger: Optional[FeatureLogger] = None,
) -> ValidationResult:
    report = evaluate_supported_features(adapter_name, feature_map, config)
    emit_diagnostics(report.diagnostics, logger if logger is not None else StdlibFeatureLogger())
    return report.result
