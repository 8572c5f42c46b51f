from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from .errors import InvalidConfigError, InvalidFeatureMapError
from .types import (
    AdapterFeatureMap,
    AssetsFeature,
    FEATURE_KEYS,
    ImageConfig,
    ImageServiceConfig,
    OutputMode,
    ProjectConfig,
    ResolvedAssetsFeature,
    ResolvedFeatureMap,
    SupportKind,
)

UNSUPPORTED_ASSETS_FEATURE = ResolvedAssetsFeature(
    support_kind=SupportKind.UNSUPPORTED,
    is_sharp_compatible=False,
    is_squoosh_compatible=False,
)

_OUTPUT_FEATURES = tuple(key for key in FEATURE_KEYS if key != "assets")
_SUPPORT_KINDS = tuple(k.value for k in SupportKind)


def _resolve_assets(assets: Optional[AssetsFeature]) -> ResolvedAssetsFeature:
    if assets is None:
        return UNSUPPORTED_ASSETS_FEATURE
    return ResolvedAssetsFeature(
        support_kind=assets.support_kind or SupportKind.UNSUPPORTED,
        is_sharp_compatible=bool(assets.is_sharp_compatible),
        is_squoosh_compatible=bool(assets.is_squoosh_compatible),
    )


def resolve_feature_map(feature_map: Optional[AdapterFeatureMap]) -> ResolvedFeatureMap:
    """Fill every undeclared feature with its fail-closed default."""
    fm = feature_map or AdapterFeatureMap()
    return ResolvedFeatureMap(
        static_output=fm.static_output or SupportKind.UNSUPPORTED,
        hybrid_output=fm.hybrid_output or SupportKind.UNSUPPORTED,
        server_output=fm.server_output or SupportKind.UNSUPPORTED,
        assets=_resolve_assets(fm.assets),
    )


_PathPart = Union[str, int]


def _fmt_path(parts: Sequence[_PathPart]) -> str:
    out: List[str] = []
    for p in parts:
        if isinstance(p, int):
            out.append(f"[{p}]")
        elif not out:
            out.append(str(p))
        else:
            out.append(f"[{p!r}]")
    return "".join(out) if out else "<root>"


def validate_feature_map_json(data: Any) -> None:
    """Validate a feature map as adapters declare it in JSON.

    Soft schema: known keys must be well-typed, unknown keys are allowed.
    """

    def _err(path: Sequence[_PathPart], msg: str) -> None:
        raise InvalidFeatureMapError(f"Invalid feature map at {_fmt_path(path)}: {msg}")

    def _expect_kind(value: Any, path: Sequence[_PathPart]) -> None:
        if value not in _SUPPORT_KINDS:
            _err(path, f"expected one of {', '.join(_SUPPORT_KINDS)} (got {value!r})")

    if not isinstance(data, dict):
        raise InvalidFeatureMapError("Invalid feature map: top-level JSON must be an object.")

    for key in _OUTPUT_FEATURES:
        if data.get(key) is not None:
            _expect_kind(data[key], [key])

    assets = data.get("assets")
    if assets is None:
        return
    if not isinstance(assets, dict):
        _err(["assets"], "expected object")
    if assets.get("supportKind") is not None:
        _expect_kind(assets["supportKind"], ["assets", "supportKind"])
    for flag in ("isSharpCompatible", "isSquooshCompatible"):
        value = assets.get(flag)
        if value is not None and not isinstance(value, bool):
            _err(["assets", flag], "expected boolean")


def _kind(value: Any) -> Optional[SupportKind]:
    return SupportKind(value) if value is not None else None


def parse_feature_map(data: Any) -> AdapterFeatureMap:
    """Build an `AdapterFeatureMap` from its JSON form (camelCase keys)."""
    validate_feature_map_json(data)

    assets_raw = data.get("assets")
    assets: Optional[AssetsFeature] = None
    if isinstance(assets_raw, dict):
        assets = AssetsFeature(
            support_kind=_kind(assets_raw.get("supportKind")),
            is_sharp_compatible=assets_raw.get("isSharpCompatible"),
            is_squoosh_compatible=assets_raw.get("isSquooshCompatible"),
        )

    return AdapterFeatureMap(
        static_output=_kind(data.get("staticOutput")),
        hybrid_output=_kind(data.get("hybridOutput")),
        server_output=_kind(data.get("serverOutput")),
        assets=assets,
    )


def parse_project_config(data: Optional[Mapping[str, Any]]) -> ProjectConfig:
    """Build a `ProjectConfig` from `{"output": ..., "image": {"service": {"entrypoint": ...}}}`."""
    if data is None:
        return ProjectConfig()
    if not isinstance(data, Mapping):
        raise InvalidConfigError("Invalid config: top-level JSON must be an object.")

    output_raw = data.get("output", OutputMode.STATIC.value)
    try:
        output = OutputMode(output_raw)
    except ValueError as e:
        allowed = ", ".join(m.value for m in OutputMode)
        raise InvalidConfigError(f"Invalid config at output: expected one of {allowed} (got {output_raw!r})") from e

    image_raw = data.get("image")
    if image_raw is None:
        image_raw = {}
    if not isinstance(image_raw, Mapping):
        raise InvalidConfigError("Invalid config at image: expected object")
    service_raw = image_raw.get("service")
    if service_raw is None:
        service_raw = {}
    if not isinstance(service_raw, Mapping):
        raise InvalidConfigError("Invalid config at image['service']: expected object")
    entrypoint = service_raw.get("entrypoint")
    if entrypoint is not None and (not isinstance(entrypoint, str) or not entrypoint.strip()):
        raise InvalidConfigError("Invalid config at image['service']['entrypoint']: expected non-empty string")

    service = ImageServiceConfig(entrypoint=entrypoint) if entrypoint else ImageServiceConfig()
    return ProjectConfig(output=output, image=ImageConfig(service=service))
