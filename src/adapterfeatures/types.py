from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class SupportKind(str, Enum):
    """Declared support level of an adapter feature."""

    STABLE = "stable"
    DEPRECATED = "deprecated"
    EXPERIMENTAL = "experimental"
    UNSUPPORTED = "unsupported"


class OutputMode(str, Enum):
    STATIC = "static"
    HYBRID = "hybrid"
    SERVER = "server"


class ImageService(str, Enum):
    """Built-in image services an adapter may or may not be compatible with."""

    SHARP = "astro/assets/services/sharp"
    SQUOOSH = "astro/assets/services/squoosh"

    @property
    def display_name(self) -> str:
        return "Sharp" if self is ImageService.SHARP else "Squoosh"


@dataclass(frozen=True)
class AssetsFeature:
    """Assets support as declared by an adapter (any field may be left out)."""

    support_kind: Optional[SupportKind] = None
    is_sharp_compatible: Optional[bool] = None
    is_squoosh_compatible: Optional[bool] = None


@dataclass(frozen=True)
class AdapterFeatureMap:
    """Feature declarations of an adapter. `None` means "not declared"."""

    static_output: Optional[SupportKind] = None
    hybrid_output: Optional[SupportKind] = None
    server_output: Optional[SupportKind] = None
    assets: Optional[AssetsFeature] = None


@dataclass(frozen=True)
class ResolvedAssetsFeature:
    support_kind: SupportKind
    is_sharp_compatible: bool
    is_squoosh_compatible: bool


@dataclass(frozen=True)
class ResolvedFeatureMap:
    """Fully populated feature map; produced by `resolve_feature_map`."""

    static_output: SupportKind
    hybrid_output: SupportKind
    server_output: SupportKind
    assets: ResolvedAssetsFeature


@dataclass(frozen=True)
class ImageServiceConfig:
    entrypoint: str = ImageService.SHARP.value


@dataclass(frozen=True)
class ImageConfig:
    service: ImageServiceConfig = field(default_factory=ImageServiceConfig)


@dataclass(frozen=True)
class ProjectConfig:
    """The slice of the project configuration that feature validation reads."""

    output: OutputMode = OutputMode.STATIC
    image: ImageConfig = field(default_factory=ImageConfig)


# Feature keys as adapters spell them, paired with the dataclass attribute.
FEATURE_KEYS: Dict[str, str] = {
    "staticOutput": "static_output",
    "hybridOutput": "hybrid_output",
    "serverOutput": "server_output",
    "assets": "assets",
}


@dataclass(frozen=True)
class ValidationResult:
    """Per-feature outcome: True when unused or allowed, False when used but rejected."""

    static_output: bool
    hybrid_output: bool
    server_output: bool
    assets: bool

    def as_dict(self) -> Dict[str, bool]:
        return {key: bool(getattr(self, attr)) for key, attr in FEATURE_KEYS.items()}

    def failed_features(self) -> List[str]:
        return [key for key, ok in self.as_dict().items() if not ok]

    @property
    def ok(self) -> bool:
        return not self.failed_features()
