"""adapterfeatures: check project configuration against adapter feature declarations.

The core is pure and I/O free: it resolves what an adapter declares, decides
per feature whether the configuration is allowed, and reports warnings and
errors through a logger collaborator.
"""

from .feature_checker import AdapterFeatureChecker
from .feature_map import parse_feature_map, parse_project_config, resolve_feature_map
from .types import AdapterFeatureMap, AssetsFeature, ImageService, OutputMode, ProjectConfig, SupportKind, ValidationResult
from .validation import evaluate_supported_features, validate_supported_features

__version__ = "0.1.0"

__all__ = [
    "AdapterFeatureChecker",
    "AdapterFeatureMap",
    "AssetsFeature",
    "ImageService",
    "OutputMode",
    "ProjectConfig",
    "SupportKind",
    "ValidationResult",
    "evaluate_supported_features",
    "parse_feature_map",
    "parse_project_config",
    "resolve_feature_map",
    "validate_supported_features",
    "__version__",
]
