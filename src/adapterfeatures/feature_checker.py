from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .diagnostics import FeatureLogger
from .errors import FeatureNotSupportedError
from .types import AdapterFeatureMap, ProjectConfig, ValidationResult
from .validation import validate_supported_features


@dataclass
class AdapterFeatureChecker:
    """Binds an adapter's declared features to the logger that reports on them.

    Intentionally thin: `validate` only reports, `require_supported` is for
    callers that want a failed feature to stop the build.
    """

    adapter_name: str
    features: Optional[AdapterFeatureMap] = None
    logger: Optional[FeatureLogger] = None

    def validate(self, config: ProjectConfig) -> ValidationResult:
        return validate_supported_features(self.adapter_name, self.features, config, self.logger)

    def require_supported(self, config: ProjectConfig) -> ValidationResult:
        result = self.validate(config)
        failed = result.failed_features()
        if failed:
            raise FeatureNotSupportedError(self.adapter_name, failed)
        return result
