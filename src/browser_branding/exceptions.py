"""
Exception hierarchy for the branding pipeline.

Every failure surfaces to the caller of ``BrandingPatch.apply``; nothing here
is retried.
"""

from pathlib import Path
from typing import List


class BrandingError(Exception):
    """Base exception for branding operations."""
    pass


class ConfigurationError(BrandingError):
    """Exception raised when the project configuration cannot be loaded."""
    pass


class PreconditionError(BrandingError):
    """Exception raised before any write when a brand's inputs are unusable."""
    pass


class ConfigNotFoundError(PreconditionError):
    """Exception raised when a brand directory or config entry doesn't exist."""
    pass


class MissingRequiredAssetError(PreconditionError):
    """Exception raised when a brand lacks one or more mandatory source files."""

    def __init__(self, missing: List[Path]):
        self.missing = list(missing)
        names = ", ".join(str(path) for path in self.missing)
        super().__init__(f"Missing some of the required files: {names}")


class EncodingError(BrandingError):
    """Exception raised when an image cannot be decoded, resized or encoded."""
    pass


class ConsistencyError(BrandingError):
    """Exception raised when the upstream branding tree is malformed."""
    pass
