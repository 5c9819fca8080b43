"""
Browser Branding

Generates a browser build's branding asset tree from a per-brand logo and the
engine's stock branding.

Main exports:
- BrandingPatch: Runs the whole pipeline for a brand
- BuildContext: Paths, platform and collaborators of a project checkout
- BrandManager: Brand discovery and source validation
- ImageDeriver: Icon and image generation
- TemplateEngine: Template expansion and rendering
- UpstreamMerger: Stock branding merge
"""

from .core import (
    BrandingConfig, BrandingPatch, BrandManager, BuildContext, ImageDeriver,
    ProjectConfig, TemplateEngine, UpstreamMerger, resolve_branding_config
)
from .exceptions import (
    BrandingError, ConfigurationError, PreconditionError, ConfigNotFoundError,
    MissingRequiredAssetError, EncodingError, ConsistencyError
)
from .services import ContentHashCache, LocalHashCache

__version__ = "1.0.0"

__all__ = [
    "BrandingConfig",
    "BrandingPatch",
    "BrandManager",
    "BuildContext",
    "ImageDeriver",
    "ProjectConfig",
    "TemplateEngine",
    "UpstreamMerger",
    "resolve_branding_config",
    "BrandingError",
    "ConfigurationError",
    "PreconditionError",
    "ConfigNotFoundError",
    "MissingRequiredAssetError",
    "EncodingError",
    "ConsistencyError",
    "ContentHashCache",
    "LocalHashCache"
]
