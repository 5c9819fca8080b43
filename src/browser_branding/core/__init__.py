"""
Core branding pipeline modules.

Contains the main business logic for:
- Brand configuration resolution
- Brand source validation
- Image derivation
- Template expansion
- Upstream merging
"""

from .brand_config import BrandingConfig, ProjectConfig, load_project_config, resolve_branding_config
from .brand_manager import BrandManager
from .branding_patch import BrandingPatch
from .content_types import BuildContext
from .image_deriver import ImageDeriver
from .template_engine import TemplateEngine
from .upstream_merger import FileClass, UpstreamMerger, classify, patch_stylesheet

__all__ = [
    "BrandingConfig",
    "ProjectConfig",
    "load_project_config",
    "resolve_branding_config",
    "BrandManager",
    "BrandingPatch",
    "BuildContext",
    "ImageDeriver",
    "TemplateEngine",
    "FileClass",
    "UpstreamMerger",
    "classify",
    "patch_stylesheet"
]
