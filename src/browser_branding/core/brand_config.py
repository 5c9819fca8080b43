"""
Brand configuration module for the branding pipeline.

Loads the project configuration store and resolves the layered, immutable
branding configuration that every later stage reads.
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from ..exceptions import ConfigurationError, ConfigNotFoundError

logger = logging.getLogger(__name__)


DEFAULT_BRANDING: Dict[str, str] = {
    "background_color": "#2B2A33",
    "brand_shorter_name": "Nightly",
    "brand_short_name": "Nightly",
    "brand_full_name": "Mozilla Nightly",
}


@dataclass(frozen=True)
class BrandingConfig:
    """Resolved branding values for one brand."""

    background_color: str
    brand_shorter_name: str
    brand_short_name: str
    brand_full_name: str
    branding_generic_name: str
    branding_vendor: str

    def as_template_vars(self) -> Dict[str, str]:
        """Placeholder name to value mapping used by text templates."""
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}


@dataclass
class ProjectConfig:
    """Project-wide configuration store."""

    name: str
    vendor: str
    brands: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    installer: Dict[str, str] = field(default_factory=dict)
    source_path: Optional[Path] = None


def load_project_config(config_path: Path) -> ProjectConfig:
    """
    Load the project configuration from a YAML file.

    Args:
        config_path: Path to ``project.yaml``

    Returns:
        ProjectConfig with the brand override table

    Raises:
        ConfigurationError: If the file is missing, malformed or lacks identity fields
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Project configuration not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in project config {config_path}: {e}")
        raise ConfigurationError(f"Invalid project configuration: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Empty project configuration: {config_path}")

    missing = [key for key in ("name", "vendor") if not raw_config.get(key)]
    if missing:
        raise ConfigurationError(
            f"Project configuration {config_path} is missing: {', '.join(missing)}"
        )

    brands = raw_config.get('brands') or {}
    if not isinstance(brands, dict):
        raise ConfigurationError("'brands' must be a mapping of brand name to overrides")

    return ProjectConfig(
        name=str(raw_config['name']),
        vendor=str(raw_config['vendor']),
        # A bare "acme:" entry parses as None; it means "no overrides".
        brands={name: dict(overrides or {}) for name, overrides in brands.items()},
        installer=dict(raw_config.get('installer') or {}),
        source_path=config_path
    )


def resolve_branding_config(project: ProjectConfig, brand_name: str) -> BrandingConfig:
    """
    Build the branding configuration for a brand.

    Layers, lowest precedence first: built-in defaults, project identity
    (generic name and vendor), then the brand's own overrides. Later layers
    replace same-named keys; values are not validated.

    Args:
        project: Loaded project configuration
        brand_name: Brand identifier

    Returns:
        Immutable BrandingConfig

    Raises:
        ConfigNotFoundError: If the project has no entry for the brand
    """
    if brand_name not in project.brands:
        raise ConfigNotFoundError(f"Branding {brand_name} has no entry in the project configuration")

    known = {f.name for f in fields(BrandingConfig)}
    overrides = project.brands[brand_name]

    unknown = sorted(set(overrides) - known)
    if unknown:
        logger.warning(f"Ignoring unknown branding keys for {brand_name}: {', '.join(unknown)}")

    merged: Dict[str, Any] = {}
    merged.update(DEFAULT_BRANDING)
    merged.update({
        "branding_generic_name": project.name,
        "branding_vendor": project.vendor,
    })
    merged.update({key: value for key, value in overrides.items() if key in known})

    logger.debug(f"Resolved branding config for {brand_name}")
    return BrandingConfig(**merged)
