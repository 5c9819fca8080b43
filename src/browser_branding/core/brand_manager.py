"""
Brand management module for the branding pipeline.

Lists the brands available in a project and checks that a brand's source
directory holds every mandatory asset before anything is generated.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .content_types import BuildContext
from ..exceptions import ConfigNotFoundError, MissingRequiredAssetError, PreconditionError

logger = logging.getLogger(__name__)


LOGO_FILE = "logo.png"
INSTALLER_BACKGROUND_FILE = "MacOSInstaller.svg"

REQUIRED_FILES: Tuple[str, ...] = (LOGO_FILE, INSTALLER_BACKGROUND_FILE)


class BrandManager:
    """
    Manages the per-brand source directories of a project.

    Features:
    - Brand discovery from the branding config root
    - Required asset validation with every missing file reported at once
    """

    def __init__(self, context: BuildContext, required_files: Optional[Tuple[str, ...]] = None):
        """
        Initialize the BrandManager.

        Args:
            context: Build context giving the branding config root
            required_files: Source files every brand must provide.
                            Defaults to REQUIRED_FILES
        """
        self.context = context
        self.required_files = required_files or REQUIRED_FILES

    @property
    def brands_root(self) -> Path:
        return self.context.branding_dir

    def list_available_brands(self) -> List[str]:
        """
        List all brand source directories.

        Returns:
            Sorted brand names; empty when the branding root doesn't exist
        """
        if not self.brands_root.exists():
            return []

        return sorted(
            entry.name for entry in self.brands_root.iterdir() if entry.is_dir()
        )

    def validate_brand(self, brand_name: str) -> Path:
        """
        Check that a brand's source directory is complete.

        Args:
            brand_name: Name of the brand (directory name)

        Returns:
            Path to the validated source directory

        Raises:
            ConfigNotFoundError: If the brand directory doesn't exist
            MissingRequiredAssetError: If any required file is absent
            PreconditionError: If the brand's output tree is the upstream tree
        """
        if self.context.output_dir(brand_name).resolve() == self.context.upstream_dir.resolve():
            logger.error(f"Brand {brand_name} would replace the upstream branding tree")
            raise PreconditionError(
                f"Branding {brand_name} cannot be applied: its output is the upstream tree "
                f"{self.context.upstream_dir}"
            )

        brand_path = self.context.source_dir(brand_name)

        if not brand_path.is_dir():
            raise ConfigNotFoundError(f"Branding {brand_name} does not exist")

        missing = [
            brand_path / filename
            for filename in self.required_files
            if not (brand_path / filename).is_file()
        ]
        if missing:
            logger.error(f"Brand {brand_name} is missing {len(missing)} required file(s)")
            raise MissingRequiredAssetError(missing)

        logger.debug(f"Validated brand sources: {brand_path}")
        return brand_path
