"""
Branding patch orchestration.

Runs the per-brand pipeline: validate, resolve, recreate the output tree,
derive images, expand templates, merge upstream.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .brand_config import BrandingConfig, resolve_branding_config
from .brand_manager import BrandManager
from .content_types import BuildContext
from .image_deriver import ImageDeriver
from .template_engine import TemplateEngine
from .upstream_merger import UpstreamMerger
from ..utils import ensure_empty

logger = logging.getLogger(__name__)


class BrandingPatch:
    """
    Applies a brand to the engine checkout.

    Each stage reads what the previous one left on disk; a failing stage
    aborts the rest and leaves the output tree as it is. The next apply
    clears it.
    """

    def __init__(
        self,
        context: BuildContext,
        brand_manager: Optional[BrandManager] = None,
        template_engine: Optional[TemplateEngine] = None,
        image_deriver: Optional[ImageDeriver] = None,
        upstream_merger: Optional[UpstreamMerger] = None
    ):
        self.context = context
        self.brand_manager = brand_manager or BrandManager(context)
        self.template_engine = template_engine or TemplateEngine(context.template_dir)
        self.image_deriver = image_deriver or ImageDeriver(context, self.template_engine)
        self.upstream_merger = upstream_merger or UpstreamMerger(context, self.template_engine)

    def get(self) -> List[str]:
        """Brands available in the project."""
        return self.brand_manager.list_available_brands()

    def apply(self, brand_name: str) -> BrandingConfig:
        """
        Generate the complete branding tree for ``brand_name``.

        Args:
            brand_name: Brand identifier

        Returns:
            The BrandingConfig the tree was generated from

        Raises:
            PreconditionError: Before anything is written, for bad inputs
            EncodingError: If image generation fails
            ConsistencyError: If the upstream tree is malformed
        """
        source_dir = self.brand_manager.validate_brand(brand_name)
        brand_config = resolve_branding_config(self.context.project, brand_name)

        output_dir: Path = self.context.output_dir(brand_name)
        ensure_empty(output_dir)

        logger.info(f"Applying branding {brand_name} into {output_dir}")
        self.image_deriver.derive_images(source_dir, output_dir, brand_config)
        self.template_engine.expand_templates(output_dir, brand_config)
        self.upstream_merger.merge_upstream(output_dir, brand_config)
        logger.info(f"Branding {brand_name} applied")

        return brand_config
