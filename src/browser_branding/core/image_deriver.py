"""
Image derivation module for the branding pipeline.

Turns a brand's master logo into the platform icon matrix, packages Windows
and macOS icon containers, and renders the auxiliary content images.
"""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Tuple

from PIL import Image

from .brand_config import BrandingConfig
from .brand_manager import LOGO_FILE, INSTALLER_BACKGROUND_FILE
from .content_types import BuildContext
from .template_engine import TemplateEngine
from ..exceptions import EncodingError
from ..logging import timed_operation

logger = logging.getLogger(__name__)


# 512 is not shipped by the browser but the icon containers are built from it
DERIVED_SIZES: Tuple[int, ...] = (16, 22, 24, 32, 48, 64, 128, 256, 512)

MACOS_ICON_SIZES: Tuple[int, ...] = (16, 32, 64, 128, 256, 512)

ICO_SIZES: List[Tuple[int, int]] = [
    (16, 16), (24, 24), (32, 32), (48, 48), (64, 64), (128, 128), (256, 256)
]

# Apple iconset member name -> pixel size
ICONSET_ENTRIES: Dict[str, int] = {
    "icon_16x16.png": 16,
    "icon_16x16@2x.png": 32,
    "icon_32x32.png": 32,
    "icon_32x32@2x.png": 64,
    "icon_128x128.png": 128,
    "icon_128x128@2x.png": 256,
    "icon_256x256.png": 256,
    "icon_256x256@2x.png": 512,
    "icon_512x512.png": 512,
}

ICONSET_SCRATCH_DIR = "macos_icon_info.iconset"

WINDOWS_ICON = "firefox.ico"
WINDOWS_SMALL_ICON = "firefox64.ico"
MACOS_ICON = "firefox.icns"

CONTENT_DIR = "content"
ABOUT_LOGOS: Dict[str, int] = {
    "about-logo.png": 512,
    "about-logo@2x.png": 1024,
}
WORDMARK_FILE = "firefox-wordmark.svg"
WORDMARK_TEMPLATE = "wordmark.svg"
WORDMARK_FONT_FAMILY = "Futura"
WORDMARK_FONT_SIZE = 80
BACKGROUND_FILE = "background.png"

# DecompressionBombError derives from Exception only
IMAGE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


def resize_square(source: Path, destination: Path, size: int) -> Path:
    """
    Resize ``source`` to a ``size`` x ``size`` RGBA PNG.

    Raises:
        EncodingError: If the image can't be decoded, resized or written
    """
    try:
        with Image.open(source) as img:
            resized = img.convert("RGBA").resize((size, size), Image.Resampling.LANCZOS)
            resized.save(destination, format="PNG")
    except IMAGE_ERRORS as e:
        logger.error(f"Failed to resize {source} to {size}px: {e}")
        raise EncodingError(f"Could not resize {source.name} to {size}x{size}: {e}") from e
    return destination


def write_ico(source: Path, destination: Path) -> Path:
    """Package ``source`` as a multi-resolution Windows icon."""
    try:
        with Image.open(source) as img:
            sizes = [s for s in ICO_SIZES if s[0] <= img.width and s[1] <= img.height]
            img.save(destination, format="ICO", sizes=sizes or [img.size])
    except IMAGE_ERRORS as e:
        logger.error(f"Failed to write icon {destination}: {e}")
        raise EncodingError(f"Could not build {destination.name} from {source.name}: {e}") from e
    return destination


def rasterize_svg(svg_path: Path, destination: Path) -> Path:
    """
    Render an SVG document to PNG at its native resolution.

    Raises:
        EncodingError: If the document can't be parsed or rendered
    """
    try:
        # cairosvg loads the native cairo library on import
        import cairosvg
    except (ImportError, OSError) as e:
        logger.error(f"CairoSVG is unavailable: {e}")
        raise EncodingError(f"Could not render {svg_path.name}: CairoSVG is unavailable ({e})") from e

    try:
        cairosvg.svg2png(url=str(svg_path), write_to=str(destination))
    except Exception as e:
        logger.error(f"Failed to rasterize {svg_path}: {e}")
        raise EncodingError(f"Could not render {svg_path.name}: {e}") from e
    return destination


class ImageDeriver:
    """
    Derives every image asset of a brand from its source directory.

    Features:
    - Fixed square size matrix resized concurrently
    - Windows .ico and macOS .icns packaging
    - About-dialog logos, wordmark and installer background
    - Content hash registration of the consumed sources
    """

    def __init__(self, context: BuildContext, template_engine: TemplateEngine):
        """
        Initialize the ImageDeriver.

        Args:
            context: Build context (platform, scratch dir, hash cache, pool size)
            template_engine: Renders the wordmark SVG
        """
        self.context = context
        self.template_engine = template_engine

    @timed_operation("derive_images")
    def derive_images(self, source_dir: Path, output_dir: Path, brand_config: BrandingConfig) -> None:
        """
        Generate all derived images for one brand.

        Args:
            source_dir: Brand source directory containing logo.png
            output_dir: Brand output tree
            brand_config: Resolved branding values

        Raises:
            EncodingError: If any image step fails
        """
        source_dir = Path(source_dir)
        output_dir = Path(output_dir)
        logo = source_dir / LOGO_FILE

        logger.debug("Generating icons")
        self._derive_sizes(logo, source_dir, output_dir)

        logger.debug("Generating Windows icons")
        write_ico(source_dir / "logo512.png", output_dir / WINDOWS_ICON)
        write_ico(source_dir / "logo64.png", output_dir / WINDOWS_SMALL_ICON)

        if self.context.is_macos:
            logger.debug("Generating macOS icons")
            self._write_icns(source_dir, output_dir / MACOS_ICON)

        content_dir = output_dir / CONTENT_DIR
        content_dir.mkdir(parents=True, exist_ok=True)

        for filename, size in ABOUT_LOGOS.items():
            resize_square(logo, content_dir / filename, size)

        self._write_wordmark(content_dir / WORDMARK_FILE, brand_config)

        self.context.hash_cache.register(logo)

        logger.debug("Generating macOS installer background")
        background = source_dir / INSTALLER_BACKGROUND_FILE
        rasterize_svg(background, content_dir / BACKGROUND_FILE)
        self.context.hash_cache.register(background)

    def _derive_sizes(self, logo: Path, source_dir: Path, output_dir: Path) -> None:
        """Resize every matrix size in parallel and wait for all of them."""
        with ThreadPoolExecutor(max_workers=self.context.max_workers) as executor:
            futures = {
                executor.submit(self._derive_size, logo, source_dir, output_dir, size): size
                for size in DERIVED_SIZES
            }
            for future in as_completed(futures):
                # Re-raises the worker's EncodingError
                future.result()

    def _derive_size(self, logo: Path, source_dir: Path, output_dir: Path, size: int) -> None:
        derived = resize_square(logo, output_dir / f"default{size}.png", size)
        shutil.copyfile(derived, source_dir / f"logo{size}.png")

    def _write_icns(self, source_dir: Path, destination: Path) -> Path:
        """
        Lay out an Apple iconset in the scratch directory and package it.

        A scratch iconset left by an aborted run is removed first.
        """
        iconset = self.context.tmp_dir / ICONSET_SCRATCH_DIR
        if iconset.exists():
            shutil.rmtree(iconset)
        iconset.mkdir(parents=True)

        for member, size in ICONSET_ENTRIES.items():
            shutil.copyfile(source_dir / f"logo{size}.png", iconset / member)

        # One image per pixel size; @2x members duplicate the next size up
        members = {}
        for member, size in ICONSET_ENTRIES.items():
            members.setdefault(size, member)

        images = []
        try:
            for size in MACOS_ICON_SIZES:
                with Image.open(iconset / members[size]) as img:
                    images.append(img.convert("RGBA"))
            largest = images[-1]
            largest.save(destination, format="ICNS", append_images=images[:-1])
        except IMAGE_ERRORS as e:
            logger.error(f"Failed to write macOS icon {destination}: {e}")
            raise EncodingError(f"Could not build {destination.name}: {e}") from e

        return destination

    def _write_wordmark(self, destination: Path, brand_config: BrandingConfig) -> Path:
        text = brand_config.brand_shorter_name
        svg = self.template_engine.render(WORDMARK_TEMPLATE, {
            "text": text,
            "font_family": WORDMARK_FONT_FAMILY,
            "font_size": WORDMARK_FONT_SIZE,
            # Rough advance width; the browser scales the wordmark anyway
            "width": max(1, round(len(text) * WORDMARK_FONT_SIZE * 0.6)),
            "height": round(WORDMARK_FONT_SIZE * 1.25),
        })
        destination.write_text(svg, encoding='utf-8')
        return destination
