"""
Shared test configuration and fixtures for browser-branding.
"""

import logging
import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch

from PIL import Image

from browser_branding import BrandingPatch, BuildContext, TemplateEngine
from browser_branding.logging import LOGGER_NAME
from tests.utils.helpers import (
    cairo_available, create_test_brand, create_upstream_tree, write_project_config
)


SAMPLE_PROJECT = {
    "name": "Acme",
    "vendor": "Acme Corp",
    "brands": {
        "acme": {
            "background_color": "#112233",
            "brand_full_name": "Acme Browser",
        },
        "plain": None,
    },
}


def _rasterize_with_pil(svg_path: Path, destination: Path) -> Path:
    # Same dimensions as tests.utils.helpers.INSTALLER_SVG
    Image.new("RGBA", (200, 100), (17, 34, 51, 255)).save(destination, format="PNG")
    return destination


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def project_root(temp_dir):
    """Create a project checkout with one complete brand and a stock tree."""
    root = temp_dir / "project"
    root.mkdir()

    write_project_config(root, SAMPLE_PROJECT)
    create_test_brand(root / "configs" / "branding", "acme")
    create_upstream_tree(root / "engine" / "browser" / "branding" / "unofficial")

    return root


@pytest.fixture
def context(project_root):
    """Build context for a Linux target."""
    return BuildContext.from_root(project_root, platform="linux")


@pytest.fixture
def macos_context(project_root):
    """Build context for a macOS target."""
    return BuildContext.from_root(project_root, platform="darwin")


@pytest.fixture
def template_engine(context):
    return TemplateEngine(context.template_dir)


@pytest.fixture
def svg_rasterizer():
    """Use CairoSVG when the native library is present, a Pillow stand-in otherwise."""
    if cairo_available():
        yield None
    else:
        with patch("browser_branding.core.image_deriver.rasterize_svg", side_effect=_rasterize_with_pil) as mock:
            yield mock


@pytest.fixture
def branding_patch(context, svg_rasterizer):
    return BrandingPatch(context)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo any setup_logging() call made by a test."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
