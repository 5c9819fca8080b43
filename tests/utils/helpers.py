"""
Test helper utilities for browser-branding.
"""

from pathlib import Path
from typing import Dict, Any, Optional, Iterable

import yaml
from PIL import Image, ImageDraw


INSTALLER_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 200 100">
    <rect width="200" height="100" fill="#112233"/>
    <circle cx="100" cy="50" r="30" fill="#F59E0B"/>
</svg>"""

UPSTREAM_NSIS = """# Stock branding defines
!define BrandFullName "Nightly"
"""

UPSTREAM_CSS = """#aboutDialogContainer {
  background: #130829;
}

.overlay {
  background-color: hsla(235, 43%, 10%, .5);
}
"""

UPSTREAM_FILES: Dict[str, bytes] = {
    "branding.nsi": UPSTREAM_NSIS.encode("utf-8"),
    "content/aboutDialog.css": UPSTREAM_CSS.encode("utf-8"),
    "pref/firefox-branding.js": b'pref("startup.homepage_welcome_url", "");\n',
    "moz.build": b'DIRS += ["content", "locales"]\n',
    "locales/en-US/brand.ftl": b"-brand-short-name = Stock\n",
    "default16.png": b"not really a png",
}


def create_logo(path: Path, size: int = 600) -> Path:
    """Draw a deterministic square RGBA logo."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    margin = size // 8
    draw.ellipse((margin, margin, size - margin, size - margin), fill=(30, 58, 138, 255))
    draw.rectangle((size // 3, size // 3, 2 * size // 3, 2 * size // 3), fill=(245, 158, 11, 255))
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path, format="PNG")
    return path


def create_test_brand(
    branding_dir: Path,
    brand_name: str,
    include: Iterable[str] = ("logo.png", "MacOSInstaller.svg")
) -> Path:
    """
    Create a brand source directory.

    Args:
        branding_dir: ``configs/branding`` of the test project
        brand_name: Name of the brand to create
        include: Which source files to write

    Returns:
        Path to created brand directory
    """
    brand_dir = branding_dir / brand_name
    brand_dir.mkdir(parents=True, exist_ok=True)

    if "logo.png" in include:
        create_logo(brand_dir / "logo.png")
    if "MacOSInstaller.svg" in include:
        (brand_dir / "MacOSInstaller.svg").write_text(INSTALLER_SVG, encoding="utf-8")

    return brand_dir


def create_upstream_tree(upstream_dir: Path, files: Optional[Dict[str, bytes]] = None) -> Path:
    """Write a stock branding tree."""
    for relative, data in (files if files is not None else UPSTREAM_FILES).items():
        target = upstream_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    return upstream_dir


def write_project_config(root: Path, config: Dict[str, Any]) -> Path:
    """Write ``project.yaml`` under root."""
    path = root / "project.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f)
    return path


def snapshot_tree(root: Path) -> Dict[str, bytes]:
    """Relative POSIX path -> bytes for every file below root."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def cairo_available() -> bool:
    """Whether cairosvg can load the native cairo library."""
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True
