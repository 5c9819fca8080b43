"""
Upstream merge module for the branding pipeline.

Copies the engine's stock branding tree into a brand's output tree, patching
stylesheets and regenerating the installer definitions on the way, without
ever replacing a file an earlier stage already produced.
"""

import logging
import re
import shutil
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .brand_config import BrandingConfig
from .content_types import BuildContext
from .template_engine import TemplateEngine
from ..exceptions import ConsistencyError
from ..logging import timed_operation
from ..utils import walk_directory

logger = logging.getLogger(__name__)


INSTALLER_SCRIPT_NAME = "branding.nsi"

THEME_BG_VARIABLE = "--theme-bg"

# Hard-coded upstream background colours, in both notations
LEGACY_BACKGROUND_PATTERN = re.compile(r"#130829|hsla\(235, 43%, 10%, \.5\)")

DEFAULT_INSTALLER_LINKS: Dict[str, str] = {
    "url_info_about": "https://www.mozilla.org/",
    "url_update_info": "https://www.mozilla.org/firefox/${AppVersion}/releasenotes",
    "help_link": "https://support.mozilla.org",
    "url_manual_download": "https://www.mozilla.org/firefox/new/",
    "url_system_requirements": "https://www.mozilla.org/firefox/system-requirements/",
    "cert_issuer_download": "DigiCert SHA2 Assured ID Code Signing CA",
}


class FileClass(Enum):
    """Merge treatment of an upstream file."""
    INSTALLER_SCRIPT = "installer_script"
    STYLESHEET = "stylesheet"
    GENERIC = "generic"


def classify(path: Path) -> FileClass:
    """Decide how an upstream file is merged, from its name alone."""
    path = Path(path)
    if path.name == INSTALLER_SCRIPT_NAME:
        return FileClass.INSTALLER_SCRIPT
    if "css" in path.suffix.lower():
        return FileClass.STYLESHEET
    return FileClass.GENERIC


def patch_stylesheet(css: str, background_color: str) -> str:
    """
    Point legacy background colours at the theme variable and bind it.

    Args:
        css: Stylesheet text
        background_color: Value bound to ``--theme-bg``

    Returns:
        Patched stylesheet whose last line is the ``:root`` binding
    """
    patched = LEGACY_BACKGROUND_PATTERN.sub(f"var({THEME_BG_VARIABLE})", css)
    if patched and not patched.endswith("\n"):
        patched += "\n"
    return patched + f":root {{ {THEME_BG_VARIABLE}: {background_color} }}"


class UpstreamMerger:
    """
    Merges the upstream default branding into a brand's output tree.

    Features:
    - First writer wins: existing output paths are never replaced
    - Stylesheet background colour injection
    - Installer script regenerated from a template
    - Verbatim copy of everything else
    """

    def __init__(self, context: BuildContext, template_engine: TemplateEngine,
                 upstream_dir: Optional[Path] = None):
        """
        Initialize the UpstreamMerger.

        Args:
            context: Build context (upstream tree location, installer links)
            template_engine: Renders the installer script
            upstream_dir: Override for the stock branding tree
        """
        self.context = context
        self.template_engine = template_engine
        self.upstream_dir = Path(upstream_dir) if upstream_dir else context.upstream_dir

    @timed_operation("merge_upstream")
    def merge_upstream(self, output_dir: Path, brand_config: BrandingConfig) -> Dict[FileClass, int]:
        """
        Merge the upstream tree into ``output_dir``.

        Args:
            output_dir: Brand output tree already holding derived and template files
            brand_config: Resolved branding values

        Returns:
            Number of files written per class

        Raises:
            ConsistencyError: If the upstream tree is missing, or unless exactly
                one installer script remains to merge
        """
        output_dir = Path(output_dir)

        if not self.upstream_dir.is_dir():
            logger.error(f"Upstream branding tree not found: {self.upstream_dir}")
            raise ConsistencyError(f"Upstream branding tree not found: {self.upstream_dir}")

        # Evaluated up front so the checks see only earlier stages' output
        candidates = [
            path for path in walk_directory(self.upstream_dir)
            if not (output_dir / self._relative(path)).exists()
        ]

        grouped: Dict[FileClass, List[Path]] = {file_class: [] for file_class in FileClass}
        for path in candidates:
            grouped[classify(path)].append(path)

        installer_scripts = grouped[FileClass.INSTALLER_SCRIPT]
        if len(installer_scripts) != 1:
            logger.error(f"Found {len(installer_scripts)} {INSTALLER_SCRIPT_NAME} files in {self.upstream_dir}")
            raise ConsistencyError(
                f"There should be exactly one {INSTALLER_SCRIPT_NAME} file to merge, "
                f"found {len(installer_scripts)}"
            )

        for path in grouped[FileClass.STYLESHEET]:
            target = self._target(output_dir, path)
            css = path.read_text(encoding='utf-8')
            target.write_text(patch_stylesheet(css, brand_config.background_color), encoding='utf-8')

        installer_target = self._target(output_dir, installer_scripts[0])
        logger.debug(f"Configuring {INSTALLER_SCRIPT_NAME} into {installer_target}")
        installer_target.write_text(self.render_installer_script(brand_config), encoding='utf-8')

        for path in grouped[FileClass.GENERIC]:
            shutil.copyfile(path, self._target(output_dir, path))

        counts = {file_class: len(paths) for file_class, paths in grouped.items()}
        logger.debug(
            f"Merged upstream branding: {counts[FileClass.STYLESHEET]} stylesheet(s), "
            f"{counts[FileClass.GENERIC]} copied file(s)"
        )
        return counts

    def render_installer_script(self, brand_config: BrandingConfig) -> str:
        """Render the NSIS branding defines for a brand."""
        links = dict(DEFAULT_INSTALLER_LINKS)
        links.update(self.context.project.installer)

        return self.template_engine.render(INSTALLER_SCRIPT_NAME, {
            "brand_full_name": brand_config.brand_full_name,
            "branding_vendor": brand_config.branding_vendor,
            "links": links,
        })

    def _relative(self, path: Path) -> Path:
        return Path(path).relative_to(self.upstream_dir.absolute())

    def _target(self, output_dir: Path, path: Path) -> Path:
        target = output_dir / self._relative(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target
