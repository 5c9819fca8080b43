"""
Template engine module for the branding pipeline.

Expands the optional branding templates into a brand's output tree and
renders the bundled Jinja2 templates (installer script, wordmark).
"""

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Dict, Any, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .brand_config import BrandingConfig
from ..logging import timed_operation
from ..utils import walk_directory, windows_path_to_unix

logger = logging.getLogger(__name__)


OPTIONAL_BRANDING_DIR = "branding.optional"

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def substitute_placeholders(text: str, variables: Dict[str, str]) -> str:
    """
    Replace ``{{key}}`` placeholders with values from ``variables``.

    Placeholders whose key is not in ``variables`` are kept verbatim.
    """
    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key in variables:
            return variables[key]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, text)


class TemplateEngine:
    """
    Renders branding templates bundled with the package.

    Features:
    - Placeholder expansion over the optional branding subtree
    - Relative layout reproduced under the output directory
    - Jinja2 rendering for generated files, XML-escaped for SVG
    """

    def __init__(self, template_dir: Path):
        """
        Initialize the TemplateEngine.

        Args:
            template_dir: Directory holding the Jinja2 templates and the
                          optional branding subtree
        """
        self.template_dir = Path(template_dir)
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(enabled_extensions=("svg",), default_for_string=False, default=False),
            keep_trailing_newline=True
        )

    @property
    def optional_dir(self) -> Path:
        return self.template_dir / OPTIONAL_BRANDING_DIR

    def render(self, template_name: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a bundled template.

        Args:
            template_name: File name relative to the template directory
            context: Template variables

        Returns:
            Rendered text

        Raises:
            TemplateNotFound: If the template doesn't exist
        """
        try:
            template = self.jinja_env.get_template(template_name)
        except TemplateNotFound:
            logger.error(f"Template not found: {template_name}")
            raise

        return template.render(context or {})

    @timed_operation("expand_templates")
    def expand_templates(self, output_dir: Path, brand_config: BrandingConfig) -> int:
        """
        Write every optional branding template into ``output_dir``.

        Args:
            output_dir: Brand output tree
            brand_config: Values substituted for the placeholders

        Returns:
            Number of files written
        """
        if not self.optional_dir.exists():
            logger.warning(f"No optional branding templates at {self.optional_dir}")
            return 0

        variables = brand_config.as_template_vars()
        root = windows_path_to_unix(self.optional_dir.absolute())
        written = 0

        for file_path in walk_directory(self.optional_dir):
            relative = PurePosixPath(windows_path_to_unix(file_path)).relative_to(root)
            target = Path(output_dir) / relative

            if target.exists():
                logger.warning(f"Keeping existing output, template skipped: {relative}")
                continue

            contents = file_path.read_text(encoding='utf-8')
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(substitute_placeholders(contents, variables), encoding='utf-8')
            written += 1

        logger.debug(f"Expanded {written} branding template(s) into {output_dir}")
        return written
