"""
Context and path definitions for the branding pipeline.

The build context is threaded explicitly through every component instead of
being read from process-wide state.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .brand_config import ProjectConfig, load_project_config
from ..services import ContentHashCache, LocalHashCache


PROJECT_CONFIG_FILE = "project.yaml"
UPSTREAM_BRAND = "unofficial"


@dataclass
class BuildContext:
    """
    Paths, target platform and collaborators for one project checkout.
    """

    root_dir: Path
    project: ProjectConfig
    hash_cache: ContentHashCache
    platform: str = sys.platform
    max_workers: int = 4
    configs_dir: Optional[Path] = None
    engine_dir: Optional[Path] = None
    tmp_dir: Optional[Path] = None
    template_dir: Optional[Path] = None

    def __post_init__(self):
        """Fill in the conventional layout for anything not given."""
        self.root_dir = Path(self.root_dir)
        if self.configs_dir is None:
            self.configs_dir = self.root_dir / "configs"
        if self.engine_dir is None:
            self.engine_dir = self.root_dir / "engine"
        if self.tmp_dir is None:
            self.tmp_dir = self.root_dir / ".branding"
        if self.template_dir is None:
            self.template_dir = Path(__file__).resolve().parent.parent / "templates"

    @property
    def branding_dir(self) -> Path:
        """Root holding one source directory per brand."""
        return self.configs_dir / "branding"

    @property
    def branding_store(self) -> Path:
        """Engine directory that receives the generated branding trees."""
        return self.engine_dir / "browser" / "branding"

    @property
    def upstream_dir(self) -> Path:
        """Stock branding tree shipped with the engine."""
        return self.branding_store / UPSTREAM_BRAND

    @property
    def is_macos(self) -> bool:
        return self.platform == "darwin"

    def source_dir(self, brand_name: str) -> Path:
        return self.branding_dir / brand_name

    def output_dir(self, brand_name: str) -> Path:
        return self.branding_store / brand_name

    @classmethod
    def from_root(
        cls,
        root_dir: Union[str, Path],
        platform: Optional[str] = None,
        max_workers: int = 4
    ) -> "BuildContext":
        """
        Create a context for a project checkout.

        Args:
            root_dir: Directory containing ``project.yaml``
            platform: Target platform; falls back to BROWSER_BRANDING_PLATFORM, then sys.platform
            max_workers: Thread pool size for image resizing

        Returns:
            BuildContext with a JSON hash cache under the scratch directory
        """
        root_dir = Path(root_dir)
        project = load_project_config(root_dir / PROJECT_CONFIG_FILE)
        platform = platform or os.getenv('BROWSER_BRANDING_PLATFORM') or sys.platform
        tmp_dir = root_dir / ".branding"

        return cls(
            root_dir=root_dir,
            project=project,
            hash_cache=LocalHashCache(tmp_dir / "cache.json"),
            platform=platform,
            max_workers=max_workers,
            tmp_dir=tmp_dir
        )
