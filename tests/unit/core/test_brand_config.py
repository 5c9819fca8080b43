"""
Tests for project config loading and branding config resolution.
"""

import dataclasses
import logging

import pytest

from browser_branding.core.brand_config import (
    BrandingConfig, ProjectConfig, DEFAULT_BRANDING,
    load_project_config, resolve_branding_config
)
from browser_branding.exceptions import ConfigurationError, ConfigNotFoundError
from tests.utils.helpers import write_project_config


class TestLoadProjectConfig:
    """Test loading project.yaml."""

    def test_load_success(self, project_root):
        project = load_project_config(project_root / "project.yaml")

        assert project.name == "Acme"
        assert project.vendor == "Acme Corp"
        assert project.brands["acme"]["brand_full_name"] == "Acme Browser"
        assert project.source_path == project_root / "project.yaml"

    def test_null_brand_entry_is_empty_override(self, project_root):
        project = load_project_config(project_root / "project.yaml")

        assert project.brands["plain"] == {}

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            load_project_config(temp_dir / "project.yaml")

        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, temp_dir):
        (temp_dir / "project.yaml").write_text("name: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_project_config(temp_dir / "project.yaml")

        assert "Invalid project configuration" in str(exc_info.value)

    def test_missing_vendor(self, temp_dir):
        write_project_config(temp_dir, {"name": "Acme", "brands": {}})

        with pytest.raises(ConfigurationError) as exc_info:
            load_project_config(temp_dir / "project.yaml")

        assert "vendor" in str(exc_info.value)

    def test_empty_file(self, temp_dir):
        (temp_dir / "project.yaml").write_text("", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_project_config(temp_dir / "project.yaml")

    def test_installer_links(self, temp_dir):
        write_project_config(temp_dir, {
            "name": "Acme",
            "vendor": "Acme Corp",
            "installer": {"help_link": "https://help.acme.example"},
        })

        project = load_project_config(temp_dir / "project.yaml")

        assert project.brands == {}
        assert project.installer == {"help_link": "https://help.acme.example"}


class TestResolveBrandingConfig:
    """Test the layered merge."""

    def test_brand_overrides_win(self):
        project = ProjectConfig(
            name="Acme", vendor="Acme Corp",
            brands={"acme": {"background_color": "#112233", "brand_full_name": "Acme Browser"}}
        )

        config = resolve_branding_config(project, "acme")

        assert config.background_color == "#112233"
        assert config.brand_full_name == "Acme Browser"
        # Untouched fields fall through to the defaults
        assert config.brand_short_name == DEFAULT_BRANDING["brand_short_name"]
        assert config.brand_shorter_name == DEFAULT_BRANDING["brand_shorter_name"]

    def test_project_identity_layer(self):
        project = ProjectConfig(name="Acme", vendor="Acme Corp", brands={"plain": {}})

        config = resolve_branding_config(project, "plain")

        assert config.branding_generic_name == "Acme"
        assert config.branding_vendor == "Acme Corp"
        assert config.background_color == "#2B2A33"

    def test_brand_can_override_identity(self):
        project = ProjectConfig(
            name="Acme", vendor="Acme Corp",
            brands={"oem": {"branding_vendor": "OEM Ltd"}}
        )

        config = resolve_branding_config(project, "oem")

        assert config.branding_vendor == "OEM Ltd"
        assert config.branding_generic_name == "Acme"

    def test_values_are_not_validated(self):
        project = ProjectConfig(name="Acme", vendor="Acme Corp",
                                brands={"odd": {"background_color": "not-a-colour"}})

        assert resolve_branding_config(project, "odd").background_color == "not-a-colour"

    def test_missing_brand_entry(self):
        project = ProjectConfig(name="Acme", vendor="Acme Corp", brands={})

        with pytest.raises(ConfigNotFoundError):
            resolve_branding_config(project, "ghost")

    def test_unknown_keys_ignored(self, caplog):
        project = ProjectConfig(name="Acme", vendor="Acme Corp",
                                brands={"acme": {"brand_full_name": "Acme Browser", "tagline": "x"}})

        with caplog.at_level(logging.WARNING, logger="browser_branding"):
            config = resolve_branding_config(project, "acme")

        assert config.brand_full_name == "Acme Browser"
        assert "tagline" in caplog.text

    def test_config_is_immutable(self):
        project = ProjectConfig(name="Acme", vendor="Acme Corp", brands={"acme": {}})
        config = resolve_branding_config(project, "acme")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.background_color = "#000000"

    def test_project_overrides_not_mutated(self):
        overrides = {"brand_full_name": "Acme Browser"}
        project = ProjectConfig(name="Acme", vendor="Acme Corp", brands={"acme": overrides})

        resolve_branding_config(project, "acme")

        assert overrides == {"brand_full_name": "Acme Browser"}


def test_as_template_vars():
    config = BrandingConfig(
        background_color="#112233",
        brand_shorter_name="Acme",
        brand_short_name="Acme",
        brand_full_name="Acme Browser",
        branding_generic_name="Acme",
        branding_vendor="Acme Corp"
    )

    variables = config.as_template_vars()

    assert variables["brand_full_name"] == "Acme Browser"
    assert set(variables) == {f.name for f in dataclasses.fields(BrandingConfig)}
