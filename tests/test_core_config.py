"""Tests for avfrd.core.config and avfrd.utils.config."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from avfrd.core import config as core_config
from avfrd.core.config import (
    get_org_config,
    get_project_root,
    get_snapshot_path,
    load_org_config,
)
from avfrd.utils.config import Settings


class TestLoadOrgConfig:
    """Tests for load_org_config function."""

    def test_loads_project_config(self):
        config = load_org_config()
        assert config.company_name == "AVFRD"
        assert config.county_label == "Loudoun County"
        assert config.avfrd_label == "AVFRD"

    def test_defaults_for_optional_labels(self, tmp_path):
        path = tmp_path / "organization.json"
        path.write_text(json.dumps({"company_name": "Test FD", "domain": "test.org"}))

        config = load_org_config(path)
        assert config.county_label == "County"
        assert config.avfrd_label == "AVFRD"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_org_config(tmp_path / "missing.json")

    def test_missing_required_key_raises(self, tmp_path):
        path = tmp_path / "organization.json"
        path.write_text(json.dumps({"domain": "test.org"}))
        with pytest.raises(KeyError):
            load_org_config(path)

    def test_get_org_config_is_cached(self, monkeypatch):
        monkeypatch.setattr(core_config, "_org_config", None)
        assert get_org_config() is get_org_config()


class TestGetProjectRoot:
    """Tests for get_project_root function."""

    def test_contains_pyproject(self):
        assert (get_project_root() / "pyproject.toml").exists()


class TestGetSnapshotPath:
    """Tests for get_snapshot_path function."""

    def test_uses_environment(self, monkeypatch):
        monkeypatch.setenv("AVFRD_SNAPSHOT_PATH", "/tmp/snap.json")
        with patch("avfrd.core.config.load_dotenv"):
            assert get_snapshot_path() == Path("/tmp/snap.json")

    def test_defaults_to_project_data_dir(self, monkeypatch):
        monkeypatch.delenv("AVFRD_SNAPSHOT_PATH", raising=False)
        with patch("avfrd.core.config.load_dotenv"):
            assert get_snapshot_path() == get_project_root() / "data" / "snapshot.json"

    def test_empty_value_raises(self, monkeypatch):
        monkeypatch.setenv("AVFRD_SNAPSHOT_PATH", "  ")
        with (
            patch("avfrd.core.config.load_dotenv"),
            pytest.raises(ValueError, match="AVFRD_SNAPSHOT_PATH"),
        ):
            get_snapshot_path()


class TestSettings:
    """Tests for the pydantic Settings model."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("SNAPSHOT_MAX_AGE_HOURS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.snapshot_max_age_hours == 24.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("SNAPSHOT_MAX_AGE_HOURS", "6")
        settings = Settings(_env_file=None)
        assert settings.log_level_number == logging.DEBUG
        assert settings.snapshot_max_age_hours == 6.0

    def test_unknown_level_falls_back_to_info(self):
        assert Settings(_env_file=None, log_level="LOUD").log_level_number == logging.INFO
