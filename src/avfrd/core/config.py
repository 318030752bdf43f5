"""Configuration loading utilities."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class OrgConfig:
    """Organization configuration loaded from config/organization.json.

    All org-specific data lives here rather than in code, so
    customization requires only editing the JSON file.
    """

    company_name: str
    domain: str
    county_label: str = "County"
    avfrd_label: str = "AVFRD"


def get_project_root() -> Path:
    """Get the project root directory."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Could not find project root (no pyproject.toml found)")


def load_org_config(config_path: Path | None = None) -> OrgConfig:
    """Load organization configuration from config file.

    Args:
        config_path: Path to the JSON file. Defaults to
            config/organization.json under the project root.

    Returns:
        OrgConfig with company details and authority labels
    """
    if config_path is None:
        config_path = get_project_root() / "config" / "organization.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        config_data = json.load(f)

    return OrgConfig(
        company_name=config_data["company_name"],
        domain=config_data["domain"],
        county_label=config_data.get("county_label", "County"),
        avfrd_label=config_data.get("avfrd_label", "AVFRD"),
    )


# Cached config instance
_org_config: OrgConfig | None = None


def get_org_config() -> OrgConfig:
    """Get cached organization config.

    Loads config once and caches it for subsequent calls.
    """
    global _org_config
    if _org_config is None:
        _org_config = load_org_config()
    return _org_config


def get_snapshot_path() -> Path:
    """Get the path of the training data snapshot exported by the sync jobs.

    Reads ``AVFRD_SNAPSHOT_PATH`` from the environment (or ``.env``) first,
    falls back to ``data/snapshot.json`` under the project root.

    Raises:
        ValueError: If the environment variable is set but empty
    """
    load_dotenv()

    path = os.getenv("AVFRD_SNAPSHOT_PATH")
    if path is None:
        return get_project_root() / "data" / "snapshot.json"
    if not path.strip():
        raise ValueError("AVFRD_SNAPSHOT_PATH is set but empty")
    return Path(path)
