"""Core utilities for AVFRD training compliance."""

from avfrd.core.config import (
    OrgConfig,
    get_org_config,
    get_snapshot_path,
    load_org_config,
)
from avfrd.core.normalize import to_canonical_id

__all__ = [
    "OrgConfig",
    "get_org_config",
    "get_snapshot_path",
    "load_org_config",
    "to_canonical_id",
]
