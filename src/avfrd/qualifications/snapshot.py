"""Pydantic model for the training data snapshot exported by the sync jobs.

The sync jobs (outside this package) pull employees, trainings and
completions from BambooHR and positions from storage, and write them to a
single JSON document. Rows keep whatever shape their source produced
(camelCase or snake_case keys, numeric or string ids); the typed model
accessors resolve them into the dataclasses the qualification code uses.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

from avfrd.qualifications.catalog import TrainingCatalog
from avfrd.qualifications.models import CompletionRecord, Employee, Position, Training

logger = logging.getLogger(__name__)


class TrainingSnapshot(BaseModel):
    """Raw rows from one sync run, plus when they were fetched."""

    employees: list[dict] = []
    trainings: list[dict] = []
    completions: list[dict] = []
    positions: list[dict] = []
    fetched_at: datetime | None = None

    def is_stale(self, max_age_hours: float = 24.0) -> bool:
        """Check if this snapshot is older than max_age_hours.

        A snapshot without a fetch time is always stale.
        """
        fetched_at = self.fetched_at
        if fetched_at is None:
            return True
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=UTC)
        age = datetime.now(UTC) - fetched_at
        return age.total_seconds() > max_age_hours * 3600

    def get_employees(self) -> list[Employee]:
        """Employees as dataclasses."""
        return [Employee.from_row(row) for row in self.employees]

    def get_trainings(self) -> list[Training]:
        """Trainings as dataclasses, in catalog order."""
        return [Training.from_row(row) for row in self.trainings]

    def get_catalog(self) -> TrainingCatalog:
        """Training catalog keyed by canonical id."""
        return TrainingCatalog(self.get_trainings())

    def get_completions(self) -> list[CompletionRecord]:
        """Completion records as dataclasses."""
        return [CompletionRecord.from_row(row) for row in self.completions]

    def get_positions(self) -> list[Position]:
        """Positions with both requirement trees resolved."""
        return [Position.from_row(row) for row in self.positions]

    def to_json(self) -> dict:
        """Serialize for writing back to disk."""
        return self.model_dump(mode="json")

    @classmethod
    def from_json(cls, data: dict) -> TrainingSnapshot:
        """Deserialize from a JSON document."""
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Path | str) -> TrainingSnapshot:
        """Load a snapshot from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {path}")

        with path.open() as f:
            snapshot = cls.from_json(json.load(f))

        logger.info(
            f"Loaded snapshot from {path}: {len(snapshot.employees)} employees, "
            f"{len(snapshot.trainings)} trainings, {len(snapshot.completions)} completions, "
            f"{len(snapshot.positions)} positions"
        )
        return snapshot
