"""Training impact simulation.

Answers "if everyone completed training X, how many people would newly
qualify for each position?" by adding a hypothetical completion for every
employee and re-evaluating the position's requirements.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from avfrd.core.constants import COMPLETED
from avfrd.core.normalize import to_canonical_id
from avfrd.qualifications.catalog import TrainingCatalog
from avfrd.qualifications.evaluator import evaluate
from avfrd.qualifications.models import CompletionRecord, Employee, Position, Training
from avfrd.qualifications.population import Authority
from avfrd.qualifications.requirements import contains_training
from avfrd.qualifications.service import TrainingSource, completed_training_ids

logger = logging.getLogger(__name__)

__all__ = ["simulate_training_impact"]


def _is_relevant(position: Position, training_id: str, authority: Authority) -> bool:
    if authority is Authority.COUNTY:
        return contains_training(position.county_requirements, training_id)
    if authority is Authority.AVFRD:
        return contains_training(position.avfrd_requirements, training_id)
    return contains_training(position.county_requirements, training_id) or contains_training(
        position.avfrd_requirements, training_id
    )


def _is_qualified(
    position: Position,
    completed: frozenset[str],
    catalog: Mapping[str, Training],
    authority: Authority,
) -> bool:
    if authority is not Authority.AVFRD and not evaluate(
        position.county_requirements, completed, catalog
    ).satisfied:
        return False
    if authority is Authority.COUNTY:
        return True
    return evaluate(position.avfrd_requirements, completed, catalog).satisfied


def simulate_training_impact(
    training_id: str | int,
    employees: Iterable[Employee],
    positions: Iterable[Position],
    trainings: TrainingSource,
    completions: Iterable[CompletionRecord],
    authority: Authority | str = Authority.AVFRD,
) -> dict[str, int]:
    """Count employees per position who would newly qualify after one more training.

    Positions whose requirements never mention the training report 0
    without evaluating anyone. The completion list passed in is never
    modified; hypothetical completions are added to per-employee copies.

    Args:
        training_id: Training everyone hypothetically completes today
        employees: Employees to simulate
        positions: Positions to report on
        trainings: Training catalog
        completions: Current completion records
        authority: Whose requirements to simulate. Defaults to AVFRD only,
            which gates operational release.

    Returns:
        Dict of position id to number of newly qualified employees
    """
    training_id = to_canonical_id(training_id)
    authority = Authority(authority)
    employees = list(employees)
    catalog = TrainingCatalog.coerce(trainings)

    records_by_employee: dict[str, list[CompletionRecord]] = defaultdict(list)
    for record in completions:
        records_by_employee[record.employee_id].append(record)

    today = datetime.now(UTC).date().isoformat()
    impact: dict[str, int] = {}

    for position in positions:
        if not _is_relevant(position, training_id, authority):
            impact[position.id] = 0
            continue

        newly_qualified = 0
        for employee in employees:
            records = records_by_employee.get(employee.id, [])
            current = completed_training_ids(employee.id, records)
            if _is_qualified(position, current, catalog, authority):
                continue

            hypothetical = [
                *records,
                CompletionRecord(employee.id, training_id, completion_date=today, status=COMPLETED),
            ]
            simulated = completed_training_ids(employee.id, hypothetical)
            if _is_qualified(position, simulated, catalog, authority):
                newly_qualified += 1

        impact[position.id] = newly_qualified

    logger.debug(
        f"Training {training_id}: {sum(impact.values())} new qualifications "
        f"across {len(impact)} positions ({authority})"
    )
    return impact
