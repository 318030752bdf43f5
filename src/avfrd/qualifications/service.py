"""Qualification checks for employees against positions.

Each position carries two requirement trees: the county's and AVFRD's.
They are evaluated independently and reported side by side; a position is
fully qualified only when both are met.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from avfrd.core.normalize import to_canonical_id
from avfrd.qualifications.catalog import TrainingCatalog
from avfrd.qualifications.evaluator import evaluate
from avfrd.qualifications.models import CompletionRecord, Position, QualificationResult, Training
from avfrd.qualifications.requirements import iter_training_ids

logger = logging.getLogger(__name__)

TrainingSource = TrainingCatalog | Mapping[str, Training] | Iterable[Training]


def completed_training_ids(
    employee_id: str | int,
    completions: Iterable[CompletionRecord],
) -> frozenset[str]:
    """Get the distinct training ids an employee has a completed record for.

    Expired and due records are ignored. An unknown employee simply has
    no completed trainings.
    """
    employee_id = to_canonical_id(employee_id)
    return frozenset(
        c.training_id for c in completions if c.employee_id == employee_id and c.is_completed
    )


def find_position(position_id: str | int, positions: Iterable[Position]) -> Position | None:
    """Find a position by id, or None if it does not exist."""
    position_id = to_canonical_id(position_id)
    return next((p for p in positions if p.id == position_id), None)


def relevant_training_ids(position: Position) -> frozenset[str]:
    """Ids of every training referenced by either of a position's trees."""
    return frozenset(iter_training_ids(position.county_requirements)) | frozenset(
        iter_training_ids(position.avfrd_requirements)
    )


def check_qualification(
    employee_id: str | int,
    position_id: str | int,
    positions: Iterable[Position],
    trainings: TrainingSource,
    completions: Iterable[CompletionRecord],
    relevant_only: bool = False,
) -> QualificationResult | None:
    """Check whether an employee qualifies for a position.

    Args:
        employee_id: Employee to check (unknown ids have no completions)
        position_id: Position to check against
        positions: All positions
        trainings: Training catalog (catalog, id mapping, or list)
        completions: Completion records for any number of employees
        relevant_only: If True, completed_trainings only lists trainings that
            appear in the position's trees. Defaults to every completed
            training the catalog knows.

    Returns:
        QualificationResult, or None if the position does not exist
    """
    position = find_position(position_id, positions)
    if position is None:
        return None

    catalog = TrainingCatalog.coerce(trainings)
    completed = completed_training_ids(employee_id, completions)

    county = evaluate(position.county_requirements, completed, catalog)
    avfrd = evaluate(position.avfrd_requirements, completed, catalog)

    shown = completed & relevant_training_ids(position) if relevant_only else completed
    completed_trainings = [t for tid, t in catalog.items() if tid in shown]

    return QualificationResult(
        position_id=position.id,
        position_title=position.title,
        is_qualified_county=county.satisfied,
        is_qualified_avfrd=avfrd.satisfied,
        missing_county_trainings=county.missing,
        missing_avfrd_trainings=avfrd.missing,
        completed_trainings=completed_trainings,
    )


def get_all_qualifications(
    employee_id: str | int,
    positions: Iterable[Position],
    trainings: TrainingSource,
    completions: Iterable[CompletionRecord],
) -> list[QualificationResult]:
    """Get qualification results for every position for one employee.

    Positions that fail to resolve are left out rather than reported.
    """
    positions = list(positions)
    catalog = TrainingCatalog.coerce(trainings)
    completions = list(completions)

    results = []
    for position in positions:
        result = check_qualification(employee_id, position.id, positions, catalog, completions)
        if result is not None:
            results.append(result)

    logger.debug(
        f"Employee {employee_id}: fully qualified for "
        f"{sum(1 for r in results if r.is_fully_qualified)}/{len(results)} positions"
    )
    return results


def get_training_gaps(
    employee_id: str | int,
    position_id: str | int,
    positions: Iterable[Position],
    trainings: TrainingSource,
    completions: Iterable[CompletionRecord],
) -> list[Training]:
    """Get the AVFRD trainings an employee still needs for a position.

    Returns an empty list when the position does not exist.
    """
    result = check_qualification(employee_id, position_id, positions, trainings, completions)
    if result is None:
        return []
    return result.missing_avfrd_trainings
