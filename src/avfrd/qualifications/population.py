"""Workforce-wide qualification queries for a single position."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum

from avfrd.qualifications.catalog import TrainingCatalog
from avfrd.qualifications.models import (
    CompletionRecord,
    Employee,
    Position,
    QualificationResult,
)
from avfrd.qualifications.service import TrainingSource, check_qualification

logger = logging.getLogger(__name__)

__all__ = ["Authority", "get_eligible_not_released", "get_qualified_employees"]


class Authority(StrEnum):
    """Which certifying authority's requirements to consider."""

    COUNTY = "county"
    AVFRD = "avfrd"
    BOTH = "both"

    def is_met(self, result: QualificationResult) -> bool:
        """Check a qualification result against this authority."""
        if self is Authority.COUNTY:
            return result.is_qualified_county
        if self is Authority.AVFRD:
            return result.is_qualified_avfrd
        return result.is_fully_qualified


def _filter_population(
    position_id: str | int,
    employees: Iterable[Employee],
    positions: Iterable[Position],
    trainings: TrainingSource,
    completions: Iterable[CompletionRecord],
    predicate,
) -> list[Employee]:
    """Keep employees (in input order) whose result for the position passes predicate."""
    positions = list(positions)
    catalog = TrainingCatalog.coerce(trainings)
    completions = list(completions)

    matched = []
    for employee in employees:
        result = check_qualification(employee.id, position_id, positions, catalog, completions)
        if result is not None and predicate(result):
            matched.append(employee)
    return matched


def get_qualified_employees(
    position_id: str | int,
    employees: Iterable[Employee],
    positions: Iterable[Position],
    trainings: TrainingSource,
    completions: Iterable[CompletionRecord],
    authority: Authority | str = Authority.AVFRD,
) -> list[Employee]:
    """Get all employees qualified for a position under the given authority.

    Args:
        position_id: Position to check
        employees: Employees to consider
        positions: All positions
        trainings: Training catalog
        completions: Completion records
        authority: COUNTY, AVFRD (default) or BOTH

    Returns:
        Qualified employees in input order; empty if the position is unknown
    """
    authority = Authority(authority)
    qualified = _filter_population(
        position_id, employees, positions, trainings, completions, authority.is_met
    )
    logger.debug(f"Position {position_id}: {len(qualified)} qualified ({authority})")
    return qualified


def get_eligible_not_released(
    position_id: str | int,
    employees: Iterable[Employee],
    positions: Iterable[Position],
    trainings: TrainingSource,
    completions: Iterable[CompletionRecord],
) -> list[Employee]:
    """Get employees who meet county requirements but not AVFRD's.

    These volunteers are eligible by county standards but not yet released
    for the position under AVFRD's own rules.
    """
    eligible = _filter_population(
        position_id,
        employees,
        positions,
        trainings,
        completions,
        lambda result: result.is_eligible_not_released,
    )
    logger.debug(f"Position {position_id}: {len(eligible)} eligible but not released")
    return eligible
