"""Compliance statistics for the training dashboard."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from avfrd.core.constants import COMPLETED, DUE, EXPIRED, REQUIRED_FOR_ALL
from avfrd.qualifications.models import CompletionRecord, Employee, Training

logger = logging.getLogger(__name__)

__all__ = ["DivisionStats", "TrainingStatistics", "calculate_training_statistics"]


@dataclass
class DivisionStats:
    """Compliance figures for one division."""

    division: str
    completed_count: int
    total_required: int
    compliance_rate: int


@dataclass
class TrainingStatistics:
    """Department-wide training figures."""

    total_trainings: int
    completed_trainings: int
    expired_trainings: int
    upcoming_trainings: int
    completion_rate: float
    division_stats: list[DivisionStats] = field(default_factory=list)


def calculate_training_statistics(
    employees: Iterable[Employee],
    trainings: Iterable[Training],
    completions: Iterable[CompletionRecord],
) -> TrainingStatistics:
    """Calculate training statistics from employee, training and completion data.

    The completion rate is completed records per catalog training, as a
    percentage (0 for an empty catalog).
    """
    employees = list(employees)
    trainings = list(trainings)
    completions = list(completions)

    completed = sum(1 for c in completions if c.status == COMPLETED)
    expired = sum(1 for c in completions if c.status == EXPIRED)
    due = sum(1 for c in completions if c.status == DUE)
    completion_rate = (completed / len(trainings)) * 100 if trainings else 0.0

    logger.debug(
        f"Calculated statistics - Total: {len(trainings)}, Completed: {completed}, "
        f"Rate: {completion_rate}%"
    )

    return TrainingStatistics(
        total_trainings=len(trainings),
        completed_trainings=completed,
        expired_trainings=expired,
        upcoming_trainings=due,
        completion_rate=completion_rate,
        division_stats=calculate_division_stats(employees, trainings, completions),
    )


def calculate_division_stats(
    employees: list[Employee],
    trainings: list[Training],
    completions: list[CompletionRecord],
) -> list[DivisionStats]:
    """Calculate compliance per division.

    A training is required for a division when its ``required_for`` lists
    the division or the "Required" marker. Divisions with nothing required
    are 100% compliant. Rates round half up.
    """
    # Unique divisions, in first-seen order
    divisions = list(dict.fromkeys(e.division for e in employees if e.division))

    stats = []
    for division in divisions:
        member_ids = {e.id for e in employees if e.division == division}
        required_ids = {
            t.id
            for t in trainings
            if division in t.required_for or REQUIRED_FOR_ALL in t.required_for
        }
        total_required = len(member_ids) * len(required_ids)
        completed_count = sum(
            1
            for c in completions
            if c.is_completed and c.employee_id in member_ids and c.training_id in required_ids
        )
        compliance_rate = 100
        if total_required > 0:
            compliance_rate = math.floor(completed_count / total_required * 100 + 0.5)
        stats.append(
            DivisionStats(
                division=division,
                completed_count=completed_count,
                total_required=total_required,
                compliance_rate=compliance_rate,
            )
        )
    return stats
