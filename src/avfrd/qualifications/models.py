"""Data models for trainings, completions, employees and positions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from avfrd.core.constants import COMPLETED
from avfrd.core.normalize import clean_name_for_display, normalize_email, to_canonical_id
from avfrd.qualifications.requirements import (
    Group,
    RequirementLogic,
    RequirementNode,
    parse_requirement,
)

__all__ = ["CompletionRecord", "Employee", "Position", "QualificationResult", "Training"]


def _first(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the first non-None value among several spellings of a key.

    Rows come from the HR system (camelCase) and from storage (snake_case).
    """
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _as_tuple(value: Any) -> tuple:
    """Wrap a single string as a one-element tuple; convert other iterables."""
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class Training:
    """A training course from the catalog."""

    id: str
    title: str
    category: str = "Unknown"
    description: str = ""
    duration_hours: float = 0
    required_for: tuple[str, ...] = ()
    expiry_years: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", to_canonical_id(self.id))
        object.__setattr__(self, "required_for", tuple(self.required_for))

    @classmethod
    def from_row(cls, data: dict) -> Training:
        """Create from a catalog row (HR system or storage shape)."""
        training_id = to_canonical_id(_first(data, "id", "trainingId", "training_id"))
        return cls(
            id=training_id,
            title=_first(data, "title", "name", default=f"Training {training_id}"),
            category=_first(data, "category", default="Unknown"),
            description=_first(data, "description", default=""),
            duration_hours=_first(data, "durationHours", "duration_hours", default=0),
            required_for=_as_tuple(_first(data, "requiredFor", "required_for", default=())),
            expiry_years=_first(data, "expiryYears", "expiry_years"),
        )


@dataclass(frozen=True)
class CompletionRecord:
    """One training completion for one employee."""

    employee_id: str
    training_id: str
    completion_date: str = ""
    status: str = COMPLETED

    def __post_init__(self) -> None:
        object.__setattr__(self, "employee_id", to_canonical_id(self.employee_id))
        object.__setattr__(self, "training_id", to_canonical_id(self.training_id))
        object.__setattr__(self, "status", (self.status or "").lower())

    @property
    def is_completed(self) -> bool:
        """Only completed records count toward qualification."""
        return self.status == COMPLETED

    @classmethod
    def from_row(cls, data: dict) -> CompletionRecord:
        """Create from a completion row.

        Storage rows carry only a ``completed`` date and no status; those
        are completions by definition.
        """
        completion_date = _first(
            data, "completionDate", "completion_date", "completed", default=""
        )
        return cls(
            employee_id=_first(data, "employeeId", "employee_id"),
            training_id=_first(data, "trainingId", "training_id"),
            completion_date=str(completion_date),
            status=_first(data, "status", default=COMPLETED),
        )


@dataclass
class Employee:
    """An employee or volunteer from the HR system."""

    id: str
    name: str
    department: str | None = None
    division: str | None = None
    email: str | None = None
    position: str | None = None
    hire_date: str | None = None

    def __post_init__(self) -> None:
        self.id = to_canonical_id(self.id)

    @property
    def display_name(self) -> str:
        """Name for display, falling back to the id."""
        return self.name or f"Employee {self.id}"

    @classmethod
    def from_row(cls, data: dict) -> Employee:
        """Create from an employee row.

        The HR id (``bambooEmployeeId``) is preferred over the storage row id,
        since completions are keyed by it.
        """
        first = _first(data, "firstName", "first_name", default="")
        last = _first(data, "lastName", "last_name", default="")
        name = _first(data, "name", "displayName", "display_name", default=f"{first} {last}")
        return cls(
            id=_first(data, "bambooEmployeeId", "bamboo_employee_id", "id"),
            name=clean_name_for_display(name),
            department=_first(data, "department"),
            division=_first(data, "division"),
            email=normalize_email(_first(data, "email", "workEmail", "work_email")),
            position=_first(data, "position", "jobTitle", "job_title"),
            hire_date=_first(data, "hireDate", "hire_date"),
        )


@dataclass
class Position:
    """An operational position with county and AVFRD requirement trees.

    Both trees are canonical nodes; legacy flat lists are resolved when the
    position is built. The trees are always evaluated separately.
    """

    id: str
    title: str
    department: str | None = None
    description: str | None = None
    county_requirements: RequirementNode = field(
        default_factory=lambda: Group(RequirementLogic.AND)
    )
    avfrd_requirements: RequirementNode = field(
        default_factory=lambda: Group(RequirementLogic.AND)
    )

    def __post_init__(self) -> None:
        self.id = to_canonical_id(self.id)
        self.county_requirements = parse_requirement(self.county_requirements)
        self.avfrd_requirements = parse_requirement(self.avfrd_requirements)

    @classmethod
    def from_row(cls, data: dict) -> Position:
        """Create from a position row (storage or API shape)."""
        return cls(
            id=_first(data, "id"),
            title=_first(data, "title", default=""),
            department=_first(data, "department"),
            description=_first(data, "description"),
            county_requirements=_first(data, "countyRequirements", "county_requirements"),
            avfrd_requirements=_first(data, "avfrdRequirements", "avfrd_requirements"),
        )


@dataclass
class QualificationResult:
    """Outcome of checking one employee against one position.

    Computed on demand, never persisted.
    """

    position_id: str
    position_title: str
    is_qualified_county: bool
    is_qualified_avfrd: bool
    missing_county_trainings: list[Training] = field(default_factory=list)
    missing_avfrd_trainings: list[Training] = field(default_factory=list)
    completed_trainings: list[Training] = field(default_factory=list)

    @property
    def is_fully_qualified(self) -> bool:
        """Qualified only when both authorities' requirements are met."""
        return self.is_qualified_county and self.is_qualified_avfrd

    @property
    def is_eligible_not_released(self) -> bool:
        """Meets county requirements but not yet AVFRD's."""
        return self.is_qualified_county and not self.is_qualified_avfrd
