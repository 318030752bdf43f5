"""Shared pytest fixtures."""

import pytest

from avfrd.qualifications.catalog import TrainingCatalog
from avfrd.qualifications.models import CompletionRecord, Employee, Position, Training


@pytest.fixture
def trainings():
    """Small training catalog with ids A through E."""
    return [
        Training(id="A", title="Firefighter I", category="Fire", required_for=("Required",)),
        Training(id="B", title="Firefighter II", category="Fire", required_for=("Operations",)),
        Training(id="C", title="EMT-B", category="EMS", required_for=("EMS",)),
        Training(id="D", title="CPR", category="EMS"),
        Training(id="E", title="Hazmat Awareness", category="Hazmat"),
    ]


@pytest.fixture
def catalog(trainings):
    """TrainingCatalog built from the trainings fixture."""
    return TrainingCatalog(trainings)


@pytest.fixture
def employees():
    """Three employees: one with A+B, one with A only, one with nothing."""
    return [
        Employee(id="1", name="Jane Smith", division="Operations"),
        Employee(id="2", name="John Doe", division="Operations"),
        Employee(id="3", name="Bob Johnson", division="EMS"),
    ]


@pytest.fixture
def completions():
    """Completion records matching the employees fixture."""
    return [
        CompletionRecord("1", "A", "2024-01-10"),
        CompletionRecord("1", "B", "2024-02-10"),
        CompletionRecord("2", "A", "2024-03-01"),
        CompletionRecord("2", "B", "2021-03-01", status="expired"),
        CompletionRecord("3", "C", "2024-05-01", status="due"),
    ]


@pytest.fixture
def positions():
    """Positions covering legacy lists and nested groups."""
    return [
        Position(
            id="ff",
            title="Firefighter",
            department="Operations",
            county_requirements=["A"],
            avfrd_requirements=["A", "B"],
        ),
        Position(
            id="emt",
            title="EMT",
            department="EMS",
            county_requirements={"logic": "OR", "requirements": ["C", "D"]},
            avfrd_requirements={
                "logic": "AND",
                "requirements": ["C", {"logic": "OR", "requirements": ["D", "E"]}],
            },
        ),
        Position(
            id="haz",
            title="Hazmat Tech",
            department="Operations",
            county_requirements=[],
            avfrd_requirements={"logic": "X_OF_Y", "requirements": ["A", "B", "E"], "count": 2},
        ),
    ]
