"""Tests for avfrd.qualifications.population."""

import pytest

from avfrd.qualifications.models import CompletionRecord, Employee, Position, QualificationResult
from avfrd.qualifications.population import (
    Authority,
    get_eligible_not_released,
    get_qualified_employees,
)


def employee_ids(employees) -> list[str]:
    return [e.id for e in employees]


@pytest.fixture
def and_position():
    """Position requiring A and B under the county, A only under AVFRD."""
    return Position(
        id="p1",
        title="Engine Driver",
        county_requirements=["A", "B"],
        avfrd_requirements=["A"],
    )


class TestAuthority:
    """Tests for the Authority enum."""

    @pytest.mark.parametrize(
        ("authority", "county", "avfrd", "expected"),
        [
            (Authority.COUNTY, True, False, True),
            (Authority.COUNTY, False, True, False),
            (Authority.AVFRD, False, True, True),
            (Authority.AVFRD, True, False, False),
            (Authority.BOTH, True, True, True),
            (Authority.BOTH, True, False, False),
        ],
    )
    def test_is_met(self, authority, county, avfrd, expected):
        result = QualificationResult("p", "P", county, avfrd)
        assert authority.is_met(result) is expected

    def test_from_string(self):
        assert Authority("county") is Authority.COUNTY


class TestGetQualifiedEmployees:
    """Tests for get_qualified_employees."""

    def test_county_and_requirement(self, and_position, employees, completions, trainings):
        qualified = get_qualified_employees(
            "p1", employees, [and_position], trainings, completions, authority=Authority.COUNTY
        )
        assert employee_ids(qualified) == ["1"]

    def test_avfrd_is_default(self, and_position, employees, completions, trainings):
        qualified = get_qualified_employees(
            "p1", employees, [and_position], trainings, completions
        )
        assert employee_ids(qualified) == ["1", "2"]

    def test_both_requires_both(self, and_position, employees, completions, trainings):
        qualified = get_qualified_employees(
            "p1", employees, [and_position], trainings, completions, authority="both"
        )
        assert employee_ids(qualified) == ["1"]

    def test_keeps_input_order(self, and_position, trainings):
        employees = [Employee(id=str(i), name=f"E{i}") for i in (9, 3, 5)]
        completions = [CompletionRecord(str(i), "A") for i in (3, 5, 9)]
        qualified = get_qualified_employees(
            "p1", employees, [and_position], trainings, completions
        )
        assert employee_ids(qualified) == ["9", "3", "5"]

    def test_unknown_position_qualifies_nobody(self, employees, positions, trainings, completions):
        assert get_qualified_employees("nope", employees, positions, trainings, completions) == []

    def test_invalid_authority_raises(self, employees, positions, trainings, completions):
        with pytest.raises(ValueError):
            get_qualified_employees(
                "ff", employees, positions, trainings, completions, authority="state"
            )


class TestGetEligibleNotReleased:
    """Tests for get_eligible_not_released."""

    def test_county_but_not_avfrd(self, positions, employees, trainings, completions):
        eligible = get_eligible_not_released("ff", employees, positions, trainings, completions)
        assert employee_ids(eligible) == ["2"]

    def test_fully_qualified_excluded(self, and_position, employees, trainings, completions):
        # Employee 1 meets both trees; employee 2 meets AVFRD only
        eligible = get_eligible_not_released(
            "p1", employees, [and_position], trainings, completions
        )
        assert eligible == []
