"""Position qualification evaluation against training completions."""

from avfrd.qualifications.catalog import TrainingCatalog
from avfrd.qualifications.evaluator import Evaluation, evaluate
from avfrd.qualifications.impact import simulate_training_impact
from avfrd.qualifications.models import (
    CompletionRecord,
    Employee,
    Position,
    QualificationResult,
    Training,
)
from avfrd.qualifications.population import (
    Authority,
    get_eligible_not_released,
    get_qualified_employees,
)
from avfrd.qualifications.requirements import (
    Group,
    Leaf,
    RequirementError,
    RequirementLogic,
    parse_requirement,
)
from avfrd.qualifications.service import (
    check_qualification,
    get_all_qualifications,
    get_training_gaps,
)

__all__ = [
    "Authority",
    "CompletionRecord",
    "Employee",
    "Evaluation",
    "Group",
    "Leaf",
    "Position",
    "QualificationResult",
    "RequirementError",
    "RequirementLogic",
    "Training",
    "TrainingCatalog",
    "check_qualification",
    "evaluate",
    "get_all_qualifications",
    "get_eligible_not_released",
    "get_qualified_employees",
    "get_training_gaps",
    "parse_requirement",
    "simulate_training_impact",
]
