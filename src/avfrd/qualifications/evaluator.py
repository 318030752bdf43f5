"""Requirement tree evaluation.

Walks a requirement tree against an employee's completed training ids and
reports whether the tree is satisfied plus which trainings are missing.

Missing-list rules per node type:
- Leaf: the training itself, when not completed (and known to the catalog)
- AND: every child's missing trainings
- OR: nothing when any child is met, otherwise every child's missing trainings
- X_OF_Y: the missing trainings of the unmet children closest to completion,
  just enough of them to reach the required count

Missing lists are not deduplicated; a training reached through two branches
is reported twice.

Evaluation is pure: no I/O, no logging, no shared state. Malformed trees
(e.g. an X_OF_Y count larger than its children) evaluate to "never
satisfied" instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from avfrd.core.normalize import to_canonical_id
from avfrd.qualifications.models import Training
from avfrd.qualifications.requirements import (
    Group,
    Leaf,
    RequirementLogic,
    RequirementNode,
    parse_requirement,
)

__all__ = ["Evaluation", "evaluate"]


@dataclass(frozen=True)
class Evaluation:
    """Result of evaluating one requirement tree."""

    satisfied: bool
    missing: list[Training] = field(default_factory=list)


def evaluate(
    node: RequirementNode | Any,
    completed_ids: Iterable[str | int],
    catalog: Mapping[str, Training],
) -> Evaluation:
    """Evaluate a requirement tree against a set of completed training ids.

    Args:
        node: Canonical requirement node, or a stored shape (legacy list or
            structured dict) which is resolved first
        completed_ids: Ids of trainings the employee has completed
        catalog: Training lookup used to turn missing ids into Training objects;
            ids missing from the catalog are left out of the missing list

    Returns:
        Evaluation with the verdict and the missing trainings
    """
    completed = frozenset(to_canonical_id(tid) for tid in completed_ids)
    return _evaluate(parse_requirement(node), completed, catalog)


def _evaluate(
    node: RequirementNode,
    completed: frozenset[str],
    catalog: Mapping[str, Training],
) -> Evaluation:
    if isinstance(node, Leaf):
        return _evaluate_leaf(node, completed, catalog)

    results = [_evaluate(child, completed, catalog) for child in node.children]
    if node.logic is RequirementLogic.AND:
        return _combine_all(results)
    if node.logic is RequirementLogic.OR:
        return _combine_any(results)
    return _combine_x_of_y(node, results)


def _evaluate_leaf(
    leaf: Leaf,
    completed: frozenset[str],
    catalog: Mapping[str, Training],
) -> Evaluation:
    if leaf.training_id in completed:
        return Evaluation(satisfied=True)
    training = catalog.get(leaf.training_id)
    return Evaluation(satisfied=False, missing=[training] if training is not None else [])


def _combine_all(results: list[Evaluation]) -> Evaluation:
    return Evaluation(
        satisfied=all(r.satisfied for r in results),
        missing=_concat(results),
    )


def _combine_any(results: list[Evaluation]) -> Evaluation:
    if any(r.satisfied for r in results):
        return Evaluation(satisfied=True)
    return Evaluation(satisfied=False, missing=_concat(results))


def _combine_x_of_y(group: Group, results: list[Evaluation]) -> Evaluation:
    required = group.required_count
    met = sum(1 for r in results if r.satisfied)
    if met >= required:
        return Evaluation(satisfied=True)

    # Stable sort keeps input order among equally-close children
    unmet = sorted((r for r in results if not r.satisfied), key=lambda r: len(r.missing))
    return Evaluation(satisfied=False, missing=_concat(unmet[: required - met]))


def _concat(results: Iterable[Evaluation]) -> list[Training]:
    return [training for r in results for training in r.missing]
