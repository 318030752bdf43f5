"""Requirement trees describing what a position needs.

A requirement is either a single training (``Leaf``) or a boolean
combination of child requirements (``Group``). Positions store their
requirements in one of two shapes:

- Legacy: a flat list of training ids, meaning "all of these"
- Structured: ``{"logic": "AND" | "OR" | "X_OF_Y", "requirements": [...], "count": N}``
  where each entry is a training id or another structured group

``parse_requirement`` resolves both shapes into canonical nodes once, at
the point where data enters the qualification code. Everything downstream
works on ``Leaf`` and ``Group`` only.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from avfrd.core.constants import DEFAULT_X_OF_Y_COUNT
from avfrd.core.normalize import to_canonical_id

if TYPE_CHECKING:
    from avfrd.qualifications.models import Training

__all__ = [
    "Group",
    "Leaf",
    "RequirementError",
    "RequirementLogic",
    "RequirementNode",
    "contains_training",
    "describe_requirement",
    "iter_training_ids",
    "parse_requirement",
    "requirement_to_dict",
]


class RequirementError(ValueError):
    """Raised when a stored requirement cannot be turned into a tree."""


class RequirementLogic(StrEnum):
    """How a group combines its children."""

    AND = "AND"
    OR = "OR"
    X_OF_Y = "X_OF_Y"


@dataclass(frozen=True)
class Leaf:
    """A single required training."""

    training_id: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "training_id", to_canonical_id(self.training_id))


@dataclass(frozen=True)
class Group:
    """A boolean combination of child requirements.

    ``count`` only matters for X_OF_Y; when absent, X_OF_Y requires
    DEFAULT_X_OF_Y_COUNT children.
    """

    logic: RequirementLogic
    children: tuple[RequirementNode, ...] = field(default_factory=tuple)
    count: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "logic", RequirementLogic(self.logic))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def required_count(self) -> int:
        """Number of satisfied children an X_OF_Y group needs."""
        return DEFAULT_X_OF_Y_COUNT if self.count is None else self.count


RequirementNode = Leaf | Group


def parse_requirement(raw: Any) -> RequirementNode:
    """Resolve a stored requirement into a canonical tree.

    Args:
        raw: Legacy list of ids, structured dict, single id, existing node, or None

    Returns:
        Canonical Leaf or Group

    Raises:
        RequirementError: If the logic is unknown or the value has an unsupported type
    """
    if isinstance(raw, Leaf | Group):
        return raw
    if raw is None:
        return Group(RequirementLogic.AND)
    if isinstance(raw, str | int | float) and not isinstance(raw, bool):
        return Leaf(raw)
    if isinstance(raw, list | tuple):
        return Group(RequirementLogic.AND, tuple(parse_requirement(item) for item in raw))
    if isinstance(raw, Mapping):
        return _parse_group(raw)
    raise RequirementError(f"Unsupported requirement type: {type(raw).__name__}")


def _parse_group(raw: Mapping) -> Group:
    """Parse a structured group dict."""
    logic_value = raw.get("logic") or RequirementLogic.AND
    try:
        logic = RequirementLogic(str(logic_value).upper())
    except ValueError:
        raise RequirementError(f"Unknown requirement logic: {logic_value!r}") from None

    # Stored rows use "requirements"; accept "children" as well
    children = raw.get("requirements")
    if children is None:
        children = raw.get("children") or []

    count = raw.get("count")
    if count is not None:
        count = _parse_count(count)

    return Group(logic, tuple(parse_requirement(child) for child in children), count)


def _parse_count(value: Any) -> int:
    """Convert a stored X_OF_Y count to int, rejecting values that are not whole numbers."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise RequirementError(f"Invalid X_OF_Y count: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise RequirementError(f"Invalid X_OF_Y count: {value!r}") from None


def requirement_to_dict(node: RequirementNode) -> str | dict:
    """Serialize a tree back into the stored structured shape."""
    if isinstance(node, Leaf):
        return node.training_id
    data: dict[str, Any] = {
        "logic": node.logic.value,
        "requirements": [requirement_to_dict(child) for child in node.children],
    }
    if node.count is not None:
        data["count"] = node.count
    return data


def iter_training_ids(node: RequirementNode) -> Iterator[str]:
    """Yield every training id in the tree, depth-first, duplicates included."""
    if isinstance(node, Leaf):
        yield node.training_id
        return
    for child in node.children:
        yield from iter_training_ids(child)


def contains_training(node: Any, training_id: str | int) -> bool:
    """Check whether a training appears anywhere in a requirement tree."""
    target = to_canonical_id(training_id)
    return any(tid == target for tid in iter_training_ids(parse_requirement(node)))


_LOGIC_LABELS = {
    RequirementLogic.AND: "ALL of:",
    RequirementLogic.OR: "ANY ONE of:",
}


def describe_requirement(
    node: Any,
    catalog: Mapping[str, Training] | None = None,
    indent: str = "  ",
) -> str:
    """Render a requirement tree as an indented, human-readable outline.

    Trainings are shown by title when the catalog knows them, otherwise
    by id.

    Example:
        ALL of:
          - Firefighter I
          - ANY ONE of:
            - EMT-B
            - CPR
    """
    lines: list[str] = []
    _describe(parse_requirement(node), catalog or {}, indent, 0, lines)
    return "\n".join(lines)


def _describe(
    node: RequirementNode,
    catalog: Mapping[str, Training],
    indent: str,
    level: int,
    lines: list[str],
) -> None:
    prefix = indent * level + ("- " if level else "")
    if isinstance(node, Leaf):
        training = catalog.get(node.training_id)
        lines.append(f"{prefix}{training.title if training else node.training_id}")
        return

    if node.logic is RequirementLogic.X_OF_Y:
        label = f"{node.required_count} of these:"
    else:
        label = _LOGIC_LABELS[node.logic]
    lines.append(f"{prefix}{label}")
    for child in node.children:
        _describe(child, catalog, indent, level + 1, lines)
