"""Training catalog lookup table."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from avfrd.core.normalize import to_canonical_id
from avfrd.qualifications.models import Training

__all__ = ["TrainingCatalog"]


class TrainingCatalog(Mapping[str, Training]):
    """Read-only mapping of canonical training id to Training.

    Lookups canonicalize the key, so ``catalog[5]`` and ``catalog["5"]``
    find the same training. Iteration follows the order trainings were
    supplied in.
    """

    def __init__(self, trainings: Iterable[Training] = ()):
        self._trainings: dict[str, Training] = {}
        for training in trainings:
            # First entry wins when the source repeats an id
            self._trainings.setdefault(training.id, training)

    @classmethod
    def coerce(cls, trainings: TrainingCatalog | Mapping[str, Training] | Iterable[Training]):
        """Build a catalog from a catalog, a mapping, or a list of trainings."""
        if isinstance(trainings, TrainingCatalog):
            return trainings
        if isinstance(trainings, Mapping):
            return cls(trainings.values())
        return cls(trainings)

    def __getitem__(self, training_id: str | int) -> Training:
        return self._trainings[to_canonical_id(training_id)]

    def __contains__(self, training_id: object) -> bool:
        if not isinstance(training_id, str | int | float):
            return False
        return to_canonical_id(training_id) in self._trainings

    def __iter__(self) -> Iterator[str]:
        return iter(self._trainings)

    def __len__(self) -> int:
        return len(self._trainings)

    def __repr__(self) -> str:
        return f"TrainingCatalog({len(self)} trainings)"
