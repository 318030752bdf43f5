"""Tests for avfrd.qualifications.catalog."""

from avfrd.qualifications.catalog import TrainingCatalog
from avfrd.qualifications.models import Training


class TestTrainingCatalog:
    """Tests for the TrainingCatalog mapping."""

    def test_lookup_by_string_and_number(self):
        catalog = TrainingCatalog([Training(id=5, title="Pump Ops")])
        assert catalog["5"].title == "Pump Ops"
        assert catalog[5].title == "Pump Ops"

    def test_get_missing_returns_none(self, catalog):
        assert catalog.get("ZZZ") is None

    def test_contains(self, catalog):
        assert "A" in catalog
        assert "ZZZ" not in catalog
        assert None not in catalog

    def test_iteration_keeps_order(self, catalog):
        assert list(catalog) == ["A", "B", "C", "D", "E"]
        assert len(catalog) == 5

    def test_first_duplicate_wins(self):
        catalog = TrainingCatalog(
            [Training(id="1", title="First"), Training(id=1, title="Second")]
        )
        assert len(catalog) == 1
        assert catalog["1"].title == "First"

    def test_coerce_returns_same_catalog(self, catalog):
        assert TrainingCatalog.coerce(catalog) is catalog

    def test_coerce_from_mapping_and_list(self, trainings):
        from_list = TrainingCatalog.coerce(trainings)
        from_mapping = TrainingCatalog.coerce({t.id: t for t in trainings})
        assert dict(from_list) == dict(from_mapping)

    def test_repr(self, catalog):
        assert repr(catalog) == "TrainingCatalog(5 trainings)"
