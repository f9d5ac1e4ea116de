"""Application tests for ward lifecycle commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from inpatient.ward.management import CreateWard, DeleteWard, UpdateWard
from inpatient.ward.ward import Ward


def _create_ward(**overrides):
    defaults = {
        "name": "ICU Ward",
        "prefix": "icu",
        "ward_type": "icu",
        "rate_per_day": 5000.0,
        "num_beds": 3,
    }
    defaults.update(overrides)
    return current_domain.process(CreateWard(**defaults), asynchronous=False)


class TestCreateWard:
    def test_returns_derived_id(self):
        assert _create_ward() == "icu-ward"

    def test_persists_ward_and_beds(self):
        ward_id = _create_ward()
        ward = current_domain.repository_for(Ward).get(ward_id)
        assert ward.name == "ICU Ward"
        assert ward.prefix == "ICU"
        assert ward.total_beds == 3
        assert [bed.bed_id for bed in ward.sorted_beds()] == ["ICU-01", "ICU-02", "ICU-03"]

    def test_duplicate_name_fails(self):
        _create_ward()
        with pytest.raises(ValidationError) as exc_info:
            _create_ward(prefix="ICX")
        assert exc_info.value.messages["ward"] == ["Ward already exists"]

    def test_names_differing_only_in_case_collide(self):
        _create_ward()
        with pytest.raises(ValidationError):
            _create_ward(name="icu  ward", prefix="IC2")

    def test_bed_ids_taken_by_another_ward_fail(self):
        _create_ward()
        with pytest.raises(ValidationError) as exc_info:
            _create_ward(name="Second ICU", prefix="ICU", num_beds=1)
        assert "bed_id" in exc_info.value.messages
        assert not current_domain.repository_for(Ward).has_ward("second-icu")

    def test_missing_prefix_fails(self):
        with pytest.raises(ValidationError):
            CreateWard(name="No Prefix Ward")


class TestUpdateWard:
    def test_merge_patch(self):
        ward_id = _create_ward(description="Critical care")
        current_domain.process(UpdateWard(ward_id=ward_id, rate_per_day=7000.0), asynchronous=False)

        ward = current_domain.repository_for(Ward).get(ward_id)
        assert ward.rate_per_day == 7000.0
        assert ward.name == "ICU Ward"
        assert ward.description == "Critical care"

    def test_prefix_change_is_persisted_for_every_bed(self):
        ward_id = _create_ward()
        current_domain.process(UpdateWard(ward_id=ward_id, prefix="CCU"), asynchronous=False)

        ward = current_domain.repository_for(Ward).get(ward_id)
        assert ward.bed_ids() == {"CCU-01", "CCU-02", "CCU-03"}

    def test_add_beds(self):
        ward_id = _create_ward()
        current_domain.process(UpdateWard(ward_id=ward_id, add_beds=2), asynchronous=False)

        ward = current_domain.repository_for(Ward).get(ward_id)
        assert ward.total_beds == 5
        assert "ICU-05" in ward.bed_ids()

    def test_prefix_clash_with_another_ward_fails(self):
        _create_ward(name="Cardiac", prefix="CCU", num_beds=1)
        ward_id = _create_ward()
        with pytest.raises(ValidationError):
            current_domain.process(UpdateWard(ward_id=ward_id, prefix="CCU"), asynchronous=False)

        ward = current_domain.repository_for(Ward).get(ward_id)
        assert ward.prefix == "ICU"

    def test_unknown_ward_fails(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateWard(ward_id="nowhere", name="X"), asynchronous=False)


class TestDeleteWard:
    def test_removes_ward(self):
        ward_id = _create_ward()
        current_domain.process(DeleteWard(ward_id=ward_id), asynchronous=False)
        assert not current_domain.repository_for(Ward).has_ward(ward_id)

    def test_bed_ids_are_free_again(self):
        ward_id = _create_ward()
        current_domain.process(DeleteWard(ward_id=ward_id), asynchronous=False)
        assert _create_ward(name="New ICU") == "new-icu"

    def test_unknown_ward_fails(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteWard(ward_id="nowhere"), asynchronous=False)
