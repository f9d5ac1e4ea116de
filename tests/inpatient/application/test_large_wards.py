"""Application tests for wards holding more beds than a single default page."""

import pytest
from protean import current_domain

from inpatient.ward.beds import AddBeds
from inpatient.ward.census import bed_stats
from inpatient.ward.management import CreateWard, UpdateWard
from inpatient.ward.occupancy import AssignPatient
from inpatient.ward.ward import Ward

BED_COUNT = 120


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _ward(ward_id):
    return current_domain.repository_for(Ward).get(ward_id)


@pytest.fixture
def big_ward():
    return _process(CreateWard(name="Big Ward", prefix="BIG", num_beds=BED_COUNT))


class TestLargeWard:
    def test_reload_returns_every_bed(self, big_ward):
        ward = _ward(big_ward)
        assert ward.total_beds == BED_COUNT
        assert len(ward.beds) == BED_COUNT
        assert ward.find_bed("BIG-120") is not None

    def test_stats_count_every_bed(self, big_ward):
        assert bed_stats()["total"] == BED_COUNT
        assert bed_stats()["available"] == BED_COUNT

    def test_beds_past_the_first_hundred_are_addressable(self, big_ward):
        _process(AssignPatient(ward_id=big_ward, bed_id="BIG-115", patient_name="Jane Doe"))
        assert _ward(big_ward).find_bed("BIG-115").status == "occupied"

    def test_prefix_change_renames_every_bed(self, big_ward):
        _process(UpdateWard(ward_id=big_ward, prefix="HUGE"))
        bed_ids = _ward(big_ward).bed_ids()
        assert len(bed_ids) == BED_COUNT
        assert all(bed_id.startswith("HUGE-") for bed_id in bed_ids)

    def test_add_beds_continues_after_last_bed(self, big_ward):
        created = _process(AddBeds(ward_id=big_ward, num_beds=1))
        assert created == ["BIG-121"]

        ward = _ward(big_ward)
        assert ward.total_beds == BED_COUNT + 1
        assert len(ward.bed_ids()) == BED_COUNT + 1
