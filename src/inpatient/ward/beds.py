"""Bed lifecycle: adding, removing and overriding beds."""

import json

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from inpatient.domain import inpatient
from inpatient.ward.ward import Ward

logger = structlog.get_logger(__name__)


@inpatient.command(part_of="Ward")
class AddBeds:
    """Append beds to a ward, numbered after its current bed count."""

    ward_id = Identifier(required=True)
    num_beds = Integer(default=1, min_value=1)
    status = String(max_length=20)


@inpatient.command(part_of="Ward")
class DeleteBed:
    """Remove an unoccupied bed."""

    ward_id = Identifier()  # Ward named by the caller; the bed's own ward is used
    bed_id = String(required=True, max_length=20)


@inpatient.command(part_of="Ward")
class UpdateBed:
    """Raw override of a bed's status and occupant fields."""

    ward_id = Identifier()
    bed_id = String(required=True, max_length=20)
    status = String(max_length=20)
    patient = Text(sanitize=False)  # JSON object of occupant fields to merge
    clear_patient = Boolean(default=False)


@inpatient.command_handler(part_of=Ward)
class BedManagementHandler:
    @handle(AddBeds)
    def add_beds(self, command):
        repo = current_domain.repository_for(Ward)
        ward = repo.get_ward(command.ward_id)
        created = ward.provision_beds(num_beds=command.num_beds or 1, status=command.status)
        repo.ensure_unique_bed_ids(ward)
        repo.add(ward)

        logger.info("Beds added", ward_id=str(ward.id), count=len(created), total_beds=ward.total_beds)
        return [bed.bed_id for bed in created]

    @handle(DeleteBed)
    def delete_bed(self, command):
        repo = current_domain.repository_for(Ward)
        ward = repo.find_by_bed_id(command.bed_id)
        ward.decommission_bed(command.bed_id)
        repo.add(ward)

        logger.info("Bed deleted", ward_id=str(ward.id), bed_id=command.bed_id)

    @handle(UpdateBed)
    def update_bed(self, command):
        repo = current_domain.repository_for(Ward)
        ward = repo.find_by_bed_id(command.bed_id)
        patient = json.loads(command.patient) if command.patient else None
        ward.override_bed(
            command.bed_id,
            status=command.status,
            patient=patient,
            clear_patient=bool(command.clear_patient),
        )
        repo.add(ward)
        return str(ward.id)
