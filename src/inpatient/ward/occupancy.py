"""Patient occupancy: assign, discharge and transfer between beds.

Transfer may span two wards; both are added to the repository inside the
same Unit of Work so the source and destination commit together.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from inpatient.domain import inpatient
from inpatient.ward.ward import Ward

logger = structlog.get_logger(__name__)


@inpatient.command(part_of="Ward")
class AssignPatient:
    ward_id = Identifier()  # Display context carried into the published event
    bed_id = String(required=True, max_length=20)
    patient_name = String(required=True, max_length=255)
    diagnosis = String(max_length=500)
    doctor = String(max_length=255)
    patient_id = Identifier()


@inpatient.command(part_of="Ward")
class DischargePatient:
    ward_id = Identifier()
    bed_id = String(required=True, max_length=20)


@inpatient.command(part_of="Ward")
class TransferPatient:
    from_bed_id = String(required=True, max_length=20)
    to_bed_id = String(required=True, max_length=20)


@inpatient.command_handler(part_of=Ward)
class OccupancyHandler:
    @handle(AssignPatient)
    def assign_patient(self, command):
        repo = current_domain.repository_for(Ward)
        ward = repo.find_by_bed_id(command.bed_id)
        ward.assign_patient(
            command.bed_id,
            patient_name=command.patient_name,
            diagnosis=command.diagnosis,
            doctor=command.doctor,
            patient_id=command.patient_id,
            context_ward_id=command.ward_id,
        )
        repo.add(ward)

        logger.info("Patient assigned", ward_id=str(ward.id), bed_id=command.bed_id)
        return str(ward.id)

    @handle(DischargePatient)
    def discharge_patient(self, command):
        repo = current_domain.repository_for(Ward)
        ward = repo.find_by_bed_id(command.bed_id)
        patient_name = ward.discharge_patient(command.bed_id, context_ward_id=command.ward_id)
        repo.add(ward)

        logger.info("Patient discharged", ward_id=str(ward.id), bed_id=command.bed_id)
        return patient_name

    @handle(TransferPatient)
    def transfer_patient(self, command):
        repo = current_domain.repository_for(Ward)
        source_ward = repo.find_by_bed_id(command.from_bed_id)
        if source_ward.find_bed(command.to_bed_id) is not None:
            target_ward = source_ward
        else:
            target_ward = repo.find_by_bed_id(command.to_bed_id)

        patient_name = source_ward.transfer_patient(command.from_bed_id, target_ward, command.to_bed_id)

        repo.add(source_ward)
        if target_ward is not source_ward:
            repo.add(target_ward)

        logger.info(
            "Patient transferred",
            from_bed_id=command.from_bed_id,
            to_bed_id=command.to_bed_id,
            from_ward_id=str(source_ward.id),
            to_ward_id=str(target_ward.id),
        )
        return patient_name
