"""Ward management: commands and handler for the ward lifecycle."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from inpatient.domain import inpatient
from inpatient.ward.ward import Ward, derive_ward_id

logger = structlog.get_logger(__name__)


@inpatient.command(part_of="Ward")
class CreateWard:
    """Create a ward and provision its beds."""

    name = String(required=True, max_length=255)
    prefix = String(required=True, max_length=5)
    ward_type = String(max_length=50)
    rate_per_day = Float()
    num_beds = Integer(default=0)
    description = Text()
    floor = String(max_length=50)


@inpatient.command(part_of="Ward")
class UpdateWard:
    """Merge-patch ward details. Unset fields keep their stored value."""

    ward_id = Identifier(required=True)
    name = String(max_length=255)
    prefix = String(max_length=5)
    rate_per_day = Float()
    add_beds = Integer()
    ward_type = String(max_length=50)
    description = Text()
    floor = String(max_length=50)


@inpatient.command(part_of="Ward")
class DeleteWard:
    """Delete a ward together with all of its beds."""

    ward_id = Identifier(required=True)


@inpatient.command_handler(part_of=Ward)
class WardManagementHandler:
    @handle(CreateWard)
    def create_ward(self, command):
        repo = current_domain.repository_for(Ward)

        ward_id = derive_ward_id(command.name)
        if ward_id and repo.has_ward(ward_id):
            raise ValidationError({"ward": ["Ward already exists"]})

        ward = Ward.create(
            name=command.name,
            prefix=command.prefix,
            ward_type=command.ward_type,
            rate_per_day=command.rate_per_day,
            num_beds=command.num_beds or 0,
            description=command.description,
            floor=command.floor,
        )
        repo.ensure_unique_bed_ids(ward)
        repo.add(ward)

        logger.info("Ward created", ward_id=str(ward.id), total_beds=ward.total_beds)
        return str(ward.id)

    @handle(UpdateWard)
    def update_ward(self, command):
        repo = current_domain.repository_for(Ward)
        ward = repo.get_ward(command.ward_id)
        ward.update_details(
            name=command.name,
            prefix=command.prefix,
            rate_per_day=command.rate_per_day,
            ward_type=command.ward_type,
            description=command.description,
            floor=command.floor,
            add_beds=command.add_beds,
        )
        repo.ensure_unique_bed_ids(ward)
        repo.add(ward)
        return str(ward.id)

    @handle(DeleteWard)
    def delete_ward(self, command):
        repo = current_domain.repository_for(Ward)
        ward = repo.get_ward(command.ward_id)

        # Persist the bed removals first, then drop the ward record
        ward.close()
        repo.add(ward)
        repo._dao.delete(ward)

        logger.info("Ward deleted", ward_id=str(command.ward_id))
