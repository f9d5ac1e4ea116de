"""Repository for the Ward aggregate.

Beds are addressed by their display id (``ICU-01``) rather than by the
entity identifier, so bed lookups resolve the owning ward first.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError

from inpatient.domain import inpatient
from inpatient.ward.ward import Ward

# Upper bound for full scans
MAX_WARDS = 10_000


@inpatient.repository(part_of=Ward)
class WardRepository:
    def get_ward(self, ward_id: str) -> Ward:
        """Load a ward, raising ObjectNotFoundError with a client-facing message."""
        try:
            return self.get(ward_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError({"ward": [f"Ward {ward_id} not found"]}) from None

    def has_ward(self, ward_id: str) -> bool:
        return self.get_or_none(ward_id) is not None

    def find_all(self) -> list[Ward]:
        """All wards ordered by name."""
        wards = self._dao.query.limit(MAX_WARDS).all().items
        return sorted(wards, key=lambda ward: (ward.name or "").lower())

    def find_by_bed_id(self, bed_id: str) -> Ward:
        """Return the ward that owns the bed, or raise ObjectNotFoundError."""
        for ward in self._dao.query.limit(MAX_WARDS).all().items:
            if ward.find_bed(bed_id) is not None:
                return ward
        raise ObjectNotFoundError({"bed": [f"Bed {bed_id} not found"]})

    def bed_ids_outside(self, ward_id: str) -> set[str]:
        """Display ids of every bed that belongs to a ward other than ``ward_id``."""
        taken = set()
        for ward in self._dao.query.limit(MAX_WARDS).all().items:
            if str(ward.id) != str(ward_id):
                taken |= ward.bed_ids()
        return taken

    def ensure_unique_bed_ids(self, ward: Ward) -> None:
        """Bed display ids are unique across wards, not just within one."""
        clash = ward.bed_ids() & self.bed_ids_outside(ward.id)
        if clash:
            raise ValidationError({"bed_id": [f"Bed {min(clash)} already exists in another ward"]})
