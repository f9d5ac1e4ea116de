"""Ward aggregate (CQRS): a grouping of inpatient beds sharing a prefix and rate.

Beds are entities of the ward: the persistence provider stores them in their
own table, linked to the ward by its identifier. The ward keeps ``total_beds``
in step with its bed list on every add and remove.

Bed occupancy state machine:
    AVAILABLE → OCCUPIED (assign)
    OCCUPIED | CRITICAL | any → AVAILABLE (discharge)
    CRITICAL, MAINTENANCE, RESERVED are side states set only by a direct
    status override.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from inpatient.domain import inpatient
from inpatient.ward.events import (
    BedDeleted,
    BedsAdded,
    BedUpdated,
    PatientAssigned,
    PatientDischarged,
    PatientTransferred,
    WardCreated,
    WardDeleted,
    WardUpdated,
)

UNKNOWN_PATIENT = "Unknown"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class BedStatus(Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"
    RESERVED = "reserved"


# Statuses that block assignment, transfer into, and deletion
OCCUPIED_STATUSES = frozenset({BedStatus.OCCUPIED.value, BedStatus.CRITICAL.value})


class WardType(Enum):
    GENERAL = "general"
    ICU = "icu"
    PRIVATE = "private"
    SEMI_PRIVATE = "semi-private"
    PEDIATRIC = "pediatric"
    MATERNITY = "maternity"
    EMERGENCY = "emergency"
    SURGICAL = "surgical"
    ORTHOPEDIC = "orthopedic"
    CARDIAC = "cardiac"
    NEURO = "neuro"
    ONCOLOGY = "oncology"


# ---------------------------------------------------------------------------
# Identity helpers
# ---------------------------------------------------------------------------
def derive_ward_id(name):
    """Slug a ward name: lower-case, whitespace runs to hyphens, drop the rest."""
    slug = re.sub(r"\s+", "-", (name or "").lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def format_bed_number(sequence):
    return f"{int(sequence):02d}"


def format_bed_id(prefix, number):
    return f"{prefix}-{number}"


def _iso(value):
    return value.isoformat() if value else None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@inpatient.value_object(part_of="Ward")
class Occupant:
    """Snapshot of a patient's admission data, embedded in a bed."""

    name = String(max_length=255)
    diagnosis = String(max_length=500)
    admit_date = DateTime()
    doctor = String(max_length=255)
    patient_id = Identifier()


def occupant_fields(occupant):
    if occupant is None:
        return {}
    return {
        "name": occupant.name,
        "diagnosis": occupant.diagnosis,
        "admit_date": occupant.admit_date,
        "doctor": occupant.doctor,
        "patient_id": occupant.patient_id,
    }


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@inpatient.entity(part_of="Ward", limit=None)
class Bed:
    """A single addressable unit of inpatient capacity."""

    bed_id = String(required=True, max_length=20)
    number = String(required=True, max_length=10)
    status = String(choices=BedStatus, default=BedStatus.AVAILABLE.value)
    occupant = ValueObject(Occupant)
    last_updated = DateTime()
    created_at = DateTime()

    @property
    def is_occupied(self):
        return self.status in OCCUPIED_STATUSES

    @property
    def sequence(self):
        return int(self.number)


# ---------------------------------------------------------------------------
# Views (shared by the HTTP layer and broadcast payloads)
# ---------------------------------------------------------------------------
def occupant_view(occupant):
    if occupant is None:
        return None
    return {
        "name": occupant.name,
        "diagnosis": occupant.diagnosis,
        "admitDate": _iso(occupant.admit_date),
        "doctor": occupant.doctor,
        "patientId": str(occupant.patient_id) if occupant.patient_id else None,
    }


def bed_view(bed, ward_id):
    return {
        "id": bed.bed_id,
        "number": bed.number,
        "ward": str(ward_id),
        "status": bed.status,
        "patient": occupant_view(bed.occupant),
        "lastUpdated": _iso(bed.last_updated),
        "createdAt": _iso(bed.created_at),
    }


def ward_view(ward, include_beds=True):
    view = {
        "id": str(ward.id),
        "name": ward.name,
        "prefix": ward.prefix,
        "type": ward.ward_type,
        "ratePerDay": ward.rate_per_day,
        "totalBeds": ward.total_beds,
        "description": ward.description,
        "floor": ward.floor,
        "createdAt": _iso(ward.created_at),
        "updatedAt": _iso(ward.updated_at),
    }
    if include_beds:
        view["beds"] = [bed_view(bed, ward.id) for bed in ward.sorted_beds()]
    return view


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@inpatient.aggregate
class Ward:
    """An administrative grouping of beds sharing a prefix, type and daily rate."""

    name = String(required=True, max_length=255)
    prefix = String(required=True, max_length=5)
    ward_type = String(choices=WardType, default=WardType.GENERAL.value)
    rate_per_day = Float(default=0.0)
    total_beds = Integer(default=0)
    description = Text()
    floor = String(max_length=50)
    beds = HasMany(Bed)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        prefix,
        ward_type=None,
        rate_per_day=None,
        num_beds=0,
        description=None,
        floor=None,
    ):
        """Create a ward and provision ``num_beds`` available beds numbered from 01."""
        ward_id = derive_ward_id(name)
        if not re.search(r"[a-z0-9]", ward_id):
            raise ValidationError({"name": ["Ward name must contain at least one letter or digit"]})

        now = datetime.now(UTC)
        ward = cls(
            id=ward_id,
            name=name,
            prefix=(prefix or "").strip().upper(),
            ward_type=ward_type or WardType.GENERAL.value,
            rate_per_day=rate_per_day or 0.0,
            total_beds=0,
            description=description,
            floor=floor,
            created_at=now,
            updated_at=now,
        )
        new_beds = ward._provision(num_beds or 0, BedStatus.AVAILABLE.value, now)
        ward.total_beds = len(new_beds)

        ward.raise_(
            WardCreated(
                ward_id=ward_id,
                name=ward.name,
                prefix=ward.prefix,
                ward_type=ward.ward_type,
                rate_per_day=ward.rate_per_day,
                total_beds=ward.total_beds,
                beds=json.dumps([bed_view(bed, ward_id) for bed in new_beds]),
                created_at=now,
            )
        )
        return ward

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def sorted_beds(self):
        return sorted(self.beds or [], key=lambda bed: bed.sequence)

    def find_bed(self, bed_id):
        return next((bed for bed in (self.beds or []) if bed.bed_id == bed_id), None)

    def bed(self, bed_id):
        """Return the bed with the given display id or raise ObjectNotFoundError."""
        bed = self.find_bed(bed_id)
        if bed is None:
            raise ObjectNotFoundError({"bed": [f"Bed {bed_id} not found"]})
        return bed

    def bed_ids(self):
        return {bed.bed_id for bed in (self.beds or [])}

    # -------------------------------------------------------------------
    # Ward lifecycle
    # -------------------------------------------------------------------
    def update_details(
        self,
        name=None,
        prefix=None,
        rate_per_day=None,
        ward_type=None,
        description=None,
        floor=None,
        add_beds=None,
    ):
        """Merge-patch the ward. Omitted (None) fields keep their value.

        A new prefix renames every bed from its existing number. ``add_beds``
        appends beds after the current count.
        """
        previous_prefix = self.prefix
        now = datetime.now(UTC)

        if name:
            self.name = name
        if prefix:
            self.prefix = prefix.strip().upper()
        if rate_per_day is not None:
            self.rate_per_day = rate_per_day
        if ward_type:
            self.ward_type = ward_type
        if description is not None:
            self.description = description
        if floor is not None:
            self.floor = floor

        if self.prefix != previous_prefix:
            for bed in self.beds or []:
                bed.bed_id = format_bed_id(self.prefix, bed.number)
                bed.last_updated = now

        added = 0
        if add_beds and add_beds > 0:
            existing = len(self.beds or [])
            added = len(self._provision(add_beds, BedStatus.AVAILABLE.value, now))
            self.total_beds = existing + added

        self.updated_at = now
        self.raise_(
            WardUpdated(
                ward_id=str(self.id),
                name=self.name,
                prefix=self.prefix,
                previous_prefix=previous_prefix,
                ward_type=self.ward_type,
                rate_per_day=self.rate_per_day,
                total_beds=self.total_beds,
                beds_added=added,
                ward=json.dumps(ward_view(self, include_beds=False)),
                updated_at=now,
            )
        )

    def close(self):
        """Remove every bed ahead of deleting the ward. Occupied beds go too."""
        removed = list(self.beds or [])
        for bed in removed:
            self.remove_beds(bed)
        self.total_beds = 0
        self.updated_at = datetime.now(UTC)
        self.raise_(
            WardDeleted(
                ward_id=str(self.id),
                beds_removed=len(removed),
                deleted_at=self.updated_at,
            )
        )

    # -------------------------------------------------------------------
    # Bed lifecycle
    # -------------------------------------------------------------------
    def _provision(self, count, status, now):
        """Append ``count`` beds numbered after the current bed count."""
        existing = len(self.beds or [])
        taken = self.bed_ids()
        created = []
        for sequence in range(existing + 1, existing + count + 1):
            number = format_bed_number(sequence)
            bed_id = format_bed_id(self.prefix, number)
            if bed_id in taken:
                raise ValidationError({"bed_id": [f"Bed {bed_id} already exists"]})
            bed = Bed(
                bed_id=bed_id,
                number=number,
                status=status,
                created_at=now,
                last_updated=now,
            )
            self.add_beds(bed)
            created.append(bed)
        return created

    def provision_beds(self, num_beds=1, status=None):
        """Append ``num_beds`` beds with the given status (default available)."""
        now = datetime.now(UTC)
        existing = len(self.beds or [])
        created = self._provision(num_beds, status or BedStatus.AVAILABLE.value, now)
        self.total_beds = existing + len(created)
        self.updated_at = now
        self.raise_(
            BedsAdded(
                ward_id=str(self.id),
                beds=json.dumps([bed_view(bed, self.id) for bed in created]),
                total_beds=self.total_beds,
                added_at=now,
            )
        )
        return created

    def decommission_bed(self, bed_id):
        """Remove an unoccupied bed and decrement the bed count, floored at zero."""
        bed = self.bed(bed_id)
        if bed.is_occupied:
            raise ValidationError({"bed": ["Cannot delete occupied bed"]})

        self.remove_beds(bed)
        self.total_beds = max(0, (self.total_beds or 0) - 1)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            BedDeleted(
                ward_id=str(self.id),
                bed_id=bed_id,
                total_beds=self.total_beds,
                deleted_at=self.updated_at,
            )
        )

    def override_bed(self, bed_id, status=None, patient=None, clear_patient=False):
        """Field-level override of a bed's status and occupant.

        Bypasses occupancy rules. Provided occupant fields are merged into the
        current occupant; ``clear_patient`` removes it.
        """
        bed = self.bed(bed_id)
        now = datetime.now(UTC)

        if status:
            bed.status = status
        if clear_patient:
            bed.occupant = None
        elif patient:
            merged = occupant_fields(bed.occupant)
            merged.update({key: value for key, value in patient.items() if value is not None})
            bed.occupant = Occupant(**merged)
        bed.last_updated = now

        self.raise_(
            BedUpdated(
                ward_id=str(self.id),
                bed_id=bed_id,
                status=bed.status,
                bed=json.dumps(bed_view(bed, self.id)),
                updated_at=now,
            )
        )
        return bed

    # -------------------------------------------------------------------
    # Occupancy transitions
    # -------------------------------------------------------------------
    def assign_patient(self, bed_id, patient_name, diagnosis=None, doctor=None, patient_id=None, context_ward_id=None):
        bed = self.bed(bed_id)
        if bed.is_occupied:
            raise ValidationError({"bed": ["Bed is already occupied"]})

        now = datetime.now(UTC)
        bed.status = BedStatus.OCCUPIED.value
        bed.occupant = Occupant(
            name=patient_name,
            diagnosis=diagnosis,
            admit_date=now,
            doctor=doctor,
            patient_id=patient_id,
        )
        bed.last_updated = now

        self.raise_(
            PatientAssigned(
                ward_id=str(context_ward_id or self.id),
                bed_id=bed_id,
                patient_name=patient_name,
                bed=json.dumps(bed_view(bed, self.id)),
                assigned_at=now,
            )
        )
        return bed

    def discharge_patient(self, bed_id, context_ward_id=None):
        """Clear the bed and return the discharged occupant's name."""
        bed = self.bed(bed_id)
        patient_name = (bed.occupant.name if bed.occupant else None) or UNKNOWN_PATIENT

        now = datetime.now(UTC)
        bed.status = BedStatus.AVAILABLE.value
        bed.occupant = None
        bed.last_updated = now

        self.raise_(
            PatientDischarged(
                ward_id=str(context_ward_id or self.id),
                bed_id=bed_id,
                patient_name=patient_name,
                bed=json.dumps(bed_view(bed, self.id)),
                discharged_at=now,
            )
        )
        return patient_name

    def transfer_patient(self, from_bed_id, target_ward, to_bed_id):
        """Move the occupant of one of this ward's beds into ``target_ward``.

        The destination takes the source's occupant and status as they are;
        the source returns to available. ``target_ward`` may be this ward.
        """
        source = self.bed(from_bed_id)
        destination = target_ward.bed(to_bed_id)

        if source is destination or from_bed_id == to_bed_id:
            raise ValidationError({"bed": ["Source and destination beds must differ"]})
        if source.occupant is None:
            raise ValidationError({"bed": ["Source bed has no patient"]})
        if destination.is_occupied:
            raise ValidationError({"bed": ["Destination bed is occupied"]})

        now = datetime.now(UTC)
        patient_name = source.occupant.name

        destination.occupant = Occupant(**occupant_fields(source.occupant))
        destination.status = source.status
        destination.last_updated = now

        source.occupant = None
        source.status = BedStatus.AVAILABLE.value
        source.last_updated = now

        self.raise_(
            PatientTransferred(
                from_ward_id=str(self.id),
                to_ward_id=str(target_ward.id),
                from_bed_id=from_bed_id,
                to_bed_id=to_bed_id,
                patient_name=patient_name,
                from_bed=json.dumps(bed_view(source, self.id)),
                to_bed=json.dumps(bed_view(destination, target_ward.id)),
                transferred_at=now,
            )
        )
        return patient_name
