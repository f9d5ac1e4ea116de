"""Domain events for the Ward aggregate.

Bed and ward snapshots travel as JSON-serialized Text so that listeners can
broadcast them without reading the store again.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from inpatient.domain import inpatient


@inpatient.event(part_of="Ward")
class WardCreated:
    """A new ward was created and its beds provisioned."""

    __version__ = 1

    ward_id = Identifier(required=True)
    name = String(required=True)
    prefix = String(required=True)
    ward_type = String(required=True)
    rate_per_day = Float()
    total_beds = Integer()  # Not required: zero is a valid count
    beds = Text(required=True, sanitize=False)  # JSON array of bed views
    created_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class WardUpdated:
    """Ward details were updated, beds renumbered or appended."""

    __version__ = 1

    ward_id = Identifier(required=True)
    name = String(required=True)
    prefix = String(required=True)
    previous_prefix = String(required=True)
    ward_type = String(required=True)
    rate_per_day = Float()
    total_beds = Integer()
    beds_added = Integer()
    ward = Text(required=True, sanitize=False)  # JSON ward view without beds
    updated_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class WardDeleted:
    """A ward and all of its beds were removed."""

    __version__ = 1

    ward_id = Identifier(required=True)
    beds_removed = Integer()
    deleted_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class BedsAdded:
    """New beds were appended to a ward."""

    __version__ = 1

    ward_id = Identifier(required=True)
    beds = Text(required=True, sanitize=False)  # JSON array of bed views
    total_beds = Integer()
    added_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class BedDeleted:
    """An unoccupied bed was removed from its ward."""

    __version__ = 1

    ward_id = Identifier(required=True)
    bed_id = String(required=True)
    total_beds = Integer()
    deleted_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class BedUpdated:
    """A bed's status or occupant was overridden directly."""

    __version__ = 1

    ward_id = Identifier(required=True)
    bed_id = String(required=True)
    status = String(required=True)
    bed = Text(required=True, sanitize=False)  # JSON bed view
    updated_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class PatientAssigned:
    """A patient was admitted to an available bed."""

    __version__ = 1

    ward_id = Identifier(required=True)  # Ward named by the caller, display context only
    bed_id = String(required=True)
    patient_name = String()
    bed = Text(required=True, sanitize=False)
    assigned_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class PatientDischarged:
    """A bed was cleared of its occupant."""

    __version__ = 1

    ward_id = Identifier(required=True)  # Ward named by the caller, display context only
    bed_id = String(required=True)
    patient_name = String(required=True)
    bed = Text(required=True, sanitize=False)
    discharged_at = DateTime(required=True)


@inpatient.event(part_of="Ward")
class PatientTransferred:
    """An occupant moved from one bed to another, possibly across wards."""

    __version__ = 1

    from_ward_id = Identifier(required=True)
    to_ward_id = Identifier(required=True)
    from_bed_id = String(required=True)
    to_bed_id = String(required=True)
    patient_name = String()
    from_bed = Text(required=True, sanitize=False)
    to_bed = Text(required=True, sanitize=False)
    transferred_at = DateTime(required=True)
