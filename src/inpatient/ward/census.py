"""Bed census: read-side views over wards and beds. Never mutates state."""

from protean.utils.globals import current_domain

from inpatient.ward.ward import BedStatus, Ward, bed_view, ward_view


def count_beds_by_status(wards):
    """Count beds per status plus a grand total and an occupancy percentage."""
    counts = {status.value: 0 for status in BedStatus}
    total = 0
    for ward in wards:
        for bed in ward.beds or []:
            total += 1
            counts[bed.status] = counts.get(bed.status, 0) + 1

    occupied = counts[BedStatus.OCCUPIED.value]
    return {
        "total": total,
        **counts,
        "occupancyRate": round(occupied / total * 100) if total else 0,
    }


def bed_stats():
    return count_beds_by_status(current_domain.repository_for(Ward).find_all())


def list_wards():
    """Every ward ordered by name, each with its beds ordered by number."""
    return [ward_view(ward) for ward in current_domain.repository_for(Ward).find_all()]


def ward_detail(ward_id, include_beds=True):
    ward = current_domain.repository_for(Ward).get_ward(ward_id)
    return ward_view(ward, include_beds=include_beds)


def bed_detail(bed_id):
    ward = current_domain.repository_for(Ward).find_by_bed_id(bed_id)
    return bed_view(ward.bed(bed_id), ward.id)
