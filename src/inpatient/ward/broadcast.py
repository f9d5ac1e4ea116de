"""Realtime broadcast handler: forwards ward events to connected clients.

Each domain event is mapped to its client-facing event name and payload and
handed to the installed realtime publisher. Publishing is fire-and-forget:
a failed broadcast is logged and never fails the mutation that caused it.
"""

import json

import structlog
from protean.utils.mixins import handle

from inpatient.domain import inpatient
from inpatient.realtime import get_publisher
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
from inpatient.ward.ward import Ward

logger = structlog.get_logger(__name__)


def _publish(event_name: str, payload) -> None:
    try:
        get_publisher().publish(event_name, payload)
    except Exception as e:
        logger.error("Realtime broadcast failed", event_name=event_name, error=str(e))


def _ward_summary(event) -> dict:
    return {
        "id": str(event.ward_id),
        "name": event.name,
        "prefix": event.prefix,
        "type": event.ward_type,
        "ratePerDay": event.rate_per_day,
        "totalBeds": event.total_beds or 0,
    }


@inpatient.event_handler(part_of=Ward)
class WardBroadcaster:
    """Publishes every ward and bed change under its realtime event name."""

    @handle(WardCreated)
    def on_ward_created(self, event: WardCreated) -> None:
        _publish("wardCreated", {"ward": _ward_summary(event), "beds": json.loads(event.beds)})

    @handle(WardUpdated)
    def on_ward_updated(self, event: WardUpdated) -> None:
        ward = json.loads(event.ward)
        ward["previousPrefix"] = event.previous_prefix
        ward["bedsAdded"] = event.beds_added or 0
        _publish("wardUpdated", ward)

    @handle(WardDeleted)
    def on_ward_deleted(self, event: WardDeleted) -> None:
        _publish("wardDeleted", str(event.ward_id))

    @handle(BedsAdded)
    def on_beds_added(self, event: BedsAdded) -> None:
        _publish("bedsAdded", {"wardId": str(event.ward_id), "beds": json.loads(event.beds)})

    @handle(BedDeleted)
    def on_bed_deleted(self, event: BedDeleted) -> None:
        _publish("bedDeleted", {"wardId": str(event.ward_id), "bedId": event.bed_id})

    @handle(BedUpdated)
    def on_bed_updated(self, event: BedUpdated) -> None:
        _publish("bedUpdated", json.loads(event.bed))

    @handle(PatientAssigned)
    def on_patient_assigned(self, event: PatientAssigned) -> None:
        _publish("patientAssigned", {"bed": json.loads(event.bed), "wardId": str(event.ward_id)})

    @handle(PatientDischarged)
    def on_patient_discharged(self, event: PatientDischarged) -> None:
        _publish(
            "patientDischarged",
            {
                "bed": json.loads(event.bed),
                "patientName": event.patient_name,
                "wardId": str(event.ward_id),
            },
        )

    @handle(PatientTransferred)
    def on_patient_transferred(self, event: PatientTransferred) -> None:
        _publish(
            "patientTransferred",
            {
                "fromBed": json.loads(event.from_bed),
                "toBed": json.loads(event.to_bed),
                "patientName": event.patient_name,
            },
        )
