"""FastAPI routes for bed management: wards, beds and patient occupancy.

Static paths (``/wards``, ``/stats``, ``/transfer``) are registered before the
``/{ward_id}/{bed_id}`` routes so they are never captured as a bed address.
"""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from inpatient.api.schemas import (
    AddBedsRequest,
    AssignPatientRequest,
    CreateWardRequest,
    SuccessResponse,
    TransferRequest,
    UpdateBedRequest,
    UpdateWardRequest,
)
from inpatient.ward.beds import AddBeds, DeleteBed, UpdateBed
from inpatient.ward.census import bed_detail, bed_stats, list_wards, ward_detail
from inpatient.ward.management import CreateWard, DeleteWard, UpdateWard
from inpatient.ward.occupancy import AssignPatient, DischargePatient, TransferPatient

router = APIRouter(prefix="/api/beds", tags=["beds"])


# ---------------------------------------------------------------------------
# Wards
# ---------------------------------------------------------------------------
@router.get("/wards", response_model=SuccessResponse)
async def get_wards() -> SuccessResponse:
    return SuccessResponse(data=list_wards())


@router.post("/wards", status_code=201, response_model=SuccessResponse)
async def create_ward(body: CreateWardRequest) -> SuccessResponse:
    command = CreateWard(
        name=body.name,
        prefix=body.prefix,
        ward_type=body.ward_type,
        rate_per_day=body.rate_per_day,
        num_beds=body.num_beds,
        description=body.description,
        floor=body.floor,
    )
    ward_id = current_domain.process(command, asynchronous=False)
    return SuccessResponse(data=ward_detail(ward_id))


@router.put("/wards/{ward_id}", response_model=SuccessResponse)
async def update_ward(ward_id: str, body: UpdateWardRequest) -> SuccessResponse:
    command = UpdateWard(
        ward_id=ward_id,
        name=body.name,
        prefix=body.prefix,
        rate_per_day=body.rate_per_day,
        add_beds=body.add_beds,
        ward_type=body.ward_type,
        description=body.description,
        floor=body.floor,
    )
    current_domain.process(command, asynchronous=False)
    return SuccessResponse(data=ward_detail(ward_id))


@router.delete("/wards/{ward_id}", response_model=SuccessResponse)
async def delete_ward(ward_id: str) -> SuccessResponse:
    current_domain.process(DeleteWard(ward_id=ward_id), asynchronous=False)
    return SuccessResponse(data={})


@router.post("/wards/{ward_id}/beds", status_code=201, response_model=SuccessResponse)
async def add_beds(ward_id: str, body: AddBedsRequest) -> SuccessResponse:
    command = AddBeds(ward_id=ward_id, num_beds=body.num_beds or 1, status=body.status)
    created = set(current_domain.process(command, asynchronous=False))
    beds = [bed for bed in ward_detail(ward_id)["beds"] if bed["id"] in created]
    return SuccessResponse(data=beds)


# ---------------------------------------------------------------------------
# Census and transfers
# ---------------------------------------------------------------------------
@router.get("/stats", response_model=SuccessResponse)
async def get_stats() -> SuccessResponse:
    return SuccessResponse(data=bed_stats())


@router.post("/transfer", response_model=SuccessResponse)
async def transfer_patient(body: TransferRequest) -> SuccessResponse:
    command = TransferPatient(from_bed_id=body.from_bed_id, to_bed_id=body.to_bed_id)
    patient_name = current_domain.process(command, asynchronous=False)
    return SuccessResponse(
        data={
            "fromBed": bed_detail(body.from_bed_id),
            "toBed": bed_detail(body.to_bed_id),
            "patientName": patient_name,
        }
    )


# ---------------------------------------------------------------------------
# Individual beds
# ---------------------------------------------------------------------------
@router.put("/{ward_id}/{bed_id}", response_model=SuccessResponse)
async def update_bed(ward_id: str, bed_id: str, body: UpdateBedRequest) -> SuccessResponse:
    clear_patient = "patient" in body.model_fields_set and body.patient is None
    patient = body.patient.model_dump_json(exclude_unset=True) if body.patient else None
    command = UpdateBed(
        ward_id=ward_id,
        bed_id=bed_id,
        status=body.status,
        patient=patient,
        clear_patient=clear_patient,
    )
    current_domain.process(command, asynchronous=False)
    return SuccessResponse(data=bed_detail(bed_id))


@router.delete("/{ward_id}/{bed_id}", response_model=SuccessResponse)
async def delete_bed(ward_id: str, bed_id: str) -> SuccessResponse:
    current_domain.process(DeleteBed(ward_id=ward_id, bed_id=bed_id), asynchronous=False)
    return SuccessResponse(data={})


@router.post("/{ward_id}/{bed_id}/assign", response_model=SuccessResponse)
async def assign_patient(ward_id: str, bed_id: str, body: AssignPatientRequest) -> SuccessResponse:
    command = AssignPatient(
        ward_id=ward_id,
        bed_id=bed_id,
        patient_name=body.patient_name,
        diagnosis=body.diagnosis,
        doctor=body.doctor,
        patient_id=body.patient_id,
    )
    current_domain.process(command, asynchronous=False)
    return SuccessResponse(data=bed_detail(bed_id))


@router.post("/{ward_id}/{bed_id}/discharge", response_model=SuccessResponse)
async def discharge_patient(ward_id: str, bed_id: str) -> SuccessResponse:
    patient_name = current_domain.process(DischargePatient(ward_id=ward_id, bed_id=bed_id), asynchronous=False)
    return SuccessResponse(data={"bed": bed_detail(bed_id), "patientName": patient_name})
