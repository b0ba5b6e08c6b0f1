from fastapi import APIRouter, Depends, HTTPException, Response

from bookease.api.v1.schemas import (
    AttendeeCreatedSchema,
    AttendeeCreateSchema,
    AttendeeSchema,
    AttendeeUpdateSchema,
)
from bookease.application.use_cases.attendees import AttendeeRegistry
from bookease.wiring.dependencies import get_attendee_registry

router = APIRouter()


@router.get("/attendees", response_model=list[AttendeeSchema])
def list_attendees(parent_user_id: str, registry: AttendeeRegistry = Depends(get_attendee_registry)):
    return [AttendeeSchema.model_validate(a) for a in registry.get_attendees_by_parent(parent_user_id)]


@router.post("/attendees", response_model=AttendeeCreatedSchema, status_code=201)
def add_attendee(req: AttendeeCreateSchema, registry: AttendeeRegistry = Depends(get_attendee_registry)):
    try:
        attendee_id = registry.add_attendee(req.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AttendeeCreatedSchema(id=attendee_id)


@router.get("/attendees/{attendee_id}", response_model=AttendeeSchema)
def get_attendee(attendee_id: str, registry: AttendeeRegistry = Depends(get_attendee_registry)):
    attendee = registry.get_attendee(attendee_id)
    if attendee is None:
        raise HTTPException(status_code=404, detail=f"Attendee {attendee_id} not found")
    return AttendeeSchema.model_validate(attendee)


@router.patch("/attendees/{attendee_id}", response_model=AttendeeSchema)
def update_attendee(
    attendee_id: str,
    req: AttendeeUpdateSchema,
    registry: AttendeeRegistry = Depends(get_attendee_registry),
):
    try:
        attendee = registry.update_attendee(attendee_id, req.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if attendee is None:
        raise HTTPException(status_code=404, detail=f"Attendee {attendee_id} not found")
    return AttendeeSchema.model_validate(attendee)


@router.delete("/attendees/{attendee_id}", status_code=204)
def delete_attendee(attendee_id: str, registry: AttendeeRegistry = Depends(get_attendee_registry)) -> Response:
    registry.delete_attendee(attendee_id)
    return Response(status_code=204)
