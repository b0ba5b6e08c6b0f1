from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response

from bookease.api.v1.schemas import (
    BookingSchema,
    BookingStateSchema,
    CustomerSchema,
    DateRequestSchema,
    ModeRequestSchema,
    ServiceRequestSchema,
    SlotsResponseSchema,
    StartSessionRequestSchema,
    TimeSlotRequestSchema,
    TimeSlotSchema,
    WorkflowResponseSchema,
)
from bookease.application.exceptions import BookingInvariantError, CourseNotFoundError
from bookease.application.ports.auth import AuthPort
from bookease.application.ports.workflow_session_store import WorkflowSessionStorePort
from bookease.application.use_cases.booking_workflow import BookingWorkflow, WorkflowResult
from bookease.application.use_cases.catalog import CourseCatalog
from bookease.domain.entities.booking_state import MODE_CONSULTATION, BookingState
from bookease.domain.entities.customer import Customer
from bookease.wiring.dependencies import (
    get_auth,
    get_booking_workflow,
    get_business_today,
    get_course_catalog,
    get_session_store,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _respond(session_id: str, result: WorkflowResult, sessions: WorkflowSessionStorePort) -> WorkflowResponseSchema:
    sessions.set_state(session_id, result.state)
    logger.info(
        "Booking session updated",
        extra={
            "session_id": session_id,
            "action": result.action,
            "step": result.state.current_step,
            "mode": result.state.mode,
        },
    )
    return WorkflowResponseSchema(
        session_id=session_id,
        action=result.action,
        state=BookingStateSchema.model_validate(result.state),
        errors=result.errors,
        booking=BookingSchema.model_validate(result.booking) if result.booking else None,
    )


def _require_session(session_id: str, sessions: WorkflowSessionStorePort) -> None:
    if not sessions.exists(session_id):
        raise HTTPException(status_code=404, detail=f"Booking session {session_id} not found")


def _with_signed_in_user(state: BookingState, auth: AuthPort) -> BookingState:
    user = auth.current_user()
    if state.booking_user is None and user is not None:
        return replace(state, booking_user=user)
    return state


@router.post("/booking-sessions", response_model=WorkflowResponseSchema, status_code=201)
def start_session(
    req: StartSessionRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    catalog: CourseCatalog = Depends(get_course_catalog),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
    auth: AuthPort = Depends(get_auth),
):
    user = auth.current_user()
    if req.course_id is None:
        if req.mode.value == MODE_CONSULTATION:
            raise HTTPException(status_code=400, detail="A consultation needs a course_id")
        result = workflow.start_booking(user)
    else:
        try:
            course = catalog.get_course(req.course_id)
        except CourseNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        if req.mode.value == MODE_CONSULTATION:
            result = workflow.start_consultation(course, user)
        else:
            result = workflow.book_course(course, user)

    session_id = sessions.get_or_create(None)
    return _respond(session_id, result, sessions)


@router.get("/booking-sessions/{session_id}", response_model=WorkflowResponseSchema)
def get_session(session_id: str, sessions: WorkflowSessionStorePort = Depends(get_session_store)):
    _require_session(session_id, sessions)
    state = sessions.get_state(session_id)
    return WorkflowResponseSchema(
        session_id=session_id,
        action="state",
        state=BookingStateSchema.model_validate(state),
    )


@router.put("/booking-sessions/{session_id}/mode", response_model=WorkflowResponseSchema)
def set_mode(
    session_id: str,
    req: ModeRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
):
    _require_session(session_id, sessions)
    result = workflow.set_mode(sessions.get_state(session_id), req.mode.value)
    return _respond(session_id, result, sessions)


@router.put("/booking-sessions/{session_id}/service", response_model=WorkflowResponseSchema)
def select_service(
    session_id: str,
    req: ServiceRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    catalog: CourseCatalog = Depends(get_course_catalog),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
):
    try:
        course = catalog.get_course(req.course_id)
    except CourseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    _require_session(session_id, sessions)
    result = workflow.select_service(sessions.get_state(session_id), course)
    return _respond(session_id, result, sessions)


@router.put("/booking-sessions/{session_id}/date", response_model=WorkflowResponseSchema)
def select_date(
    session_id: str,
    req: DateRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
    today: date = Depends(get_business_today),
):
    _require_session(session_id, sessions)
    result = workflow.select_date(sessions.get_state(session_id), req.date, today=today)
    return _respond(session_id, result, sessions)


@router.get("/booking-sessions/{session_id}/slots", response_model=SlotsResponseSchema)
def list_slots(
    session_id: str,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
):
    _require_session(session_id, sessions)
    state = sessions.get_state(session_id)
    return SlotsResponseSchema(
        date=state.selected_date,
        duration_minutes=workflow.slot_duration(state),
        slots=[TimeSlotSchema.model_validate(s) for s in workflow.time_slots(state)],
    )


@router.put("/booking-sessions/{session_id}/time-slot", response_model=WorkflowResponseSchema)
def select_time_slot(
    session_id: str,
    req: TimeSlotRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
):
    _require_session(session_id, sessions)
    result = workflow.select_time_slot(sessions.get_state(session_id), req.slot_id)
    return _respond(session_id, result, sessions)


@router.put("/booking-sessions/{session_id}/customer", response_model=WorkflowResponseSchema)
def update_customer(
    session_id: str,
    req: CustomerSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
):
    _require_session(session_id, sessions)
    result = workflow.update_customer(sessions.get_state(session_id), Customer(**req.model_dump()))
    return _respond(session_id, result, sessions)


@router.post("/booking-sessions/{session_id}/next", response_model=WorkflowResponseSchema)
def next_step(
    session_id: str,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
    auth: AuthPort = Depends(get_auth),
):
    _require_session(session_id, sessions)
    state = _with_signed_in_user(sessions.get_state(session_id), auth)
    try:
        result = workflow.next(state, current_user=auth.current_user())
    except BookingInvariantError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id, result, sessions)


@router.post("/booking-sessions/{session_id}/back", response_model=WorkflowResponseSchema)
def previous_step(
    session_id: str,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
):
    _require_session(session_id, sessions)
    result = workflow.back(sessions.get_state(session_id))
    return _respond(session_id, result, sessions)


@router.post("/booking-sessions/{session_id}/confirm", response_model=WorkflowResponseSchema)
def confirm(
    session_id: str,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
    auth: AuthPort = Depends(get_auth),
):
    _require_session(session_id, sessions)
    state = _with_signed_in_user(sessions.get_state(session_id), auth)
    try:
        result = workflow.confirm(state)
    except BookingInvariantError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id, result, sessions)


@router.post("/booking-sessions/{session_id}/reset", response_model=WorkflowResponseSchema)
def reset(
    session_id: str,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
    sessions: WorkflowSessionStorePort = Depends(get_session_store),
):
    _require_session(session_id, sessions)
    return _respond(session_id, workflow.reset(), sessions)


@router.delete("/booking-sessions/{session_id}", status_code=204)
def end_session(session_id: str, sessions: WorkflowSessionStorePort = Depends(get_session_store)) -> Response:
    _require_session(session_id, sessions)
    sessions.remove(session_id)
    logger.info("Booking session ended", extra={"session_id": session_id})
    return Response(status_code=204)
