from fastapi import APIRouter, Depends, HTTPException, Response

from bookease.api.v1.courses import require_admin
from bookease.api.v1.schemas import (
    RecurringScheduleCreateSchema,
    RecurringScheduleSchema,
    RecurringScheduleUpdateSchema,
    TermCreateSchema,
    TermSchema,
    TermUpdateSchema,
)
from bookease.application.exceptions import CourseNotFoundError, ScheduleNotFoundError, TermNotFoundError
from bookease.application.use_cases.terms import TermCatalog
from bookease.wiring.dependencies import get_term_catalog

router = APIRouter()


@router.get("/terms", response_model=list[TermSchema])
def list_terms(active_only: bool = False, terms: TermCatalog = Depends(get_term_catalog)):
    return [TermSchema.model_validate(t) for t in terms.list_terms(active_only=active_only)]


@router.get("/terms/{term_id}", response_model=TermSchema)
def get_term(term_id: str, terms: TermCatalog = Depends(get_term_catalog)):
    try:
        return TermSchema.model_validate(terms.get_term(term_id))
    except TermNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/terms", response_model=TermSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_term(req: TermCreateSchema, terms: TermCatalog = Depends(get_term_catalog)):
    try:
        return TermSchema.model_validate(terms.add_term(req.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/terms/{term_id}", response_model=TermSchema, dependencies=[Depends(require_admin)])
def update_term(term_id: str, req: TermUpdateSchema, terms: TermCatalog = Depends(get_term_catalog)):
    try:
        return TermSchema.model_validate(terms.update_term(term_id, req.model_dump(exclude_unset=True)))
    except TermNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/terms/{term_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_term(term_id: str, terms: TermCatalog = Depends(get_term_catalog)) -> Response:
    try:
        terms.delete_term(term_id)
    except TermNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.get("/recurring-schedules", response_model=list[RecurringScheduleSchema])
def list_recurring_schedules(
    term_id: str | None = None,
    course_id: str | None = None,
    terms: TermCatalog = Depends(get_term_catalog),
):
    schedules = terms.list_recurring_schedules(term_id=term_id, course_id=course_id)
    return [RecurringScheduleSchema.model_validate(s) for s in schedules]


@router.post(
    "/recurring-schedules",
    response_model=RecurringScheduleSchema,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_recurring_schedule(req: RecurringScheduleCreateSchema, terms: TermCatalog = Depends(get_term_catalog)):
    try:
        return RecurringScheduleSchema.model_validate(terms.add_recurring_schedule(req.model_dump()))
    except (CourseNotFoundError, TermNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch(
    "/recurring-schedules/{schedule_id}",
    response_model=RecurringScheduleSchema,
    dependencies=[Depends(require_admin)],
)
def update_recurring_schedule(
    schedule_id: str,
    req: RecurringScheduleUpdateSchema,
    terms: TermCatalog = Depends(get_term_catalog),
):
    try:
        schedule = terms.update_recurring_schedule(schedule_id, req.model_dump(exclude_unset=True))
    except (ScheduleNotFoundError, CourseNotFoundError, TermNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RecurringScheduleSchema.model_validate(schedule)


@router.delete("/recurring-schedules/{schedule_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_recurring_schedule(schedule_id: str, terms: TermCatalog = Depends(get_term_catalog)) -> Response:
    try:
        terms.delete_recurring_schedule(schedule_id)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
