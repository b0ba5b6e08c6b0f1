from fastapi import APIRouter, Depends, HTTPException, Response

from bookease.api.v1.schemas import (
    CourseCreateSchema,
    CourseScheduleCreateSchema,
    CourseScheduleSchema,
    CourseScheduleUpdateSchema,
    CourseSchema,
    CourseUpdateSchema,
    EnrollRequestSchema,
)
from bookease.application.exceptions import CourseNotFoundError, ScheduleFullError, ScheduleNotFoundError
from bookease.application.ports.auth import AuthPort
from bookease.application.use_cases.catalog import CourseCatalog
from bookease.wiring.dependencies import get_auth, get_course_catalog

router = APIRouter()


def require_admin(auth: AuthPort = Depends(get_auth)) -> None:
    if auth.current_admin() is None:
        raise HTTPException(status_code=401, detail="Admin sign-in required")


@router.get("/courses", response_model=list[CourseSchema])
def list_courses(active_only: bool = False, catalog: CourseCatalog = Depends(get_course_catalog)):
    return [CourseSchema.model_validate(c) for c in catalog.list_courses(active_only=active_only)]


@router.get("/courses/{course_id}", response_model=CourseSchema)
def get_course(course_id: str, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        return CourseSchema.model_validate(catalog.get_course(course_id))
    except CourseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/courses", response_model=CourseSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_course(req: CourseCreateSchema, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        course = catalog.add_course(req.model_dump(mode="json"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CourseSchema.model_validate(course)


@router.patch("/courses/{course_id}", response_model=CourseSchema, dependencies=[Depends(require_admin)])
def update_course(course_id: str, req: CourseUpdateSchema, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        course = catalog.update_course(course_id, req.model_dump(mode="json", exclude_unset=True))
    except CourseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CourseSchema.model_validate(course)


@router.post("/courses/{course_id}/toggle", response_model=CourseSchema, dependencies=[Depends(require_admin)])
def toggle_course(course_id: str, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        return CourseSchema.model_validate(catalog.toggle_course_status(course_id))
    except CourseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/courses/{course_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_course(course_id: str, catalog: CourseCatalog = Depends(get_course_catalog)) -> Response:
    try:
        catalog.delete_course(course_id)
    except CourseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.get("/courses/{course_id}/schedules", response_model=list[CourseScheduleSchema])
def list_course_schedules(course_id: str, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        catalog.get_course(course_id)
    except CourseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [CourseScheduleSchema.model_validate(s) for s in catalog.list_schedules(course_id)]


@router.get("/schedules/{schedule_id}", response_model=CourseScheduleSchema)
def get_schedule(schedule_id: str, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        return CourseScheduleSchema.model_validate(catalog.get_schedule(schedule_id))
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/schedules", response_model=CourseScheduleSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_schedule(req: CourseScheduleCreateSchema, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        schedule = catalog.add_schedule(req.model_dump(mode="json"))
    except CourseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CourseScheduleSchema.model_validate(schedule)


@router.patch("/schedules/{schedule_id}", response_model=CourseScheduleSchema, dependencies=[Depends(require_admin)])
def update_schedule(
    schedule_id: str,
    req: CourseScheduleUpdateSchema,
    catalog: CourseCatalog = Depends(get_course_catalog),
):
    try:
        schedule = catalog.update_schedule(schedule_id, req.model_dump(mode="json", exclude_unset=True))
    except (ScheduleNotFoundError, CourseNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CourseScheduleSchema.model_validate(schedule)


@router.delete("/schedules/{schedule_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_schedule(schedule_id: str, catalog: CourseCatalog = Depends(get_course_catalog)) -> Response:
    try:
        catalog.delete_schedule(schedule_id)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.post("/schedules/{schedule_id}/enroll", response_model=CourseScheduleSchema)
def enroll(schedule_id: str, req: EnrollRequestSchema, catalog: CourseCatalog = Depends(get_course_catalog)):
    try:
        return CourseScheduleSchema.model_validate(catalog.enroll_participant(schedule_id, req.customer_id))
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ScheduleFullError as e:
        raise HTTPException(status_code=409, detail=str(e))
