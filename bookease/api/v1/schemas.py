from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from bookease.application.use_cases.analytics import AnalyticsSummary


class BookingMode(str, Enum):
    course = "course"
    consultation = "consultation"


class Difficulty(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class RefundType(str, Enum):
    refund = "refund"
    store_credit = "store_credit"


class CourseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    instructor: str
    duration_minutes: int
    price: float
    max_participants: int
    category: str
    difficulty: str
    location: str = ""
    is_active: bool = True
    requirements: str | None = None
    image_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CourseCreateSchema(BaseModel):
    title: str = Field(min_length=1)
    description: str
    instructor: str
    duration_minutes: int = Field(gt=0)
    price: float = Field(ge=0)
    max_participants: int = Field(gt=0)
    category: str
    difficulty: Difficulty = Difficulty.beginner
    location: str = ""
    is_active: bool = True
    requirements: str | None = None
    image_url: str | None = None


class CourseUpdateSchema(BaseModel):
    title: str | None = None
    description: str | None = None
    instructor: str | None = None
    duration_minutes: int | None = Field(default=None, gt=0)
    price: float | None = Field(default=None, ge=0)
    max_participants: int | None = Field(default=None, gt=0)
    category: str | None = None
    difficulty: Difficulty | None = None
    location: str | None = None
    is_active: bool | None = None
    requirements: str | None = None
    image_url: str | None = None


class ScheduleStatus(str, Enum):
    scheduled = "scheduled"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


class CourseScheduleSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    date: str
    start_time: str
    end_time: str
    available_spots: int
    enrolled_participants: list[str] = Field(default_factory=list)
    status: ScheduleStatus
    location: str | None = None
    notes: str | None = None


class CourseScheduleCreateSchema(BaseModel):
    course_id: str
    date: str
    start_time: str
    end_time: str
    available_spots: int | None = Field(default=None, ge=0)
    status: ScheduleStatus = ScheduleStatus.scheduled
    location: str | None = None
    notes: str | None = None


class CourseScheduleUpdateSchema(BaseModel):
    course_id: str | None = None
    date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    available_spots: int | None = Field(default=None, ge=0)
    status: ScheduleStatus | None = None
    location: str | None = None
    notes: str | None = None


class EnrollRequestSchema(BaseModel):
    customer_id: str = Field(min_length=1)


class TermSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    start_date: str
    end_date: str
    is_active: bool
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class TermCreateSchema(BaseModel):
    name: str = Field(min_length=1)
    start_date: str
    end_date: str
    is_active: bool = True
    description: str | None = None


class TermUpdateSchema(BaseModel):
    name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_active: bool | None = None
    description: str | None = None


class RecurringScheduleSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    term_id: str
    day_of_week: int
    start_time: str
    end_time: str
    start_date: str
    end_date: str
    max_participants: int
    location: str = ""
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class RecurringScheduleCreateSchema(BaseModel):
    course_id: str
    term_id: str
    day_of_week: int = Field(ge=0, le=6)
    start_time: str
    end_time: str
    start_date: str
    end_date: str
    max_participants: int | None = Field(default=None, ge=0)
    location: str | None = None
    is_active: bool = True


class RecurringScheduleUpdateSchema(BaseModel):
    course_id: str | None = None
    term_id: str | None = None
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: str | None = None
    end_time: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    max_participants: int | None = Field(default=None, ge=0)
    location: str | None = None
    is_active: bool | None = None


class TimeSlotSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    start_time: str
    end_time: str
    available: bool


class CustomerSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str
    phone: str
    emergency_contact: str | None = None
    date_of_birth: str | None = None
    address: str | None = None
    medical_info: str | None = None
    notes: str | None = None


class UserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    phone: str
    emergency_contact: str | None = None
    date_of_birth: str | None = None
    address: str | None = None
    medical_info: str | None = None
    created_at: str | None = None
    is_active: bool = True


class AdminSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: str


class RegisterRequestSchema(BaseModel):
    email: str
    name: str
    phone: str
    password: str


class LoginRequestSchema(BaseModel):
    email: str
    password: str


class ProfileUpdateSchema(BaseModel):
    email: str | None = None
    name: str | None = None
    phone: str | None = None
    emergency_contact: str | None = None
    date_of_birth: str | None = None
    address: str | None = None
    medical_info: str | None = None


class BookingStateSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    selected_service: CourseSchema | None = None
    selected_date: date | None = None
    selected_time_slot: TimeSlotSchema | None = None
    customer: CustomerSchema | None = None
    booking_user: UserSchema | None = None
    current_step: int
    mode: BookingMode
    confirmed_booking_id: str | None = None


class StartSessionRequestSchema(BaseModel):
    course_id: str | None = None
    mode: BookingMode = BookingMode.course


class ModeRequestSchema(BaseModel):
    mode: BookingMode


class ServiceRequestSchema(BaseModel):
    course_id: str


class DateRequestSchema(BaseModel):
    date: date


class TimeSlotRequestSchema(BaseModel):
    slot_id: str


class SlotsResponseSchema(BaseModel):
    date: date | None
    duration_minutes: int
    slots: list[TimeSlotSchema]


class ServiceSnapshotSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    duration_minutes: int
    price: float
    category: str


class RescheduleRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    original_date: str
    original_time_slot: TimeSlotSchema
    new_date: str
    new_time_slot: TimeSlotSchema
    reason: str | None = None
    created_at: str | None = None


class TransferRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    original_customer_name: str
    original_customer_email: str
    new_customer_name: str
    new_customer_email: str
    reason: str | None = None
    created_at: str | None = None


class BookingSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    service_id: str
    service: ServiceSnapshotSchema
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_emergency_contact: str | None = None
    booked_by: str | None = None
    booked_by_name: str | None = None
    date: str
    time_slot: TimeSlotSchema
    status: str
    payment_status: str
    total_price: float
    mode: BookingMode
    notes: str | None = None
    cancellation_reason: str | None = None
    refund_amount: float | None = None
    store_credit_amount: float | None = None
    created_at: str | None = None
    updated_at: str | None = None
    reschedule_history: list[RescheduleRecordSchema] = Field(default_factory=list)
    transfer_history: list[TransferRecordSchema] = Field(default_factory=list)
    can_reschedule: bool = False
    can_cancel: bool = False


class WorkflowResponseSchema(BaseModel):
    session_id: str
    action: str
    state: BookingStateSchema
    errors: dict[str, str] = Field(default_factory=dict)
    booking: BookingSchema | None = None


class CancelWithRefundRequestSchema(BaseModel):
    reason: str
    refund_type: RefundType


class RescheduleRequestSchema(BaseModel):
    new_date: date
    slot_id: str
    reason: str | None = None


class TransferRequestSchema(BaseModel):
    customer: CustomerSchema
    reason: str | None = None


class AttendeeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_user_id: str
    name: str
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None
    emergency_contact: str = ""
    medical_info: str | None = None
    allergies: str | None = None
    notes: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class AttendeeCreateSchema(BaseModel):
    parent_user_id: str
    name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None
    emergency_contact: str = ""
    medical_info: str | None = None
    allergies: str | None = None
    notes: str | None = None


class AttendeeUpdateSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None
    emergency_contact: str | None = None
    medical_info: str | None = None
    allergies: str | None = None
    notes: str | None = None


class AttendeeCreatedSchema(BaseModel):
    id: str


class PopularCourseSchema(BaseModel):
    course: CourseSchema
    booking_count: int


class AnalyticsSchema(BaseModel):
    revenue_total: float
    revenue_by_category: dict[str, float]
    revenue_by_month: dict[str, float]
    bookings_total: int
    bookings_confirmed: int
    bookings_cancelled: int
    fill_rate: float
    courses_total: int
    courses_active: int
    most_popular: list[PopularCourseSchema]
    refunds_total: int
    refunds_amount: float

    @classmethod
    def from_summary(cls, summary: AnalyticsSummary) -> "AnalyticsSchema":
        return cls(
            revenue_total=summary.revenue_total,
            revenue_by_category=summary.revenue_by_category,
            revenue_by_month=summary.revenue_by_month,
            bookings_total=summary.bookings_total,
            bookings_confirmed=summary.bookings_confirmed,
            bookings_cancelled=summary.bookings_cancelled,
            fill_rate=summary.fill_rate,
            courses_total=summary.courses_total,
            courses_active=summary.courses_active,
            most_popular=[
                PopularCourseSchema(course=CourseSchema.model_validate(course), booking_count=count)
                for course, count in summary.most_popular
            ],
            refunds_total=summary.refunds_total,
            refunds_amount=summary.refunds_amount,
        )
