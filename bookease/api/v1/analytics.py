from fastapi import APIRouter, Depends

from bookease.api.v1.schemas import AnalyticsSchema
from bookease.application.use_cases.analytics import BookingAnalytics
from bookease.application.use_cases.booking_ledger import BookingLedger
from bookease.application.use_cases.catalog import CourseCatalog
from bookease.wiring.dependencies import get_analytics, get_booking_ledger, get_course_catalog

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsSchema)
def analytics(
    ledger: BookingLedger = Depends(get_booking_ledger),
    catalog: CourseCatalog = Depends(get_course_catalog),
    summarizer: BookingAnalytics = Depends(get_analytics),
):
    summary = summarizer.summarize(ledger.list_bookings(), catalog.list_courses())
    return AnalyticsSchema.from_summary(summary)
