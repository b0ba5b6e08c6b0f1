import logging

from fastapi import FastAPI

from bookease.api.v1.analytics import router as analytics_router
from bookease.api.v1.attendees import router as attendees_router
from bookease.api.v1.auth import router as auth_router
from bookease.api.v1.booking_sessions import router as booking_sessions_router
from bookease.api.v1.bookings import router as bookings_router
from bookease.api.v1.courses import router as courses_router
from bookease.api.v1.terms import router as terms_router
from bookease.core.config import settings

CONTEXT_KEYS = (
    "session_id",
    "booking_id",
    "attendee_id",
    "schedule_id",
    "term_id",
    "step",
    "mode",
    "action",
    "reason",
)


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking", version="1.0.0")

app.include_router(courses_router, prefix="/api/v1", tags=["courses"])
app.include_router(terms_router, prefix="/api/v1", tags=["terms"])
app.include_router(auth_router, prefix="/api/v1", tags=["auth"])
app.include_router(booking_sessions_router, prefix="/api/v1", tags=["booking-sessions"])
app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])
app.include_router(attendees_router, prefix="/api/v1", tags=["attendees"])
app.include_router(analytics_router, prefix="/api/v1", tags=["analytics"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
