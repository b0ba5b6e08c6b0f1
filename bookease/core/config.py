from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "BookEase"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    ATTENDEE_STORE_DIR: str = "./data"
    ATTENDEE_STORE_NAME: str = "attendees-store"

    SLOT_START_HOUR: int = 9
    SLOT_END_HOUR: int = 17
    SLOT_INTERVAL_MINUTES: int = 30
    SLOT_AVAILABILITY_RATIO: float = 0.7
    EXCLUDED_WEEKDAY: int = 6  # date.weekday(): Monday=0 .. Sunday=6
    CONSULTATION_DURATION_MINUTES: int = 45

    FULL_REFUND_HOURS: int = 48
    PARTIAL_REFUND_HOURS: int = 24
    PARTIAL_REFUND_RATE: float = 0.8
    CHANGE_NOTICE_HOURS: int = 24


settings = Settings()
