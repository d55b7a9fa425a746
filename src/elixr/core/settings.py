from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Delivery day
    ORDER_CUTOFF_HOUR: int = 18
    DELIVERY_HOUR: int = 8
    TIMEZONE: str = "Asia/Kolkata"

    # Notice periods
    PAUSE_NOTICE_HOURS: int = 24
    MODIFY_NOTICE_HOURS: int = 12
    REACTIVATION_WINDOW_MONTHS: int = 3
    RENEWAL_NOTICE_DAYS: int = 5

    # Checkout
    MIN_SUBSCRIPTION_DAYS: int = 7

    LOG_LEVEL: str = "INFO"

settings = Settings()
