from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Your Salon"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SESSION_SECRET: str = "change-me"
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    SEED_SERVICES: bool = True
    BOOKING_REUSE_CUSTOMER_BY_EMAIL: bool = False

    SQUARE_APPLICATION_ID: str = ""
    SQUARE_LOCATION_ID: str = ""
    SQUARE_ACCESS_TOKEN: str | None = None
    SQUARE_ENVIRONMENT: str = "sandbox"
    SQUARE_API_VERSION: str = "2024-12-18"
    CURRENCY: str = "USD"

    PAYMENT_TIMEOUT_SECONDS: float = 15.0
    TOKENIZE_TIMEOUT_SECONDS: float = 30.0


settings = Settings()
