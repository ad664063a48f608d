from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.docker"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="docker", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_invoicer", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Infrastructure
    DATABASE_URL: str = Field(
        default="postgresql+asyncpg://postgres:postgres@db:5432/gst_invoicer",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    # User auth (JWT)
    USER_JWT_SECRET: str = Field(default="change-me", validation_alias=AliasChoices("USER_JWT_SECRET", "user_jwt_secret"))
    JWT_ALGORITHM: str = Field(default="HS256", validation_alias=AliasChoices("JWT_ALGORITHM", "jwt_algorithm"))
    USER_JWT_ACCESS_EXPIRE_MINUTES: int = Field(
        default=60,
        validation_alias=AliasChoices("USER_JWT_ACCESS_EXPIRE_MINUTES", "user_jwt_access_expire_minutes"),
    )
    USER_JWT_REFRESH_EXPIRE_DAYS: int = Field(
        default=30,
        validation_alias=AliasChoices("USER_JWT_REFRESH_EXPIRE_DAYS", "user_jwt_refresh_expire_days"),
    )

    # Invoicing
    INVOICE_PREFIX: str = Field(default="INV", validation_alias=AliasChoices("INVOICE_PREFIX", "invoice_prefix"))
    INVOICE_NUMBER_RETRIES: int = Field(
        default=3,
        validation_alias=AliasChoices("INVOICE_NUMBER_RETRIES", "invoice_number_retries"),
    )
    INVOICE_NUMBER_MAX_SKIP: int = Field(
        default=1000,
        validation_alias=AliasChoices("INVOICE_NUMBER_MAX_SKIP", "invoice_number_max_skip"),
    )
    DEFAULT_BUSINESS_STATE: str = Field(
        default="Assam",
        validation_alias=AliasChoices("DEFAULT_BUSINESS_STATE", "default_business_state"),
    )
    DEFAULT_GST_RATE: float = Field(default=18, validation_alias=AliasChoices("DEFAULT_GST_RATE", "default_gst_rate"))


settings = Settings()
