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
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="trubalance", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Infrastructure
    DATABASE_URL: str = Field(
        default="postgresql+asyncpg://postgres:postgres@db:5432/trubalance",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )
    DB_SSL: bool = Field(default=False, validation_alias=AliasChoices("DB_SSL", "db_ssl"))

    # Web client served from the Vite dev server by default
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:5173"],
        validation_alias=AliasChoices("CORS_ORIGINS", "cors_origins"),
    )

    # Invoice numbering: "error" rejects corrupt invoice numbers, "skip" ignores them
    MALFORMED_INVOICE_POLICY: str = Field(
        default="error",
        validation_alias=AliasChoices("MALFORMED_INVOICE_POLICY", "malformed_invoice_policy"),
    )


settings = Settings()
