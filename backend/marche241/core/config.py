from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Commerce API
    COMMERCE_API_BASE_URL: str = "http://localhost:3000/api/v1"
    COMMERCE_API_TIMEOUT: float = 20.0

    # Boutique registry (JSON file overriding the built-in table)
    BOUTIQUES_FILE: str | None = None

    # Payment verification polling
    PAYMENT_VERIFY_DURATION: float = 60.0
    PAYMENT_VERIFY_INTERVAL: float = 5.0

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:8000"

    # App
    APP_NAME: str = "Marche241"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def commerce_api_base_url(self) -> str:
        return self.COMMERCE_API_BASE_URL.rstrip("/")


settings = Settings()
