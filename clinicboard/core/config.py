from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    CLINIC_API_BASE_URL: str = "http://localhost:3001/api"
    CLINIC_API_TIMEOUT_SECONDS: float = 10.0
    USE_MOCK_API: bool = False

    SESSION_STORE_PATH: str = "./data/session.json"

    DEFAULT_APPOINTMENT_DURATION_MINUTES: int = 30

    # Placeholder login until the backend exposes an auth endpoint
    DEMO_EMAIL: str = "demo@example.com"
    DEMO_PASSWORD: str = "password"


settings = Settings()
