from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Where validated requests are forwarded
    SERVER_URL: str = "http://localhost:9090"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="GATEWAY_", extra="ignore")


settings = Settings()
