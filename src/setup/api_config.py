from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    APP_NAME: str = "link-checker"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def get_api_settings() -> ApiSettings:
    return ApiSettings()
