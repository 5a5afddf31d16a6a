from pydantic_settings import BaseSettings, SettingsConfigDict

from mydpo.domain.compliance.tables import DEFAULT_DPO_NAME


class Settings(BaseSettings):
    # -------------------------
    # App
    # -------------------------
    app_name: str = "MyDPO Compliance API"
    api_prefix: str = "/api"
    cors_allow_origins: str = "*"

    # -------------------------
    # Logging
    # -------------------------
    log_level: str = "INFO"
    log_json: bool = True

    # -------------------------
    # Supabase
    # -------------------------
    # both unset -> in-memory repositories (local dev / tests)
    supabase_url: str | None = None
    supabase_service_key: str | None = None

    # -------------------------
    # Compliance
    # -------------------------
    dpo_name: str = DEFAULT_DPO_NAME

    # -------------------------
    # Pydantic v2 config
    # -------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def supabase_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)


settings = Settings()
