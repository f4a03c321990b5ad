from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./dashboard.db"
    debug: bool = False
    log_level: str = "INFO"
    invoices_per_page: int = 6
    latest_invoices_limit: int = 5
    page_cache_ttl_seconds: float = 300
    page_cache_max_entries: int = 256

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
