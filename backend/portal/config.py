from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///portal.db"
    secret_key: str = "change-me-in-production"
    session_ttl_hours: int = 24
    session_cookie_name: str = "portal_session"
    cookie_secure: bool = False
    cors_origins: list[str] = ["*"]
    bootstrap_admin_username: str | None = None
    bootstrap_admin_password: str | None = None
    bootstrap_admin_full_name: str = "Administrator"
    log_level: str = "INFO"

    class Config:
        env_prefix = "PORTAL_"


settings = Settings()
