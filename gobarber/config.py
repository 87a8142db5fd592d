# gobarber/config.py

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str = Field(default="sqlite:///./gobarber.db", alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # Auth
    secret_key: str = Field(default="change-me-later", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=30, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Public base URL, used to build avatar urls
    app_url: str = Field(default="http://localhost:8000", alias="APP_URL")
    # Where uploaded avatars are written and served from
    upload_dir: str = Field(default="./tmp/uploads", alias="UPLOAD_DIR")

    # Mail (empty host means mails are only logged)
    mail_host: str = Field(default="", alias="MAIL_HOST")
    mail_port: int = Field(default=587, alias="MAIL_PORT")
    mail_user: str = Field(default="", alias="MAIL_USER")
    mail_password: str = Field(default="", alias="MAIL_PASSWORD")
    mail_from: str = Field(default="Equipe GoBarber <noreply@gobarber.com>", alias="MAIL_FROM")

    # Queue
    job_max_attempts: int = Field(default=3, alias="JOB_MAX_ATTEMPTS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


settings = Settings()
