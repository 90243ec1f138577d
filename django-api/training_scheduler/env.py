"""Environment-driven settings consumed by settings.py."""

from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_ignore_empty=True,
        extra="ignore",
    )

    DEBUG: bool = False
    SECRET_KEY: SecretStr = SecretStr("insecure-training-scheduler-key-change-me")
    ALLOWED_HOSTS: str = "localhost,127.0.0.1"  # comma separated

    # Database
    DB_ENGINE: str = "django.db.backends.sqlite3"
    DB_NAME: str = str(BASE_DIR / "db.sqlite3")
    DB_HOST: str = ""
    DB_PORT: str = ""
    DB_USER: str = ""
    DB_PASSWORD: SecretStr = SecretStr("")

    CATALOG_CACHE_TIMEOUT: int = 300  # seconds
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_hosts(self) -> list[str]:
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]


env = EnvSettings()
