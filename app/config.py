"""Application settings loaded from the environment / .env via pydantic-settings."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings

from core.models import Credentials


class Settings(BaseSettings):
    """Central configuration; values come from environment / .env file."""

    # Spotify app identity + long-lived refresh token
    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    refresh_token: SecretStr = SecretStr("")

    # App
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def missing_credentials(self) -> list[str]:
        """Return the env names of every credential that is unset or empty."""
        missing: list[str] = []
        if not self.client_id:
            missing.append("CLIENT_ID")
        if not self.client_secret.get_secret_value():
            missing.append("CLIENT_SECRET")
        if not self.refresh_token.get_secret_value():
            missing.append("REFRESH_TOKEN")
        return missing

    def credentials(self) -> Credentials:
        return Credentials(
            client_id=self.client_id,
            client_secret=self.client_secret,
            refresh_token=self.refresh_token,
        )


@lru_cache
def get_settings() -> Settings:
    """Cached singleton so .env is read only once."""
    return Settings()
