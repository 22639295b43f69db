"""Settings read from the environment (prefix ``TRANSIT_``) or a ``.env`` file."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Runtime configuration of the HTTP transport and the command line."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    timeout: int = Field(default=30, description="Request timeout in seconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header")
    retry_attempts: int = Field(
        default=3, ge=1, description="Attempts per request on connection failures"
    )
    default_network: str = Field(default="db", description="Network used by the CLI")
