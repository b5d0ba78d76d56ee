"""Configuration management for the Google Reader client.

All configuration comes from environment variables. Uses pydantic-settings
for validation so missing or malformed credentials produce clear errors
at startup rather than cryptic failures on the first request.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Client and server configuration loaded from environment variables."""

    server_url: str = Field(alias="GOOGLE_READER_SERVER")
    username: str = Field(alias="GOOGLE_READER_USERNAME")
    password: SecretStr = Field(alias="GOOGLE_READER_PASSWORD")
    timeout: float = Field(default=30.0, alias="GOOGLE_READER_TIMEOUT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    server_host: str = Field(default="127.0.0.1", alias="MCP_SERVER_HOST")
    server_port: int = Field(default=8000, alias="MCP_SERVER_PORT")

    model_config = SettingsConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


def load_config() -> Config:
    """Load and validate config from environment. Raises on missing required vars."""
    return Config()
