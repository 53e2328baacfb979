"""Configuration settings for the permissions helper."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    PERMISSIONS_HELPER_ prefix.

    Examples:
        >>> settings = Settings()
        >>> settings.request_code
        322
    """

    model_config = SettingsConfigDict(env_prefix="PERMISSIONS_HELPER_")

    # First capability level with runtime prompting
    runtime_prompting_level: int = 23

    # Correlation token for the single in-flight batch
    request_code: int = 322

    default_enforce_once_per_session: bool = False

    # Target level reported by ElicitationHost (None = unknown)
    declared_target_level: int | None = None

    # MCP sessions whose elicitation host is kept by the server
    max_session_hosts: int = 256

    log_level: str = "INFO"
