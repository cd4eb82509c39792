from pydantic_settings import SettingsConfigDict
from .base import EnvConfig


class ApiConfig(EnvConfig):
    prefix: str = "/api/v1"

    # slowapi limit strings, per client IP
    read_rate_limit: str = "120/minute"
    write_rate_limit: str = "60/minute"
    rate_limit_enabled: bool = True

    # Seconds between keep-alive comments on the event stream
    event_stream_heartbeat_seconds: float = 15.0

    model_config = SettingsConfigDict(
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )
