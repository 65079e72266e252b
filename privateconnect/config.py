"""Application configuration management using Pydantic's BaseSettings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Defines all configuration settings for the login client, loaded from .env file."""

    # Upstream PrivateConnect API
    api_base_url: str = "http://localhost:3000/api"
    request_timeout: float = 15.0

    # Where the presentation layer goes after a successful login
    landing_route: str = "/(tabs)"

    # App settings
    debug: bool = True
    log_level: str = "INFO"

    # Screen sessions
    session_cookie_name: str = "privateconnect_session_id"
    session_cookie_max_age: int = 3600 * 24 * 7
    session_timeout_minutes: int = 30
    idle_timeout_minutes: int = 15

    class Config:
        """Pydantic model configuration."""

        env_file = ".env"
        env_prefix = "PRIVATECONNECT_"


settings = Settings()
