from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including database name, e.g. mongodb://localhost:27017/quirknotes
    host: str = "127.0.0.1"
    port: int = 4000
    debug: bool = False
    jwt_secret_key: str  # Shared secret for signing access tokens
    jwt_algorithm: str = "HS256"
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "QUIRKNOTES_",
        "extra": "ignore",
    }
