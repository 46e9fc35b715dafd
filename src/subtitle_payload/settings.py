from pydantic_settings import BaseSettings

from .constants import DEFAULT_FPS, GARBLED_THRESHOLD, HEXDUMP_LIMIT


class Settings(BaseSettings):
    """Subtitle payload engine settings.

    Every field can be overridden with an environment variable carrying the
    ``SUBTITLE_PAYLOAD_`` prefix (e.g. ``SUBTITLE_PAYLOAD_DEFAULT_FPS=23.976``)
    or through a ``.env`` file.
    """
    default_fps: float = DEFAULT_FPS
    garbled_threshold: float = GARBLED_THRESHOLD
    hexdump_limit: int = HEXDUMP_LIMIT
    max_payload_bytes: int = 10 * 1024 * 1024  # HTTP surface only
    cache_ttl: float = 300.0
    cache_max_size: int = 256
    log_level: str = "INFO"

    class Config:
        env_prefix = "SUBTITLE_PAYLOAD_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
