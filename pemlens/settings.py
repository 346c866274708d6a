import os
from dataclasses import dataclass, field

_TRUTHY = ("1", "true", "yes")

@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = field(default="INFO")
    LOG_JSON: bool = field(default=False)
    RESULT_TTL_SEC: int = field(default=300)

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("PEMLENS_LOG_LEVEL", "INFO").upper()
        log_json = os.getenv("PEMLENS_LOG_JSON", "false").lower() in _TRUTHY
        try:
            ttl = int(os.getenv("PEMLENS_RESULT_TTL_SEC", "300"))
            if ttl <= 0:
                raise ValueError
        except ValueError:
            ttl = 300
        return Settings(LOG_LEVEL=log_level, LOG_JSON=log_json, RESULT_TTL_SEC=ttl)
