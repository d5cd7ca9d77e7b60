"""
Runtime settings read from the environment.
"""

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_HISTORY_DB = "import_history.db"


def _parse_timeout(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"TAPESTRY_TIMEOUT must be a number of seconds, got '{value}'")


@dataclass
class Settings:
    """Connection and storage settings for the import CLI"""

    base_url: str = DEFAULT_BASE_URL
    workspace: str | None = None
    history_db: str = DEFAULT_HISTORY_DB
    # None leaves requests' own default in place
    timeout: float | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            base_url=os.getenv("TAPESTRY_BASE_URL", DEFAULT_BASE_URL),
            workspace=os.getenv("TAPESTRY_WORKSPACE") or None,
            history_db=os.getenv("TAPESTRY_HISTORY_DB", DEFAULT_HISTORY_DB),
            timeout=_parse_timeout(os.getenv("TAPESTRY_TIMEOUT")),
        )

    def override(self, **values) -> "Settings":
        """Return a copy with every non-None value replaced"""
        merged = {key: getattr(self, key) for key in self.__dataclass_fields__}
        merged.update({key: value for key, value in values.items() if value is not None})
        return Settings(**merged)
