"""Configuration for Domo.

User preferences live in ``~/.domo/config.json`` (or ``$DOMO_HOME``).
``DOMO_DATA_DIR`` and ``DOMO_USER`` override the stored values.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from domo.domain.area import SEED_DOMAINS
from domo.domain.task import FilterMode, SortMode

DEFAULT_USER_ID = "default-user"


def get_config_dir() -> Path:
    """Get the Domo config directory."""
    return Path(os.environ.get("DOMO_HOME") or Path.home() / ".domo")


class AppConfig(BaseModel):
    """Application settings."""

    data_dir: Path = Field(default_factory=lambda: get_config_dir() / "data")
    user_id: str = DEFAULT_USER_ID
    default_sort: SortMode = SortMode.MANUAL
    default_filter: FilterMode = FilterMode.ALL
    seed_domains: list[str] = Field(default_factory=lambda: list(SEED_DOMAINS))


def _apply_env(config: AppConfig) -> AppConfig:
    updates: dict[str, object] = {}
    if os.environ.get("DOMO_DATA_DIR"):
        updates["data_dir"] = Path(os.environ["DOMO_DATA_DIR"])
    if os.environ.get("DOMO_USER"):
        updates["user_id"] = os.environ["DOMO_USER"]
    return config.model_copy(update=updates) if updates else config


def load_config() -> AppConfig:
    """Load configuration, falling back to defaults for a missing or broken file."""
    config_file = get_config_dir() / "config.json"
    config = AppConfig()
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            config = AppConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError):
            pass
    return _apply_env(config)


def save_config(config: AppConfig) -> None:
    """Save configuration to the config directory."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.json").write_text(
        json.dumps(config.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )
