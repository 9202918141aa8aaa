"""
Editor settings.

Defaults come from environment variables so a host can tune the editor
without code changes:

    RICHVIEW_STORAGE_KEY               key the snapshot is stored under ("content")
    RICHVIEW_STORAGE_PATH              JSON file backing FileStore (unset: in-memory)
    RICHVIEW_DEFAULT_NODE              block type used when a block type is toggled off
    RICHVIEW_MAX_NORMALIZE_ITERATIONS  fixes allowed beyond two per node when normalizing
    RICHVIEW_MAC_HOTKEYS               "1"/"0", whether "mod" means meta instead of ctrl
    RICHVIEW_LOG_LEVEL                 level used by configure_logging()
"""
import os
import sys

from pydantic import BaseModel, Field


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class EditorSettings(BaseModel):
    storage_key: str = Field(default_factory=lambda: os.getenv("RICHVIEW_STORAGE_KEY", "content"))
    storage_path: str | None = Field(default_factory=lambda: os.getenv("RICHVIEW_STORAGE_PATH") or None)
    default_node: str = Field(default_factory=lambda: os.getenv("RICHVIEW_DEFAULT_NODE", "paragraph"))
    max_normalize_iterations: int = Field(
        default_factory=lambda: int(os.getenv("RICHVIEW_MAX_NORMALIZE_ITERATIONS", "1000")),
        ge=1,
    )
    mac_hotkeys: bool = Field(default_factory=lambda: _env_bool("RICHVIEW_MAC_HOTKEYS", sys.platform == "darwin"))
    log_level: str = Field(default_factory=lambda: os.getenv("RICHVIEW_LOG_LEVEL", "INFO"))


_settings: EditorSettings | None = None


def get_settings() -> EditorSettings:
    global _settings
    if _settings is None:
        _settings = EditorSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the environment is read again."""
    global _settings
    _settings = None
