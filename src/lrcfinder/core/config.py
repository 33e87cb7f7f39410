"""
Configuration management using Dynaconf and Pydantic.

Dynaconf loads settings from files (`settings.toml`, `.secrets.toml`, the
user-scoped config directory) and `LRCF_*` environment variables. Pydantic then
validates the merged data into a typed `LrcFinderSettings` object.

`get_settings` returns a process-wide instance. Search code never reads it
directly: the plugin takes a `SearchOptions` snapshot at the start of each call.
"""

import json
import os
from pathlib import Path
from typing import Optional

import toml
from dynaconf import Dynaconf
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.console import Console

from .models import SearchOptions

console = Console(stderr=True)

USER_CONFIG_DIR = Path.home() / ".config" / "lrcfinder"
USER_SETTINGS_FILE = USER_CONFIG_DIR / "settings.toml"
USER_SECRETS_FILE = USER_CONFIG_DIR / ".secrets.toml"

# Project-local settings (CWD) to support isolated runs and tests
LOCAL_SETTINGS_FILE = Path("settings.toml")

settings_loader = Dynaconf(
    envvar_prefix="LRCF",
    settings_files=[
        "settings.toml",
        ".secrets.toml",
        str(USER_SETTINGS_FILE),
        str(USER_SECRETS_FILE),
    ],
    environments=False,
    load_dotenv=True,
)

DEFAULT_BASE_URL = "https://music.163.com"

# Keys written back by save_settings
PERSISTED_KEYS = (
    "strict",
    "exclude_artist",
    "exclude_album",
    "search_limit",
    "unmerged_embedded",
    "http_timeout",
)


class LrcFinderSettings(BaseModel):
    """A Pydantic model that defines and validates all application settings."""

    # Matcher selection
    strict: bool = True
    exclude_artist: bool = False
    exclude_album: bool = False
    search_limit: int = Field(default=50, ge=1, le=100)
    unmerged_embedded: bool = False

    # Catalog access
    base_url: str = DEFAULT_BASE_URL
    http_timeout: float = Field(default=10.0, gt=0)
    rps: int = Field(default=5, ge=1)
    provider_name: str = "NetEase"

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    def search_options(self) -> SearchOptions:
        return SearchOptions(
            strict=self.strict,
            exclude_artist=self.exclude_artist,
            exclude_album=self.exclude_album,
            search_limit=self.search_limit,
        )


def _env_flag(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


_settings_instance: Optional[LrcFinderSettings] = None


def get_settings() -> LrcFinderSettings:
    """Get the application settings as a singleton Pydantic model.

    Honors LRCF_SETTINGS_PATH when set: a JSON file path used for persistence in tests.
    """
    global _settings_instance
    if _settings_instance is None:
        try:
            config_dict = {}

            # 1) Special env path for tests or explicit override (JSON file)
            env_settings_path = os.getenv("LRCF_SETTINGS_PATH")
            if env_settings_path:
                p = Path(env_settings_path)
                if p.exists():
                    try:
                        config_dict.update(json.loads(p.read_text(encoding="utf-8")) or {})
                    except ValueError:
                        # If malformed, ignore and continue with other layers
                        pass

            # 2) Dynaconf loader (project + user scope), keys are case-insensitive there
            dc_dict = settings_loader.as_dict() or {}
            config_dict.update({str(k).lower(): v for k, v in dc_dict.items()})

            # 3) Optional project-local settings.toml overlay
            ignore_local = os.getenv("LRCF_IGNORE_LOCAL_SETTINGS") == "1"
            if (not ignore_local) and LOCAL_SETTINGS_FILE.exists():
                try:
                    local_data = toml.loads(LOCAL_SETTINGS_FILE.read_text(encoding="utf-8")) or {}
                    if isinstance(local_data, dict):
                        config_dict.update(local_data)
                except toml.TomlDecodeError:
                    pass

            # 4) Explicit environment overrides
            for key in ("strict", "exclude_artist", "exclude_album"):
                flag = _env_flag(f"LRCF_{key.upper()}")
                if flag is not None:
                    config_dict[key] = flag

            _settings_instance = LrcFinderSettings(**config_dict)
        except ValidationError as e:
            console.print(f"[red]Configuration error:[/red]\n{e}")
            raise

    return _settings_instance


def save_settings(new_settings: LrcFinderSettings):
    """Save updated settings.

    If LRCF_SETTINGS_PATH is set, persist as JSON to that file (used by tests).
    Otherwise write the project-local and user-level TOML files.
    """
    global _settings_instance
    data = {key: getattr(new_settings, key) for key in PERSISTED_KEYS}

    env_settings_path = os.getenv("LRCF_SETTINGS_PATH")
    if env_settings_path:
        p = Path(env_settings_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data), encoding="utf-8")
    else:
        LOCAL_SETTINGS_FILE.write_text(toml.dumps(data), encoding="utf-8")
        try:
            USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            USER_SETTINGS_FILE.write_text(toml.dumps(data), encoding="utf-8")
        except OSError:
            # Read-only home: the local file still holds the values
            pass

    _settings_instance = new_settings


def create_default_settings() -> LrcFinderSettings:
    """Create a default settings instance, useful for resets."""
    return LrcFinderSettings()


def reset_settings():
    """Reset in-memory settings (do not delete on-disk settings)."""
    global _settings_instance
    _settings_instance = None
    # Re-read files and LRCF_* variables on the next get_settings()
    settings_loader.reload()
