"""
Configuration management with Pydantic validation and environment variable support.
"""

import json
import os
import platform
from pathlib import Path
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class GitSettings(BaseModel):
    """Git query configuration."""

    executable: str = Field(
        default="git",
        description="Git executable used for every query"
    )
    compare_target: str = Field(
        default="HEAD",
        description="Tree-ish the working tree is diffed against"
    )
    listing_flags: List[str] = Field(
        default_factory=lambda: ["--cached", "--others", "--exclude-standard"],
        description="Extra flags passed to git ls-files"
    )
    detect_conflicts: bool = Field(
        default=True,
        description="Query unmerged paths before resolving statuses (diff against a tree never reports them)"
    )

    @field_validator("listing_flags")
    @classmethod
    def flags_are_options(cls, v: List[str]) -> List[str]:
        """Listing flags must be options; paths are passed separately."""
        for flag in v:
            if not flag.startswith("-"):
                raise ValueError(f"listing flag {flag!r} is not an option")
        return v


class UISettings(BaseModel):
    """User interface configuration."""

    use_colors: bool = Field(
        default=True,
        description="Use colored output"
    )
    show_clean: bool = Field(
        default=False,
        description="Include up-to-date files in status output"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    git: GitSettings = Field(default_factory=GitSettings)
    ui: UISettings = Field(default_factory=UISettings)

    model_config = {
        "env_prefix": "RS_",  # Repo Status prefix
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
    }

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from the default config file when present, else defaults."""
        config_path = cls.default_config_dir() / "config.json"
        if config_path.exists():
            try:
                return cls.from_file(config_path)
            except (json.JSONDecodeError, OSError, ValueError):
                pass  # Fall back to defaults
        return cls()

    @classmethod
    def from_file(cls, config_path: Path) -> "Settings":
        """Load settings from a configuration file."""
        if config_path.exists():
            with open(config_path) as f:
                config_data = json.load(f)
            return cls(**config_data)
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save current settings to a configuration file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @staticmethod
    def default_config_dir() -> Path:
        if platform.system() == "Windows":
            base = Path(os.environ.get("APPDATA", "~"))
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config"))

        return (base / "repo-status").expanduser()

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory."""
        return self.default_config_dir()

    @property
    def cache_dir(self) -> Path:
        """Get the cache directory."""
        if platform.system() == "Windows":
            base = Path(os.environ.get("LOCALAPPDATA", "~"))
        else:
            base = Path(os.environ.get("XDG_CACHE_HOME", "~/.cache"))

        return (base / "repo-status").expanduser()

    @property
    def log_file(self) -> Path:
        """Get the log file path."""
        return self.cache_dir / "repo-status.log"
