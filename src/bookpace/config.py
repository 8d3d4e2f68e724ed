"""Configuration management for bookpace.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Application configuration."""

    # Storage
    data_dir: Path
    books_path: Path
    settings_path: Path
    session_path: Path
    log_path: Path
    seed_example: bool

    # Motivation text
    gemini_api_key: Optional[str]
    gemini_model: str
    motivation_timeout: float  # seconds

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        data_dir = Path(
            os.environ.get("BOOKPACE_DATA_DIR", str(Path.home() / ".bookpace"))
        ).expanduser()

        def _path(var: str, filename: str) -> Path:
            return Path(os.environ.get(var, str(data_dir / filename))).expanduser()

        return cls(
            data_dir=data_dir,
            books_path=_path("BOOKPACE_BOOKS_PATH", "books.json"),
            settings_path=_path("BOOKPACE_SETTINGS_PATH", "settings.json"),
            session_path=_path("BOOKPACE_SESSION_PATH", "session.json"),
            log_path=_path("BOOKPACE_LOG_PATH", "bookpace.log"),
            seed_example=_env_bool("BOOKPACE_SEED_EXAMPLE", True),
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY"),
            gemini_model=os.environ.get("BOOKPACE_GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            motivation_timeout=float(os.environ.get("BOOKPACE_MOTIVATION_TIMEOUT", "10")),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        for directory in {p.parent for p in (self.books_path, self.settings_path,
                                             self.session_path, self.log_path)}:
            if not directory.exists():
                try:
                    directory.mkdir(parents=True, exist_ok=True)
                except PermissionError:
                    errors.append(f"Cannot create data directory: {directory}")

        if self.motivation_timeout <= 0:
            errors.append("BOOKPACE_MOTIVATION_TIMEOUT must be positive")

        return errors

    def has_gemini_config(self) -> bool:
        """Check if a text-generation API key is present."""
        return bool(self.gemini_api_key)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
