"""Persisted user preferences: credential and theme.

Loaded once at startup and written back on every change, so the settings a
user picks survive a restart without living in module-level globals.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from meeting_digest.core.logging import mask_secret

logger = logging.getLogger(__name__)


class Preferences(BaseModel):
    """User-editable preferences."""

    api_key: str = Field(default="", description="Credential for the generative-language API")
    dark_mode: bool = Field(default=False, description="Dark theme toggle")


class PreferencesStore:
    """Load/save Preferences as JSON at a fixed path."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Preferences:
        """Read preferences; a missing or unreadable file yields defaults."""
        if not self.path.exists():
            logger.info("No preferences at %s; using defaults", self.path)
            return Preferences()
        try:
            prefs = Preferences.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable preferences at {self.path}: {e}")
            return Preferences()
        logger.info("Loaded preferences (credential %s)", mask_secret(prefs.api_key))
        return prefs

    def save(self, prefs: Preferences) -> None:
        """Write preferences, creating the parent directory if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(prefs.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("Saved preferences to %s", self.path)
