"""User preference persistence.

Preferences are a small key-value document stored as JSON. The recommender
never reads them; only the application controller uses the last location
and the auto-location switch.

## File Format

```json
{
  "last_location": "London",
  "units": "metric",
  "auto_location": true,
  "theme": "auto",
  "last_updated": "2024-06-15T12:00:00Z"
}
```
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class UserPreferences(BaseModel):
    """Persisted user preferences."""

    last_location: str = Field(default="London", description="Last looked-up city")
    units: str = Field(default="metric", pattern="^(metric|imperial)$")
    auto_location: bool = Field(
        default=True, description="Look up the device location on start"
    )
    theme: str = Field(default="auto", pattern="^(auto|light|dark)$")
    last_updated: datetime | None = Field(
        default=None, description="When preferences were last saved"
    )


class PreferencesStore:
    """Loads and saves UserPreferences as a JSON file.

    Unreadable or corrupt files never stop the application: loading falls
    back to defaults and the failure is logged.
    """

    def __init__(self, path: Path, default_location: str = "London"):
        self.path = Path(path)
        self.default_location = default_location

    def defaults(self) -> UserPreferences:
        """Preferences used when nothing has been saved yet."""
        return UserPreferences(last_location=self.default_location)

    def load(self) -> UserPreferences:
        """Load preferences, falling back to defaults on any problem."""
        if not self.path.exists():
            return self.defaults()

        try:
            return UserPreferences.model_validate_json(self.path.read_text("utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load preferences from {self.path}: {e}")
            return self.defaults()

    def save(self, preferences: UserPreferences) -> None:
        """Write preferences to disk.

        Raises:
            OSError: If the file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(preferences.model_dump_json(indent=2), "utf-8")
        logger.debug(f"Saved preferences to {self.path}")
