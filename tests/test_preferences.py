"""Tests for preference persistence."""

import json
import logging
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from weather_advisor.preferences import PreferencesStore, UserPreferences


class TestPreferencesStore:
    """Tests for PreferencesStore."""

    def test_missing_file_gives_defaults(self, preferences_store: PreferencesStore):
        """Test a fresh install gets default preferences."""
        preferences = preferences_store.load()
        assert preferences.last_location == "London"
        assert preferences.units == "metric"
        assert preferences.auto_location is True
        assert preferences.theme == "auto"
        assert preferences.last_updated is None

    def test_custom_default_location(self, tmp_path):
        store = PreferencesStore(tmp_path / "p.json", default_location="Oslo")
        assert store.load().last_location == "Oslo"

    def test_save_and_load(self, tmp_path):
        """Test saved preferences are loaded back."""
        store = PreferencesStore(tmp_path / "nested" / "preferences.json")
        saved = UserPreferences(
            last_location="Bergen",
            units="imperial",
            auto_location=False,
            theme="dark",
            last_updated=datetime(2024, 6, 15, 12, tzinfo=timezone.utc),
        )
        store.save(saved)

        assert store.load() == saved
        on_disk = json.loads(store.path.read_text("utf-8"))
        assert on_disk["last_location"] == "Bergen"

    @pytest.mark.parametrize(
        "content",
        [b"{not json", b'{"last_location": "\xff\xfe"}'],
        ids=["invalid-json", "not-utf8"],
    )
    def test_corrupt_file_gives_defaults(self, preferences_store, caplog, content: bytes):
        """Test a corrupt or undecodable file is logged and ignored."""
        preferences_store.path.write_bytes(content)
        with caplog.at_level(logging.ERROR):
            preferences = preferences_store.load()
        assert preferences == preferences_store.defaults()
        assert "Failed to load preferences" in caplog.text

    def test_invalid_values_give_defaults(self, preferences_store):
        """Test schema violations are treated like corruption."""
        preferences_store.path.write_text(json.dumps({"units": "kelvin"}), "utf-8")
        assert preferences_store.load().units == "metric"


class TestUserPreferences:
    """Tests for the UserPreferences model."""

    @pytest.mark.parametrize("field, value", [("units", "furlongs"), ("theme", "neon")])
    def test_rejects_unknown_choices(self, field: str, value: str):
        with pytest.raises(ValidationError):
            UserPreferences(**{field: value})
