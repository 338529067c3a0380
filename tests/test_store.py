# ABOUTME: Tests for the JSON feed configuration store.
# ABOUTME: Validates missing/empty/malformed file handling and what gets persisted.

import json
from pathlib import Path

import pytest

from reddit_fire.config import ConfigurationError, Settings
from reddit_fire.models import FeedConfiguration, Post
from reddit_fire.store import ConfigStore


@pytest.fixture
def store(mock_settings: Settings) -> ConfigStore:
    """Create ConfigStore with test settings."""
    return ConfigStore(settings=mock_settings)


class TestConfigStore:
    """Tests for ConfigStore."""

    def test_uses_settings_path(self, store: ConfigStore, mock_settings: Settings) -> None:
        assert store.path == mock_settings.config_path

    def test_explicit_path_wins(self, tmp_path: Path, mock_settings: Settings) -> None:
        store = ConfigStore(tmp_path / "other.json", settings=mock_settings)
        assert store.path == tmp_path / "other.json"

    def test_load_missing_file_is_empty(self, store: ConfigStore) -> None:
        """A missing file is an empty configuration, not an error."""
        configuration = store.load()
        assert configuration.subreddits == []
        assert not store.path.exists()

    def test_load_empty_file_is_empty(self, store: ConfigStore) -> None:
        store.path.write_text("  \n", encoding="utf-8")
        assert store.load().subreddits == []

    def test_load_malformed_json_raises(self, store: ConfigStore) -> None:
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="invalid configuration"):
            store.load()

    def test_load_invalid_schema_raises(self, store: ConfigStore) -> None:
        store.path.write_text(json.dumps({"subreddits": [{"name": "python"}]}), encoding="utf-8")
        with pytest.raises(ConfigurationError):
            store.load()

    def test_load_unknown_top_level_key_raises(self, store: ConfigStore) -> None:
        """A mistyped key isn't read as an empty configuration."""
        store.path.write_text(
            json.dumps({"subredits": [{"name": "python", "threshold": 1}]}), encoding="utf-8"
        )
        with pytest.raises(ConfigurationError, match="invalid configuration"):
            store.load()

    def test_load_legacy_layout(self, store: ConfigStore) -> None:
        store.path.write_text(
            json.dumps({"Subreddits": [{"Name": "golang", "Score": 100}]}), encoding="utf-8"
        )
        loaded = store.load()
        assert [(s.name, s.threshold) for s in loaded.subreddits] == [("golang", 100)]

    def test_save_and_load(self, store: ConfigStore) -> None:
        configuration = FeedConfiguration()
        configuration.upsert("python", 100)
        configuration.upsert("golang", 50)

        store.save(configuration)
        loaded = store.load()

        assert [(s.name, s.threshold) for s in loaded.subreddits] == [
            ("python", 100),
            ("golang", 50),
        ]

    def test_save_persists_only_configured_fields(self, store: ConfigStore) -> None:
        """Fetched entries and failure state never reach the config file."""
        configuration = FeedConfiguration()
        feed = configuration.upsert("python", 100)
        feed.entries.append(Post(title="hot", score=500))
        feed.fetch_failed = True

        store.save(configuration)
        data = json.loads(store.path.read_text(encoding="utf-8"))

        assert data == {"subreddits": [{"name": "python", "threshold": 100}]}

    def test_save_creates_parent_directory(self, tmp_path: Path, mock_settings: Settings) -> None:
        store = ConfigStore(tmp_path / "nested" / "dir" / "fire.json", settings=mock_settings)
        store.save(FeedConfiguration())
        assert store.path.exists()

    def test_upsert_then_delete_round_trip(self, store: ConfigStore) -> None:
        configuration = store.load()
        configuration.upsert("python", 100)
        configuration.upsert("python", 10)
        configuration.upsert("golang", 50)
        store.save(configuration)

        configuration = store.load()
        configuration.delete("golang")
        configuration.delete("rust")
        store.save(configuration)

        loaded = store.load()
        assert [(s.name, s.threshold) for s in loaded.subreddits] == [("python", 10)]
