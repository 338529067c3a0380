# ABOUTME: JSON-based persistence for the feed configuration.
# ABOUTME: Loads and saves the list of subreddits with their score thresholds.

from pathlib import Path

import structlog
from pydantic import ValidationError

from reddit_fire.config import ConfigurationError, Settings, get_settings
from reddit_fire.models import FeedConfiguration

log = structlog.get_logger()

# Only the configured fields are persisted, never fetched state.
_PERSISTED_FIELDS = {"subreddits": {"__all__": {"name", "threshold"}}}


class ConfigStore:
    """Handles persistence of the feed configuration to a JSON file."""

    def __init__(self, path: Path | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.path = Path(path) if path is not None else self.settings.config_path

    def load(self) -> FeedConfiguration:
        """Load the feed configuration from the JSON file.

        Returns:
            FeedConfiguration loaded from file, or an empty configuration if the
            file doesn't exist or is empty.

        Raises:
            ConfigurationError: If the file can't be read or isn't a valid configuration.
        """
        if not self.path.exists():
            log.info("config_not_found", path=str(self.path))
            return FeedConfiguration()

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"cannot read {self.path}: {e}") from e

        if not content.strip():
            return FeedConfiguration()

        try:
            configuration = FeedConfiguration.model_validate_json(content)
        except ValidationError as e:
            raise ConfigurationError(
                f"invalid configuration file {self.path}: {e.error_count()} error(s)"
            ) from e

        log.debug("config_loaded", path=str(self.path), feeds=len(configuration.subreddits))
        return configuration

    def save(self, configuration: FeedConfiguration) -> None:
        """Save the feed configuration to the JSON file.

        Args:
            configuration: FeedConfiguration to save.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = configuration.model_dump_json(indent=4, include=_PERSISTED_FIELDS)
        self.path.write_text(content + "\n", encoding="utf-8")
        log.info("config_saved", path=str(self.path), feeds=len(configuration.subreddits))
