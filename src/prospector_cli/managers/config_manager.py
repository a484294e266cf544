# src/prospector_cli/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from pydantic import ValidationError

from consistency.thresholds import DEFAULT_THRESHOLDS, Thresholds

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "settings.json"


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads settings from a JSON file and allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the bundled settings file."""
        self._config: Dict[str, Any] = {}
        self.settings_path: Path = DEFAULT_SETTINGS_PATH
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'history.max_snapshots'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration,
        e.g. ('thresholds.tap_target_min_size', '48').

        String values are decoded as JSON literals where possible, so numbers,
        booleans and objects given on the command line keep their type.
        """
        *parents, leaf = key_path.split('.')
        section = self._config
        for key in parents:
            section = section.setdefault(key, {})
            if not isinstance(section, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return False

        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                pass

        current = section.get(leaf)
        if isinstance(current, (int, float, str)) and not isinstance(current, bool) \
                and not isinstance(value, type(current)):
            try:
                value = type(current)(value)
            except (ValueError, TypeError):
                logger.warning("Could not cast '%s' to %s. Storing as given.", key_path, type(current).__name__)

        section[leaf] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def apply_overrides(self, assignments: Sequence[str]) -> None:
        """Applies 'dotted.key=value' strings, as given with the CLI's --set option."""
        for assignment in assignments:
            key_path, sep, raw = assignment.partition("=")
            if not sep or not key_path.strip():
                raise ValueError(f"Invalid setting '{assignment}'. Expected KEY=VALUE.")
            self.set_nested(key_path.strip(), raw.strip())

    def load(self, path: Union[str, Path]) -> None:
        """Switches the configuration source to another settings file and reloads."""
        self.settings_path = Path(path)
        self.reset()

    def reset(self):
        """Resets the in-memory configuration from the current settings file."""
        try:
            if not self.settings_path.exists():
                logger.warning("Settings file not found at %s. Using empty config.", self.settings_path)
                self._config = {}
                return
            with open(self.settings_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                logger.warning("Settings file %s does not contain an object. Using empty config.", self.settings_path)
                loaded = {}
            self._config = loaded
            logger.debug("Configuration has been (re)loaded from %s.", self.settings_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", self.settings_path, e)
            self._config = {}

    def thresholds(self) -> Thresholds:
        """
        Builds the rule thresholds from the 'thresholds' section.
        Invalid overrides are reported and the defaults are used instead.
        """
        overrides = self.get_nested("thresholds", {})
        if not isinstance(overrides, dict) or not overrides:
            return DEFAULT_THRESHOLDS
        try:
            return Thresholds(**overrides)
        except ValidationError as e:
            logger.warning("Ignoring invalid threshold overrides: %s", e)
            return DEFAULT_THRESHOLDS


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
