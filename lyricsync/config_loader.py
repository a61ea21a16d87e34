"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from dataclasses import dataclass
from typing import Optional
from .exceptions import ConfigurationError
from .models import MSG_CODE_PLAIN_TEXT, ManualOverridePolicy, PlaybackMode

logger = logging.getLogger(__name__)

class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            logger.error(f"Configuration path is not a file: {config_path}")
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except OSError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if not isinstance(config, dict):
            # e.g. an empty file or a bare scalar
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config


@dataclass
class EngineSettings:
    """Validated settings for the wrapper, clock and sink."""
    wrap_width: int = 640
    max_lines: int = 4
    char_width: Optional[int] = None # None = proportional glyph widths
    poll_interval_ms: int = 100
    message_code: int = MSG_CODE_PLAIN_TEXT
    playback_mode: PlaybackMode = PlaybackMode.AUTO
    manual_override: ManualOverridePolicy = ManualOverridePolicy.CLOCK_WINS
    fire_and_forget: bool = True

    @property
    def poll_interval(self) -> float:
        """Clock cadence in seconds."""
        return self.poll_interval_ms / 1000.0

    @classmethod
    def from_config(cls, config: dict) -> "EngineSettings":
        """
        Builds settings from a loaded configuration dictionary.

        Missing keys fall back to the defaults; unknown keys (logging paths
        and the like) are ignored here.

        Raises:
            ConfigurationError: If a value has the wrong type or is out of range.
        """
        defaults = cls()
        settings = cls(
            wrap_width=_positive_int(config, 'wrap_width', defaults.wrap_width),
            max_lines=_positive_int(config, 'max_lines', defaults.max_lines),
            char_width=_optional_positive_int(config, 'char_width'),
            poll_interval_ms=_positive_int(config, 'poll_interval_ms', defaults.poll_interval_ms),
            message_code=_positive_int(config, 'message_code', defaults.message_code, upper=0xff),
            playback_mode=_choice(config, 'playback_mode', PlaybackMode, defaults.playback_mode),
            manual_override=_choice(config, 'manual_override', ManualOverridePolicy, defaults.manual_override),
            fire_and_forget=bool(config.get('fire_and_forget', defaults.fire_and_forget)),
        )
        logger.debug(f"Engine settings: {settings}")
        return settings


def _positive_int(config: dict, key: str, default: int, upper: Optional[int] = None) -> int:
    value = config.get(key, default)
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}")
    if value <= 0 or (upper is not None and value > upper):
        raise ConfigurationError(f"'{key}' is out of range: {value}")
    return value


def _choice(config: dict, key: str, enum_cls, default):
    value = config.get(key, default)
    try:
        return enum_cls(str(getattr(value, 'value', value)).lower())
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(f"'{key}' must be one of: {allowed} (got {value!r})") from e


def _optional_positive_int(config: dict, key: str) -> Optional[int]:
    if config.get(key) is None:
        return None
    return _positive_int(config, key, 0)
