"""
flowy Configuration Management

This file handles generating and loading variables from a configuration file. FlowyConfig
is loaded once at import, before any command processing is done. Raise a FlowyConfigError
for any issues that arise in processing or retrieving these configuration variables.

The configuration file is "config.json" and lives at ~/.config/flowy/config.json unless
the FLOWY_CONFIG_DIR environment variable points somewhere else. The generated schedule
and any downloaded presets are stored alongside it by default.
"""

import os
import json
from dataclasses import dataclass, field, asdict
from pathlib import Path, PurePath

DEFAULT_CONFIG_DIR = "~/.config/flowy"


class FlowyConfigError(Exception):
    """Raise when an issue occurs with handling flowy configuration."""

    pass


class PathEncoder(json.JSONEncoder):
    """
    custom encoder adds support for serializing pathlib objects as strings
    """

    def default(self, o):
        if isinstance(o, PurePath):
            return str(o)

        return json.JSONEncoder.default(self, o)


def config_dir() -> Path:
    """Configuration directory, from FLOWY_CONFIG_DIR or the default location."""

    return Path(os.environ.get("FLOWY_CONFIG_DIR", DEFAULT_CONFIG_DIR)).expanduser()


@dataclass
class FlowyConfig:
    """
    Configuration variables for flowy. A FlowyConfig is created by supplying keyword
    arguments from the deserialized json object, so the json should stay fully flat.

    Paths left unset default to locations inside FLOWY_CONFIG_DIR.
    """

    FLOWY_CONFIG_DIR: Path = field(default_factory=config_dir)
    FLOWY_SCHEDULE_FILE: Path = None
    FLOWY_PRESETS_DIR: Path = None
    FLOWY_POLL_INTERVAL: int = 60

    def __post_init__(self):
        """
        json cannot deserialize a str into a Path, so convert here and fill in defaults.
        """

        self.FLOWY_CONFIG_DIR = Path(self.FLOWY_CONFIG_DIR).expanduser()

        if self.FLOWY_SCHEDULE_FILE is None:
            self.FLOWY_SCHEDULE_FILE = self.FLOWY_CONFIG_DIR / "schedule.json"

        if self.FLOWY_PRESETS_DIR is None:
            self.FLOWY_PRESETS_DIR = self.FLOWY_CONFIG_DIR / "presets"

        self.FLOWY_SCHEDULE_FILE = Path(self.FLOWY_SCHEDULE_FILE).expanduser()
        self.FLOWY_PRESETS_DIR = Path(self.FLOWY_PRESETS_DIR).expanduser()

        try:
            self.FLOWY_POLL_INTERVAL = int(self.FLOWY_POLL_INTERVAL)
        except (TypeError, ValueError):
            raise FlowyConfigError(
                f"FLOWY_POLL_INTERVAL must be a number of seconds, got {self.FLOWY_POLL_INTERVAL!r}."
            )

        if self.FLOWY_POLL_INTERVAL <= 0:
            raise FlowyConfigError("FLOWY_POLL_INTERVAL must be positive.")

    def generate_config_json(self) -> Path:
        """
        Write the FlowyConfig to FLOWY_CONFIG_DIR/config.json, overwriting any existing
        file. Returns the path of the written file.
        """

        try:
            to_json = json.dumps(
                asdict(self), sort_keys=True, indent=4, cls=PathEncoder
            )

        except TypeError as error:
            raise FlowyConfigError(
                f"There was an error trying to serialize config data to JSON: {error}"
            )

        try:
            self.FLOWY_CONFIG_DIR.mkdir(parents=True, exist_ok=True)

            dest_file = self.FLOWY_CONFIG_DIR / "config.json"
            dest_file.write_text(to_json)

        except OSError as error:
            raise FlowyConfigError(
                f"There was an error saving the configuration file: {error}."
            )

        return dest_file


def init() -> FlowyConfig:
    """initialize flowy configuration, writing a default config file if none exists"""

    try:
        return load_config()

    except FileNotFoundError:
        config = FlowyConfig()
        config.generate_config_json()

    return config


def load_config() -> FlowyConfig:
    """
    Load config.json from FLOWY_CONFIG_DIR (default ~/.config/flowy) into a FlowyConfig.
    Raises FileNotFoundError if there is no config file yet.
    """

    config_src = config_dir() / "config.json"

    try:
        from_json = json.loads(config_src.read_text())

    except json.JSONDecodeError as error:
        raise FlowyConfigError(f"There was an issue reading the config: {error}")

    except FileNotFoundError:
        raise

    except OSError as error:
        raise FlowyConfigError(f"There was an issue opening the config: {error}")

    if not isinstance(from_json, dict):
        raise FlowyConfigError(f"{config_src} does not contain a configuration object.")

    try:
        return FlowyConfig(**from_json)

    except TypeError as error:
        raise FlowyConfigError(f"Unknown setting in {config_src}: {error}")


config = init()
