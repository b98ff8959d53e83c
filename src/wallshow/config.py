"""
wallshow Configuration Management

This file handles utilities related to generating and loading variables from a configuration file.
WallshowConfig is loaded once at import by init(), before any attempt at command processing is done.
Raise a WallshowConfigError for any issues that arise in processing or retrieving these configuration
variables.

The configuration file is "config.json" and is saved at ~/.config/wallshow/config.json as per modern
Linux app conventions. Set the WALLSHOW_CONFIG_DIR environment variable to use another directory, e.g.
for tests or for running several independent profiles.
"""

import json
import os
from dataclasses import dataclass
from dataclasses import asdict
from pathlib import Path, PurePath


CONFIG_FILE_NAME = "config.json"
STATE_FILE_NAME = "slideshow.json"
LOG_FILE_NAME = "wallshow.log"


class WallshowConfigError(Exception):
    """Raise when an issue occurs with handling wallshow configuration."""

    pass


class PathEncoder(json.JSONEncoder):
    """
    custom encoder adds support for serializing pathlib objects as strings
    """

    def default(self, o):
        if isinstance(o, PurePath):
            return str(o)

        else:
            return json.JSONEncoder.default(self, o)


def default_config_dir() -> Path:
    """Config directory from WALLSHOW_CONFIG_DIR, falling back to ~/.config/wallshow."""

    try:
        return Path(os.environ["WALLSHOW_CONFIG_DIR"]).expanduser().resolve()

    except KeyError:
        return Path("~/.config/wallshow").expanduser().resolve()


@dataclass
class WallshowConfig:
    """
    Dataclass to represent configuration variables for wallshow. Provides a namespace and identifiers
    for directories on the filesystem that wallshow reads and writes.

    A WallshowConfig is instantiated by supplying keyword arguments from a deserialized json object, so
    that application code references these identifiers without touching dictionary keys. Keep the json
    object flat.
    """

    WALLSHOW_CONFIG_DIR: Path = Path("~/.config/wallshow").expanduser().resolve()
    WALLSHOW_WALLPAPER_DIR: Path = (
        Path("~/.local/share/backgrounds").expanduser().resolve()
    )
    WALLSHOW_LOGIN_DIR: Path = Path("~/.local/share/wallshow/login").expanduser().resolve()
    WALLSHOW_UNIT_DIR: Path = Path("~/.config/systemd/user").expanduser().resolve()

    def __post_init__(self):
        """
        json cannot deserialize a str into a Path, so convert every field after construction.
        """

        self.WALLSHOW_CONFIG_DIR = Path(self.WALLSHOW_CONFIG_DIR)
        self.WALLSHOW_WALLPAPER_DIR = Path(self.WALLSHOW_WALLPAPER_DIR)
        self.WALLSHOW_LOGIN_DIR = Path(self.WALLSHOW_LOGIN_DIR)
        self.WALLSHOW_UNIT_DIR = Path(self.WALLSHOW_UNIT_DIR)

    @property
    def state_file(self) -> Path:
        return self.WALLSHOW_CONFIG_DIR / STATE_FILE_NAME

    @property
    def log_file(self) -> Path:
        return self.WALLSHOW_CONFIG_DIR / LOG_FILE_NAME

    def generate_config_json(self) -> Path:
        """
        Write the WallshowConfig to file, serializing to JSON. Returns filepath of written
        config.json file located at WALLSHOW_CONFIG_DIR.

        Warning: will overwrite any existing config file for wallshow.
        """

        try:
            to_json = json.dumps(
                asdict(self), sort_keys=True, indent=4, cls=PathEncoder
            )

        except TypeError as error:
            raise WallshowConfigError(
                f"There was an error trying to serialize config data to JSON: {error}"
            )

        try:
            self.WALLSHOW_CONFIG_DIR.mkdir(parents=True, exist_ok=True)

            dest_file = self.WALLSHOW_CONFIG_DIR / CONFIG_FILE_NAME
            with open(dest_file, "w") as file:
                file.write(to_json)

        except OSError as error:
            raise WallshowConfigError(
                f"There was an error saving the configuration file: {error}."
            )

        return dest_file


def init() -> WallshowConfig:
    """initialize the wallshow CLI app"""

    try:
        config: WallshowConfig = load_config()

    except WallshowConfigError:

        try:
            config: WallshowConfig = WallshowConfig(
                WALLSHOW_CONFIG_DIR=default_config_dir()
            )
            config.generate_config_json()

        except WallshowConfigError as error:
            raise WallshowConfigError(
                f"There was an issue trying to load config file for wallshow: {error}"
            )

    return config


def load_config() -> WallshowConfig:
    """
    Load a config.json from environment variable WALLSHOW_CONFIG_DIR or alternatively ~/.config/wallshow
    and instantiate variables as a WallshowConfig dataclass. Raise WallshowConfigError if a config file
    can't be found or read at that location.
    """

    config_src = default_config_dir() / CONFIG_FILE_NAME

    try:
        with config_src.open("r") as file:
            from_json = json.loads(file.read())
            config = WallshowConfig(**from_json)

    except json.JSONDecodeError as error:
        raise WallshowConfigError(f"There was an issue reading the config: {error}")

    except TypeError as error:
        raise WallshowConfigError(f"Unexpected key in the config: {error}")

    except FileNotFoundError as error:
        raise WallshowConfigError(f"There was an issue opening the config: {error}")

    return config


config = init()
