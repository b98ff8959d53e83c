"""
Slideshow State Handler

Durable storage for the single SlideshowState record. The record is a flat JSON object kept in
the wallshow config directory:

    {"current_index": 2, "directory": "/home/me/Pictures/walls", "interval": 30}

Writes go to a temporary file in the same directory which then replaces the record, so a tick that
reads the file while a slideshow is being started sees either the old or the new record, never a
partial one.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class SlideshowStateError(Exception):
    """Raise when the stored slideshow record cannot be read or written."""

    pass


@dataclass
class SlideshowState:
    """
    directory: absolute path of the folder being rotated through
    current_index: offset of the displayed image in the folder's current listing
    interval: minutes between ticks. 0 means no slideshow.
    """

    directory: Path
    current_index: int = 0
    interval: int = 0

    def __post_init__(self):
        self.directory = Path(self.directory)
        self.current_index = int(self.current_index)
        self.interval = int(self.interval)

    def to_json(self) -> str:
        return json.dumps(
            {
                "directory": str(self.directory),
                "current_index": self.current_index,
                "interval": self.interval,
            },
            sort_keys=True,
        )

    @classmethod
    def from_json(cls, data: str) -> "SlideshowState":

        try:
            from_json = json.loads(data)
            return cls(
                directory=from_json["directory"],
                current_index=from_json["current_index"],
                interval=from_json["interval"],
            )

        except json.JSONDecodeError as error:
            raise SlideshowStateError(f"Slideshow state is not valid JSON: {error}")

        except (KeyError, TypeError, ValueError) as error:
            raise SlideshowStateError(f"Slideshow state is incomplete: {error!r}")


class JsonStateStore:
    """
    File-backed store for the slideshow record. read() returns None when no record exists.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> SlideshowState | None:

        try:
            with self.path.open("r") as file:
                data = file.read()

        except FileNotFoundError:
            return None

        except OSError as error:
            raise SlideshowStateError(f"Could not read {self.path}: {error}")

        return SlideshowState.from_json(data)

    def write(self, state: SlideshowState) -> None:

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w") as file:
                file.write(state.to_json())
            os.replace(tmp_name, self.path)

        except OSError as error:
            raise SlideshowStateError(f"Could not write {self.path}: {error}")

        logger.debug("saved slideshow state %s", state)

    def clear(self) -> None:

        try:
            self.path.unlink(missing_ok=True)
        except OSError as error:
            raise SlideshowStateError(f"Could not remove {self.path}: {error}")
