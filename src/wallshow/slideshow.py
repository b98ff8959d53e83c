"""
wallshow slideshow

A slideshow is not a running loop. It is a stored SlideshowState plus one recurring trigger that
runs "wallshow next" on every tick. Each invocation (start, next, endshow) reads or writes that
state and exits.

The folder is listed again on every tick and the stored index is an offset into the current
listing. Adding or removing images between ticks shifts which file comes next.

Collaborators are passed to Slideshow so it can run against the real desktop, state file and
systemd, or against in-memory fakes:

    store     read() -> SlideshowState | None, write(state), clear()
    triggers  install(name, command, interval, environment), find_all(pattern), remove(trigger)
    desktop   get_position(), set_background(path, position, copy), clear_background()
"""

import logging
import re
import sys
from pathlib import Path
from typing import Protocol

from wallshow import image_handler
from wallshow.state_handler import SlideshowState
from wallshow.wallpaper_handler import PicturePosition

logger = logging.getLogger(__name__)


# 31 days
MAX_INTERVAL = 44640
TRIGGER_NAME = "wallshow-slideshow"
TRIGGER_PATTERN = re.escape(TRIGGER_NAME)
ADVANCE_COMMAND = [sys.executable, "-m", "wallshow", "next"]


class SlideshowError(Exception):
    """Base class for slideshow failures."""

    pass


class NoActiveSlideshowError(SlideshowError):
    """Raised by advance() when there is no usable slideshow state."""

    pass


class InvalidSlideshowArgument(SlideshowError, ValueError):
    """Raised by start() for a negative interval or index."""

    pass


class StateStore(Protocol):
    def read(self) -> SlideshowState | None: ...

    def write(self, state: SlideshowState) -> None: ...

    def clear(self) -> None: ...


class TriggerBinding(Protocol):
    def install(
        self, name: str, command: list[str], interval: int, environment: dict = None
    ): ...

    def find_all(self, pattern: str) -> list: ...

    def remove(self, trigger) -> None: ...


class Desktop(Protocol):
    def get_position(self) -> PicturePosition: ...

    def set_background(
        self, path: Path, position: PicturePosition, copy: bool = False
    ) -> Path: ...

    def clear_background(self) -> None: ...


class Slideshow:
    def __init__(
        self,
        store: StateStore,
        triggers: TriggerBinding,
        desktop: Desktop,
        command: list[str] = None,
        environment: dict = None,
    ):
        self.store = store
        self.triggers = triggers
        self.desktop = desktop
        self.command = list(command or ADVANCE_COMMAND)
        # environment the tick runs with, e.g. the config directory this slideshow was started under
        self.environment = dict(environment or {})

    def start(
        self,
        directory: Path,
        position: PicturePosition = PicturePosition.FILL,
        interval: int = 60,
        index: int = 0,
    ) -> Path | None:
        """
        Begin a new slideshow of the images in directory, replacing any current one, and display the
        image at index. Returns the displayed image, or None if the folder has no images and the
        wallpaper was cleared.
        """

        if interval < 0:
            raise InvalidSlideshowArgument(
                f"Slideshow interval must not be negative, got {interval}."
            )
        if index < 0:
            raise InvalidSlideshowArgument(
                f"Slideshow index must not be negative, got {index}."
            )

        directory = Path(directory).expanduser().resolve()
        images = image_handler.list_images(directory)

        index = index % len(images) if images else 0
        interval = min(interval, MAX_INTERVAL)

        # state goes first so a tick firing mid-start never sees the old folder with the new trigger
        self.store.write(
            SlideshowState(directory=directory, current_index=index, interval=interval)
        )

        self.cancel()

        if interval > 0:
            self.triggers.install(
                TRIGGER_NAME, self.command, interval, environment=self.environment
            )
        else:
            logger.warning("slideshow interval is 0, no trigger installed")

        if not images:
            logger.info("no images in %s, clearing wallpaper", directory)
            self.desktop.clear_background()
            return None

        return self.desktop.set_background(images[index], position, copy=False)

    def advance(self) -> Path | None:
        """
        Show the next image of the current slideshow, keeping the current wallpaper position. This
        is what every tick runs.
        """

        state = self.store.read()

        if state is None or state.interval == 0:
            raise NoActiveSlideshowError("No slideshow currently in progress")

        images = image_handler.list_images(state.directory)

        if images:
            state.current_index = (state.current_index + 1) % len(images)
            position = self.desktop.get_position()
            shown = self.desktop.set_background(
                images[state.current_index], position, copy=False
            )

        else:
            logger.info("no images left in %s, clearing wallpaper", state.directory)
            state.current_index = 0
            self.desktop.clear_background()
            shown = None

        self.store.write(state)
        return shown

    def cancel(self, forget: bool = False) -> bool:
        """
        Remove every slideshow trigger. Returns True if at least one existed.

        The stored state is kept unless forget is set, so a manual "wallshow next" still advances
        the old folder after a plain cancel.
        """

        triggers = self.triggers.find_all(TRIGGER_PATTERN)

        for trigger in triggers:
            self.triggers.remove(trigger)

        if forget:
            self.store.clear()

        return len(triggers) != 0

    def current(self) -> SlideshowState | None:
        """The stored slideshow state, whether or not a trigger is still installed."""

        return self.store.read()
