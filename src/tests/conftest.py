"""
conftest.py

Test configuration for wallshow tests.

Defines pytest fixtures for supplying test data and fakes to tests across the entire test suite.
Fixtures used within only a single module are defined directly in that module.

wallshow.config loads (and if needed writes) its config file on import, so WALLSHOW_CONFIG_DIR is
pointed at a throwaway directory before anything from wallshow is imported.
"""

import os
import re
import tempfile
from pathlib import Path

os.environ["WALLSHOW_CONFIG_DIR"] = tempfile.mkdtemp(prefix="wallshow-test-")

import pytest
from PIL import Image

from wallshow.slideshow import Slideshow
from wallshow.wallpaper_handler import PicturePosition


class FakeStateStore:
    """In-memory stand-in for JsonStateStore."""

    def __init__(self, state=None):
        self.state = state
        self.writes = 0

    def read(self):
        return self.state

    def write(self, state):
        self.writes += 1
        self.state = state

    def clear(self):
        self.state = None


class FakeTriggerBinding:
    """In-memory stand-in for SystemdTimerBinding. Triggers are (name, command, interval) tuples."""

    def __init__(self):
        self.triggers = []
        self.calls = []
        self.environments = {}

    def install(self, name, command, interval, environment=None):
        self.calls.append(("install", name))
        self.environments[name] = environment
        trigger = (name, tuple(command), interval)
        self.triggers.append(trigger)
        return trigger

    def find_all(self, pattern):
        return [t for t in self.triggers if re.search(pattern, t[0])]

    def remove(self, trigger):
        self.calls.append(("remove", trigger[0]))
        if trigger in self.triggers:
            self.triggers.remove(trigger)


class FakeDesktop:
    """Records what the desktop would show instead of calling gsettings."""

    def __init__(self, background=None, position=PicturePosition.FILL):
        self.background = background
        self.position = position
        self.login_background = None
        self.copies = []

    def get_background(self):
        return self.background

    def get_position(self):
        return self.position

    def set_background(self, path, position, copy=False):
        self.background = Path(path)
        self.position = position
        self.copies.append(copy)
        return self.background

    def clear_background(self):
        self.background = None
        self.position = PicturePosition.CENTER

    def get_login_background(self):
        return self.login_background

    def set_login_background(self, path):
        self.login_background = Path(path)
        return self.login_background


def _make_image(path: Path, fmt: str, size=(8, 8)) -> Path:
    Image.new("RGB", size, color="teal").save(path, format=fmt)
    return path


@pytest.fixture
def image_dir(tmp_path) -> Path:
    """
    A folder holding a.jpg, b.png and c.bmp plus files and folders that are not slideshow images.
    """

    folder = tmp_path / "walls"
    folder.mkdir()

    _make_image(folder / "a.jpg", "JPEG")
    _make_image(folder / "b.png", "PNG")
    _make_image(folder / "c.bmp", "BMP")
    (folder / "notes.txt").write_text("not an image")
    (folder / "nested.jpg").mkdir()

    return folder


@pytest.fixture
def empty_dir(tmp_path) -> Path:
    folder = tmp_path / "empty"
    folder.mkdir()
    return folder


@pytest.fixture
def store():
    return FakeStateStore()


@pytest.fixture
def triggers():
    return FakeTriggerBinding()


@pytest.fixture
def desktop():
    return FakeDesktop()


@pytest.fixture
def slideshow(store, triggers, desktop) -> Slideshow:
    return Slideshow(
        store=store, triggers=triggers, desktop=desktop, command=["wallshow", "next"]
    )


@pytest.fixture
def make_image():
    """Return a function that writes a small solid color image: make_image(path, "JPEG")."""

    return _make_image
