"""
Test slideshow

Validate the slideshow controller against in-memory fakes for the state store, the trigger binding
and the desktop (see conftest.py). No gsettings or systemd calls are made.

*** Fixtures ***
- image_dir, empty_dir (conftest.py): folders with three images and with none
- store, triggers, desktop, slideshow (conftest.py): fakes and a controller wired to them
"""

import pytest

# following entities are tested in this module:
from wallshow.slideshow import MAX_INTERVAL
from wallshow.slideshow import TRIGGER_NAME
from wallshow.slideshow import InvalidSlideshowArgument
from wallshow.slideshow import NoActiveSlideshowError
from wallshow.slideshow import Slideshow
from wallshow.state_handler import SlideshowState
from wallshow.wallpaper_handler import PicturePosition


def test_start_scenario(slideshow, store, triggers, desktop, image_dir):
    """
    a.jpg, b.png, c.bmp with a start index of 5 wraps to 2 and shows c.bmp. The next tick wraps
    around to a.jpg.
    """

    shown = slideshow.start(image_dir, PicturePosition.FILL, 30, 5)

    assert shown == image_dir / "c.bmp"
    assert desktop.background == image_dir / "c.bmp"
    assert desktop.position == PicturePosition.FILL
    assert store.state == SlideshowState(image_dir.resolve(), 2, 30)
    assert triggers.triggers == [(TRIGGER_NAME, ("wallshow", "next"), 30)]

    slideshow.advance()

    assert store.state.current_index == 0
    assert desktop.background == image_dir / "a.jpg"


@pytest.mark.parametrize(["index", "expected"], [(0, 0), (2, 2), (3, 0), (4, 1), (11, 2)])
def test_start_wraps_index(slideshow, store, image_dir, index, expected):

    slideshow.start(image_dir, PicturePosition.FILL, 10, index)

    assert store.state.current_index == expected


def test_start_clamps_interval(slideshow, store, triggers, image_dir):

    slideshow.start(image_dir, PicturePosition.FILL, 100000, 0)

    assert store.state.interval == MAX_INTERVAL == 44640
    assert triggers.triggers[0][2] == 44640


@pytest.mark.parametrize(["interval", "index"], [(-1, 0), (10, -1)])
def test_start_rejects_negative_arguments(slideshow, store, triggers, image_dir, interval, index):

    with pytest.raises(InvalidSlideshowArgument):
        slideshow.start(image_dir, PicturePosition.FILL, interval, index)

    assert store.state is None
    assert triggers.triggers == []


def test_invalid_argument_is_value_error(slideshow, image_dir):

    with pytest.raises(ValueError):
        slideshow.start(image_dir, PicturePosition.FILL, -5, 0)


def test_start_stores_absolute_directory(slideshow, store, image_dir, monkeypatch):

    monkeypatch.chdir(image_dir.parent)
    slideshow.start(image_dir.name, PicturePosition.FILL, 10, 0)

    assert store.state.directory == image_dir.resolve()
    assert store.state.directory.is_absolute()


def test_start_links_images_in_place(slideshow, desktop, image_dir):

    slideshow.start(image_dir, PicturePosition.TILE, 10, 1)

    assert desktop.copies == [False]
    assert desktop.background == image_dir / "b.png"
    assert desktop.position == PicturePosition.TILE


def test_start_replaces_previous_trigger(slideshow, triggers, image_dir):

    slideshow.start(image_dir, PicturePosition.FILL, 10, 0)
    slideshow.start(image_dir, PicturePosition.FILL, 20, 0)

    assert triggers.triggers == [(TRIGGER_NAME, ("wallshow", "next"), 20)]
    # old trigger removed before the new one is installed
    assert triggers.calls[-2:] == [("remove", TRIGGER_NAME), ("install", TRIGGER_NAME)]


def test_start_persists_state_before_trigger(slideshow, store, triggers, image_dir):

    seen = []
    install = triggers.install

    def checking_install(name, command, interval, **kwargs):
        seen.append(store.state)
        return install(name, command, interval, **kwargs)

    triggers.install = checking_install
    slideshow.start(image_dir, PicturePosition.FILL, 15, 1)

    assert seen == [SlideshowState(image_dir.resolve(), 1, 15)]


def test_start_zero_interval_installs_no_trigger(slideshow, store, triggers, image_dir):

    slideshow.start(image_dir, PicturePosition.FILL, 10, 0)
    slideshow.start(image_dir, PicturePosition.FILL, 0, 0)

    assert triggers.triggers == []
    assert store.state.interval == 0

    with pytest.raises(NoActiveSlideshowError):
        slideshow.advance()


def test_start_empty_folder_clears_wallpaper(slideshow, store, triggers, desktop, empty_dir, image_dir):

    desktop.background = image_dir / "a.jpg"

    shown = slideshow.start(empty_dir, PicturePosition.FILL, 10, 3)

    assert shown is None
    assert desktop.background is None
    assert store.state == SlideshowState(empty_dir.resolve(), 0, 10)
    assert len(triggers.triggers) == 1


def test_start_missing_folder(slideshow, store, tmp_path):

    with pytest.raises(FileNotFoundError):
        slideshow.start(tmp_path / "nope", PicturePosition.FILL, 10, 0)

    assert store.state is None


@pytest.mark.parametrize("start", [0, 1, 2])
def test_advance_rotation(slideshow, store, image_dir, start):
    """
    Each advance moves one image forward; advancing once per image comes back to the start.
    """

    store.state = SlideshowState(image_dir, start, 30)

    slideshow.advance()
    assert store.state.current_index == (start + 1) % 3

    for _ in range(2):
        slideshow.advance()

    assert store.state.current_index == start


def test_advance_keeps_desktop_position(slideshow, store, desktop, image_dir):

    store.state = SlideshowState(image_dir, 0, 30)
    desktop.position = PicturePosition.STRETCH

    slideshow.advance()

    assert desktop.background == image_dir / "b.png"
    assert desktop.position == PicturePosition.STRETCH
    assert desktop.copies == [False]


def test_advance_keeps_directory_and_interval(slideshow, store, image_dir):

    store.state = SlideshowState(image_dir, 1, 45)

    slideshow.advance()

    assert store.state == SlideshowState(image_dir, 2, 45)
    assert store.writes == 1


def test_advance_index_past_end_wraps(slideshow, store, desktop, image_dir):
    """An index left over from a bigger folder still lands on an existing image."""

    store.state = SlideshowState(image_dir, 7, 30)

    slideshow.advance()

    assert store.state.current_index == 8 % 3
    assert desktop.background == image_dir / "c.bmp"


def test_advance_sees_folder_changes(slideshow, store, desktop, image_dir, make_image):
    """The folder is listed again on every tick, so a new image shifts what comes next."""

    store.state = SlideshowState(image_dir, 0, 30)
    make_image(image_dir / "aa.jpeg", "JPEG")

    slideshow.advance()

    assert desktop.background == image_dir / "aa.jpeg"


def test_advance_empty_folder_clears_wallpaper(slideshow, store, desktop, image_dir):

    store.state = SlideshowState(image_dir, 1, 30)
    desktop.background = image_dir / "b.png"
    for name in ("a.jpg", "b.png", "c.bmp"):
        (image_dir / name).unlink()

    shown = slideshow.advance()

    assert shown is None
    assert desktop.background is None
    assert store.state == SlideshowState(image_dir, 0, 30)


def test_advance_missing_folder(slideshow, store, tmp_path):

    store.state = SlideshowState(tmp_path / "gone", 0, 30)

    with pytest.raises(FileNotFoundError):
        slideshow.advance()


@pytest.mark.parametrize("state", [None, SlideshowState("/tmp", 3, 0)])
def test_advance_no_active_slideshow(slideshow, store, desktop, state):

    store.state = state

    with pytest.raises(NoActiveSlideshowError):
        slideshow.advance()

    assert desktop.background is None


def test_cancel_twice(slideshow, triggers, image_dir):

    slideshow.start(image_dir, PicturePosition.FILL, 10, 0)

    assert slideshow.cancel() is True
    assert slideshow.cancel() is False
    assert triggers.triggers == []


def test_cancel_nothing_installed(slideshow):

    assert slideshow.cancel() is False


def test_cancel_removes_every_match(slideshow, triggers):

    triggers.triggers = [
        (TRIGGER_NAME, (), 10),
        (TRIGGER_NAME, (), 20),
        ("something-else", (), 5),
    ]

    assert slideshow.cancel() is True
    assert triggers.triggers == [("something-else", (), 5)]


def test_cancel_keeps_state(slideshow, store, desktop, image_dir):
    """
    A plain cancel leaves the stored slideshow, so a manual advance still works.
    """

    slideshow.start(image_dir, PicturePosition.FILL, 10, 0)
    slideshow.cancel()

    slideshow.advance()

    assert store.state.current_index == 1
    assert desktop.background == image_dir / "b.png"


def test_cancel_forget_clears_state(slideshow, store, image_dir):

    slideshow.start(image_dir, PicturePosition.FILL, 10, 0)

    assert slideshow.cancel(forget=True) is True
    assert store.state is None

    with pytest.raises(NoActiveSlideshowError):
        slideshow.advance()


def test_current(slideshow, store, image_dir):

    assert slideshow.current() is None

    slideshow.start(image_dir, PicturePosition.FILL, 15, 1)
    slideshow.cancel()

    assert slideshow.current() == SlideshowState(image_dir.resolve(), 1, 15)


def test_start_installs_trigger_with_environment(store, triggers, desktop, image_dir):

    slideshow = Slideshow(
        store=store,
        triggers=triggers,
        desktop=desktop,
        command=["wallshow", "next"],
        environment={"WALLSHOW_CONFIG_DIR": "/home/me/.config/wallshow-work"},
    )

    slideshow.start(image_dir, PicturePosition.FILL, 30, 0)

    assert triggers.environments[TRIGGER_NAME] == {
        "WALLSHOW_CONFIG_DIR": "/home/me/.config/wallshow-work"
    }
