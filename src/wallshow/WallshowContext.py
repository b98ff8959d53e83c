"""
WallshowContext

This module defines the WallshowContext dataclass, which the main command group stores on the click
Context object so that subcommands can reach the desktop and the slideshow controller. Tests pass
their own WallshowContext (built from fakes) as the click 'obj' instead.
"""

from dataclasses import dataclass

from wallshow.config import WallshowConfig
from wallshow.config import default_config_dir
from wallshow.slideshow import Slideshow
from wallshow.state_handler import JsonStateStore
from wallshow.trigger_handler import SystemdTimerBinding
from wallshow.wallpaper_handler import GnomeDesktop


@dataclass
class WallshowContext:
    """
    desktop: reads and sets the wallpaper and login background
    slideshow: controller wired to the same desktop
    """

    desktop: GnomeDesktop
    slideshow: Slideshow

    @classmethod
    def from_config(cls, config: WallshowConfig) -> "WallshowContext":

        desktop = GnomeDesktop()
        slideshow = Slideshow(
            store=JsonStateStore(config.state_file),
            triggers=SystemdTimerBinding(config.WALLSHOW_UNIT_DIR),
            desktop=desktop,
            # ticks must load the same config.json, and so the same state file, as this process
            environment={"WALLSHOW_CONFIG_DIR": str(default_config_dir())},
        )

        return cls(desktop=desktop, slideshow=slideshow)
