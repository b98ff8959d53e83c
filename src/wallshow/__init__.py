"""wallshow - set and rotate Gnome desktop wallpapers from the command line."""

__version__ = "1.3.0"
