"""System information, date and time, and wallpaper thumbnail helpers for desktop settings pages."""

__version__ = "0.1.0"
__all__ = ["about", "timeinfo", "corners", "wallpapers"]