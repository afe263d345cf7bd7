"""Track per-day foreground application usage on X11."""

__version__ = "0.1.0"
