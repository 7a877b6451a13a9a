"""featuregen -- scaffold Flutter feature modules and wire them into an app."""

__version__ = "0.1.0"
