"""Echo lecture recorder: indexes recorded lectures by course and date."""

__version__ = "0.1.0"
