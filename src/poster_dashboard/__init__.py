"""Creator dashboard back end: currency preference, conversion and event fan-out."""

__version__ = "0.1.0"
