"""Fish bite probability scoring from current weather conditions."""

__version__ = "0.1.0"
