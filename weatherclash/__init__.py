"""Weather Clash: turn live weather into combat stats and let cities fight."""

__version__ = "0.1.0"
