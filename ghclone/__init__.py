"""Clone multiple repositories of a GitHub account at once, over HTTPS or SSH."""

__version__ = "0.1.0"