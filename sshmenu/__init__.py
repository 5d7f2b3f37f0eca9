"""Pick a host from ~/.ssh/config and connect to it."""

__version__ = "0.1.0"
