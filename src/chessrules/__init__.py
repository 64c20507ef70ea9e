"""Chess rules engine with a line-protocol front end."""

__version__ = "0.1.0"
