"""Relay pixiv illustrations to a chat channel with size-compliant images."""

__version__ = "0.1.0"
