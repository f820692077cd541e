"""Trestus: build a static status page from a Trello board."""

__version__ = "0.1.0"
