"""tasklist - a small task-list manager for the terminal."""

__version__ = "0.1.0"
