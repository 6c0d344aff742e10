"""jiralite - a local, single-user epic/story tracker backed by a JSON file."""

__version__ = "0.1.0"
