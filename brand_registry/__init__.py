"""Interactive tooling for adding brand entries to the brand dataset."""

__version__ = "0.1.0"
