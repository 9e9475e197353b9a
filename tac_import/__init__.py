"""Import TAC adventure exports into a campaign's world model."""

__version__ = "0.1.0"
