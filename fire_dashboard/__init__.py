"""FIRE dashboard: savings projection and time-to-independence calculator."""

__version__ = "0.1.0"
