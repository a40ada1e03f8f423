"""Jenkins build duration reporter."""

__version__ = "0.1.0"
