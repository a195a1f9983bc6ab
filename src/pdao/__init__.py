"""PDAO - registration and login backend."""

__version__ = "1.0.0"
