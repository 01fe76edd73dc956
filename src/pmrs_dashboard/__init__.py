"""Dashboard backend for the pmrs process manager."""

__version__ = "0.3.0"
