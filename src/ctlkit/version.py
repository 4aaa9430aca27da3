"""Single source of truth for the ctlkit version string."""

__version__ = "0.1.0"
