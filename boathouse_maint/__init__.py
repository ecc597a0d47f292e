"""boathouse_maint: one-off data fixes for the boathouse database."""

__version__ = "0.1.0"
