"""paisanos — workstation setup CLI."""

__version__ = "0.1.0"
