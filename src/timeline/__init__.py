"""Myanmar bulletin timeline builder."""

__version__ = "0.1.0"
