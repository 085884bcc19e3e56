"""Next5 Racing: live next-to-go race board."""

__version__ = "0.1.0"
