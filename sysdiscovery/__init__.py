"""System Discovery — cross-platform host reconnaissance."""

__version__ = "0.1.0"
