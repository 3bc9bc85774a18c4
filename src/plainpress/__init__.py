"""plainpress - a file-backed content engine for plain-text documents."""

__version__ = "0.1.0"
