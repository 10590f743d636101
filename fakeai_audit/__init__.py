"""Static detector for fabricated-AI signatures in source trees."""

__version__ = "0.1.0"
