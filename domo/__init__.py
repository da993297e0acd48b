"""Domo - life-area task tracking with manual ordering."""

__version__ = "0.4.0"
