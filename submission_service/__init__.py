"""Submission service: validates title/description/author submissions and stores them."""

__version__ = "0.1.0"
