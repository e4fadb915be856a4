"""Bibliographic metadata extraction from local PDFs and web pages."""

__version__ = "0.1.0"
