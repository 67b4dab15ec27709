"""Pagecraft -- document/history engine for the landing-page builder."""

__version__ = "0.1.0"
