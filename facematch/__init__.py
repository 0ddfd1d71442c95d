"""Face-match evaluation service for partner photo uploads."""
__version__ = "0.1.0"
