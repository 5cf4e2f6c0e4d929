"""Resolve video pages to embedded player links and HLS manifest URLs."""

__version__ = "0.1.0"
