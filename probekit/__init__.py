"""Toolkit for probing HTTP services and fingerprinting their responses."""

__version__ = "1.3.6"