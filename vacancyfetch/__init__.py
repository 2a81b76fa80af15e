"""Fetch vacancy listings and details from the FHCI recruitment portal."""

__version__ = "0.1.0"
