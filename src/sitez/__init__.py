"""siteZ: construction project dashboard."""

__version__ = "0.2.0"
