"""Integration stamper: scaffolds cloud integration domains from naming conventions."""

__version__ = "0.1.0"
