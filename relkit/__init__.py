"""relkit - release branch ladder maintenance and changelog rendering."""

__version__ = "0.1.0"
