"""spotmap - community-curated points of interest."""

__version__ = "0.1.0"
