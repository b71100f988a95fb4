"""Move completed Adobe Sign agreements into Content Manager records."""

__version__ = "0.1.0"
