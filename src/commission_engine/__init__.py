"""Sales compensation aggregation and multiplier resolution engine."""

__version__ = "0.1.0"
