"""surfcal - surfable hours for surf spots, checked against your calendar."""

__version__ = "0.1.0"
