"""Order desk: order consistency and prioritization service."""

__version__ = "0.1.0"
