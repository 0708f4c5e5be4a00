"""Admin console core for e-commerce order, exchange and catalog management."""

__version__ = "0.1.0"
