"""Reply suggestion engine for customer-support questions."""

__version__ = "0.3.0"
