"""AEM content package validator."""

__version__ = "0.1.0"
