"""clabot: keeps CLA labels on pull requests in sync with the CLA status check."""

__version__ = "0.1.0"
