"""Pre-deployment readiness checks for backend projects."""

__version__ = "0.1.0"
