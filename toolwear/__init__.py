"""Tool Wear Monitor: tool wear tracking and production dashboard backend."""

__version__ = "1.0.0"
