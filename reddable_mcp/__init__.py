"""MCP gateway exposing Reddit operations backed by the Reddable API."""

__version__ = "1.0.0"
