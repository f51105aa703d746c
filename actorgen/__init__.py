"""OpenAPI to actor service scaffolding generator."""

__version__ = "0.1.0"
