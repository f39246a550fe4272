"""Voiceflow relay application package.

This package contains the FastAPI routes, services, and schemas of a small
backend that relays knowledge-base and transcript calls to Voiceflow.
Subpackages include:
- api: FastAPI route definitions
- core: configuration and logging
- services: Voiceflow client, title lookup, transcript classification and rendering
- schemas: Pydantic models
"""

__all__ = [
    "api",
    "core",
    "services",
    "schemas",
]

__version__ = "1.0.0"
