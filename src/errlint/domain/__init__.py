"""Domain layer — declarations, extraction, validation and the code registry.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
